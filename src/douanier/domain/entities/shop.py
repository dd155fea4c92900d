"""
Shop entity - Merchant store that installed the app.
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from douanier.domain.clock import utcnow


@dataclass
class Shop:
    """
    Shop entity.

    Created by the onboarding flow; storefront calls resolve it by domain.
    """

    id: UUID = field(default_factory=uuid4)
    shop_domain: str = field(default="")
    is_active: bool = field(default=True)
    installed_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        """Validate shop data after initialization."""
        if not self.shop_domain:
            raise ValueError("Shop domain is required")

        self.shop_domain = self.shop_domain.strip().lower()
