"""
CustomerDiscountUsage entity - One successful redemption.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4

from douanier.domain.clock import utcnow


@dataclass
class CustomerDiscountUsage:
    """
    CustomerDiscountUsage entity.

    Business rules:
    - Created only by redemption, never updated
    - Carries the redemption code minted for it
    - Discount amount is never negative
    """

    id: UUID = field(default_factory=uuid4)
    discount_rule_id: UUID = field(default_factory=uuid4)
    customer_id: UUID = field(default_factory=uuid4)
    discount_code: str = field(default="")
    discount_amount: Decimal = field(default=Decimal("0"))
    used_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        """Validate usage data after initialization."""
        if not self.discount_code:
            raise ValueError("Discount code is required")

        if self.discount_amount < 0:
            raise ValueError("Discount amount cannot be negative")
