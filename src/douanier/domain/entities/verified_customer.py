"""
VerifiedCustomer entity - Wallet that proved ownership for a shop.
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from douanier.domain.clock import utcnow
from douanier.domain.value_objects.wallet_address import WalletAddress


@dataclass
class VerifiedCustomer:
    """
    VerifiedCustomer entity.

    Business rules:
    - One record per (shop, wallet) pair
    - Refreshed on every balance check and redemption
    """

    id: UUID = field(default_factory=uuid4)
    shop_id: UUID = field(default_factory=uuid4)
    wallet_address: str = field(default="")
    chain_id: int = field(default=1)
    last_verified_at: datetime = field(default_factory=utcnow)
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        """Validate customer data after initialization."""
        self.wallet_address = WalletAddress(self.wallet_address).address
