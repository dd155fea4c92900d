"""Domain entities."""

from douanier.domain.entities.customer_discount_usage import (
    CustomerDiscountUsage,
)
from douanier.domain.entities.discount_rule import (
    DiscountRule,
    DiscountType,
    WindowState,
)
from douanier.domain.entities.shop import Shop
from douanier.domain.entities.verification_session import (
    SessionStatus,
    VerificationSession,
)
from douanier.domain.entities.verified_customer import VerifiedCustomer

__all__ = [
    "Shop",
    "VerificationSession",
    "SessionStatus",
    "DiscountRule",
    "DiscountType",
    "WindowState",
    "VerifiedCustomer",
    "CustomerDiscountUsage",
]
