"""Domain repository interfaces."""

from douanier.domain.repositories.i_discount_rule_repository import (
    IDiscountRuleRepository,
)
from douanier.domain.repositories.i_discount_usage_repository import (
    IDiscountUsageRepository,
)
from douanier.domain.repositories.i_shop_repository import IShopRepository
from douanier.domain.repositories.i_verification_session_repository import (
    IVerificationSessionRepository,
)
from douanier.domain.repositories.i_verified_customer_repository import (
    IVerifiedCustomerRepository,
)

__all__ = [
    "IShopRepository",
    "IVerificationSessionRepository",
    "IDiscountRuleRepository",
    "IVerifiedCustomerRepository",
    "IDiscountUsageRepository",
]
