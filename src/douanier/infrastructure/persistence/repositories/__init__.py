"""Repository implementations."""

from douanier.infrastructure.persistence.repositories.discount_rule_repository import (  # noqa: E501
    DiscountRuleRepository,
)
from douanier.infrastructure.persistence.repositories.discount_usage_repository import (  # noqa: E501
    DiscountUsageRepository,
)
from douanier.infrastructure.persistence.repositories.shop_repository import (
    ShopRepository,
)
from douanier.infrastructure.persistence.repositories.verification_session_repository import (  # noqa: E501
    VerificationSessionRepository,
)
from douanier.infrastructure.persistence.repositories.verified_customer_repository import (  # noqa: E501
    VerifiedCustomerRepository,
)

__all__ = [
    "ShopRepository",
    "VerificationSessionRepository",
    "DiscountRuleRepository",
    "VerifiedCustomerRepository",
    "DiscountUsageRepository",
]
