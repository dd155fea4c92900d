"""
Discount rule and redemption exceptions.
"""

from douanier.domain.exceptions.base import ConflictError, DouanierException


class DiscountRuleNotFoundError(DouanierException):
    """Raised when a rule is missing, belongs to another shop or is inactive."""

    def __init__(self, rule_id: str):
        super().__init__(
            "Discount rule not found or inactive",
            code="ENTITY_NOT_FOUND",
        )
        self.rule_id = rule_id


class DiscountNotStartedError(ConflictError):
    """Raised when a rule's validity window has not opened yet."""

    def __init__(self):
        super().__init__("Discount not yet active", code="DISCOUNT_NOT_STARTED")


class DiscountExpiredError(ConflictError):
    """Raised when a rule's validity window has closed."""

    def __init__(self):
        super().__init__("Discount has expired", code="DISCOUNT_EXPIRED")


class UsageLimitReachedError(ConflictError):
    """Raised when a rule's global usage limit is exhausted."""

    def __init__(self):
        super().__init__(
            "Discount usage limit reached",
            code="USAGE_LIMIT_REACHED",
        )


class CustomerLimitReachedError(ConflictError):
    """Raised when a wallet has used a rule as often as allowed."""

    def __init__(self):
        super().__init__(
            "Customer usage limit reached",
            code="CUSTOMER_LIMIT_REACHED",
        )
