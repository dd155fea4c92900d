"""
Data Transfer Objects for Douanier application layer.
"""

from douanier.application.dto.discount_rule_dto import (
    UNSET,
    CreateDiscountRuleCommand,
    DiscountRulePatch,
)
from douanier.application.dto.eligibility_dto import (
    DiscountStats,
    EligibleDiscount,
)

__all__ = [
    "UNSET",
    "CreateDiscountRuleCommand",
    "DiscountRulePatch",
    "EligibleDiscount",
    "DiscountStats",
]
