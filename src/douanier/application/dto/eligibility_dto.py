"""
Eligibility Data Transfer Objects.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
from uuid import UUID


@dataclass
class EligibleDiscount:
    """A rule the wallet currently qualifies for."""

    id: UUID
    name: str
    description: Optional[str]
    discount_type: str
    discount_value: Decimal
    max_discount_amount: Optional[Decimal]
    token_balance: str
    required_tokens: str


@dataclass
class DiscountStats:
    """Aggregate figures for a shop's discount program."""

    total_rules: int
    active_rules: int
    total_verified_customers: int
    total_discounts_used: int
    total_discount_amount: Decimal
