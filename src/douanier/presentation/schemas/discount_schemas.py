"""
API schemas for merchant discount management.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Literal, Optional
from uuid import UUID

from pydantic import ConfigDict, Field, field_validator

from douanier.domain.entities.discount_rule import DiscountRule
from douanier.domain.value_objects.token_amount import format_decimal
from douanier.presentation.schemas.base import CamelModel, naive_utc


def _amount_text(value: Any) -> Any:
    """Accept JSON numbers for token amounts, keep them as text."""
    if isinstance(value, bool):
        raise ValueError("must be a number or numeric string")
    if isinstance(value, (int, float)):
        return str(value)
    return value


class CreateDiscountRuleRequest(CamelModel):
    """New discount rule."""

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    min_token_amount: str = Field(
        ...,
        description="Minimum balance in token units, e.g. '1.5'",
    )
    token_contract_address: str = Field(..., min_length=1)
    chain_id: int = Field(default=1, gt=0)
    discount_type: Literal["percentage", "fixed"]
    discount_value: Decimal = Field(..., ge=0)
    max_discount_amount: Optional[Decimal] = Field(default=None, ge=0)
    usage_limit: Optional[int] = Field(default=None, ge=1)
    per_customer_limit: Optional[int] = Field(default=None, ge=1)
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    is_active: bool = True

    _amount = field_validator("min_token_amount", mode="before")(_amount_text)
    _dates = field_validator("starts_at", "ends_at")(naive_utc)


class UpdateDiscountRuleRequest(CamelModel):
    """Partial update; unknown or immutable fields are rejected."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    is_active: Optional[bool] = None
    min_token_amount: Optional[str] = None
    discount_type: Optional[Literal["percentage", "fixed"]] = None
    discount_value: Optional[Decimal] = Field(default=None, ge=0)
    max_discount_amount: Optional[Decimal] = Field(default=None, ge=0)
    usage_limit: Optional[int] = Field(default=None, ge=1)
    per_customer_limit: Optional[int] = Field(default=None, ge=1)
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None

    _amount = field_validator("min_token_amount", mode="before")(_amount_text)
    _dates = field_validator("starts_at", "ends_at")(naive_utc)


class DiscountRuleResponse(CamelModel):
    """Discount rule as shown to the merchant."""

    id: UUID
    name: str
    description: Optional[str] = None
    min_token_amount: str
    token_contract_address: str
    chain_id: int
    discount_type: str
    discount_value: Decimal
    max_discount_amount: Optional[Decimal] = None
    usage_limit: Optional[int] = None
    per_customer_limit: Optional[int] = None
    usage_count: int
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, rule: DiscountRule) -> "DiscountRuleResponse":
        """Build response from domain entity."""
        return cls(
            id=rule.id,
            name=rule.name,
            description=rule.description,
            min_token_amount=format_decimal(rule.min_token_amount),
            token_contract_address=rule.token_contract_address,
            chain_id=rule.chain_id,
            discount_type=rule.discount_type.value,
            discount_value=rule.discount_value,
            max_discount_amount=rule.max_discount_amount,
            usage_limit=rule.usage_limit,
            per_customer_limit=rule.per_customer_limit,
            usage_count=rule.usage_count,
            starts_at=rule.starts_at,
            ends_at=rule.ends_at,
            is_active=rule.is_active,
            created_at=rule.created_at,
            updated_at=rule.updated_at,
        )


class DiscountRuleListResponse(CamelModel):
    """Rules of a shop, newest first."""

    discount_rules: list[DiscountRuleResponse]


class DiscountRuleEnvelope(CamelModel):
    """Single rule wrapper."""

    discount_rule: DiscountRuleResponse


class DiscountStatsResponse(CamelModel):
    """Aggregate figures for a shop's discount program."""

    total_rules: int
    active_rules: int
    total_verified_customers: int
    total_discounts_used: int
    total_discount_amount: Decimal


class TokenInfoResponse(CamelModel):
    """ERC-20 token metadata."""

    address: str
    chain_id: int
    name: str
    symbol: str
    decimals: int


class ShopSchema(CamelModel):
    """Installed shop."""

    domain: str
    installed_at: datetime


class ShopInfoResponse(CamelModel):
    """Shop wrapper."""

    shop: ShopSchema
