"""
API schemas for wallet verification and redemption.

Request and response models for storefront endpoints.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import Field

from douanier.presentation.schemas.base import CamelModel


class InitVerificationRequest(CamelModel):
    """Request to start a wallet verification."""

    shop: str = Field(..., min_length=1, description="Shop domain")
    wallet_address: str = Field(
        ...,
        min_length=1,
        description="EVM wallet address",
        examples=["0x90f8bf6a479f320ead074411a4b0e7944ea8c9c1"],
    )
    chain_id: Optional[int] = Field(
        default=None,
        gt=0,
        description="Chain holding the tokens (default: 1)",
    )


class InitVerificationResponse(CamelModel):
    """Challenge to sign."""

    session_token: str
    message: str
    expires_at: datetime


class VerifySignatureRequest(CamelModel):
    """Signed challenge."""

    session_token: str = Field(..., min_length=1)
    signature: str = Field(
        ...,
        min_length=1,
        description="personal_sign signature, 0x-prefixed hex",
    )


class VerifySignatureResponse(CamelModel):
    """Outcome of a successful verification."""

    success: bool
    wallet_address: str


class TokenBalanceRequest(CamelModel):
    """Request to list eligible discounts."""

    shop: str = Field(..., min_length=1)
    wallet_address: str = Field(..., min_length=1)
    session_token: str = Field(..., min_length=1)


class EligibleDiscountSchema(CamelModel):
    """Discount the wallet qualifies for."""

    id: UUID
    name: str
    description: Optional[str] = None
    discount_type: str
    discount_value: Decimal
    max_discount_amount: Optional[Decimal] = None
    token_balance: str = Field(..., description="Wallet balance in token units")
    required_tokens: str = Field(..., description="Minimum balance in token units")


class TokenBalanceResponse(CamelModel):
    """Eligible discounts, in rule creation order."""

    eligible_discounts: list[EligibleDiscountSchema]
    wallet_address: str


class ApplyDiscountRequest(CamelModel):
    """Request to redeem a discount."""

    shop: str = Field(..., min_length=1)
    discount_rule_id: UUID
    wallet_address: str = Field(..., min_length=1)
    session_token: str = Field(..., min_length=1)
    cart_total: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Cart subtotal, used to record the realized discount",
    )


class DiscountRuleSummary(CamelModel):
    """Rule details returned with a redemption code."""

    id: UUID
    name: str
    discount_type: str
    discount_value: Decimal
    max_discount_amount: Optional[Decimal] = None


class ApplyDiscountResponse(CamelModel):
    """Minted redemption code."""

    discount_code: str
    discount_rule: DiscountRuleSummary
