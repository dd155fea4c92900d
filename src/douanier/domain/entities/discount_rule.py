"""
DiscountRule entity - Token-gated discount offered by a shop.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional
from uuid import UUID, uuid4

from douanier.domain.clock import utcnow
from douanier.domain.value_objects.token_amount import parse_token_amount
from douanier.domain.value_objects.wallet_address import WalletAddress

# Fields a merchant may change after creation
MUTABLE_FIELDS = (
    "name",
    "description",
    "is_active",
    "min_token_amount",
    "discount_type",
    "discount_value",
    "max_discount_amount",
    "usage_limit",
    "per_customer_limit",
    "starts_at",
    "ends_at",
)


class DiscountType(str, Enum):
    """How the discount value is interpreted."""

    PERCENTAGE = "percentage"
    FIXED = "fixed"


class WindowState(str, Enum):
    """Position of a moment relative to a rule's validity window."""

    NOT_STARTED = "not_started"
    OPEN = "open"
    ENDED = "ended"


@dataclass
class DiscountRule:
    """
    DiscountRule entity.

    Business rules:
    - Minimum token amount is a non-negative decimal in human units
    - Token contract address is a valid EVM address, stored lower-case
    - Percentage discounts lie within 0..100, fixed discounts are >= 0
    - Usage limits, when set, are positive integers
    - starts_at must precede ends_at when both are set
    - usage_count only grows, and only through redemption
    """

    id: UUID = field(default_factory=uuid4)
    shop_id: UUID = field(default_factory=uuid4)
    name: str = field(default="")
    description: Optional[str] = field(default=None)
    min_token_amount: Decimal = field(default=Decimal("0"))
    token_contract_address: str = field(default="")
    chain_id: int = field(default=1)
    discount_type: DiscountType = field(default=DiscountType.PERCENTAGE)
    discount_value: Decimal = field(default=Decimal("0"))
    max_discount_amount: Optional[Decimal] = field(default=None)
    usage_limit: Optional[int] = field(default=None)
    per_customer_limit: Optional[int] = field(default=None)
    usage_count: int = field(default=0)
    starts_at: Optional[datetime] = field(default=None)
    ends_at: Optional[datetime] = field(default=None)
    is_active: bool = field(default=True)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        """Validate rule data after initialization."""
        self._validate()

    def _validate(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Rule name is required")

        self.min_token_amount = parse_token_amount(self.min_token_amount)

        if not self.token_contract_address:
            raise ValueError("Token contract address is required")
        self.token_contract_address = WalletAddress(
            self.token_contract_address
        ).address

        if self.chain_id <= 0:
            raise ValueError(f"Invalid chain ID: {self.chain_id}")

        self.discount_type = DiscountType(self.discount_type)
        self.discount_value = Decimal(str(self.discount_value))
        if self.discount_value < 0:
            raise ValueError("Discount value cannot be negative")
        if (
            self.discount_type == DiscountType.PERCENTAGE
            and self.discount_value > 100
        ):
            raise ValueError("Percentage discount must be between 0 and 100")

        if self.max_discount_amount is not None:
            self.max_discount_amount = Decimal(str(self.max_discount_amount))
            if self.max_discount_amount < 0:
                raise ValueError("Max discount amount cannot be negative")

        for name in ("usage_limit", "per_customer_limit"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError(f"{name} must be a positive integer")

        if self.usage_count < 0:
            raise ValueError("Usage count cannot be negative")

        if self.starts_at and self.ends_at and self.starts_at >= self.ends_at:
            raise ValueError("starts_at must be before ends_at")

    def window_state(self, now: Optional[datetime] = None) -> WindowState:
        """
        Locate a moment relative to the validity window.

        Both bounds are inclusive; an unset bound is open.
        """
        moment = now or utcnow()
        if self.starts_at and moment < self.starts_at:
            return WindowState.NOT_STARTED
        if self.ends_at and moment > self.ends_at:
            return WindowState.ENDED
        return WindowState.OPEN

    def is_within_window(self, now: Optional[datetime] = None) -> bool:
        """Check if the rule is inside its validity window."""
        return self.window_state(now) == WindowState.OPEN

    def has_capacity(self) -> bool:
        """Check the global usage limit still has room."""
        return self.usage_limit is None or self.usage_count < self.usage_limit

    def allows_customer(self, customer_usage: int) -> bool:
        """Check a customer with `customer_usage` redemptions may redeem again."""
        return (
            self.per_customer_limit is None
            or customer_usage < self.per_customer_limit
        )

    def apply_changes(self, changes: Mapping[str, Any]) -> None:
        """
        Apply a partial update and re-validate.

        Args:
            changes: Mapping of mutable field name to new value

        Raises:
            ValueError: If a field is not mutable or the result is invalid
        """
        unknown = set(changes) - set(MUTABLE_FIELDS)
        if unknown:
            raise ValueError(f"Fields cannot be updated: {sorted(unknown)}")

        snapshot = {name: getattr(self, name) for name in MUTABLE_FIELDS}
        for name, value in changes.items():
            setattr(self, name, value)

        try:
            self._validate()
        except ValueError:
            for name, value in snapshot.items():
                setattr(self, name, value)
            raise

        self.updated_at = utcnow()

    def realized_discount(self, cart_total: Optional[Decimal] = None) -> Decimal:
        """
        Compute the discount actually granted for a cart.

        Args:
            cart_total: Cart subtotal, if the storefront reported one

        Returns:
            Discount amount, capped by max_discount_amount and the cart
        """
        if self.discount_type == DiscountType.PERCENTAGE:
            if cart_total is None:
                return Decimal("0")
            amount = (cart_total * self.discount_value / Decimal(100)).quantize(
                Decimal("0.000001")
            )
        else:
            amount = self.discount_value
            if cart_total is not None:
                amount = min(amount, cart_total)

        if self.max_discount_amount is not None:
            amount = min(amount, self.max_discount_amount)

        return max(amount, Decimal("0"))
