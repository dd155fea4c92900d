"""
Discount rule Data Transfer Objects.

Commands accepted by the rule management use cases.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Optional

from douanier.domain.exceptions import ValidationError


class _Unset:
    """Marker for patch fields the caller did not send."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass
class CreateDiscountRuleCommand:
    """Fields for a new discount rule."""

    name: str
    min_token_amount: str
    token_contract_address: str
    discount_type: str
    discount_value: Decimal
    description: Optional[str] = None
    chain_id: int = 1
    max_discount_amount: Optional[Decimal] = None
    usage_limit: Optional[int] = None
    per_customer_limit: Optional[int] = None
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    is_active: bool = True


@dataclass
class DiscountRulePatch:
    """
    Partial update of a discount rule.

    Only the fields listed here can change after creation; the token
    contract, chain and usage counter are fixed. A field left UNSET is
    not touched, a field set to None is cleared.
    """

    name: Any = field(default=UNSET)
    description: Any = field(default=UNSET)
    is_active: Any = field(default=UNSET)
    min_token_amount: Any = field(default=UNSET)
    discount_type: Any = field(default=UNSET)
    discount_value: Any = field(default=UNSET)
    max_discount_amount: Any = field(default=UNSET)
    usage_limit: Any = field(default=UNSET)
    per_customer_limit: Any = field(default=UNSET)
    starts_at: Any = field(default=UNSET)
    ends_at: Any = field(default=UNSET)

    # Cleared with None would leave the rule invalid
    REQUIRED = (
        "name",
        "is_active",
        "min_token_amount",
        "discount_type",
        "discount_value",
    )

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Names of the mutable fields."""
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DiscountRulePatch":
        """
        Build a patch from a mapping of snake_case field names.

        Raises:
            ValidationError: If the mapping names an unknown field
        """
        allowed = set(cls.field_names())
        unknown = sorted(set(data) - allowed)
        if unknown:
            raise ValidationError(
                field=unknown[0],
                reason=f"Unknown or immutable fields: {', '.join(unknown)}",
            )
        return cls(**dict(data))

    def changes(self) -> dict[str, Any]:
        """
        Fields the caller set.

        Raises:
            ValidationError: If a required field is cleared
        """
        changed = {
            name: getattr(self, name)
            for name in self.field_names()
            if getattr(self, name) is not UNSET
        }
        for name in self.REQUIRED:
            if name in changed and changed[name] is None:
                raise ValidationError(field=name, reason="cannot be null")
        return changed
