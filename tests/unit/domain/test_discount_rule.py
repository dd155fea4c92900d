"""
Unit tests for DiscountRule entity.

Usage:
    pytest tests/unit/domain/test_discount_rule.py
"""

from datetime import datetime, timedelta
from decimal import Decimal
from uuid import uuid4

import pytest

from douanier.domain.entities.discount_rule import (
    DiscountRule,
    DiscountType,
    WindowState,
)

CONTRACT = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
NOW = datetime(2026, 3, 1, 12, 0, 0)


def make_rule(**overrides) -> DiscountRule:
    fields = {
        "shop_id": uuid4(),
        "name": "Holder discount",
        "min_token_amount": "1000",
        "token_contract_address": CONTRACT,
        "discount_type": "percentage",
        "discount_value": Decimal("10"),
    }
    fields.update(overrides)
    return DiscountRule(**fields)


class TestDiscountRuleValidation:
    """Tests for DiscountRule creation rules."""

    # ================================================================
    # Valid rules
    # ================================================================

    def test_normalizes_fields(self):
        rule = make_rule()

        assert rule.token_contract_address == CONTRACT.lower()
        assert rule.min_token_amount == Decimal("1000")
        assert rule.discount_type == DiscountType.PERCENTAGE
        assert rule.chain_id == 1
        assert rule.usage_count == 0
        assert rule.is_active is True

    def test_fixed_discount_may_exceed_100(self):
        rule = make_rule(discount_type="fixed", discount_value=Decimal("250"))
        assert rule.discount_type == DiscountType.FIXED

    def test_percentage_bounds_are_inclusive(self):
        assert make_rule(discount_value=Decimal("0")).discount_value == 0
        assert make_rule(discount_value=Decimal("100")).discount_value == 100

    # ================================================================
    # Invalid rules
    # ================================================================

    def test_requires_name(self):
        with pytest.raises(ValueError, match="name"):
            make_rule(name="  ")

    def test_rejects_percentage_above_100(self):
        with pytest.raises(ValueError, match="between 0 and 100"):
            make_rule(discount_value=Decimal("100.01"))

    def test_rejects_negative_value(self):
        with pytest.raises(ValueError, match="negative"):
            make_rule(discount_type="fixed", discount_value=Decimal("-1"))

    def test_rejects_unknown_type(self):
        with pytest.raises(ValueError):
            make_rule(discount_type="bogo")

    def test_rejects_invalid_contract(self):
        with pytest.raises(ValueError):
            make_rule(token_contract_address="0x1234")

    def test_rejects_bad_min_amount(self):
        with pytest.raises(ValueError):
            make_rule(min_token_amount="-5")

    @pytest.mark.parametrize("field", ["usage_limit", "per_customer_limit"])
    def test_rejects_non_positive_limits(self, field):
        with pytest.raises(ValueError, match=field):
            make_rule(**{field: 0})

    def test_rejects_inverted_window(self):
        with pytest.raises(ValueError, match="starts_at"):
            make_rule(starts_at=NOW, ends_at=NOW - timedelta(hours=1))


class TestDiscountRuleAvailability:
    """Tests for window and capacity checks."""

    def test_open_window_without_bounds(self):
        assert make_rule().window_state(NOW) == WindowState.OPEN

    def test_not_started(self):
        rule = make_rule(starts_at=NOW + timedelta(seconds=1))
        assert rule.window_state(NOW) == WindowState.NOT_STARTED
        assert not rule.is_within_window(NOW)

    def test_ended_one_second_ago(self):
        rule = make_rule(ends_at=NOW - timedelta(seconds=1))
        assert rule.window_state(NOW) == WindowState.ENDED

    def test_ends_in_one_hour(self):
        rule = make_rule(ends_at=NOW + timedelta(hours=1))
        assert rule.is_within_window(NOW)

    def test_bounds_are_inclusive(self):
        rule = make_rule(starts_at=NOW, ends_at=NOW + timedelta(days=1))
        assert rule.is_within_window(NOW)
        assert rule.is_within_window(NOW + timedelta(days=1))

    def test_capacity(self):
        assert make_rule().has_capacity()
        assert make_rule(usage_limit=3, usage_count=2).has_capacity()
        assert not make_rule(usage_limit=3, usage_count=3).has_capacity()

    def test_allows_customer(self):
        rule = make_rule(per_customer_limit=1)
        assert rule.allows_customer(0)
        assert not rule.allows_customer(1)
        assert make_rule().allows_customer(99)


class TestDiscountRuleChanges:
    """Tests for partial updates."""

    def test_apply_changes(self):
        rule = make_rule()
        before = rule.updated_at

        rule.apply_changes(
            {"name": "Gold holders", "discount_value": Decimal("15"), "usage_limit": 5}
        )

        assert rule.name == "Gold holders"
        assert rule.discount_value == Decimal("15")
        assert rule.usage_limit == 5
        assert rule.updated_at >= before

    def test_clearing_optional_field(self):
        rule = make_rule(max_discount_amount=Decimal("50"))
        rule.apply_changes({"max_discount_amount": None})
        assert rule.max_discount_amount is None

    def test_rejects_immutable_field(self):
        rule = make_rule()
        with pytest.raises(ValueError, match="cannot be updated"):
            rule.apply_changes({"token_contract_address": CONTRACT})

    def test_invalid_change_is_rolled_back(self):
        rule = make_rule(discount_type="fixed", discount_value=Decimal("150"))

        with pytest.raises(ValueError):
            rule.apply_changes({"discount_type": "percentage"})

        assert rule.discount_type == DiscountType.FIXED
        assert rule.discount_value == Decimal("150")


class TestRealizedDiscount:
    """Tests for the discount amount recorded on redemption."""

    def test_percentage_of_cart(self):
        rule = make_rule(discount_value=Decimal("10"))
        assert rule.realized_discount(Decimal("80")) == Decimal("8")

    def test_percentage_capped(self):
        rule = make_rule(
            discount_value=Decimal("50"), max_discount_amount=Decimal("20")
        )
        assert rule.realized_discount(Decimal("100")) == Decimal("20")

    def test_percentage_without_cart_is_zero(self):
        assert make_rule().realized_discount(None) == Decimal("0")

    def test_fixed_without_cart(self):
        rule = make_rule(discount_type="fixed", discount_value=Decimal("25"))
        assert rule.realized_discount(None) == Decimal("25")

    def test_fixed_limited_by_cart(self):
        rule = make_rule(discount_type="fixed", discount_value=Decimal("25"))
        assert rule.realized_discount(Decimal("10")) == Decimal("10")

    def test_fixed_capped(self):
        rule = make_rule(
            discount_type="fixed",
            discount_value=Decimal("25"),
            max_discount_amount=Decimal("5"),
        )
        assert rule.realized_discount(None) == Decimal("5")
