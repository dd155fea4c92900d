"""
Unit tests for EligibilityEvaluator.

Usage:
    pytest tests/unit/application/test_eligibility_evaluator.py
"""

from datetime import datetime, timedelta
from decimal import Decimal
from uuid import uuid4

import pytest

from douanier.application.services.eligibility_evaluator import (
    EligibilityEvaluator,
)
from douanier.domain.entities.discount_rule import DiscountRule
from tests.helpers.fakes import FakeBalanceOracle

WALLET = "0x90f8bf6a479f320ead074411a4b0e7944ea8c9c1"
TOKEN_A = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
TOKEN_B = "0xdac17f958d2ee523a2206206994597c13d831ec7"
TOKEN_C = "0x6b175474e89094c44da98b954eedeac495271d0f"
NOW = datetime(2026, 3, 1, 12, 0, 0)


def make_rule(contract: str = TOKEN_A, **overrides) -> DiscountRule:
    fields = {
        "shop_id": uuid4(),
        "name": "Holders",
        "min_token_amount": "1000",
        "token_contract_address": contract,
        "discount_type": "percentage",
        "discount_value": Decimal("10"),
    }
    fields.update(overrides)
    return DiscountRule(**fields)


@pytest.fixture
def oracle() -> FakeBalanceOracle:
    return FakeBalanceOracle(chains=(1,))


@pytest.fixture
def evaluator(oracle) -> EligibilityEvaluator:
    return EligibilityEvaluator(balance_oracle=oracle, call_timeout=0.2)


class TestThreshold:
    """Tests for the balance comparison."""

    async def test_exact_threshold_is_eligible(self, oracle, evaluator):
        rule = make_rule(min_token_amount="1.5")
        oracle.set_balance(WALLET, 1500000000000000000, TOKEN_A)

        result = await evaluator.evaluate(WALLET, [rule], now=NOW)

        assert [item.id for item in result] == [rule.id]
        assert result[0].token_balance == "1.5"
        assert result[0].required_tokens == "1.5"

    async def test_one_unit_below_threshold(self, oracle, evaluator):
        rule = make_rule(min_token_amount="1.5")
        oracle.set_balance(WALLET, 1499999999999999999, TOKEN_A)

        assert await evaluator.evaluate(WALLET, [rule], now=NOW) == []

    async def test_formats_balance_and_requirement(self, oracle, evaluator):
        rule = make_rule(min_token_amount="1000", max_discount_amount=Decimal("50"))
        oracle.set_balance(WALLET, 2000 * 10**18, TOKEN_A)

        (item,) = await evaluator.evaluate(WALLET, [rule], now=NOW)

        assert item.token_balance == "2000.0"
        assert item.required_tokens == "1000.0"
        assert item.discount_type == "percentage"
        assert item.discount_value == Decimal("10")
        assert item.max_discount_amount == Decimal("50")

    async def test_uses_token_decimals(self):
        oracle = FakeBalanceOracle(chains=(1,), decimals=6)
        evaluator = EligibilityEvaluator(balance_oracle=oracle)
        rule = make_rule(min_token_amount="2.5")
        oracle.set_balance(WALLET, 2_500_000, TOKEN_A)

        (item,) = await evaluator.evaluate(WALLET, [rule], now=NOW)

        assert item.required_tokens == "2.5"


class TestCheapFilters:
    """Tests for checks that need no balance lookup."""

    async def test_ended_rule_is_skipped_without_lookup(self, oracle, evaluator):
        rule = make_rule(ends_at=NOW - timedelta(seconds=1))
        oracle.set_balance(WALLET, 10**30, TOKEN_A)

        assert await evaluator.evaluate(WALLET, [rule], now=NOW) == []
        assert oracle.calls == []

    async def test_rule_ending_later_is_eligible(self, oracle, evaluator):
        rule = make_rule(ends_at=NOW + timedelta(hours=1))
        oracle.set_balance(WALLET, 10**30, TOKEN_A)

        assert len(await evaluator.evaluate(WALLET, [rule], now=NOW)) == 1

    async def test_not_started_rule(self, oracle, evaluator):
        rule = make_rule(starts_at=NOW + timedelta(minutes=5))
        oracle.set_balance(WALLET, 10**30, TOKEN_A)

        assert await evaluator.evaluate(WALLET, [rule], now=NOW) == []

    async def test_exhausted_rule(self, oracle, evaluator):
        rule = make_rule(usage_limit=3, usage_count=3)
        oracle.set_balance(WALLET, 10**30, TOKEN_A)

        assert await evaluator.evaluate(WALLET, [rule], now=NOW) == []
        assert oracle.calls == []

    async def test_customer_limit(self, oracle, evaluator):
        rule = make_rule(per_customer_limit=1)
        oracle.set_balance(WALLET, 10**30, TOKEN_A)

        result = await evaluator.evaluate(
            WALLET, [rule], customer_usage={rule.id: 1}, now=NOW
        )

        assert result == []

    async def test_no_rules(self, evaluator):
        assert await evaluator.evaluate(WALLET, [], now=NOW) == []


class TestFaultIsolation:
    """Tests for per-rule failure containment."""

    async def test_failing_lookup_drops_only_its_rule(self, oracle, evaluator):
        rules = [make_rule(TOKEN_A), make_rule(TOKEN_B), make_rule(TOKEN_C)]
        for token in (TOKEN_A, TOKEN_B, TOKEN_C):
            oracle.set_balance(WALLET, 10**30, token)
        oracle.failing.add(TOKEN_B)

        result = await evaluator.evaluate(WALLET, rules, now=NOW)

        assert [item.id for item in result] == [rules[0].id, rules[2].id]

    async def test_unexpected_error_drops_only_its_rule(self):
        class BrokenOracle(FakeBalanceOracle):
            async def get_balance(self, chain_id, token_contract, wallet):
                if token_contract.lower() == TOKEN_B:
                    raise RuntimeError("provider bug")
                return await super().get_balance(chain_id, token_contract, wallet)

        broken = BrokenOracle(chains=(1,))
        broken.set_balance(WALLET, 10**30, TOKEN_A)
        evaluator = EligibilityEvaluator(balance_oracle=broken, call_timeout=0.2)
        rules = [make_rule(TOKEN_A), make_rule(TOKEN_B)]

        result = await evaluator.evaluate(WALLET, rules, now=NOW)

        assert [item.id for item in result] == [rules[0].id]

    async def test_slow_lookup_times_out(self, oracle, evaluator):
        rules = [make_rule(TOKEN_A), make_rule(TOKEN_B)]
        oracle.set_balance(WALLET, 10**30, TOKEN_A)
        oracle.set_balance(WALLET, 10**30, TOKEN_B)
        oracle.delays[TOKEN_A] = 5

        result = await evaluator.evaluate(WALLET, rules, now=NOW)

        assert [item.id for item in result] == [rules[1].id]

    async def test_unsupported_chain_drops_rule(self, oracle, evaluator):
        rules = [make_rule(TOKEN_A, chain_id=56), make_rule(TOKEN_B)]
        oracle.set_balance(WALLET, 10**30, TOKEN_B)

        result = await evaluator.evaluate(WALLET, rules, now=NOW)

        assert [item.id for item in result] == [rules[1].id]

    async def test_output_keeps_rule_order(self, oracle, evaluator):
        rules = [make_rule(TOKEN_C), make_rule(TOKEN_A), make_rule(TOKEN_B)]
        for token in (TOKEN_A, TOKEN_B, TOKEN_C):
            oracle.set_balance(WALLET, 10**30, token)
        # Make the first rule answer last
        oracle.delays[TOKEN_C] = 0.05

        result = await evaluator.evaluate(WALLET, rules, now=NOW)

        assert [item.id for item in result] == [rule.id for rule in rules]
