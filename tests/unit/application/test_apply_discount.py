"""
Unit tests for ApplyDiscount use case.

Repositories are mocked; concurrency is covered by the integration
tests against a real database.

Usage:
    pytest tests/unit/application/test_apply_discount.py
"""

from contextlib import asynccontextmanager
from datetime import timedelta
from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from douanier.application.use_cases.apply_discount import ApplyDiscount
from douanier.domain.clock import utcnow
from douanier.domain.entities.discount_rule import DiscountRule
from douanier.domain.entities.shop import Shop
from douanier.domain.entities.verification_session import (
    SessionStatus,
    VerificationSession,
)
from douanier.domain.entities.verified_customer import VerifiedCustomer
from douanier.domain.exceptions import (
    CustomerLimitReachedError,
    DiscountExpiredError,
    DiscountNotStartedError,
    DiscountRuleNotFoundError,
    EntityNotFoundError,
    UnverifiedSessionError,
    UsageLimitReachedError,
    ValidationError,
)
from tests.helpers.wallets import ALICE, BOB, TOKEN_CONTRACT

SHOP = "store.myshopify.com"


@asynccontextmanager
async def no_savepoint():
    yield


class TestApplyDiscount:
    """Unit tests for ApplyDiscount use case."""

    # ================================================================
    # Helper Methods
    # ================================================================

    def _shop(self) -> Shop:
        return Shop(shop_domain=SHOP)

    def _session(self, status=SessionStatus.VERIFIED) -> VerificationSession:
        session = VerificationSession.issue(SHOP, ALICE.address)
        if status != SessionStatus.PENDING:
            session.transition(status)
        return session

    def _rule(self, shop: Shop, **overrides) -> DiscountRule:
        fields = {
            "shop_id": shop.id,
            "name": "Holders",
            "min_token_amount": "1000",
            "token_contract_address": TOKEN_CONTRACT,
            "discount_type": "fixed",
            "discount_value": Decimal("15"),
        }
        fields.update(overrides)
        return DiscountRule(**fields)

    def _use_case(
        self, shop, session, rule, reserved=True, customer_usage=0, shop_found=True
    ):
        session_repository = AsyncMock()
        session_repository.get_by_token.return_value = session

        shop_repository = AsyncMock()
        shop_repository.get_by_domain.return_value = shop if shop_found else None

        rule_repository = AsyncMock()
        rule_repository.get_by_id.return_value = rule
        rule_repository.reserve_usage.return_value = reserved

        customer_repository = AsyncMock()
        customer_repository.upsert.return_value = VerifiedCustomer(
            shop_id=shop.id, wallet_address=ALICE.address
        )

        usage_repository = AsyncMock()
        usage_repository.count_for_customer.return_value = customer_usage
        usage_repository.create.side_effect = lambda usage: usage

        use_case = ApplyDiscount(
            session_repository=session_repository,
            shop_repository=shop_repository,
            rule_repository=rule_repository,
            customer_repository=customer_repository,
            usage_repository=usage_repository,
            atomic=no_savepoint,
            code_prefix="DKG",
        )
        return use_case, rule_repository, usage_repository

    async def _apply(self, use_case, rule_id, wallet=ALICE.address, **kwargs):
        return await use_case.execute(
            shop_domain=SHOP,
            discount_rule_id=rule_id,
            wallet_address=wallet,
            session_token="token",
            **kwargs,
        )

    # ================================================================
    # Test Methods
    # ================================================================

    async def test_success_mints_code(self):
        shop = self._shop()
        rule = self._rule(shop)
        use_case, rule_repository, usage_repository = self._use_case(
            shop, self._session(), rule
        )

        result = await self._apply(use_case, rule.id)

        assert result.discount_code.startswith("DKG-")
        assert len(result.discount_code) == len("DKG-") + 16
        assert result.discount_rule is rule
        assert result.usage.discount_amount == Decimal("15")
        rule_repository.reserve_usage.assert_awaited_once()
        usage_repository.create.assert_awaited_once()

    async def test_codes_are_unique(self):
        shop = self._shop()
        rule = self._rule(shop)
        use_case, _, _ = self._use_case(shop, self._session(), rule)

        first = await self._apply(use_case, rule.id)
        second = await self._apply(use_case, rule.id)

        assert first.discount_code != second.discount_code

    async def test_cart_total_sets_realized_amount(self):
        shop = self._shop()
        rule = self._rule(shop, discount_type="percentage", discount_value=10)
        use_case, _, _ = self._use_case(shop, self._session(), rule)

        result = await self._apply(use_case, rule.id, cart_total=Decimal("80"))

        assert result.usage.discount_amount == Decimal("8")

    async def test_negative_cart_total(self):
        shop = self._shop()
        rule = self._rule(shop)
        use_case, _, _ = self._use_case(shop, self._session(), rule)

        with pytest.raises(ValidationError):
            await self._apply(use_case, rule.id, cart_total=Decimal("-1"))

    @pytest.mark.parametrize(
        "status",
        [SessionStatus.PENDING, SessionStatus.FAILED, SessionStatus.EXPIRED],
    )
    async def test_requires_verified_session(self, status):
        shop = self._shop()
        rule = self._rule(shop)
        use_case, rule_repository, _ = self._use_case(
            shop, self._session(status), rule
        )

        with pytest.raises(UnverifiedSessionError):
            await self._apply(use_case, rule.id)

        rule_repository.reserve_usage.assert_not_awaited()

    async def test_session_for_other_wallet(self):
        shop = self._shop()
        rule = self._rule(shop)
        use_case, _, _ = self._use_case(shop, self._session(), rule)

        with pytest.raises(UnverifiedSessionError):
            await self._apply(use_case, rule.id, wallet=BOB.address)

    async def test_unknown_shop(self):
        shop = self._shop()
        rule = self._rule(shop)
        use_case, _, _ = self._use_case(
            shop, self._session(), rule, shop_found=False
        )

        with pytest.raises(EntityNotFoundError):
            await self._apply(use_case, rule.id)

    async def test_missing_rule(self):
        shop = self._shop()
        use_case, _, _ = self._use_case(shop, self._session(), None)

        with pytest.raises(DiscountRuleNotFoundError):
            await self._apply(use_case, uuid4())

    async def test_inactive_rule(self):
        shop = self._shop()
        rule = self._rule(shop, is_active=False)
        use_case, _, _ = self._use_case(shop, self._session(), rule)

        with pytest.raises(DiscountRuleNotFoundError):
            await self._apply(use_case, rule.id)

    async def test_not_started(self):
        shop = self._shop()
        rule = self._rule(shop, starts_at=utcnow() + timedelta(hours=1))
        use_case, rule_repository, _ = self._use_case(shop, self._session(), rule)

        with pytest.raises(DiscountNotStartedError):
            await self._apply(use_case, rule.id)

        rule_repository.reserve_usage.assert_not_awaited()

    async def test_expired(self):
        shop = self._shop()
        rule = self._rule(shop, ends_at=utcnow() - timedelta(seconds=1))
        use_case, _, _ = self._use_case(shop, self._session(), rule)

        with pytest.raises(DiscountExpiredError):
            await self._apply(use_case, rule.id)

    async def test_exhausted_before_reservation(self):
        shop = self._shop()
        rule = self._rule(shop, usage_limit=3, usage_count=3)
        use_case, rule_repository, _ = self._use_case(shop, self._session(), rule)

        with pytest.raises(UsageLimitReachedError):
            await self._apply(use_case, rule.id)

        rule_repository.reserve_usage.assert_not_awaited()

    async def test_reservation_lost_to_concurrent_redemption(self):
        shop = self._shop()
        rule = self._rule(shop, usage_limit=3, usage_count=2)
        use_case, rule_repository, usage_repository = self._use_case(
            shop, self._session(), rule, reserved=False
        )
        exhausted = self._rule(shop, usage_limit=3, usage_count=3)
        rule_repository.get_by_id.side_effect = [rule, exhausted]

        with pytest.raises(UsageLimitReachedError):
            await self._apply(use_case, rule.id)

        usage_repository.create.assert_not_awaited()

    async def test_customer_limit(self):
        shop = self._shop()
        rule = self._rule(shop, per_customer_limit=1)
        use_case, _, usage_repository = self._use_case(
            shop, self._session(), rule, customer_usage=1
        )

        with pytest.raises(CustomerLimitReachedError):
            await self._apply(use_case, rule.id)

        usage_repository.create.assert_not_awaited()
