"""
Apply Discount use case.

Reserves one usage slot of a rule for a verified wallet and mints the
redemption code.
"""

import secrets
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Optional
from uuid import UUID

from douanier.application.use_cases.guards import (
    require_shop,
    require_verified_session,
)
from douanier.domain.clock import utcnow
from douanier.domain.entities.customer_discount_usage import (
    CustomerDiscountUsage,
)
from douanier.domain.entities.discount_rule import DiscountRule, WindowState
from douanier.domain.exceptions import (
    CustomerLimitReachedError,
    DiscountExpiredError,
    DiscountNotStartedError,
    DiscountRuleNotFoundError,
    DouanierException,
    UsageLimitReachedError,
    ValidationError,
)
from douanier.domain.repositories.i_discount_rule_repository import (
    IDiscountRuleRepository,
)
from douanier.domain.repositories.i_discount_usage_repository import (
    IDiscountUsageRepository,
)
from douanier.domain.repositories.i_shop_repository import IShopRepository
from douanier.domain.repositories.i_verification_session_repository import (
    IVerificationSessionRepository,
)
from douanier.domain.repositories.i_verified_customer_repository import (
    IVerifiedCustomerRepository,
)

CODE_RANDOM_BYTES = 8


@dataclass
class ApplyDiscountResult:
    """Minted redemption code and the rule it belongs to."""

    discount_code: str
    discount_rule: DiscountRule
    usage: CustomerDiscountUsage


class ApplyDiscount:
    """
    Redeem a discount rule.

    Business rules:
    - Session must be verified and issued for this shop and wallet
    - Rule must belong to the shop and be active
    - Validity window and both usage limits are re-checked at apply time
    - Exactly one usage row and one counter increment per success
    - Under concurrency, a rule with N free slots yields at most N
      successes

    The counter increment is a conditional UPDATE that holds the rule
    row lock until commit; the per-customer count and the usage insert
    run in the same savepoint, after the lock is taken.
    """

    def __init__(
        self,
        session_repository: IVerificationSessionRepository,
        shop_repository: IShopRepository,
        rule_repository: IDiscountRuleRepository,
        customer_repository: IVerifiedCustomerRepository,
        usage_repository: IDiscountUsageRepository,
        atomic: Callable[[], AbstractAsyncContextManager[Any]],
        code_prefix: str = "DKG",
    ):
        """
        Initialize use case with dependencies.

        Args:
            session_repository: Repository for verification sessions
            shop_repository: Repository for shops
            rule_repository: Repository for discount rules
            customer_repository: Repository for verified customers
            usage_repository: Repository for redemption records
            atomic: Factory of a savepoint context (rolls back on error)
            code_prefix: Prefix of minted redemption codes
        """
        self.session_repository = session_repository
        self.shop_repository = shop_repository
        self.rule_repository = rule_repository
        self.customer_repository = customer_repository
        self.usage_repository = usage_repository
        self.atomic = atomic
        self.code_prefix = code_prefix

    async def execute(
        self,
        shop_domain: str,
        discount_rule_id: UUID,
        wallet_address: str,
        session_token: str,
        cart_total: Optional[Decimal] = None,
    ) -> ApplyDiscountResult:
        """
        Execute discount redemption.

        Args:
            shop_domain: Shop the customer is buying from
            discount_rule_id: Rule the customer selected
            wallet_address: Verified wallet address
            session_token: Verified session token
            cart_total: Optional cart subtotal for the realized amount

        Returns:
            ApplyDiscountResult with code and rule summary

        Raises:
            UnverifiedSessionError: If session is not verified for caller
            EntityNotFoundError: If shop not found
            DiscountRuleNotFoundError: If rule missing, foreign or inactive
            DiscountNotStartedError: If the window has not opened
            DiscountExpiredError: If the window has closed
            UsageLimitReachedError: If the global limit is exhausted
            CustomerLimitReachedError: If this wallet reached its limit
        """
        if cart_total is not None and cart_total < 0:
            raise ValidationError(field="cartTotal", reason="cannot be negative")

        # 1. Session, shop and rule
        session = await require_verified_session(
            self.session_repository, session_token, shop_domain, wallet_address
        )
        shop = await require_shop(self.shop_repository, shop_domain)

        rule = await self.rule_repository.get_by_id(discount_rule_id, shop.id)
        if not rule or not rule.is_active:
            raise DiscountRuleNotFoundError(str(discount_rule_id))

        # 2. Cheap pre-checks (no writes yet)
        now = utcnow()
        self._raise_if_unavailable(rule, now)

        # 3. Record the customer
        customer = await self.customer_repository.upsert(
            shop.id, session.wallet_address, session.chain_id
        )

        # 4. Reserve, re-check per-customer limit, record usage
        async with self.atomic():
            reserved = await self.rule_repository.reserve_usage(
                rule.id, shop.id, now
            )
            if not reserved:
                raise await self._reservation_failure(rule.id, shop.id, now)

            if rule.per_customer_limit is not None:
                used = await self.usage_repository.count_for_customer(
                    rule.id, customer.id
                )
                if used >= rule.per_customer_limit:
                    raise CustomerLimitReachedError()

            usage = await self.usage_repository.create(
                CustomerDiscountUsage(
                    discount_rule_id=rule.id,
                    customer_id=customer.id,
                    discount_code=self._mint_code(),
                    discount_amount=rule.realized_discount(cart_total),
                    used_at=now,
                )
            )

        return ApplyDiscountResult(
            discount_code=usage.discount_code,
            discount_rule=rule,
            usage=usage,
        )

    @staticmethod
    def _raise_if_unavailable(rule: DiscountRule, now) -> None:
        state = rule.window_state(now)
        if state == WindowState.NOT_STARTED:
            raise DiscountNotStartedError()
        if state == WindowState.ENDED:
            raise DiscountExpiredError()
        if not rule.has_capacity():
            raise UsageLimitReachedError()

    async def _reservation_failure(
        self, rule_id: UUID, shop_id: UUID, now
    ) -> DouanierException:
        """Re-read the rule to explain why the conditional UPDATE missed."""
        current = await self.rule_repository.get_by_id(rule_id, shop_id)
        if not current or not current.is_active:
            return DiscountRuleNotFoundError(str(rule_id))

        try:
            self._raise_if_unavailable(current, now)
        except DouanierException as e:
            return e

        return UsageLimitReachedError()

    def _mint_code(self) -> str:
        return f"{self.code_prefix}-{secrets.token_hex(CODE_RANDOM_BYTES).upper()}"
