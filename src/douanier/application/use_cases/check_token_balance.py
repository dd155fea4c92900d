"""
Check Token Balance use case.

Lists the discounts a verified wallet qualifies for.
"""

from dataclasses import dataclass

from douanier.application.dto.eligibility_dto import EligibleDiscount
from douanier.application.services.eligibility_evaluator import (
    EligibilityEvaluator,
)
from douanier.application.use_cases.guards import (
    require_shop,
    require_verified_session,
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


@dataclass
class CheckTokenBalanceResult:
    """Eligible discounts for a wallet."""

    eligible_discounts: list[EligibleDiscount]
    wallet_address: str


class CheckTokenBalance:
    """
    Evaluate a shop's active rules for a verified wallet.

    Business rules:
    - Session must be verified and issued for this shop and wallet
    - Shop must exist
    - The wallet is recorded as a verified customer of the shop
    """

    def __init__(
        self,
        session_repository: IVerificationSessionRepository,
        shop_repository: IShopRepository,
        rule_repository: IDiscountRuleRepository,
        customer_repository: IVerifiedCustomerRepository,
        usage_repository: IDiscountUsageRepository,
        evaluator: EligibilityEvaluator,
    ):
        """
        Initialize use case with dependencies.

        Args:
            session_repository: Repository for verification sessions
            shop_repository: Repository for shops
            rule_repository: Repository for discount rules
            customer_repository: Repository for verified customers
            usage_repository: Repository for redemption records
            evaluator: Rule eligibility evaluator
        """
        self.session_repository = session_repository
        self.shop_repository = shop_repository
        self.rule_repository = rule_repository
        self.customer_repository = customer_repository
        self.usage_repository = usage_repository
        self.evaluator = evaluator

    async def execute(
        self,
        shop_domain: str,
        wallet_address: str,
        session_token: str,
    ) -> CheckTokenBalanceResult:
        """
        Execute eligibility check.

        Args:
            shop_domain: Shop the customer is browsing
            wallet_address: Verified wallet address
            session_token: Verified session token

        Returns:
            CheckTokenBalanceResult with eligible discounts in rule order

        Raises:
            UnverifiedSessionError: If session is not verified for caller
            EntityNotFoundError: If shop not found
        """
        # 1. Session and shop
        session = await require_verified_session(
            self.session_repository, session_token, shop_domain, wallet_address
        )
        shop = await require_shop(self.shop_repository, shop_domain)

        # 2. Rules and this wallet's past redemptions
        rules = await self.rule_repository.list_active_by_shop(shop.id)
        usage = await self.usage_repository.counts_by_rule_for_wallet(
            shop.id, session.wallet_address
        )

        # 3. Evaluate (network only; no database access while fanned out)
        eligible = await self.evaluator.evaluate(
            session.wallet_address, rules, customer_usage=usage
        )

        # 4. Record the customer
        await self.customer_repository.upsert(
            shop.id, session.wallet_address, session.chain_id
        )

        return CheckTokenBalanceResult(
            eligible_discounts=eligible,
            wallet_address=session.wallet_address,
        )
