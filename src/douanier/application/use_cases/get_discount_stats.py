"""
Get Discount Stats use case.
"""

from douanier.application.dto.eligibility_dto import DiscountStats
from douanier.application.use_cases.guards import require_shop
from douanier.domain.repositories.i_discount_rule_repository import (
    IDiscountRuleRepository,
)
from douanier.domain.repositories.i_discount_usage_repository import (
    IDiscountUsageRepository,
)
from douanier.domain.repositories.i_shop_repository import IShopRepository
from douanier.domain.repositories.i_verified_customer_repository import (
    IVerifiedCustomerRepository,
)


class GetDiscountStats:
    """Aggregate a shop's rules, customers and redemptions."""

    def __init__(
        self,
        shop_repository: IShopRepository,
        rule_repository: IDiscountRuleRepository,
        customer_repository: IVerifiedCustomerRepository,
        usage_repository: IDiscountUsageRepository,
    ):
        self.shop_repository = shop_repository
        self.rule_repository = rule_repository
        self.customer_repository = customer_repository
        self.usage_repository = usage_repository

    async def execute(self, shop_domain: str) -> DiscountStats:
        """
        Execute stats aggregation.

        Raises:
            EntityNotFoundError: If shop not found
        """
        shop = await require_shop(self.shop_repository, shop_domain)

        total_rules, active_rules = await self.rule_repository.count_by_shop(shop.id)
        customers = await self.customer_repository.count_by_shop(shop.id)
        used, amount = await self.usage_repository.totals_by_shop(shop.id)

        return DiscountStats(
            total_rules=total_rules,
            active_rules=active_rules,
            total_verified_customers=customers,
            total_discounts_used=used,
            total_discount_amount=amount,
        )
