"""
CustomerDiscountUsage repository implementation using SQLAlchemy.
"""

from decimal import Decimal
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from douanier.domain.entities.customer_discount_usage import (
    CustomerDiscountUsage,
)
from douanier.domain.repositories.i_discount_usage_repository import (
    IDiscountUsageRepository,
)
from douanier.infrastructure.persistence.models import (
    CustomerDiscountUsageModel,
    DiscountRuleModel,
    VerifiedCustomerModel,
)


class DiscountUsageRepository(IDiscountUsageRepository):
    """SQLAlchemy implementation of redemption record repository."""

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, usage: CustomerDiscountUsage) -> CustomerDiscountUsage:
        """
        Record a redemption.

        Args:
            usage: CustomerDiscountUsage entity to persist

        Returns:
            Created usage entity
        """
        model = CustomerDiscountUsageModel(
            id=usage.id,
            discount_rule_id=usage.discount_rule_id,
            customer_id=usage.customer_id,
            discount_code=usage.discount_code,
            discount_amount=usage.discount_amount,
            used_at=usage.used_at,
        )

        self.session.add(model)
        await self.session.flush()

        return self._to_entity(model)

    async def count_for_customer(self, rule_id: UUID, customer_id: UUID) -> int:
        """Count redemptions of one rule by one customer."""
        stmt = select(func.count(CustomerDiscountUsageModel.id)).where(
            CustomerDiscountUsageModel.discount_rule_id == rule_id,
            CustomerDiscountUsageModel.customer_id == customer_id,
        )
        result = await self.session.execute(stmt)

        return int(result.scalar_one() or 0)

    async def counts_by_rule_for_wallet(
        self, shop_id: UUID, wallet_address: str
    ) -> dict[UUID, int]:
        """
        Count a wallet's redemptions per rule in one query.

        Args:
            shop_id: Shop unique identifier
            wallet_address: Wallet address

        Returns:
            Mapping of rule ID to redemption count
        """
        stmt = (
            select(
                CustomerDiscountUsageModel.discount_rule_id,
                func.count(CustomerDiscountUsageModel.id),
            )
            .join(
                VerifiedCustomerModel,
                VerifiedCustomerModel.id == CustomerDiscountUsageModel.customer_id,
            )
            .where(
                VerifiedCustomerModel.shop_id == shop_id,
                VerifiedCustomerModel.wallet_address == wallet_address.lower(),
            )
            .group_by(CustomerDiscountUsageModel.discount_rule_id)
        )
        result = await self.session.execute(stmt)

        return {rule_id: int(count) for rule_id, count in result.all()}

    async def totals_by_shop(self, shop_id: UUID) -> tuple[int, Decimal]:
        """Aggregate (redemptions, total discount amount) of a shop."""
        stmt = (
            select(
                func.count(CustomerDiscountUsageModel.id),
                func.coalesce(func.sum(CustomerDiscountUsageModel.discount_amount), 0),
            )
            .join(
                DiscountRuleModel,
                DiscountRuleModel.id == CustomerDiscountUsageModel.discount_rule_id,
            )
            .where(DiscountRuleModel.shop_id == shop_id)
        )
        result = await self.session.execute(stmt)
        count, total = result.one()

        return int(count or 0), Decimal(str(total or 0))

    def _to_entity(self, model: CustomerDiscountUsageModel) -> CustomerDiscountUsage:
        """Convert ORM model to domain entity."""
        return CustomerDiscountUsage(
            id=model.id,
            discount_rule_id=model.discount_rule_id,
            customer_id=model.customer_id,
            discount_code=model.discount_code,
            discount_amount=Decimal(str(model.discount_amount)),
            used_at=model.used_at,
        )
