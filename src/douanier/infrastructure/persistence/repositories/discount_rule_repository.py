"""
DiscountRule repository implementation using SQLAlchemy.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from douanier.domain.entities.discount_rule import DiscountRule, DiscountType
from douanier.domain.exceptions import EntityNotFoundError
from douanier.domain.repositories.i_discount_rule_repository import (
    IDiscountRuleRepository,
)
from douanier.domain.value_objects.token_amount import format_decimal
from douanier.infrastructure.persistence.models import (
    CustomerDiscountUsageModel,
    DiscountRuleModel,
)


class DiscountRuleRepository(IDiscountRuleRepository):
    """
    SQLAlchemy implementation of discount rule repository.

    usage_count is written only by reserve_usage.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, rule: DiscountRule) -> DiscountRule:
        """
        Create a new discount rule.

        Args:
            rule: DiscountRule entity to persist

        Returns:
            Created rule entity
        """
        model = DiscountRuleModel(
            id=rule.id,
            shop_id=rule.shop_id,
            usage_count=rule.usage_count,
            created_at=rule.created_at,
            updated_at=rule.updated_at,
        )
        self._copy_mutable_fields(rule, model)
        model.token_contract_address = rule.token_contract_address
        model.chain_id = rule.chain_id

        self.session.add(model)
        await self.session.flush()

        return self._to_entity(model)

    async def get_by_id(
        self, rule_id: UUID, shop_id: Optional[UUID] = None
    ) -> Optional[DiscountRule]:
        """
        Retrieve rule by ID, optionally scoped to a shop.

        Args:
            rule_id: Rule unique identifier
            shop_id: Owning shop filter

        Returns:
            DiscountRule entity if found, None otherwise
        """
        stmt = (
            select(DiscountRuleModel)
            .where(DiscountRuleModel.id == rule_id)
            .execution_options(populate_existing=True)
        )
        if shop_id is not None:
            stmt = stmt.where(DiscountRuleModel.shop_id == shop_id)

        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        return self._to_entity(model) if model else None

    async def list_by_shop(self, shop_id: UUID) -> list[DiscountRule]:
        """List all rules of a shop, newest first."""
        stmt = (
            select(DiscountRuleModel)
            .where(DiscountRuleModel.shop_id == shop_id)
            .order_by(DiscountRuleModel.created_at.desc())
        )
        result = await self.session.execute(stmt)
        models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    async def list_active_by_shop(self, shop_id: UUID) -> list[DiscountRule]:
        """List active rules of a shop in creation order."""
        stmt = (
            select(DiscountRuleModel)
            .where(
                DiscountRuleModel.shop_id == shop_id,
                DiscountRuleModel.is_active.is_(True),
            )
            .order_by(DiscountRuleModel.created_at.asc(), DiscountRuleModel.id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    async def update(self, rule: DiscountRule) -> DiscountRule:
        """
        Write the mutable fields of a rule.

        Args:
            rule: DiscountRule entity with updated fields

        Returns:
            Updated rule entity

        Raises:
            EntityNotFoundError: If rule not found
        """
        stmt = select(DiscountRuleModel).where(
            DiscountRuleModel.id == rule.id,
            DiscountRuleModel.shop_id == rule.shop_id,
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise EntityNotFoundError("DiscountRule", str(rule.id))

        self._copy_mutable_fields(rule, model)
        model.updated_at = rule.updated_at

        await self.session.flush()
        await self.session.refresh(model)

        return self._to_entity(model)

    async def delete(self, rule_id: UUID, shop_id: UUID) -> bool:
        """
        Delete a rule and its redemption records.

        Args:
            rule_id: Rule unique identifier
            shop_id: Owning shop

        Returns:
            True if deleted, False if not found
        """
        exists = await self.session.execute(
            select(DiscountRuleModel.id).where(
                DiscountRuleModel.id == rule_id,
                DiscountRuleModel.shop_id == shop_id,
            )
        )
        if exists.scalar_one_or_none() is None:
            return False

        await self.session.execute(
            delete(CustomerDiscountUsageModel)
            .where(CustomerDiscountUsageModel.discount_rule_id == rule_id)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(
            delete(DiscountRuleModel)
            .where(DiscountRuleModel.id == rule_id)
            .execution_options(synchronize_session=False)
        )
        return True

    async def reserve_usage(
        self, rule_id: UUID, shop_id: UUID, now: datetime
    ) -> bool:
        """
        Increment usage_count in one conditional UPDATE.

        The row count decides the outcome, so concurrent callers can
        never push usage_count past usage_limit.

        Args:
            rule_id: Rule unique identifier
            shop_id: Shop the caller is redeeming for
            now: Moment used for the window check

        Returns:
            True if a slot was taken, False otherwise
        """
        rule = DiscountRuleModel
        stmt = (
            update(rule)
            .where(
                rule.id == rule_id,
                rule.shop_id == shop_id,
                rule.is_active.is_(True),
                or_(rule.starts_at.is_(None), rule.starts_at <= now),
                or_(rule.ends_at.is_(None), rule.ends_at >= now),
                or_(rule.usage_limit.is_(None), rule.usage_count < rule.usage_limit),
            )
            # Redemptions are not edits; keep updated_at as is
            .values(usage_count=rule.usage_count + 1, updated_at=rule.updated_at)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)

        return result.rowcount == 1

    async def count_by_shop(self, shop_id: UUID) -> tuple[int, int]:
        """Count (total, active) rules of a shop."""
        stmt = select(
            func.count(DiscountRuleModel.id),
            func.count(DiscountRuleModel.id).filter(
                DiscountRuleModel.is_active.is_(True)
            ),
        ).where(DiscountRuleModel.shop_id == shop_id)
        result = await self.session.execute(stmt)
        total, active = result.one()

        return int(total or 0), int(active or 0)

    @staticmethod
    def _copy_mutable_fields(rule: DiscountRule, model: DiscountRuleModel) -> None:
        model.name = rule.name
        model.description = rule.description
        model.is_active = rule.is_active
        model.min_token_amount = format_decimal(rule.min_token_amount)
        model.discount_type = rule.discount_type.value
        model.discount_value = rule.discount_value
        model.max_discount_amount = rule.max_discount_amount
        model.usage_limit = rule.usage_limit
        model.per_customer_limit = rule.per_customer_limit
        model.starts_at = rule.starts_at
        model.ends_at = rule.ends_at

    def _to_entity(self, model: DiscountRuleModel) -> DiscountRule:
        """Convert ORM model to domain entity."""
        return DiscountRule(
            id=model.id,
            shop_id=model.shop_id,
            name=model.name,
            description=model.description,
            min_token_amount=Decimal(model.min_token_amount),
            token_contract_address=model.token_contract_address,
            chain_id=model.chain_id,
            discount_type=DiscountType(model.discount_type),
            discount_value=Decimal(str(model.discount_value)),
            max_discount_amount=(
                Decimal(str(model.max_discount_amount))
                if model.max_discount_amount is not None
                else None
            ),
            usage_limit=model.usage_limit,
            per_customer_limit=model.per_customer_limit,
            usage_count=model.usage_count,
            starts_at=model.starts_at,
            ends_at=model.ends_at,
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
