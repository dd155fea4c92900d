"""
Shop repository implementation using SQLAlchemy.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from douanier.domain.entities.shop import Shop
from douanier.domain.repositories.i_shop_repository import IShopRepository
from douanier.infrastructure.persistence.models import ShopModel


class ShopRepository(IShopRepository):
    """SQLAlchemy implementation of shop repository."""

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, shop: Shop) -> Shop:
        """Persist a new shop."""
        model = ShopModel(
            id=shop.id,
            shop_domain=shop.shop_domain,
            is_active=shop.is_active,
            installed_at=shop.installed_at,
        )

        self.session.add(model)
        await self.session.flush()

        return self._to_entity(model)

    async def get_by_domain(self, shop_domain: str) -> Optional[Shop]:
        """Retrieve an active shop by domain."""
        stmt = select(ShopModel).where(
            ShopModel.shop_domain == shop_domain.strip().lower(),
            ShopModel.is_active.is_(True),
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        return self._to_entity(model) if model else None

    def _to_entity(self, model: ShopModel) -> Shop:
        """Convert ORM model to domain entity."""
        return Shop(
            id=model.id,
            shop_domain=model.shop_domain,
            is_active=model.is_active,
            installed_at=model.installed_at,
        )
