"""
VerifiedCustomer repository implementation using SQLAlchemy.
"""

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from douanier.domain.clock import utcnow
from douanier.domain.entities.verified_customer import VerifiedCustomer
from douanier.domain.repositories.i_verified_customer_repository import (
    IVerifiedCustomerRepository,
)
from douanier.infrastructure.persistence.models import VerifiedCustomerModel


class VerifiedCustomerRepository(IVerifiedCustomerRepository):
    """
    SQLAlchemy implementation of verified customer repository.

    Upserts use INSERT ... ON CONFLICT on (shop_id, wallet_address), so
    concurrent verifications of one wallet never collide.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def upsert(
        self, shop_id: UUID, wallet_address: str, chain_id: int
    ) -> VerifiedCustomer:
        """
        Create or refresh the customer record.

        Args:
            shop_id: Shop unique identifier
            wallet_address: Wallet address
            chain_id: Chain the wallet was last verified on

        Returns:
            Stored customer entity
        """
        wallet = wallet_address.lower()
        now = utcnow()
        dialect = self.session.get_bind().dialect.name

        if dialect == "postgresql":
            insert = postgresql.insert
        elif dialect == "sqlite":
            insert = sqlite.insert
        else:
            raise NotImplementedError(f"Upsert not supported for {dialect}")

        stmt = insert(VerifiedCustomerModel).values(
            id=uuid4(),
            shop_id=shop_id,
            wallet_address=wallet,
            chain_id=chain_id,
            last_verified_at=now,
            created_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["shop_id", "wallet_address"],
            set_={
                "chain_id": stmt.excluded.chain_id,
                "last_verified_at": stmt.excluded.last_verified_at,
            },
        )
        await self.session.execute(stmt)

        customer = await self.get_by_wallet(shop_id, wallet)
        if customer is None:
            raise RuntimeError("Upserted customer row not found")
        return customer

    async def get_by_wallet(
        self, shop_id: UUID, wallet_address: str
    ) -> Optional[VerifiedCustomer]:
        """Retrieve customer by shop and wallet."""
        stmt = (
            select(VerifiedCustomerModel)
            .where(
                VerifiedCustomerModel.shop_id == shop_id,
                VerifiedCustomerModel.wallet_address == wallet_address.lower(),
            )
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        return self._to_entity(model) if model else None

    async def count_by_shop(self, shop_id: UUID) -> int:
        """Count verified customers of a shop."""
        stmt = select(func.count(VerifiedCustomerModel.id)).where(
            VerifiedCustomerModel.shop_id == shop_id
        )
        result = await self.session.execute(stmt)

        return int(result.scalar_one() or 0)

    def _to_entity(self, model: VerifiedCustomerModel) -> VerifiedCustomer:
        """Convert ORM model to domain entity."""
        return VerifiedCustomer(
            id=model.id,
            shop_id=model.shop_id,
            wallet_address=model.wallet_address,
            chain_id=model.chain_id,
            last_verified_at=model.last_verified_at,
            created_at=model.created_at,
        )
