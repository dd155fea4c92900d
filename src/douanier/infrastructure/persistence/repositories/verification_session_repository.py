"""
VerificationSession repository implementation using SQLAlchemy.
"""

from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from douanier.domain.entities.verification_session import (
    SessionStatus,
    VerificationSession,
)
from douanier.domain.repositories.i_verification_session_repository import (
    IVerificationSessionRepository,
)
from douanier.infrastructure.persistence.models import VerificationSessionModel


class VerificationSessionRepository(IVerificationSessionRepository):
    """
    SQLAlchemy implementation of verification session repository.

    Status changes are conditional writes: a session leaves PENDING
    only through the UPDATE that still finds it pending.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, session: VerificationSession) -> VerificationSession:
        """
        Persist a new verification session.

        Args:
            session: VerificationSession entity to persist

        Returns:
            Created session entity
        """
        model = VerificationSessionModel(
            id=session.id,
            session_token=session.session_token,
            shop_domain=session.shop_domain,
            wallet_address=session.wallet_address,
            chain_id=session.chain_id,
            nonce=session.nonce,
            status=session.status.value,
            created_at=session.created_at,
            expires_at=session.expires_at,
        )

        self.session.add(model)
        await self.session.flush()

        return self._to_entity(model)

    async def get_by_token(self, session_token: str) -> Optional[VerificationSession]:
        """
        Retrieve session by token.

        Args:
            session_token: Opaque session token

        Returns:
            VerificationSession if found, None otherwise
        """
        stmt = (
            select(VerificationSessionModel)
            .where(VerificationSessionModel.session_token == session_token)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        return self._to_entity(model) if model else None

    async def transition_from_pending(
        self,
        session_token: str,
        status: SessionStatus,
    ) -> bool:
        """
        Set a terminal status if the session is still pending.

        Args:
            session_token: Session token
            status: Terminal status

        Returns:
            True if this call moved the session out of PENDING
        """
        stmt = (
            update(VerificationSessionModel)
            .where(
                VerificationSessionModel.session_token == session_token,
                VerificationSessionModel.status == SessionStatus.PENDING.value,
            )
            .values(status=status.value)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)

        return result.rowcount == 1

    def _to_entity(self, model: VerificationSessionModel) -> VerificationSession:
        """Convert ORM model to domain entity."""
        return VerificationSession(
            id=model.id,
            session_token=model.session_token,
            shop_domain=model.shop_domain,
            wallet_address=model.wallet_address,
            chain_id=model.chain_id,
            nonce=model.nonce,
            status=SessionStatus(model.status),
            created_at=model.created_at,
            expires_at=model.expires_at,
        )
