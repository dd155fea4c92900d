"""
Verification session repository interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from douanier.domain.entities.verification_session import (
    SessionStatus,
    VerificationSession,
)


class IVerificationSessionRepository(ABC):
    """Interface for verification session persistence operations."""

    @abstractmethod
    async def create(self, session: VerificationSession) -> VerificationSession:
        """
        Persist a new pending session.

        Args:
            session: VerificationSession entity to create

        Returns:
            Created session entity
        """

    @abstractmethod
    async def get_by_token(self, session_token: str) -> Optional[VerificationSession]:
        """
        Get session by its opaque token.

        Args:
            session_token: Session token handed to the client

        Returns:
            VerificationSession if found, None otherwise
        """

    @abstractmethod
    async def transition_from_pending(
        self,
        session_token: str,
        status: SessionStatus,
    ) -> bool:
        """
        Move a session out of PENDING, only if it is still pending.

        Args:
            session_token: Session token
            status: Terminal status to set

        Returns:
            True if this call performed the transition, False if the
            session had already left PENDING
        """
