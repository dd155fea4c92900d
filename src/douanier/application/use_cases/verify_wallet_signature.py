"""
Verify Wallet Signature use case.

Consumes a pending session: the challenge is rebuilt from the stored
shop and nonce, never taken from the client.
"""

from dataclasses import dataclass
from typing import Optional

from douanier.domain.clock import utcnow
from douanier.domain.entities.verification_session import SessionStatus
from douanier.domain.exceptions import (
    DouanierException,
    InvalidSignatureError,
    SessionAlreadyProcessedError,
    SessionExpiredError,
    SessionNotFoundError,
    ValidationError,
)
from douanier.domain.repositories.i_verification_session_repository import (
    IVerificationSessionRepository,
)
from douanier.domain.services.i_signature_verifier import ISignatureVerifier


@dataclass
class VerifyWalletSignatureResult:
    """Terminal state the session was moved to."""

    status: SessionStatus
    wallet_address: str

    @property
    def success(self) -> bool:
        """Check wallet ownership was proven."""
        return self.status == SessionStatus.VERIFIED

    def failure(self) -> Optional[DouanierException]:
        """Error to report when the session did not verify."""
        if self.status == SessionStatus.EXPIRED:
            return SessionExpiredError()
        if self.status == SessionStatus.FAILED:
            return InvalidSignatureError()
        return None


class VerifyWalletSignature:
    """
    Verify a wallet signature against a pending session.

    Business rules:
    - Session must exist and still be pending
    - A session past its expiry moves to EXPIRED
    - A valid signature moves it to VERIFIED, an invalid one to FAILED
    - The move out of PENDING happens at most once, even under
      concurrent calls

    Expired and failed outcomes are returned, not raised, so that the
    terminal status is committed with the request.
    """

    def __init__(
        self,
        session_repository: IVerificationSessionRepository,
        signature_verifier: ISignatureVerifier,
    ):
        """
        Initialize use case with dependencies.

        Args:
            session_repository: Repository for session persistence
            signature_verifier: Service for signature verification
        """
        self.session_repository = session_repository
        self.signature_verifier = signature_verifier

    async def execute(
        self,
        session_token: str,
        signature: str,
    ) -> VerifyWalletSignatureResult:
        """
        Execute signature verification.

        Args:
            session_token: Token returned by session creation
            signature: Hex-encoded personal_sign signature

        Returns:
            VerifyWalletSignatureResult with the new session status

        Raises:
            ValidationError: If token or signature is empty
            SessionNotFoundError: If no session has this token
            SessionAlreadyProcessedError: If session is not pending
        """
        if not session_token:
            raise ValidationError(field="sessionToken", reason="is required")
        if not signature:
            raise ValidationError(field="signature", reason="is required")

        # 1. Load session
        session = await self.session_repository.get_by_token(session_token)
        if not session:
            raise SessionNotFoundError()

        if not session.is_pending():
            raise SessionAlreadyProcessedError(session.status.value)

        # 2. Lazy expiry
        if session.is_expired(utcnow()):
            outcome = SessionStatus.EXPIRED
        else:
            # 3. Rebuild challenge and verify
            message = self.signature_verifier.challenge(
                session.shop_domain, session.nonce
            )
            is_valid = self.signature_verifier.verify(
                message, signature, session.wallet_address
            )
            outcome = SessionStatus.VERIFIED if is_valid else SessionStatus.FAILED

        # 4. Conditional transition; losing a race means already processed
        moved = await self.session_repository.transition_from_pending(
            session_token, outcome
        )
        if not moved:
            raise SessionAlreadyProcessedError("unknown")

        return VerifyWalletSignatureResult(
            status=outcome,
            wallet_address=session.wallet_address,
        )
