"""
Create Verification Session use case.

Issues the challenge a customer signs to prove wallet ownership.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from douanier.domain.entities.verification_session import VerificationSession
from douanier.domain.exceptions import ValidationError
from douanier.domain.repositories.i_verification_session_repository import (
    IVerificationSessionRepository,
)
from douanier.domain.services.i_signature_verifier import ISignatureVerifier
from douanier.domain.value_objects.wallet_address import WalletAddress


@dataclass
class CreateVerificationSessionResult:
    """Challenge handed to the storefront."""

    session_token: str
    message: str
    expires_at: datetime


class CreateVerificationSession:
    """
    Start a wallet verification.

    Business rules:
    - Wallet address must be a valid EVM address
    - Session token (256 bits) and nonce (128 bits) are random
    - Session expires after the configured TTL (15 minutes by default)
    - Chain defaults to Ethereum mainnet (1)
    """

    def __init__(
        self,
        session_repository: IVerificationSessionRepository,
        signature_verifier: ISignatureVerifier,
        ttl_minutes: int = 15,
    ):
        """
        Initialize use case with dependencies.

        Args:
            session_repository: Repository for session persistence
            signature_verifier: Builds the challenge message
            ttl_minutes: Session lifetime in minutes
        """
        self.session_repository = session_repository
        self.signature_verifier = signature_verifier
        self.ttl = timedelta(minutes=ttl_minutes)

    async def execute(
        self,
        shop_domain: str,
        wallet_address: str,
        chain_id: int = 1,
    ) -> CreateVerificationSessionResult:
        """
        Execute session creation.

        Args:
            shop_domain: Shop the customer is verifying for
            wallet_address: Claimed wallet address
            chain_id: Chain holding the customer's tokens

        Returns:
            CreateVerificationSessionResult with token, message and expiry

        Raises:
            ValidationError: If shop is empty, address or chain invalid
        """
        if not shop_domain or not shop_domain.strip():
            raise ValidationError(field="shop", reason="Shop domain is required")

        if not WalletAddress.is_valid(wallet_address):
            raise ValidationError(
                field="walletAddress",
                reason="Invalid wallet address",
            )

        if chain_id <= 0:
            raise ValidationError(field="chainId", reason="Invalid chain ID")

        session = VerificationSession.issue(
            shop_domain=shop_domain,
            wallet_address=wallet_address,
            chain_id=chain_id,
            ttl=self.ttl,
        )
        session = await self.session_repository.create(session)

        return CreateVerificationSessionResult(
            session_token=session.session_token,
            message=self.signature_verifier.challenge(
                session.shop_domain, session.nonce
            ),
            expires_at=session.expires_at,
        )
