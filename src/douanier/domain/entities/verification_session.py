"""
VerificationSession entity - Challenge-response wallet ownership proof.
"""

import secrets
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from douanier.domain.clock import utcnow
from douanier.domain.value_objects.wallet_address import WalletAddress

SESSION_TOKEN_BYTES = 32
NONCE_BYTES = 16


class SessionStatus(str, Enum):
    """Verification session states."""

    PENDING = "pending"
    VERIFIED = "verified"
    FAILED = "failed"
    EXPIRED = "expired"


@dataclass
class VerificationSession:
    """
    VerificationSession entity.

    Business rules:
    - Wallet address is a valid EVM address, stored lower-case
    - Status transitions: PENDING → VERIFIED, FAILED or EXPIRED
    - Status leaves PENDING exactly once and never changes again
    - Expiry is checked lazily, when the session is accessed
    """

    id: UUID = field(default_factory=uuid4)
    session_token: str = field(default="")
    shop_domain: str = field(default="")
    wallet_address: str = field(default="")
    chain_id: int = field(default=1)
    nonce: str = field(default="")
    status: SessionStatus = field(default=SessionStatus.PENDING)
    created_at: datetime = field(default_factory=utcnow)
    expires_at: Optional[datetime] = field(default=None)

    def __post_init__(self):
        """Validate session data after initialization."""
        if not self.session_token:
            raise ValueError("Session token is required")

        if not self.shop_domain:
            raise ValueError("Shop domain is required")

        if not self.nonce:
            raise ValueError("Nonce is required")

        if self.chain_id <= 0:
            raise ValueError(f"Invalid chain ID: {self.chain_id}")

        self.shop_domain = self.shop_domain.strip().lower()
        self.wallet_address = WalletAddress(self.wallet_address).address

        if self.expires_at is None:
            raise ValueError("Expiry time is required")

    @classmethod
    def issue(
        cls,
        shop_domain: str,
        wallet_address: str,
        chain_id: int = 1,
        ttl: timedelta = timedelta(minutes=15),
        now: Optional[datetime] = None,
    ) -> "VerificationSession":
        """
        Create a fresh pending session with random token and nonce.

        Args:
            shop_domain: Shop the customer is verifying for
            wallet_address: Claimed wallet address
            chain_id: Chain the customer's tokens live on
            ttl: Time until the session expires
            now: Creation time (defaults to current UTC time)

        Returns:
            New pending VerificationSession
        """
        created_at = now or utcnow()
        return cls(
            session_token=secrets.token_hex(SESSION_TOKEN_BYTES),
            shop_domain=shop_domain,
            wallet_address=wallet_address,
            chain_id=chain_id,
            nonce=secrets.token_hex(NONCE_BYTES),
            status=SessionStatus.PENDING,
            created_at=created_at,
            expires_at=created_at + ttl,
        )

    def is_pending(self) -> bool:
        """Check if session still awaits a signature."""
        return self.status == SessionStatus.PENDING

    def is_verified(self) -> bool:
        """Check if wallet ownership was proven."""
        return self.status == SessionStatus.VERIFIED

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Check if the expiry time has passed."""
        return (now or utcnow()) > self.expires_at

    def is_bound_to(self, shop_domain: str, wallet_address: str) -> bool:
        """Check session belongs to the given shop and wallet."""
        return (
            self.shop_domain == shop_domain.strip().lower()
            and self.wallet_address == wallet_address.lower()
        )

    def transition(self, status: SessionStatus) -> None:
        """
        Move a pending session into a terminal state.

        Args:
            status: Terminal status (VERIFIED, FAILED or EXPIRED)

        Raises:
            ValueError: If session is not pending or status is not terminal
        """
        if self.status != SessionStatus.PENDING:
            raise ValueError(
                f"Cannot transition session in {self.status.value} status"
            )
        if status == SessionStatus.PENDING:
            raise ValueError("Target status must be terminal")

        self.status = status
