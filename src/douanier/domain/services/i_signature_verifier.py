"""
Signature Verifier interface.

Builds the ownership challenge and checks wallet signatures over it.
"""

from abc import ABC, abstractmethod


class ISignatureVerifier(ABC):
    """
    Interface for wallet signature verification.

    Implementations are pure local cryptography: no network, no state.
    """

    @abstractmethod
    def challenge(self, shop_domain: str, nonce: str) -> str:
        """
        Build the exact message the customer must sign.

        Args:
            shop_domain: Shop the customer is verifying for
            nonce: Session nonce

        Returns:
            Challenge message text
        """

    @abstractmethod
    def verify(self, message: str, signature: str, claimed_address: str) -> bool:
        """
        Check a signature was produced by the claimed address.

        Args:
            message: Message that was signed
            signature: Hex-encoded signature
            claimed_address: Address claiming ownership

        Returns:
            True if the recovered signer matches, False otherwise
            (malformed input included; never raises)
        """
