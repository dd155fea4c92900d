"""
EVM signature verifier.

Recovers the signer of an EIP-191 personal_sign message with secp256k1.
"""

from eth_account import Account
from eth_account.messages import encode_defunct

from douanier.domain.services.i_signature_verifier import ISignatureVerifier
from douanier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

CHALLENGE_TEMPLATE = (
    "Sign this message to verify your wallet ownership for {shop}.\n\n"
    "Nonce: {nonce}\n\n"
    "This will not trigger any blockchain transaction or cost any gas fees."
)

# r (32) + s (32) + v (1)
SIGNATURE_BYTES = 65


class EVMSignatureVerifier(ISignatureVerifier):
    """
    Wallet ownership check for Ethereum-compatible chains.

    Verifies wallet ownership via signer recovery; no network access.
    """

    def challenge(self, shop_domain: str, nonce: str) -> str:
        """
        Build the challenge message for a session.

        Args:
            shop_domain: Shop the customer is verifying for
            nonce: Session nonce

        Returns:
            Challenge message text
        """
        return CHALLENGE_TEMPLATE.format(shop=shop_domain, nonce=nonce)

    def verify(self, message: str, signature: str, claimed_address: str) -> bool:
        """
        Verify an EIP-191 signature against a claimed address.

        Args:
            message: Original message that was signed
            signature: 65-byte signature, hex encoded (0x prefix optional)
            claimed_address: Address claiming ownership

        Returns:
            True if signature recovers to the claimed address, False otherwise
        """
        signature_bytes = self._decode_signature(signature)
        if signature_bytes is None or not claimed_address:
            return False

        try:
            recovered = Account.recover_message(
                encode_defunct(text=message),
                signature=signature_bytes,
            )
        except Exception as e:
            logger.debug(f"Signature recovery failed: {type(e).__name__}: {e}")
            return False

        return recovered.lower() == claimed_address.strip().lower()

    @staticmethod
    def _decode_signature(signature: str) -> bytes | None:
        """Decode a hex signature, returning None if malformed."""
        if not isinstance(signature, str):
            return None

        raw = signature.strip()
        if raw[:2].lower() == "0x":
            raw = raw[2:]

        if len(raw) != SIGNATURE_BYTES * 2:
            return None

        try:
            return bytes.fromhex(raw)
        except ValueError:
            return None
