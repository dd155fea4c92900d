"""
Blockchain-related exceptions.

Raised by chain providers and the balance oracle.
"""

from douanier.domain.exceptions.base import DouanierException


class BlockchainError(DouanierException):
    """Base exception for blockchain operations."""


class UnsupportedChainError(BlockchainError):
    """Raised when no RPC endpoint is configured for a chain id."""

    def __init__(self, chain_id: int):
        super().__init__(
            f"Unsupported chain ID: {chain_id}",
            code="UNSUPPORTED_CHAIN",
        )
        self.chain_id = chain_id


class InvalidAddressError(BlockchainError):
    """Raised when a wallet or contract address is malformed."""

    def __init__(self, field: str, address: str):
        super().__init__(
            f"Invalid {field}: {address}",
            code="INVALID_ADDRESS",
        )
        self.field = field
        self.address = address


class RemoteUnavailableError(BlockchainError):
    """Raised when the upstream RPC call fails, times out or returns garbage."""

    def __init__(self, message: str, chain_id: int | None = None):
        super().__init__(message, code="REMOTE_UNAVAILABLE")
        self.chain_id = chain_id
