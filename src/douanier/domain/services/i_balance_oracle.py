"""
Balance Oracle interfaces.

A chain provider answers balance and token metadata queries for one
network; the oracle routes a query to the provider of its chain.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class TokenBalance:
    """Raw on-chain balance together with the token's decimals."""

    raw: int
    decimals: int


@dataclass(frozen=True)
class TokenInfo:
    """ERC-20 token metadata."""

    address: str
    chain_id: int
    name: str
    symbol: str
    decimals: int


class IChainProvider(ABC):
    """Read-only token queries against one blockchain network."""

    chain_id: int

    @abstractmethod
    async def get_balance(self, token_contract: str, wallet: str) -> TokenBalance:
        """
        Get a wallet's balance of a token.

        Args:
            token_contract: Token contract address
            wallet: Holder address

        Returns:
            TokenBalance with raw amount and decimals

        Raises:
            RemoteUnavailableError: If the RPC call fails or times out
        """

    @abstractmethod
    async def get_token_info(self, token_contract: str) -> TokenInfo:
        """
        Get token metadata.

        Args:
            token_contract: Token contract address

        Returns:
            TokenInfo

        Raises:
            RemoteUnavailableError: If the RPC call fails or times out
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""


class IBalanceOracle(ABC):
    """
    Interface for multi-chain balance lookups.

    Clean Architecture: Domain layer defines interface,
    Infrastructure layer implements concrete RPC queries.
    """

    @abstractmethod
    def supports(self, chain_id: int) -> bool:
        """Check a provider is configured for a chain."""

    @abstractmethod
    async def get_balance(
        self, chain_id: int, token_contract: str, wallet: str
    ) -> TokenBalance:
        """
        Get a wallet's raw token balance and the token's decimals.

        Args:
            chain_id: EVM chain id
            token_contract: Token contract address
            wallet: Holder address

        Returns:
            TokenBalance

        Raises:
            UnsupportedChainError: If chain has no configured endpoint
            InvalidAddressError: If either address is malformed
            RemoteUnavailableError: If the upstream call fails
        """

    @abstractmethod
    async def get_token_info(self, chain_id: int, token_contract: str) -> TokenInfo:
        """
        Get token metadata.

        Args:
            chain_id: EVM chain id
            token_contract: Token contract address

        Returns:
            TokenInfo

        Raises:
            UnsupportedChainError: If chain has no configured endpoint
            InvalidAddressError: If the address is malformed
            RemoteUnavailableError: If the upstream call fails
        """

    @abstractmethod
    async def close(self) -> None:
        """Close all provider connections."""
