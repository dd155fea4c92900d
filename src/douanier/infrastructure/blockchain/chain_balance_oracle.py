"""
Chain balance oracle.

Registry of chain providers keyed by chain id, built from configuration.
"""

from typing import Mapping

from douanier.domain.exceptions.blockchain import (
    InvalidAddressError,
    UnsupportedChainError,
)
from douanier.domain.services.i_balance_oracle import (
    IBalanceOracle,
    IChainProvider,
    TokenBalance,
    TokenInfo,
)
from douanier.domain.value_objects.wallet_address import WalletAddress
from douanier.infrastructure.blockchain.evm_rpc_provider import EVMRPCProvider
from douanier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class ChainBalanceOracle(IBalanceOracle):
    """
    Routes balance and token lookups to the provider of each chain.

    Validates addresses before any network traffic so malformed input
    never reaches an RPC endpoint.
    """

    def __init__(self, providers: Mapping[int, IChainProvider]):
        """
        Initialize oracle with a provider registry.

        Args:
            providers: Mapping of chain id to provider
        """
        self._providers: dict[int, IChainProvider] = dict(providers)

    @classmethod
    def from_endpoints(
        cls,
        endpoints: Mapping[int, str],
        total_timeout: float = 10,
        connect_timeout: float = 3,
    ) -> "ChainBalanceOracle":
        """
        Build an oracle with one JSON-RPC provider per configured chain.

        Args:
            endpoints: Mapping of chain id to RPC URL
            total_timeout: Per-request total timeout in seconds
            connect_timeout: Per-request connect timeout in seconds

        Returns:
            ChainBalanceOracle
        """
        providers = {
            chain_id: EVMRPCProvider(
                chain_id=chain_id,
                rpc_url=url,
                total_timeout=total_timeout,
                connect_timeout=connect_timeout,
            )
            for chain_id, url in endpoints.items()
        }
        logger.info(
            f"Chain providers configured: {sorted(providers) or 'none'}"
        )
        return cls(providers)

    @property
    def chain_ids(self) -> list[int]:
        """Configured chain ids."""
        return sorted(self._providers)

    def supports(self, chain_id: int) -> bool:
        """Check a provider is configured for a chain."""
        return chain_id in self._providers

    def _provider(self, chain_id: int) -> IChainProvider:
        provider = self._providers.get(chain_id)
        if provider is None:
            raise UnsupportedChainError(chain_id)
        return provider

    @staticmethod
    def _normalize(field: str, address: str) -> str:
        try:
            return WalletAddress(address).address
        except (ValueError, TypeError):
            raise InvalidAddressError(field, str(address))

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
        provider = self._provider(chain_id)
        contract = self._normalize("token contract address", token_contract)
        holder = self._normalize("wallet address", wallet)
        return await provider.get_balance(contract, holder)

    async def get_token_info(self, chain_id: int, token_contract: str) -> TokenInfo:
        """
        Get token metadata.

        Raises:
            UnsupportedChainError: If chain has no configured endpoint
            InvalidAddressError: If the address is malformed
            RemoteUnavailableError: If the upstream call fails
        """
        provider = self._provider(chain_id)
        contract = self._normalize("token contract address", token_contract)
        return await provider.get_token_info(contract)

    async def close(self) -> None:
        """Close all provider connections."""
        for provider in self._providers.values():
            await provider.close()
