"""
In-memory stand-ins for network collaborators.
"""

import asyncio
from typing import Optional

from douanier.domain.exceptions.blockchain import (
    RemoteUnavailableError,
    UnsupportedChainError,
)
from douanier.domain.services.i_balance_oracle import (
    IBalanceOracle,
    TokenBalance,
    TokenInfo,
)


class FakeBalanceOracle(IBalanceOracle):
    """
    Balance oracle answering from a dictionary.

    Balances are keyed by (chain_id, contract, wallet), all lower-case.
    Contracts listed in `failing` raise RemoteUnavailableError; contracts
    listed in `delays` sleep before answering.
    """

    def __init__(
        self,
        chains: tuple[int, ...] = (1,),
        decimals: int = 18,
    ):
        self.chains = set(chains)
        self.decimals = decimals
        self.balances: dict[tuple[int, str, str], int] = {}
        self.failing: set[str] = set()
        self.delays: dict[str, float] = {}
        self.calls: list[tuple[int, str, str]] = []
        self.closed = False

    def set_balance(
        self, wallet: str, raw: int, contract: str, chain_id: int = 1
    ) -> None:
        self.balances[(chain_id, contract.lower(), wallet.lower())] = raw

    def supports(self, chain_id: int) -> bool:
        return chain_id in self.chains

    async def get_balance(
        self, chain_id: int, token_contract: str, wallet: str
    ) -> TokenBalance:
        if chain_id not in self.chains:
            raise UnsupportedChainError(chain_id)

        contract = token_contract.lower()
        self.calls.append((chain_id, contract, wallet.lower()))

        delay: Optional[float] = self.delays.get(contract)
        if delay:
            await asyncio.sleep(delay)
        if contract in self.failing:
            raise RemoteUnavailableError("RPC down", chain_id=chain_id)

        raw = self.balances.get((chain_id, contract, wallet.lower()), 0)
        return TokenBalance(raw=raw, decimals=self.decimals)

    async def get_token_info(self, chain_id: int, token_contract: str) -> TokenInfo:
        if chain_id not in self.chains:
            raise UnsupportedChainError(chain_id)
        if token_contract.lower() in self.failing:
            raise RemoteUnavailableError("RPC down", chain_id=chain_id)
        return TokenInfo(
            address=token_contract.lower(),
            chain_id=chain_id,
            name="Test Token",
            symbol="TST",
            decimals=self.decimals,
        )

    async def close(self) -> None:
        self.closed = True
