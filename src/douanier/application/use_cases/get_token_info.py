"""
Get Token Info use case.

Lets merchants check a token contract before building a rule on it.
"""

from douanier.domain.services.i_balance_oracle import IBalanceOracle, TokenInfo


class GetTokenInfo:
    """Fetch ERC-20 metadata through the balance oracle."""

    def __init__(self, balance_oracle: IBalanceOracle):
        self.balance_oracle = balance_oracle

    async def execute(self, chain_id: int, token_contract: str) -> TokenInfo:
        """
        Execute token lookup.

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
        return await self.balance_oracle.get_token_info(chain_id, token_contract)
