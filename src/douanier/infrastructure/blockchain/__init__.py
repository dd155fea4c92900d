"""Blockchain access: ERC-20 calls over EVM JSON-RPC."""

from douanier.infrastructure.blockchain.chain_balance_oracle import (
    ChainBalanceOracle,
)
from douanier.infrastructure.blockchain.evm_rpc_provider import EVMRPCProvider

__all__ = [
    "ChainBalanceOracle",
    "EVMRPCProvider",
]
