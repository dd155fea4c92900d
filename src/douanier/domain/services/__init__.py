"""
Domain services package.
"""

from douanier.domain.services.i_balance_oracle import (
    IBalanceOracle,
    IChainProvider,
    TokenBalance,
    TokenInfo,
)
from douanier.domain.services.i_signature_verifier import ISignatureVerifier

__all__ = [
    "ISignatureVerifier",
    "IBalanceOracle",
    "IChainProvider",
    "TokenBalance",
    "TokenInfo",
]
