"""
Domain value objects.
"""

from douanier.domain.value_objects.token_amount import (
    format_decimal,
    format_units,
    parse_token_amount,
    to_raw_units,
)
from douanier.domain.value_objects.wallet_address import WalletAddress

__all__ = [
    "WalletAddress",
    "parse_token_amount",
    "to_raw_units",
    "format_units",
    "format_decimal",
]
