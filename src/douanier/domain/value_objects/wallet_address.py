"""
WalletAddress value object - Immutable EVM account address.
"""

from dataclasses import dataclass

from eth_utils import is_checksum_address, is_hex_address


@dataclass(frozen=True)
class WalletAddress:
    """
    Value object representing a validated EVM address.

    Business rules:
    - 20-byte hex string with 0x prefix
    - Mixed-case input must carry a valid EIP-55 checksum
    - Stored and compared in lower case
    """

    address: str

    def __post_init__(self):
        """Validate and normalize address on creation."""
        if not self.address:
            raise ValueError("Wallet address cannot be empty")

        if not isinstance(self.address, str) or not self._is_well_formed(
            self.address
        ):
            raise ValueError(f"Invalid wallet address: {self.address}")

        object.__setattr__(self, "address", self.address.lower())

    @staticmethod
    def _is_well_formed(value: str) -> bool:
        if not value.startswith("0x") or not is_hex_address(value):
            return False
        body = value[2:]
        if body != body.lower() and body != body.upper():
            return is_checksum_address(value)
        return True

    @classmethod
    def is_valid(cls, address: str) -> bool:
        """Check an address without raising."""
        try:
            cls(address)
        except ValueError:
            return False
        return True

    def __str__(self) -> str:
        """String representation returns full normalized address."""
        return self.address
