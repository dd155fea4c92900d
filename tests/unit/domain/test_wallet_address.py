"""
Unit tests for WalletAddress value object.

Usage:
    pytest tests/unit/domain/test_wallet_address.py
"""

import pytest

from douanier.domain.value_objects.wallet_address import WalletAddress

CHECKSUMMED = "0x90F8bf6A479f320ead074411a4B0e7944Ea8c9C1"


class TestWalletAddress:
    """Tests for WalletAddress."""

    def test_normalizes_to_lower_case(self):
        wallet = WalletAddress(CHECKSUMMED)
        assert wallet.address == CHECKSUMMED.lower()
        assert str(wallet) == CHECKSUMMED.lower()

    def test_accepts_lower_case(self):
        assert WalletAddress(CHECKSUMMED.lower()).address == CHECKSUMMED.lower()

    def test_rejects_bad_checksum(self):
        # "F" at index 4 lower-cased breaks the EIP-55 checksum
        bad = CHECKSUMMED[:4] + "f" + CHECKSUMMED[5:]
        with pytest.raises(ValueError):
            WalletAddress(bad)

    @pytest.mark.parametrize(
        "address",
        ["", "0x1234", "90f8bf6a479f320ead074411a4b0e7944ea8c9c1zz", "not-an-address"],
    )
    def test_rejects_invalid(self, address):
        with pytest.raises(ValueError):
            WalletAddress(address)

    def test_is_valid(self):
        assert WalletAddress.is_valid(CHECKSUMMED)
        assert not WalletAddress.is_valid("0xdeadbeef")

    def test_equality_ignores_input_case(self):
        assert WalletAddress(CHECKSUMMED) == WalletAddress(CHECKSUMMED.lower())

    def test_rejects_any_broken_checksum(self):
        # Upper-casing one lower-case letter also breaks the checksum
        bad = CHECKSUMMED[:6] + "B" + CHECKSUMMED[7:]
        assert not WalletAddress.is_valid(bad)

    def test_accepts_all_upper_case(self):
        upper = "0x" + CHECKSUMMED[2:].upper()
        assert WalletAddress(upper).address == CHECKSUMMED.lower()

    def test_requires_prefix(self):
        assert not WalletAddress.is_valid(CHECKSUMMED[2:])
