"""
ERC-20 call encoding.

Builds `eth_call` payloads for the read-only part of the ERC-20
interface and decodes their return data.
"""

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import function_signature_to_4byte_selector

BALANCE_OF = "balanceOf(address)"
DECIMALS = "decimals()"
SYMBOL = "symbol()"
NAME = "name()"


def _selector(signature: str) -> bytes:
    return function_signature_to_4byte_selector(signature)


def encode_balance_of(wallet: str) -> str:
    """
    Encode a balanceOf(address) call.

    Args:
        wallet: Lower-case holder address

    Returns:
        0x-prefixed call data
    """
    data = _selector(BALANCE_OF) + encode(["address"], [wallet])
    return "0x" + data.hex()


def encode_no_args(signature: str) -> str:
    """Encode a call to an argument-less view function."""
    return "0x" + _selector(signature).hex()


def decode_uint(data: bytes, bits: int = 256) -> int:
    """
    Decode a single unsigned integer return value.

    Raises:
        ValueError: If data is not a valid ABI-encoded uintN
    """
    try:
        (value,) = decode([f"uint{bits}"], data)
    except DecodingError as e:
        raise ValueError(f"Malformed uint{bits} return data: {e}")
    return value


def decode_text(data: bytes) -> str:
    """
    Decode a string return value.

    A few early tokens return bytes32 instead of string for name() and
    symbol(); both encodings are accepted.

    Raises:
        ValueError: If data is neither encoding
    """
    try:
        (value,) = decode(["string"], data)
        return value
    except DecodingError:
        pass

    if len(data) == 32:
        return data.rstrip(b"\x00").decode("utf-8", errors="replace")

    raise ValueError("Malformed string return data")


def hex_to_bytes(value: str) -> bytes:
    """
    Convert a 0x-prefixed hex string from JSON-RPC to bytes.

    Raises:
        ValueError: If value is not hex
    """
    if not isinstance(value, str) or not value.startswith("0x"):
        raise ValueError(f"Expected 0x-prefixed hex, got {value!r}")
    return bytes.fromhex(value[2:])
