"""
Helpers to sign challenges with local EVM keys.
"""

from eth_account import Account
from eth_account.messages import encode_defunct

# Well-known development keys; never hold funds with them
ALICE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
BOB_KEY = "0x6370fd033278c143179d81c5526140625662b8daa446c22ee2d73db3707e620c"

ALICE = Account.from_key(ALICE_KEY)
BOB = Account.from_key(BOB_KEY)

TOKEN_CONTRACT = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"


def sign_message(message: str, account=ALICE) -> str:
    """
    Sign a message with EIP-191 personal_sign.

    Args:
        message: Message to sign
        account: Local account (defaults to Alice)

    Returns:
        0x-prefixed hex signature (65 bytes)
    """
    signed = account.sign_message(encode_defunct(text=message))
    return "0x" + bytes(signed.signature).hex()


def tamper(signature: str) -> str:
    """Flip one hex digit inside the s component of a signature."""
    index = 2 + 64 + 10
    digit = signature[index]
    flipped = "1" if digit != "1" else "2"
    return signature[:index] + flipped + signature[index + 1 :]
