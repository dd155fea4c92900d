"""
Token amount helpers.

Balances live on chain as integers in the token's smallest unit; merchants
enter thresholds in human units ("1.5"). Conversions between the two stay in
integer arithmetic so 18-decimal tokens never lose precision.
"""

from decimal import Decimal, InvalidOperation
from typing import Union

MAX_DECIMALS = 77


def parse_token_amount(value: Union[str, int, Decimal]) -> Decimal:
    """
    Parse a human-unit token amount.

    Args:
        value: Amount as string, int or Decimal (floats are rejected)

    Returns:
        Finite, non-negative Decimal

    Raises:
        ValueError: If value is not a finite non-negative number
    """
    if isinstance(value, (float, bool)):
        raise ValueError("Token amounts must be given as strings, not floats")

    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Invalid token amount: {value!r}")

    if not amount.is_finite():
        raise ValueError(f"Invalid token amount: {value!r}")
    if amount < 0:
        raise ValueError("Token amount cannot be negative")

    return amount


def to_raw_units(amount: Union[str, int, Decimal], decimals: int) -> int:
    """
    Scale a human-unit amount into the token's smallest unit.

    Digits finer than the token supports are rounded up, so a scaled
    threshold is never lower than what the merchant asked for.

    Args:
        amount: Human-unit amount
        decimals: Token decimals (0-77)

    Returns:
        Raw integer amount

    Example:
        >>> to_raw_units("1.5", 18)
        1500000000000000000
    """
    if not 0 <= decimals <= MAX_DECIMALS:
        raise ValueError(f"Unsupported token decimals: {decimals}")

    parsed = parse_token_amount(amount)
    sign, digits, exponent = parsed.as_tuple()
    coefficient = int("".join(str(d) for d in digits)) if digits else 0

    shift = exponent + decimals
    if shift >= 0:
        return coefficient * 10**shift

    divisor = 10**-shift
    quotient, remainder = divmod(coefficient, divisor)
    return quotient + 1 if remainder else quotient


def format_units(raw: int, decimals: int) -> str:
    """
    Render a raw integer amount in human units.

    Always keeps at least one fractional digit ("2000.0", "1.5").

    Args:
        raw: Raw integer amount
        decimals: Token decimals

    Returns:
        Decimal string without exponent notation
    """
    if not 0 <= decimals <= MAX_DECIMALS:
        raise ValueError(f"Unsupported token decimals: {decimals}")

    negative = raw < 0
    whole, fraction = divmod(abs(raw), 10**decimals)

    fraction_str = str(fraction).rjust(decimals, "0").rstrip("0") if decimals else ""
    text = f"{whole}.{fraction_str or '0'}"
    return f"-{text}" if negative else text


def format_decimal(amount: Decimal) -> str:
    """Render a human-unit Decimal without exponent notation."""
    text = format(amount, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"
