"""Conversions between ether amounts and wei."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

WEI_PER_ETHER = 10**18


def parse_ether(value: str | int | Decimal) -> int:
    """
    Convert an ether amount to wei.

    Raises:
        ValueError: If the value is not a non-negative number with at most
            18 decimal places.
    """
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"Invalid ether amount: {value!r}") from e

    if not amount.is_finite() or amount < 0:
        raise ValueError(f"Invalid ether amount: {value!r}")

    wei = amount * WEI_PER_ETHER
    if wei != wei.to_integral_value():
        raise ValueError(f"Too many decimal places: {value!r}")
    return int(wei)


def format_ether(wei: int) -> str:
    """Format a wei amount as ether, e.g. ``1.5`` or ``0.0``."""
    text = format(Decimal(wei) / WEI_PER_ETHER, "f")
    if "." not in text:
        return f"{text}.0"
    text = text.rstrip("0")
    return text + "0" if text.endswith(".") else text
