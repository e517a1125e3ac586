"""Conversions between on-chain fixed-point integers and display decimals."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..errors import ConversionError

NATIVE_DECIMALS = 18
# ERC-20 decimals is a uint8
MAX_DECIMALS = 255


def parse_raw_balance(raw: Any) -> int:
    """Parse a raw on-chain balance into an exact integer.

    Hex strings (``0x...``) are read as arbitrary-precision integers so large
    magnitudes never pass through a float. Decimal strings are read directly;
    scientific notation is accepted as long as it denotes a whole number.
    ``""``, ``"0x"`` and ``"0x0"`` are zero.
    """

    if isinstance(raw, bool):
        raise ConversionError(raw, "boolean is not a balance")
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str):
        text = raw.strip()
        lowered = text.lower()
        if lowered in ("", "0x"):
            return 0
        if lowered.startswith("0x"):
            try:
                value = int(lowered, 16)
            except ValueError as exc:
                raise ConversionError(raw) from exc
        elif text.isascii() and text.isdigit():
            value = int(text)
        else:
            try:
                parsed = Decimal(text)
            except InvalidOperation as exc:
                raise ConversionError(raw) from exc
            if not parsed.is_finite() or parsed != parsed.to_integral_value():
                raise ConversionError(raw, "balance is not a whole number")
            value = int(parsed)
    else:
        raise ConversionError(raw, "unsupported balance type")

    if value < 0:
        raise ConversionError(raw, "negative balance")
    return value


def to_decimal(raw_value: int, decimal_places: int) -> float:
    """``raw_value / 10**decimal_places`` as a float, for display only."""
    if not 0 <= decimal_places <= MAX_DECIMALS:
        raise ConversionError(decimal_places, "decimal places out of range")
    try:
        return raw_value / 10 ** decimal_places
    except OverflowError as exc:
        raise ConversionError(raw_value, "balance too large to display") from exc


def format_units(raw_value: int, decimal_places: int = NATIVE_DECIMALS, precision: int = 6) -> str:
    return f"{to_decimal(raw_value, decimal_places):.{precision}f}"


def parse_price(value: Optional[str]) -> float:
    """Unit price from a provider string; unknown or unparsable means 0."""
    if value is None:
        return 0.0
    try:
        price = float(value)
    except (TypeError, ValueError):
        return 0.0
    if price != price or price in (float("inf"), float("-inf")):
        return 0.0
    return price


__all__ = [
    "NATIVE_DECIMALS",
    "parse_raw_balance",
    "to_decimal",
    "format_units",
    "parse_price",
]
