"""Money rounding and formatting helpers."""

import math
import sys
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from babel.core import UnknownLocaleError
from babel.numbers import format_currency

DEFAULT_CURRENCY = "AUD"
DEFAULT_LOCALE = "en_AU"

_CENTS = Decimal("0.01")

# Magnitudes from here on (and non-finite values) are left unrounded.
_MAX_ROUNDABLE = 1e21


def is_number(value: Any) -> bool:
    """Return True for finite int/float values (bools excluded).

    Integers beyond the float range count as non-finite.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return abs(value) <= sys.float_info.max
    return isinstance(value, float) and math.isfinite(value)


def _quantize(value: float) -> Decimal:
    # Decimal(float) is the exact binary value, ties round away from zero.
    return Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP)


def round2(value: float) -> float:
    """Round to 2 decimal places, half away from zero on the exact value.

    Values of 1e21 or more in magnitude, infinities and NaN are returned as is.
    """
    if not abs(value) < _MAX_ROUNDABLE:
        return value
    return float(_quantize(value))


def format_fixed2(value: float) -> str:
    """Render a number with exactly two decimals, using the same rounding as round2."""
    if not abs(value) < _MAX_ROUNDABLE:
        return str(value)
    return str(_quantize(value))


def format_money(amount: float, currency: str, locale: str = DEFAULT_LOCALE) -> str:
    """Format an amount in the given currency with locale grouping.

    Example:
        ```python
        format_money(1234.5, "AUD")  # '$1,234.50'
        ```
    """
    if not math.isfinite(amount):
        return f"{currency} {amount}"
    try:
        return format_currency(amount, currency, locale=locale)
    except (UnknownLocaleError, InvalidOperation, ValueError, KeyError, TypeError):
        return f"{currency} {amount:,.2f}"
