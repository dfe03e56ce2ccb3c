"""
Decimal Math Utilities for Tax Calculations.

Provides precise decimal arithmetic so bracket walking and deduction
capping never accumulate binary floating point error.

Why Decimal?
- Float: 0.1 + 0.2 = 0.30000000000000004
- Decimal: 0.1 + 0.2 = 0.3

This matters for:
- Bracket thresholds, where $47,150 must not become $47,150.00001
- Rounding the final tax to pennies exactly once
- Idempotent results: the same request always serializes identically
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Iterable, Union
import logging

logger = logging.getLogger(__name__)

# Type alias for values that can be converted to Decimal
Numeric = Union[int, float, str, Decimal]

MONEY_PLACES = Decimal("0.01")  # Round to pennies

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")


def to_decimal(value: Numeric) -> Decimal:
    """
    Convert a numeric value to Decimal.

    Floats go through str() first so 0.1 stays 0.1 instead of its binary
    expansion.

    Examples:
        >>> to_decimal(100)
        Decimal('100')
        >>> to_decimal(100.50)
        Decimal('100.5')
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise InvalidOperation(f"Cannot convert boolean {value!r} to Decimal")
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def money(value: Numeric) -> Decimal:
    """
    Round value to pennies (ROUND_HALF_UP).

    Examples:
        >>> money(100.999)
        Decimal('101.00')
        >>> money("5648.505")
        Decimal('5648.51')
    """
    return to_decimal(value).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def non_negative(value: Numeric) -> Decimal:
    """Floor a value at zero."""
    value_d = to_decimal(value)
    return value_d if value_d > ZERO else ZERO


def percent(value: Numeric, percentage: Numeric) -> Decimal:
    """
    Calculate percentage of a value.

    Examples:
        >>> percent(80000, "0.075")
        Decimal('6000.000')
    """
    return to_decimal(value) * to_decimal(percentage)


def max_decimal(*values: Numeric) -> Decimal:
    return max(to_decimal(v) for v in values)


def sum_decimal(values: Iterable[Numeric]) -> Decimal:
    """Exact sum, no rounding."""
    total = ZERO
    for v in values:
        total += to_decimal(v)
    return total


def format_money(value: Numeric) -> str:
    """
    Format value as money string.

    Examples:
        >>> format_money(1234567.89)
        '$1,234,567.89'
    """
    m = money(value)
    return f"${m:,.2f}"


def format_percentage(value: Numeric, decimal_places: int = 2) -> str:
    """
    Format value as percentage string.

    Examples:
        >>> format_percentage(0.2245)
        '22.45%'
    """
    pct = to_decimal(value) * HUNDRED
    return f"{pct:.{decimal_places}f}%"
