"""Money helpers: exact decimal sums and reporting-boundary rounding.

All monetary accumulation stays in full Decimal precision; values are
quantized only when placed into a report (banker's rounding).
"""

from decimal import Decimal, ROUND_HALF_EVEN
from typing import Iterable

ZERO = Decimal("0")
CENT = Decimal("0.01")


def round_money(value: Decimal, places: int = 2) -> Decimal:
    """Round a Decimal half-to-even to the given number of places.

    Example:
        >>> round_money(Decimal("2.675"))
        Decimal('2.68')
        >>> round_money(Decimal("0.125"))
        Decimal('0.12')
    """
    exponent = CENT if places == 2 else Decimal(1).scaleb(-places)
    return value.quantize(exponent, rounding=ROUND_HALF_EVEN)


def round_optional(value: Decimal | None, places: int = 2) -> Decimal | None:
    """round_money that passes None through."""
    if value is None:
        return None
    return round_money(value, places)


def decimal_sum(values: Iterable[Decimal]) -> Decimal:
    """Exact sum of Decimals, ZERO for an empty iterable."""
    return sum(values, ZERO)


def to_decimal(value) -> Decimal | None:
    """Convert a stored value to Decimal.

    Floats go through str() so 62.3 becomes Decimal("62.3") rather
    than its binary expansion. None and empty strings map to None.
    """
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        return Decimal(value)
    return Decimal(str(value))


def safe_ratio(numerator: Decimal, denominator: Decimal) -> float | None:
    """numerator / denominator as float, None when denominator is zero."""
    if denominator == 0:
        return None
    return float(numerator / denominator)
