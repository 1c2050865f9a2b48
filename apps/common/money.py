"""
Decimal helpers for currency math.

Amounts are carried as exact Decimals through a calculation and rounded
once, at the final total, to two places half-up.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal('0.01')
ZERO = Decimal('0')
MINOR_UNITS_PER_MAJOR = 100


def to_decimal(value) -> Decimal:
    """Coerce int/float/str/Decimal into a Decimal without binary drift."""
    if isinstance(value, Decimal):
        return value
    if value is None:
        return ZERO
    if isinstance(value, bool):
        raise ValueError("Boolean is not a monetary amount")
    try:
        # str() keeps 0.1 as Decimal('0.1') instead of its float expansion
        result = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValueError(f"Invalid monetary amount: {value!r}")
    if not result.is_finite():
        raise ValueError(f"Invalid monetary amount: {value!r}")
    return result


def quantize_money(value) -> Decimal:
    """Round to cents, half-up."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_minor_units(amount) -> int:
    """Convert a major-unit amount (e.g. rupees) to minor units (paise)."""
    minor = to_decimal(amount) * MINOR_UNITS_PER_MAJOR
    return int(minor.quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def from_minor_units(amount: int) -> Decimal:
    return (Decimal(amount) / MINOR_UNITS_PER_MAJOR).quantize(CENT)


def clamp_non_negative(value) -> Decimal:
    value = to_decimal(value)
    return value if value > ZERO else ZERO
