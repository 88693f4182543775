"""Money conversion utilities.

Amounts cross the boundary of the core as 2-place Decimals; the allocation
arithmetic inside the core is done on integer cents.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
CENTS_PER_UNIT = 100


def to_money(value) -> Decimal:
    """Convert a legacy amount to a 2-place Decimal.

    Floats are read through their shortest repr, so 0.1 becomes 0.10 rather
    than the binary expansion of 0.1.

    Args:
        value: Decimal, int, str or float amount

    Returns:
        Decimal quantized to cents

    Raises:
        ValueError: If value is None or cannot be read as a number
    """
    if value is None:
        raise ValueError("Amount is required")
    if isinstance(value, bool):
        raise ValueError(f"Not an amount: {value!r}")
    if isinstance(value, float):
        value = repr(value)
    try:
        return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Could not convert amount {value!r}: {e}")


def to_cents(amount) -> int:
    """Convert a monetary amount to an integer number of cents (round to nearest)."""
    scaled = to_money(amount) * CENTS_PER_UNIT
    return int(scaled.to_integral_value(rounding=ROUND_HALF_UP))


def from_cents(cents: int) -> Decimal:
    """Convert an integer number of cents to a 2-place Decimal."""
    return (Decimal(cents) / CENTS_PER_UNIT).quantize(CENT)


def format_amount(amount: Decimal) -> str:
    """Format an amount the way statement data files show it ("-12.30")."""
    return f"{to_money(amount):.2f}"
