"""Amount conversion utilities."""

from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def to_amount(value: float | int | Decimal) -> Decimal:
    """Convert a spreadsheet number into a Decimal amount.

    Floats go through their shortest repr so 0.1 stays 0.1 rather than
    picking up binary noise.

    Args:
        value: Numeric cell value

    Returns:
        Decimal amount
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float) and value.is_integer():
        return Decimal(int(value))
    return Decimal(str(value))


def round_amount(amount: Decimal) -> Decimal:
    """Round an amount to cents, halves away from zero."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)
