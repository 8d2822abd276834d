"""Decimal money helpers.

Stakes and balances are Decimal dollars. American odds produce fractional
cents (25 @ -110 pays 22.7272...), so intermediate values keep full Decimal
precision and are only rounded to cents at the edges (API output, settlements).
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: object) -> Decimal:
    """Coerce int/str/float/Decimal to Decimal. Floats go through str() to avoid binary noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)  # type: ignore[arg-type]


def round_cents(amount: Decimal) -> Decimal:
    """Round to cents, half away from zero: 22.725 -> 22.73, -0.005 -> -0.01."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def money_display(amount: Decimal) -> str:
    """Dollar display string: Decimal('6500') -> '$6,500.00', Decimal('-12') -> '-$12.00'."""
    rounded = round_cents(amount)
    if rounded < 0:
        return f"-${-rounded:,.2f}"
    return f"${rounded:,.2f}"
