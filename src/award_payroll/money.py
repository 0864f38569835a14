"""Fixed-precision money helpers.

All monetary values are ``Decimal`` rounded half-up to the cent. Floats are
converted through ``str`` so binary representation error never enters a
calculation.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, Union

from award_payroll.exceptions import ValidationError

CENT = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")

Numeric = Union[Decimal, int, float, str]


def to_decimal(value: Numeric, field: str = "value") -> Decimal:
    """Coerce a number to Decimal, rejecting NaN and infinity."""
    if isinstance(value, bool):
        raise ValidationError(field, value, "booleans are not numbers")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(field, value, "not a number")
    if not result.is_finite():
        raise ValidationError(field, value, "must be finite")
    return result


def require_non_negative(value: Numeric, field: str = "value") -> Decimal:
    """Return ``value`` as Decimal, or raise if it is negative or not finite."""
    result = to_decimal(value, field)
    if result < 0:
        raise ValidationError(field, value, "must not be negative")
    return result


def round_money(amount: Decimal) -> Decimal:
    """Round to the cent, half-up."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def to_money(value: Numeric, field: str = "amount") -> Decimal:
    return round_money(to_decimal(value, field))


def money_mul(amount: Decimal, factor: Decimal) -> Decimal:
    """Multiply and round once, at the end."""
    return round_money(amount * factor)


def sum_money(amounts: Iterable[Decimal]) -> Decimal:
    """Sum amounts that are each rounded before being added."""
    total = ZERO
    for amount in amounts:
        total += round_money(amount)
    return round_money(total)


def to_cents(amount: Decimal) -> int:
    """Convert a money amount to integer minor units."""
    return int(round_money(amount) * HUNDRED)


def from_cents(cents: int) -> Decimal:
    return round_money(Decimal(cents) / HUNDRED)
