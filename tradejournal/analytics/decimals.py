"""Decimal helpers shared by the analytics stages.

Money stays in ``Decimal`` end to end. Published figures are rounded
half-up: currency to 2 places, per-share and ratio figures to 4.
"""

from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Iterable

ZERO = Decimal("0")
HUNDRED = Decimal("100")

CURRENCY = Decimal("0.01")
RATIO = Decimal("0.0001")

# Precision used for intermediate quotients and square roots.
_CONTEXT = Context(prec=34)


def quantize(value: Decimal, exp: Decimal = CURRENCY) -> Decimal:
    """Round ``value`` half-up to the scale of ``exp``."""
    return value.quantize(exp, rounding=ROUND_HALF_UP)


def divide(numerator: Decimal, denominator: Decimal) -> Decimal:
    """Full-precision division; a zero denominator yields zero."""
    if denominator == 0:
        return ZERO
    return _CONTEXT.divide(Decimal(numerator), Decimal(denominator))


def safe_div(numerator: Decimal, denominator, exp: Decimal = CURRENCY) -> Decimal:
    """Divide and round, returning a zero of the right scale on a zero denominator."""
    if denominator == 0:
        return quantize(ZERO, exp)
    return quantize(divide(numerator, Decimal(denominator)), exp)


def sqrt(value: Decimal) -> Decimal:
    if value <= 0:
        return ZERO
    return Decimal(value).sqrt(_CONTEXT)


def total(values: Iterable[Decimal]) -> Decimal:
    """Exact sum that stays a ``Decimal`` for empty input."""
    return sum(values, ZERO)


def mean(values: list[Decimal]) -> Decimal:
    return divide(total(values), Decimal(len(values))) if values else ZERO


def population_std(values: list[Decimal]) -> Decimal:
    """Population standard deviation (divides by N)."""
    if not values:
        return ZERO
    mu = mean(values)
    variance = divide(total((v - mu) * (v - mu) for v in values), Decimal(len(values)))
    return sqrt(variance)
