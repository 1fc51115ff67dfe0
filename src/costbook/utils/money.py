"""Money rounding, divisor guards and tie-break helpers shared by the engine."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Sequence

CENT = Decimal("0.01")
ZERO = Decimal("0")
ZERO_CENTS = Decimal("0.00")
ONE = Decimal("1")
GRAMS_PER_KG = Decimal("1000")
MIN_KILOGRAMS = Decimal("0.001")


def to_decimal(value: Optional[object]) -> Decimal:
    """Convert a number-like value to Decimal, treating None as zero.

    Floats go through ``str`` so that 0.1 stays 0.1 instead of its binary
    expansion.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round2(value: object) -> Decimal:
    """Round half-up to two decimal places."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def piece_divisor(total_pieces: Optional[int]) -> Decimal:
    """Return the per-piece divisor, floored at one piece."""
    return Decimal(max(1, int(total_pieces or 0)))


def weight_divisor_kg(recipe_weight_g: object, line_quantities_g: Sequence[object]) -> Decimal:
    """Return the per-kilogram divisor.

    Uses the declared recipe weight when positive, otherwise the sum of the
    line quantities. Floored at one gram.
    """
    weight_g = to_decimal(recipe_weight_g)
    if weight_g <= 0:
        weight_g = sum((to_decimal(q) for q in line_quantities_g), ZERO)
    return max(MIN_KILOGRAMS, weight_g / GRAMS_PER_KG)


def first_max_index(values: Sequence[Decimal]) -> int:
    """Index of the first maximal value."""
    best = 0
    for i, value in enumerate(values):
        if value > values[best]:
            best = i
    return best


def first_min_index(values: Sequence[Decimal]) -> int:
    """Index of the first minimal value."""
    worst = 0
    for i, value in enumerate(values):
        if value < values[worst]:
            worst = i
    return worst


def all_equal(values: Sequence[Decimal]) -> bool:
    """True when every value compares equal (an empty sequence counts)."""
    return len(set(values)) <= 1
