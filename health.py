"""Range checks and derived body-composition formulas."""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from models import Range


def _divide(numerator: float, denominator: float) -> float:
    """Float division that yields inf/nan on a zero denominator instead of raising."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def is_valid_range(value_range: Sequence[float] | None) -> bool:
    """True if the range has two bounds with low <= high."""
    return (
        value_range is not None
        and len(value_range) >= 2
        and value_range[0] <= value_range[1]
    )


def is_in_range(value: float, value_range: Sequence[float] | None) -> bool:
    """Check whether value lies in the closed interval [low, high].

    A malformed range (fewer than two bounds, or low > high) gives no verdict
    and is reported as False.
    """
    if not is_valid_range(value_range):
        return False
    return value_range[0] <= value <= value_range[1]


def body_fat_percentage(body_fat_kg: float, weight_kg: float) -> float:
    """Body fat as a percentage of total weight."""
    return _divide(body_fat_kg, weight_kg) * 100


def bmi(weight_kg: float, height_cm: float) -> float:
    """Body mass index, kg/m^2."""
    height_m = height_cm / 100
    return _divide(weight_kg, height_m * height_m)


def round_half_up(value: float, places: int) -> float:
    """Round to `places` decimals with ties going away from zero.

    Works on the shortest decimal form of the float, so 34.125 becomes 34.13
    where the built-in `round` would give 34.12. Non-finite values pass through.
    """
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round2(value: float) -> float:
    return round_half_up(value, 2)


def skeletal_muscle_range(weight_kg: float) -> Range:
    """Normal skeletal muscle band: 40-50% of current body weight."""
    return (round2(weight_kg * 0.4), round2(weight_kg * 0.5))


def scale_range(value_range: Range | None, factor: float) -> Range | None:
    """Multiply both bounds, e.g. to show a stored fraction as a percentage."""
    if value_range is None:
        return None
    return (value_range[0] * factor, value_range[1] * factor)
