"""Period-over-period comparison of a single metric."""

import math
from dataclasses import dataclass
from enum import Enum

from health import round_half_up

# Differences below this are floating-point noise from stored decimals
MIN_CHANGE = 0.001

# Below this magnitude the delta is shown with three decimals
FINE_DELTA = 0.01


class Direction(Enum):
    """Direction of change, with the tone it is rendered in."""

    INCREASE = "increase"
    DECREASE = "decrease"

    @property
    def color(self) -> str:
        # Every increase is an alert and every decrease an improvement,
        # regardless of metric.
        return "#cf1322" if self is Direction.INCREASE else "#3f8600"


@dataclass(frozen=True)
class Comparison:
    """Change of a metric since the previous record."""
    delta: float
    direction: Direction
    display_text: str

    @property
    def color(self) -> str:
        return self.direction.color

    def to_dict(self) -> dict:
        return {
            "delta": self.delta,
            "direction": self.direction.value,
            "display_text": self.display_text,
            "color": self.color,
        }


def format_delta(delta: float, unit: str | None = None) -> str:
    """Format a signed delta: "+1.20kg", "-0.005%"."""
    places = 3 if abs(delta) < FINE_DELTA else 2
    sign = "+" if delta > 0 else ""
    return f"{sign}{round_half_up(delta, places):.{places}f}{unit or ''}"


def compare(current: float, previous: float | None, unit: str | None = None) -> Comparison | None:
    """Compare a value with the same metric on the previous record.

    Returns None when there is no previous value, when the change is below
    MIN_CHANGE, or when the difference cannot be displayed (inf/nan).
    """
    if previous is None:
        return None

    delta = current - previous
    if not math.isfinite(delta) or abs(delta) < MIN_CHANGE:
        return None

    direction = Direction.INCREASE if delta > 0 else Direction.DECREASE
    return Comparison(
        delta=delta,
        direction=direction,
        display_text=format_delta(delta, unit),
    )
