"""Turn engine output into values the dashboard can show."""

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from health import is_in_range, is_valid_range, round_half_up
from models import Range, Record, parse_date

UNDISPLAYABLE = "—"

IN_RANGE_COLOR = "#3f8600"
OUT_OF_RANGE_COLOR = "#cf1322"


def displayable(value):
    """Return value, or None if it is missing or not a finite number."""
    if value is None:
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def json_safe(obj):
    """Replace inf/nan anywhere in a JSON-bound structure with None."""
    if isinstance(obj, dict):
        return {key: json_safe(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [json_safe(value) for value in obj]
    return displayable(obj)


def format_value(value, decimal_places: int = 0) -> str:
    """Format a number for display; inf/nan/None become a dash."""
    value = displayable(value)
    if value is None:
        return UNDISPLAYABLE
    if decimal_places > 0:
        return f"{round_half_up(value, decimal_places):.{decimal_places}f}"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_range(value_range: Range | None, unit: str | None = None) -> str:
    if value_range is None:
        return ""
    text = f"{format_value(value_range[0])} - {format_value(value_range[1])}"
    return f"{text} {unit}" if unit else text


def format_date(date_str: str) -> str:
    """Long date label, e.g. "January 15, 2024"."""
    when = parse_date(date_str)
    return f"{when:%B} {when.day}, {when.year}"


def tab_label(record: Record) -> str:
    return f"{format_date(record.date)} ({format_value(record.score)} pts)"


def range_verdict(value, in_range: bool | None) -> bool | None:
    """The in-range verdict, or None when the value itself cannot be shown."""
    if displayable(value) is None:
        return None
    return in_range


def in_range_color(in_range: bool | None) -> str | None:
    if in_range is None:
        return None
    return IN_RANGE_COLOR if in_range else OUT_OF_RANGE_COLOR


@dataclass(frozen=True)
class RangeBar:
    """Horizontal range bar, positions in percent of the track width."""
    value_position: float
    range_start: float
    range_end: float
    in_range: bool


def range_bar(value: float, value_range: Range | None) -> RangeBar | None:
    """Lay out a value against its range on a track padded by 10% of the span.

    The track stretches to include an out-of-range value. The value marker is
    clamped to the track.
    """
    if not is_valid_range(value_range) or displayable(value) is None:
        return None
    low, high = value_range[0], value_range[1]
    inside = is_in_range(value, value_range)
    padding = (high - low) * 0.1

    track_min = low - padding
    track_max = high + padding
    if not inside:
        if value < low:
            track_min = value - padding
        else:
            track_max = value + padding

    if track_max == track_min:
        return RangeBar(value_position=50, range_start=50, range_end=50, in_range=inside)

    def position(x: float) -> float:
        return (x - track_min) / (track_max - track_min) * 100

    return RangeBar(
        value_position=max(0.0, min(100.0, position(value))),
        range_start=position(low),
        range_end=position(high),
        in_range=inside,
    )


def axis_bounds(values: Iterable[float], value_range: Sequence[float] | None = None) -> tuple[int, int] | None:
    """Y-axis bounds covering the data and the range, rounded out to multiples of 5."""
    finite = [v for v in values if displayable(v) is not None]
    if not finite:
        return None
    low = min(finite)
    high = max(finite)
    if value_range is not None and is_valid_range(value_range):
        low = min(low, value_range[0])
        high = max(high, value_range[1])
    padding = abs(low) * 0.05
    return (
        math.floor((low - padding) / 5) * 5,
        math.ceil((high + padding) / 5) * 5,
    )
