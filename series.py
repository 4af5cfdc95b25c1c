"""Reshape scan records into per-metric time series for charting."""

import logging
from dataclasses import dataclass
from typing import Sequence

from metrics import METRICS, REGION_TITLES, SERIES_ORDER
from models import REGIONS, Profile, Range, Record

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class NamedSeries:
    """One chart line: (date, value) points plus unit and reference range."""
    key: str
    title: str
    unit: str | None
    range: Range | None
    points: tuple[tuple[str, float], ...]
    decimal_places: int = 0
    reference_line: float | None = None

    @property
    def values(self) -> list[float]:
        return [value for _, value in self.points]

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "title": self.title,
            "unit": self.unit,
            "range": list(self.range) if self.range else None,
            "points": [[when, value] for when, value in self.points],
            "decimal_places": self.decimal_places,
            "reference_line": self.reference_line,
        }


def build_main_series(records: Sequence[Record], profile: Profile) -> list[NamedSeries]:
    """Series for the main metrics.

    Records must already be sorted oldest first; point order follows the
    input. Units come from the first record. Skeletal muscle has no range
    here since its band moves with body weight.
    """
    first = records[0] if records else None
    series = []
    for key in SERIES_ORDER:
        metric = METRICS[key]
        series.append(
            NamedSeries(
                key=metric.key,
                title=metric.title,
                unit=metric.unit_of(first),
                range=metric.reference_range(profile),
                points=tuple((r.date, metric.value(r, profile)) for r in records),
                decimal_places=metric.decimal_places,
            )
        )
    return series


def build_muscle_balance_series(records: Sequence[Record]) -> list[NamedSeries]:
    """Two series per body region: muscle weight and percent of standard."""
    series = []
    for region in REGIONS:
        title = REGION_TITLES[region]
        readings = [(r.date, r.muscle_balance.region(region)) for r in records]
        series.append(
            NamedSeries(
                key=f"{region}_weight",
                title=title,
                unit=readings[0][1].weight_unit if readings else None,
                range=None,
                points=tuple((when, m.weight) for when, m in readings),
            )
        )
        series.append(
            NamedSeries(
                key=f"{region}_percentage",
                title=f"{title} (% of standard)",
                unit="%",
                range=None,
                points=tuple((when, m.weight_percentage) for when, m in readings),
                reference_line=100,
            )
        )
    return series


def build_series(records: Sequence[Record], profile: Profile) -> list[NamedSeries]:
    """All chart series, main metrics first, then muscle balance."""
    series = build_main_series(records, profile) + build_muscle_balance_series(records)
    log.debug("Built %d series over %d records", len(series), len(records))
    return series
