"""Project a single scan record into display-ready metrics."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from comparison import Comparison, compare
from health import is_in_range
from metrics import METRICS, RECORD_ORDER, REGION_TITLES
from models import REGIONS, Profile, Range, Record, sort_records

log = logging.getLogger(__name__)


class ScoreBand(Enum):
    """Composite score bucket."""

    EXCELLENT = "excellent"
    GOOD = "good"
    NEEDS_IMPROVEMENT = "needs_improvement"

    @property
    def label(self) -> str:
        return _BAND_LABELS[self]

    @property
    def color(self) -> str:
        return _BAND_COLORS[self]


_BAND_LABELS = {
    ScoreBand.EXCELLENT: "Excellent",
    ScoreBand.GOOD: "Good",
    ScoreBand.NEEDS_IMPROVEMENT: "Needs improvement",
}

_BAND_COLORS = {
    ScoreBand.EXCELLENT: "#52c41a",
    ScoreBand.GOOD: "#faad14",
    ScoreBand.NEEDS_IMPROVEMENT: "#ff4d4f",
}


def score_band(score: float) -> ScoreBand:
    if score >= 80:
        return ScoreBand.EXCELLENT
    if score >= 60:
        return ScoreBand.GOOD
    return ScoreBand.NEEDS_IMPROVEMENT


@dataclass(frozen=True)
class MetricView:
    """One metric of one record, with its verdict and change."""
    key: str
    title: str
    value: float
    unit: str | None
    range: Range | None
    in_range: bool | None  # None when no range applies
    comparison: Comparison | None
    decimal_places: int = 0

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "title": self.title,
            "value": self.value,
            "unit": self.unit,
            "range": list(self.range) if self.range else None,
            "in_range": self.in_range,
            "comparison": self.comparison.to_dict() if self.comparison else None,
            "decimal_places": self.decimal_places,
        }


@dataclass(frozen=True)
class RegionView:
    """Muscle balance of one body region."""
    key: str
    title: str
    weight: MetricView
    percentage: MetricView

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "title": self.title,
            "weight": self.weight.to_dict(),
            "percentage": self.percentage.to_dict(),
        }


@dataclass(frozen=True)
class RecordView:
    """Everything the detail view shows for one scan."""
    date: str
    score: float
    band: ScoreBand
    metrics: tuple[MetricView, ...]
    muscle_balance: tuple[RegionView, ...]

    @property
    def stars(self) -> float:
        """Score on a five-star scale."""
        return self.score / 20

    def metric(self, key: str) -> MetricView:
        for view in self.metrics:
            if view.key == key:
                return view
        raise KeyError(key)

    def region(self, key: str) -> RegionView:
        for view in self.muscle_balance:
            if view.key == key:
                return view
        raise KeyError(key)

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "score": self.score,
            "band": self.band.value,
            "band_label": self.band.label,
            "band_color": self.band.color,
            "stars": self.stars,
            "metrics": [m.to_dict() for m in self.metrics],
            "muscle_balance": [r.to_dict() for r in self.muscle_balance],
        }


def metric_view(
    key: str,
    title: str,
    value: float,
    unit: str | None,
    value_range: Range | None,
    previous_value: float | None,
    decimal_places: int = 0,
) -> MetricView:
    return MetricView(
        key=key,
        title=title,
        value=value,
        unit=unit,
        range=value_range,
        in_range=is_in_range(value, value_range) if value_range is not None else None,
        comparison=compare(value, previous_value, unit),
        decimal_places=decimal_places,
    )


def find_previous_record(record: Record, records: Sequence[Record]) -> Record | None:
    """Return the record one date-step before `record`, or None if it is the earliest."""
    newest_first = sort_records(records, newest_first=True)
    for index, candidate in enumerate(newest_first):
        if candidate.date == record.date:
            if index + 1 < len(newest_first):
                return newest_first[index + 1]
            return None
    return None


def project_record(
    record: Record, profile: Profile, previous: Record | None = None
) -> RecordView:
    """Build the detail view of one record, compared against `previous`."""
    metrics = []
    for key in RECORD_ORDER:
        metric = METRICS[key]
        unit = metric.unit_of(record)
        metrics.append(
            metric_view(
                key=metric.key,
                title=metric.title,
                value=metric.value(record, profile),
                unit=unit,
                value_range=metric.record_range(record, profile),
                previous_value=metric.value(previous, profile) if previous else None,
                decimal_places=metric.decimal_places,
            )
        )

    regions = []
    for region in REGIONS:
        current = record.muscle_balance.region(region)
        before = previous.muscle_balance.region(region) if previous else None
        title = REGION_TITLES[region]
        regions.append(
            RegionView(
                key=region,
                title=title,
                weight=metric_view(
                    key=f"{region}_weight",
                    title=title,
                    value=current.weight,
                    unit=current.weight_unit,
                    value_range=None,
                    previous_value=before.weight if before else None,
                ),
                percentage=metric_view(
                    key=f"{region}_percentage",
                    title=f"{title} (% of standard)",
                    value=current.weight_percentage,
                    unit="%",
                    value_range=None,
                    previous_value=before.weight_percentage if before else None,
                ),
            )
        )

    return RecordView(
        date=record.date,
        score=record.score,
        band=score_band(record.score),
        metrics=tuple(metrics),
        muscle_balance=tuple(regions),
    )


def project_records(records: Sequence[Record], profile: Profile) -> list[RecordView]:
    """Project every record, newest first, each against the one before it."""
    newest_first = sort_records(records, newest_first=True)
    views = []
    for index, record in enumerate(newest_first):
        previous = newest_first[index + 1] if index + 1 < len(newest_first) else None
        views.append(project_record(record, profile, previous))
    log.debug("Projected %d records", len(views))
    return views
