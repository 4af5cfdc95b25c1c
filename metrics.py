"""Catalogue of tracked metrics: how to read, label and range-check each one."""

from dataclasses import dataclass
from typing import Callable

from health import bmi, body_fat_percentage, scale_range, skeletal_muscle_range
from models import Profile, Range, Record


@dataclass(frozen=True)
class Metric:
    """A tracked body-composition metric."""
    key: str
    title: str
    extract: Callable[[Record, Profile], float]
    unit_field: str | None = None  # record attribute holding the unit
    unit: str | None = None  # used when the record carries no unit
    range_key: str | None = None  # key into Profile.ranges
    dynamic_range: Callable[[Record], Range] | None = None
    scale: float = 1
    decimal_places: int = 0

    def value(self, record: Record, profile: Profile) -> float:
        return self.extract(record, profile) * self.scale

    def unit_of(self, record: Record | None) -> str | None:
        if self.unit_field and record is not None:
            return getattr(record, self.unit_field)
        return self.unit

    def reference_range(self, profile: Profile) -> Range | None:
        """Static range from the profile, scaled like the value."""
        if self.range_key is None:
            return None
        return scale_range(profile.range_for(self.range_key), self.scale)

    def record_range(self, record: Record, profile: Profile) -> Range | None:
        """Range that applies to one record (weight-dependent ranges included)."""
        if self.dynamic_range is not None:
            return self.dynamic_range(record)
        return self.reference_range(profile)


def _measured(key: str, title: str, range_key: str | None = None, **kwargs) -> Metric:
    return Metric(
        key=key,
        title=title,
        extract=lambda record, profile: getattr(record, key),
        unit_field=f"{key}_unit",
        range_key=range_key,
        **kwargs,
    )


METRICS = {
    metric.key: metric
    for metric in (
        _measured("weight", "Weight", "weight"),
        _measured("lean_body_mass", "Lean Body Mass", "lean_body_mass"),
        _measured("body_fat", "Body Fat", "body_fat"),
        Metric(
            key="body_fat_percentage",
            title="Body Fat %",
            extract=lambda record, profile: body_fat_percentage(record.body_fat, record.weight),
            unit="%",
            range_key="body_fat_percentage",
            decimal_places=2,
        ),
        _measured("muscle_mass", "Muscle Mass", "muscle_mass"),
        Metric(
            key="bmi",
            title="BMI",
            extract=lambda record, profile: bmi(record.weight, profile.height_cm),
            range_key="bmi",
            decimal_places=2,
        ),
        _measured(
            "skeletal_muscle",
            "Skeletal Muscle",
            dynamic_range=lambda record: skeletal_muscle_range(record.weight),
        ),
        _measured("protein", "Protein", "protein"),
        _measured("inorganic_salt", "Inorganic Salt", "inorganic_salt"),
        _measured("total_water", "Total Body Water", "total_water"),
        Metric(
            key="extracellular_water_percentage",
            title="Extracellular Water Ratio",
            extract=lambda record, profile: record.extracellular_water_percentage,
            unit="%",
            range_key="extracellular_water_percentage",
            scale=100,  # stored as a fraction
            decimal_places=1,
        ),
    )
}

# Chart order
SERIES_ORDER = (
    "weight",
    "lean_body_mass",
    "body_fat",
    "body_fat_percentage",
    "muscle_mass",
    "bmi",
    "skeletal_muscle",
    "protein",
    "inorganic_salt",
    "total_water",
    "extracellular_water_percentage",
)

# Record detail order
RECORD_ORDER = (
    "weight",
    "body_fat",
    "body_fat_percentage",
    "bmi",
    "muscle_mass",
    "lean_body_mass",
    "total_water",
    "protein",
    "inorganic_salt",
    "extracellular_water_percentage",
    "skeletal_muscle",
)

REGION_TITLES = {
    "left_upper_arm": "Left Upper Arm",
    "right_upper_arm": "Right Upper Arm",
    "trunk": "Trunk",
    "left_lower_limb": "Left Lower Limb",
    "right_lower_limb": "Right Lower Limb",
}
