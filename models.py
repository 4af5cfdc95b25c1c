"""Profile and scan record types, validated when loaded."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

SCHEMA_VERSION = 1

Range = tuple[float, float]

RANGE_KEYS = (
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
)

# Measured quantities stored with a unit alongside (<name>, <name>_unit)
MEASURED_FIELDS = (
    "weight",
    "body_fat",
    "muscle_mass",
    "lean_body_mass",
    "total_water",
    "protein",
    "inorganic_salt",
    "skeletal_muscle",
)

REGIONS = (
    "left_upper_arm",
    "right_upper_arm",
    "trunk",
    "left_lower_limb",
    "right_lower_limb",
)


class DataError(ValueError):
    """Raised when profile or record data does not match the schema."""


def _number(data: dict, key: str, where: str) -> float:
    value = data.get(key)
    # bool is an int subclass; a JSON true/false is never a measurement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DataError(f"{where}: '{key}' must be a number, got {value!r}")
    return float(value)


def _string(data: dict, key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise DataError(f"{where}: '{key}' must be a non-empty string, got {value!r}")
    return value


def _range(raw, key: str, where: str) -> Range | None:
    if raw is None:
        return None
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise DataError(f"{where}: range '{key}' must be [low, high], got {raw!r}")
    bounds = {"low": raw[0], "high": raw[1]}
    low = _number(bounds, "low", f"{where} range '{key}'")
    high = _number(bounds, "high", f"{where} range '{key}'")
    if low > high:
        raise DataError(f"{where}: range '{key}' has low {low} > high {high}")
    return (low, high)


def check_schema_version(data: dict, where: str) -> None:
    """Reject files written for a schema this code does not understand."""
    version = data.get("schema_version", SCHEMA_VERSION)
    if version != SCHEMA_VERSION:
        raise DataError(
            f"{where}: unsupported schema_version {version!r} (expected {SCHEMA_VERSION})"
        )


@dataclass(frozen=True)
class Profile:
    """Static subject profile with per-metric reference ranges."""
    name: str
    birthday: str
    gender: str
    height_cm: float
    ranges: dict[str, Range] = field(default_factory=dict)

    def range_for(self, key: str) -> Range | None:
        return self.ranges.get(key)

    @classmethod
    def from_dict(cls, data: dict) -> "Profile":
        """Build a Profile from decoded JSON.

        Unknown range keys are rejected so that a typo does not silently
        drop a normative check.
        """
        if not isinstance(data, dict):
            raise DataError(f"profile: expected an object, got {type(data).__name__}")
        check_schema_version(data, "profile")

        raw_ranges = data.get("ranges") or {}
        if not isinstance(raw_ranges, dict):
            raise DataError("profile: 'ranges' must be an object")
        unknown = set(raw_ranges) - set(RANGE_KEYS)
        if unknown:
            raise DataError(f"profile: unknown range keys {sorted(unknown)}")

        ranges = {}
        for key in RANGE_KEYS:
            parsed = _range(raw_ranges.get(key), key, "profile")
            if parsed is not None:
                ranges[key] = parsed

        return cls(
            name=_string(data, "name", "profile"),
            birthday=_string(data, "birthday", "profile"),
            gender=_string(data, "gender", "profile"),
            height_cm=_number(data, "height_cm", "profile"),
            ranges=ranges,
        )


@dataclass(frozen=True)
class RegionMeasurement:
    """Muscle weight of one body region and its percentage of the standard."""
    weight: float
    weight_unit: str
    weight_percentage: float


@dataclass(frozen=True)
class MuscleBalance:
    """Per-region muscle breakdown."""
    left_upper_arm: RegionMeasurement
    right_upper_arm: RegionMeasurement
    trunk: RegionMeasurement
    left_lower_limb: RegionMeasurement
    right_lower_limb: RegionMeasurement

    def region(self, name: str) -> RegionMeasurement:
        return getattr(self, name)


@dataclass(frozen=True)
class Record:
    """One body scan."""
    date: str
    score: int | float
    weight: float
    weight_unit: str
    body_fat: float
    body_fat_unit: str
    muscle_mass: float
    muscle_mass_unit: str
    lean_body_mass: float
    lean_body_mass_unit: str
    total_water: float
    total_water_unit: str
    protein: float
    protein_unit: str
    inorganic_salt: float
    inorganic_salt_unit: str
    skeletal_muscle: float
    skeletal_muscle_unit: str
    extracellular_water_percentage: float  # fraction, 0.38 == 38%
    muscle_balance: MuscleBalance

    @property
    def timestamp(self) -> datetime:
        return parse_date(self.date)

    @classmethod
    def from_dict(cls, data: dict) -> "Record":
        """Build a Record from decoded JSON."""
        if not isinstance(data, dict):
            raise DataError(f"record: expected an object, got {type(data).__name__}")

        date_str = _string(data, "date", "record")
        where = f"record {date_str}"
        try:
            parse_date(date_str)
        except ValueError:
            raise DataError(f"{where}: 'date' is not an ISO-8601 date") from None

        # Score keeps its JSON type (an int in practice)
        _number(data, "score", where)
        score = data["score"]
        if not 0 <= score <= 100:
            raise DataError(f"{where}: 'score' must be within 0-100, got {score}")

        values = {}
        for name in MEASURED_FIELDS:
            values[name] = _number(data, name, where)
            values[f"{name}_unit"] = _string(data, f"{name}_unit", where)

        balance = data.get("muscle_balance")
        if not isinstance(balance, dict):
            raise DataError(f"{where}: 'muscle_balance' must be an object")
        regions = {}
        for name in REGIONS:
            region = balance.get(name)
            if not isinstance(region, dict):
                raise DataError(f"{where}: muscle_balance '{name}' is missing")
            region_where = f"{where} muscle_balance '{name}'"
            regions[name] = RegionMeasurement(
                weight=_number(region, "weight", region_where),
                weight_unit=_string(region, "weight_unit", region_where),
                weight_percentage=_number(region, "weight_percentage", region_where),
            )

        return cls(
            date=date_str,
            score=score,
            extracellular_water_percentage=_number(
                data, "extracellular_water_percentage", where
            ),
            muscle_balance=MuscleBalance(**regions),
            **values,
        )


def parse_date(value: str) -> datetime:
    """Parse an ISO-8601 date or datetime string.

    Plain dates are midnight. Values without an offset are taken as UTC so
    that naive and offset-carrying dates in one file still order and compare.
    """
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    when = datetime.fromisoformat(value)
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return when


def sort_records(records, newest_first: bool = False) -> list[Record]:
    """Sort records by date: oldest first for charts, newest first for the tabs."""
    return sorted(records, key=lambda r: r.timestamp, reverse=newest_first)
