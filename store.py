"""Load the profile and scan records from JSON, once per process."""

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from config import PROFILE_PATH, RECORDS_PATH
from models import DataError, Profile, Record, check_schema_version

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dataset:
    """Read-only profile plus records, in file order."""
    profile: Profile
    records: tuple[Record, ...]

    def get_record(self, record_date: str) -> Record | None:
        for record in self.records:
            if record.date == record_date:
                return record
        return None


def read_json(path: Path):
    """Decode a JSON file, reporting syntax errors as DataError."""
    with open(path, encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise DataError(f"{path}: invalid JSON ({e})") from e


def load_profile(path: Path = PROFILE_PATH) -> Profile:
    """Load and validate the profile."""
    return Profile.from_dict(read_json(path))


def load_records(path: Path = RECORDS_PATH) -> tuple[Record, ...]:
    """Load and validate scan records.

    The file holds either a bare list of records or an object with
    `schema_version` and `records`. Dates must be unique.
    """
    data = read_json(path)
    if isinstance(data, dict):
        check_schema_version(data, "records")
        data = data.get("records")
    if not isinstance(data, list):
        raise DataError(f"{path}: expected a list of records")

    records = tuple(Record.from_dict(item) for item in data)

    seen = set()
    for record in records:
        # Compare parsed timestamps so "2024-01-15" and "2024-01-15T00:00" collide
        if record.timestamp in seen:
            raise DataError(f"{path}: duplicate record date {record.date}")
        seen.add(record.timestamp)

    return records


@lru_cache(maxsize=1)
def load_dataset(profile_path: Path = PROFILE_PATH, records_path: Path = RECORDS_PATH) -> Dataset:
    """Load the dataset, cached for the lifetime of the process."""
    try:
        dataset = Dataset(profile=load_profile(profile_path), records=load_records(records_path))
    except DataError as e:
        log.error("Rejected scan data: %s", e)
        raise
    log.info(
        "Loaded profile '%s' and %d records from %s",
        dataset.profile.name,
        len(dataset.records),
        records_path,
    )
    return dataset
