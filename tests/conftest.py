"""Shared builders for profiles and scan records."""

import copy
import json

import pytest

from models import Profile, Record

PROFILE_DATA = {
    "schema_version": 1,
    "name": "Test Subject",
    "birthday": "1990-05-12",
    "gender": "male",
    "height_cm": 175,
    "ranges": {
        "weight": [56.7, 76.7],
        "body_fat": [7.3, 14.6],
        "body_fat_percentage": [10, 20],
        "bmi": [18.5, 24],
        "muscle_mass": [49.1, 60],
        "lean_body_mass": [52.5, 64.2],
        "total_water": [38.5, 47.1],
        "protein": [10.4, 12.7],
        "inorganic_salt": [3.63, 4.44],
        "extracellular_water_percentage": [0.36, 0.39],
    },
}

RECORD_DATA = {
    "date": "2024-01-15",
    "score": 72,
    "weight": 70.0,
    "weight_unit": "kg",
    "body_fat": 14.0,
    "body_fat_unit": "kg",
    "muscle_mass": 52.0,
    "muscle_mass_unit": "kg",
    "lean_body_mass": 56.0,
    "lean_body_mass_unit": "kg",
    "total_water": 41.0,
    "total_water_unit": "kg",
    "protein": 11.0,
    "protein_unit": "kg",
    "inorganic_salt": 3.9,
    "inorganic_salt_unit": "kg",
    "skeletal_muscle": 31.0,
    "skeletal_muscle_unit": "kg",
    "extracellular_water_percentage": 0.38,
    "muscle_balance": {
        "left_upper_arm": {"weight": 3.0, "weight_unit": "kg", "weight_percentage": 100.0},
        "right_upper_arm": {"weight": 3.1, "weight_unit": "kg", "weight_percentage": 102.0},
        "trunk": {"weight": 25.0, "weight_unit": "kg", "weight_percentage": 101.0},
        "left_lower_limb": {"weight": 9.0, "weight_unit": "kg", "weight_percentage": 98.0},
        "right_lower_limb": {"weight": 9.1, "weight_unit": "kg", "weight_percentage": 99.0},
    },
}


def profile_data(**overrides) -> dict:
    data = copy.deepcopy(PROFILE_DATA)
    data.update(overrides)
    return data


def record_data(date: str = "2024-01-15", balance: dict | None = None, **overrides) -> dict:
    """Raw record dict; `balance` maps region -> field overrides."""
    data = copy.deepcopy(RECORD_DATA)
    data["date"] = date
    data.update(overrides)
    for region, fields in (balance or {}).items():
        data["muscle_balance"][region].update(fields)
    return data


def make_record(date: str = "2024-01-15", **overrides) -> Record:
    return Record.from_dict(record_data(date, **overrides))


@pytest.fixture
def profile() -> Profile:
    return Profile.from_dict(profile_data())


@pytest.fixture
def records() -> list[Record]:
    """Three scans, deliberately out of date order."""
    return [
        make_record("2024-03-01", score=81, weight=68.5, body_fat=12.5, balance={"trunk": {"weight": 25.4}}),
        make_record("2024-01-15", score=72),
        make_record("2024-02-10", score=58, weight=69.2, body_fat=13.1),
    ]


@pytest.fixture
def data_files(tmp_path):
    """Write profile/records JSON files and return their paths."""
    profile_path = tmp_path / "profile.json"
    records_path = tmp_path / "records.json"
    profile_path.write_text(json.dumps(profile_data()))
    records_path.write_text(
        json.dumps(
            {
                "schema_version": 1,
                "records": [
                    record_data("2024-01-15"),
                    record_data("2024-02-10", weight=69.2, body_fat=13.1, score=85),
                ],
            }
        )
    )
    return profile_path, records_path
