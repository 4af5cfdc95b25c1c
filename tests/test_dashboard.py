"""Tests for dashboard routes."""

import json

import pytest

import store
from conftest import profile_data, record_data
from dashboard import app


@pytest.fixture
def client(data_files):
    profile_path, records_path = data_files
    app.config.update(TESTING=True, PROFILE_PATH=profile_path, RECORDS_PATH=records_path)
    store.load_dataset.cache_clear()
    with app.test_client() as client:
        yield client
    store.load_dataset.cache_clear()


class TestPages:
    """Tests for the HTML pages."""

    def test_index_lists_records_newest_first(self, client):
        response = client.get("/")

        assert response.status_code == 200
        html = response.get_data(as_text=True)
        assert "Test Subject" in html
        assert html.index("February 10, 2024 (85 pts)") < html.index("January 15, 2024 (72 pts)")
        assert "Excellent" in html

    def test_undisplayable_value_has_no_verdict(self, client, tmp_path):
        records_path = tmp_path / "zero.json"
        records_path.write_text(json.dumps([record_data("2024-01-15", weight=0)]))
        app.config.update(RECORDS_PATH=records_path)

        html = client.get("/").get_data(as_text=True)

        start = html.index(">Body Fat %<")
        card = html[start:html.index('<div class="metric">', start)]
        assert "—" in card
        assert "Normal range" in card
        assert "Abnormal" not in card
        assert "#cf1322" not in card

    def test_charts_page(self, client):
        response = client.get("/charts")

        assert response.status_code == 200
        assert "/api/chart-data" in response.get_data(as_text=True)


class TestApi:
    """Tests for the JSON endpoints."""

    def test_profile(self, client):
        data = client.get("/api/profile").get_json()

        assert data["name"] == "Test Subject"
        assert data["ranges"]["bmi"] == [18.5, 24]

    def test_records(self, client):
        data = client.get("/api/records").get_json()

        assert [r["date"] for r in data] == ["2024-02-10", "2024-01-15"]
        latest_weight = data[0]["metrics"][0]
        assert latest_weight["comparison"]["display_text"] == "-0.80kg"
        assert data[1]["metrics"][0]["comparison"] is None

    def test_single_record(self, client):
        data = client.get("/api/records/2024-02-10").get_json()

        assert data["band"] == "excellent"
        assert data["band_color"] == "#52c41a"
        weight = data["metrics"][0]
        assert weight["in_range"] is True
        assert weight["comparison"]["direction"] == "decrease"

    def test_unknown_record(self, client):
        response = client.get("/api/records/1999-01-01")

        assert response.status_code == 404
        assert response.get_json() == {"error": "Record not found"}

    def test_chart_data(self, client):
        data = client.get("/api/chart-data").get_json()

        assert len(data["main"]) == 11
        assert len(data["muscle_balance"]) == 10
        weight = data["main"][0]
        assert weight["points"] == [["2024-01-15", 70.0], ["2024-02-10", 69.2]]
        assert weight["axis"] == [50, 80]

    def test_non_finite_values_become_null(self, client, tmp_path):
        records_path = tmp_path / "zero.json"
        records_path.write_text(json.dumps([record_data("2024-01-15", weight=0)]))
        profile_path = tmp_path / "profile_copy.json"
        profile_path.write_text(json.dumps(profile_data()))
        app.config.update(PROFILE_PATH=profile_path, RECORDS_PATH=records_path)

        response = client.get("/api/chart-data")

        assert response.status_code == 200
        body_fat_pct = response.get_json()["main"][3]
        assert body_fat_pct["key"] == "body_fat_percentage"
        assert body_fat_pct["points"] == [["2024-01-15", None]]
