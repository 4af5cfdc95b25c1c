"""Flask dashboard for body scan records."""

import logging
from dataclasses import asdict

from flask import Flask, jsonify, render_template

import display
import store
from config import (
    APP_TITLE,
    BASE_DIR,
    DASHBOARD_HOST,
    DASHBOARD_PORT,
    PROFILE_PATH,
    RECORDS_PATH,
)
from models import sort_records
from projector import find_previous_record, project_record, project_records
from series import build_main_series, build_muscle_balance_series

log = logging.getLogger(__name__)

app = Flask(__name__, template_folder=BASE_DIR / "templates")
app.config.update(PROFILE_PATH=PROFILE_PATH, RECORDS_PATH=RECORDS_PATH)

app.add_template_filter(display.format_value, "value")
app.add_template_filter(display.format_range, "range_text")
app.add_template_filter(display.format_date, "long_date")
app.add_template_global(display.in_range_color, "in_range_color")
app.add_template_global(display.range_verdict, "range_verdict")
app.add_template_global(display.range_bar, "range_bar")
app.add_template_global(display.tab_label, "tab_label")


def get_dataset() -> store.Dataset:
    return store.load_dataset(app.config["PROFILE_PATH"], app.config["RECORDS_PATH"])


def series_payload(series) -> dict:
    payload = series.to_dict()
    payload["axis"] = display.axis_bounds(series.values, series.range)
    return payload


@app.route("/")
def index():
    """Render the overview: profile card and one tab per record."""
    dataset = get_dataset()
    records = sort_records(dataset.records, newest_first=True)
    views = project_records(dataset.records, dataset.profile)

    return render_template(
        "index.html",
        title=APP_TITLE,
        profile=dataset.profile,
        tabs=list(zip(records, views)),
    )


@app.route("/charts")
def charts():
    """Render the charts page (data is fetched from /api/chart-data)."""
    return render_template("charts.html", title=APP_TITLE)


@app.route("/api/profile")
def profile_data():
    """Return the profile as JSON."""
    return jsonify(display.json_safe(asdict(get_dataset().profile)))


@app.route("/api/records")
def list_records():
    """Return every record view, newest first."""
    dataset = get_dataset()
    views = project_records(dataset.records, dataset.profile)
    return jsonify(display.json_safe([view.to_dict() for view in views]))


@app.route("/api/records/<record_date>")
def get_record(record_date: str):
    """Return the view of one record."""
    dataset = get_dataset()
    record = dataset.get_record(record_date)
    if record is None:
        return jsonify({"error": "Record not found"}), 404

    previous = find_previous_record(record, dataset.records)
    view = project_record(record, dataset.profile, previous)
    return jsonify(display.json_safe(view.to_dict()))


@app.route("/api/chart-data")
def chart_data():
    """Return chart series as JSON, oldest point first."""
    dataset = get_dataset()
    records = sort_records(dataset.records)
    return jsonify(
        display.json_safe(
            {
                "main": [series_payload(s) for s in build_main_series(records, dataset.profile)],
                "muscle_balance": [series_payload(s) for s in build_muscle_balance_series(records)],
            }
        )
    )


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    get_dataset()  # Fail fast on bad data
    log.info("Serving dashboard on %s:%s", DASHBOARD_HOST, DASHBOARD_PORT)
    app.run(host=DASHBOARD_HOST, port=DASHBOARD_PORT, debug=False)
