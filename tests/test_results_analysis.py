import json
from datetime import datetime

import pytest

from eco_optimizer.results_analysis import (
    carbon_reduction,
    export_csv,
    export_json,
    export_summary,
    export_text,
    format_hour,
    schedule_frame,
)
from eco_optimizer.storage import ResultStore
from eco_scheduler.models import OptimizationResult, OptimizationSummary


@pytest.fixture
def summary():
    schedules = [
        OptimizationResult("EV Charger", 18, 12, 1.5, 45, "Schedule for midday period ", 30.0),
        OptimizationResult("Dishwasher", 20, 14, 0.25, 4, "Optimize timing ", 2.7),
    ]
    return OptimizationSummary(
        total_savings=1.75,
        total_eco_points=49,
        total_energy_shifted=32.7,
        carbon_reduction=carbon_reduction(32.7),
        schedules=schedules,
    )


def test_carbon_reduction():
    assert carbon_reduction(10.0) == 4.0
    assert carbon_reduction(0) == 0


@pytest.mark.parametrize("hour, label", [
    (0, "12:00 AM"), (7, "7:00 AM"), (12, "12:00 PM"), (19, "7:00 PM"), (23, "11:00 PM"),
])
def test_format_hour(hour, label):
    assert format_hour(hour) == label


def test_schedule_frame(summary):
    df = schedule_frame(summary)
    assert list(df["appliance"]) == ["EV Charger", "Dishwasher"]
    assert list(df["recommended_time"]) == [12, 14]
    assert df["feasible"].all()


def test_export_csv(summary):
    lines = export_csv(summary).splitlines()
    assert lines[0] == "Appliance,Original Time,Recommended Time,Savings ($),EcoPoints"
    assert lines[1] == "EV Charger,6:00 PM,12:00 PM,1.50,45"
    assert len(lines) == 3


def test_export_text(summary):
    text = export_text(summary, date=datetime(2025, 7, 1))
    assert text.startswith("EcoShift Plan - 2025-07-01")
    assert "Total Savings: $1.75" in text
    assert "- EV Charger: 6:00 PM -> 12:00 PM (+$1.50, +45 pts)" in text


def test_export_json(summary):
    data = json.loads(export_json(summary, date=datetime(2025, 7, 1)))
    assert data["exportDate"] == "2025-07-01T00:00:00"
    assert data["totalEcoPoints"] == 49
    assert data["schedules"][0]["recommendedTime"] == 12
    assert data["schedules"][1]["energyUsed"] == 2.7


def test_export_summary_dispatch(summary):
    assert export_summary(summary, "csv") == export_csv(summary)
    assert json.loads(export_summary(summary, "json"))["totalSavings"] == 1.75
    assert export_summary(summary, "text").startswith("EcoShift Plan")
    with pytest.raises(ValueError):
        export_summary(summary, "xml")


def test_result_store(summary):
    store = ResultStore()
    result_id = store.store(summary)

    assert store.get(result_id) is summary
    assert store.get("unknown") is None
    assert store.store(summary, result_id="abc") == "abc"
    assert len(store) == 2
