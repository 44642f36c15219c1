import pytest

from eco_scheduler.models import Band, EcoBand
from eco_scheduler.reasoning import (
    GENERIC_REASONING,
    ReasoningCategories,
    generate_reasoning,
    reasoning_categories,
)


def make_band(hour, band):
    return EcoBand(hour=hour, band=band, price=30.0, credit=0.0, points=0.0)


@pytest.mark.parametrize("best_time, period", [
    (2, "overnight"), (5, "overnight"),
    (8, "solar"), (11, "solar"),
    (12, "midday"), (14, "midday"),
    (1, "generic"), (6, "generic"), (15, "generic"), (23, "generic"),
])
def test_period_category(best_time, period):
    categories = reasoning_categories("Pool Pump", make_band(18, Band.BLUE), make_band(best_time, Band.BLUE), best_time)
    assert categories.period == period


def test_benefit_categories():
    red, green, blue = make_band(18, Band.RED), make_band(3, Band.GREEN), make_band(12, Band.BLUE)

    assert reasoning_categories("x", red, green, 3).benefit == "green"
    assert reasoning_categories("x", blue, green, 3).benefit == "green"
    assert reasoning_categories("x", red, blue, 12).benefit == "peak_avoided"
    assert reasoning_categories("x", blue, blue, 12).benefit is None
    assert reasoning_categories("x", red, make_band(19, Band.RED), 19).benefit is None


@pytest.mark.parametrize("name, closing", [
    ("EV Charger", "ev"),
    ("Dishwasher", "dishwasher"),
    ("Clothes Dryer", "dryer"),
    ("Pool Pump", "generic"),
])
def test_closing_category(name, closing):
    blue = make_band(12, Band.BLUE)
    assert reasoning_categories(name, blue, blue, 12).closing == closing


def test_generate_reasoning_text():
    text = generate_reasoning("EV Charger", make_band(18, Band.RED), make_band(3, Band.GREEN), 3)
    assert text.startswith("Shift to overnight green hours")
    assert "renewable energy" in text
    assert text.endswith("Your EV will be fully charged by morning while supporting clean energy.")

    text = generate_reasoning("Dishwasher", make_band(20, Band.RED), make_band(13, Band.BLUE), 13)
    assert "avoid peak pricing" in text


def test_generate_reasoning_without_bands():
    assert generate_reasoning("EV Charger", None, make_band(3, Band.GREEN), 3) == GENERIC_REASONING


def test_categories_are_a_tuple():
    blue = make_band(0, Band.BLUE)
    assert reasoning_categories("TV", blue, blue, 0) == ReasoningCategories("generic", None, "generic")
