from typing import NamedTuple, Optional

from eco_scheduler.models import Band, EcoBand

GENERIC_REASONING = "Optimized timing for better energy efficiency and cost savings."

PERIODS = [
    # first hour, last hour, category
    (2, 5, "overnight"),
    (8, 11, "solar"),
    (12, 14, "midday"),
]

PERIOD_TEXT = {
    "overnight": "Shift to overnight green hours ",
    "solar": "Run during solar surplus hours ",
    "midday": "Schedule for midday period ",
    "generic": "Optimize timing ",
}

BENEFIT_TEXT = {
    "green": "to take advantage of renewable energy and low prices. ",
    "peak_avoided": "to avoid peak pricing and grid stress. ",
    None: "",
}

CLOSINGS = [
    ("ev", "Your EV will be fully charged by morning while supporting clean energy."),
    ("dishwasher", "Perfect timing for clean dishes with clean power."),
    ("dryer", "Your clothes will be ready while supporting the grid."),
]
GENERIC_CLOSING = "Great timing for eco-friendly operation."


class ReasoningCategories(NamedTuple):
    period: str
    benefit: Optional[str]
    closing: str


def period_category(hour):
    for first, last, category in PERIODS:
        if first <= hour <= last:
            return category
    return "generic"


def benefit_category(original_band: Band, best_band: Band):
    if best_band is Band.GREEN:
        return "green"
    if original_band is Band.RED and best_band is not Band.RED:
        return "peak_avoided"
    return None


def closing_category(appliance_name: str):
    name = appliance_name.lower()
    for keyword, _ in CLOSINGS:
        if keyword in name:
            return keyword
    return "generic"


def reasoning_categories(appliance_name, original_band: EcoBand, best_band: EcoBand, best_time) -> ReasoningCategories:
    return ReasoningCategories(
        period=period_category(best_time),
        benefit=benefit_category(original_band.band, best_band.band),
        closing=closing_category(appliance_name),
    )


def generate_reasoning(appliance_name, original_band: Optional[EcoBand], best_band: Optional[EcoBand], best_time) -> str:
    """Explain a recommendation in one or two sentences.

    Falls back to a generic sentence when either band is unknown.
    """
    if original_band is None or best_band is None:
        return GENERIC_REASONING

    categories = reasoning_categories(appliance_name, original_band, best_band, best_time)
    closing = dict(CLOSINGS).get(categories.closing, GENERIC_CLOSING)
    return PERIOD_TEXT[categories.period] + BENEFIT_TEXT[categories.benefit] + closing
