import logging
import math

from eco_scheduler import config
from eco_scheduler.models import Appliance, Band, OptimizationResult, Preferences
from eco_scheduler.prepare_data import has_hour, lookup
from eco_scheduler.reasoning import generate_reasoning
from eco_scheduler.simulate_usage import integrate_cost

_LOGGER = logging.getLogger(__name__)


def slot_hours(start_hour, runtime_hours):
    """Hours of day touched by a run, wrapping past midnight."""
    return [(start_hour + i) % config.HOURS_PER_DAY for i in range(math.ceil(runtime_hours))]


def hour_score(band, preferences, band_scores=config.BAND_SCORES):
    """Weighted desirability of running during a single eco-band hour."""
    score = band_scores[band.band.value]

    if preferences.prioritize_savings:
        price_score = max(0, config.PRICE_SCORE_CEILING - band.price)
        score += price_score * config.PRICE_WEIGHT
        score += band.credit * config.CREDIT_WEIGHT

    if preferences.prioritize_eco_points:
        points_score = band.points * config.POINTS_SCALE
        score += points_score * config.POINTS_WEIGHT

    if preferences.avoid_peak_hours and band.band is Band.RED:
        score -= config.PEAK_PENALTY

    return score


def score_time_slot(bands, start_hour, runtime_hours, preferences=None):
    """
    Score starting an appliance at `start_hour` for `runtime_hours`.

    The score is the average of the per-hour weighted scores over every hour
    the run touches, so runs of different lengths are comparable.
    """
    if preferences is None:
        preferences = Preferences()

    hours = slot_hours(start_hour, runtime_hours)
    total = 0.0
    for hour in hours:
        total += hour_score(lookup(bands, hour), preferences)
    return total / len(hours)


def typical_start_time(appliance_name, start_times=config.TYPICAL_START_TIMES, default=config.DEFAULT_START_TIME):
    """Conventional start hour for an appliance, guessed from its name."""
    name = appliance_name.lower()
    for keywords, hour in start_times:
        if any(keyword in name for keyword in keywords):
            return hour
    return default


def search_window(original_time, flex_hours):
    """Candidate start hours around `original_time`, clamped to the day (no wrap)."""
    search_start = max(0, original_time - flex_hours)
    search_end = min(config.HOURS_PER_DAY - 1, original_time + flex_hours)
    return range(search_start, search_end + 1)


def find_optimal_time_slot(bands, runtime_hours, flex_hours, preferred_start, preferences=None):
    """
    Search the flex window for the best-scoring start hour.

    Only hours that let the run finish the same day are considered. On a tie
    the earlier hour wins.

    Returns
    -------
    tuple
        (best_hour, feasible). If no hour in the window is feasible, returns
        (preferred_start, False).
    """
    best_time = preferred_start
    best_score = -math.inf
    feasible = False

    for start_hour in search_window(preferred_start, flex_hours):
        if start_hour + runtime_hours > config.HOURS_PER_DAY:
            continue
        score = score_time_slot(bands, start_hour, runtime_hours, preferences)
        if score > best_score:
            best_score = score
            best_time = start_hour
            feasible = True

    return best_time, feasible


def optimize_appliance(appliance: Appliance, bands, preferences=None) -> OptimizationResult:
    """
    Find the best start hour for one appliance and work out what it gains.

    Parameters
    ----------
    appliance : Appliance
        The appliance to schedule. Never modified.
    bands : pd.DataFrame
        Eco-band table indexed by hour (see `prepare_bands`).
    preferences : Preferences or None
        Scoring weights. Defaults to `Preferences()`.

    Returns
    -------
    OptimizationResult
        Savings and eco points are never negative. If no start hour in the
        window finishes the same day, the original time is kept and
        `feasible` is False.
    """
    if preferences is None:
        preferences = Preferences()

    runtime = appliance.runtime if appliance.runtime is not None else appliance.default_runtime
    flex_hours = appliance.flex_hours if appliance.flex_hours is not None else config.DEFAULT_FLEX_HOURS
    energy_used = (appliance.average_power / 1000) * runtime  # kWh

    if appliance.start_time is not None:
        original_time = appliance.start_time
    else:
        original_time = typical_start_time(appliance.name)

    best_time, feasible = find_optimal_time_slot(bands, runtime, flex_hours, original_time, preferences)
    if not feasible:
        window = search_window(original_time, flex_hours)
        _LOGGER.warning(
            "No start hour in %d-%d lets %s finish within the day, keeping %d:00",
            window[0], window[-1],
            appliance.name, original_time,
        )

    original_cost = integrate_cost(bands, original_time, energy_used, runtime)
    optimized_cost = integrate_cost(bands, best_time, energy_used, runtime)
    savings = max(original_cost["cost"] - optimized_cost["cost"], 0)
    eco_points = max(math.floor(optimized_cost["points"] - original_cost["points"]), 0)

    degraded = not all(
        has_hour(bands, hour)
        for start in (original_time, best_time)
        for hour in slot_hours(start, runtime)
    )
    if degraded:
        _LOGGER.warning("Default eco band used for %s, results may be inaccurate", appliance.name)

    original_band = lookup(bands, original_time) if has_hour(bands, original_time) else None
    best_band = lookup(bands, best_time) if has_hour(bands, best_time) else None
    reasoning = generate_reasoning(appliance.name, original_band, best_band, best_time)

    _LOGGER.debug(
        "%s: %d:00 -> %d:00, %.2f kWh, savings %.4f, eco points %d",
        appliance.name, original_time, best_time, energy_used, savings, eco_points,
    )

    return OptimizationResult(
        appliance=appliance.name,
        original_time=original_time,
        recommended_time=best_time,
        savings=savings,
        eco_points=eco_points,
        reasoning=reasoning,
        energy_used=energy_used,
        feasible=feasible,
        degraded=degraded,
    )
