import logging

from eco_optimizer.results_analysis import carbon_reduction
from eco_scheduler.models import OptimizationSummary, Preferences, parse_appliance, parse_preferences
from eco_scheduler.slot_scheduler import optimize_appliance

_LOGGER = logging.getLogger(__name__)


def optimize_appliances(appliances, bands, preferences=None):
    """
    Schedule every selected appliance and total up the results.

    Parameters
    ----------
    appliances : list of Appliance
        Household appliances. Only those with `selected=True` are scheduled;
        the rest are left out of the summary entirely.
    bands : pd.DataFrame
        Eco-band table indexed by hour (see `prepare_bands`). Read only.
    preferences : Preferences or None
        Scoring weights, defaults to savings first with peak avoidance.

    Returns
    -------
    OptimizationSummary
        A new summary with one schedule per selected appliance, in input order.
    """
    if preferences is None:
        preferences = Preferences()

    selected = [a for a in appliances if a.selected]
    schedules = [optimize_appliance(a, bands, preferences) for a in selected]

    total_savings = sum(s.savings for s in schedules)
    total_eco_points = sum(s.eco_points for s in schedules)
    total_energy_shifted = sum(s.energy_used for s in schedules)

    _LOGGER.info(
        "Optimized %d of %d appliances: savings %.2f, %d eco points, %.2f kWh shifted",
        len(selected), len(appliances), total_savings, total_eco_points, total_energy_shifted,
    )

    return OptimizationSummary(
        total_savings=total_savings,
        total_eco_points=total_eco_points,
        total_energy_shifted=total_energy_shifted,
        carbon_reduction=carbon_reduction(total_energy_shifted),
        schedules=schedules,
    )


def optimize_request(payload, bands):
    """
    Validate a raw request ({"appliances": [...], "preferences": {...}}) and optimize it.

    Raises ValueError if any appliance record is invalid.
    """
    appliances = [parse_appliance(record) for record in payload.get("appliances", [])]
    preferences = parse_preferences(payload.get("preferences"))
    return optimize_appliances(appliances, bands, preferences)
