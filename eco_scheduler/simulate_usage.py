import math

import pandas as pd

from eco_scheduler import config
from eco_scheduler.prepare_data import has_hour, lookup


def price_per_kwh(price_mwh):
    """Convert a $/MWh table price to $/kWh."""
    return price_mwh / 1000


def simulate_usage(bands, start_hour, energy_kwh, runtime_hours):
    """
    Simulate an appliance running from `start_hour`, hour by hour.

    Parameters
    ----------
    bands : pd.DataFrame
        Eco-band table indexed by hour (see `prepare_bands`).
    start_hour : int
        Hour of day the appliance starts (0-23).
    energy_kwh : float
        Total energy drawn over the whole run, spread evenly.
    runtime_hours : float
        Run length in hours. A fractional remainder only counts that fraction
        of the final hour.

    Returns
    -------
    pd.DataFrame
        One row per hour touched, with columns: hour, band, fraction,
        energy_kwh, cost, points, default_band. Hours wrap past midnight.
    """
    energy_per_hour = energy_kwh / runtime_hours
    hours_to_check = math.ceil(runtime_hours)
    remainder = runtime_hours % 1

    rows = []
    for i in range(hours_to_check):
        hour = (start_hour + i) % config.HOURS_PER_DAY
        band = lookup(bands, hour)

        # Only part of the final hour is used
        fraction = remainder if (i == hours_to_check - 1 and remainder != 0) else 1
        energy = energy_per_hour * fraction

        cost = energy * price_per_kwh(band.price)
        cost -= energy * band.credit  # credits reduce, penalties add

        rows.append({
            "hour": hour,
            "band": band.band.value,
            "fraction": fraction,
            "energy_kwh": energy,
            "cost": cost,
            "points": energy * band.points,
            "default_band": not has_hour(bands, hour),
        })

    return pd.DataFrame(rows, columns=["hour", "band", "fraction", "energy_kwh", "cost", "points", "default_band"])


def integrate_cost(bands, start_hour, energy_kwh, runtime_hours):
    """
    Total cost and eco points for running from `start_hour`.

    Cost is clamped at zero; points are returned as-is (they can be negative).
    """
    usage = simulate_usage(bands, start_hour, energy_kwh, runtime_hours)
    total_cost = float(usage["cost"].sum())
    total_points = float(usage["points"].sum())
    return {"cost": max(total_cost, 0.0), "points": total_points}
