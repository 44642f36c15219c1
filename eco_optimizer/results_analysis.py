import json
from dataclasses import asdict
from datetime import datetime

import pandas as pd

from eco_scheduler import config


def carbon_reduction(energy_kwh, factor=config.CARBON_KG_PER_KWH):
    """Carbon reduction (kg CO2) attributed to shifting `energy_kwh`."""
    return energy_kwh * factor


def format_hour(hour):
    """12-hour clock label, e.g. 0 -> '12:00 AM', 19 -> '7:00 PM'."""
    if hour == 0:
        return "12:00 AM"
    if hour < 12:
        return f"{hour}:00 AM"
    if hour == 12:
        return "12:00 PM"
    return f"{hour - 12}:00 PM"


def schedule_frame(summary):
    """One row per scheduled appliance."""
    columns = ["appliance", "original_time", "recommended_time", "savings",
               "eco_points", "energy_used", "feasible", "degraded", "reasoning"]
    return pd.DataFrame([asdict(s) for s in summary.schedules], columns=columns)


def export_csv(summary):
    df = pd.DataFrame({
        "Appliance": [s.appliance for s in summary.schedules],
        "Original Time": [format_hour(s.original_time) for s in summary.schedules],
        "Recommended Time": [format_hour(s.recommended_time) for s in summary.schedules],
        "Savings ($)": [f"{s.savings:.2f}" for s in summary.schedules],
        "EcoPoints": [s.eco_points for s in summary.schedules],
    })
    return df.to_csv(index=False)


def export_text(summary, date=None):
    if date is None:
        date = datetime.now()
    lines = [
        f"EcoShift Plan - {date:%Y-%m-%d}",
        "",
        f"Total Savings: ${summary.total_savings:.2f}",
        f"EcoPoints Earned: +{summary.total_eco_points}",
        f"Carbon Reduction: {summary.carbon_reduction:.2f} kg CO2",
        "",
        "Recommended Schedule:",
    ]
    for s in summary.schedules:
        lines.append(
            f"- {s.appliance}: {format_hour(s.original_time)} -> {format_hour(s.recommended_time)} "
            f"(+${s.savings:.2f}, +{s.eco_points} pts)"
        )
    lines += [
        "",
        "By shifting your appliances to greener hours, you're supporting renewable energy "
        "and reducing grid stress during peak demand periods.",
    ]
    return "\n".join(lines) + "\n"


def export_json(summary, date=None):
    if date is None:
        date = datetime.now()
    data = {
        "exportDate": date.isoformat(),
        "totalSavings": summary.total_savings,
        "totalEcoPoints": summary.total_eco_points,
        "totalEnergyShifted": summary.total_energy_shifted,
        "carbonReduction": summary.carbon_reduction,
        "schedules": [
            {
                "appliance": s.appliance,
                "originalTime": s.original_time,
                "recommendedTime": s.recommended_time,
                "savings": s.savings,
                "ecoPoints": s.eco_points,
                "reasoning": s.reasoning,
                "energyUsed": s.energy_used,
            }
            for s in summary.schedules
        ],
    }
    return json.dumps(data, indent=2)


def export_summary(summary, fmt="json"):
    if fmt == "csv":
        return export_csv(summary)
    elif fmt == "text":
        return export_text(summary)
    elif fmt == "json":
        return export_json(summary)
    else:
        raise ValueError("Unknown export format")
