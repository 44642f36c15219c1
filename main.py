import logging

import pandas as pd

from eco_optimizer.optimizer import optimize_appliances
from eco_optimizer.results_analysis import schedule_frame
from eco_scheduler.models import Appliance
from eco_scheduler.prepare_data import prepare_bands

DEMO_APPLIANCES = [
    Appliance("ev", "EV Charger", 3000, 7000, 6, selected=True),
    Appliance("dishwasher", "Dishwasher", 1200, 1500, 2, selected=True),
    Appliance("dryer", "Clothes Dryer", 1800, 5000, 1, selected=True),
    Appliance("tv", "TV", 80, 400, 3),
]


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    bands = prepare_bands()
    summary = optimize_appliances(DEMO_APPLIANCES, bands)
    pd.set_option('display.max_columns', None)
    print(schedule_frame(summary).drop(columns=["reasoning"]))
    print(f"Total savings: ${summary.total_savings:.2f}, "
          f"eco points: {summary.total_eco_points}, "
          f"carbon reduction: {summary.carbon_reduction:.2f} kg CO2")


if __name__ == "__main__":
    main()
