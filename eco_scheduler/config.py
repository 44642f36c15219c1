TABLE_SOURCE = "fallback"  # "fallback" or "csv"
CSV_PATH = "reward_penalty_windows.csv"  # hourly eco-band table (columns: hour, price_band, ...)

HOURS_PER_DAY = 24

# Per-band score used by the slot scorer
BAND_SCORES = {
    "GREEN": 100,
    "BLUE": 50,
    "ORANGE": 10,
    "RED": -100,
}

PRICE_SCORE_CEILING = 100.0  # price score = max(0, ceiling - price)
PRICE_WEIGHT = 2
CREDIT_WEIGHT = 1000         # scales $/kWh credit up to the price score range
POINTS_SCALE = 10
POINTS_WEIGHT = 3
PEAK_PENALTY = 200           # subtracted on RED hours when avoiding peaks

DEFAULT_FLEX_HOURS = 6
CARBON_KG_PER_KWH = 0.4

# Neutral band substituted for an hour missing from the table
DEFAULT_BAND = {
    "band": "BLUE",
    "price": 30.0,
    "credit": 0.0,
    "points": 0.0,
    "description": "No data for this hour - neutral pricing assumed",
}

FALLBACK_PERIODS = [
    # hours, band, price ($/MWh), credit ($/kWh), points per kWh
    ((2, 3, 4, 8, 9, 10, 11), "GREEN", 20.0, 0.05, 3.0),  # overnight and solar surplus
    ((18, 19, 20, 21), "RED", 50.0, -0.05, -2.0),        # evening peak
    ((15, 16, 17), "ORANGE", 35.0, 0.0, 0.0),            # building peak
]
FALLBACK_DEFAULT = ("BLUE", 30.0, 0.02, 1.0)

# Checked in order, first match wins
TYPICAL_START_TIMES = [
    (("ev", "electric vehicle"), 18),  # evening
    (("dishwasher",), 20),             # after dinner
    (("dryer", "washer"), 19),
    (("water heater",), 17),           # before peak
    (("ac", "air conditioner"), 14),   # afternoon
    (("lighting", "light"), 18),
    (("tv",), 20),                     # prime time
]
DEFAULT_START_TIME = 18
