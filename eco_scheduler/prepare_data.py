import logging

import pandas as pd

from eco_scheduler import config
from eco_scheduler.models import Band, EcoBand, default_band

_LOGGER = logging.getLogger(__name__)

BAND_COLUMNS = ["band", "price", "credit", "points", "description"]

# ---------------------------
# BUILD HOURLY INDEX
# ---------------------------

def build_hour_index(hours=config.HOURS_PER_DAY):
    return pd.RangeIndex(0, hours, name="hour")

# ---------------------------
# BAND TABLES
# ---------------------------

def band_description(band, price):
    band = Band(band)
    if band is Band.GREEN:
        return "High solar generation - perfect time!" if price < 20 else "Great time for eco-friendly appliances"
    if band is Band.BLUE:
        return "Neutral period with moderate demand"
    if band is Band.ORANGE:
        return "Grid stress building - use with caution"
    return "Peak demand - avoid usage to save money"


def classify_band(label):
    label = str(label).upper()
    for band in (Band.GREEN, Band.ORANGE, Band.RED):
        if band.value in label:
            return band.value
    return Band.BLUE.value


def get_fallback_bands(index=None, periods=config.FALLBACK_PERIODS, default=config.FALLBACK_DEFAULT):
    """
    Built-in eco-band table with typical daily patterns.

    Green overnight and during the morning solar surplus, orange while the
    evening peak builds, red through the peak, blue otherwise.
    """
    if index is None:
        index = build_hour_index()
    rows = []
    for hour in index:
        band, price, credit, points = default
        for hours, period_band, period_price, period_credit, period_points in periods:
            if hour in hours:
                band, price, credit, points = period_band, period_price, period_credit, period_points
                break
        rows.append({
            "band": band,
            "price": price,
            "credit": credit,
            "points": points,
            "description": band_description(band, price),
        })
    return pd.DataFrame(rows, index=index, columns=BAND_COLUMNS)


def get_csv_bands(path):
    """
    Read a reward/penalty windows CSV into an eco-band table.

    Expected columns: hour, avg_market_price_usd_mwh, price_band,
    credit_usd_per_kwh, points_per_kwh. Numbers that fail to parse become 0.
    """
    df = pd.read_csv(path)

    def numeric(column):
        return pd.to_numeric(df[column], errors="coerce").fillna(0)

    hours = numeric("hour").astype(int)
    price = numeric("avg_market_price_usd_mwh").astype(float)
    bands = df["price_band"].fillna("").map(classify_band)

    table = pd.DataFrame({
        "band": bands.to_numpy(),
        "price": price.to_numpy(),
        "credit": numeric("credit_usd_per_kwh").astype(float).to_numpy(),
        "points": numeric("points_per_kwh").astype(float).to_numpy(),
        "description": [band_description(b, p) for b, p in zip(bands, price)],
    }, index=pd.Index(hours.to_numpy(), name="hour"))
    return table

# ---------------------------
# LOOKUP
# ---------------------------

def missing_hours(bands):
    """Hours of the daily cycle that have no row in the table."""
    return sorted(set(range(config.HOURS_PER_DAY)) - set(int(h) for h in bands.index))


def has_hour(bands, hour):
    return hour in bands.index


def lookup(bands, hour):
    """
    Return the EcoBand for `hour`.

    An hour outside 0-23 is a caller error. An hour the table does not cover
    is replaced by the neutral default band so that one bad row cannot abort
    a whole batch.
    """
    if not 0 <= hour < config.HOURS_PER_DAY:
        raise ValueError(f"Hour must be between 0 and 23, got {hour}")

    if hour not in bands.index:
        _LOGGER.debug("No eco band for hour %d, using default %s band", hour, config.DEFAULT_BAND["band"])
        return default_band(hour)

    row = bands.loc[hour]
    if isinstance(row, pd.DataFrame):
        # duplicated hour, first row wins
        row = row.iloc[0]
    return EcoBand(
        hour=int(hour),
        band=Band(row["band"]),
        price=float(row["price"]),
        credit=float(row["credit"]),
        points=float(row["points"]),
        description=str(row["description"]),
    )

# ---------------------------
# MAIN
# ---------------------------

def prepare_bands(source=config.TABLE_SOURCE, csv_path=config.CSV_PATH):
    """
    Prepare the 24-hour eco-band table.

    Parameters
    ----------
    source : str
        Where the table comes from: "fallback" (built-in table) or "csv"
        (default "fallback").
    csv_path : str
        Path to the reward/penalty CSV (used if source="csv"). If it cannot be
        read, the built-in table is returned instead.

    Returns
    -------
    pd.DataFrame indexed by hour, with columns:
        - band
        - price (USD/MWh)
        - credit (USD/kWh)
        - points (per kWh)
        - description
    """
    if source == "fallback":
        bands = get_fallback_bands()
    elif source == "csv":
        try:
            bands = get_csv_bands(csv_path)
        except (OSError, KeyError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
            _LOGGER.error("Error loading eco bands from %s: %s, using fallback table", csv_path, exc)
            bands = get_fallback_bands()
    else:
        raise ValueError("Unknown table source")

    gaps = missing_hours(bands)
    if gaps:
        _LOGGER.warning("Eco-band table is missing hours %s", gaps)
    return bands
