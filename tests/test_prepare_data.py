import pandas as pd
import pytest

from eco_scheduler.models import Band
from eco_scheduler.prepare_data import (
    get_csv_bands,
    get_fallback_bands,
    lookup,
    missing_hours,
    prepare_bands,
)


@pytest.fixture
def bands():
    return get_fallback_bands()


def test_prepare_bands():
    df = prepare_bands()

    # Basic sanity checks
    assert isinstance(df, pd.DataFrame)
    for column in ["band", "price", "credit", "points", "description"]:
        assert column in df.columns

    # One row per hour of the day
    assert list(df.index) == list(range(24))
    assert missing_hours(df) == []


def test_fallback_band_layout(bands):
    green = [h for h in bands.index if bands.loc[h, "band"] == "GREEN"]
    red = [h for h in bands.index if bands.loc[h, "band"] == "RED"]
    orange = [h for h in bands.index if bands.loc[h, "band"] == "ORANGE"]
    assert green == [2, 3, 4, 8, 9, 10, 11]
    assert red == [18, 19, 20, 21]
    assert orange == [15, 16, 17]
    assert bands.loc[0, "band"] == "BLUE"
    assert bands.loc[0, "credit"] == 0.02


def test_lookup_returns_band(bands):
    band = lookup(bands, 19)
    assert band.hour == 19
    assert band.band is Band.RED
    assert band.price == 50.0
    assert band.credit == -0.05
    assert band.points == -2.0
    assert band.description == "Peak demand - avoid usage to save money"


def test_lookup_missing_hour_uses_default(bands):
    gappy = bands.drop(index=5)
    assert missing_hours(gappy) == [5]

    band = lookup(gappy, 5)
    assert band.band is Band.BLUE
    assert band.credit == 0.0
    assert band.points == 0.0


@pytest.mark.parametrize("hour", [-1, 24])
def test_lookup_rejects_out_of_range_hour(bands, hour):
    with pytest.raises(ValueError):
        lookup(bands, hour)


def test_get_csv_bands(tmp_path):
    path = tmp_path / "bands.csv"
    path.write_text(
        "hour,avg_market_price_usd_mwh,avg_consumption_kwh,avg_solar_kwh,avg_net_load_kwh,"
        "price_band,credit_usd_per_kwh,points_per_kwh,solar_bonus,total_credit_usd_per_kwh\n"
        "0,18.5,1.2,0,1.2,GREEN (solar),0.05,3,0,0.05\n"
        "1,n/a,1.0,0,1.0,NEUTRAL,0.01,1,0,0.01\n"
        "2,75,2.5,0,2.5,RED_PEAK,-0.04,-2,0,-0.04\n"
        "3,40,2.0,0,2.0,ORANGE,0,0,0,0\n"
    )

    df = get_csv_bands(path)

    assert list(df.index) == [0, 1, 2, 3]
    assert list(df["band"]) == ["GREEN", "BLUE", "RED", "ORANGE"]
    assert df.loc[1, "price"] == 0.0  # unparsable price
    assert df.loc[2, "credit"] == -0.04
    assert df.loc[0, "description"] == "High solar generation - perfect time!"


def test_prepare_bands_falls_back_when_csv_missing(tmp_path):
    df = prepare_bands(source="csv", csv_path=tmp_path / "missing.csv")
    pd.testing.assert_frame_equal(df, get_fallback_bands())


def test_prepare_bands_unknown_source():
    with pytest.raises(ValueError):
        prepare_bands(source="weather")
