"""
Test calendar-field derivation and season binning.
"""
import numpy as np
import pandas as pd
import pytest

from geoviz.dates import add_season, derive_calendar_fields, derive_season
from geoviz.errors import DateParseError, DomainError, SchemaError
from geoviz.pipeline import prepare_weather


class TestDeriveSeason:

    @pytest.mark.parametrize("month,season", [
        (12, "winter"), (1, "winter"), (2, "winter"),
        (3, "spring"), (4, "spring"), (5, "spring"),
        (6, "summer"), (7, "summer"), (8, "summer"),
        (9, "fall"), (10, "fall"), (11, "fall"),
    ])
    def test_every_month_maps_to_one_season(self, month, season):
        assert derive_season(month) == season

    def test_numpy_integers_accepted(self):
        assert derive_season(np.int64(7)) == "summer"
        assert derive_season(4.0) == "spring"

    @pytest.mark.parametrize("month", [0, 13, -1, 2.5, "3", None, True, float("nan")])
    def test_outside_domain_raises(self, month):
        with pytest.raises(DomainError):
            derive_season(month)


class TestDeriveCalendarFields:

    def test_julian_day_boundaries(self):
        df = pd.DataFrame({"date": ["2019-01-01", "2019-12-31", "2020-12-31"]})
        out = derive_calendar_fields(df)
        assert out["julian"].tolist() == [1, 365, 366]

    def test_date_parts(self):
        out = derive_calendar_fields(pd.DataFrame({"date": ["2020-07-04"]}))
        row = out.iloc[0]
        assert (row["year"], row["month"], row["day"], row["julian"]) == (2020, 7, 4, 186)
        assert out["julian"].dtype == "int64"

    def test_idempotent(self):
        df = pd.DataFrame({"date": ["2020-01-01", "2020-02-29", "2021-11-30"]})
        once = derive_calendar_fields(df)
        twice = derive_calendar_fields(once)
        cols = ["year", "month", "day", "julian"]
        pd.testing.assert_frame_equal(once[cols], twice[cols])

    def test_mixed_formats_parsed(self):
        df = pd.DataFrame({"date": ["2020-01-01", "07/04/2020", "2021-03-15 00:00:00"]})
        out = derive_calendar_fields(df)
        assert out["julian"].tolist() == [1, 186, 74]
        assert out["month"].tolist() == [1, 7, 3]

    def test_unparseable_date_raises(self):
        df = pd.DataFrame({"date": ["2020-01-01", "not a date"]})
        with pytest.raises(DateParseError) as exc:
            derive_calendar_fields(df)
        assert exc.value.values == ("not a date",)

    def test_null_date_raises(self):
        with pytest.raises(DateParseError):
            derive_calendar_fields(pd.DataFrame({"date": ["2020-01-01", None]}))

    def test_missing_column_raises(self):
        with pytest.raises(SchemaError):
            derive_calendar_fields(pd.DataFrame({"day": [1]}))


class TestAddSeason:

    def test_ordered_categorical(self):
        out = add_season(pd.DataFrame({"month": [7, 1, 10, 4]}))
        assert out["season"].tolist() == ["summer", "winter", "fall", "spring"]
        assert out["season"].cat.ordered
        assert list(out["season"].cat.categories) == ["winter", "spring", "summer", "fall"]
        assert out["season"].min() == "winter"

    def test_invalid_month_raises(self):
        with pytest.raises(DomainError):
            add_season(pd.DataFrame({"month": [1, 13]}))


def test_weather_end_to_end():
    raw = pd.DataFrame({
        "date": ["2020-01-01", "2020-07-04"],
        "mean_airtemp": [-3.2, 24.1],
        "daily_precip": [0.0, 2.5],
        "mean_windspeed": [3.4, 1.2],
    })
    out, log = prepare_weather(raw)

    assert out["season"].tolist() == ["winter", "summer"]
    assert out["julian"].tolist() == [1, 186]
    assert all(out["marker_text"].str.len() > 0)
    assert all("Mean air temp (C):" in text for text in out["marker_text"])
    assert out["marker_text"].iloc[1].startswith("Date: 2020-07-04<br>Mean air temp (C): 24.1<br>")
    assert any("Season derived" in line for line in log)


def test_weather_non_numeric_measurement_logged(raw_weather):
    raw_weather["WSpd"] = raw_weather["WSpd"].astype(object)
    raw_weather.loc[0, "WSpd"] = "calm?"
    out, log = prepare_weather(raw_weather)
    assert pd.isna(out.loc[0, "mean_windspeed"])
    assert "Mean wind speed (m/s): <br>" in out.loc[0, "marker_text"]
    assert any("non-numeric values in 'mean_windspeed'" in line for line in log)
