"""
Shared synthetic inputs: raw tables shaped like the files in data/original/.
"""
import geopandas as gpd
import numpy as np
import pandas as pd
import pytest
from shapely.geometry import Point, box


@pytest.fixture
def raw_weather():
    return pd.DataFrame({
        "Date": ["2020-01-01", "2020-07-04", "2021-03-15", "2021-12-31"],
        "AirT": [-3.2, 24.1, 5.0, -8.5],
        "Prec": [0.0, 2.5, np.nan, 1.0],
        "WSpd": [3.4, 1.2, 4.8, 6.0],
    })


@pytest.fixture
def raw_sites():
    return gpd.GeoDataFrame(
        {
            "Site Name": ["Lake A", "Ridge", "Creek", "Meadow"],
            "Type": ["lake", "summit", "stream", "lake"],
            "Comment": ["NaN", "frozen lake", None, "snow <deep>"],
        },
        geometry=[
            Point(476000, 4429000),
            Point(478500, 4431200),
            Point(481000, 4427500),
            Point(483200, 4433100),
        ],
        crs="EPSG:32613",
    )


@pytest.fixture
def raw_study_area():
    return gpd.GeoDataFrame(
        {"Label": ["Study area"]},
        geometry=[box(470000, 4420000, 490000, 4440000)],
        crs="EPSG:32613",
    )


@pytest.fixture
def raw_poi():
    return pd.DataFrame({
        "POI Name": ["Trailhead", "Visitor center", "Ranger station"],
        "Category": ["trail", "building", "building"],
        "Easting": [475500.0, 479000.0, None],
        "Northing": [4428000.0, 4430500.0, 4432000.0],
    })


@pytest.fixture
def raw_inputs(raw_weather, raw_sites, raw_study_area, raw_poi):
    return {
        "weather": raw_weather,
        "sites": raw_sites,
        "study_area": raw_study_area,
        "poi": raw_poi,
    }


@pytest.fixture
def prepared_tables(raw_inputs):
    from geoviz.pipeline import prepare_tables
    return prepare_tables(raw_inputs)
