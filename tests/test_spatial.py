"""
Test point construction, geometry repair and reprojection.
"""
import geopandas as gpd
import pandas as pd
import pytest
from pyproj.exceptions import CRSError
from shapely.geometry import Point, Polygon

from geoviz.errors import SchemaError
from geoviz.spatial import clean_layer_geometries, points_table_to_geodataframe, reproject


def test_points_from_coordinate_fields():
    df = pd.DataFrame({"x": [476000.0, 479000.0], "y": [4429000.0, 4430500.0], "name": ["a", "b"]})
    gdf, log = points_table_to_geodataframe(df, "x", "y", "EPSG:32613")
    assert gdf.crs == "EPSG:32613"
    assert gdf.geometry.iloc[0].equals(Point(476000.0, 4429000.0))
    assert gdf["name"].tolist() == ["a", "b"]
    assert "2 rows" in log[0]


def test_points_missing_coordinate_field_raises():
    with pytest.raises(SchemaError):
        points_table_to_geodataframe(pd.DataFrame({"x": [1.0]}), "x", "y", "EPSG:32613")


def test_reproject_to_web(raw_sites):
    out = reproject(raw_sites, "EPSG:4326")
    assert out.crs == "EPSG:4326"
    assert len(out) == len(raw_sites)
    lon, lat = out.geometry.iloc[0].x, out.geometry.iloc[0].y
    assert -106 < lon < -104
    assert 39.5 < lat < 40.5


def test_reproject_same_crs_is_copy(raw_sites):
    out = reproject(raw_sites, "EPSG:32613")
    assert out is not raw_sites
    assert out.geometry.equals(raw_sites.geometry)


def test_reproject_naive_geometries_error_passes_through():
    gdf = gpd.GeoDataFrame({"a": [1]}, geometry=[Point(0, 0)])
    with pytest.raises(ValueError):
        reproject(gdf, "EPSG:4326")


def test_reproject_unknown_crs_error_passes_through(raw_sites):
    with pytest.raises(CRSError):
        reproject(raw_sites, "EPSG:999999")


def test_clean_layer_sets_missing_crs_and_repairs():
    bowtie = Polygon([(0, 0), (1, 1), (1, 0), (0, 1), (0, 0)])
    gdf = gpd.GeoDataFrame({"name": ["bowtie"]}, geometry=[bowtie])
    out, log = clean_layer_geometries(gdf)
    assert out.crs == "EPSG:4326"
    assert out.geometry.is_valid.all()
    assert any("CRS missing" in line for line in log)
    assert any("invalid geometries" in line for line in log)
