"""
Spatial module: point geometries from coordinate fields, geometry repair, reprojection.
"""

import logging

import geopandas as gpd

from . import config
from .errors import SchemaError

logger = logging.getLogger(__name__)


def points_table_to_geodataframe(df, x=config.POI_X_FIELD, y=config.POI_Y_FIELD, crs=config.CRS_POI):
    """
    Convert a table with explicit coordinate fields to a point GeoDataFrame.

    Args:
        df: DataFrame with `x` and `y` columns
        x, y: coordinate column names
        crs: reference system the coordinates are expressed in

    Returns:
        GeoDataFrame with Point geometries in `crs` and log info
    """
    log = []

    missing = [c for c in (x, y) if c not in df.columns]
    if missing:
        raise SchemaError(f"Coordinate columns not found: {missing}", missing=missing)

    gdf = gpd.GeoDataFrame(
        df.copy(),
        geometry=gpd.points_from_xy(df[x], df[y]),
        crs=crs,
    )

    log.append(f"✓ Created Point geometries for {len(gdf)} rows (CRS: {crs})")

    return gdf, log


def clean_layer_geometries(gdf, default_crs=config.CRS_WEB):
    """
    Validate and clean layer geometries.

    Args:
        gdf: layer GeoDataFrame
        default_crs: CRS assumed when the source declares none

    Returns:
        Cleaned GeoDataFrame and log info
    """
    log = []
    gdf_clean = gdf.copy()

    # 1. Check CRS
    if gdf_clean.crs is None:
        log.append(f"⚠️  CRS missing; assuming {default_crs}")
        gdf_clean = gdf_clean.set_crs(default_crs)
    else:
        log.append(f"✓ CRS: {gdf_clean.crs.to_string()}")

    # 2. Validate geometries
    invalid_before = int((~gdf_clean.geometry.is_valid).sum())
    if invalid_before > 0:
        log.append(f"⚠️  Found {invalid_before} invalid geometries; repairing...")
        gdf_clean.geometry = gdf_clean.geometry.buffer(0)
        invalid_after = int((~gdf_clean.geometry.is_valid).sum())
        log.append(f"   → After repair: {invalid_after} invalid (target: 0)")
    else:
        log.append(f"✓ All geometries are valid")

    return gdf_clean, log


def reproject(geo_table, target_crs=config.CRS_WEB):
    """
    Transform geometries to `target_crs`.

    Errors from geopandas/pyproj (naive geometries, unknown CRS) propagate
    unchanged.
    """
    if geo_table.crs is not None and geo_table.crs == target_crs:
        return geo_table.copy()

    logger.debug("Reprojecting %d rows from %s to %s", len(geo_table), geo_table.crs, target_crs)
    return geo_table.to_crs(target_crs)
