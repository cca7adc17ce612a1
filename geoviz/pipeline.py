"""
Pipeline module: per-table preparation steps (load -> clean -> derive).

Each step returns the render-ready table and a list of log lines, which are
also sent to the module logger.
"""

import logging

import pandas as pd

from . import config
from .cleaning import build_marker_text, normalize_schema, sanitize_missing
from .dates import add_season, derive_calendar_fields
from .schema import BOUNDARY_SCHEMA, POI_SCHEMA, SITE_SCHEMA, WEATHER_SCHEMA
from .spatial import clean_layer_geometries, points_table_to_geodataframe, reproject

logger = logging.getLogger(__name__)

WEATHER_MEASUREMENTS = ("mean_airtemp", "daily_precip", "mean_windspeed")


def emit_log(log, name):
    """Send step log lines to the logger: '⚠' lines as warnings, the rest as info."""
    for line in log:
        if line.lstrip().startswith("⚠"):
            logger.warning("[%s] %s", name, line)
        else:
            logger.info("[%s] %s", name, line)


def prepare_weather(df_weather):
    """
    Clean the daily weather table and derive calendar fields, season and marker text.

    Args:
        df_weather: Raw weather DataFrame

    Returns:
        Prepared DataFrame and log info
    """
    log = []

    # 1. Normalize column names
    df_clean = normalize_schema(df_weather, WEATHER_SCHEMA)
    log.append(f"✓ Column names normalized")

    # 2. Measurements must be numeric; unparseable values become null
    for col in WEATHER_MEASUREMENTS:
        before = df_clean[col].isna().sum()
        df_clean[col] = pd.to_numeric(df_clean[col], errors="coerce")
        coerced = df_clean[col].isna().sum() - before
        if coerced > 0:
            log.append(f"⚠️  {coerced} non-numeric values in '{col}' (set to null)")

    # 3. Calendar fields
    df_clean = derive_calendar_fields(df_clean, "date")
    log.append(f"✓ Calendar fields derived ({df_clean['date'].min().date()} to {df_clean['date'].max().date()})")

    # 4. Season
    df_clean = add_season(df_clean, "month")
    counts = df_clean["season"].value_counts(sort=False).to_dict()
    log.append(f"✓ Season derived: {counts}")

    # 5. Popup text
    df_clean = build_marker_text(df_clean, config.WEATHER_MARKER_TEMPLATE)
    log.append(f"✓ Weather preparation complete: {df_weather.shape} → {df_clean.shape}")

    emit_log(log, "weather")
    return df_clean, log


def _sanitize_fields(table, fields, log):
    for field in fields:
        n = int((table[field] == config.MISSING_SENTINEL).sum())
        table = sanitize_missing(table, field)
        if n:
            log.append(f"✓ '{field}': {n} '{config.MISSING_SENTINEL}' values → '{config.MISSING_REPLACEMENT}'")
    return table


def prepare_site_layer(gdf_sites):
    """
    Clean the point layer of sites: schema, geometry, sentinels, CRS, marker text.

    Returns:
        Prepared GeoDataFrame in EPSG:4326 and log info
    """
    log = []

    gdf_clean = normalize_schema(gdf_sites, SITE_SCHEMA)
    log.append(f"✓ Column names normalized")

    if "comment" not in gdf_clean.columns:
        gdf_clean["comment"] = config.MISSING_REPLACEMENT
        log.append(f"⚠️  No 'comment' column; filled with '{config.MISSING_REPLACEMENT}'")

    gdf_clean, geom_log = clean_layer_geometries(gdf_clean)
    log.extend(geom_log)

    gdf_clean = _sanitize_fields(gdf_clean, ["name", "type", "comment"], log)

    gdf_clean = reproject(gdf_clean, config.CRS_WEB)
    gdf_clean = build_marker_text(gdf_clean, config.SITE_MARKER_TEMPLATE)
    log.append(f"✓ Sites preparation complete: {len(gdf_clean)} features, "
               f"{gdf_clean['type'].nunique()} types")

    emit_log(log, "sites")
    return gdf_clean, log


def prepare_boundary_layer(gdf_boundary):
    """
    Clean the study-area polygon layer.

    Returns:
        Prepared GeoDataFrame in EPSG:4326 and log info
    """
    log = []

    gdf_clean = normalize_schema(gdf_boundary, BOUNDARY_SCHEMA)
    gdf_clean, geom_log = clean_layer_geometries(gdf_clean)
    log.extend(geom_log)

    gdf_clean = _sanitize_fields(gdf_clean, ["name"], log)
    gdf_clean = reproject(gdf_clean, config.CRS_WEB)
    gdf_clean = build_marker_text(gdf_clean, config.BOUNDARY_MARKER_TEMPLATE)
    log.append(f"✓ Study area preparation complete: {len(gdf_clean)} polygons")

    emit_log(log, "study_area")
    return gdf_clean, log


def prepare_poi_layer(df_poi, crs=config.CRS_POI):
    """
    Turn the points-of-interest table (x/y in `crs`) into a web-ready point layer.

    Returns:
        Prepared GeoDataFrame in EPSG:4326 and log info
    """
    log = []

    df_clean = normalize_schema(df_poi, POI_SCHEMA)

    df_clean["x"] = pd.to_numeric(df_clean["x"], errors="coerce")
    df_clean["y"] = pd.to_numeric(df_clean["y"], errors="coerce")

    # Remove rows with missing coordinates
    before = len(df_clean)
    df_clean = df_clean.dropna(subset=["x", "y"])
    removed = before - len(df_clean)
    if removed > 0:
        log.append(f"⚠️  Removed {removed} points with missing coordinates")

    gdf_clean, geom_log = points_table_to_geodataframe(df_clean, "x", "y", crs)
    log.extend(geom_log)

    gdf_clean = _sanitize_fields(gdf_clean, ["name"], log)
    gdf_clean = reproject(gdf_clean, config.CRS_WEB)
    gdf_clean = build_marker_text(gdf_clean, config.POI_MARKER_TEMPLATE)
    log.append(f"✓ Points of interest preparation complete: {len(gdf_clean)} points")

    emit_log(log, "poi")
    return gdf_clean, log


def prepare_tables(inputs):
    """Run every preparation step on the dict returned by io.load_inputs."""
    weather, _ = prepare_weather(inputs["weather"])
    study_area, _ = prepare_boundary_layer(inputs["study_area"])
    sites, _ = prepare_site_layer(inputs["sites"])
    poi, _ = prepare_poi_layer(inputs["poi"])
    return {"weather": weather, "study_area": study_area, "sites": sites, "poi": poi}
