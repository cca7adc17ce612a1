"""
Quality Control (QC) module: Assertions and data quality checks on prepared tables.
"""

import logging

from . import config

logger = logging.getLogger(__name__)


def check_geometry_validity(gdf):
    """Assert all geometries are valid."""
    assert (~gdf.geometry.is_valid).sum() == 0, "Found invalid geometries!"
    assert gdf.geometry.is_empty.sum() == 0, "Found empty geometries!"
    return f"✓ All {len(gdf)} geometries are valid"


def check_crs(gdf, expected_crs=config.CRS_WEB):
    """Assert CRS matches expected."""
    assert gdf.crs == expected_crs, f"CRS mismatch: {gdf.crs} != {expected_crs}"
    return f"✓ CRS is {expected_crs}"


def check_date_range(df, date_col="date"):
    """Check date range and missing values."""
    assert date_col in df.columns, f"{date_col} column not found"
    assert df[date_col].isnull().sum() == 0, f"Null dates in {date_col}"
    return f"✓ Date range: {df[date_col].min()} to {df[date_col].max()}"


def check_calendar_fields(df, date_col="date"):
    """Assert year/month/day/julian agree with the date column."""
    dates = df[date_col]
    assert (df["year"] == dates.dt.year).all(), "year does not match date"
    assert (df["month"] == dates.dt.month).all(), "month does not match date"
    assert (df["day"] == dates.dt.day).all(), "day does not match date"
    assert df["julian"].between(1, 366).all(), "julian outside 1-366"
    assert (df["julian"] == dates.dt.dayofyear).all(), "julian does not match date"
    return f"✓ Calendar fields consistent (julian {df['julian'].min()}-{df['julian'].max()})"


def check_season_values(df, season_col="season"):
    """Assert season holds only the four ordered categories."""
    assert df[season_col].notna().all(), "Null seasons found!"
    assert set(df[season_col].unique()) <= set(config.SEASONS), (
        f"Unexpected seasons: {set(df[season_col].unique()) - set(config.SEASONS)}"
    )
    assert list(df[season_col].cat.categories) == list(config.SEASONS), "Season order changed!"
    return f"✓ Seasons in {list(config.SEASONS)}"


def check_marker_text(df, column=config.MARKER_TEXT_COLUMN):
    """Assert every row carries a non-empty marker text."""
    assert column in df.columns, f"{column} column not found"
    empty = (df[column].isna() | (df[column].astype(str).str.len() == 0)).sum()
    assert empty == 0, f"{empty} rows without {column}"
    return f"✓ {column} present on all {len(df)} rows"


def run_qc(tables):
    """
    Run the standard checks on the dict returned by pipeline.prepare_tables.

    Returns:
        List of (name, passed, message) tuples; each is also logged
    """
    checks = [
        ("Weather: dates", check_date_range, {"df": tables["weather"]}),
        ("Weather: calendar fields", check_calendar_fields, {"df": tables["weather"]}),
        ("Weather: seasons", check_season_values, {"df": tables["weather"]}),
        ("Weather: marker text", check_marker_text, {"df": tables["weather"]}),
    ]
    for key in ("study_area", "sites", "poi"):
        gdf = tables[key]
        checks += [
            (f"{key}: CRS", check_crs, {"gdf": gdf}),
            (f"{key}: geometries", check_geometry_validity, {"gdf": gdf}),
            (f"{key}: marker text", check_marker_text, {"df": gdf}),
        ]

    return qc_report(checks)


def qc_report(checks):
    """
    Run checks and log a formatted QC report.

    Args:
        checks: List of (name, check_func, kwargs) tuples

    Returns:
        List of (name, passed, message) tuples
    """
    results = []
    logger.info("QUALITY CONTROL REPORT")

    for name, check_func, kwargs in checks:
        try:
            message = check_func(**kwargs)
            results.append((name, True, message))
            logger.info("%s: %s", name, message)
        except AssertionError as e:
            results.append((name, False, str(e)))
            logger.error("❌ %s: %s", name, e)

    return results
