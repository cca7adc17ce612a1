"""
I/O module: load input tables and vector layers, write rendered artifacts.
"""

import logging
from pathlib import Path

import geopandas as gpd
import pandas as pd

from . import config

logger = logging.getLogger(__name__)


def load_csv(filepath, **kwargs):
    """
    Load CSV file with error handling.

    Args:
        filepath: Path to CSV file
        **kwargs: Additional arguments for pd.read_csv()

    Returns:
        pd.DataFrame
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"CSV file not found: {filepath}")

    df = pd.read_csv(filepath, **kwargs)
    logger.info("Loaded %s: %d rows", filepath.name, len(df))
    return df


def load_vector(filepath, **kwargs):
    """
    Load a vector layer (shapefile, GeoJSON, GeoPackage).

    The CRS is kept as declared by the source; a missing CRS is handled by
    spatial.clean_layer_geometries.

    Args:
        filepath: Path to the layer
        **kwargs: Additional arguments for gpd.read_file()

    Returns:
        geopandas.GeoDataFrame
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Vector layer not found: {filepath}")

    gdf = gpd.read_file(filepath, **kwargs)

    if gdf.crs is None:
        logger.warning("CRS missing in %s", filepath.name)

    logger.info("Loaded %s: %d features", filepath.name, len(gdf))
    return gdf


def load_inputs(input_files=None):
    """Read every configured input once; returns a dict keyed like config.INPUT_FILES."""
    input_files = input_files or config.INPUT_FILES
    return {
        "study_area": load_vector(input_files["study_area"]),
        "sites": load_vector(input_files["sites"]),
        "poi": load_csv(input_files["poi"]),
        "weather": load_csv(input_files["weather"]),
    }


def save_html(html, filepath):
    """
    Write an HTML string to disk.

    Returns:
        Path to saved file
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    filepath.write_text(html, encoding="utf-8")
    return filepath


def file_size_mb(filepath):
    """Get file size in MB."""
    return Path(filepath).stat().st_size / (1024 ** 2)
