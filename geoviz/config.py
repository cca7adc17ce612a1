"""
Configuration module: paths, CRS constants, templates, and default styles.
"""

from pathlib import Path
import logging
import os

# ============================================================================
# PROJECT PATHS (all relative to PROJECT_ROOT)
# ============================================================================

def get_project_root():
    """Auto-detect project root by checking for data/ and geoviz/ folders."""
    env_root = os.getenv("GEOVIZ_PROJECT_ROOT")
    if env_root:
        return Path(env_root).expanduser().resolve()

    cwd = Path.cwd()

    # If already in project root
    if (cwd / "data").exists() and (cwd / "geoviz").exists():
        return cwd

    # If in scripts/ or webmap/
    if cwd.name in ["scripts", "webmap"] and (cwd.parent / "data").exists():
        return cwd.parent

    # Fallback: the checkout that holds this package
    return Path(__file__).resolve().parent.parent

PROJECT_ROOT = get_project_root()

# Core data paths
DATA_DIR = PROJECT_ROOT / "data"
ORIGINAL_DIR = DATA_DIR / "original"
OUTPUTS_DIR = PROJECT_ROOT / "outputs"
DOCUMENT_DIR = OUTPUTS_DIR / "document"

# Input files (raw data)
INPUT_FILES = {
    "study_area": ORIGINAL_DIR / "study_area.shp",
    "sites": ORIGINAL_DIR / "sites.shp",
    "poi": ORIGINAL_DIR / "points_of_interest.csv",
    "weather": ORIGINAL_DIR / "weather_daily.csv",
}

# Output files (rendered document)
OUTPUT_FILES = {
    "map": "map.html",
    "scatter_declarative": "scatter_declarative.html",
    "scatter_interactive": "scatter_interactive.html",
    "scatter_timeline": "scatter_timeline.html",
    "index": "index.html",
}

# ============================================================================
# GEOSPATIAL & CRS CONSTANTS
# ============================================================================

# Web mapping CRS (WGS84 - standard for all web outputs)
CRS_WEB = "EPSG:4326"

# Points-of-interest table ships x/y in WGS84 / UTM zone 13N
CRS_POI = "EPSG:32613"
POI_X_FIELD = "x"
POI_Y_FIELD = "y"

# ============================================================================
# CLEANING CONSTANTS
# ============================================================================

MISSING_SENTINEL = "NaN"
MISSING_REPLACEMENT = "none"

MARKER_TEXT_COLUMN = "marker_text"
MARKER_TEXT_SEPARATOR = "<br>"
MARKER_TEXT_PLACEHOLDER = ""

SEASONS = ("winter", "spring", "summer", "fall")

# Popup field order is display order
WEATHER_MARKER_TEMPLATE = (
    ("Date", "date"),
    ("Mean air temp (C)", "mean_airtemp"),
    ("Daily precip (mm)", "daily_precip"),
    ("Mean wind speed (m/s)", "mean_windspeed"),
    ("Season", "season"),
)

SITE_MARKER_TEMPLATE = (
    ("Name", "name"),
    ("Type", "type"),
    ("Comment", "comment"),
)

BOUNDARY_MARKER_TEMPLATE = (
    ("Area", "name"),
)

POI_MARKER_TEMPLATE = (
    ("Name", "name"),
    ("Type", "type"),
)

# ============================================================================
# PALETTES
# ============================================================================

SITE_TYPE_PALETTE = "husl"
SEASON_PALETTE = ("#2c7bb6", "#1a9641", "#d7191c", "#fdae61")
TIMELINE_COLOR_SCALE = "RdYlBu_r"

# ============================================================================
# LOGGING & VERBOSITY
# ============================================================================

LOG_LEVEL = "INFO"  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level=None):
    """Attach a single stream handler to the root logger (scripts and viewer only)."""
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)


def log_config():
    """Log all configuration settings."""
    logger = logging.getLogger(__name__)
    logger.info("PROJECT ROOT: %s", PROJECT_ROOT)
    logger.info("DATA DIR: %s", DATA_DIR)
    logger.info("DOCUMENT DIR: %s", DOCUMENT_DIR)
    logger.info("CRS web (output): %s, points of interest: %s", CRS_WEB, CRS_POI)
