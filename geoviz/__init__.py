"""
Interactive maps and charts
Package for preparing geospatial layers and a weather series for folium,
altair and plotly renderings.
"""

__version__ = "1.0.0"

# Lazy imports to avoid long startup times
# Import as needed in code

__all__ = [
    "config", "errors", "schema", "io", "cleaning", "dates", "spatial", "symbology",
    "pipeline", "qc", "maps", "charts", "timeline", "document",
]
