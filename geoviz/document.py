"""
Document build: prepare every table, render the map and the three scatter
variants, and write them as standalone HTML plus an index page.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple
import logging

import altair as alt
import folium
import pandas as pd
import plotly.graph_objects as go
from jinja2 import Template

from . import config
from .charts import InteractionStyle, declarative_scatter, interactive_scatter, make_interactive
from .errors import GeovizError
from .io import file_size_mb, load_inputs, save_html
from .maps import LayerStyle, render_layer_map
from .pipeline import prepare_tables
from .qc import run_qc
from .symbology import build_color_mapping
from .timeline import TimelineStyle, timeline_scatter

logger = logging.getLogger(__name__)

INDEX_TEMPLATE = Template("""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>{{ title }}</title>
  <style>
    body { font-family: Arial, sans-serif; max-width: 1000px; margin: 2em auto; color: #333; }
    iframe { width: 100%; border: 1px solid #ddd; }
  </style>
</head>
<body>
  <h1>{{ title }}</h1>
  {% for section in sections %}
  <h2>{{ section.heading }}</h2>
  <p>{{ section.text }}</p>
  <iframe src="{{ section.file }}" height="{{ section.height }}"></iframe>
  {% endfor %}
</body>
</html>
""")

SECTIONS = (
    {"key": "map", "heading": "Interactive map",
     "text": "Study area, sites colored by type, and points of interest. Toggle layers with the layer control.",
     "height": 560},
    {"key": "scatter_declarative", "heading": "Scatter: static spec made interactive",
     "text": "Mean air temperature by day of year, colored by season. Hover for details; drag and scroll to pan and zoom.",
     "height": 460},
    {"key": "scatter_interactive", "heading": "Scatter: hover and selection",
     "text": "The same plot with marks that highlight on hover and can be selected by clicking.",
     "height": 460},
    {"key": "scatter_timeline", "heading": "Scatter: timeline by year",
     "text": "The same plot animated by year, colored on one shared temperature scale.",
     "height": 560},
)


@dataclass
class DocumentArtifacts:
    tables: Dict[str, pd.DataFrame]
    layers: List[Tuple[pd.DataFrame, LayerStyle]]
    map: folium.Map
    scatter_declarative: alt.Chart
    scatter_interactive: alt.Chart
    scatter_timeline: go.Figure
    paths: Dict[str, Path] = field(default_factory=dict)


def build_layers(tables, site_palette=config.SITE_TYPE_PALETTE):
    """Map layers in drawing order, sites colored by type."""
    site_colors = build_color_mapping(tables["sites"], "type", site_palette)
    return [
        (tables["study_area"], LayerStyle("Study area", kind="polygon", color="#636363",
                                          weight=2, fill_opacity=0.15)),
        (tables["sites"], LayerStyle("Sites", kind="point", color_mapping=site_colors,
                                     category_column="type", radius=7)),
        (tables["poi"], LayerStyle("Points of interest", kind="point", color="#e6550d", radius=5)),
    ]


def render_artifacts(tables, layers, interaction_style=None, timeline_style=None):
    """Render the map and the three scatter variants from prepared tables."""
    weather = tables["weather"]

    m = render_layer_map(layers)
    declarative = make_interactive(
        declarative_scatter(weather, title="Mean air temperature by day of year")
    )
    interactive = interactive_scatter(
        weather,
        style=interaction_style or InteractionStyle(selection="multiple"),
        title="Mean air temperature by day of year",
    )
    timeline = timeline_scatter(
        weather,
        style=timeline_style or TimelineStyle(),
        title="Mean air temperature by day of year, per year",
    )
    return m, declarative, interactive, timeline


def write_document(artifacts, output_dir, title="Interactive maps and charts"):
    """
    Write each artifact as standalone HTML plus index.html.

    Every artifact is rendered to a string before any file is written.

    Returns:
        Dict of output key -> written path
    """
    output_dir = Path(output_dir)

    rendered = {
        "map": artifacts.map.get_root().render(),
        "scatter_declarative": artifacts.scatter_declarative.to_html(),
        "scatter_interactive": artifacts.scatter_interactive.to_html(),
        "scatter_timeline": artifacts.scatter_timeline.to_html(include_plotlyjs="cdn", full_html=True),
    }
    sections = [{**s, "file": config.OUTPUT_FILES[s["key"]]} for s in SECTIONS]
    rendered["index"] = INDEX_TEMPLATE.render(title=title, sections=sections)

    paths = {}
    for key, html in rendered.items():
        paths[key] = save_html(html, output_dir / config.OUTPUT_FILES[key])
        logger.info("Wrote %s (%.2f MB)", paths[key], file_size_mb(paths[key]))

    return paths


def build_document(input_files=None, output_dir=None, inputs=None):
    """
    Load -> clean -> derive -> render -> write, stopping at the first error.

    Args:
        input_files: dict like config.INPUT_FILES (defaults to it)
        output_dir: where the HTML files go (defaults to config.DOCUMENT_DIR);
            None together with `inputs` skips writing
        inputs: already-loaded raw tables, bypassing file reads

    Returns:
        DocumentArtifacts
    """
    if inputs is None:
        inputs = load_inputs(input_files)
        output_dir = output_dir or config.DOCUMENT_DIR

    tables = prepare_tables(inputs)

    failed = [(name, message) for name, passed, message in run_qc(tables) if not passed]
    if failed:
        raise GeovizError(f"Quality control failed: {failed}")

    layers = build_layers(tables)
    m, declarative, interactive, timeline = render_artifacts(tables, layers)

    artifacts = DocumentArtifacts(
        tables=tables,
        layers=layers,
        map=m,
        scatter_declarative=declarative,
        scatter_interactive=interactive,
        scatter_timeline=timeline,
    )

    if output_dir is not None:
        artifacts.paths = write_document(artifacts, output_dir)

    return artifacts
