"""
Map renderer: toggleable folium layers with popups and a group/color legend.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple
import logging

import folium
import geopandas as gpd
import numpy as np
import pandas as pd
from branca.element import MacroElement, Template

from . import config
from .errors import DomainError, SchemaError
from .spatial import reproject
from .symbology import ColorMapping

logger = logging.getLogger(__name__)

LAYER_KINDS = ("point", "polygon")


@dataclass(frozen=True)
class LayerStyle:
    """How one layer is drawn. Either a fixed `color` or a `color_mapping` over `category_column`."""

    group: str
    kind: str = "point"
    color: str = "#3388ff"
    color_mapping: Optional[ColorMapping] = None
    category_column: Optional[str] = None
    radius: float = 6
    weight: float = 1
    fill_opacity: float = 0.7
    popup_column: str = config.MARKER_TEXT_COLUMN
    popup_max_width: int = 250

    def __post_init__(self):
        if self.kind not in LAYER_KINDS:
            raise DomainError(f"Layer kind must be one of {LAYER_KINDS}, got {self.kind!r}")
        if self.color_mapping is not None and self.category_column is None:
            raise SchemaError(f"Layer {self.group!r} has a color mapping but no category column")

    def color_for(self, row) -> str:
        """Category color, or the fixed `color` when unmapped or the category is null."""
        if self.color_mapping is None:
            return self.color
        value = row[self.category_column]
        if pd.isna(value):
            return self.color
        return self.color_mapping(value)

    def legend_items(self, table=None) -> List[Tuple[str, str]]:
        if self.color_mapping is None:
            return [(self.group, self.color)]
        items = [(f"{self.group}: {label}", color) for label, color in self.color_mapping.legend_items()]
        if table is not None and table[self.category_column].isna().any():
            items.append((f"{self.group}: (no {self.category_column})", self.color))
        return items


class LayerLegend(MacroElement):
    """Fixed-position legend listing (label, color) swatches."""

    _template = Template("""
    {% macro header(this, kwargs) %}
        <style>
            #{{ this.get_name() }} {
                position: fixed;
                bottom: 30px;
                left: 30px;
                z-index: 1000;
                background: white;
                padding: 8px 10px;
                border-radius: 5px;
                box-shadow: 0 0 5px rgba(0,0,0,0.2);
                font-family: Arial, sans-serif;
                font-size: 12px;
            }
            #{{ this.get_name() }} .legend-title {
                font-weight: bold;
                margin-bottom: 6px;
            }
            #{{ this.get_name() }} .legend-swatch {
                display: inline-block;
                width: 12px;
                height: 12px;
                margin-right: 6px;
                vertical-align: middle;
                border: 1px solid #555;
            }
        </style>
    {% endmacro %}

    {% macro html(this, kwargs) %}
        <div id="{{ this.get_name() }}">
            {% if this.title %}
            <div class="legend-title">{{ this.title|e }}</div>
            {% endif %}
            {% for label, color in this.items %}
            <div><span class="legend-swatch" style="background: {{ color }};"></span>{{ label|e }}</div>
            {% endfor %}
        </div>
    {% endmacro %}
    """)

    def __init__(self, items, title=""):
        super().__init__()
        self._name = "LayerLegend"
        self.items = list(items)
        self.title = title


def _add_points(group, gdf, style):
    skipped = 0
    for _, row in gdf.iterrows():
        geom = row.geometry
        if geom is None or geom.is_empty:
            skipped += 1
            continue
        color = style.color_for(row)
        folium.CircleMarker(
            location=[geom.y, geom.x],
            radius=style.radius,
            popup=folium.Popup(row[style.popup_column], max_width=style.popup_max_width),
            tooltip=style.group,
            color=color,
            fill=True,
            fillColor=color,
            fillOpacity=style.fill_opacity,
            weight=style.weight,
        ).add_to(group)
    return skipped


def _add_polygons(group, gdf, style):
    skipped = 0
    for _, row in gdf.iterrows():
        geom = row.geometry
        if geom is None or geom.is_empty:
            skipped += 1
            continue
        color = style.color_for(row)
        folium.GeoJson(
            gpd.GeoSeries([geom]).__geo_interface__,
            style_function=lambda x, c=color, w=style.weight, op=style.fill_opacity: {
                "fillColor": c,
                "color": c,
                "weight": w,
                "fillOpacity": op,
            },
            popup=folium.Popup(row[style.popup_column], max_width=style.popup_max_width),
        ).add_to(group)
    return skipped


def render_layer_map(layers, tiles="CartoDB positron", legend_title="Layers"):
    """
    Render an ordered list of (GeoDataFrame, LayerStyle) pairs on one map.

    Each layer becomes a folium FeatureGroup named by its style's group, so
    the layer control toggles it independently. Layers are reprojected to
    EPSG:4326 and the map is fitted to their combined bounds.

    Args:
        layers: ordered list of (GeoDataFrame, LayerStyle)
        tiles: folium base-layer identifier
        legend_title: heading of the legend box

    Returns:
        folium.Map
    """
    if not layers:
        raise DomainError("No layers to render")

    web_layers = []
    for gdf, style in layers:
        needed = [style.popup_column] + ([style.category_column] if style.category_column else [])
        missing = [c for c in needed if c not in gdf.columns]
        if missing:
            raise SchemaError(f"Layer {style.group!r} is missing columns: {missing}", missing=missing)
        web_layers.append((reproject(gdf, config.CRS_WEB), style))

    bounds = np.array([gdf.total_bounds for gdf, _ in web_layers if len(gdf)])
    m = folium.Map(tiles=tiles, control_scale=True)
    if len(bounds) and not np.isnan(bounds).any():
        minx, miny = bounds[:, 0].min(), bounds[:, 1].min()
        maxx, maxy = bounds[:, 2].max(), bounds[:, 3].max()
        m.fit_bounds([[miny, minx], [maxy, maxx]])

    legend_items = []
    for gdf, style in web_layers:
        group = folium.FeatureGroup(name=style.group, show=True)
        if style.kind == "polygon":
            skipped = _add_polygons(group, gdf, style)
        else:
            skipped = _add_points(group, gdf, style)
        if skipped:
            logger.warning("Layer %r: skipped %d empty geometries", style.group, skipped)
        group.add_to(m)
        legend_items.extend(style.legend_items(gdf))
        logger.info("Layer %r: %d features", style.group, len(gdf) - skipped)

    LayerLegend(legend_items, title=legend_title).add_to(m)
    folium.LayerControl(collapsed=False).add_to(m)

    return m
