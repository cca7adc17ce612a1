"""
Altair scatter charts: a declarative spec made interactive, and marks with
built-in hover and click selection.
"""

from dataclasses import dataclass
import logging

import altair as alt
import pandas as pd

from . import config
from .errors import DomainError, SchemaError

logger = logging.getLogger(__name__)

SELECTION_MODES = ("single", "multiple")

AXIS_TITLES = {
    "julian": "Day of year",
    "mean_airtemp": "Mean air temp (C)",
    "daily_precip": "Daily precip (mm)",
    "mean_windspeed": "Mean wind speed (m/s)",
    "season": "Season",
    "year": "Year",
}

WEATHER_TOOLTIP = ("date", "mean_airtemp", "daily_precip", "mean_windspeed", "season")


@dataclass(frozen=True)
class InteractionStyle:
    opacity: float = 0.6
    hover_opacity: float = 1.0
    hover_stroke: str = "black"
    selection: str = "single"
    size: int = 60

    def __post_init__(self):
        if self.selection not in SELECTION_MODES:
            raise DomainError(f"Selection must be one of {SELECTION_MODES}, got {self.selection!r}")


def _require(table, columns):
    missing = [c for c in columns if c not in table.columns]
    if missing:
        raise SchemaError(f"Chart columns not found: {missing}", missing=missing)


def _chart_data(table):
    # Geometry is not chartable; everything else stays available for tooltips
    return pd.DataFrame(table).drop(columns="geometry", errors="ignore")


def color_encoding(color, palette=config.SEASON_PALETTE):
    """Season keeps its fixed order and colors; other fields use altair defaults."""
    if color == "season":
        return alt.Color(
            "season:N",
            sort=list(config.SEASONS),
            scale=alt.Scale(domain=list(config.SEASONS), range=list(palette)),
            title=AXIS_TITLES["season"],
        )
    return alt.Color(f"{color}:N", title=AXIS_TITLES.get(color, color))


def declarative_scatter(table, x="julian", y="mean_airtemp", color="season",
                        title=None, palette=config.SEASON_PALETTE, width=600, height=350):
    """Static scatter spec bound to `table`; no interactivity yet."""
    _require(table, [x, y, color])

    return (
        alt.Chart(_chart_data(table), title=title or "")
        .mark_point(filled=True, size=60)
        .encode(
            x=alt.X(f"{x}:Q", title=AXIS_TITLES.get(x, x)),
            y=alt.Y(f"{y}:Q", title=AXIS_TITLES.get(y, y)),
            color=color_encoding(color, palette),
        )
        .properties(width=width, height=height)
    )


def make_interactive(chart, tooltip=WEATHER_TOOLTIP):
    """
    Add tooltips and pan/zoom to a static chart without touching its encoding.

    Raises:
        SchemaError: a tooltip field is not in the chart's data
    """
    if isinstance(chart.data, pd.DataFrame):
        _require(chart.data, tooltip)

    return chart.encode(tooltip=[alt.Tooltip(field) for field in tooltip]).interactive()


def interactive_scatter(table, x="julian", y="mean_airtemp", color="season",
                        tooltip=WEATHER_TOOLTIP, data_id="date", style=None,
                        title=None, palette=config.SEASON_PALETTE, width=600, height=350):
    """
    Scatter whose marks react to the pointer.

    Hovering raises a mark's opacity; clicking selects marks sharing the
    same `data_id` (one at a time, or toggling several with
    `style.selection == "multiple"`).
    """
    style = style or InteractionStyle()
    _require(table, [x, y, color, data_id, *tooltip])

    hover = alt.selection_point(
        name="hover", on="mouseover", fields=[data_id], empty=False, clear="mouseout"
    )
    select = alt.selection_point(
        name="select",
        fields=[data_id],
        empty=False,
        toggle="true" if style.selection == "multiple" else False,
    )

    chart = (
        alt.Chart(_chart_data(table), title=title or "")
        .mark_point(filled=True, size=style.size)
        .encode(
            x=alt.X(f"{x}:Q", title=AXIS_TITLES.get(x, x)),
            y=alt.Y(f"{y}:Q", title=AXIS_TITLES.get(y, y)),
            color=color_encoding(color, palette),
            opacity=alt.condition(hover, alt.value(style.hover_opacity), alt.value(style.opacity)),
            stroke=alt.value(style.hover_stroke),
            strokeWidth=alt.condition(select, alt.value(2), alt.value(0)),
            tooltip=[alt.Tooltip(field) for field in tooltip],
        )
        .add_params(hover, select)
        .properties(width=width, height=height)
    )

    logger.debug("Interactive scatter: %d marks, %s selection", len(table), style.selection)
    return chart
