"""
Plotly timeline scatter: one animation frame per group key with a scrubber.
"""

from dataclasses import dataclass
from typing import Optional, Tuple
import logging

import pandas as pd
import plotly.express as px

from . import config
from .charts import AXIS_TITLES
from .errors import DomainError, SchemaError

logger = logging.getLogger(__name__)

HOVER_TEMPLATE = "%{customdata[0]}<extra></extra>"


@dataclass(frozen=True)
class TimelineStyle:
    color_scale: str = config.TIMELINE_COLOR_SCALE
    # None: computed once from the whole table and shared by every frame
    color_range: Optional[Tuple[float, float]] = None
    opacity: float = 0.8
    marker_size: int = 8
    frame_duration_ms: int = 800


def _padded_range(s, pad=0.05):
    lo, hi = float(s.min()), float(s.max())
    span = (hi - lo) or 1.0
    return [lo - span * pad, hi + span * pad]


def timeline_scatter(table, x="julian", y="mean_airtemp", color="mean_airtemp", frame="year",
                     style=None, hover_column=config.MARKER_TEXT_COLUMN, title=None):
    """
    Scatter with a time-indexed scrubber over `frame`.

    Color scale and axis ranges are computed from the whole table so every
    frame is drawn on the same scale.

    Args:
        table: DataFrame with x, y, color, frame and hover columns
        color: numeric column mapped onto `style.color_scale`
        frame: grouping key driving the scrubber (e.g. year)
        style: TimelineStyle
        hover_column: column shown on hover (HTML marker text)

    Returns:
        plotly.graph_objects.Figure
    """
    style = style or TimelineStyle()

    needed = list(dict.fromkeys([x, y, color, frame, hover_column]))
    missing = [c for c in needed if c not in table.columns]
    if missing:
        raise SchemaError(f"Timeline columns not found: {missing}", missing=missing)
    if not pd.api.types.is_numeric_dtype(table[color]):
        raise DomainError(f"Timeline color column '{color}' must be numeric")

    data = pd.DataFrame(table)[needed].sort_values([frame, x])

    color_range = style.color_range or (float(data[color].min()), float(data[color].max()))

    fig = px.scatter(
        data,
        x=x,
        y=y,
        color=color,
        animation_frame=frame,
        range_color=color_range,
        color_continuous_scale=style.color_scale,
        range_x=_padded_range(data[x]),
        range_y=_padded_range(data[y]),
        custom_data=[hover_column],
        labels={c: AXIS_TITLES.get(c, c) for c in needed},
        opacity=style.opacity,
        title=title,
    )

    fig.update_traces(hovertemplate=HOVER_TEMPLATE, marker_size=style.marker_size)
    for fig_frame in fig.frames:
        for trace in fig_frame.data:
            trace.hovertemplate = HOVER_TEMPLATE
            trace.marker.size = style.marker_size

    if fig.layout.updatemenus:
        play = fig.layout.updatemenus[0].buttons[0]
        args = list(play.args)
        args[1] = {**args[1], "frame": {"duration": style.frame_duration_ms, "redraw": False}}
        play.args = args

    logger.debug("Timeline scatter: %d frames over '%s'", len(fig.frames), frame)
    return fig
