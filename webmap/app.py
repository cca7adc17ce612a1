#!/usr/bin/env python
"""
Interactive viewer for the maps-and-charts document.

Purpose
-------
Show the same map and scatter variants the document build writes, with
layer toggles and a selection-mode switch in the sidebar.

Expected inputs
---------------
- data/original/study_area.shp
- data/original/sites.shp
- data/original/points_of_interest.csv
- data/original/weather_daily.csv

Output
------
Rendered Streamlit interface (no file writes).
"""

import sys
from pathlib import Path

import streamlit as st
from streamlit_folium import st_folium

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from geoviz import config
from geoviz.charts import InteractionStyle, declarative_scatter, interactive_scatter, make_interactive
from geoviz.document import build_layers
from geoviz.io import load_inputs
from geoviz.maps import render_layer_map
from geoviz.pipeline import prepare_tables
from geoviz.timeline import timeline_scatter

# ============================================================================
# SETUP
# ============================================================================
st.set_page_config(page_title="Interactive maps and charts", layout="wide")
st.markdown("# Interactive maps and charts")
st.markdown("Study-area layers and a daily weather series, rendered with folium, altair and plotly.")

config.configure_logging()


def get_missing_paths(required_paths):
    return [
        f"{name}: {path}"
        for name, path in required_paths.items()
        if not Path(path).exists()
    ]

# ============================================================================
# LOAD DATA
# ============================================================================
@st.cache_data
def load_tables():
    return prepare_tables(load_inputs(config.INPUT_FILES))


missing_paths = get_missing_paths(config.INPUT_FILES)
if missing_paths:
    st.error(
        "Missing required inputs.\n"
        f"Project root in use: {config.PROJECT_ROOT}\n"
        "Missing files:\n- " + "\n- ".join(missing_paths)
    )
    st.stop()

try:
    tables = load_tables()
    st.info("Data loaded successfully.")
except Exception as e:
    st.error(f"Error loading data: {e}")
    st.stop()

# ============================================================================
# SIDEBAR CONTROLS
# ============================================================================
st.sidebar.markdown("## Options")

tiles = st.sidebar.selectbox(
    "Base layer",
    ("CartoDB positron", "OpenStreetMap", "CartoDB dark_matter"),
)

selection_mode = st.sidebar.radio(
    "Scatter selection",
    ("single", "multiple"),
    key="selection_mode",
)

years = sorted(tables["weather"]["year"].unique())
year_range = st.sidebar.select_slider(
    "Years",
    options=years,
    value=(years[0], years[-1]),
)

weather = tables["weather"][tables["weather"]["year"].between(*year_range)]
st.sidebar.markdown(f"### {len(weather)} / {len(tables['weather'])} days")

# ============================================================================
# MAP
# ============================================================================
st.markdown("### Map")
m = render_layer_map(build_layers(tables), tiles=tiles)
st_folium(m, width=1200, height=550)

# ============================================================================
# SCATTER VARIANTS
# ============================================================================
st.markdown("---")
st.markdown("### Mean air temperature by day of year")

col1, col2 = st.columns(2)

with col1:
    st.markdown("#### Static spec made interactive")
    st.altair_chart(make_interactive(declarative_scatter(weather, width=450)))

with col2:
    st.markdown("#### Hover and selection")
    st.altair_chart(
        interactive_scatter(weather, style=InteractionStyle(selection=selection_mode), width=450)
    )

st.markdown("#### Timeline by year")
st.plotly_chart(timeline_scatter(weather), use_container_width=True)
