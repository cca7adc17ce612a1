"""
Test the altair scatter variants and the plotly timeline.
"""
import pandas as pd
import pytest

from geoviz.charts import InteractionStyle, declarative_scatter, interactive_scatter, make_interactive
from geoviz.errors import DomainError, SchemaError
from geoviz.timeline import HOVER_TEMPLATE, TimelineStyle, timeline_scatter


@pytest.fixture
def weather(prepared_tables):
    return prepared_tables["weather"]


def _param(spec, name):
    return next(p for p in spec["params"] if p["name"] == name)


class TestDeclarativeScatter:

    def test_static_spec_has_no_interaction(self, weather):
        spec = declarative_scatter(weather).to_dict()
        assert "params" not in spec
        assert "tooltip" not in spec["encoding"]
        assert spec["encoding"]["x"]["field"] == "julian"
        assert spec["encoding"]["color"]["scale"]["domain"] == ["winter", "spring", "summer", "fall"]

    def test_make_interactive_keeps_encoding(self, weather):
        static = declarative_scatter(weather)
        static_spec = static.to_dict()
        spec = make_interactive(static, ["date", "mean_airtemp"]).to_dict()

        for channel in ("x", "y", "color"):
            assert spec["encoding"][channel] == static_spec["encoding"][channel]
        assert [t["field"] for t in spec["encoding"]["tooltip"]] == ["date", "mean_airtemp"]
        assert any(p.get("bind") == "scales" for p in spec["params"])
        # The static chart is left as it was
        assert "tooltip" not in static.to_dict()["encoding"]

    def test_unknown_tooltip_field_raises(self, weather):
        with pytest.raises(SchemaError):
            make_interactive(declarative_scatter(weather), ["elevation"])

    def test_missing_column_raises(self, weather):
        with pytest.raises(SchemaError):
            declarative_scatter(weather.drop(columns="season"))


class TestInteractiveScatter:

    def test_hover_and_selection_params(self, weather):
        spec = interactive_scatter(weather).to_dict()
        hover = _param(spec, "hover")
        select = _param(spec, "select")
        assert hover["select"]["on"] == "mouseover"
        assert hover["select"]["fields"] == ["date"]
        assert select["select"]["toggle"] is False
        assert spec["encoding"]["opacity"]["condition"]["value"] == 1.0
        assert spec["encoding"]["opacity"]["value"] == 0.6

    def test_multiple_selection_toggles(self, weather):
        spec = interactive_scatter(weather, style=InteractionStyle(selection="multiple")).to_dict()
        assert _param(spec, "select")["select"]["toggle"] == "true"

    def test_custom_style(self, weather):
        style = InteractionStyle(opacity=0.3, hover_opacity=0.9)
        spec = interactive_scatter(weather, style=style).to_dict()
        assert spec["encoding"]["opacity"]["value"] == 0.3
        assert spec["encoding"]["opacity"]["condition"]["value"] == 0.9

    def test_invalid_selection_mode(self):
        with pytest.raises(DomainError):
            InteractionStyle(selection="lasso")

    def test_missing_data_id_raises(self, weather):
        with pytest.raises(SchemaError):
            interactive_scatter(weather, data_id="record_id")


class TestTimelineScatter:

    def test_one_frame_per_year(self, weather):
        fig = timeline_scatter(weather)
        assert [f.name for f in fig.frames] == ["2020", "2021"]
        assert fig.layout.sliders

    def test_shared_color_range(self, weather):
        fig = timeline_scatter(weather)
        assert fig.layout.coloraxis.cmin == weather["mean_airtemp"].min()
        assert fig.layout.coloraxis.cmax == weather["mean_airtemp"].max()

    def test_explicit_color_range(self, weather):
        fig = timeline_scatter(weather, style=TimelineStyle(color_range=(-20, 30)))
        assert (fig.layout.coloraxis.cmin, fig.layout.coloraxis.cmax) == (-20, 30)

    def test_hover_uses_marker_text(self, weather):
        fig = timeline_scatter(weather)
        assert fig.data[0].hovertemplate == HOVER_TEMPLATE
        assert all(t.hovertemplate == HOVER_TEMPLATE for f in fig.frames for t in f.data)
        assert "Mean air temp (C):" in fig.data[0].customdata[0][0]

    def test_non_numeric_color_raises(self, weather):
        with pytest.raises(DomainError):
            timeline_scatter(weather, color="season")

    def test_missing_frame_column_raises(self, weather):
        with pytest.raises(SchemaError):
            timeline_scatter(pd.DataFrame(weather).drop(columns="year"))
