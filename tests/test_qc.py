"""
Test the quality-control checks on prepared tables.
"""
import pytest

from geoviz import qc


def test_prepared_tables_pass_all_checks(prepared_tables):
    results = qc.run_qc(prepared_tables)
    failed = [(name, message) for name, passed, message in results if not passed]
    assert failed == []
    assert len(results) == 13


def test_check_crs_rejects_projected_layer(raw_sites):
    with pytest.raises(AssertionError):
        qc.check_crs(raw_sites)


def test_calendar_mismatch_reported(prepared_tables):
    weather = prepared_tables["weather"].copy()
    weather.loc[weather.index[0], "julian"] = 400
    results = qc.qc_report([("Weather: calendar fields", qc.check_calendar_fields, {"df": weather})])
    name, passed, message = results[0]
    assert not passed
    assert "julian" in message


def test_empty_marker_text_reported(prepared_tables):
    sites = prepared_tables["sites"].copy()
    sites.loc[sites.index[0], "marker_text"] = ""
    with pytest.raises(AssertionError, match="1 rows without marker_text"):
        qc.check_marker_text(sites)


def test_season_check(prepared_tables):
    assert qc.check_season_values(prepared_tables["weather"]).startswith("✓")
