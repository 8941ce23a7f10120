import json
from pathlib import Path

from zipextremes.common.config_loader import TableLayout
from zipextremes.common.fs import read_json
from zipextremes.common.models import ZipCodeRecord
from zipextremes.pipeline.extremes import aggregate
from zipextremes.pipeline.report import (
    build_summary,
    format_code,
    render_preamble,
    render_report,
    render_results,
    render_table,
    write_summary_json,
)


def _result():
    return aggregate(
        [
            ZipCodeRecord(501, "Holtsville", "NY", "Suffolk", 40.8, -73.0),
            ZipCodeRecord(14701, "Jamestown", "NY", "Chautauqua", 42.1, -79.2),
            ZipCodeRecord(1001, "Agawam", "MA", "Hampden", 42.0, -72.6),
        ]
    )


def test_format_code_zero_pads():
    assert format_code(501, 5) == "00501"
    assert format_code(123456, 5) == "123456"
    assert format_code(None, 5) == ""


def test_render_table_layout():
    lines = render_table(_result())
    assert lines[0] == "State   Easternmost    Westernmost    Northernmost   Southernmost"
    assert lines[1] == "-" * 68
    assert lines[2] == "MA      01001          01001          01001          01001"
    assert lines[3] == "NY      14701          00501          14701          00501"
    assert len(lines) == 4


def test_render_table_honours_layout():
    layout = TableLayout(region_width=4, column_width=8, code_width=6, rule_char="=")
    lines = render_table(_result(), layout)
    assert lines[1] == "=" * 36
    assert lines[2] == "MA  001001  001001  001001  001001"


def test_render_report_wraps_table_with_counts():
    text = render_report("zips.csv", 3, _result())
    lines = text.splitlines()
    assert lines[0] == "Reading ZIP code data from: zips.csv"
    assert "Total records read: 3" in lines
    assert lines[-1] == "Total states/territories: 2"
    assert text.endswith("\n")


def test_summary_json_is_written_with_coordinates(tmp_path: Path):
    summary = build_summary("zips.csv", 3, _result(), run_id="run-test")
    path = write_summary_json(tmp_path / "out" / "summary.json", summary)

    payload = read_json(path)
    assert payload["state_count"] == 2
    assert payload["record_count"] == 3
    assert payload["run_id"] == "run-test"
    assert payload["states"]["NY"]["easternmost"] == {"code": 14701, "longitude": -79.2}
    assert payload["states"]["NY"]["northernmost"] == {"code": 14701, "latitude": 42.1}
    assert list(payload["states"]) == ["MA", "NY"]


def test_summary_does_not_depend_on_signed_zero_order():
    first = [ZipCodeRecord(2, "B", "HI", "X", 20.0, -0.0), ZipCodeRecord(1, "A", "HI", "X", 20.0, 0.0)]
    one = json.dumps(build_summary("zips.csv", 2, aggregate(first)), sort_keys=True)
    two = json.dumps(build_summary("zips.csv", 2, aggregate(list(reversed(first)))), sort_keys=True)
    assert one == two
    assert '"longitude": 0.0' in one


def test_render_report_is_preamble_plus_results():
    result = _result()
    assert render_report("zips.csv", 3, result) == render_preamble("zips.csv") + render_results(3, result)
