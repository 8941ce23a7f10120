"""Text table and JSON summary for per-state extremes."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from zipextremes.common.config_loader import TableLayout
from zipextremes.common.constants import DEFAULT_CONFIG
from zipextremes.common.fs import write_json
from zipextremes.pipeline.extremes import SLOT_RULES, StateExtremes

TABLE_HEADERS = ("State", "Easternmost", "Westernmost", "Northernmost", "Southernmost")
DEFAULT_LAYOUT = TableLayout(**DEFAULT_CONFIG["report"])


def format_code(code: int | None, width: int) -> str:
    if code is None:
        return ""
    return f"{code:0{width}d}"


def render_table(result: Mapping[str, StateExtremes], layout: TableLayout = DEFAULT_LAYOUT) -> list[str]:
    header = TABLE_HEADERS[0].ljust(layout.region_width) + "".join(
        title.ljust(layout.column_width) for title in TABLE_HEADERS[1:]
    )
    lines = [header.rstrip(), layout.rule_char * layout.rule_width]
    for state in sorted(result):
        cells = [format_code(code, layout.code_width) for code in result[state].codes()]
        row = state.ljust(layout.region_width) + "".join(cell.ljust(layout.column_width) for cell in cells)
        lines.append(row.rstrip())
    return lines


def render_preamble(source_name: str) -> str:
    return f"Reading ZIP code data from: {source_name}\nProcessing records...\n\n"


def render_results(
    record_count: int,
    result: Mapping[str, StateExtremes],
    layout: TableLayout = DEFAULT_LAYOUT,
) -> str:
    lines = [
        f"Total records read: {record_count}",
        "",
        "Analysis Results:",
        "=================",
        "",
        *render_table(result, layout),
        "",
        f"Total states/territories: {len(result)}",
    ]
    return "\n".join(lines) + "\n"


def render_report(
    source_name: str,
    record_count: int,
    result: Mapping[str, StateExtremes],
    layout: TableLayout = DEFAULT_LAYOUT,
) -> str:
    return render_preamble(source_name) + render_results(record_count, result, layout)


def build_summary(
    source_name: str,
    record_count: int,
    result: Mapping[str, StateExtremes],
    *,
    run_id: str | None = None,
) -> dict:
    states = {}
    for state in sorted(result):
        extremes = result[state]
        states[state] = {
            name: {"code": getattr(extremes, name).code, attr: getattr(extremes, name).value}
            for name, attr, _beats in SLOT_RULES
        }
    return {
        "source": source_name,
        "run_id": run_id,
        "record_count": record_count,
        "state_count": len(result),
        "states": states,
    }


def write_summary_json(path: Path, summary: dict) -> Path:
    write_json(path, summary)
    return path
