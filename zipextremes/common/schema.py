"""Minimal strict schemas for YAML config validation."""

from __future__ import annotations

from zipextremes.common.errors import ConfigError


def _assert_mapping(obj, ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_positive_int(value, ctx: str) -> None:
    # bool is an int subclass; `true` in YAML is not a width.
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{ctx} must be a positive integer")


def validate_report_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    _assert_mapping(cfg, "report config")
    top_keys = {"reader", "report"}
    _assert_required_keys(cfg, top_keys, "report config")
    _assert_no_unknown_keys(cfg, top_keys, "report config", allow_unknown)

    reader = cfg["reader"]
    _assert_mapping(reader, "reader")
    _assert_required_keys(reader, {"encoding"}, "reader")
    _assert_no_unknown_keys(reader, {"encoding"}, "reader", allow_unknown)
    if not isinstance(reader["encoding"], str) or not reader["encoding"]:
        raise ConfigError("reader.encoding must be a non-empty string")

    report = cfg["report"]
    _assert_mapping(report, "report")
    report_keys = {"region_width", "column_width", "code_width", "rule_char"}
    _assert_required_keys(report, report_keys, "report")
    _assert_no_unknown_keys(report, report_keys, "report", allow_unknown)
    for key in ("region_width", "column_width", "code_width"):
        _assert_positive_int(report[key], f"report.{key}")
    if report["code_width"] > report["column_width"]:
        raise ConfigError("report.code_width must not exceed report.column_width")
    if not isinstance(report["rule_char"], str) or len(report["rule_char"]) != 1:
        raise ConfigError("report.rule_char must be a single character")

    return cfg
