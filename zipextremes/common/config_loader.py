"""Configuration loading and validation."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from zipextremes.common.constants import DEFAULT_CONFIG, REPORT_CONFIG_FILENAME
from zipextremes.common.errors import ConfigError
from zipextremes.common.fs import read_yaml
from zipextremes.common.schema import validate_report_config


@dataclass(frozen=True)
class TableLayout:
    region_width: int
    column_width: int
    code_width: int
    rule_char: str

    @property
    def rule_width(self) -> int:
        return self.region_width + 4 * self.column_width


@dataclass(frozen=True)
class ReportConfig:
    encoding: str
    layout: TableLayout


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _read_config_file(path: Path) -> dict | None:
    try:
        payload = read_yaml(path)
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except (yaml.YAMLError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Invalid config file {path}: {exc}") from exc
    if payload is None:
        return None
    if not isinstance(payload, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return payload


def load_config_dict(
    config_dir: Path | None = None,
    *,
    overlay_config_dir: Path | None = None,
) -> dict:
    cfg = copy.deepcopy(DEFAULT_CONFIG)
    layers = []
    if config_dir is not None:
        base_path = config_dir / REPORT_CONFIG_FILENAME
        if not base_path.exists():
            raise ConfigError(f"Missing config file: {base_path}")
        layers.append(base_path)
    if overlay_config_dir is not None:
        overlay_path = overlay_config_dir / REPORT_CONFIG_FILENAME
        if overlay_path.exists():
            layers.append(overlay_path)

    for path in layers:
        payload = _read_config_file(path)
        if payload is not None:
            cfg = _deep_merge(cfg, payload)

    return validate_report_config(cfg)


def load_report_config(
    config_dir: Path | None = None,
    *,
    overlay_config_dir: Path | None = None,
) -> ReportConfig:
    cfg = load_config_dict(config_dir, overlay_config_dir=overlay_config_dir)
    report = cfg["report"]
    layout = TableLayout(
        region_width=report["region_width"],
        column_width=report["column_width"],
        code_width=report["code_width"],
        rule_char=report["rule_char"],
    )
    return ReportConfig(encoding=cfg["reader"]["encoding"], layout=layout)
