"""Data models used across the pipeline."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ZipCodeRecord:
    zip_code: int
    place_name: str
    state: str
    county: str
    latitude: float
    longitude: float
