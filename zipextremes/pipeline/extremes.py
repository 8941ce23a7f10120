"""Per-state extreme ZIP codes by coordinate, with code-based tie-breaking."""

from __future__ import annotations

import operator
from dataclasses import dataclass, field
from typing import Callable, Iterable, Mapping

from zipextremes.common.models import ZipCodeRecord

Comparator = Callable[[float, float], bool]


@dataclass
class ExtremeSlot:
    """Best record seen so far for one direction; empty until the first offer."""

    beats: Comparator
    code: int | None = None
    value: float | None = None

    @property
    def is_empty(self) -> bool:
        return self.code is None

    def offer(self, code: int, value: float) -> None:
        if self.is_empty or self.beats(value, self.value):
            self.code = code
            self.value = value
        elif value == self.value and code < self.code:
            # value always belongs to the holder of code; -0.0 == 0.0
            self.code = code
            self.value = value

    def as_dict(self) -> dict:
        return {"code": self.code, "value": self.value}


# (slot name, record attribute, strict comparison that makes a new extreme)
SLOT_RULES: tuple[tuple[str, str, Comparator], ...] = (
    ("easternmost", "longitude", operator.lt),
    ("westernmost", "longitude", operator.gt),
    ("northernmost", "latitude", operator.gt),
    ("southernmost", "latitude", operator.lt),
)
SLOT_NAMES = tuple(name for name, _attr, _beats in SLOT_RULES)


@dataclass
class StateExtremes:
    easternmost: ExtremeSlot = field(init=False)
    westernmost: ExtremeSlot = field(init=False)
    northernmost: ExtremeSlot = field(init=False)
    southernmost: ExtremeSlot = field(init=False)

    def __post_init__(self) -> None:
        for name, _attr, beats in SLOT_RULES:
            setattr(self, name, ExtremeSlot(beats))

    def update(self, record: ZipCodeRecord) -> None:
        for name, attr, _beats in SLOT_RULES:
            getattr(self, name).offer(record.zip_code, getattr(record, attr))

    def merge(self, other: "StateExtremes") -> None:
        for name in SLOT_NAMES:
            theirs = getattr(other, name)
            if not theirs.is_empty:
                getattr(self, name).offer(theirs.code, theirs.value)

    def codes(self) -> tuple[int | None, int | None, int | None, int | None]:
        return tuple(getattr(self, name).code for name in SLOT_NAMES)

    def to_dict(self) -> dict:
        return {name: getattr(self, name).as_dict() for name in SLOT_NAMES}


class ExtremeAggregator:
    """Single-pass fold of records into per-state extremes."""

    def __init__(self) -> None:
        self._states: dict[str, StateExtremes] = {}
        self.record_count = 0

    def add(self, record: ZipCodeRecord) -> None:
        extremes = self._states.get(record.state)
        if extremes is None:
            extremes = StateExtremes()
            self._states[record.state] = extremes
        extremes.update(record)
        self.record_count += 1

    def extend(self, records: Iterable[ZipCodeRecord]) -> None:
        for record in records:
            self.add(record)

    def result(self) -> dict[str, StateExtremes]:
        return {state: self._states[state] for state in sorted(self._states)}


def aggregate(records: Iterable[ZipCodeRecord]) -> dict[str, StateExtremes]:
    aggregator = ExtremeAggregator()
    aggregator.extend(records)
    return aggregator.result()


def merge_results(*results: Mapping[str, StateExtremes]) -> dict[str, StateExtremes]:
    """Combine partial aggregates; ties still go to the smaller code."""
    merged: dict[str, StateExtremes] = {}
    for result in results:
        for state, extremes in result.items():
            target = merged.get(state)
            if target is None:
                target = StateExtremes()
                merged[state] = target
            target.merge(extremes)
    return {state: merged[state] for state in sorted(merged)}
