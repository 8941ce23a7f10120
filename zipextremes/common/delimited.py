"""Quote-aware field splitting for single-line delimited records."""

from __future__ import annotations

import math
import re

from zipextremes.common.constants import DELIMITER, QUOTE_CHAR

_TRIM_CHARS = " \t\r\n"
_INTEGER_RE = re.compile(r"^[+-]?[0-9]+$")
_FLOAT_RE = re.compile(r"^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$")


def trim(value: str) -> str:
    return value.strip(_TRIM_CHARS)


def is_blank(line: str) -> bool:
    return not trim(line)


def split_fields(line: str, delimiter: str = DELIMITER, quote: str = QUOTE_CHAR) -> list[str]:
    """Split ``line`` on ``delimiter`` outside of quotes.

    Every quote character flips the quoted state, so a doubled quote is two
    toggles rather than an escaped literal. Quote characters are dropped from
    the output. Fields are returned untrimmed.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == quote:
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)

    fields.append("".join(current))
    return fields


def parse_int(value: str) -> int:
    cleaned = trim(value)
    # int() alone would also accept "1_000" and non-ASCII digits
    if not _INTEGER_RE.match(cleaned):
        raise ValueError(f"invalid integer: {value!r}")
    return int(cleaned)


def parse_float(value: str) -> float:
    cleaned = trim(value)
    if not _FLOAT_RE.match(cleaned):
        raise ValueError(f"invalid float: {value!r}")
    parsed = float(cleaned)
    if not math.isfinite(parsed):
        raise ValueError(f"non-finite float: {value!r}")
    return parsed
