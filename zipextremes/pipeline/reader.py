"""Header-skipping, restartable reader for delimited ZIP code records."""

from __future__ import annotations

from pathlib import Path
from types import TracebackType
from typing import TextIO

from zipextremes.common.constants import FIELD_COUNT
from zipextremes.common.delimited import is_blank, parse_float, parse_int, split_fields, trim
from zipextremes.common.errors import InputError, ParseError
from zipextremes.common.models import ZipCodeRecord


def parse_record(line: str, line_number: int | None = None) -> ZipCodeRecord:
    fields = split_fields(line)
    if len(fields) != FIELD_COUNT:
        raise ParseError(
            f"Expected {FIELD_COUNT} fields, found {len(fields)}",
            line=line,
            line_number=line_number,
        )

    code, place, state, county, lat, lon = fields
    try:
        return ZipCodeRecord(
            zip_code=parse_int(code),
            place_name=trim(place),
            state=trim(state),
            county=trim(county),
            latitude=parse_float(lat),
            longitude=parse_float(lon),
        )
    except ValueError as exc:
        raise ParseError(str(exc), line=line, line_number=line_number) from exc


class RecordReader:
    """Lazy sequence of records from a text source with a single header line.

    Use :meth:`open` for filesystem paths or :meth:`from_stream` for an
    already-open text stream. Blank lines are skipped; a malformed line raises
    :class:`ParseError` and leaves the reader positioned after that line.
    """

    def __init__(self, stream: TextIO, *, name: str, owns_stream: bool = False) -> None:
        self._stream: TextIO | None = stream
        self.name = name
        self._owns_stream = owns_stream
        self.line_number = 0
        self.record_count = 0
        self._consumed = False
        try:
            self._skip_header()
        except InputError:
            self.close()
            raise

    @classmethod
    def open(cls, source: str | Path, *, encoding: str = "utf-8") -> "RecordReader":
        path = Path(source)
        try:
            stream = path.open("r", encoding=encoding)
        except (OSError, LookupError) as exc:
            raise InputError(f"Could not open {path}: {exc}") from exc
        return cls(stream, name=str(path), owns_stream=True)

    @classmethod
    def from_stream(cls, stream: TextIO, *, name: str | None = None) -> "RecordReader":
        return cls(stream, name=name or getattr(stream, "name", "<stream>"))

    @property
    def is_open(self) -> bool:
        return self._stream is not None

    def close(self) -> None:
        stream, self._stream = self._stream, None
        if stream is not None and self._owns_stream:
            stream.close()

    def __enter__(self) -> "RecordReader":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __iter__(self) -> "RecordReader":
        return self

    def __next__(self) -> ZipCodeRecord:
        record = self.read_record()
        if record is None:
            raise StopIteration
        return record

    def _readline(self) -> str:
        if self._stream is None:
            raise InputError(f"Reader for {self.name} is closed")
        try:
            line = self._stream.readline()
        except (OSError, UnicodeDecodeError) as exc:
            raise InputError(f"Could not read {self.name}: {exc}") from exc
        if line:
            self.line_number += 1
        return line

    def _skip_header(self) -> None:
        self.line_number = 0
        if not self._readline():
            raise InputError(f"{self.name} is empty; expected a header line")
        self.record_count = 0
        self._consumed = False

    def read_record(self) -> ZipCodeRecord | None:
        """Return the next record, or ``None`` once the source is exhausted."""
        while True:
            line = self._readline()
            if not line:
                return None
            if is_blank(line):
                continue
            self._consumed = True
            record = parse_record(line, self.line_number)
            self.record_count += 1
            return record

    @property
    def seekable(self) -> bool:
        if self._stream is None:
            return False
        try:
            return self._stream.seekable()
        except (OSError, ValueError):
            return False

    def restart(self) -> None:
        """Reposition to the first data line, as if freshly opened."""
        if self._stream is None:
            raise InputError(f"Reader for {self.name} is closed")
        if not self.seekable:
            raise InputError(f"{self.name} does not support repositioning")
        try:
            self._stream.seek(0)
        except OSError as exc:
            raise InputError(f"Could not reposition {self.name}: {exc}") from exc
        self._skip_header()

    def read_all(self) -> list[ZipCodeRecord]:
        """Read every record; the first malformed line aborts the whole read."""
        if self._consumed:
            self.restart()
        records = list(self)
        if self.seekable:
            self.restart()
        return records
