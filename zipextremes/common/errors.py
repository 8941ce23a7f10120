"""Domain errors and failure typing."""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for pipeline failures."""

    error_code = "PIPELINE_ERROR"


class ConfigError(PipelineError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class UsageError(PipelineError):
    """Raised when the command line cannot be interpreted."""

    error_code = "USAGE_ERROR"


class InputError(PipelineError, OSError):
    """Raised when the record source cannot be opened, read, or repositioned."""

    error_code = "IO_ERROR"


class ParseError(PipelineError, ValueError):
    """Raised when a data line cannot be turned into a record."""

    error_code = "PARSE_ERROR"

    def __init__(self, message: str, *, line: str, line_number: int | None = None) -> None:
        super().__init__(message)
        self.line = line
        self.line_number = line_number
