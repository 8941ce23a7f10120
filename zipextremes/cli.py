"""CLI entrypoint for the per-state ZIP code extremes report."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from zipextremes.common.config_loader import load_report_config
from zipextremes.common.constants import (
    DEFAULT_CONFIG_DIR,
    EXIT_NO_RECORDS,
    EXIT_OPEN_FAILED,
    EXIT_SUCCESS,
    EXIT_UNEXPECTED,
    EXIT_USAGE,
    REPORT_CONFIG_FILENAME,
)
from zipextremes.common.errors import ConfigError, InputError, ParseError, UsageError
from zipextremes.common.logging import build_logger, close_logger, log_event
from zipextremes.common.time_utils import generate_run_id
from zipextremes.pipeline.extremes import aggregate
from zipextremes.pipeline.reader import RecordReader
from zipextremes.pipeline.report import build_summary, render_preamble, render_results, write_summary_json

PROG = "zip-extremes"


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog=PROG, description=__doc__)
    parser.add_argument("csv_filename")
    parser.add_argument("--config-dir", default=DEFAULT_CONFIG_DIR)
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--json-out", default=None)
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def parse_args(argv: list[str]) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def resolve_config_dir(value: str | None) -> Path | None:
    if not value:
        return None
    config_dir = Path(value)
    # Built-in defaults apply when run outside a checkout that ships config/.
    if value == DEFAULT_CONFIG_DIR and not (config_dir / REPORT_CONFIG_FILENAME).exists():
        return None
    return config_dir


def _print_usage(message: str, err: TextIO) -> None:
    print(f"Error: {message}", file=err)
    print(f"Usage: {PROG} <csv_filename>", file=err)
    print(f"Example: {PROG} us_postal_codes.csv", file=err)


def run_command(args: argparse.Namespace, *, out: TextIO | None = None, err: TextIO | None = None) -> int:
    out = out or sys.stdout
    err = err or sys.stderr
    run_id = args.run_id or generate_run_id()
    logger = build_logger(run_id, level=args.log_level, log_path=Path(args.log_file) if args.log_file else None)
    source = args.csv_filename

    try:
        try:
            config = load_report_config(
                resolve_config_dir(args.config_dir),
                overlay_config_dir=Path(args.overlay_config_dir) if args.overlay_config_dir else None,
            )
        except ConfigError as exc:
            log_event(
                logger,
                str(exc),
                run_id=run_id,
                event="CONFIG_FAIL",
                status="error",
                error_code=exc.error_code,
                level=logging.ERROR,
            )
            print(f"Error: {exc}", file=err)
            return EXIT_USAGE

        log_event(logger, "stage start", run_id=run_id, stage="read", source=source, event="STAGE_START", status="ok")
        try:
            with RecordReader.open(source, encoding=config.encoding) as reader:
                out.write(render_preamble(source))
                records = reader.read_all()
        except InputError as exc:
            log_event(
                logger,
                str(exc),
                run_id=run_id,
                stage="read",
                source=source,
                event="STAGE_FAIL",
                status="error",
                error_code=exc.error_code,
                level=logging.ERROR,
            )
            print(f"Error: Could not open file '{source}'", file=err)
            print("Please check that the file exists and is readable.", file=err)
            return EXIT_OPEN_FAILED
        except ParseError as exc:
            log_event(
                logger,
                str(exc),
                run_id=run_id,
                stage="read",
                source=source,
                event="STAGE_FAIL",
                status="error",
                line_number=exc.line_number,
                error_code=exc.error_code,
                level=logging.ERROR,
            )
            print(f"Error: Malformed record on line {exc.line_number}: {exc}", file=err)
            print("Error: No valid records found in file.", file=err)
            return EXIT_NO_RECORDS
        log_event(
            logger,
            "stage end",
            run_id=run_id,
            stage="read",
            source=source,
            event="STAGE_END",
            status="ok",
            rows_out=len(records),
        )

        if not records:
            print("Error: No valid records found in file.", file=err)
            return EXIT_NO_RECORDS

        result = aggregate(records)
        log_event(
            logger,
            "stage end",
            run_id=run_id,
            stage="aggregate",
            event="STAGE_END",
            status="ok",
            rows_in=len(records),
            rows_out=len(result),
        )

        out.write(render_results(len(records), result, config.layout))
        if args.json_out:
            write_summary_json(Path(args.json_out), build_summary(source, len(records), result, run_id=run_id))
        log_event(logger, "stage end", run_id=run_id, stage="report", event="STAGE_END", status="ok")
        return EXIT_SUCCESS
    except Exception:
        logger.exception(
            "unexpected failure",
            extra={"run_id": run_id, "source": source, "event": "STAGE_FAIL", "status": "error", "error_code": "UNEXPECTED_ERROR"},
        )
        print(f"Error: Unexpected failure while processing '{source}'", file=err)
        return EXIT_UNEXPECTED
    finally:
        close_logger(logger)


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    try:
        args = parse_args(argv)
    except UsageError as exc:
        _print_usage(str(exc), sys.stderr)
        return EXIT_USAGE
    return run_command(args)


if __name__ == "__main__":
    raise SystemExit(main())
