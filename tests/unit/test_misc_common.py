import json
import logging

from zipextremes.common.errors import InputError, ParseError, PipelineError
from zipextremes.common.logging import JsonLineFormatter, build_logger, close_logger, log_event
from zipextremes.common.time_utils import generate_run_id, utc_timestamp_iso


def test_generate_run_id_prefix():
    assert generate_run_id().startswith("run-")


def test_utc_timestamp_is_iso_with_offset():
    assert utc_timestamp_iso().endswith("+00:00")


def test_error_codes_and_bases():
    assert issubclass(InputError, OSError)
    assert issubclass(ParseError, ValueError)
    err = ParseError("bad", line="x,y", line_number=3)
    assert isinstance(err, PipelineError)
    assert err.error_code == "PARSE_ERROR"
    assert (err.line, err.line_number) == ("x,y", 3)


def test_json_formatter_emits_stable_fields():
    record = logging.LogRecord("zip_extremes.test", logging.INFO, __file__, 1, "stage end", None, None)
    record.stage = "read"
    record.rows_out = 4
    payload = json.loads(JsonLineFormatter().format(record))
    assert payload["message"] == "stage end"
    assert payload["stage"] == "read"
    assert payload["rows_out"] == 4
    assert payload["error_code"] is None
    assert "timestamp" in payload


def test_build_logger_writes_json_lines_to_file(tmp_path):
    log_path = tmp_path / "logs" / "run.log.jsonl"
    logger = build_logger("run-test", level="INFO", log_path=log_path)
    log_event(logger, "stage start", run_id="run-test", stage="read", event="STAGE_START", status="ok")
    close_logger(logger)

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    payload = json.loads(lines[0])
    assert payload["event"] == "STAGE_START"
    assert payload["run_id"] == "run-test"
    assert not logger.handlers
