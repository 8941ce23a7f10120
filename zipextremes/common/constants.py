"""Application constants."""

DELIMITER = ","
QUOTE_CHAR = '"'
FIELD_COUNT = 6
EXIT_SUCCESS = 0
EXIT_USAGE = 1
EXIT_OPEN_FAILED = 2
EXIT_NO_RECORDS = 3
EXIT_UNEXPECTED = 4
JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "stage",
    "source",
    "event",
    "status",
    "rows_in",
    "rows_out",
    "line_number",
    "error_code",
    "message",
)
DEFAULT_CONFIG_DIR = "./config"
REPORT_CONFIG_FILENAME = "report.yml"
DEFAULT_CONFIG = {
    "reader": {
        "encoding": "utf-8",
    },
    "report": {
        "region_width": 8,
        "column_width": 15,
        "code_width": 5,
        "rule_char": "-",
    },
}
