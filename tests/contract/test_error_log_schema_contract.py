from __future__ import annotations

import json
import re

from order_ingest.logging.error_log import ErrorLogBuffer
from order_ingest.services.orchestrator import process_file

"""Error log JSON Lines schema contract: fixed keys, fixed types, no extras."""

EXPECTED_KEYS = {"timestamp", "file", "row", "error_type", "message"}
ISO_Z = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?Z$")
KNOWN_TYPES = {
    "UNSUPPORTED_FILE", "FILE_EMPTY", "MISSING_COLUMNS", "DUPLICATE_COLUMNS", "ROW_SHAPE",
    "INVALID_COORDINATES", "OUTSIDE_BOUNDS", "VALIDATION_ERROR", "SUBMIT_FAILED",
}


def test_error_log_schema(write_csv, mixed_csv_text, temp_workdir):
    buf = ErrorLogBuffer()
    process_file(write_csv("mixed.csv", mixed_csv_text), error_log=buf, show_progress=False)
    logs = list((temp_workdir / "logs").glob("errors-*.log"))
    assert len(logs) == 1
    assert re.fullmatch(r"errors-\d{8}-\d{6}\.log", logs[0].name)
    lines = logs[0].read_text(encoding="utf-8").splitlines()
    assert lines
    for raw in lines:
        rec = json.loads(raw)
        assert set(rec.keys()) == EXPECTED_KEYS
        assert ISO_Z.match(rec["timestamp"])
        assert rec["file"] == "mixed.csv"
        assert isinstance(rec["row"], int)
        assert rec["error_type"] in KNOWN_TYPES
        assert isinstance(rec["message"], str) and rec["message"]


def test_no_errors_no_log_file(write_csv, temp_workdir):
    process_file(write_csv("ok.csv", "latitude,longitude,subtotal\n40.7,-73.9,1\n"), show_progress=False)
    assert list((temp_workdir / "logs").glob("errors-*.log")) == []
