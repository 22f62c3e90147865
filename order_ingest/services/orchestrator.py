from __future__ import annotations

import logging
import time
from pathlib import Path

from ..logging.error_log import FILE_LEVEL_ROW, ErrorLogBuffer
from ..models.processing_result import ImportResult
from ..parsing.reader import EMPTY_FILE_MESSAGE
from ..storage.base import OrderStore
from ..validation.geofence import INVALID_COORDINATES, OUTSIDE_BOUNDS
from .intake import UnsupportedFileError, read_upload
from .session import ImportSession

"""Service orchestration for one uploaded order file.

read → parse → validate → triage → (strip) → gate → (submit)

Every error channel is logged and buffered to the JSON Lines error log:
file-level fatal, missing or duplicate columns, row shape, row validation, submission.
"""

__all__ = [
    "process_file",
]

logger = logging.getLogger(__name__)

_REASON_TYPES = {
    INVALID_COORDINATES: "INVALID_COORDINATES",
    OUTSIDE_BOUNDS: "OUTSIDE_BOUNDS",
}


def _record_parse_errors(session: ImportSession, file_name: str, error_log: ErrorLogBuffer) -> None:
    report = session.report
    if report is None:
        return
    if report.missing_columns:
        msg = report.missing_message()
        logger.error(f"{file_name}: {msg}")
        error_log.add(file_name, FILE_LEVEL_ROW, "MISSING_COLUMNS", msg)
    if report.duplicate_columns:
        msg = report.duplicate_message()
        logger.error(f"{file_name}: {msg}")
        error_log.add(file_name, FILE_LEVEL_ROW, "DUPLICATE_COLUMNS", msg)
    for line_no, msg in zip(report.line_numbers, report.row_errors, strict=False):
        if msg == EMPTY_FILE_MESSAGE:
            logger.error(f"{file_name}: {msg}")
            error_log.add(file_name, FILE_LEVEL_ROW, "FILE_EMPTY", msg)
            continue
        logger.warning(f"{file_name}: {msg}")
        error_log.add(file_name, line_no, "ROW_SHAPE", msg)


def _record_invalid_rows(session: ImportSession, file_name: str, error_log: ErrorLogBuffer) -> None:
    if session.dataset is None:
        return
    for record in session.dataset.records:
        if not record.validation.is_blocking:
            continue
        reason = record.validation.reason or ""
        error_type = _REASON_TYPES.get(reason, "VALIDATION_ERROR")
        error_log.add(file_name, record.line_number, error_type, reason)


def process_file(
    path: Path,
    store: OrderStore | None = None,
    *,
    strip: bool = False,
    output: Path | None = None,
    submit: bool = False,
    error_log: ErrorLogBuffer | None = None,
    show_progress: bool = True,
) -> ImportResult:
    """Run the whole pipeline for ``path`` and return its ImportResult.

    Args:
        path: uploaded CSV file
        store: order store used when ``submit`` is set
        strip: remove invalid rows before gating
        output: where to write the cleaned CSV (only with ``strip``)
        submit: submit to ``store`` when the upload gate allows it
        error_log: buffer for structured error records (flushed here)
    """
    start = time.perf_counter()
    error_log = error_log if error_log is not None else ErrorLogBuffer()
    file_name = path.name
    session = ImportSession(store=store, show_progress=show_progress)

    def _finish(**kwargs) -> ImportResult:
        try:
            log_path = error_log.flush()
            if log_path is not None:
                logger.info(f"error log written: {log_path}")
        except OSError as e:
            logger.warning(f"failed to write error log: {e}")
        return ImportResult(file_name=file_name, elapsed_seconds=time.perf_counter() - start, **kwargs)

    try:
        text = read_upload(path)
    except UnsupportedFileError as e:
        session.reject_file(file_name, str(e))
        logger.error(f"{file_name}: {e}")
        error_log.add(file_name, FILE_LEVEL_ROW, "UNSUPPORTED_FILE", str(e))
        return _finish(row_errors=(str(e),), fatal_error=str(e))

    ticket = session.select_file(file_name, text)
    _record_parse_errors(session, file_name, error_log)
    report = session.report

    if report.missing_columns:
        return _finish(missing_columns=report.missing_columns,
                       fatal_error=report.missing_message())
    if report.duplicate_columns:
        return _finish(duplicate_columns=report.duplicate_columns,
                       fatal_error=report.duplicate_message())
    if session.dataset is None:
        return _finish(row_errors=report.row_errors, fatal_error=EMPTY_FILE_MESSAGE)

    if ticket is not None:
        session.run_validation(ticket)
    dataset = session.dataset
    total, valid, invalid = len(dataset), dataset.valid_count, dataset.invalid_count
    logger.info(f"{file_name}: rows={total} valid={valid} invalid={invalid} row_errors={len(report.row_errors)}")
    _record_invalid_rows(session, file_name, error_log)

    stripped = 0
    written: Path | None = None
    if strip:
        result = session.strip_invalid()
        stripped = result.removed
        logger.info(f"{file_name}: removed {stripped} invalid row(s)")
        if output is not None:
            output.write_text(result.text, encoding="utf-8")
            written = output
            logger.info(f"cleaned file written: {output}")

    ready = session.can_upload()
    submit_error: str | None = None
    if submit:
        if not ready:
            reasons = ", ".join(session.gate().blocking_reasons())
            logger.warning(f"{file_name}: upload blocked ({reasons})")
        else:
            outcome = session.submit()
            if outcome.ok:
                logger.info(f"{file_name}: submitted {len(session.dataset)} order(s)")
            else:
                submit_error = outcome.message or "submission failed"
                logger.error(f"{file_name}: submission failed: {submit_error}")
                error_log.add(file_name, FILE_LEVEL_ROW, "SUBMIT_FAILED", submit_error)

    return _finish(
        total_rows=total,
        valid_rows=valid,
        invalid_rows=invalid,
        row_errors=report.row_errors,
        stripped_rows=stripped,
        output_path=written,
        ready=ready,
        submitted=session.submitted,
        submit_error=submit_error,
        dataset=session.dataset,
    )
