from __future__ import annotations

from ..models.processing_result import ImportResult

"""SUMMARY line rendering.

Format:
SUMMARY file={name} rows={n} valid={v} invalid={i} row_errors={e}
missing={cols|-} stripped={s} ready={true|false} submitted={true|false}
"""


def _flag(value: bool) -> str:
    return "true" if value else "false"


def render_summary_line(result: ImportResult) -> str:
    """Render the one-line run summary.

    >>> render_summary_line(ImportResult(file_name="a.csv", total_rows=2, valid_rows=2, ready=True))
    'SUMMARY file=a.csv rows=2 valid=2 invalid=0 row_errors=0 missing=- stripped=0 ready=true submitted=false'
    """
    missing = ",".join(result.missing_columns) if result.missing_columns else "-"
    return (
        f"SUMMARY file={result.file_name} "
        f"rows={result.total_rows} "
        f"valid={result.valid_rows} "
        f"invalid={result.invalid_rows} "
        f"row_errors={len(result.row_errors)} "
        f"missing={missing} "
        f"stripped={result.stripped_rows} "
        f"ready={_flag(result.ready)} "
        f"submitted={_flag(result.submitted)}"
    )
