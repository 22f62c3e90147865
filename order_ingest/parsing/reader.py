from __future__ import annotations

from dataclasses import dataclass

from ..models.dataset import Dataset
from ..models.table import ParseReport, RawTable
from .schema import duplicate_columns, missing_columns, normalize_headers
from .splitter import COMMA, detect_delimiter, logical_lines, split_line

"""Order CSV reader.

Steps:
1. Split text into logical lines (blank lines dropped); empty → file error
2. Detect delimiter from the first line, split and normalize the header
3. Stop if any required column is missing or a normalized name repeats
   (schema-level fatal)
4. Split each remaining line; wrong cell count → row error, row dropped
"""

__all__ = [
    "EMPTY_FILE_MESSAGE",
    "ParsedFile",
    "parse_text",
    "shape_error",
]

EMPTY_FILE_MESSAGE = "File is empty"


@dataclass(frozen=True)
class ParsedFile:
    table: RawTable
    report: ParseReport
    delimiter: str = COMMA
    header_line: str = ""
    line_numbers: tuple[int, ...] = ()  # table.rows と同順の論理行番号

    @property
    def usable(self) -> bool:
        return self.report.usable and bool(self.table.headers)

    def to_dataset(self) -> Dataset:
        """Dataset with every row PENDING, ready for the geofence pass."""
        return Dataset.from_table(
            self.table, self.delimiter, self.header_line, self.line_numbers
        )


def shape_error(line_number: int, expected: int, got: int) -> str:
    return f"Row {line_number}: expected {expected} columns, got {got}"


def parse_text(text: str) -> ParsedFile:
    """Parse raw order CSV text into a RawTable plus a ParseReport.

    Malformed rows are reported and excluded; they never get a validation
    slot downstream.
    """
    lines = logical_lines(text)
    if not lines:
        return ParsedFile(
            table=RawTable.empty(),
            report=ParseReport(row_errors=(EMPTY_FILE_MESSAGE,), line_numbers=(-1,)),
        )

    header_line = lines[0]
    delimiter = detect_delimiter(header_line)
    headers = normalize_headers(split_line(header_line, delimiter))
    missing = missing_columns(headers)
    if missing:
        return ParsedFile(
            table=RawTable(headers=headers, rows=()),
            report=ParseReport(missing_columns=missing),
            delimiter=delimiter,
            header_line=header_line,
        )

    dupes = duplicate_columns(headers)
    if dupes:
        # 行 dict のキーは headers と 1 対 1
        return ParsedFile(
            table=RawTable(headers=headers, rows=()),
            report=ParseReport(duplicate_columns=dupes),
            delimiter=delimiter,
            header_line=header_line,
        )

    rows: list[dict[str, str]] = []
    row_lines: list[int] = []
    errors: list[str] = []
    error_lines: list[int] = []
    for idx, line in enumerate(lines[1:], start=2):
        cells = split_line(line, delimiter)
        if len(cells) != len(headers):
            errors.append(shape_error(idx, len(headers), len(cells)))
            error_lines.append(idx)
            continue
        rows.append(dict(zip(headers, cells, strict=True)))
        row_lines.append(idx)

    return ParsedFile(
        table=RawTable(headers=headers, rows=tuple(rows)),
        report=ParseReport(row_errors=tuple(errors), line_numbers=tuple(error_lines)),
        delimiter=delimiter,
        header_line=header_line,
        line_numbers=tuple(row_lines),
    )
