"""Delimited-text parsing: line splitting, header schema, row parsing."""

from .reader import EMPTY_FILE_MESSAGE, ParsedFile, parse_text
from .schema import OPTIONAL_COLUMNS, REQUIRED_COLUMNS
from .splitter import detect_delimiter, logical_lines, split_line

__all__ = [
    "EMPTY_FILE_MESSAGE",
    "OPTIONAL_COLUMNS",
    "REQUIRED_COLUMNS",
    "ParsedFile",
    "detect_delimiter",
    "logical_lines",
    "parse_text",
    "split_line",
]
