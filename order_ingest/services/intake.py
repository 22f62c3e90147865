from __future__ import annotations

from pathlib import Path

"""Upload intake: file type check and UTF-8 decoding (whole-file buffering)."""

__all__ = [
    "UnsupportedFileError",
    "UNSUPPORTED_FILE_MESSAGE",
    "NOT_TEXT_MESSAGE",
    "is_supported_name",
    "decode_upload",
    "read_upload",
]

UNSUPPORTED_FILE_MESSAGE = "Please upload a .csv file."
NOT_TEXT_MESSAGE = "File is not valid UTF-8 text."


class UnsupportedFileError(Exception):
    """Raised for uploads that are not CSV text (file-level fatal)."""


def is_supported_name(name: str) -> bool:
    return name.lower().endswith(".csv")


def decode_upload(name: str, data: bytes) -> str:
    if not is_supported_name(name):
        raise UnsupportedFileError(UNSUPPORTED_FILE_MESSAGE)
    try:
        # BOM 付き UTF-8 (Excel 出力) も許容
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise UnsupportedFileError(NOT_TEXT_MESSAGE) from e


def read_upload(path: Path) -> str:
    if not path.exists():
        raise UnsupportedFileError(f"file not found: {path}")
    return decode_upload(path.name, path.read_bytes())
