from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import FILE_LEVEL_ROW, ErrorRecord

"""Error log buffering (JSON Lines).

- Fixed schema per line (ErrorRecord, no extra keys)
- One ``errors-YYYYMMDD-HHMMSS.log`` (UTC) per run, created on first flush
- Records are buffered and written in one go at the end of a file's processing
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
    "FILE_LEVEL_ROW",
    "LOGS_DIR",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """In-memory buffer for error records. flush() appends JSON Lines.

    Not thread safe; the CLI processes one file serially.
    """

    def __init__(self, logs_dir: Path | None = None) -> None:
        self.logs_dir = logs_dir or LOGS_DIR
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self.logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self.logs_dir / f"errors-{stamp}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def add(self, file: str, row: int, error_type: str, message: str) -> None:
        self.append(ErrorRecord.create(file=file, row=row, error_type=error_type, message=message))

    @property
    def records(self) -> list[ErrorRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; returns the log path, or None when nothing was buffered."""
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
