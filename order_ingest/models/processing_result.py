from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .dataset import Dataset

"""Processing result model for one import run (one uploaded file)."""

__all__ = [
    "ImportResult",
]


@dataclass(frozen=True)
class ImportResult:
    """Counts and outcome of a single file run; feeds the SUMMARY line."""
    file_name: str
    total_rows: int = 0  # 形状チェック通過行 (strip 前)
    valid_rows: int = 0
    invalid_rows: int = 0  # Invalid + Error
    row_errors: tuple[str, ...] = ()
    missing_columns: tuple[str, ...] = ()
    duplicate_columns: tuple[str, ...] = ()
    fatal_error: str | None = None  # file-level / schema-level
    stripped_rows: int = 0
    output_path: Path | None = None
    ready: bool = False  # upload gate
    submitted: bool = False
    submit_error: str | None = None
    elapsed_seconds: float = 0.0
    dataset: Dataset | None = None

    @property
    def fatal(self) -> bool:
        return self.fatal_error is not None or self.submit_error is not None
