from __future__ import annotations

from dataclasses import dataclass, field

"""Parse-stage models: RawTable and ParseReport.

RawTable is the header + field-map view of a delimited file. ParseReport
collects the two non-validation error channels: schema (missing required or
duplicate columns) and row shape (wrong cell count).
"""

__all__ = [
    "RawTable",
    "ParseReport",
]


@dataclass(frozen=True)
class RawTable:
    """Header sequence plus one header→cell mapping per shape-valid row.

    Every row mapping has exactly the keys of ``headers`` in header order.
    """
    headers: tuple[str, ...]
    rows: tuple[dict[str, str], ...] = ()

    @staticmethod
    def empty() -> RawTable:
        return RawTable(headers=(), rows=())


@dataclass(frozen=True)
class ParseReport:
    missing_columns: tuple[str, ...] = ()  # 必須列の宣言順
    duplicate_columns: tuple[str, ...] = ()  # 正規化後に重複した列名
    row_errors: tuple[str, ...] = ()  # 1 行 1 メッセージ
    line_numbers: tuple[int, ...] = field(default=(), compare=False)  # row_errors と同順

    @property
    def usable(self) -> bool:
        """A table with a missing or ambiguous column must not be geo-validated."""
        return not self.missing_columns and not self.duplicate_columns

    def missing_message(self) -> str | None:
        if not self.missing_columns:
            return None
        return f"Missing required columns: {', '.join(self.missing_columns)}"

    def duplicate_message(self) -> str | None:
        if not self.duplicate_columns:
            return None
        return f"Duplicate columns: {', '.join(self.duplicate_columns)}"
