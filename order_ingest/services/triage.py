from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..models.dataset import Dataset
from ..models.validation import RowValidation
from ..parsing.splitter import QUOTE

"""Triage and invalid-row stripping.

Both operations act on whole OrderRow records, so a row and its validation
can never drift apart.
"""

__all__ = [
    "StripResult",
    "triage",
    "strip_invalid",
    "quote_field",
    "serialize",
]


def triage(dataset: Dataset) -> Dataset:
    """Move Invalid/Error rows in front of all other rows.

    Stable partition: relative order inside each group is preserved, so
    triaging an already-triaged dataset returns the same order.
    """
    # sorted() は安定ソート
    ordered = sorted(dataset.records, key=lambda r: 0 if r.validation.is_blocking else 1)
    return dataset.with_records(tuple(ordered))


def quote_field(value: str, delimiter: str) -> str:
    if delimiter in value or QUOTE in value:
        return QUOTE + value.replace(QUOTE, QUOTE * 2) + QUOTE
    return value


def serialize(header_line: str, headers: Sequence[str], rows: Sequence[dict[str, str]],
              delimiter: str) -> str:
    """Render rows back to delimited text under the original header line."""
    lines = [header_line]
    for row in rows:
        lines.append(delimiter.join(quote_field(row.get(h, ""), delimiter) for h in headers))
    return "\n".join(lines)


@dataclass(frozen=True)
class StripResult:
    dataset: Dataset
    text: str  # upload-ready payload
    original_count: int = 0

    @property
    def removed(self) -> int:
        return self.original_count - len(self.dataset)


def strip_invalid(dataset: Dataset) -> StripResult:
    """Keep only VALID rows (current order) and re-serialize them.

    Pending/checking rows are dropped along with invalid ones. Irreversible:
    callers that need recovery must keep the original text.
    """
    kept = tuple(
        r.with_validation(RowValidation.valid())
        for r in dataset.records
        if r.validation.is_valid
    )
    stripped = dataset.with_records(kept)
    text = serialize(dataset.header_line, dataset.headers, stripped.rows, dataset.delimiter)
    return StripResult(dataset=stripped, text=text, original_count=len(dataset))
