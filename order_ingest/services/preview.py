from __future__ import annotations

import math
from dataclasses import dataclass

import pandas as pd

from ..models.dataset import Dataset
from ..models.validation import ValidationStatus

"""Paged preview of a triaged dataset.

Invalid rows are triaged to the top, so page 1 always shows problems first.
"""

__all__ = [
    "PAGE_SIZE",
    "STATUS_COLUMN",
    "REASON_COLUMN",
    "ValidationCounts",
    "total_pages",
    "page_frame",
    "validation_counts",
]

PAGE_SIZE = 50
STATUS_COLUMN = "status"
REASON_COLUMN = "reason"


@dataclass(frozen=True)
class ValidationCounts:
    total: int
    checked: int  # pending 以外
    valid: int
    invalid: int  # Invalid + Error


def total_pages(row_count: int, page_size: int = PAGE_SIZE) -> int:
    return max(1, math.ceil(row_count / page_size))


def page_frame(dataset: Dataset, page: int = 1, page_size: int = PAGE_SIZE) -> pd.DataFrame:
    """DataFrame for one 1-based page: header columns plus status and reason.

    Out-of-range pages are clamped.
    """
    pages = total_pages(len(dataset), page_size)
    page = min(max(page, 1), pages)
    start = (page - 1) * page_size
    chunk = dataset.records[start:start + page_size]
    columns = list(dataset.headers) + [STATUS_COLUMN, REASON_COLUMN]
    data = [
        [r.fields.get(h, "") for h in dataset.headers]
        + [r.validation.status.value, r.validation.reason or ""]
        for r in chunk
    ]
    frame = pd.DataFrame(data, columns=columns, dtype=object)
    frame.index = pd.RangeIndex(start + 1, start + 1 + len(chunk), name="row")
    return frame


def validation_counts(dataset: Dataset) -> ValidationCounts:
    return ValidationCounts(
        total=len(dataset),
        checked=sum(1 for r in dataset.records if r.validation.status is not ValidationStatus.PENDING),
        valid=dataset.valid_count,
        invalid=dataset.invalid_count,
    )
