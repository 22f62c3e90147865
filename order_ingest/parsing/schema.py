from __future__ import annotations

from collections.abc import Iterable, Sequence

"""Header schema for order CSV files.

Header cells are normalized by trimming and lower-casing. The required set is
fixed; a file missing any of it is unusable and row parsing stops there.
"""

__all__ = [
    "REQUIRED_COLUMNS",
    "OPTIONAL_COLUMNS",
    "KNOWN_COLUMNS",
    "normalize_header",
    "normalize_headers",
    "missing_columns",
    "duplicate_columns",
]

REQUIRED_COLUMNS: tuple[str, ...] = ("latitude", "longitude", "subtotal")
OPTIONAL_COLUMNS: tuple[str, ...] = ("id", "timestamp", "address")
# 未知列は保持するが解釈しない
KNOWN_COLUMNS: tuple[str, ...] = REQUIRED_COLUMNS + OPTIONAL_COLUMNS


def normalize_header(cell: str) -> str:
    return cell.strip().lower()


def normalize_headers(cells: Iterable[str]) -> tuple[str, ...]:
    return tuple(normalize_header(c) for c in cells)


def missing_columns(headers: Sequence[str]) -> tuple[str, ...]:
    """Required columns absent from ``headers``, in required-set order."""
    present = set(headers)
    return tuple(col for col in REQUIRED_COLUMNS if col not in present)


def duplicate_columns(headers: Sequence[str]) -> tuple[str, ...]:
    """Normalized names that occur more than once, in first-seen order."""
    seen: set[str] = set()
    dupes: list[str] = []
    for h in headers:
        if h in seen and h not in dupes:
            dupes.append(h)
        seen.add(h)
    return tuple(dupes)
