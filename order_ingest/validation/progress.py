from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Validation progress display with tqdm (TTY only).

Shows "Validating locations (checked/total)" while the geofence pass runs.
In non-TTY environments (CI, piped output) the bar is disabled so no ANSI
control sequences reach the log.
"""

__all__ = [
    "ValidationProgress",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ValidationProgress:
    """Row-level progress bar for one validation pass."""

    def __init__(self, total_rows: int, *, description: str = "Validating locations") -> None:
        self.total_rows = total_rows
        self.description = description
        self.checked = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_rows,
                desc=description,
                unit="row",
                disable=False,
                leave=False,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def advance(self, rows: int = 1) -> None:
        self.checked += rows
        if self.enabled and self.pbar is not None:
            self.pbar.update(rows)

    def set_postfix(self, **kwargs: Any) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.set_postfix(**kwargs)

    def close(self) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ValidationProgress:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
