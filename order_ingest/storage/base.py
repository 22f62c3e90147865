from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from ..models.dataset import Dataset
from ..models.order import OrderRecord

"""Order-storage collaborator interface.

Submission is all-or-nothing per batch and never retried automatically.
The collaborator's rejection text is surfaced verbatim.
"""

__all__ = [
    "StorageError",
    "SubmitOutcome",
    "UploadPayload",
    "OrderStore",
]


class StorageError(Exception):
    """Raised when a payload cannot be turned into storage rows."""


@dataclass(frozen=True)
class UploadPayload:
    file_name: str
    text: str  # valid-rows-only re-serialized CSV
    dataset: Dataset


@dataclass(frozen=True)
class SubmitOutcome:
    ok: bool
    message: str | None = None  # 失敗時はコラボレータの応答そのまま
    data: Any = None

    @staticmethod
    def success(data: Any = None) -> SubmitOutcome:
        return SubmitOutcome(ok=True, data=data)

    @staticmethod
    def failure(message: str) -> SubmitOutcome:
        return SubmitOutcome(ok=False, message=message)


class OrderStore(Protocol):
    def submit_batch(self, payload: UploadPayload) -> SubmitOutcome: ...

    def create_order(self, record: OrderRecord) -> SubmitOutcome: ...
