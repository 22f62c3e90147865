from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Row validation status model.

One RowValidation describes exactly one parsed row. Lifecycle per row:
pending → checking → (valid | invalid | error)
"""

__all__ = [
    "ValidationStatus",
    "RowValidation",
]


class ValidationStatus(Enum):
    """Geofence classification state for a single row.

    - PENDING: row parsed, validation pass not started
    - CHECKING: validation pass in flight
    - VALID: coordinates inside the geofence
    - INVALID: coordinates unparseable or outside the geofence
    - ERROR: classification could not be performed (collaborator failure)
    """
    PENDING = "pending"
    CHECKING = "checking"
    VALID = "valid"
    INVALID = "invalid"
    ERROR = "error"


@dataclass(frozen=True)
class RowValidation:
    status: ValidationStatus
    reason: str | None = None  # invalid/error 時のみ

    @staticmethod
    def pending() -> RowValidation:
        return RowValidation(ValidationStatus.PENDING)

    @staticmethod
    def checking() -> RowValidation:
        return RowValidation(ValidationStatus.CHECKING)

    @staticmethod
    def valid() -> RowValidation:
        return RowValidation(ValidationStatus.VALID)

    @staticmethod
    def invalid(reason: str) -> RowValidation:
        return RowValidation(ValidationStatus.INVALID, reason)

    @staticmethod
    def error(reason: str) -> RowValidation:
        return RowValidation(ValidationStatus.ERROR, reason)

    @property
    def is_blocking(self) -> bool:
        """True for rows that must be fixed or stripped before upload."""
        return self.status in (ValidationStatus.INVALID, ValidationStatus.ERROR)

    @property
    def is_resolved(self) -> bool:
        return self.status not in (ValidationStatus.PENDING, ValidationStatus.CHECKING)

    @property
    def is_valid(self) -> bool:
        return self.status is ValidationStatus.VALID
