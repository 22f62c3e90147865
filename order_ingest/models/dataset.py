from __future__ import annotations

from dataclasses import dataclass, replace

from .table import RawTable
from .validation import RowValidation, ValidationStatus

"""Dataset model: parsed rows bound to their validation state.

Each OrderRow carries its own RowValidation so that reordering and filtering
always move a row together with its classification. ``rows`` and
``validations`` are derived positional views over the same record tuple.
"""

__all__ = [
    "OrderRow",
    "Dataset",
]


@dataclass(frozen=True)
class OrderRow:
    """One shape-valid row of the uploaded file."""
    line_number: int  # 1-based logical line number in the source file
    fields: dict[str, str]  # normalized header -> cell
    validation: RowValidation = RowValidation(ValidationStatus.PENDING)

    def with_validation(self, validation: RowValidation) -> OrderRow:
        return replace(self, validation=validation)


@dataclass(frozen=True)
class Dataset:
    """Immutable (table, validations) pair for one uploaded file.

    Created once per file; triage and stripping return new instances.
    """
    headers: tuple[str, ...]
    records: tuple[OrderRow, ...]
    delimiter: str = ","
    header_line: str = ""  # source header line, reused verbatim on re-serialization

    @staticmethod
    def from_table(table: RawTable, delimiter: str, header_line: str,
                   line_numbers: tuple[int, ...] | None = None) -> Dataset:
        if line_numbers is None:
            line_numbers = tuple(range(2, len(table.rows) + 2))
        records = tuple(
            OrderRow(line_number=n, fields=dict(row))
            for n, row in zip(line_numbers, table.rows, strict=True)
        )
        return Dataset(headers=table.headers, records=records,
                       delimiter=delimiter, header_line=header_line)

    @property
    def rows(self) -> tuple[dict[str, str], ...]:
        return tuple(r.fields for r in self.records)

    @property
    def validations(self) -> tuple[RowValidation, ...]:
        return tuple(r.validation for r in self.records)

    @property
    def table(self) -> RawTable:
        return RawTable(headers=self.headers, rows=self.rows)

    def __len__(self) -> int:
        return len(self.records)

    def with_records(self, records: tuple[OrderRow, ...]) -> Dataset:
        return replace(self, records=tuple(records))

    @property
    def invalid_count(self) -> int:
        return sum(1 for r in self.records if r.validation.is_blocking)

    @property
    def valid_count(self) -> int:
        return sum(1 for r in self.records if r.validation.is_valid)

    @property
    def resolved(self) -> bool:
        """True once every row has left the pending/checking states."""
        return all(r.validation.is_resolved for r in self.records)
