from __future__ import annotations

from dataclasses import dataclass

from ..models.dataset import Dataset
from ..models.table import ParseReport

"""Upload gate: readiness predicate for bulk submission.

Pure; recompute whenever any input changes (file replaced, validation
progressed, rows stripped, submission completed).
"""

__all__ = [
    "GateInputs",
    "gate_inputs",
    "upload_ready",
]


@dataclass(frozen=True)
class GateInputs:
    dataset_present: bool
    schema_complete: bool
    validations_resolved: bool
    invalid_count: int  # Invalid + Error。行形状エラーは含めない
    submitted: bool

    def blocking_reasons(self) -> list[str]:
        reasons: list[str] = []
        if not self.dataset_present:
            reasons.append("no rows to upload")
        if not self.schema_complete:
            reasons.append("header columns missing or duplicated")
        if not self.validations_resolved:
            reasons.append("validation not finished")
        if self.invalid_count:
            reasons.append(f"{self.invalid_count} invalid row(s)")
        if self.submitted:
            reasons.append("already submitted")
        return reasons


def upload_ready(inputs: GateInputs) -> bool:
    return (
        inputs.dataset_present
        and inputs.schema_complete
        and inputs.validations_resolved
        and inputs.invalid_count == 0
        and not inputs.submitted
    )


def gate_inputs(dataset: Dataset | None, report: ParseReport | None,
                submitted: bool = False) -> GateInputs:
    """Derive gate inputs from the current session state.

    A dataset with zero rows counts as absent.
    """
    present = dataset is not None and len(dataset) > 0
    return GateInputs(
        dataset_present=present,
        schema_complete=report is not None and report.usable,
        validations_resolved=dataset is not None and dataset.resolved,
        invalid_count=0 if dataset is None else dataset.invalid_count,
        submitted=submitted,
    )
