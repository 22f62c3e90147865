from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future
from dataclasses import dataclass

from ..models.dataset import Dataset
from ..models.table import ParseReport, RawTable
from ..parsing.reader import ParsedFile, parse_text
from ..storage.base import OrderStore, SubmitOutcome, UploadPayload
from ..validation.geofence import mark_checking, validate_dataset
from .gate import GateInputs, gate_inputs, upload_ready
from .triage import StripResult, strip_invalid, triage

"""Import session: the single owner of the current file's dataset.

Supersession: every file selection (or clear) bumps a generation counter. A
validation pass carries the generation it was started for and checks it once,
right before committing; a stale pass is discarded whole. Commits replace the
dataset atomically under the session lock, which also serialises triage,
stripping, gate evaluation and submission (one writer at a time).
"""

__all__ = [
    "SessionStateError",
    "UploadBlockedError",
    "ValidationTicket",
    "ImportSession",
]

logger = logging.getLogger(__name__)


class SessionStateError(Exception):
    """Operation not allowed in the session's current state."""


class UploadBlockedError(SessionStateError):
    def __init__(self, inputs: GateInputs) -> None:
        self.inputs = inputs
        super().__init__("upload blocked: " + ", ".join(inputs.blocking_reasons()))


@dataclass(frozen=True)
class ValidationTicket:
    generation: int
    file_name: str


class ImportSession:
    def __init__(self, store: OrderStore | None = None, show_progress: bool = False) -> None:
        self.store = store
        self.show_progress = show_progress
        self._lock = threading.Lock()
        self._generation = 0
        self.file_name: str | None = None
        self.parsed: ParsedFile | None = None
        self.dataset: Dataset | None = None
        self.submitted = False
        self.upload_error: str | None = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def report(self) -> ParseReport | None:
        return None if self.parsed is None else self.parsed.report

    def _reset(self, file_name: str | None) -> None:
        # 呼び出し側で lock 取得済み
        self._generation += 1
        self.file_name = file_name
        self.parsed = None
        self.dataset = None
        self.submitted = False
        self.upload_error = None

    def select_file(self, file_name: str, text: str) -> ValidationTicket | None:
        """Replace the current file; returns a ticket when a validation pass is due.

        Any pass still running for the previous file becomes stale.
        """
        parsed = parse_text(text)
        with self._lock:
            self._reset(file_name)
            self.parsed = parsed
            if not parsed.usable:
                logger.debug(f"{file_name}: not usable, skipping validation")
                return None
            self.dataset = parsed.to_dataset()
            if not len(self.dataset):
                return None
            self.dataset = mark_checking(self.dataset)
            return ValidationTicket(generation=self._generation, file_name=file_name)

    def reject_file(self, file_name: str, message: str) -> None:
        """Record a file-level fatal error (unsupported type, undecodable)."""
        with self._lock:
            self._reset(file_name)
            self.parsed = ParsedFile(
                table=RawTable.empty(),
                report=ParseReport(row_errors=(message,), line_numbers=(-1,)),
            )

    def clear(self) -> None:
        with self._lock:
            self._reset(None)

    def is_current(self, ticket: ValidationTicket) -> bool:
        return ticket.generation == self._generation

    def run_validation(self, ticket: ValidationTicket) -> bool:
        """Classify and triage the ticket's dataset; commit only if still current."""
        with self._lock:
            if not self.is_current(ticket) or self.dataset is None:
                return False
            snapshot = self.dataset
        result = triage(validate_dataset(snapshot, show_progress=self.show_progress))
        with self._lock:
            if not self.is_current(ticket):
                logger.debug(f"{ticket.file_name}: superseded, discarding validation results")
                return False
            self.dataset = result
        return True

    def start_validation(self, executor: Executor, ticket: ValidationTicket) -> Future[bool]:
        return executor.submit(self.run_validation, ticket)

    def _require_resolved(self) -> Dataset:
        if self.dataset is None:
            raise SessionStateError("no dataset loaded")
        if not self.dataset.resolved:
            raise SessionStateError("validation still in progress")
        return self.dataset

    def triage(self) -> Dataset:
        with self._lock:
            self.dataset = triage(self._require_resolved())
            return self.dataset

    def strip_invalid(self) -> StripResult:
        """Drop every non-valid row. No undo."""
        with self._lock:
            result = strip_invalid(self._require_resolved())
            self.dataset = result.dataset
            return result

    def gate(self) -> GateInputs:
        with self._lock:
            return gate_inputs(self.dataset, self.report, self.submitted)

    def can_upload(self) -> bool:
        return upload_ready(self.gate())

    def submit(self) -> SubmitOutcome:
        """Hand the valid rows to the order store. All-or-nothing, never retried."""
        if self.store is None:
            raise SessionStateError("no order store configured")
        with self._lock:
            inputs = gate_inputs(self.dataset, self.report, self.submitted)
            if not upload_ready(inputs):
                raise UploadBlockedError(inputs)
            dataset = self.dataset
            text = strip_invalid(dataset).text
            payload = UploadPayload(file_name=self.file_name or "orders.csv", text=text, dataset=dataset)
            self.upload_error = None
            outcome = self.store.submit_batch(payload)
            if outcome.ok:
                self.submitted = True
            else:
                self.upload_error = outcome.message
            return outcome
