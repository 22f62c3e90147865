"""Pipeline services: triage, gate, session, orchestration, single-order flow."""

from .gate import GateInputs, gate_inputs, upload_ready
from .orchestrator import process_file
from .session import ImportSession, SessionStateError, UploadBlockedError, ValidationTicket
from .triage import StripResult, strip_invalid, triage

__all__ = [
    "GateInputs",
    "ImportSession",
    "SessionStateError",
    "StripResult",
    "UploadBlockedError",
    "ValidationTicket",
    "gate_inputs",
    "process_file",
    "strip_invalid",
    "triage",
    "upload_ready",
]
