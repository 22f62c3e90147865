from __future__ import annotations

import pytest

from order_ingest.parsing.reader import parse_text
from order_ingest.services.gate import GateInputs, gate_inputs, upload_ready
from order_ingest.services.triage import strip_invalid, triage
from order_ingest.validation.geofence import mark_checking, validate_dataset

READY = GateInputs(dataset_present=True, schema_complete=True, validations_resolved=True,
                   invalid_count=0, submitted=False)


def test_all_conditions_hold():
    assert upload_ready(READY)
    assert READY.blocking_reasons() == []


@pytest.mark.parametrize("change", [
    {"dataset_present": False},
    {"schema_complete": False},
    {"validations_resolved": False},
    {"invalid_count": 1},
    {"submitted": True},
])
def test_any_false_input_blocks(change):
    inputs = GateInputs(**{**READY.__dict__, **change})
    assert not upload_ready(inputs)
    assert len(inputs.blocking_reasons()) == 1


def test_scenario_a_ready():
    parsed = parse_text("latitude,longitude,subtotal\n40.7580,-73.9855,120\n")
    ds = triage(validate_dataset(parsed.to_dataset(), show_progress=False))
    assert parsed.report.missing_columns == ()
    assert len(ds) == 1
    assert ds.validations[0].is_valid
    assert upload_ready(gate_inputs(ds, parsed.report))


def test_scenario_b_missing_column_never_ready():
    parsed = parse_text("latitude,longitude\n40.7580,-73.9855\n")
    assert parsed.report.missing_columns == ("subtotal",)
    assert not upload_ready(gate_inputs(None, parsed.report))
    # 仮に空でない dataset を渡しても schema 不備で不可
    other = parse_text("latitude,longitude,subtotal\n40.7,-73.9,1\n")
    ds = validate_dataset(other.to_dataset(), show_progress=False)
    assert not upload_ready(gate_inputs(ds, parsed.report))


def test_scenario_c_invalid_blocks_then_empty_after_strip():
    parsed = parse_text("latitude,longitude,subtotal\n91.0,-73.9855,50\n")
    ds = triage(validate_dataset(parsed.to_dataset(), show_progress=False))
    inputs = gate_inputs(ds, parsed.report)
    assert inputs.invalid_count == 1
    assert not upload_ready(inputs)
    stripped = strip_invalid(ds).dataset
    assert not upload_ready(gate_inputs(stripped, parsed.report))


def test_checking_rows_block():
    parsed = parse_text("latitude,longitude,subtotal\n40.7,-73.9,1\n")
    ds = mark_checking(parsed.to_dataset())
    assert not gate_inputs(ds, parsed.report).validations_resolved
    assert not upload_ready(gate_inputs(ds, parsed.report))


def test_shape_errors_do_not_block():
    parsed = parse_text("latitude,longitude,subtotal\n40.7,-73.9,1\n1,2\n")
    ds = validate_dataset(parsed.to_dataset(), show_progress=False)
    assert parsed.report.row_errors
    assert upload_ready(gate_inputs(ds, parsed.report))


def test_submitted_blocks_resubmit():
    parsed = parse_text("latitude,longitude,subtotal\n40.7,-73.9,1\n")
    ds = validate_dataset(parsed.to_dataset(), show_progress=False)
    assert not upload_ready(gate_inputs(ds, parsed.report, submitted=True))
