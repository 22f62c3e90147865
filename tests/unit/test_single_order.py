from __future__ import annotations

import re

from order_ingest.geocoding.nominatim import GeocodingError
from order_ingest.models.validation import ValidationStatus
from order_ingest.services.single_order import (
    MSG_BAD_SUBTOTAL,
    MSG_NOT_NUMERIC,
    MSG_OUTSIDE,
    MSG_UNVERIFIED,
    check_coordinates,
    create_single_order,
    generate_order_id,
)
from order_ingest.storage.base import SubmitOutcome


class FakeGeocoder:
    def __init__(self, state=None, error: Exception | None = None) -> None:
        self.state = state
        self.error = error
        self.calls = 0

    def reverse_state(self, latitude, longitude):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.state


class FakeStore:
    def __init__(self, outcome: SubmitOutcome | None = None) -> None:
        self.outcome = outcome or SubmitOutcome.success({"id": "x"})
        self.created = []

    def create_order(self, record):
        self.created.append(record)
        return self.outcome

    def submit_batch(self, payload):  # pragma: no cover
        raise AssertionError("not used")


def test_check_coordinates_not_numeric_skips_geocoder():
    geo = FakeGeocoder("New York")
    v = check_coordinates("abc", "-73.9", geo)
    assert v.status is ValidationStatus.INVALID
    assert v.reason == MSG_NOT_NUMERIC
    assert geo.calls == 0


def test_check_coordinates_outside_box_skips_geocoder():
    geo = FakeGeocoder("New York")
    v = check_coordinates("34.05", "-118.24", geo)
    assert v.reason == MSG_OUTSIDE
    assert geo.calls == 0


def test_check_coordinates_in_box_but_other_state():
    # ボックス内だが NJ (Newark 付近)
    v = check_coordinates("40.73", "-74.17", FakeGeocoder("New Jersey"))
    assert v.status is ValidationStatus.INVALID
    assert v.reason == "Location is in New Jersey, not New York State. Only NY locations are accepted."


def test_check_coordinates_no_state_found():
    v = check_coordinates("41.0", "-72.0", FakeGeocoder(None))
    assert v.reason == MSG_UNVERIFIED


def test_check_coordinates_geocoder_failure_is_error():
    v = check_coordinates("40.7", "-73.9", FakeGeocoder(error=GeocodingError("down")))
    assert v.status is ValidationStatus.ERROR
    assert v.reason == MSG_UNVERIFIED
    assert v.is_blocking


def test_check_coordinates_ny_valid():
    assert check_coordinates("40.7580", "-73.9855", FakeGeocoder("New York")).is_valid


def test_generate_order_id_format():
    for _ in range(20):
        assert re.fullmatch(r"ORD-\d{4}", generate_order_id())


def test_create_single_order_success():
    store = FakeStore()
    result = create_single_order("40.7580", "-73.9855", "19.99", FakeGeocoder("New York"), store)
    assert result.ok
    rec = store.created[0]
    assert rec is result.record
    assert re.fullmatch(r"ORD-\d{4}", rec.id)
    assert rec.latitude == 40.758
    assert rec.subtotal == 19.99
    assert rec.timestamp.endswith("Z")


def test_create_single_order_explicit_id_and_timestamp():
    store = FakeStore()
    result = create_single_order("40.7", "-73.9", "5", FakeGeocoder("New York"), store,
                                 order_id="A-1", timestamp="2026-01-01T00:00:00Z")
    assert result.record.id == "A-1"
    assert result.record.timestamp == "2026-01-01T00:00:00Z"


def test_create_single_order_rejected_location_never_stored():
    store = FakeStore()
    result = create_single_order("40.73", "-74.17", "5", FakeGeocoder("New Jersey"), store)
    assert not result.ok
    assert result.record is None
    assert store.created == []


def test_create_single_order_bad_subtotal():
    for subtotal in ("0", "-3", "free", ""):
        store = FakeStore()
        result = create_single_order("40.7", "-73.9", subtotal, FakeGeocoder("New York"), store)
        assert result.validation.reason == MSG_BAD_SUBTOTAL
        assert store.created == []


def test_create_single_order_store_failure_surfaces_message():
    store = FakeStore(SubmitOutcome.failure("Failed to create order: duplicate"))
    result = create_single_order("40.7", "-73.9", "5", FakeGeocoder("New York"), store)
    assert result.record is not None
    assert not result.ok
    assert result.outcome.message == "Failed to create order: duplicate"
