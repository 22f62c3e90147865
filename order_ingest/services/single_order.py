from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import UTC, datetime

from ..geocoding.nominatim import Geocoder, GeocodingError
from ..models.order import OrderRecord
from ..models.validation import RowValidation
from ..storage.base import OrderStore, SubmitOutcome
from ..validation.geofence import NY_BOUNDS, BoundingBox, parse_number

"""Single-order creation flow.

Unlike the bulk path, a single order is confirmed with the reverse geocoder:
the coordinates must pass the bounding box AND resolve to the target state.
"""

__all__ = [
    "TARGET_STATE",
    "SingleOrderResult",
    "check_coordinates",
    "generate_order_id",
    "create_single_order",
]

TARGET_STATE = "New York"

MSG_NOT_NUMERIC = "Please enter valid numeric coordinates."
MSG_OUTSIDE = "Coordinates are outside New York State bounds. Only NY locations are accepted."
MSG_UNVERIFIED = "Could not verify location. Please check coordinates and try again."
MSG_BAD_SUBTOTAL = "Please enter a valid subtotal amount."

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SingleOrderResult:
    validation: RowValidation
    record: OrderRecord | None = None
    outcome: SubmitOutcome | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is not None and self.outcome.ok


def check_coordinates(latitude: str, longitude: str, geocoder: Geocoder,
                      target_state: str = TARGET_STATE,
                      bounds: BoundingBox = NY_BOUNDS) -> RowValidation:
    """Bounding box first, then reverse geocode; only an exact state match passes."""
    lat = parse_number(latitude)
    lon = parse_number(longitude)
    if lat is None or lon is None:
        return RowValidation.invalid(MSG_NOT_NUMERIC)
    if not bounds.contains(lat, lon):
        return RowValidation.invalid(MSG_OUTSIDE)
    try:
        state = geocoder.reverse_state(lat, lon)
    except GeocodingError as e:
        logger.warning(f"reverse geocode failed lat={lat} lon={lon}: {e}")
        return RowValidation.error(MSG_UNVERIFIED)
    if state == target_state:
        return RowValidation.valid()
    if state:
        return RowValidation.invalid(
            f"Location is in {state}, not {target_state} State. Only NY locations are accepted."
        )
    return RowValidation.invalid(MSG_UNVERIFIED)


def generate_order_id() -> str:
    return f"ORD-{random.randint(0, 9999):04d}"


def _now_iso() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def create_single_order(latitude: str, longitude: str, subtotal: str,
                        geocoder: Geocoder, store: OrderStore,
                        order_id: str | None = None, timestamp: str | None = None,
                        target_state: str = TARGET_STATE) -> SingleOrderResult:
    validation = check_coordinates(latitude, longitude, geocoder, target_state)
    if not validation.is_valid:
        return SingleOrderResult(validation=validation)

    amount = parse_number(subtotal)
    if amount is None or amount <= 0:
        return SingleOrderResult(validation=RowValidation.invalid(MSG_BAD_SUBTOTAL))

    record = OrderRecord(
        id=order_id or generate_order_id(),
        latitude=parse_number(latitude),
        longitude=parse_number(longitude),
        subtotal=amount,
        timestamp=timestamp or _now_iso(),
    )
    outcome = store.create_order(record)
    if not outcome.ok:
        logger.error(f"create order {record.id} rejected: {outcome.message}")
    return SingleOrderResult(validation=validation, record=record, outcome=outcome)
