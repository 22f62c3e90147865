from __future__ import annotations

import math
from collections.abc import Mapping
from contextlib import nullcontext
from dataclasses import dataclass

from ..models.dataset import Dataset
from ..models.validation import RowValidation
from .progress import ValidationProgress

"""Geofence validator for bulk order rows.

Rows are accepted only if both coordinates parse as finite floats and fall
inside a fixed bounding box approximating New York State (bounds inclusive).
No network calls: bulk rows are never reverse-geocoded.
"""

__all__ = [
    "BoundingBox",
    "NY_BOUNDS",
    "INVALID_COORDINATES",
    "OUTSIDE_BOUNDS",
    "parse_number",
    "classify_coordinates",
    "classify_row",
    "mark_checking",
    "validate_dataset",
]

INVALID_COORDINATES = "Invalid coordinates"
OUTSIDE_BOUNDS = "Outside NY state bounds"


@dataclass(frozen=True)
class BoundingBox:
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    def contains(self, lat: float, lon: float) -> bool:
        return (
            self.min_lat <= lat <= self.max_lat
            and self.min_lon <= lon <= self.max_lon
        )


NY_BOUNDS = BoundingBox(min_lat=40.496, max_lat=45.016, min_lon=-79.763, max_lon=-71.856)


def parse_number(value: str | None) -> float | None:
    """Parse a numeric cell; None when it is not a finite number."""
    if value is None:
        return None
    text = value.strip()
    # float() は "1_0" を受理するが CSV の数値としては不正
    if "_" in text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    # nan / inf は座標として扱わない
    if not math.isfinite(number):
        return None
    return number


def classify_coordinates(lat: float | None, lon: float | None,
                         bounds: BoundingBox = NY_BOUNDS) -> RowValidation:
    if lat is None or lon is None:
        return RowValidation.invalid(INVALID_COORDINATES)
    if not bounds.contains(lat, lon):
        return RowValidation.invalid(OUTSIDE_BOUNDS)
    return RowValidation.valid()


def classify_row(fields: Mapping[str, str], bounds: BoundingBox = NY_BOUNDS) -> RowValidation:
    lat = parse_number(fields.get("latitude"))
    lon = parse_number(fields.get("longitude"))
    return classify_coordinates(lat, lon, bounds)


def mark_checking(dataset: Dataset) -> Dataset:
    """Tag every row CHECKING for the duration of a validation pass."""
    return dataset.with_records(
        tuple(r.with_validation(RowValidation.checking()) for r in dataset.records)
    )


def validate_dataset(dataset: Dataset, bounds: BoundingBox = NY_BOUNDS,
                     show_progress: bool = True) -> Dataset:
    """Classify every row in one pass and return the fully resolved dataset.

    Rows keep their order; triage is a separate step.
    """
    records = []
    invalid = 0
    with ValidationProgress(len(dataset)) if show_progress else nullcontext() as progress:
        for record in dataset.records:
            validation = classify_row(record.fields, bounds)
            records.append(record.with_validation(validation))
            if progress is not None:
                invalid += int(validation.is_blocking)
                progress.advance()
                progress.set_postfix(invalid=invalid)
    return dataset.with_records(tuple(records))
