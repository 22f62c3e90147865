"""Per-row geofence validation."""

from .geofence import NY_BOUNDS, BoundingBox, classify_row, validate_dataset

__all__ = [
    "NY_BOUNDS",
    "BoundingBox",
    "classify_row",
    "validate_dataset",
]
