from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

"""OrderRecord model for the single-order create call."""

__all__ = [
    "OrderRecord",
]


@dataclass(frozen=True)
class OrderRecord:
    id: str
    latitude: float
    longitude: float
    subtotal: float
    timestamp: str  # ISO8601 UTC, 'Z' suffix

    def to_payload(self) -> dict[str, Any]:
        """JSON body accepted by the order-storage service."""
        return asdict(self)
