from __future__ import annotations

import logging
from typing import Protocol

import requests

from ..models.config_models import GeocoderConfig

"""Reverse geocoding boundary (single-order path only).

Bulk rows never go through here: per-row lookups would hit the service's
rate limit and make large files unusably slow.
"""

__all__ = [
    "GeocodingError",
    "Geocoder",
    "NominatimGeocoder",
]

logger = logging.getLogger(__name__)


class GeocodingError(Exception):
    """Raised when the geocoding service cannot be reached."""


class Geocoder(Protocol):
    def reverse_state(self, latitude: float, longitude: float) -> str | None: ...


class NominatimGeocoder:
    """Looks up ``address.state`` for a coordinate via Nominatim /reverse."""

    def __init__(self, config: GeocoderConfig, session: requests.Session | None = None) -> None:
        self.config = config
        self.session = session or requests.Session()

    def reverse_state(self, latitude: float, longitude: float) -> str | None:
        url = self.config.base_url.rstrip("/") + "/reverse"
        params = {
            "lat": latitude,
            "lon": longitude,
            "format": "json",
            "addressdetails": 1,
        }
        headers = {"Accept-Language": "en", "User-Agent": self.config.user_agent}
        try:
            res = self.session.get(url, params=params, headers=headers,
                                   timeout=self.config.timeout_seconds)
        except requests.RequestException as e:
            raise GeocodingError(str(e)) from e
        if not res.ok:
            logger.debug(f"reverse geocode status={res.status_code} lat={latitude} lon={longitude}")
            return None
        try:
            data = res.json()
        except ValueError:
            return None
        address = data.get("address") if isinstance(data, dict) else None
        if not isinstance(address, dict):
            return None
        return address.get("state")
