"""Reverse geocoding collaborator."""

from .nominatim import Geocoder, GeocodingError, NominatimGeocoder

__all__ = [
    "Geocoder",
    "GeocodingError",
    "NominatimGeocoder",
]
