"""
Remote geocoding providers used outside the local-dataset country.
"""

from .base import RemoteGeocoder
from .google_geocoder import GOOGLE_GEOCODE_URL, GoogleGeocoder

__all__ = [
    "RemoteGeocoder",
    "GoogleGeocoder",
    "GOOGLE_GEOCODE_URL",
]
