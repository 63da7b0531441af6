"""
Google Geocoding API client.

Environment:
    export GOOGLE_MAPS_API_KEY="YOUR_KEY"

Only the first result is used. A status other than "OK" (ZERO_RESULTS,
REQUEST_DENIED, OVER_QUERY_LIMIT, ...) is treated as "no result"; network and
decoding errors are raised as DataUnavailableError. There is no retry.
"""

import logging
from typing import Any, Dict, Optional

import requests

from address_resolver.errors import DataUnavailableError
from address_resolver.models import Coordinate, RemoteGeocodeResult
from address_resolver.providers.base import RemoteGeocoder

logger = logging.getLogger(__name__)

GOOGLE_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"


class GoogleGeocoder(RemoteGeocoder):
    """Forward geocoding through the Google Geocoding JSON API."""

    def __init__(
        self,
        api_key: Optional[str],
        api_url: str = GOOGLE_GEOCODE_URL,
        language: str = "ka",
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        """Initialize client.

        Args:
            api_key: Google Maps API key
            api_url: Geocoding endpoint
            language: Default language hint
            timeout: Request timeout in seconds
            session: Optional requests session (shared connection pool)
        """
        self.api_key = api_key
        self.api_url = api_url
        self.language = language
        self.timeout = timeout
        self.session = session or requests.Session()

        if not api_key:
            logger.warning("Google Maps API key not set; remote geocoding will fail")

    def geocode(self, address: str, language: Optional[str] = None) -> Optional[RemoteGeocodeResult]:
        if not self.api_key:
            raise DataUnavailableError("Google Maps API key is not configured")

        params = {
            "address": address,
            "key": self.api_key,
            "language": language or self.language,
        }

        try:
            response = self.session.get(self.api_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise DataUnavailableError(f"Google geocoding request failed: {e}") from e
        except ValueError as e:
            raise DataUnavailableError(f"Google geocoding returned invalid JSON: {e}") from e

        return self._parse_response(address, data)

    def _parse_response(self, address: str, data: Dict[str, Any]) -> Optional[RemoteGeocodeResult]:
        status = data.get("status")
        results = data.get("results") or []
        if status != "OK" or not results:
            logger.info(f"Google geocoding: no result for '{address}' (status={status})")
            return None

        first = results[0]
        try:
            location = first["geometry"]["location"]
            return RemoteGeocodeResult(
                formatted_address=first.get("formatted_address") or address,
                coordinate=Coordinate(lat=location["lat"], lng=location["lng"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise DataUnavailableError(f"Unexpected Google geocoding payload: {e}") from e
