"""
Remote geocoder interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from address_resolver.models import RemoteGeocodeResult


class RemoteGeocoder(ABC):
    """Forward geocoding of a free-text address by an external service."""

    @abstractmethod
    def geocode(self, address: str, language: Optional[str] = None) -> Optional[RemoteGeocodeResult]:
        """Geocode one address string.

        Args:
            address: Free-text address
            language: Preferred language of the formatted address

        Returns:
            RemoteGeocodeResult, or None when the provider has no result

        Raises:
            DataUnavailableError: If the provider cannot be reached
        """
        pass
