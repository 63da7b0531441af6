"""
Address resolution orchestrator.

Addresses in the local-dataset country (Georgia) are resolved against the
spatial dataset: city lookup, nearest road of that name within 30 km, then a
house-number estimate along the road or its centroid. Every other country is
forwarded to the remote geocoder.

resolve() never raises for lookup problems; failures come back as a
ResolvedAddress with success=False and a message.
"""

import logging
import re
from typing import Iterable, List, Optional

from address_resolver.config_manager import DEFAULT_COUNTRY_ALIASES, ResolverConfig
from address_resolver.dataset import FileDataset, SpatialDataset
from address_resolver.errors import (
    AddressResolutionError,
    DataUnavailableError,
    MissingFieldError,
    NoGeometryError,
    NotFoundError,
    OutOfRangeError,
)
from address_resolver.interpolation import PathInterpolator, parse_house_number
from address_resolver.models import Coordinate, ResolvedAddress, ResultSource
from address_resolver.providers import GoogleGeocoder, RemoteGeocoder
from address_resolver.proximity import DEFAULT_RADIUS_M, ProximityMatcher
from address_resolver.text_index import DEFAULT_LIMIT, GeoTextIndex

logger = logging.getLogger(__name__)

# Latin letters, digits and the Georgian Mkhedruli letters ა (U+10D0) to ჰ (U+10F0)
_COUNTRY_STRIP = re.compile(r"[^a-z0-9ა-ჰ]")


def normalize_country(country: Optional[str]) -> str:
    """Lowercase, trim and strip everything outside the supported alphabets."""
    if not country:
        return ""
    return _COUNTRY_STRIP.sub("", country.lower().strip())


def compose_address(street: str, house_number: Optional[str], city: str, country: str) -> str:
    """Free-text address for the remote provider."""
    street_part = street.strip()
    if house_number and house_number.strip():
        street_part = f"{street_part} {house_number.strip()}"
    return f"{street_part}, {city.strip()}, {country.strip()}"


class AddressResolver:
    """Resolve addresses to coordinates."""

    def __init__(
        self,
        dataset: SpatialDataset,
        remote_geocoder: Optional[RemoteGeocoder] = None,
        country_aliases: Iterable[str] = DEFAULT_COUNTRY_ALIASES,
        radius_m: float = DEFAULT_RADIUS_M,
        suggestion_limit: int = DEFAULT_LIMIT,
        min_query_length: int = 2,
        language: Optional[str] = "ka",
    ):
        """Initialize resolver.

        Args:
            dataset: Read-only spatial dataset for the local country
            remote_geocoder: Provider used for every other country
            country_aliases: Accepted spellings of the local country
            radius_m: Proximity bound between city and street, in meters
            suggestion_limit: Maximum number of suggestions returned
            min_query_length: Shortest query that produces suggestions
            language: Language hint passed to the remote provider
        """
        self.dataset = dataset
        self.remote_geocoder = remote_geocoder
        self.country_aliases = {normalize_country(alias) for alias in country_aliases}
        self.radius_m = radius_m
        self.suggestion_limit = suggestion_limit
        self.min_query_length = min_query_length
        self.language = language

        self.index = GeoTextIndex(dataset)
        self.matcher = ProximityMatcher(self.index, radius_m=radius_m)
        self.interpolator = PathInterpolator()

    @classmethod
    def from_config(cls, config: ResolverConfig) -> "AddressResolver":
        """Build a resolver with a file dataset and the Google geocoder."""
        dataset = FileDataset(
            places_path=config.dataset.places_path,
            roads_path=config.dataset.roads_path,
            places_layer=config.dataset.places_layer,
            roads_layer=config.dataset.roads_layer,
            name_column=config.dataset.name_column,
        )

        remote = None
        if config.remote_provider.enabled:
            remote = GoogleGeocoder(
                api_key=config.remote_provider.api_key,
                api_url=config.remote_provider.api_url,
                language=config.remote_provider.language,
                timeout=config.remote_provider.timeout,
            )

        return cls(
            dataset=dataset,
            remote_geocoder=remote,
            country_aliases=config.country_aliases,
            radius_m=config.radius_m,
            suggestion_limit=config.suggestion_limit,
            min_query_length=config.min_query_length,
            language=config.remote_provider.language,
        )

    @property
    def radius_km(self) -> str:
        return f"{self.radius_m / 1000:g}"

    def is_local_country(self, country: Optional[str]) -> bool:
        """True when country names the local-dataset country."""
        return normalize_country(country) in self.country_aliases

    # ------------------------------------------------------------------
    # resolve
    # ------------------------------------------------------------------

    def resolve(
        self,
        country: Optional[str],
        city: Optional[str],
        street: Optional[str],
        house_number: Optional[str] = None,
    ) -> ResolvedAddress:
        """Resolve one address.

        Args:
            country: Country name in any accepted spelling
            city: City name
            street: Street name
            house_number: Optional house number, e.g. "12", "12a"

        Returns:
            ResolvedAddress (success or failure, never raises for lookups)
        """
        try:
            self._validate(country, city, street)
        except MissingFieldError as e:
            logger.info(f"[{e.code}] {e}")
            return ResolvedAddress.failure(str(e))

        if house_number is not None:
            house_number = str(house_number).strip() or None

        if self.is_local_country(country):
            source = ResultSource.LOCAL_DATASET
            generic_error = "Dataset error"
        else:
            source = ResultSource.REMOTE_PROVIDER
            generic_error = "Geocoding provider error"

        try:
            if source == ResultSource.LOCAL_DATASET:
                return self._resolve_local(city, street, house_number)
            return self._resolve_remote(country, city, street, house_number)

        except DataUnavailableError as e:
            logger.error(f"[{e.code}] {source.value}: {e}")
            return ResolvedAddress.failure(generic_error, source)
        except AddressResolutionError as e:
            logger.info(f"[{e.code}] {e}")
            return ResolvedAddress.failure(str(e), source)
        except Exception as e:
            logger.exception(f"Unexpected error resolving address via {source.value}: {e}")
            return ResolvedAddress.failure(generic_error, source)

    @staticmethod
    def _validate(country: Optional[str], city: Optional[str], street: Optional[str]) -> None:
        missing = [
            label
            for label, value in (("country", country), ("city", city), ("street", street))
            if not value or not str(value).strip()
        ]
        if missing:
            raise MissingFieldError(f"All fields are required (missing: {', '.join(missing)}).")

    def _resolve_local(
        self,
        city: str,
        street: str,
        house_number: Optional[str],
    ) -> ResolvedAddress:
        city = city.strip()
        street = street.strip()

        place = self.index.find_exact_place(city)
        if place is None:
            raise NotFoundError(f'City "{city}" was not found.')

        road = self.matcher.nearest_match(street, place.location, self.radius_m)
        if road is None:
            raise OutOfRangeError(
                f'Street "{street}" is not within {self.radius_km} km of {city}.'
            )

        interpolated: Optional[Coordinate] = None
        number = parse_house_number(house_number)
        if number is not None:
            interpolated = self.interpolator.interpolate(road.geometry, number)
            if interpolated is None:
                logger.debug(f"Interpolation failed for {street} {house_number}, using centroid")

        coordinate = interpolated
        if coordinate is None:
            try:
                coordinate = self.interpolator.centroid(road.geometry)
            except NoGeometryError:
                raise NoGeometryError(
                    f'Coordinates for "{street}" could not be determined.'
                ) from None

        label = f"{city}, {street}"
        if house_number:
            label = f"{label} {house_number}"

        return ResolvedAddress(
            success=True,
            message=f'Address "{label}" is valid.',
            source=ResultSource.LOCAL_DATASET,
            coordinate=coordinate,
            geometry=road.geometry,
            interpolated_point=interpolated,
        )

    def _resolve_remote(
        self,
        country: str,
        city: str,
        street: str,
        house_number: Optional[str],
    ) -> ResolvedAddress:
        if self.remote_geocoder is None:
            raise DataUnavailableError("No remote geocoder configured")

        address = compose_address(street, house_number, city, country)
        result = self.remote_geocoder.geocode(address, self.language)
        if result is None:
            raise NotFoundError("Address was not found (remote provider).")

        return ResolvedAddress(
            success=True,
            message="Address is valid (remote provider).",
            source=ResultSource.REMOTE_PROVIDER,
            coordinate=result.coordinate,
            formatted_address=result.formatted_address,
        )

    # ------------------------------------------------------------------
    # suggestions
    # ------------------------------------------------------------------

    def suggest_cities(self, query: Optional[str], country: Optional[str]) -> List[str]:
        """Up to suggestion_limit city names starting with query.

        Empty when the query is too short, the country is not local, or the
        lookup fails.
        """
        if not query or len(query) < self.min_query_length:
            return []
        if not self.is_local_country(country):
            return []

        try:
            return self.index.find_places_by_prefix(query, self.suggestion_limit)
        except DataUnavailableError as e:
            logger.error(f"[{e.code}] city suggestions: {e}")
            return []
        except Exception as e:
            logger.exception(f"Unexpected error in city suggestions: {e}")
            return []

    def suggest_streets(
        self,
        city: Optional[str],
        query: Optional[str],
        country: Optional[str],
    ) -> List[str]:
        """Up to suggestion_limit street names containing query near city.

        Empty when city is missing or unknown, the query is too short, the
        country is not local, or the lookup fails.
        """
        if not city or not query or len(query) < self.min_query_length:
            return []
        if not self.is_local_country(country):
            return []

        try:
            place = self.index.find_exact_place(city.strip())
            if place is None:
                return []
            return self.index.find_roads_by_name_contains(
                query,
                near=place.location,
                radius_m=self.radius_m,
                limit=self.suggestion_limit,
            )
        except DataUnavailableError as e:
            logger.error(f"[{e.code}] street suggestions: {e}")
            return []
        except Exception as e:
            logger.exception(f"Unexpected error in street suggestions: {e}")
            return []
