"""
Proximity matching of named roads.

A road name like "Rustaveli" exists in many towns; only roads whose geometry
comes within the proximity radius of the reference point are considered, and
the closest one is returned.
"""

import logging
from typing import Optional

from address_resolver.dataset import road_from_row
from address_resolver.geoutils import rank_by_distance
from address_resolver.models import LngLat, Road
from address_resolver.text_index import GeoTextIndex

logger = logging.getLogger(__name__)

DEFAULT_RADIUS_M = 30_000.0


class ProximityMatcher:
    """Find the nearest road with a given name."""

    def __init__(self, index: GeoTextIndex, radius_m: float = DEFAULT_RADIUS_M):
        """Initialize matcher.

        Args:
            index: Text index used for the name lookup
            radius_m: Default proximity bound in meters
        """
        self.index = index
        self.radius_m = radius_m

    def nearest_match(
        self,
        name: str,
        near: LngLat,
        radius_m: Optional[float] = None,
    ) -> Optional[Road]:
        """Road named name (case-insensitive) closest to near.

        Ties on distance keep dataset order. Roads without geometry are
        ignored.

        Args:
            name: Full road name
            near: Reference point (lng, lat)
            radius_m: Proximity bound, defaults to the matcher radius

        Returns:
            Closest Road within the radius, or None

        Raises:
            DataUnavailableError: If the dataset cannot be read
        """
        radius = self.radius_m if radius_m is None else radius_m
        candidates = self.index.find_roads(name, mode="exact")
        if candidates.empty:
            logger.debug(f"No road named '{name}'")
            return None

        ranked = rank_by_distance(candidates, near, radius)
        if not ranked:
            logger.debug(
                f"{len(candidates)} road(s) named '{name}', none within {radius:.0f} m"
            )
            return None

        position, distance = ranked[0]
        road = road_from_row(candidates.iloc[position])
        logger.debug(f"Matched road '{road.name}' at {distance:.0f} m")
        return road
