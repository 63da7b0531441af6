"""
Name lookup over the places and roads layers.

Queries are compared literally and case-insensitively; user input is never
compiled into a pattern, so characters like '.', '(' or '*' match themselves.
"""

import logging
from typing import List, Literal, Optional

import geopandas as gpd
import pandas as pd

from address_resolver.dataset import SpatialDataset, place_from_row
from address_resolver.geoutils import rank_by_distance
from address_resolver.models import LngLat, Place

logger = logging.getLogger(__name__)

MatchMode = Literal["prefix", "exact", "contains"]

DEFAULT_LIMIT = 10


def fold_case(value: str) -> str:
    """Lowercase form used for every name comparison. Whitespace is kept."""
    return value.lower()


class NameMatcher:
    """Literal case-insensitive name matcher."""

    MODES = ("prefix", "exact", "contains")

    def __init__(self, query: str, mode: MatchMode = "contains"):
        if mode not in self.MODES:
            raise ValueError(f"Unknown match mode: {mode}")
        self.query = fold_case(query)
        self.mode = mode

    def matches(self, name: Optional[str]) -> bool:
        """Check a single name."""
        if name is None:
            return False
        folded = fold_case(name)
        if self.mode == "prefix":
            return folded.startswith(self.query)
        if self.mode == "exact":
            return folded == self.query
        return self.query in folded

    def mask(self, names: pd.Series) -> pd.Series:
        """Vectorised matches() over a Series of names."""
        folded = names.astype(str).str.lower()
        if self.mode == "prefix":
            return folded.str.startswith(self.query)
        if self.mode == "exact":
            return folded == self.query
        return folded.str.contains(self.query, regex=False)


class GeoTextIndex:
    """Prefix / exact / substring lookups of place and road names."""

    def __init__(self, dataset: SpatialDataset):
        """Initialize index.

        Args:
            dataset: Read-only spatial dataset
        """
        self.dataset = dataset

    def find_places_by_prefix(self, query: str, limit: int = DEFAULT_LIMIT) -> List[str]:
        """Names of places starting with query, in dataset order.

        Raises:
            DataUnavailableError: If the dataset cannot be read
        """
        places = self.dataset.places_frame()
        matched = places[NameMatcher(query, "prefix").mask(places["name"])]
        return matched["name"].head(limit).tolist()

    def find_exact_place(self, name: str) -> Optional[Place]:
        """First place whose full name equals name, ignoring case.

        Raises:
            DataUnavailableError: If the dataset cannot be read
        """
        places = self.dataset.places_frame()
        matched = places[NameMatcher(name, "exact").mask(places["name"])]

        for _, row in matched.iterrows():
            place = place_from_row(row)
            if place is not None:
                return place

        logger.debug(f"No place named '{name}'")
        return None

    def find_roads(self, query: str, mode: MatchMode = "exact") -> gpd.GeoDataFrame:
        """Road rows whose name matches query, in dataset order."""
        roads = self.dataset.roads_frame()
        return roads[NameMatcher(query, mode).mask(roads["name"])]

    def find_roads_by_name_contains(
        self,
        query: str,
        near: LngLat,
        radius_m: float,
        limit: int = DEFAULT_LIMIT,
        mode: MatchMode = "contains",
    ) -> List[str]:
        """Names of roads matching query within radius_m of near.

        Args:
            query: Text to look for in road names
            near: Reference point (lng, lat)
            radius_m: Proximity bound in meters
            limit: Maximum number of names returned
            mode: "contains" for free-text search, "prefix" for anchored search

        Returns:
            Distinct road names, closest first

        Raises:
            DataUnavailableError: If the dataset cannot be read
        """
        candidates = self.find_roads(query, mode)
        names: List[str] = []
        for position, _distance in rank_by_distance(candidates, near, radius_m):
            name = candidates["name"].iloc[position]
            if name in names:
                continue
            names.append(name)
            if len(names) >= limit:
                break
        return names
