"""
Pydantic models for places, roads and resolution results.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

# (longitude, latitude), the order used by GeoJSON and shapely
LngLat = Tuple[float, float]
Polyline = List[LngLat]
MultiLine = List[Polyline]


class ResultSource(str, Enum):
    """Where a resolution result came from."""
    LOCAL_DATASET = "LocalDataset"
    REMOTE_PROVIDER = "RemoteProvider"


class Coordinate(BaseModel):
    """A (latitude, longitude) pair in degrees."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class Place(BaseModel):
    """Named settlement with a single representative point."""

    model_config = ConfigDict(frozen=True)

    name: str
    location: LngLat


class Road(BaseModel):
    """Named road, stored as one or more polylines."""

    model_config = ConfigDict(frozen=True)

    name: str
    geometry: MultiLine = Field(default_factory=list)

    @property
    def point_count(self) -> int:
        return sum(len(line) for line in self.geometry)


class RemoteGeocodeResult(BaseModel):
    """Successful answer from a remote geocoding provider."""

    formatted_address: str
    coordinate: Coordinate


class ResolvedAddress(BaseModel):
    """Outcome of a single resolve() call."""

    model_config = ConfigDict(use_enum_values=True)

    success: bool
    message: str
    source: Optional[ResultSource] = None
    coordinate: Optional[Coordinate] = None
    geometry: Optional[MultiLine] = None
    interpolated_point: Optional[Coordinate] = None
    formatted_address: Optional[str] = None

    @classmethod
    def failure(cls, message: str, source: Optional[ResultSource] = None) -> "ResolvedAddress":
        return cls(success=False, message=message, source=source)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        return self.model_dump(mode="json")
