"""
House-number interpolation along road geometry.

House numbers are assumed to be spread uniformly over the full road length on
a 1-1000 scale: number 500 sits halfway along the road, 1000 and above at its
last point. There is no address-range data behind this; it is a best-effort
estimate, with the centroid as fallback.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from address_resolver.errors import NoGeometryError
from address_resolver.geoutils import lnglat_distance
from address_resolver.models import Coordinate, LngLat, MultiLine

logger = logging.getLogger(__name__)

HOUSE_NUMBER_SCALE = 1000

_NON_DIGITS = re.compile(r"\D")


def parse_house_number(raw: Optional[object]) -> Optional[int]:
    """Digits of a house number as an int, e.g. "12a" -> 12, "N 7/3" -> 73.

    Returns None for missing, digit-free or zero values.
    """
    if raw is None:
        return None
    digits = _NON_DIGITS.sub("", str(raw))
    if not digits:
        return None
    number = int(digits)
    return number if number > 0 else None


@dataclass
class Segment:
    """Straight piece between two consecutive polyline points."""
    start: LngLat
    end: LngLat
    length_m: float
    offset_m: float  # distance from the start of the road

    @property
    def end_offset_m(self) -> float:
        return self.offset_m + self.length_m


class PathInterpolator:
    """Estimate positions along a road geometry."""

    def __init__(self, scale: int = HOUSE_NUMBER_SCALE):
        self.scale = scale

    @staticmethod
    def segments(geometry: MultiLine) -> List[Segment]:
        """Consecutive point pairs of every polyline, polylines in order."""
        segments = []
        offset = 0.0
        for line in geometry:
            for start, end in zip(line, line[1:]):
                length = lnglat_distance(start, end)
                segments.append(Segment(start=start, end=end, length_m=length, offset_m=offset))
                offset += length
        return segments

    @staticmethod
    def centroid(geometry: MultiLine) -> Coordinate:
        """Mean of every point in the geometry, per axis.

        Raises:
            NoGeometryError: If the geometry holds no points
        """
        points = [point for line in geometry for point in line]
        if not points:
            raise NoGeometryError("Geometry has no points")

        lng = sum(p[0] for p in points) / len(points)
        lat = sum(p[1] for p in points) / len(points)
        return Coordinate(lat=lat, lng=lng)

    def interpolate(self, geometry: MultiLine, house_number: Optional[int]) -> Optional[Coordinate]:
        """Point at house_number / scale of the road length.

        Returns:
            Coordinate, or None when the house number is not positive or the
            geometry has zero length
        """
        if not isinstance(house_number, int) or isinstance(house_number, bool) or house_number <= 0:
            return None

        segments = self.segments(geometry)
        total = segments[-1].end_offset_m if segments else 0.0
        if total == 0:
            logger.debug("Zero-length geometry, cannot interpolate")
            return None

        target = (house_number / self.scale) * total
        if target >= total:
            return self._last_point(geometry)

        for segment in segments:
            if segment.length_m > 0 and segment.end_offset_m >= target:
                ratio = (target - segment.offset_m) / segment.length_m
                (lng1, lat1), (lng2, lat2) = segment.start, segment.end
                return Coordinate(
                    lat=lat1 + ratio * (lat2 - lat1),
                    lng=lng1 + ratio * (lng2 - lng1),
                )

        # Float drift left target just past the last segment end
        return self._last_point(geometry)

    @staticmethod
    def _last_point(geometry: MultiLine) -> Coordinate:
        """Final point of the final non-empty polyline."""
        last = [line for line in geometry if line][-1][-1]
        return Coordinate(lat=last[1], lng=last[0])
