"""
Great-circle distance and geometry helpers.

Distances are meters on a spherical Earth (R = 6,371,000 m): haversine between
two points, and a local azimuthal equidistant projection for point-to-road
distances.
"""

import math
from typing import List, Optional, Tuple

import geopandas as gpd
from shapely.geometry import LineString, MultiLineString, Point
from shapely.geometry.base import BaseGeometry
from shapely.ops import nearest_points

from address_resolver.models import LngLat, MultiLine

EARTH_RADIUS_M = 6_371_000.0

WGS84 = "EPSG:4326"

ORIGIN = Point(0.0, 0.0)


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters between two points given in degrees."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push a a hair above 1 for antipodal points
    a = min(1.0, a)
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def lnglat_distance(p1: LngLat, p2: LngLat) -> float:
    """haversine_distance() for two (lng, lat) tuples."""
    return haversine_distance(p1[1], p1[0], p2[1], p2[0])


def geometry_to_polylines(geometry: Optional[BaseGeometry]) -> MultiLine:
    """Flatten a LineString / MultiLineString into lists of (lng, lat) points.

    Empty parts are dropped. Anything that is not linear yields an empty list.
    """
    if geometry is None or geometry.is_empty:
        return []

    if isinstance(geometry, LineString):
        parts = [geometry]
    elif isinstance(geometry, MultiLineString):
        parts = list(geometry.geoms)
    else:
        return []

    polylines = []
    for part in parts:
        coords = [(float(c[0]), float(c[1])) for c in part.coords]
        if coords:
            polylines.append(coords)
    return polylines


def local_metric_crs(near: LngLat) -> str:
    """Azimuthal equidistant projection centred on near, in meters.

    Distances from the projection centre are great-circle distances on the
    same sphere as haversine_distance().
    """
    lng, lat = near
    return f"+proj=aeqd +lat_0={lat} +lon_0={lng} +R={EARTH_RADIUS_M:.0f} +units=m +no_defs"


def project_around(geometries: gpd.GeoSeries, near: LngLat) -> gpd.GeoSeries:
    """Reproject lon/lat geometries into local_metric_crs(near)."""
    if geometries.crs is None:
        geometries = geometries.set_crs(WGS84)
    return geometries.to_crs(local_metric_crs(near))


def _distance_from_origin(geometry: Optional[BaseGeometry]) -> Optional[float]:
    if geometry is None or geometry.is_empty:
        return None
    closest = nearest_points(geometry, ORIGIN)[0]
    return math.hypot(closest.x, closest.y)


def distance_to_geometry(near: LngLat, geometry: Optional[BaseGeometry]) -> Optional[float]:
    """Meters from a point to the closest point of a lon/lat geometry."""
    if geometry is None or geometry.is_empty:
        return None
    projected = project_around(gpd.GeoSeries([geometry], crs=WGS84), near)
    return _distance_from_origin(projected.iloc[0])


def rank_by_distance(
    frame: gpd.GeoDataFrame,
    near: LngLat,
    radius_m: float,
) -> List[Tuple[int, float]]:
    """Rank rows of a GeoDataFrame by distance to a point.

    The closest point of each geometry is found in local_metric_crs(near).

    Args:
        frame: Candidate rows in EPSG:4326 (already filtered by name)
        near: Reference point (lng, lat)
        radius_m: Maximum distance in meters (inclusive)

    Returns:
        List of (positional index, distance_m) within the radius, closest
        first. Equal distances keep frame order.
    """
    if frame.empty:
        return []

    ranked = []
    for position, geometry in enumerate(project_around(frame.geometry, near)):
        distance = _distance_from_origin(geometry)
        if distance is None or distance > radius_m:
            continue
        ranked.append((position, distance))

    # sorted() is stable, so ties stay in dataset order
    return sorted(ranked, key=lambda item: item[1])
