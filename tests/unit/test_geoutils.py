"""
Unit tests for point-to-road distances.
"""

import geopandas as gpd
import pytest
from shapely.geometry import LineString, Point

from address_resolver.dataset import GeoDataFrameDataset
from address_resolver.geoutils import distance_to_geometry, haversine_distance, rank_by_distance
from address_resolver.resolver import AddressResolver

TBILISI = (44.8271, 41.7151)


def diagonal_road(offset_deg=0.436):
    """45 degree (in lon/lat) road passing south-east of Tbilisi.

    Its closest point is about 29.0 km away, while the closest point in
    plain lon/lat degrees lies about 30.3 km away.
    """
    lng0, lat0 = TBILISI
    return LineString([
        (lng0 + step / 10, lat0 + step / 10 - offset_deg) for step in range(7)
    ])


class TestDistanceToGeometry:

    def test_point_matches_haversine(self):
        north = Point(TBILISI[0], TBILISI[1] + 0.1)
        expected = haversine_distance(TBILISI[1], TBILISI[0], TBILISI[1] + 0.1, TBILISI[0])
        assert distance_to_geometry(TBILISI, north) == pytest.approx(expected, rel=1e-6)

    def test_point_on_line_is_zero(self):
        line = LineString([(TBILISI[0] - 0.01, TBILISI[1]), (TBILISI[0] + 0.01, TBILISI[1])])
        assert distance_to_geometry(TBILISI, line) == pytest.approx(0.0, abs=1e-3)

    def test_diagonal_road_uses_true_closest_point(self):
        distance = distance_to_geometry(TBILISI, diagonal_road())
        assert 28_500 < distance < 29_500

    def test_empty_geometry(self):
        assert distance_to_geometry(TBILISI, LineString()) is None
        assert distance_to_geometry(TBILISI, None) is None


class TestRankByDistance:

    def test_diagonal_road_inside_radius(self):
        frame = gpd.GeoDataFrame({'name': ['Diag'], 'geometry': [diagonal_road()]}, crs='EPSG:4326')

        ranked = rank_by_distance(frame, TBILISI, 30_000)

        assert len(ranked) == 1
        assert ranked[0][0] == 0

    def test_empty_frame(self):
        frame = gpd.GeoDataFrame({'name': []}, geometry=gpd.GeoSeries([], crs='EPSG:4326'))
        assert rank_by_distance(frame, TBILISI, 30_000) == []

    def test_order_and_radius(self, roads_gdf):
        ranked = rank_by_distance(roads_gdf, TBILISI, 30_000)
        names = [roads_gdf['name'].iloc[position] for position, _ in ranked]

        assert 'Far Road' not in names
        assert 'Rustaveli' in names
        assert [d for _, d in ranked] == sorted(d for _, d in ranked)


def test_resolve_street_near_radius_boundary(places_gdf):
    roads = gpd.GeoDataFrame({'name': ['Diag'], 'geometry': [diagonal_road()]}, crs='EPSG:4326')
    resolver = AddressResolver(GeoDataFrameDataset(places_gdf, roads))

    result = resolver.resolve("Georgia", "Tbilisi", "Diag")

    assert result.success is True
