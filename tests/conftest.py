"""
Shared fixtures: a small Georgian places/roads dataset around Tbilisi.
"""

from typing import Optional

import geopandas as gpd
import pytest
from shapely.geometry import LineString, MultiLineString, Point

from address_resolver.dataset import GeoDataFrameDataset
from address_resolver.models import Coordinate, RemoteGeocodeResult
from address_resolver.providers import RemoteGeocoder
from address_resolver.resolver import AddressResolver

TBILISI = (44.8271, 41.7151)


@pytest.fixture
def places_gdf():
    """Places layer (Points)."""
    return gpd.GeoDataFrame({
        'name': ['Tbilisi', 'Tbilisi Sea', 'Batumi', 'Kutaisi', 'St. George (New)', 'თბილისი'],
        'geometry': [
            Point(*TBILISI),
            Point(44.86, 41.78),
            Point(41.6367, 41.6168),
            Point(42.6997, 42.2679),
            Point(44.70, 41.60),
            Point(*TBILISI),
        ]
    }, crs='EPSG:4326')


@pytest.fixture
def roads_gdf():
    """Roads layer (LineStrings / MultiLineStrings)."""
    return gpd.GeoDataFrame({
        'name': [
            'Rustaveli',
            'Rustaveli',
            'Far Road',
            'Chavchavadze',
            'Rustaveli Tunnel',
            'Freedom Square',
            'Freedom Square',
        ],
        'geometry': [
            # Batumi's Rustaveli comes first in dataset order
            LineString([(41.63, 41.64), (41.64, 41.65)]),
            LineString([(44.80, 41.70), (44.83, 41.72)]),
            # ~40 km north of Tbilisi
            LineString([(44.8271, 42.075), (44.83, 42.08)]),
            MultiLineString([
                [(44.75, 41.71), (44.76, 41.71)],
                [(44.77, 41.71), (44.78, 41.712)],
            ]),
            LineString([(44.90, 41.75), (44.91, 41.76)]),
            # farther one first
            LineString([(44.95, 41.80), (44.96, 41.81)]),
            LineString([(44.83, 41.72), (44.84, 41.72)]),
        ]
    }, crs='EPSG:4326')


@pytest.fixture
def dataset(places_gdf, roads_gdf):
    return GeoDataFrameDataset(places_gdf, roads_gdf)


class FakeGeocoder(RemoteGeocoder):
    """Remote geocoder returning a canned answer and recording calls."""

    def __init__(self, result: Optional[RemoteGeocodeResult] = None, error: Optional[Exception] = None):
        self.result = result
        self.error = error
        self.calls = []

    def geocode(self, address, language=None):
        self.calls.append((address, language))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def yerevan_result():
    return RemoteGeocodeResult(
        formatted_address="Abovyan St 1, Yerevan, Armenia",
        coordinate=Coordinate(lat=40.1811, lng=44.5136),
    )


@pytest.fixture
def fake_geocoder(yerevan_result):
    return FakeGeocoder(result=yerevan_result)


@pytest.fixture
def resolver(dataset, fake_geocoder):
    return AddressResolver(dataset, remote_geocoder=fake_geocoder)


@pytest.fixture
def make_geocoder():
    """Factory for FakeGeocoder instances with a custom result or error."""
    return FakeGeocoder
