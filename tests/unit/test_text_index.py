"""
Unit tests for name lookup and proximity matching.
"""

import pandas as pd
import pytest

from address_resolver.proximity import ProximityMatcher
from address_resolver.text_index import GeoTextIndex, NameMatcher

TBILISI = (44.8271, 41.7151)


@pytest.fixture
def index(dataset):
    return GeoTextIndex(dataset)


@pytest.fixture
def matcher(index):
    return ProximityMatcher(index, radius_m=30_000)


class TestNameMatcher:
    """Literal, case-insensitive comparison."""

    def test_prefix(self):
        matcher = NameMatcher("tb", "prefix")
        assert matcher.matches("Tbilisi")
        assert not matcher.matches("Batumi")

    def test_exact_ignores_case(self):
        matcher = NameMatcher("TBILISI", "exact")
        assert matcher.matches("Tbilisi")
        assert not matcher.matches("Tbilisi Sea")

    def test_whitespace_is_literal(self):
        assert not NameMatcher(" TBILISI ", "exact").matches("Tbilisi")
        assert not NameMatcher("tbilisi ", "prefix").matches("Tbilisi")
        assert NameMatcher("tbilisi ", "prefix").matches("Tbilisi Sea")
        assert NameMatcher("i s", "contains").matches("Tbilisi Sea")

    def test_contains(self):
        assert NameMatcher("avel", "contains").matches("Rustaveli")

    def test_special_characters_are_literal(self):
        assert NameMatcher("St. G", "prefix").matches("St. George (New)")
        assert not NameMatcher("St.*", "prefix").matches("St. George (New)")
        assert not NameMatcher("S.", "prefix").matches("Sa")
        assert NameMatcher("(New)", "contains").matches("St. George (New)")
        assert not NameMatcher("[", "contains").matches("Rustaveli")

    def test_none_never_matches(self):
        assert not NameMatcher("x", "contains").matches(None)

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            NameMatcher("x", "fuzzy")

    def test_mask_matches_scalar_version(self):
        names = pd.Series(["Tbilisi", "Tbilisi Sea", "Batumi", "St. George (New)"])
        for mode in NameMatcher.MODES:
            matcher = NameMatcher("tbilisi", mode)
            assert matcher.mask(names).tolist() == [matcher.matches(n) for n in names]

    def test_georgian_script(self):
        assert NameMatcher("თბი", "prefix").matches("თბილისი")


class TestGeoTextIndex:
    """Place and road lookups."""

    def test_find_places_by_prefix(self, index):
        assert index.find_places_by_prefix("Tb") == ["Tbilisi", "Tbilisi Sea"]

    def test_find_places_by_prefix_trailing_space(self, index):
        assert index.find_places_by_prefix("Tbilisi ") == ["Tbilisi Sea"]

    def test_find_places_by_prefix_limit(self, index):
        assert index.find_places_by_prefix("tb", limit=1) == ["Tbilisi"]

    def test_find_places_by_prefix_literal(self, index):
        assert index.find_places_by_prefix("St. (") == []
        assert index.find_places_by_prefix("St. G") == ["St. George (New)"]

    def test_find_exact_place(self, index):
        place = index.find_exact_place("tbilisi")
        assert place.name == "Tbilisi"
        assert place.location == TBILISI

    def test_find_exact_place_georgian(self, index):
        assert index.find_exact_place("თბილისი").location == TBILISI

    def test_find_exact_place_missing(self, index):
        assert index.find_exact_place("Tbilis") is None

    def test_find_roads_exact(self, index):
        roads = index.find_roads("RUSTAVELI")
        assert len(roads) == 2

    def test_find_roads_by_name_contains_orders_by_distance(self, index):
        names = index.find_roads_by_name_contains("rust", near=TBILISI, radius_m=30_000)
        assert names == ["Rustaveli", "Rustaveli Tunnel"]

    def test_find_roads_by_name_contains_deduplicates(self, index):
        names = index.find_roads_by_name_contains("freedom", near=TBILISI, radius_m=30_000)
        assert names == ["Freedom Square"]

    def test_find_roads_by_name_contains_prefix_mode(self, index):
        names = index.find_roads_by_name_contains("tunnel", near=TBILISI, radius_m=30_000, mode="prefix")
        assert names == []

    def test_find_roads_by_name_contains_radius(self, index):
        assert index.find_roads_by_name_contains("far", near=TBILISI, radius_m=30_000) == []
        assert index.find_roads_by_name_contains("far", near=TBILISI, radius_m=50_000) == ["Far Road"]

    def test_find_roads_by_name_contains_limit(self, index):
        names = index.find_roads_by_name_contains("r", near=TBILISI, radius_m=30_000, limit=2)
        assert len(names) == 2


class TestProximityMatcher:
    """Nearest road of a name within the radius."""

    def test_same_name_in_other_city_is_ignored(self, matcher):
        road = matcher.nearest_match("Rustaveli", TBILISI)
        assert road.name == "Rustaveli"
        assert road.geometry == [[(44.80, 41.70), (44.83, 41.72)]]

    def test_closest_wins(self, matcher):
        road = matcher.nearest_match("freedom square", TBILISI)
        assert road.geometry == [[(44.83, 41.72), (44.84, 41.72)]]

    def test_out_of_range(self, matcher):
        assert matcher.nearest_match("Far Road", TBILISI) is None

    def test_radius_override(self, matcher):
        assert matcher.nearest_match("Far Road", TBILISI, radius_m=45_000) is not None

    def test_unknown_name(self, matcher):
        assert matcher.nearest_match("Nowhere", TBILISI) is None

    def test_substring_is_not_a_match(self, matcher):
        assert matcher.nearest_match("Rustavel", TBILISI) is None

    def test_multi_line_geometry(self, matcher):
        road = matcher.nearest_match("Chavchavadze", TBILISI)
        assert len(road.geometry) == 2
        assert road.point_count == 4
