"""
Tests for the great-circle distance helpers and facility distance normalization.
"""

from types import SimpleNamespace

import pytest

from app.utils.geo import haversine_distance, format_distance
from app.utils.distance import (
    Parsed,
    Unparseable,
    parse_distance_text,
    normalize_facility_distance,
    effective_distance_meters,
    filter_facilities_by_radius,
)


GK_II = (28.5355, 77.2410)
GK_METRO = (28.5418, 77.2381)


class TestHaversineDistance:
    """Test haversine_distance."""

    @pytest.mark.parametrize("point", [(0.0, 0.0), GK_II, (-33.8688, 151.2093), (89.9, -179.9)])
    def test_same_point_is_zero(self, point):
        """Distance from a point to itself is zero."""
        assert haversine_distance(point[0], point[1], point[0], point[1]) == 0

    def test_symmetric(self):
        """Swapping the endpoints does not change the distance."""
        forward = haversine_distance(*GK_II, *GK_METRO)
        backward = haversine_distance(*GK_METRO, *GK_II)
        assert forward == pytest.approx(backward)

    def test_one_degree_of_latitude(self):
        """One degree of latitude is about 111,195 m."""
        distance = haversine_distance(10.0, 20.0, 11.0, 20.0)
        assert distance == pytest.approx(111_195, rel=0.01)

    def test_neighbourhood_scale(self):
        """Two points a few hundred meters apart in Delhi."""
        distance = haversine_distance(*GK_II, *GK_METRO)
        assert 700 < distance < 800


class TestFormatDistance:
    """Test format_distance."""

    @pytest.mark.parametrize("meters, expected", [
        (0, "0 m"),
        (850, "850 m"),
        (999, "999 m"),
        (1000, "1.0 km"),
        (1200, "1.2 km"),
        (2549, "2.5 km"),
        (15000, "15.0 km"),
    ])
    def test_format(self, meters, expected):
        assert format_distance(meters) == expected

    def test_rounds_meters_first(self):
        """Fractional meters are rounded before choosing the unit."""
        assert format_distance(756.4) == "756 m"
        assert format_distance(999.6) == "1.0 km"


class TestParseDistanceText:
    """Test parse_distance_text."""

    @pytest.mark.parametrize("text, meters", [
        ("2.5 km", 2500),
        ("2.5KM", 2500),
        ("800 m", 800),
        ("800m", 800),
        ("3", 3000),
        ("1.2 km away", 1200),
        ("  450 m", 450),
        ("0.75 Km", 750),
    ])
    def test_parsed(self, text, meters):
        assert parse_distance_text(text) == Parsed(meters)

    @pytest.mark.parametrize("text", [None, "", "near the park", "km 2", "-1 km", ".5 km"])
    def test_unparseable(self, text):
        """Text without a leading number is reported, not raised."""
        assert isinstance(parse_distance_text(text), Unparseable)

    def test_miles_are_not_understood_as_kilometers(self):
        """An "m" anywhere in the unit means meters."""
        assert parse_distance_text("2 miles") == Parsed(2)

    def test_largest_storable_distance(self):
        assert parse_distance_text("2147483 km") == Parsed(2_147_483_000)

    @pytest.mark.parametrize("text", ["3000000 km", "99999999999999999999 km", "9" * 400 + " m"])
    def test_distance_too_large_to_store(self, text):
        assert isinstance(parse_distance_text(text), Unparseable)


class TestNormalizeFacilityDistance:
    """Test normalize_facility_distance priority rules."""

    def test_explicit_value_wins(self):
        """An explicit meters value beats the text and the coordinates."""
        result = normalize_facility_distance(
            distance_value=1800,
            distance_text="3 km",
            property_coordinates=("28.5355", "77.2410"),
            facility_coordinates=("28.5418", "77.2381"),
        )
        assert result.distance_value == 1800
        assert result.distance == "3 km"

    def test_explicit_value_synthesizes_text(self):
        result = normalize_facility_distance(distance_value=1800)
        assert result.distance_value == 1800
        assert result.distance == "1.8 km"

    def test_text_distance_km(self):
        result = normalize_facility_distance(distance_text="2.5 km")
        assert result.distance_value == 2500
        assert result.distance == "2.5 km"

    def test_text_distance_meters(self):
        assert normalize_facility_distance(distance_text="800 m").distance_value == 800

    def test_text_without_unit_defaults_to_km(self):
        assert normalize_facility_distance(distance_text="3").distance_value == 3000

    def test_text_is_trimmed(self):
        assert normalize_facility_distance(distance_text="  800 m  ").distance == "800 m"

    def test_coordinates_used_when_no_distance_given(self):
        """Haversine distance, rounded, with a synthesized display string."""
        result = normalize_facility_distance(
            property_coordinates=("28.5355", "77.2410"),
            facility_coordinates=("28.5418", "77.2381"),
        )
        expected = round(haversine_distance(*GK_II, *GK_METRO))
        assert result.distance_value == expected
        assert result.distance == f"{expected} m"

    def test_coordinates_over_a_kilometer_render_in_km(self):
        result = normalize_facility_distance(
            property_coordinates=("28.5355", "77.2410"),
            facility_coordinates=("28.5555", "77.2410"),
        )
        assert result.distance_value > 1000
        assert result.distance == format_distance(result.distance_value)
        assert result.distance.endswith(" km")

    def test_unparseable_text_falls_back_to_coordinates(self):
        """Unreadable text is kept for display, coordinates supply the meters."""
        result = normalize_facility_distance(
            distance_text="walking distance",
            property_coordinates=("28.5355", "77.2410"),
            facility_coordinates=("28.5418", "77.2381"),
        )
        assert result.distance_value is not None
        assert result.distance == "walking distance"

    def test_missing_property_coordinates(self):
        result = normalize_facility_distance(
            property_coordinates=(None, None),
            facility_coordinates=("28.5418", "77.2381"),
        )
        assert result == normalize_facility_distance()
        assert result.distance_value is None
        assert result.distance is None

    def test_malformed_coordinates_are_ignored(self):
        """Bad coordinate strings never raise."""
        result = normalize_facility_distance(
            property_coordinates=("north", "77.2410"),
            facility_coordinates=("28.5418", "77.2381"),
        )
        assert result.distance_value is None

    def test_nothing_usable(self):
        result = normalize_facility_distance(distance_text="close by")
        assert result.distance_value is None
        assert result.distance == "close by"

    def test_out_of_range_value_is_dropped(self):
        """A value the column cannot hold is ignored and the text is used instead."""
        result = normalize_facility_distance(distance_value=3_000_000_000, distance_text="2 km")
        assert result.distance_value == 2000
        assert result.distance == "2 km"

    def test_out_of_range_value_without_fallback(self):
        result = normalize_facility_distance(distance_value=3_000_000_000)
        assert result.distance_value is None
        assert result.distance is None

    def test_oversized_text_keeps_display_only(self):
        result = normalize_facility_distance(distance_text="99999999999999999999 km")
        assert result.distance_value is None
        assert result.distance == "99999999999999999999 km"


def _facility(id, distance_value=None, distance=None, facility_type="school"):
    return SimpleNamespace(id=id, distance_value=distance_value, distance=distance, facility_type=facility_type)


class TestRadiusFilter:
    """Test effective_distance_meters and filter_facilities_by_radius."""

    def test_effective_distance_prefers_canonical_value(self):
        assert effective_distance_meters(400, "2 km") == 400

    def test_effective_distance_falls_back_to_text(self):
        assert effective_distance_meters(None, "2 km") == 2000
        assert effective_distance_meters(None, "2") == 2000

    def test_effective_distance_unknown(self):
        assert effective_distance_meters(None, "nearby") is None
        assert effective_distance_meters(None, None) is None

    def test_boundary_is_inclusive(self):
        """Exactly radius*1000 is in, one meter more is out."""
        inside = _facility(1, distance_value=1000)
        outside = _facility(2, distance_value=1001)
        assert filter_facilities_by_radius([inside, outside], 1.0) == [inside]

    def test_unknown_distance_excluded_from_every_radius(self):
        unknown = _facility(1, distance=None)
        unreadable = _facility(2, distance="across the road")
        for radius in (0.1, 1, 10, 10_000):
            assert filter_facilities_by_radius([unknown, unreadable], radius) == []

    def test_text_only_facilities_are_filtered(self):
        near = _facility(1, distance="800 m")
        far = _facility(2, distance="1.2 km")
        assert filter_facilities_by_radius([near, far], 1.0) == [near]
        assert filter_facilities_by_radius([near, far], 1.5) == [near, far]

    def test_type_filter_applied_after_radius(self):
        school = _facility(1, distance_value=300, facility_type="school")
        hospital = _facility(2, distance_value=200, facility_type="hospital")
        far_school = _facility(3, distance_value=5000, facility_type="school")
        result = filter_facilities_by_radius([school, hospital, far_school], 1.0, "school")
        assert result == [school]

    def test_type_filter_accepts_enum_members(self):
        from app.models.facility import FacilityType

        metro = _facility(1, distance_value=300, facility_type=FacilityType.METRO)
        assert filter_facilities_by_radius([metro], 1.0, "metro") == [metro]

    def test_ordered_nearest_first(self):
        a = _facility(1, distance_value=900)
        b = _facility(2, distance="0.2 km")
        c = _facility(3, distance_value=200)
        assert filter_facilities_by_radius([a, b, c], 1.0) == [b, c, a]
