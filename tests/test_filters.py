"""
Tests for tolerant query parsing and the listing filter builder.
"""

import pytest

from app.models.property import PropertyStatus, PropertyType, FurnishedStatus, ParkingOption
from app.utils.exceptions import BadRequestError
from app.utils.filters import build_property_filters
from app.utils.params import (
    MAX_INTEGER,
    MAX_BIGINT,
    parse_optional_int,
    parse_optional_float,
    parse_optional_bool,
    parse_optional_enum,
    parse_optional_text,
    parse_id,
)


class TestParamParsers:
    """Test the individual tolerant parsers."""

    @pytest.mark.parametrize("value, expected", [
        ("5", 5), (" 12 ", 12), ("0", 0), ("abc", None), ("", None), (None, None), ("1.5", None),
    ])
    def test_parse_optional_int(self, value, expected):
        assert parse_optional_int(value) == expected

    def test_parse_optional_int_minimum(self):
        assert parse_optional_int("0", minimum=1) is None
        assert parse_optional_int("-3", minimum=0) is None
        assert parse_optional_int("2", minimum=1) == 2

    def test_parse_optional_int_maximum(self):
        assert parse_optional_int("100", maximum=100) == 100
        assert parse_optional_int("101", maximum=100) is None
        assert parse_optional_int(str(MAX_BIGINT + 1), maximum=MAX_BIGINT) is None

    def test_parse_optional_int_very_long_digit_string(self):
        assert parse_optional_int("9" * 5000, maximum=MAX_BIGINT) is None

    @pytest.mark.parametrize("value, expected", [
        ("1.5", 1.5), ("2", 2.0), ("far", None), ("nan", None), ("inf", None), (None, None),
    ])
    def test_parse_optional_float(self, value, expected):
        assert parse_optional_float(value) == expected

    @pytest.mark.parametrize("value, expected", [
        ("true", True), ("1", True), ("Yes", True), ("on", True),
        ("false", False), ("0", False), ("NO", False), ("off", False),
        ("maybe", None), ("", None), (None, None),
    ])
    def test_parse_optional_bool(self, value, expected):
        assert parse_optional_bool(value) is expected

    def test_parse_optional_enum(self):
        assert parse_optional_enum("sale", PropertyStatus) is PropertyStatus.SALE
        assert parse_optional_enum("RENT", PropertyStatus) is PropertyStatus.RENT
        assert parse_optional_enum("lease", PropertyStatus) is None
        assert parse_optional_enum("", PropertyStatus) is None

    def test_parse_optional_text(self):
        assert parse_optional_text("  garden  ") == "garden"
        assert parse_optional_text("   ") is None

    def test_parse_id(self):
        assert parse_id("42") == 42
        assert parse_id(" 7 ") == 7

    @pytest.mark.parametrize("value", ["abc", "0", "-1", "1.5", "", "١٢"])
    def test_parse_id_invalid(self, value):
        """Non-numeric or non-positive ids are a 400."""
        with pytest.raises(BadRequestError) as exc_info:
            parse_id(value, "property")
        assert exc_info.value.status_code == 400
        assert "property" in exc_info.value.detail

    def test_parse_id_upper_bound(self):
        assert parse_id(str(MAX_INTEGER)) == MAX_INTEGER

    @pytest.mark.parametrize("value", [str(MAX_INTEGER + 1), "99999999999999999999", "9" * 5000])
    def test_parse_id_beyond_integer_column(self, value):
        """Ids no row can have are rejected before they reach the database."""
        with pytest.raises(BadRequestError):
            parse_id(value, "property")


class TestBuildPropertyFilters:
    """Test build_property_filters."""

    def test_empty_params(self):
        """No parameters means no constraints and the default page."""
        filters = build_property_filters({})
        assert filters.page == 1
        assert filters.limit == 9
        assert filters.offset == 0
        for field in ("status", "category", "property_type", "sub_type", "min_price", "max_price",
                      "min_area", "max_area", "bedrooms", "bathrooms", "furnished_status",
                      "parking", "facing", "search", "is_active"):
            assert getattr(filters, field) is None

    def test_all_fields(self):
        filters = build_property_filters({
            "status": "sale",
            "propertyType": "apartment",
            "minPrice": "1000000",
            "maxPrice": "9000000",
            "minArea": "500",
            "maxArea": "2000",
            "bedrooms": "3",
            "bathrooms": "2",
            "furnishedStatus": "semi-furnished",
            "parking": "two-wheeler",
            "search": "  park view ",
            "isActive": "true",
            "page": "3",
            "limit": "12",
        })
        assert filters.status is PropertyStatus.SALE
        assert filters.property_type is PropertyType.APARTMENT
        assert (filters.min_price, filters.max_price) == (1000000, 9000000)
        assert (filters.min_area, filters.max_area) == (500, 2000)
        assert (filters.bedrooms, filters.bathrooms) == (3, 2)
        assert filters.furnished_status is FurnishedStatus.SEMI_FURNISHED
        assert filters.parking is ParkingOption.TWO_WHEELER
        assert filters.search == "park view"
        assert filters.is_active is True
        assert filters.page == 3
        assert filters.limit == 12
        assert filters.offset == 24

    def test_invalid_enum_is_ignored(self):
        """An unknown status behaves as if it were absent."""
        filters = build_property_filters({"status": "invalid-enum-value", "propertyType": "castle"})
        assert filters.status is None
        assert filters.property_type is None

    def test_non_numeric_page_defaults_to_one(self):
        assert build_property_filters({"page": "abc"}).page == 1

    @pytest.mark.parametrize("page", ["0", "-2", ""])
    def test_page_below_one_defaults_to_one(self, page):
        assert build_property_filters({"page": page}).page == 1

    def test_non_numeric_numbers_are_ignored(self):
        filters = build_property_filters({"minPrice": "cheap", "bedrooms": "many", "maxArea": "-10"})
        assert filters.min_price is None
        assert filters.bedrooms is None
        assert filters.max_area is None

    def test_limit_default_and_cap(self):
        assert build_property_filters({"limit": "abc"}).limit == 9
        assert build_property_filters({"limit": "0"}, default_limit=3).limit == 3
        assert build_property_filters({"limit": "500"}).limit == 100
        assert build_property_filters({"limit": "50"}, max_limit=20).limit == 20

    def test_unknown_bool_is_ignored(self):
        assert build_property_filters({"isActive": "sometimes"}).is_active is None
        assert build_property_filters({"isActive": "0"}).is_active is False

    def test_snake_case_keys_are_not_read(self):
        """Listing parameters are camelCase on the wire."""
        assert build_property_filters({"property_type": "villa"}).property_type is None

    def test_huge_page_defaults_to_one(self):
        assert build_property_filters({"page": "100000000000000000000"}).page == 1

    def test_page_offset_stays_in_bigint_range(self):
        last_page = MAX_BIGINT // 9 + 1

        filters = build_property_filters({"page": str(last_page)})
        assert filters.page == last_page
        assert filters.offset <= MAX_BIGINT

        assert build_property_filters({"page": str(last_page + 1)}).page == 1

    def test_numbers_beyond_column_range_are_ignored(self):
        filters = build_property_filters({
            "minPrice": str(MAX_BIGINT + 1),
            "maxPrice": str(MAX_BIGINT),
            "bedrooms": str(MAX_INTEGER + 1),
            "maxArea": "99999999999999999999",
        })
        assert filters.min_price is None
        assert filters.max_price == MAX_BIGINT
        assert filters.bedrooms is None
        assert filters.max_area is None
