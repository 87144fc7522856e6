"""
Build listing criteria from raw query parameters.

Every field is parsed on its own; a value that cannot be understood is
dropped and the listing behaves as if it had not been sent.
"""

from typing import Mapping, Optional

from app.models.property import (
    PropertyStatus,
    PropertyCategory,
    PropertyType,
    PropertySubType,
    FurnishedStatus,
    ParkingOption,
    FacingOption,
)
from app.repositories.property import PropertySearchFilters
from app.utils.params import (
    MAX_INTEGER,
    MAX_BIGINT,
    parse_optional_int,
    parse_optional_bool,
    parse_optional_enum,
    parse_optional_text,
)


def build_property_filters(
    params: Mapping[str, Optional[str]],
    default_limit: int = 9,
    max_limit: int = 100
) -> PropertySearchFilters:
    """
    Normalize camelCase query parameters into PropertySearchFilters.

    Args:
        params: Raw query parameters, e.g. ``request.query_params``
        default_limit: Page size used when ``limit`` is absent or invalid
        max_limit: Upper bound for ``limit``

    Returns:
        Criteria with None for every constraint that was absent or malformed
    """
    limit = parse_optional_int(params.get("limit"), minimum=1) or default_limit
    limit = min(limit, max_limit)
    # A page whose offset would not fit the database integer range is treated as invalid
    page = parse_optional_int(params.get("page"), minimum=1, maximum=MAX_BIGINT // limit + 1) or 1

    return PropertySearchFilters(
        status=parse_optional_enum(params.get("status"), PropertyStatus),
        category=parse_optional_enum(params.get("category"), PropertyCategory),
        property_type=parse_optional_enum(params.get("propertyType"), PropertyType),
        sub_type=parse_optional_enum(params.get("subType"), PropertySubType),
        min_price=parse_optional_int(params.get("minPrice"), minimum=0, maximum=MAX_BIGINT),
        max_price=parse_optional_int(params.get("maxPrice"), minimum=0, maximum=MAX_BIGINT),
        min_area=parse_optional_int(params.get("minArea"), minimum=0, maximum=MAX_INTEGER),
        max_area=parse_optional_int(params.get("maxArea"), minimum=0, maximum=MAX_INTEGER),
        bedrooms=parse_optional_int(params.get("bedrooms"), minimum=0, maximum=MAX_INTEGER),
        bathrooms=parse_optional_int(params.get("bathrooms"), minimum=0, maximum=MAX_INTEGER),
        furnished_status=parse_optional_enum(params.get("furnishedStatus"), FurnishedStatus),
        parking=parse_optional_enum(params.get("parking"), ParkingOption),
        facing=parse_optional_enum(params.get("facing"), FacingOption),
        search=parse_optional_text(params.get("search")),
        is_active=parse_optional_bool(params.get("isActive")),
        page=page,
        limit=limit,
    )
