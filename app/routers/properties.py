"""
Public property endpoints: listing search, featured listings, detail by slug and enum lookups.
"""

from fastapi import APIRouter, Depends, Request, status
from typing import List

from app.config import settings
from app.services.property import PropertyService
from app.schemas.common import PaginationMeta
from app.schemas.property import (
    PropertyResponse,
    PropertyListResponse,
    PropertyTypesResponse
)
from app.schemas.error import get_error_responses
from app.utils.dependencies import get_property_service
from app.utils.filters import build_property_filters
from app.utils.params import parse_optional_int


router = APIRouter(tags=["Properties"])


async def list_properties_response(request: Request, property_service: PropertyService) -> PropertyListResponse:
    """Paginated listing from raw query parameters; shared with the back office."""
    filters = build_property_filters(
        request.query_params,
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size
    )
    properties, total = await property_service.list_properties(filters)

    return PropertyListResponse(
        properties=[PropertyResponse.model_validate(p.to_dict()) for p in properties],
        pagination=PaginationMeta.build(filters.page, filters.limit, total)
    )


@router.get(
    "/properties",
    response_model=PropertyListResponse,
    status_code=status.HTTP_200_OK,
    summary="List properties with search and filtering",
    description=(
        "Paginated listing. Accepts status, category, propertyType, subType, minPrice, maxPrice, "
        "minArea, maxArea, bedrooms, bathrooms, furnishedStatus, parking, facing, search, isActive, "
        "page and limit. Values that cannot be parsed are ignored."
    )
)
async def list_properties(
    request: Request,
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyListResponse:
    return await list_properties_response(request, property_service)


@router.get(
    "/featured-properties",
    response_model=List[PropertyResponse],
    summary="Featured properties",
    description="Newest active listings for the home page"
)
async def featured_properties(
    request: Request,
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyResponse]:
    limit = parse_optional_int(request.query_params.get("limit"), minimum=1) or settings.featured_page_size
    limit = min(limit, settings.max_page_size)

    properties = await property_service.get_featured_properties(limit)
    return [PropertyResponse.model_validate(p.to_dict()) for p in properties]


@router.get(
    "/property-types",
    response_model=PropertyTypesResponse,
    summary="Listing enum values"
)
async def property_types() -> PropertyTypesResponse:
    return PropertyTypesResponse.model_validate(PropertyService.get_property_types())


@router.get(
    "/properties/{slug}",
    response_model=PropertyResponse,
    summary="Get property by slug",
    responses=get_error_responses(404)
)
async def get_property_by_slug(
    slug: str,
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    """
    Get a single property with media and nearby facilities.

    Raises:
        PropertyNotFoundError: If no property has this slug
    """
    property_obj = await property_service.get_property_by_slug(slug)
    return PropertyResponse.model_validate(property_obj.to_dict())
