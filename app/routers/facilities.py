"""
Nearby facility endpoints: the public radius query and back-office management.
"""

from fastapi import APIRouter, Depends, Request, Response, status
from typing import List

from app.services.facility import FacilityService
from app.schemas.facility import FacilityCreate, FacilityResponse
from app.schemas.error import get_error_responses
from app.utils.dependencies import get_current_staff_user, get_facility_service
from app.utils.params import parse_id, parse_optional_float, parse_optional_text


router = APIRouter(tags=["Facilities"])


@router.get(
    "/properties/{property_id}/nearby-facilities",
    response_model=List[FacilityResponse],
    summary="Nearby facilities within a radius",
    description=(
        "Facilities within `radius` kilometers (default 1), nearest first. "
        "`facilityType` narrows the result to one type."
    ),
    responses=get_error_responses(400, 404)
)
async def nearby_facilities(
    property_id: str,
    request: Request,
    facility_service: FacilityService = Depends(get_facility_service)
) -> List[FacilityResponse]:
    radius = parse_optional_float(request.query_params.get("radius"))
    facility_type = parse_optional_text(request.query_params.get("facilityType"))

    facilities = await facility_service.get_nearby_facilities(
        parse_id(property_id, "property"),
        radius_km=radius,
        facility_type=facility_type
    )
    return [FacilityResponse.model_validate(f.to_dict()) for f in facilities]


@router.post(
    "/admin/properties/{property_id}/facilities",
    response_model=FacilityResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add nearby facility",
    dependencies=[Depends(get_current_staff_user)],
    responses=get_error_responses(400, 401, 403, 404, 422)
)
async def create_facility(
    property_id: str,
    facility_data: FacilityCreate,
    facility_service: FacilityService = Depends(get_facility_service)
) -> FacilityResponse:
    facility = await facility_service.create_facility(parse_id(property_id, "property"), facility_data)
    return FacilityResponse.model_validate(facility.to_dict())


@router.delete(
    "/admin/facilities/{facility_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete nearby facility",
    dependencies=[Depends(get_current_staff_user)],
    responses=get_error_responses(400, 401, 403, 404)
)
async def delete_facility(
    facility_id: str,
    facility_service: FacilityService = Depends(get_facility_service)
) -> Response:
    await facility_service.delete_facility(parse_id(facility_id, "facility"))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
