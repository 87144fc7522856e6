"""
Back-office property endpoints, dashboard and e-mail checks.
Every route requires an authenticated staff, admin or superadmin user.
"""

from fastapi import APIRouter, Depends, Request, Response, status

from app.models.user import User
from app.services.notifier import Notifier, check_email_configuration, send_test_notification
from app.services.property import PropertyService
from app.schemas.property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    PropertyListResponse,
    DashboardStatsResponse
)
from app.schemas.inquiry import EmailCheckResponse
from app.schemas.error import get_error_responses
from app.routers.properties import list_properties_response
from app.utils.dependencies import (
    get_current_staff_user,
    get_current_admin_user,
    get_notifier,
    get_property_service
)
from app.utils.params import parse_id


router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(get_current_staff_user)],
    responses=get_error_responses(401, 403)
)


@router.get(
    "/properties",
    response_model=PropertyListResponse,
    summary="List all properties",
    description="Same filters as the public listing, inactive listings included unless isActive is given"
)
async def admin_list_properties(
    request: Request,
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyListResponse:
    return await list_properties_response(request, property_service)


@router.post(
    "/properties",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new property",
    responses=get_error_responses(400, 409, 422)
)
async def create_property(
    property_data: PropertyCreate,
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    """
    Create a new property listing. The slug is derived from the title unless given.
    """
    property_obj = await property_service.create_property(property_data)
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.get(
    "/properties/{property_id}",
    response_model=PropertyResponse,
    summary="Get property by ID",
    responses=get_error_responses(400, 404)
)
async def get_property(
    property_id: str,
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.get_property(parse_id(property_id, "property"))
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.put(
    "/properties/{property_id}",
    response_model=PropertyResponse,
    summary="Update property",
    description="Partial update; only the fields sent are changed",
    responses=get_error_responses(400, 404, 422)
)
async def update_property(
    property_id: str,
    property_data: PropertyUpdate,
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.update_property(parse_id(property_id, "property"), property_data)
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.delete(
    "/properties/{property_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete property",
    description="Deletes the listing with its media and facilities. Admin or superadmin only.",
    responses=get_error_responses(400, 404)
)
async def delete_property(
    property_id: str,
    current_user: User = Depends(get_current_admin_user),
    property_service: PropertyService = Depends(get_property_service)
) -> Response:
    await property_service.delete_property(parse_id(property_id, "property"))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/dashboard",
    response_model=DashboardStatsResponse,
    summary="Dashboard statistics"
)
async def dashboard(
    property_service: PropertyService = Depends(get_property_service)
) -> DashboardStatsResponse:
    return DashboardStatsResponse.model_validate(await property_service.get_dashboard_stats())


@router.get(
    "/email/test-config",
    response_model=EmailCheckResponse,
    summary="Check e-mail configuration",
    description="Reports whether inquiry notifications can be sent. Admin or superadmin only.",
    dependencies=[Depends(get_current_admin_user)]
)
async def check_email_config(notifier: Notifier = Depends(get_notifier)) -> EmailCheckResponse:
    success, message = check_email_configuration(notifier)
    return EmailCheckResponse(success=success, message=message)


@router.post(
    "/email/send-test",
    response_model=EmailCheckResponse,
    summary="Send a test e-mail",
    description="Sends a sample inquiry notification to the office inbox. Admin or superadmin only.",
    dependencies=[Depends(get_current_admin_user)]
)
async def send_test_email(notifier: Notifier = Depends(get_notifier)) -> EmailCheckResponse:
    success, message = await send_test_notification(notifier)
    return EmailCheckResponse(success=success, message=message)
