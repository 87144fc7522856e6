"""
Inquiry endpoints: the public contact form and back-office handling.
"""

from fastapi import APIRouter, Depends, Request, Response, status
from typing import List

from app.models.inquiry import InquiryStatus
from app.services.inquiry import InquiryService
from app.schemas.inquiry import InquiryCreate, InquiryStatusUpdate, InquiryResponse
from app.schemas.error import get_error_responses
from app.utils.dependencies import (
    get_current_staff_user,
    get_current_admin_user,
    get_inquiry_service
)
from app.utils.params import MAX_INTEGER, parse_id, parse_optional_int, parse_optional_enum


router = APIRouter(tags=["Inquiries"])


@router.post(
    "/inquiries",
    response_model=InquiryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit inquiry",
    description="Contact form submission, optionally about one property",
    responses=get_error_responses(404, 422)
)
async def create_inquiry(
    inquiry_data: InquiryCreate,
    inquiry_service: InquiryService = Depends(get_inquiry_service)
) -> InquiryResponse:
    inquiry = await inquiry_service.create_inquiry(inquiry_data)
    return InquiryResponse.model_validate(inquiry.to_dict())


@router.get(
    "/admin/inquiries",
    response_model=List[InquiryResponse],
    summary="List inquiries",
    description="Newest first; filter with propertyId and status",
    dependencies=[Depends(get_current_staff_user)],
    responses=get_error_responses(401, 403)
)
async def list_inquiries(
    request: Request,
    inquiry_service: InquiryService = Depends(get_inquiry_service)
) -> List[InquiryResponse]:
    inquiries = await inquiry_service.list_inquiries(
        property_id=parse_optional_int(request.query_params.get("propertyId"), minimum=1, maximum=MAX_INTEGER),
        status=parse_optional_enum(request.query_params.get("status"), InquiryStatus)
    )
    return [InquiryResponse.model_validate(i.to_dict()) for i in inquiries]


@router.put(
    "/admin/inquiries/{inquiry_id}",
    response_model=InquiryResponse,
    summary="Update inquiry status",
    dependencies=[Depends(get_current_staff_user)],
    responses=get_error_responses(400, 401, 403, 404, 422)
)
async def update_inquiry_status(
    inquiry_id: str,
    status_data: InquiryStatusUpdate,
    inquiry_service: InquiryService = Depends(get_inquiry_service)
) -> InquiryResponse:
    inquiry = await inquiry_service.update_status(parse_id(inquiry_id, "inquiry"), status_data.status)
    return InquiryResponse.model_validate(inquiry.to_dict())


@router.delete(
    "/admin/inquiries/{inquiry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete inquiry",
    description="Admin or superadmin only",
    dependencies=[Depends(get_current_admin_user)],
    responses=get_error_responses(400, 401, 403, 404)
)
async def delete_inquiry(
    inquiry_id: str,
    inquiry_service: InquiryService = Depends(get_inquiry_service)
) -> Response:
    await inquiry_service.delete_inquiry(parse_id(inquiry_id, "inquiry"))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
