"""
Property media endpoints: CDN upload passthrough and gallery management.
"""

from typing import List
from fastapi import APIRouter, Depends, File, Response, UploadFile, status

from app.services.media import MediaService
from app.schemas.media import (
    MediaCreate,
    MediaBatchCreate,
    MediaUploadRequest,
    MediaResponse,
    MediaUploadResponse,
    MediaBatchResponse,
    MediaFilesUploadResponse,
    UploadedFile
)
from app.schemas.error import get_error_responses
from app.utils.dependencies import get_current_staff_user, get_media_service
from app.utils.params import parse_id


router = APIRouter(
    prefix="/admin",
    tags=["Media"],
    dependencies=[Depends(get_current_staff_user)],
    responses=get_error_responses(401, 403)
)


@router.post(
    "/media/upload",
    response_model=MediaUploadResponse,
    summary="Upload media to the CDN",
    description=(
        "Uploads a base64 payload or data URI. With `propertyId` set to a property ID the asset "
        "is appended to that property's gallery; with `temp` only the upload happens."
    ),
    responses={**get_error_responses(400, 404), 503: {"description": "Media storage is not configured"}}
)
async def upload_media(
    upload_data: MediaUploadRequest,
    media_service: MediaService = Depends(get_media_service)
) -> MediaUploadResponse:
    stored, media = await media_service.upload(upload_data)
    return MediaUploadResponse(
        storage_id=stored.storage_id,
        url=stored.url,
        media_type=stored.media_type,
        media=MediaResponse.model_validate(media.to_dict()) if media else None
    )


@router.post(
    "/media/upload-multiple",
    response_model=MediaFilesUploadResponse,
    summary="Upload several files to the CDN",
    description=(
        "Multipart upload of up to 10 images or videos, 10MB each. Nothing is attached to a "
        "property; create media records from the returned storage IDs."
    ),
    responses={**get_error_responses(400, 422), 503: {"description": "Media storage is not configured"}}
)
async def upload_multiple_media(
    files: List[UploadFile] = File(..., description="Image or video files"),
    media_service: MediaService = Depends(get_media_service)
) -> MediaFilesUploadResponse:
    uploaded = await media_service.upload_files(files)
    return MediaFilesUploadResponse(
        message=f"{len(uploaded)} files uploaded successfully",
        files=[
            UploadedFile(
                storage_id=stored.storage_id,
                url=stored.url,
                media_type=stored.media_type,
                original_name=file_name
            )
            for file_name, stored in uploaded
        ]
    )


@router.post(
    "/properties/{property_id}/media",
    response_model=MediaResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Attach media to property",
    responses=get_error_responses(400, 404, 422)
)
async def create_media(
    property_id: str,
    media_data: MediaCreate,
    media_service: MediaService = Depends(get_media_service)
) -> MediaResponse:
    media = await media_service.create_media(parse_id(property_id, "property"), media_data)
    return MediaResponse.model_validate(media.to_dict())


@router.post(
    "/properties/{property_id}/media/batch",
    response_model=MediaBatchResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Attach several media items",
    description="Invalid items are reported in `errors`; valid ones are saved",
    responses=get_error_responses(400, 404, 422)
)
async def create_media_batch(
    property_id: str,
    batch: MediaBatchCreate,
    media_service: MediaService = Depends(get_media_service)
) -> MediaBatchResponse:
    created, errors = await media_service.create_media_batch(parse_id(property_id, "property"), batch.media)
    return MediaBatchResponse.model_validate({
        "created": [media.to_dict() for media in created],
        "errors": errors,
    })


@router.put(
    "/properties/{property_id}/media/{media_id}/featured",
    response_model=MediaResponse,
    summary="Set featured media",
    description="The chosen item becomes the property's only featured media",
    responses=get_error_responses(400, 404)
)
async def set_featured_media(
    property_id: str,
    media_id: str,
    media_service: MediaService = Depends(get_media_service)
) -> MediaResponse:
    media = await media_service.set_featured(
        parse_id(property_id, "property"),
        parse_id(media_id, "media")
    )
    return MediaResponse.model_validate(media.to_dict())


@router.delete(
    "/media/{media_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete media",
    responses=get_error_responses(400, 404)
)
async def delete_media(
    media_id: str,
    media_service: MediaService = Depends(get_media_service)
) -> Response:
    await media_service.delete_media(parse_id(media_id, "media"))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
