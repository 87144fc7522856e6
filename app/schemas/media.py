"""
Pydantic schemas for property media requests and responses.
"""

from pydantic import Field, field_validator
from typing import Optional, List
from datetime import datetime
from app.models.media import MediaType
from app.schemas.common import CamelModel
from app.utils.params import MAX_INTEGER


class MediaCreate(CamelModel):
    """Schema for attaching an already-uploaded asset to a property."""

    url: str = Field(
        ...,
        min_length=1,
        max_length=1000,
        description="Delivery URL of the asset",
        examples=["https://res.cloudinary.com/demo/image/upload/v1/realty-listings/7/front.jpg"]
    )

    storage_id: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Public identifier of the asset on the media CDN",
        examples=["realty-listings/7/front"]
    )

    media_type: MediaType = Field(
        default=MediaType.IMAGE,
        description="Image or video"
    )

    is_featured: bool = Field(
        default=False,
        description="Show this item as the property's primary media"
    )

    order_index: Optional[int] = Field(
        None,
        ge=0,
        le=MAX_INTEGER,
        description="Display order; defaults to the end of the gallery"
    )

    @field_validator("url", "storage_id")
    @classmethod
    def strip_text(cls, v):
        if not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip()


class MediaBatchCreate(CamelModel):
    """
    Several media items for one property.

    Items are validated one by one so a bad entry does not reject the batch.
    """

    media: List[dict] = Field(..., description="Media items in display order")


class MediaUploadRequest(CamelModel):
    """Base64 or data-URI file sent for CDN upload."""

    file_data: Optional[str] = Field(None, description="Base64 payload or data URI")
    file_name: Optional[str] = Field(None, max_length=255, examples=["front.jpg"])
    property_id: str = Field(
        default="temp",
        description="Owning property ID, or 'temp' to upload without creating a record"
    )


class MediaResponse(CamelModel):
    """Schema for media responses."""

    id: int
    property_id: int
    media_type: MediaType
    storage_id: str
    url: str
    is_featured: bool
    order_index: int
    created_at: datetime
    updated_at: datetime


class MediaUploadResponse(CamelModel):
    storage_id: str
    url: str
    media_type: MediaType
    media: Optional[MediaResponse] = Field(
        None,
        description="Created record, absent for temporary uploads"
    )


class MediaBatchError(CamelModel):
    index: int = Field(..., description="Position of the rejected item in the request")
    message: str


class MediaBatchResponse(CamelModel):
    created: List[MediaResponse]
    errors: List[MediaBatchError]


class UploadedFile(CamelModel):
    storage_id: str
    url: str
    media_type: MediaType
    original_name: Optional[str] = None


class MediaFilesUploadResponse(CamelModel):
    """Result of a multipart upload; the assets are not attached to any property yet."""

    message: str
    files: List[UploadedFile]
