"""
Pydantic schemas for property requests and responses.
Handles listing create/update validation and the listing response shapes.
"""

from pydantic import Field, field_validator
from typing import Optional, List, Dict
from datetime import datetime
from app.models.property import (
    PropertyStatus,
    PropertyCategory,
    PropertyType,
    PropertySubType,
    AreaUnit,
    FurnishedStatus,
    ParkingOption,
    FacingOption,
)
from app.schemas.common import CamelModel, PaginationMeta
from app.schemas.media import MediaResponse
from app.schemas.facility import FacilityResponse
from app.schemas.inquiry import InquiryResponse
from app.utils.params import MAX_INTEGER, MAX_BIGINT
from app.utils.validators import validate_latitude, validate_longitude


def _coordinate_to_string(v):
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return v


class PropertyBase(CamelModel):
    """Base property schema with common fields."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Property listing title",
        examples=["Spacious 2BHK Apartment in Andheri"]
    )

    description: str = Field(
        ...,
        min_length=1,
        max_length=10000,
        description="Detailed property description"
    )

    status: PropertyStatus = Field(..., description="Sale or rent", examples=["sale"])
    category: PropertyCategory = Field(..., examples=["residential"])
    property_type: PropertyType = Field(..., examples=["apartment"])
    sub_type: Optional[PropertySubType] = Field(None, examples=["2bhk"])

    area: int = Field(..., ge=0, le=MAX_INTEGER, description="Area expressed in area_unit", examples=[950])
    area_unit: AreaUnit = Field(default=AreaUnit.SQ_FT)

    price: int = Field(
        ...,
        ge=0,
        le=MAX_BIGINT,
        description="Price in the smallest currency unit",
        examples=[8500000]
    )

    bedrooms: Optional[int] = Field(None, ge=0, le=100)
    bathrooms: Optional[int] = Field(None, ge=0, le=100)
    balconies: Optional[int] = Field(None, ge=0, le=100)

    furnished_status: Optional[FurnishedStatus] = None
    parking: Optional[ParkingOption] = None
    facing: Optional[FacingOption] = None

    address: Optional[str] = Field(None, max_length=500)
    contact_details: Optional[str] = Field(None, max_length=255)

    latitude: Optional[str] = Field(None, description="Latitude as a decimal string", examples=["19.1197"])
    longitude: Optional[str] = Field(None, description="Longitude as a decimal string", examples=["72.8468"])

    is_active: bool = Field(default=True, description="Whether the listing is shown publicly")

    @field_validator("title", "description")
    @classmethod
    def validate_required_text(cls, v):
        """Validate and clean required text."""
        if not v or not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip()

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def coordinate_to_string(cls, v):
        return _coordinate_to_string(v)

    @field_validator("latitude")
    @classmethod
    def check_latitude(cls, v):
        return validate_latitude(v)

    @field_validator("longitude")
    @classmethod
    def check_longitude(cls, v):
        return validate_longitude(v)


class PropertyCreate(PropertyBase):
    """Schema for creating a new property."""

    slug: Optional[str] = Field(
        None,
        max_length=255,
        description="Custom slug; derived from the title when omitted"
    )


class PropertyUpdate(CamelModel):
    """
    Schema for updating an existing property.
    All fields are optional; only the fields sent are changed. The slug is fixed.
    """

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1, max_length=10000)
    status: Optional[PropertyStatus] = None
    category: Optional[PropertyCategory] = None
    property_type: Optional[PropertyType] = None
    sub_type: Optional[PropertySubType] = None
    area: Optional[int] = Field(None, ge=0, le=MAX_INTEGER)
    area_unit: Optional[AreaUnit] = None
    price: Optional[int] = Field(None, ge=0, le=MAX_BIGINT)
    bedrooms: Optional[int] = Field(None, ge=0, le=100)
    bathrooms: Optional[int] = Field(None, ge=0, le=100)
    balconies: Optional[int] = Field(None, ge=0, le=100)
    furnished_status: Optional[FurnishedStatus] = None
    parking: Optional[ParkingOption] = None
    facing: Optional[FacingOption] = None
    address: Optional[str] = Field(None, max_length=500)
    contact_details: Optional[str] = Field(None, max_length=255)
    latitude: Optional[str] = None
    longitude: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("title", "description")
    @classmethod
    def validate_text(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip() if v else v

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def coordinate_to_string(cls, v):
        return _coordinate_to_string(v)

    @field_validator("latitude")
    @classmethod
    def check_latitude(cls, v):
        return validate_latitude(v)

    @field_validator("longitude")
    @classmethod
    def check_longitude(cls, v):
        return validate_longitude(v)


class PropertyResponse(PropertyBase):
    """Schema for property responses with media and facilities."""

    id: int
    slug: str
    media: List[MediaResponse] = Field(default_factory=list)
    featured_media: Optional[MediaResponse] = None
    facilities: List[FacilityResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class PropertyListResponse(CamelModel):
    """Schema for paginated property list responses."""

    properties: List[PropertyResponse]
    pagination: PaginationMeta


class PropertyTypesResponse(CamelModel):
    """Allowed values for every listing enum, for building forms and filters."""

    property_types: List[str]
    property_categories: List[str]
    status: List[str]
    sub_types: List[str]
    area_units: List[str]
    furnished_status: List[str]
    facing_options: List[str]
    parking_options: List[str]
    facility_types: List[str]


class DashboardStatsResponse(CamelModel):
    """Back-office overview."""

    total_properties: int
    active_properties: int
    properties_by_status: Dict[str, int]
    total_inquiries: int
    inquiries_by_status: Dict[str, int]
    total_media: int
    total_facilities: int
    recent_inquiries: List[InquiryResponse]
