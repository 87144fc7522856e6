"""
Pydantic schemas for nearby facility requests and responses.
"""

from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime
from app.models.facility import FacilityType
from app.schemas.common import CamelModel
from app.utils.params import MAX_INTEGER
from app.utils.validators import validate_latitude, validate_longitude


class FacilityCreate(CamelModel):
    """
    Schema for adding a nearby facility.

    ``distance`` is free text shown to visitors; ``distance_value`` is meters.
    Both are optional, the canonical distance is worked out on creation.
    """

    facility_name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Name of the facility",
        examples=["City Public School"]
    )

    facility_type: FacilityType = Field(..., description="Facility category", examples=["school"])

    distance: Optional[str] = Field(
        None,
        max_length=100,
        description="Display distance such as '1.2 km' or '800 m'",
        examples=["1.2 km"]
    )

    distance_value: Optional[int] = Field(
        None,
        ge=0,
        le=MAX_INTEGER,
        description="Distance from the property in meters"
    )

    latitude: Optional[str] = Field(None, description="Latitude as a decimal string")
    longitude: Optional[str] = Field(None, description="Longitude as a decimal string")

    @field_validator("facility_name")
    @classmethod
    def validate_facility_name(cls, v):
        if not v.strip():
            raise ValueError("Facility name cannot be empty")
        return v.strip()

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def coordinate_to_string(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("latitude")
    @classmethod
    def check_latitude(cls, v):
        return validate_latitude(v)

    @field_validator("longitude")
    @classmethod
    def check_longitude(cls, v):
        return validate_longitude(v)


class FacilityResponse(CamelModel):
    """Schema for facility responses."""

    id: int
    property_id: int
    facility_name: str
    facility_type: FacilityType
    distance: Optional[str] = None
    distance_value: Optional[int] = None
    latitude: Optional[str] = None
    longitude: Optional[str] = None
    created_at: datetime
    updated_at: datetime
