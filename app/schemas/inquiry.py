"""
Pydantic schemas for inquiry requests and responses.
"""

from pydantic import EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
from app.models.inquiry import InquiryStatus
from app.schemas.common import CamelModel
from app.utils.params import MAX_INTEGER


class InquiryCreate(CamelModel):
    """Contact form submission."""

    name: str = Field(..., min_length=1, max_length=255, examples=["Priya Sharma"])
    email: EmailStr = Field(..., examples=["priya@example.com"])
    phone: str = Field(..., min_length=5, max_length=50, examples=["+91 98200 00000"])
    message: str = Field(..., min_length=1, max_length=5000)
    property_id: Optional[int] = Field(
        None,
        ge=1,
        le=MAX_INTEGER,
        description="Property the inquiry is about; omit for general inquiries"
    )

    @field_validator("name", "phone", "message")
    @classmethod
    def strip_text(cls, v):
        if not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip()

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.lower()


class InquiryStatusUpdate(CamelModel):
    status: InquiryStatus = Field(..., description="New status", examples=["contacted"])


class InquiryResponse(CamelModel):
    """Schema for inquiry responses."""

    id: int
    property_id: Optional[int] = None
    property_title: Optional[str] = None
    property_slug: Optional[str] = None
    name: str
    email: str
    phone: str
    message: str
    status: InquiryStatus
    created_at: datetime
    updated_at: datetime


class EmailCheckResponse(CamelModel):
    """Outcome of an e-mail configuration check or test send."""

    success: bool
    message: str
