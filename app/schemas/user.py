"""
Pydantic schemas for user requests and responses.
Handles back-office account creation and updates.
"""

from pydantic import EmailStr, Field, field_validator, model_validator
from typing import Optional, List
from datetime import datetime
from app.models.user import UserRole, MIN_PASSWORD_LENGTH
from app.schemas.common import CamelModel


class UserBase(CamelModel):
    """Base user schema with common fields."""

    username: str = Field(
        ...,
        min_length=3,
        max_length=100,
        description="Login name",
        examples=["office.manager"]
    )

    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["manager@example.com"]
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        if not v or not v.strip():
            raise ValueError("Username cannot be empty")
        if any(c.isspace() for c in v.strip()):
            raise ValueError("Username cannot contain spaces")
        return v.strip()


class UserCreate(UserBase):
    """Schema for creating a new user."""

    password: str = Field(
        ...,
        min_length=MIN_PASSWORD_LENGTH,
        max_length=128,
        description=f"Password (minimum {MIN_PASSWORD_LENGTH} characters)"
    )

    role: UserRole = Field(
        default=UserRole.STAFF,
        description="User's role (default: staff)"
    )


class UserUpdate(CamelModel):
    """Schema for updating an existing user. At least one field is required."""

    username: Optional[str] = Field(None, min_length=3, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=MIN_PASSWORD_LENGTH, max_length=128)
    role: Optional[UserRole] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.lower().strip() if v else v

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        if v is None:
            return v
        if not v.strip() or any(c.isspace() for c in v.strip()):
            raise ValueError("Username cannot be empty or contain spaces")
        return v.strip()

    @model_validator(mode="after")
    def require_any_field(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self


class UserResponse(CamelModel):
    """Schema for user responses (excludes the password hash)."""

    id: int
    username: str
    email: str
    role: UserRole
    created_at: datetime
    updated_at: datetime


class UserListResponse(CamelModel):
    users: List[UserResponse]
    total: int
