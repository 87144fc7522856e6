"""
Pydantic schemas for authentication requests and responses.
Handles login, token refresh, and current-user data.
"""

from pydantic import Field, model_validator
from typing import List
from app.models.user import UserRole
from app.schemas.common import CamelModel
from app.schemas.user import UserResponse

ROLE_PERMISSIONS = {
    UserRole.STAFF: [
        "manage_properties",
        "manage_media",
        "manage_facilities",
        "manage_inquiries",
    ],
    UserRole.ADMIN: [
        "manage_properties",
        "delete_properties",
        "manage_media",
        "manage_facilities",
        "manage_inquiries",
        "delete_inquiries",
    ],
    UserRole.SUPERADMIN: [
        "manage_properties",
        "delete_properties",
        "manage_media",
        "manage_facilities",
        "manage_inquiries",
        "delete_inquiries",
        "manage_users",
    ],
}


class LoginRequest(CamelModel):
    """Login request schema."""

    username: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Login name",
        examples=["admin"]
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="User's password"
    )


class RefreshTokenRequest(CamelModel):
    """Refresh token request schema."""

    refresh_token: str = Field(..., description="Valid refresh token")


class AccessTokenResponse(CamelModel):
    """Access token response schema."""

    access_token: str = Field(..., description="New JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Access token expiration time in seconds", examples=[3600])


class CurrentUserResponse(UserResponse):
    """Current user with the permissions implied by their role."""

    permissions: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def set_permissions(self):
        self.permissions = list(ROLE_PERMISSIONS.get(self.role, []))
        return self


class LoginResponse(CamelModel):
    """Complete login response schema."""

    user: CurrentUserResponse
    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    token_type: str = Field(default="bearer")
    expires_in: int = Field(..., description="Access token expiration time in seconds")
