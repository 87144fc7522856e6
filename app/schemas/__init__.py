"""
Pydantic schemas for request/response validation.
"""

from .common import CamelModel, PaginationMeta

# Authentication schemas
from .auth import (
    LoginRequest,
    RefreshTokenRequest,
    AccessTokenResponse,
    CurrentUserResponse,
    LoginResponse
)

# User schemas
from .user import (
    UserCreate,
    UserUpdate,
    UserResponse,
    UserListResponse
)

# Property schemas
from .property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    PropertyListResponse,
    PropertyTypesResponse,
    DashboardStatsResponse
)

# Media and facility schemas
from .media import (
    MediaCreate,
    MediaBatchCreate,
    MediaUploadRequest,
    MediaResponse,
    MediaUploadResponse,
    MediaBatchResponse
)
from .facility import FacilityCreate, FacilityResponse

# Inquiry schemas
from .inquiry import InquiryCreate, InquiryStatusUpdate, InquiryResponse

# Error schemas
from .error import ErrorDetail, ErrorResponse, APIErrorResponse

__all__ = [
    "CamelModel",
    "PaginationMeta",
    "LoginRequest",
    "RefreshTokenRequest",
    "AccessTokenResponse",
    "CurrentUserResponse",
    "LoginResponse",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "UserListResponse",
    "PropertyCreate",
    "PropertyUpdate",
    "PropertyResponse",
    "PropertyListResponse",
    "PropertyTypesResponse",
    "DashboardStatsResponse",
    "MediaCreate",
    "MediaBatchCreate",
    "MediaUploadRequest",
    "MediaResponse",
    "MediaUploadResponse",
    "MediaBatchResponse",
    "FacilityCreate",
    "FacilityResponse",
    "InquiryCreate",
    "InquiryStatusUpdate",
    "InquiryResponse",
    "ErrorDetail",
    "ErrorResponse",
    "APIErrorResponse",
]
