"""
FastAPI dependency injection utilities for authentication, services and external collaborators.
Provides reusable dependencies for route protection and user extraction.
"""

from functools import lru_cache
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import get_db
from app.models.user import User, UserRole
from app.services.auth import AuthService
from app.services.property import PropertyService
from app.services.media import MediaService
from app.services.facility import FacilityService
from app.services.inquiry import InquiryService
from app.services.user import UserService
from app.services.storage import MediaStore, CloudinaryMediaStore
from app.services.notifier import Notifier, EmailNotifier
from app.utils.exceptions import UnauthorizedError, InsufficientPermissionsError


# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


@lru_cache()
def get_media_store() -> MediaStore:
    """Shared media store; overridden with a fake in tests."""
    return CloudinaryMediaStore()


@lru_cache()
def get_notifier() -> Notifier:
    """Shared inquiry notifier; overridden with a fake in tests."""
    return EmailNotifier()


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


async def get_property_service(
    db: AsyncSession = Depends(get_db),
    media_store: MediaStore = Depends(get_media_store)
) -> PropertyService:
    return PropertyService(db, media_store)


async def get_media_service(
    db: AsyncSession = Depends(get_db),
    media_store: MediaStore = Depends(get_media_store)
) -> MediaService:
    return MediaService(db, media_store)


async def get_facility_service(db: AsyncSession = Depends(get_db)) -> FacilityService:
    return FacilityService(db)


async def get_inquiry_service(
    db: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier)
) -> InquiryService:
    return InquiryService(db, notifier)


async def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> User:
    """
    Get current authenticated user from JWT token.

    Raises:
        UnauthorizedError: If no token provided or token is invalid
        TokenExpiredError: If token is expired
    """
    if not credentials:
        raise UnauthorizedError("Authentication token required")

    return await auth_service.get_current_user(credentials.credentials)


def require_roles(*roles: UserRole, action: str = "access this resource"):
    """
    Create a dependency that requires one of the given roles.

    Args:
        roles: Accepted roles
        action: Described in the 403 message

    Returns:
        Dependency function returning the current user
    """
    async def role_dependency(
        current_user: User = Depends(get_current_user)
    ) -> User:
        if current_user.role not in roles:
            raise InsufficientPermissionsError(action)
        return current_user

    return role_dependency


# Back office: any staff role
get_current_staff_user = require_roles(
    UserRole.STAFF, UserRole.ADMIN, UserRole.SUPERADMIN,
    action="access the back office"
)

get_current_admin_user = require_roles(
    UserRole.ADMIN, UserRole.SUPERADMIN,
    action="perform this action"
)

get_current_superadmin_user = require_roles(
    UserRole.SUPERADMIN,
    action="manage users"
)
