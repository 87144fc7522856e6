"""
Authentication API endpoints for login, token refresh and the current user.
"""

from fastapi import APIRouter, Depends, Response, status
from app.models.user import User
from app.services.auth import AuthService
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RefreshTokenRequest,
    AccessTokenResponse,
    CurrentUserResponse
)
from app.schemas.error import get_error_responses
from app.utils.dependencies import get_auth_service, get_current_user
from app.config import settings
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="User login",
    description="Authenticate with username and password, returns JWT tokens",
    responses=get_error_responses(401, 422)
)
async def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> LoginResponse:
    """
    Authenticate user and return JWT tokens.

    Raises:
        InvalidCredentialsError: If credentials are invalid
    """
    user, access_token, refresh_token = await auth_service.login(
        username=login_data.username,
        password=login_data.password
    )

    return LoginResponse(
        user=CurrentUserResponse.model_validate(user.to_dict()),
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="bearer",
        expires_in=settings.access_token_expire_minutes * 60
    )


@router.post(
    "/refresh",
    response_model=AccessTokenResponse,
    summary="Refresh access token",
    responses=get_error_responses(401, 422)
)
async def refresh_token(
    refresh_data: RefreshTokenRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> AccessTokenResponse:
    access_token = await auth_service.refresh_access_token(refresh_data.refresh_token)
    return AccessTokenResponse(
        access_token=access_token,
        token_type="bearer",
        expires_in=settings.access_token_expire_minutes * 60
    )


@router.get(
    "/status",
    response_model=CurrentUserResponse,
    summary="Current user",
    description="Return the authenticated user with role permissions",
    responses=get_error_responses(401)
)
async def auth_status(current_user: User = Depends(get_current_user)) -> CurrentUserResponse:
    return CurrentUserResponse.model_validate(current_user.to_dict())


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="User logout",
    description="Tokens are stateless; the client discards them"
)
async def logout(current_user: User = Depends(get_current_user)) -> Response:
    logger.info(f"User logged out: {current_user.username}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
