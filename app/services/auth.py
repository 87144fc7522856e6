"""
Authentication service for user login and token management.
Handles JWT token generation, validation and the current-user lookup.
"""

from typing import Tuple
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.user import UserRepository
from app.models.user import User, UserRole
from app.utils.auth import (
    create_access_token,
    create_refresh_token,
    verify_token
)
from app.utils.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    ValidationError,
    APIException
)
from jose import JWTError
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service for back-office users.
    Tokens are stateless; logout is handled by the client discarding them.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)

    async def authenticate_user(self, username: str, password: str) -> User:
        """
        Authenticate user with username and password.

        Raises:
            InvalidCredentialsError: If credentials are invalid
            ValidationError: If input validation fails
            SQLAlchemyError: If the user lookup fails
        """
        try:
            if not username or not username.strip():
                raise ValidationError("Username is required")

            if not password:
                raise ValidationError("Password is required")

            user = await self.user_repo.authenticate_user(username.strip(), password)

            if not user:
                logger.warning(f"Failed authentication attempt for username: {username}")
                raise InvalidCredentialsError()

            return user

        except (APIException, SQLAlchemyError):
            raise
        except Exception as e:
            logger.error(f"Authentication error for {username}: {e}")
            raise InvalidCredentialsError()

    def create_tokens(self, user: User) -> Tuple[str, str]:
        """
        Create access and refresh tokens for user.

        Returns:
            Tuple of (access_token, refresh_token)
        """
        access_token = create_access_token(
            user_id=user.id,
            username=user.username,
            role=user.role
        )

        refresh_token = create_refresh_token(
            user_id=user.id,
            username=user.username
        )

        return access_token, refresh_token

    async def login(self, username: str, password: str) -> Tuple[User, str, str]:
        """
        Authenticate user and create tokens.

        Returns:
            Tuple of (user, access_token, refresh_token)
        """
        user = await self.authenticate_user(username, password)
        access_token, refresh_token = self.create_tokens(user)

        logger.info(f"User logged in: {user.username}")
        return user, access_token, refresh_token

    async def refresh_access_token(self, refresh_token: str) -> str:
        """
        Create new access token from refresh token.

        Raises:
            InvalidTokenError: If refresh token is invalid or its user is gone
            TokenExpiredError: If refresh token is expired
        """
        user = await self._user_from_token(refresh_token, "refresh")
        return create_access_token(
            user_id=user.id,
            username=user.username,
            role=user.role
        )

    async def get_current_user(self, token: str) -> User:
        """
        Get current user from access token.

        Raises:
            InvalidTokenError: If token is invalid or its user is gone
            TokenExpiredError: If token is expired
        """
        return await self._user_from_token(token, "access")

    async def _user_from_token(self, token: str, token_type: str) -> User:
        try:
            token_payload = verify_token(token, token_type=token_type)
        except JWTError as e:
            if "expired" in str(e).lower():
                raise TokenExpiredError()
            raise InvalidTokenError(str(e))

        user = await self.user_repo.get_by_id(token_payload.user_id)
        if not user:
            raise InvalidTokenError("User no longer exists")

        return user

    @staticmethod
    def has_role(user: User, *roles: UserRole) -> bool:
        """Check if user holds one of the given roles."""
        return user.role in roles
