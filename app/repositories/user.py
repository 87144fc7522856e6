"""
User repository for authentication and back-office account management.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from app.repositories.base import BaseRepository
from app.models.user import User, UserRole
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """
    Repository for user accounts.
    Usernames are stored as given, e-mail addresses lower-cased.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_user(self, user_data: Dict[str, Any]) -> User:
        """
        Create a new user with email validation and password hashing.

        Args:
            user_data: Dictionary containing username, email, password and
                      optionally role (defaults to STAFF)

        Returns:
            Created user instance

        Raises:
            ValueError: If the email or password is invalid
        """
        data = dict(user_data)
        password = data.pop("password")

        create_data = {
            **data,
            "email": User.validate_email_format(data["email"]),
            "hashed_password": User.hash_password(password),
            "role": data.get("role") or UserRole.STAFF,
        }

        created_user = await self.create(create_data)
        logger.info(f"Created user: {created_user.username} (ID: {created_user.id})")
        return created_user

    async def get_by_username(self, username: str) -> Optional[User]:
        try:
            result = await self.db.execute(select(User).where(User.username == username))
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Failed to get user by username {username}: {e}")
            raise

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            email: Email address to search for, compared case-insensitively

        Returns:
            User instance if found, None otherwise
        """
        try:
            normalized_email = email.lower().strip()
            result = await self.db.execute(select(User).where(User.email == normalized_email))
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Failed to get user by email {email}: {e}")
            raise

    async def authenticate_user(self, username: str, password: str) -> Optional[User]:
        """
        Authenticate user with username and password.

        Returns:
            User instance if authentication successful, None otherwise
        """
        user = await self.get_by_username(username)

        if not user:
            logger.debug(f"Authentication failed: user {username} not found")
            return None

        if not user.verify_password(password):
            logger.debug(f"Authentication failed: invalid password for {username}")
            return None

        logger.info(f"User authenticated successfully: {username}")
        return user

    async def update_password(self, user_id: int, new_password: str) -> Optional[User]:
        user = await self.get_by_id(user_id)
        if not user:
            return None

        async with self._writing(f"password update of {user_id}"):
            user.set_password(new_password)
        await self.db.refresh(user)
        logger.info(f"Password updated for user {user_id}")
        return user

    async def count_by_role(self, role: UserRole) -> int:
        result = await self.db.execute(select(func.count(User.id)).where(User.role == role))
        return result.scalar() or 0
