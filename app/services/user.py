"""
User management service for superadmins.
"""

from typing import List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.user import User
from app.repositories.user import UserRepository
from app.schemas.user import UserCreate, UserUpdate
from app.utils.exceptions import (
    BadRequestError,
    DuplicateResourceError,
    NotFoundError,
    ValidationError
)
import logging

logger = logging.getLogger(__name__)


class UserService:
    """
    Back-office account management.
    Usernames and e-mail addresses are unique across all accounts.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)

    async def list_users(self, skip: int = 0, limit: int = 100) -> Tuple[List[User], int]:
        users = await self.user_repo.get_multi(skip=skip, limit=limit)
        return users, await self.user_repo.count()

    async def get_user(self, user_id: int) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)
        return user

    async def create_user(self, user_data: UserCreate) -> User:
        """
        Create a new user account.

        Raises:
            DuplicateResourceError: If the username or email is taken
        """
        await self._ensure_unique(user_data.username, user_data.email)

        try:
            user = await self.user_repo.create_user(user_data.model_dump())
        except ValueError as e:
            raise BadRequestError(str(e))

        logger.info(f"User created: {user.username} ({user.role.value})")
        return user

    async def update_user(self, user_id: int, user_data: UserUpdate) -> User:
        """
        Update username, email, password or role.

        Raises:
            NotFoundError: If the user doesn't exist
            DuplicateResourceError: If the new username or email is taken
        """
        user = await self.get_user(user_id)
        update_data = {k: v for k, v in user_data.model_dump(exclude_unset=True).items() if v is not None}
        if not update_data:
            raise ValidationError("No valid fields provided for update")

        await self._ensure_unique(update_data.get("username"), update_data.get("email"), exclude_id=user.id)

        password = update_data.pop("password", None)
        try:
            if password is not None:
                update_data["hashed_password"] = User.hash_password(password)
            if "email" in update_data:
                update_data["email"] = User.validate_email_format(update_data["email"])
        except ValueError as e:
            raise BadRequestError(str(e))

        updated = await self.user_repo.update(user_id, update_data)
        logger.info(f"User updated: {user_id} ({', '.join(sorted(user_data.model_fields_set))})")
        return updated

    async def delete_user(self, user_id: int, current_user: User) -> bool:
        """
        Delete a user account. Superadmins cannot delete themselves.
        """
        if user_id == current_user.id:
            raise BadRequestError("You cannot delete your own account")

        deleted = await self.user_repo.delete(user_id)
        if not deleted:
            raise NotFoundError("User", user_id)

        logger.info(f"User deleted: {user_id} by {current_user.username}")
        return True

    async def _ensure_unique(self, username=None, email=None, exclude_id=None) -> None:
        if username:
            existing = await self.user_repo.get_by_username(username)
            if existing and existing.id != exclude_id:
                raise DuplicateResourceError("User", username)
        if email:
            existing = await self.user_repo.get_by_email(email)
            if existing and existing.id != exclude_id:
                raise DuplicateResourceError("User", email)
