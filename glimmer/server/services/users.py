"""
User service.

Registers users (each with a default pet) and resolves the acting user.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.exc import IntegrityError

from glimmer.core.database.entities import Pet, User
from glimmer.core.database.repositories import RepoBundle
from glimmer.core.logging_config import get_logger
from glimmer.core.models.io import UserCreate
from glimmer.errors import AuthenticationError, ConflictError, NotFoundError

logger = get_logger(__name__)


class UserService:
    """Business rules for user accounts."""

    def __init__(self, repos: RepoBundle) -> None:
        self.repos = repos

    async def create_user(self, data: UserCreate) -> User:
        """Register a user together with their default pet.

        Raises:
            ConflictError: The username or email is already taken.
        """
        existing = await self.repos.users.find_conflicting(data.username, data.email)
        if existing is not None:
            field = "username" if existing.username == data.username else "email"
            raise ConflictError(f"A user with this {field} already exists")

        try:
            user = await self.repos.users.create(
                User(username=data.username, email=data.email, display_name=data.display_name)
            )
            await self.repos.pets.create(Pet(user_id=user.id))
            await self.repos.commit()
        except IntegrityError as e:
            await self.repos.rollback()
            raise ConflictError("A user with this username or email already exists") from e
        logger.info(f"Created user {user.id} ({user.username}) with default pet")
        return user

    async def get_user(self, user_id: str) -> User:
        user = await self.repos.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    async def authenticate(self, user_id: Optional[str]) -> User:
        """Resolve the acting user from a client-supplied id.

        Raises:
            AuthenticationError: The id is missing or names no user.
        """
        if not user_id:
            raise AuthenticationError("Missing user id")
        user = await self.repos.users.get_by_id(user_id)
        if user is None:
            raise AuthenticationError(f"Unknown user: '{user_id}'")
        return user
