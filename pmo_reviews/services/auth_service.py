"""
Authentication and user management.
"""

from __future__ import annotations

from typing import Optional

from pmo_reviews.core.constants import UserRole
from pmo_reviews.core.exceptions import AuthenticationError, ConflictError
from pmo_reviews.core.logging import get_logger
from pmo_reviews.core.security import (
    create_session_token,
    generate_id,
    hash_password,
    verify_password,
)
from pmo_reviews.domain.user import User
from pmo_reviews.repositories.base import BaseRepository

logger = get_logger(__name__)


class AuthService:
    """
    Issues session tokens and manages staff accounts.
    """

    def __init__(self, user_repository: BaseRepository[User]) -> None:
        self.user_repository = user_repository

    async def authenticate(self, email: str, password: str) -> tuple[str, User]:
        """
        Check credentials and issue a session token.

        Returns:
            Tuple of (token, user)

        Raises:
            AuthenticationError: If the email is unknown or the password is wrong
        """
        user = await self.user_repository.find_one(email=email.strip().lower())
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Login failed", email=email)
            raise AuthenticationError("Invalid email or password")

        logger.info("Login succeeded", user_id=user.id, role=user.role)
        return create_session_token(user.to_claims()), user

    async def create_user(
        self,
        email: str,
        name: str,
        password: str,
        role: UserRole = UserRole.REVIEWER,
    ) -> User:
        """
        Create a staff account.

        Raises:
            ConflictError: If the email is already registered
        """
        user = User(
            id=generate_id("user"),
            email=email,
            name=name,
            role=role,
            password_hash=hash_password(password),
        )
        if await self.user_repository.find_one(email=user.email) is not None:
            raise ConflictError("User", "email", user.email)

        await self.user_repository.save(user)
        logger.info("User created", user_id=user.id, role=user.role)
        return user

    async def list_users(self) -> list[User]:
        return await self.user_repository.list()

    async def get_user_by_email(self, email: str) -> Optional[User]:
        return await self.user_repository.find_one(email=email.strip().lower())

    async def ensure_admin(self, email: str, name: str, password: str) -> tuple[User, bool]:
        """
        Create the admin account if it does not exist yet.

        Returns:
            Tuple of (user, created)
        """
        existing = await self.get_user_by_email(email)
        if existing is not None:
            return existing, False
        return await self.create_user(email, name, password, role=UserRole.ADMIN), True
