# app/domains/user/service.py
import asyncio
import logging
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import create_access_token, hash_password, verify_password
from app.exceptions.base import StoreFailureError
from app.exceptions.user import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from models import User

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by ID."""
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_user_by_username(self, username: str) -> Optional[User]:
        """Get a user by username."""
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def get_user(self, user_id: int) -> User:
        """Get a user by ID, raising if absent."""
        user = await self.get_user_by_id(user_id)
        if not user:
            raise UserNotFoundError()
        return user

    async def register(self, username: str, email: str, password: str) -> tuple[User, str]:
        """Create a new account and issue its first access token."""
        existing = await self.db.execute(
            select(User.id).where(or_(User.username == username, User.email == email))
        )
        if existing.first() is not None:
            raise UserAlreadyExistsError()

        # bcrypt is CPU-bound and blocking
        loop = asyncio.get_running_loop()
        password_hash = await loop.run_in_executor(None, hash_password, password)
        user = User(username=username, email=email, password_hash=password_hash)

        try:
            self.db.add(user)
            await self.db.commit()
            await self.db.refresh(user)
        except IntegrityError:
            # Lost a race with a concurrent registration
            await self.db.rollback()
            raise UserAlreadyExistsError()
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception("Failed to register user")
            raise StoreFailureError("Failed to create user")

        logger.info("Registered user %s", user.id)
        return user, create_access_token(user.id, user.username)

    async def authenticate(self, username: str, password: str) -> tuple[User, str]:
        """Check credentials and issue an access token."""
        user = await self.get_user_by_username(username)
        if not user:
            raise InvalidCredentialsError()

        loop = asyncio.get_running_loop()
        if not await loop.run_in_executor(None, verify_password, password, user.password_hash):
            raise InvalidCredentialsError()

        return user, create_access_token(user.id, user.username)

    async def list_other_users(self, user_id: int) -> list[User]:
        """List every user except the caller, ordered by username."""
        result = await self.db.execute(
            select(User).where(User.id != user_id).order_by(User.username)
        )
        return list(result.scalars().all())
