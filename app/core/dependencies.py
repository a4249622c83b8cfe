# app/core/dependencies.py
import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import TokenVerifier
from app.database import get_db
from app.domains.user.service import UserService
from app.exceptions.base import AuthenticationError
from models import User

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)
verifier = TokenVerifier()


async def validate_token(
    token: HTTPAuthorizationCredentials | None = Depends(security),
) -> dict:
    """Validate and decode the bearer token.

    Returns:
        dict: Verified principal ``{"user_id": ..., "username": ...}``

    Raises:
        AuthenticationError: If the token is missing, invalid or expired
    """
    if not token or not token.credentials:
        raise AuthenticationError("Authentication token is required")

    return verifier.verify(token.credentials)


async def get_current_user(
    request: Request,
    principal: dict = Depends(validate_token),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Get current authenticated user from the verified principal.

    Returns:
        User: Current authenticated user

    Raises:
        AuthenticationError: If the token refers to a user that no longer exists
    """
    user_service = UserService(db)
    user = await user_service.get_user_by_id(principal["user_id"])

    if not user:
        logger.warning("Token presented for unknown user id %s", principal["user_id"])
        raise AuthenticationError("User for this token no longer exists")

    # Add user info to request state for logging
    request.state.user_id = user.id

    return user
