"""
Unit tests for Dependencies module.

This module contains unit tests for the authentication dependencies used
by every protected route.
"""

from unittest.mock import MagicMock

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from app.core.dependencies import get_current_user, validate_token
from app.core.security import create_access_token
from app.exceptions.base import AuthenticationError


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestValidateToken:
    """Test cases for validate_token dependency."""

    @pytest.mark.asyncio
    async def test_validate_token_success(self):
        result = await validate_token(_credentials(create_access_token(5, "alice")))

        assert result == {"user_id": 5, "username": "alice"}

    @pytest.mark.asyncio
    async def test_missing_token(self):
        with pytest.raises(AuthenticationError) as exc_info:
            await validate_token(None)

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_token(self):
        with pytest.raises(AuthenticationError):
            await validate_token(_credentials("invalid"))


class TestGetCurrentUser:
    """Test cases for get_current_user dependency."""

    @pytest.mark.asyncio
    async def test_loads_user_and_tags_request(self, test_db, test_user):
        request = MagicMock()
        principal = {"user_id": test_user.id, "username": test_user.username}

        user = await get_current_user(request, principal, test_db)

        assert user.id == test_user.id
        assert request.state.user_id == test_user.id

    @pytest.mark.asyncio
    async def test_token_for_deleted_user(self, test_db):
        with pytest.raises(AuthenticationError):
            await get_current_user(MagicMock(), {"user_id": 99999, "username": "ghost"}, test_db)
