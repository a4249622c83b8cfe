"""
API tests for the AI assistant controller.

The completion provider is replaced with an in-memory fake by the ``client``
fixture.
"""

import pytest
from fastapi import status
from httpx import AsyncClient

from app.domains.ai.provider import get_completion_provider
from app.main import app
from tests.factories import create_ai_exchanges


class TestAIController:
    """Test cases for AI endpoints."""

    @pytest.mark.asyncio
    async def test_chat(self, client: AsyncClient, auth_headers, test_user, fake_provider):
        fake_provider.replies.append("Hello! How can I help?")

        response = await client.post("/api/ai/chat", json={"message": "Hi"}, headers=auth_headers(test_user))

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["message"] == "Hello! How can I help?"
        assert data["timestamp"]
        assert fake_provider.prompts == ["Hi"]

    @pytest.mark.asyncio
    async def test_chat_rejects_blank_prompt(self, client: AsyncClient, auth_headers, test_user, fake_provider):
        response = await client.post("/api/ai/chat", json={"message": "  "}, headers=auth_headers(test_user))

        assert response.status_code == 422
        assert fake_provider.prompts == []

    @pytest.mark.asyncio
    async def test_chat_upstream_failure(self, client: AsyncClient, auth_headers, test_user, failing_provider):
        app.dependency_overrides[get_completion_provider] = lambda: failing_provider

        response = await client.post("/api/ai/chat", json={"message": "Hi"}, headers=auth_headers(test_user))
        history = await client.get("/api/ai/history", headers=auth_headers(test_user))

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["error_code"] == "UPSTREAM_UNAVAILABLE"
        assert history.json()["data"]["turns"] == []

    @pytest.mark.asyncio
    async def test_history(self, client: AsyncClient, auth_headers, test_db, test_user):
        await create_ai_exchanges(test_db, test_user, 3)

        response = await client.get("/api/ai/history?limit=2", headers=auth_headers(test_user))

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["exchange_count"] == 2
        assert [(t["role"], t["content"]) for t in data["turns"]] == [
            ("user", "question 1"),
            ("assistant", "answer 1"),
            ("user", "question 2"),
            ("assistant", "answer 2"),
        ]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [0, 201, "abc"])
    async def test_history_limit_validation(self, client: AsyncClient, auth_headers, test_user, limit):
        response = await client.get(f"/api/ai/history?limit={limit}", headers=auth_headers(test_user))

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_clear_history(self, client: AsyncClient, auth_headers, test_db, test_user, test_user_2):
        await create_ai_exchanges(test_db, test_user, 2)
        await create_ai_exchanges(test_db, test_user_2, 1)

        response = await client.delete("/api/ai/history", headers=auth_headers(test_user))
        mine = await client.get("/api/ai/history", headers=auth_headers(test_user))
        theirs = await client.get("/api/ai/history", headers=auth_headers(test_user_2))

        assert response.json()["data"] == {"deleted": 2}
        assert mine.json()["data"]["turns"] == []
        assert len(theirs.json()["data"]["turns"]) == 2

    @pytest.mark.asyncio
    async def test_ai_routes_require_authentication(self, client: AsyncClient):
        response = await client.get("/api/ai/history")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
