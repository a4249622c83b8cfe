"""HTTP client used by polling front-ends to read and write messenger state."""

import logging
from typing import Any, Optional

import httpx

from app.schemas.ai import AIChatResponse, ChatTurn

logger = logging.getLogger(__name__)


class SyncError(Exception):
    """Raised when the server rejects a request or cannot be reached."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code


class MessengerClient:
    """
    Thin async wrapper around the messenger HTTP API.

    Every fetcher returns the full authoritative list for its resource; the
    caller is expected to replace its local copy with the result.

    :ivar token: Bearer token sent with every request, if any.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "MessengerClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = await self._client.request(method, path, headers=headers, **kwargs)
        except httpx.RequestError as e:
            logger.warning("Request %s %s failed: %s", method, path, e)
            raise SyncError("Server unreachable", error_code="NETWORK_ERROR") from e

        if response.is_error:
            raise self._error_from_response(response)
        return response.json()

    @staticmethod
    def _error_from_response(response: httpx.Response) -> SyncError:
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        return SyncError(
            body.get("message") or f"HTTP {response.status_code}",
            status_code=response.status_code,
            error_code=body.get("error_code"),
        )

    async def _data(self, method: str, path: str, **kwargs) -> dict:
        payload = await self._request(method, path, **kwargs)
        return payload.get("data") or {}

    # Authentication

    async def login(self, username: str, password: str) -> dict:
        """Log in and keep the issued token for subsequent calls."""
        payload = await self._request(
            "POST", "/api/auth/login", json={"username": username, "password": password}
        )
        self.token = payload["token"]
        return payload["user"]

    # Direct messages

    async def fetch_conversations(self) -> list[dict]:
        return (await self._data("GET", "/api/messages"))["conversations"]

    async def fetch_thread(self, user_id: int) -> list[dict]:
        return (await self._data("GET", f"/api/messages/{user_id}"))["messages"]

    async def send_message(self, recipient_id: int, content: str) -> dict:
        return await self._data(
            "POST", "/api/messages", json={"recipient_id": recipient_id, "content": content}
        )

    # Groups

    async def fetch_groups(self) -> list[dict]:
        return (await self._data("GET", "/api/groups"))["groups"]

    async def create_group(self, name: str, description: Optional[str] = None) -> dict:
        return await self._data(
            "POST", "/api/groups", json={"name": name, "description": description}
        )

    async def add_group_member(self, group_id: int, user_id: int) -> dict:
        return await self._data(
            "POST", f"/api/groups/{group_id}/members", json={"user_id": user_id}
        )

    async def fetch_group_messages(self, group_id: int) -> list[dict]:
        return (await self._data("GET", f"/api/groups/{group_id}/messages"))["messages"]

    async def fetch_group_members(self, group_id: int) -> list[dict]:
        return (await self._data("GET", f"/api/groups/{group_id}/members"))["members"]

    async def send_group_message(self, group_id: int, content: str) -> dict:
        return await self._data(
            "POST", f"/api/groups/{group_id}/messages", json={"content": content}
        )

    # AI assistant

    async def fetch_ai_history(self, limit: Optional[int] = None) -> list[ChatTurn]:
        params = {"limit": limit} if limit is not None else None
        data = await self._data("GET", "/api/ai/history", params=params)
        return [ChatTurn.model_validate(turn) for turn in data.get("turns", [])]

    async def send_ai_message(self, prompt: str) -> AIChatResponse:
        data = await self._data("POST", "/api/ai/chat", json={"message": prompt})
        return AIChatResponse.model_validate(data)
