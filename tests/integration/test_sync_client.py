"""
Integration tests for the polling client running against the real application.
"""

import pytest
from httpx import ASGITransport

from app.main import app
from app.sync.client import MessengerClient, SyncError
from app.sync.poller import AIChatSession, Poller
from app.sync.state import ReplicatedList
from tests.factories import DEFAULT_PASSWORD


@pytest.fixture
def transport(client):
    # ``client`` installs the database and provider overrides on the app
    return ASGITransport(app=app)


class TestMessengerClient:
    """Test cases for MessengerClient against the ASGI app."""

    @pytest.mark.asyncio
    async def test_login_and_poll_conversations(self, transport, test_user, test_user_2):
        async with MessengerClient("http://test", transport=transport) as alice, MessengerClient(
            "http://test", transport=transport
        ) as bob:
            await alice.login("alice", DEFAULT_PASSWORD)
            await bob.login("bob", DEFAULT_PASSWORD)
            conversations = ReplicatedList()
            poller = Poller(lambda: conversations.refresh(alice.fetch_conversations), interval=3)

            assert await poller.poll_once()
            assert conversations.items == []

            await alice.send_message(test_user_2.id, "hi")
            await bob.send_message(test_user.id, "hello")
            assert await poller.poll_once()

        (entry,) = conversations.items
        assert entry["other_username"] == "bob"
        assert entry["last_message"] == "hello"
        assert conversations.version == 2

    @pytest.mark.asyncio
    async def test_server_errors_become_sync_errors(self, transport, test_user):
        async with MessengerClient("http://test", transport=transport) as client:
            with pytest.raises(SyncError) as unauthenticated:
                await client.fetch_conversations()

            await client.login("alice", DEFAULT_PASSWORD)
            with pytest.raises(SyncError) as forbidden:
                await client.fetch_group_messages(99999)

        assert unauthenticated.value.status_code == 401
        assert unauthenticated.value.error_code == "AUTHENTICATION_FAILED"
        assert forbidden.value.status_code == 403
        assert forbidden.value.error_code == "NOT_GROUP_MEMBER"

    @pytest.mark.asyncio
    async def test_group_polling(self, transport, test_user, test_user_2):
        async with MessengerClient("http://test", transport=transport) as client:
            await client.login("alice", DEFAULT_PASSWORD)
            created = await client.create_group("Team")
            await client.add_group_member(created["id"], test_user_2.id)
            await client.send_group_message(created["id"], "welcome")

            groups = await client.fetch_groups()
            members = await client.fetch_group_members(created["id"])
            messages = await client.fetch_group_messages(created["id"])

        assert [g["member_count"] for g in groups] == [2]
        assert [m["username"] for m in members] == ["alice", "bob"]
        assert [m["content"] for m in messages] == ["welcome"]

    @pytest.mark.asyncio
    async def test_ai_session_round_trip(self, transport, test_user, fake_provider):
        fake_provider.replies.extend(["first reply", "second reply"])
        async with MessengerClient("http://test", transport=transport) as client:
            await client.login("alice", DEFAULT_PASSWORD)
            session = AIChatSession(client)

            await session.send("one")
            await session.send("two")

        assert [(t.role.value, t.content) for t in session.view.turns] == [
            ("user", "one"),
            ("assistant", "first reply"),
            ("user", "two"),
            ("assistant", "second reply"),
        ]
        assert session.view.overlay == []
