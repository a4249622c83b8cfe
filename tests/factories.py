"""
Test data factories for generating test objects.

This module provides Factory Boy factories for creating test data objects
with realistic default values and easy customization. Factories only build
instances; the async helpers below persist them through an AsyncSession.
"""

from datetime import datetime, timedelta
from typing import Optional

import factory
from factory.alchemy import SQLAlchemyModelFactory
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import hash_password
from models import AIExchange, Group, GroupMembership, GroupMessage, Message, User
from models.base import utcnow

DEFAULT_PASSWORD = "password123"


class UserFactory(SQLAlchemyModelFactory):
    """Factory for creating User test instances."""

    class Meta:
        model = User

    username = factory.Sequence(lambda n: f"testuser{n}")
    email = factory.LazyAttribute(lambda obj: f"{obj.username}@example.com")
    password_hash = factory.LazyFunction(lambda: hash_password(DEFAULT_PASSWORD))


class MessageFactory(SQLAlchemyModelFactory):
    """Factory for creating direct Message test instances."""

    class Meta:
        model = Message

    content = factory.Faker("sentence", nb_words=6)
    is_read = False
    created_at = factory.LazyFunction(utcnow)
    # sender_id and recipient_id will be passed when creating


class GroupFactory(SQLAlchemyModelFactory):
    """Factory for creating Group test instances."""

    class Meta:
        model = Group

    name = factory.Sequence(lambda n: f"Test Group {n}")
    description = factory.Faker("text", max_nb_chars=120)


class GroupMessageFactory(SQLAlchemyModelFactory):
    """Factory for creating GroupMessage test instances."""

    class Meta:
        model = GroupMessage

    content = factory.Faker("sentence", nb_words=6)
    created_at = factory.LazyFunction(utcnow)


class AIExchangeFactory(SQLAlchemyModelFactory):
    """Factory for creating AI exchange test instances."""

    class Meta:
        model = AIExchange

    message = factory.Faker("sentence", nb_words=8)
    response = factory.Faker("sentence", nb_words=12)
    created_at = factory.LazyFunction(utcnow)
    # user_id will be passed when creating


async def _persist(session: AsyncSession, *instances):
    session.add_all(instances)
    await session.commit()
    for instance in instances:
        await session.refresh(instance)


# Utility functions for creating test data
async def create_user(session: AsyncSession, **kwargs) -> User:
    """Create and persist a user."""
    user = UserFactory.build(**kwargs)
    await _persist(session, user)
    return user


async def create_message(
    session: AsyncSession, sender: User, recipient: User, **kwargs
) -> Message:
    """Create and persist a direct message."""
    message = MessageFactory.build(sender_id=sender.id, recipient_id=recipient.id, **kwargs)
    await _persist(session, message)
    return message


async def create_group_with_members(
    session: AsyncSession, creator: User, members: Optional[list[User]] = None, **kwargs
) -> Group:
    """Create a group whose members are the creator plus ``members``."""
    group = GroupFactory.build(created_by=creator.id, **kwargs)
    await _persist(session, group)

    memberships = [GroupMembership(group_id=group.id, user_id=creator.id)]
    memberships += [GroupMembership(group_id=group.id, user_id=m.id) for m in members or []]
    await _persist(session, *memberships)
    return group


async def create_ai_exchanges(
    session: AsyncSession, user: User, count: int, start: Optional[datetime] = None
) -> list[AIExchange]:
    """Create ``count`` exchanges one minute apart, oldest first."""
    start = start or utcnow() - timedelta(hours=1)
    exchanges = [
        AIExchangeFactory.build(
            user_id=user.id,
            message=f"question {i}",
            response=f"answer {i}",
            created_at=start + timedelta(minutes=i),
        )
        for i in range(count)
    ]
    await _persist(session, *exchanges)
    return exchanges
