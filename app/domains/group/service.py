"""Group service layer with business logic."""

import logging
from typing import Any, Optional

from sqlalchemy import and_, func, insert, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from app.domains.group.guard import MembershipGuard
from app.exceptions.base import StoreFailureError
from app.exceptions.user import UserNotFoundError
from models import Group, GroupMembership, GroupMessage, User
from models.base import utcnow

logger = logging.getLogger(__name__)


class GroupService:
    """Service class for groups, their members and their messages.

    Every operation acting inside an existing group is checked against the
    acting user's membership before touching group data.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.guard = MembershipGuard(db)

    async def create_group(
        self, name: str, creator_id: int, description: Optional[str] = None
    ) -> Group:
        """Create a group with its creator as the first member.

        Both rows are written in one transaction.
        """
        group = Group(name=name, description=description, created_by=creator_id)

        try:
            self.db.add(group)
            await self.db.flush()
            self.db.add(GroupMembership(group_id=group.id, user_id=creator_id))
            await self.db.commit()
            await self.db.refresh(group)
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception("Failed to create group for user %s", creator_id)
            raise StoreFailureError("Failed to create group")

        logger.info("Group %s created by user %s", group.id, creator_id)
        return group

    async def add_member(self, group_id: int, requester_id: int, user_id: int) -> bool:
        """Add ``user_id`` to the group on behalf of an existing member.

        Adding someone who is already a member succeeds without creating a
        second membership. Returns whether a new membership was created.
        """
        await self.guard.require_member(group_id, requester_id)

        target = await self.db.execute(select(User.id).where(User.id == user_id))
        if target.scalar_one_or_none() is None:
            raise UserNotFoundError()

        try:
            added = await self._insert_membership(group_id, user_id)
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception("Failed to add user %s to group %s", user_id, group_id)
            raise StoreFailureError("Failed to add member")

        if added:
            logger.info("User %s added to group %s by %s", user_id, group_id, requester_id)
        return added

    async def _insert_membership(self, group_id: int, user_id: int) -> bool:
        values = {"group_id": group_id, "user_id": user_id, "joined_at": utcnow()}
        dialect = self.db.get_bind().dialect.name

        if dialect in ("postgresql", "sqlite"):
            dialect_insert = pg_insert if dialect == "postgresql" else sqlite_insert
            stmt = (
                dialect_insert(GroupMembership)
                .values(**values)
                .on_conflict_do_nothing(index_elements=["group_id", "user_id"])
                .returning(GroupMembership.id)
            )
            result = await self.db.execute(stmt)
            return result.scalar_one_or_none() is not None

        # Other backends: let the unique constraint decide inside a savepoint
        try:
            async with self.db.begin_nested():
                await self.db.execute(insert(GroupMembership).values(**values))
        except IntegrityError:
            return False
        return True

    async def post_message(self, group_id: int, sender_id: int, content: str) -> GroupMessage:
        """Append a message to the group."""
        await self.guard.require_member(group_id, sender_id)

        message = GroupMessage(
            group_id=group_id, sender_id=sender_id, content=content, created_at=utcnow()
        )

        try:
            self.db.add(message)
            await self.db.commit()
            await self.db.refresh(message)
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception("Failed to store message in group %s", group_id)
            raise StoreFailureError("Failed to send message")

        return message

    async def list_messages(self, group_id: int, requester_id: int) -> list[dict[str, Any]]:
        """Get every message of the group, oldest first."""
        await self.guard.require_member(group_id, requester_id)

        stmt = (
            select(GroupMessage, User.username)
            .join(User, User.id == GroupMessage.sender_id)
            .where(GroupMessage.group_id == group_id)
            .order_by(GroupMessage.created_at.asc(), GroupMessage.id.asc())
        )
        result = await self.db.execute(stmt)
        return [
            {
                "id": message.id,
                "group_id": message.group_id,
                "sender_id": message.sender_id,
                "content": message.content,
                "created_at": message.created_at,
                "sender_username": username,
            }
            for message, username in result.all()
        ]

    async def list_members(self, group_id: int, requester_id: int) -> list[dict[str, Any]]:
        """Get the members of the group in the order they joined."""
        await self.guard.require_member(group_id, requester_id)

        stmt = (
            select(User.id, User.username, User.email, GroupMembership.joined_at)
            .join(GroupMembership, GroupMembership.user_id == User.id)
            .where(GroupMembership.group_id == group_id)
            .order_by(GroupMembership.joined_at.asc(), GroupMembership.id.asc())
        )
        result = await self.db.execute(stmt)
        return [dict(row._mapping) for row in result.all()]

    async def list_user_groups(self, user_id: int) -> list[dict[str, Any]]:
        """Get the groups a user belongs to, newest first."""
        caller_membership = aliased(GroupMembership)
        member_count = (
            select(func.count(GroupMembership.id))
            .where(GroupMembership.group_id == Group.id)
            .correlate(Group)
            .scalar_subquery()
        )

        stmt = (
            select(Group, User.username, member_count.label("member_count"))
            .join(
                caller_membership,
                and_(caller_membership.group_id == Group.id, caller_membership.user_id == user_id),
            )
            .join(User, User.id == Group.created_by)
            .order_by(Group.created_at.desc(), Group.id.desc())
        )
        result = await self.db.execute(stmt)
        return [
            {
                "id": group.id,
                "name": group.name,
                "description": group.description,
                "created_by": group.created_by,
                "created_at": group.created_at,
                "creator_username": creator_username,
                "member_count": count,
            }
            for group, creator_username, count in result.all()
        ]
