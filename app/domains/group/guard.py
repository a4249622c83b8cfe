"""Membership checks guarding every group operation."""

import logging

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions.group import ForbiddenNotMemberError
from models import GroupMembership

logger = logging.getLogger(__name__)


class MembershipGuard:
    """Answers whether a user may act inside a group.

    A group that does not exist has no members, so asking about it is
    indistinguishable from asking about a group the user is not in.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def is_member(self, group_id: int, user_id: int) -> bool:
        stmt = select(GroupMembership.id).where(
            and_(GroupMembership.group_id == group_id, GroupMembership.user_id == user_id)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def require_member(self, group_id: int, user_id: int) -> None:
        """Raise ``ForbiddenNotMemberError`` unless ``user_id`` belongs to the group."""
        if not await self.is_member(group_id, user_id):
            logger.info("User %s denied access to group %s", user_id, group_id)
            raise ForbiddenNotMemberError()
