"""Conversation list built from the direct message log.

A conversation is the set of messages between the caller and one other user.
The list shows one entry per counterpart, carrying that pair's most recent
message, newest conversation first.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Message, User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Conversation:
    other_user_id: int
    other_username: str
    last_message: str
    last_timestamp: datetime
    last_message_id: int
    last_sender_id: int
    is_read: bool


class ConversationAggregator:
    """Computes the conversation list for a user in a single query."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_conversations(self, user_id: int) -> list[Conversation]:
        """Return the latest message per counterpart.

        Messages with equal ``created_at`` are ordered by id, so the
        newest-inserted one wins both within a pair and across pairs.
        """
        counterpart = case(
            (Message.sender_id == user_id, Message.recipient_id),
            else_=Message.sender_id,
        )
        newest_first = (Message.created_at.desc(), Message.id.desc())

        ranked = (
            select(
                Message.id.label("id"),
                Message.sender_id.label("sender_id"),
                Message.content.label("content"),
                Message.is_read.label("is_read"),
                Message.created_at.label("created_at"),
                counterpart.label("other_user_id"),
                func.row_number()
                .over(partition_by=counterpart, order_by=newest_first)
                .label("rn"),
            )
            .where(or_(Message.sender_id == user_id, Message.recipient_id == user_id))
            .subquery()
        )

        stmt = (
            select(ranked, User.username)
            .join(User, User.id == ranked.c.other_user_id)
            .where(ranked.c.rn == 1)
            .order_by(ranked.c.created_at.desc(), ranked.c.id.desc())
        )

        result = await self.db.execute(stmt)
        return [
            Conversation(
                other_user_id=row.other_user_id,
                other_username=row.username,
                last_message=row.content,
                last_timestamp=row.created_at,
                last_message_id=row.id,
                last_sender_id=row.sender_id,
                is_read=row.is_read,
            )
            for row in result.all()
        ]
