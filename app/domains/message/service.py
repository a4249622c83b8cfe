"""Direct message service layer with business logic."""

import logging
from typing import Any

from sqlalchemy import and_, delete, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from app.exceptions.base import StoreFailureError
from app.exceptions.message import (
    MessageNotFoundOrUnauthorizedError,
    RecipientNotFoundError,
    SelfMessageError,
)
from models import Message, User
from models.base import utcnow

logger = logging.getLogger(__name__)


class MessageService:
    """Service class for one-to-one messages."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def send_message(self, sender_id: int, recipient_id: int, content: str) -> Message:
        """Append a message from ``sender_id`` to ``recipient_id``."""
        if sender_id == recipient_id:
            raise SelfMessageError()

        recipient = await self.db.execute(select(User.id).where(User.id == recipient_id))
        if recipient.scalar_one_or_none() is None:
            raise RecipientNotFoundError()

        message = Message(
            sender_id=sender_id,
            recipient_id=recipient_id,
            content=content,
            is_read=False,
            created_at=utcnow(),
        )

        try:
            self.db.add(message)
            await self.db.commit()
            await self.db.refresh(message)
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception("Failed to store message from user %s", sender_id)
            raise StoreFailureError("Failed to send message")

        logger.info("Message %s sent from %s to %s", message.id, sender_id, recipient_id)
        return message

    async def get_thread(self, user_a: int, user_b: int) -> list[dict[str, Any]]:
        """Get every message between two users, oldest first."""
        sender = aliased(User)
        recipient = aliased(User)

        stmt = (
            select(Message, sender.username, recipient.username)
            .join(sender, sender.id == Message.sender_id)
            .join(recipient, recipient.id == Message.recipient_id)
            .where(
                or_(
                    and_(Message.sender_id == user_a, Message.recipient_id == user_b),
                    and_(Message.sender_id == user_b, Message.recipient_id == user_a),
                )
            )
            .order_by(Message.created_at.asc(), Message.id.asc())
        )

        result = await self.db.execute(stmt)
        return [
            {
                "id": message.id,
                "sender_id": message.sender_id,
                "recipient_id": message.recipient_id,
                "content": message.content,
                "is_read": message.is_read,
                "created_at": message.created_at,
                "sender_username": sender_username,
                "recipient_username": recipient_username,
            }
            for message, sender_username, recipient_username in result.all()
        ]

    async def mark_read(self, message_id: int, user_id: int) -> Message:
        """Mark a message as read on behalf of its recipient.

        Existence and ownership are checked by the same statement that
        performs the update.
        """
        stmt = (
            update(Message)
            .where(and_(Message.id == message_id, Message.recipient_id == user_id))
            .values(is_read=True)
            .returning(Message)
        )

        try:
            result = await self.db.execute(stmt)
            message = result.scalar_one_or_none()
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception("Failed to mark message %s as read", message_id)
            raise StoreFailureError("Failed to update message")

        if message is None:
            raise MessageNotFoundOrUnauthorizedError()
        return message

    async def delete_message(self, message_id: int, user_id: int) -> Message:
        """Delete a message on behalf of its sender."""
        stmt = (
            delete(Message)
            .where(and_(Message.id == message_id, Message.sender_id == user_id))
            .returning(Message)
        )

        try:
            result = await self.db.execute(stmt)
            message = result.scalar_one_or_none()
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception("Failed to delete message %s", message_id)
            raise StoreFailureError("Failed to delete message")

        if message is None:
            raise MessageNotFoundOrUnauthorizedError()

        logger.info("Message %s deleted by %s", message_id, user_id)
        return message
