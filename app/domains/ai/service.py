"""AI chat service: provider calls and the per-user exchange log."""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.domains.ai.provider import CompletionProvider
from app.domains.ai.reconstructor import reconstruct_turns
from app.exceptions.ai import AIConfigurationError
from app.exceptions.base import StoreFailureError, ValidationError
from app.schemas.ai import ChatTurn
from models import AIExchange
from models.base import utcnow

logger = logging.getLogger(__name__)


class AIChatService:
    """Service class for the one-to-one AI assistant conversation."""

    def __init__(self, db: AsyncSession, provider: CompletionProvider | None = None):
        self.db = db
        self.provider = provider

    async def chat(self, user_id: int, prompt: str) -> AIExchange:
        """Ask the provider once and log the exchange.

        Nothing is stored when the provider fails.
        """
        if self.provider is None:
            raise AIConfigurationError("No completion provider configured")
        reply = await self.provider.complete(prompt)

        exchange = AIExchange(user_id=user_id, message=prompt, response=reply, created_at=utcnow())
        try:
            self.db.add(exchange)
            await self.db.commit()
            await self.db.refresh(exchange)
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception("Failed to store AI exchange for user %s", user_id)
            raise StoreFailureError("Failed to save AI response")

        logger.info("AI exchange %s stored for user %s", exchange.id, user_id)
        return exchange

    async def get_recent_exchanges(self, user_id: int, limit: int) -> list[AIExchange]:
        """Get the newest ``limit`` exchanges of a user, newest first."""
        stmt = (
            select(AIExchange)
            .where(AIExchange.user_id == user_id)
            .order_by(AIExchange.created_at.desc(), AIExchange.id.desc())
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def history(self, user_id: int, limit: int | None = None) -> list[ChatTurn]:
        """Get the recent conversation as alternating user/assistant turns."""
        if limit is None:
            limit = settings.ai_history_limit
        if not 1 <= limit <= settings.ai_history_max_limit:
            raise ValidationError(
                f"limit must be between 1 and {settings.ai_history_max_limit}",
                details={"limit": limit},
            )

        exchanges = await self.get_recent_exchanges(user_id, limit)
        return reconstruct_turns(exchanges)

    async def clear(self, user_id: int) -> int:
        """Delete every exchange of the user. Returns how many were removed."""
        try:
            result = await self.db.execute(delete(AIExchange).where(AIExchange.user_id == user_id))
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception("Failed to clear AI history for user %s", user_id)
            raise StoreFailureError("Failed to clear AI history")

        logger.info("Cleared %s AI exchanges for user %s", result.rowcount, user_id)
        return result.rowcount
