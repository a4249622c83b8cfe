"""AI assistant API controller with FastAPI endpoints."""

import logging

from fastapi import APIRouter, Body, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.dependencies import get_current_user, get_db, validate_token
from app.domains.ai.provider import CompletionProvider, get_completion_provider
from app.domains.ai.service import AIChatService
from app.schemas.ai import AIChatRequest, AIChatResponse, AIHistoryResponse
from app.schemas.base import ResponseSchema
from models import User

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/ai",
    tags=["ai"],
    dependencies=[Depends(validate_token)],  # Global token validation for all routes
)


@router.post("/chat", response_model=ResponseSchema)
async def chat_with_ai(
    _request: Request,
    chat_request: AIChatRequest = Body(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    provider: CompletionProvider = Depends(get_completion_provider),
):
    """Send a prompt to the AI assistant and get its reply."""
    exchange = await AIChatService(db, provider).chat(current_user.id, chat_request.message)

    return ResponseSchema(
        status="success",
        message="AI response generated",
        data=AIChatResponse(message=exchange.response, timestamp=exchange.created_at).model_dump(),
    )


@router.get("/history", response_model=ResponseSchema)
async def get_ai_history(
    _request: Request,
    limit: int = Query(
        settings.ai_history_limit,
        ge=1,
        le=settings.ai_history_max_limit,
        description="Number of most recent exchanges to include",
    ),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get the recent AI conversation, oldest turn first."""
    service = AIChatService(db)
    turns = await service.history(current_user.id, limit)

    return ResponseSchema(
        status="success",
        message="AI history retrieved successfully",
        data=AIHistoryResponse(turns=turns, exchange_count=len(turns) // 2).model_dump(),
    )


@router.delete("/history", response_model=ResponseSchema)
async def clear_ai_history(
    _request: Request,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete the current user's whole AI conversation."""
    deleted = await AIChatService(db).clear(current_user.id)

    return ResponseSchema(
        status="success",
        message="AI history cleared",
        data={"deleted": deleted},
    )
