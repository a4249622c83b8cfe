"""Direct message API controller with FastAPI endpoints."""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_current_user, get_db, validate_token
from app.domains.message.aggregator import ConversationAggregator
from app.domains.message.service import MessageService
from app.schemas.base import ResponseSchema
from app.schemas.message import (
    ConversationResponse,
    MessageCreate,
    MessageResponse,
    ThreadMessageResponse,
)
from models import User

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/messages",
    tags=["messages"],
    dependencies=[Depends(validate_token)],
)


@router.post("", response_model=ResponseSchema, status_code=201)
async def send_message(
    _request: Request,
    message_data: MessageCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Send a direct message to another user."""
    service = MessageService(db)
    message = await service.send_message(
        sender_id=current_user.id,
        recipient_id=message_data.recipient_id,
        content=message_data.content,
    )

    return ResponseSchema(
        status="success",
        message="Message sent successfully",
        data=MessageResponse.model_validate(message).model_dump(),
    )


@router.get("", response_model=ResponseSchema)
async def get_conversations(
    _request: Request,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get the latest message of every conversation, newest first."""
    conversations = await ConversationAggregator(db).list_conversations(current_user.id)

    return ResponseSchema(
        status="success",
        message="Conversations retrieved successfully",
        data={
            "conversations": [
                ConversationResponse(**asdict(c)).model_dump() for c in conversations
            ]
        },
    )


@router.get("/{user_id}", response_model=ResponseSchema)
async def get_thread(
    _request: Request,
    user_id: int = Path(..., description="The other participant"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get the full thread between the current user and another user."""
    messages = await MessageService(db).get_thread(current_user.id, user_id)

    return ResponseSchema(
        status="success",
        message="Messages retrieved successfully",
        data={"messages": [ThreadMessageResponse(**m).model_dump() for m in messages]},
    )


@router.patch("/{message_id}/read", response_model=ResponseSchema)
async def mark_message_read(
    _request: Request,
    message_id: int = Path(..., description="Message ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Mark a received message as read."""
    message = await MessageService(db).mark_read(message_id, current_user.id)

    return ResponseSchema(
        status="success",
        message="Message marked as read",
        data=MessageResponse.model_validate(message).model_dump(),
    )


@router.delete("/{message_id}", response_model=ResponseSchema)
async def delete_message(
    _request: Request,
    message_id: int = Path(..., description="Message ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a message sent by the current user."""
    await MessageService(db).delete_message(message_id, current_user.id)

    return ResponseSchema(
        status="success",
        message="Message deleted successfully",
        data={"id": message_id},
    )
