"""AI chat schemas for request/response serialization."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field, field_validator

from .base import BaseSchema, clean_text


class TurnRole(str, Enum):
    """Speaker of a reconstructed chat turn."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatTurn(BaseSchema):
    """One role-tagged message unit in a reconstructed AI history."""

    role: TurnRole
    content: str


class AIChatRequest(BaseSchema):
    """Schema for sending a prompt to the AI assistant."""

    message: str = Field(..., min_length=1, max_length=10000, description="User prompt")

    @field_validator("message")
    @classmethod
    def validate_message(cls, v: str) -> str:
        """Validate and clean the prompt."""
        return clean_text(v, "Message")


class AIChatResponse(BaseSchema):
    """Schema for the assistant's reply to one prompt."""

    message: str
    timestamp: datetime


class AIHistoryResponse(BaseSchema):
    """Schema for the reconstructed AI conversation."""

    turns: list[ChatTurn] = Field(default_factory=list)
    exchange_count: int = 0
