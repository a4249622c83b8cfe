"""Direct message schemas for request/response serialization."""

from datetime import datetime

from pydantic import Field, field_validator

from .base import BaseModelSchema, BaseSchema, clean_text


class MessageCreate(BaseSchema):
    """Schema for sending a direct message."""

    recipient_id: int = Field(..., description="ID of the receiving user")
    content: str = Field(..., min_length=1, max_length=10000, description="Message content")

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Validate and clean the message content."""
        return clean_text(v, "Message content")


class MessageResponse(BaseModelSchema):
    """Schema for a stored direct message."""

    sender_id: int
    recipient_id: int
    content: str
    is_read: bool


class ThreadMessageResponse(MessageResponse):
    """Schema for a message inside a thread, with both display names."""

    sender_username: str
    recipient_username: str


class ConversationResponse(BaseSchema):
    """Schema for one entry of a user's conversation list."""

    other_user_id: int
    other_username: str
    last_message: str
    last_timestamp: datetime
    last_message_id: int
    last_sender_id: int
    is_read: bool
