"""Group chat schemas for request/response serialization."""

from datetime import datetime

from pydantic import Field, field_validator

from .base import BaseModelSchema, BaseSchema, clean_text


class GroupCreate(BaseSchema):
    """Schema for creating a new group."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate and clean the group name."""
        return clean_text(v, "Group name")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        """Trim the description and treat blank text as absent."""
        if v is None:
            return None
        v = v.strip()
        return v or None


class GroupResponse(BaseModelSchema):
    """Schema for group response."""

    name: str
    description: str | None = None
    created_by: int


class GroupSummaryResponse(GroupResponse):
    """Schema for a group in the caller's group list."""

    creator_username: str
    member_count: int


class AddMemberRequest(BaseSchema):
    """Schema for adding a user to a group."""

    user_id: int = Field(..., description="ID of the user to add")


class GroupMessageCreate(BaseSchema):
    """Schema for posting a group message."""

    content: str = Field(..., min_length=1, max_length=10000)

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Validate and clean the message content."""
        return clean_text(v, "Message content")


class GroupMessageResponse(BaseModelSchema):
    """Schema for a stored group message."""

    group_id: int
    sender_id: int
    content: str
    sender_username: str | None = None


class GroupMemberResponse(BaseSchema):
    """Schema for a group member."""

    id: int
    username: str
    email: str
    joined_at: datetime
