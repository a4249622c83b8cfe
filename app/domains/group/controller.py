"""Group chat API controller with FastAPI endpoints."""

import logging

from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_current_user, get_db, validate_token
from app.domains.group.service import GroupService
from app.schemas.base import ResponseSchema
from app.schemas.group import (
    AddMemberRequest,
    GroupCreate,
    GroupMemberResponse,
    GroupMessageCreate,
    GroupMessageResponse,
    GroupResponse,
    GroupSummaryResponse,
)
from models import User

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/groups",
    tags=["groups"],
    dependencies=[Depends(validate_token)],
)


@router.get("", response_model=ResponseSchema)
async def get_groups(
    _request: Request,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get the groups the current user belongs to."""
    groups = await GroupService(db).list_user_groups(current_user.id)

    return ResponseSchema(
        status="success",
        message="Groups retrieved successfully",
        data={"groups": [GroupSummaryResponse(**g).model_dump() for g in groups]},
    )


@router.post("", response_model=ResponseSchema, status_code=201)
async def create_group(
    _request: Request,
    group_data: GroupCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a group with the current user as its first member."""
    group = await GroupService(db).create_group(
        name=group_data.name,
        creator_id=current_user.id,
        description=group_data.description,
    )

    return ResponseSchema(
        status="success",
        message="Group created successfully",
        data=GroupResponse.model_validate(group).model_dump(),
    )


@router.post("/{group_id}/members", response_model=ResponseSchema)
async def add_group_member(
    _request: Request,
    member_data: AddMemberRequest,
    group_id: int = Path(..., description="Group ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Add a user to a group the current user belongs to."""
    added = await GroupService(db).add_member(
        group_id=group_id, requester_id=current_user.id, user_id=member_data.user_id
    )

    return ResponseSchema(
        status="success",
        message="Member added successfully" if added else "User is already a member",
        data={"group_id": group_id, "user_id": member_data.user_id, "added": added},
    )


@router.get("/{group_id}/members", response_model=ResponseSchema)
async def get_group_members(
    _request: Request,
    group_id: int = Path(..., description="Group ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get the members of a group."""
    members = await GroupService(db).list_members(group_id, current_user.id)

    return ResponseSchema(
        status="success",
        message="Members retrieved successfully",
        data={"members": [GroupMemberResponse(**m).model_dump() for m in members]},
    )


@router.get("/{group_id}/messages", response_model=ResponseSchema)
async def get_group_messages(
    _request: Request,
    group_id: int = Path(..., description="Group ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get every message of a group, oldest first."""
    messages = await GroupService(db).list_messages(group_id, current_user.id)

    return ResponseSchema(
        status="success",
        message="Messages retrieved successfully",
        data={"messages": [GroupMessageResponse(**m).model_dump() for m in messages]},
    )


@router.post("/{group_id}/messages", response_model=ResponseSchema, status_code=201)
async def send_group_message(
    _request: Request,
    message_data: GroupMessageCreate,
    group_id: int = Path(..., description="Group ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Post a message to a group."""
    message = await GroupService(db).post_message(group_id, current_user.id, message_data.content)

    response = GroupMessageResponse.model_validate(message)
    response.sender_username = current_user.username
    return ResponseSchema(
        status="success",
        message="Message sent successfully",
        data=response.model_dump(),
    )
