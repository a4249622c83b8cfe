"""
Models package initialization.
"""

from .ai_exchange import AIExchange
from .base import Base, BaseModel
from .group import Group, GroupMembership
from .group_message import GroupMessage
from .message import Message
from .user import User

__all__ = [
    "Base",
    "BaseModel",
    "User",
    # Direct messaging
    "Message",
    # Group chat
    "Group",
    "GroupMembership",
    "GroupMessage",
    # AI assistant
    "AIExchange",
]
