"""
Group message model.
"""

from sqlalchemy import Column, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import relationship

from .base import BaseModel


class GroupMessage(BaseModel):
    """
    Represents a message posted to a group.

    Group messages are immutable and cannot be deleted.
    """

    __tablename__ = "group_messages"
    __table_args__ = (Index("idx_group_messages_group_created", "group_id", "created_at"),)

    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False)
    sender_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)

    # Relationships
    group = relationship("Group", back_populates="messages")
    sender = relationship("User")
