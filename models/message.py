"""
Direct message model for one-to-one conversations.
"""

from sqlalchemy import Boolean, CheckConstraint, Column, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import relationship

from .base import BaseModel


class Message(BaseModel):
    """
    Represents a directed message from one user to another.

    Rows are append-only: ``is_read`` is the only mutable column and it only
    ever moves from false to true, set by the recipient. The sender may hard
    delete the row.
    """

    __tablename__ = "messages"
    __table_args__ = (
        CheckConstraint("sender_id <> recipient_id", name="ck_messages_not_self"),
        Index("idx_messages_pair_created", "sender_id", "recipient_id", "created_at"),
        Index("idx_messages_recipient_created", "recipient_id", "created_at"),
    )

    sender_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    recipient_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)

    # Relationships
    sender = relationship("User", back_populates="sent_messages", foreign_keys=[sender_id])
    recipient = relationship(
        "User", back_populates="received_messages", foreign_keys=[recipient_id]
    )
