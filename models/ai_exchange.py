"""
AI exchange model for storing AI conversation history.
"""

from sqlalchemy import Column, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import relationship

from .base import BaseModel


class AIExchange(BaseModel):
    """
    Represents one prompt/response round-trip with the AI assistant.
    """

    __tablename__ = "ai_chat_history"
    __table_args__ = (Index("idx_ai_chat_history_user_created", "user_id", "created_at"),)

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    message = Column(Text, nullable=False)
    response = Column(Text, nullable=False)

    # Relationships
    user = relationship("User", back_populates="ai_exchanges")
