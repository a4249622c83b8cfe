"""
Provides the User model for the application's database schema.

Users are created at registration and never deleted by the messaging core.
Only the password hash may change after creation.

Attributes
----------
username : sqlalchemy.Column
    Unique display name shown next to every message the user sends.
email : sqlalchemy.Column
    Unique email address of the user.
password_hash : sqlalchemy.Column
    bcrypt hash of the user's password.

Relationships
-------------
sent_messages : sqlalchemy.orm.relationship
    Direct messages authored by the user.
received_messages : sqlalchemy.orm.relationship
    Direct messages addressed to the user.
group_memberships : sqlalchemy.orm.relationship
    Membership rows granting the user access to groups.
ai_exchanges : sqlalchemy.orm.relationship
    The user's AI prompt/response log.
"""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from .base import BaseModel


class User(BaseModel):
    """
    Represents a user entity in the application.

    :ivar username: Unique username of the user.
    :type username: str
    :ivar email: Email address of the user. It must be unique.
    :type email: str
    :ivar password_hash: Hashed password, never exposed through the API.
    :type password_hash: str
    """

    __tablename__ = "users"

    username = Column(String(100), unique=True, nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)

    # Relationships
    sent_messages = relationship(
        "Message", back_populates="sender", foreign_keys="Message.sender_id"
    )
    received_messages = relationship(
        "Message", back_populates="recipient", foreign_keys="Message.recipient_id"
    )
    group_memberships = relationship("GroupMembership", back_populates="user")
    ai_exchanges = relationship(
        "AIExchange", back_populates="user", cascade="all, delete-orphan"
    )
