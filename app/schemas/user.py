"""User-related Pydantic schemas for request/response validation."""

from pydantic import EmailStr, Field, field_validator

from .base import BaseModelSchema, BaseSchema, clean_text


class UserRegisterRequest(BaseSchema):
    """Schema for user registration request."""

    username: str = Field(..., min_length=3, max_length=100, description="Unique username")
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=6, max_length=128, description="Plain-text password")

    @field_validator("username", mode="before")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Trim the username before length checks run."""
        return clean_text(v, "Username")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Store emails lower-cased so uniqueness is case-insensitive."""
        return str(v).lower()


class UserLoginRequest(BaseSchema):
    """Schema for user login request."""

    username: str = Field(..., min_length=1, description="Username")
    password: str = Field(..., min_length=1, description="Password")

    @field_validator("username", mode="before")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Trim the username the same way registration does."""
        return clean_text(v, "Username")


class UserResponse(BaseModelSchema):
    """Schema for user response data."""

    username: str
    email: str


class AuthResponse(BaseSchema):
    """Schema for authentication response."""

    token: str
    user: UserResponse
    message: str = "Authentication successful"
