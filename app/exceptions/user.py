"""User and authentication exceptions."""

from .base import AuthenticationError, ConflictError, NotFoundError


class UserNotFoundError(NotFoundError):
    """Raised when a referenced user does not exist."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message=message, error_code="USER_NOT_FOUND")


class UserAlreadyExistsError(ConflictError):
    """Raised when the username or email is already registered."""

    def __init__(self, message: str = "User already exists"):
        super().__init__(message=message, error_code="USER_ALREADY_EXISTS")


class InvalidCredentialsError(AuthenticationError):
    """Raised on a failed login; does not reveal which credential was wrong."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message=message, error_code="INVALID_CREDENTIALS")
