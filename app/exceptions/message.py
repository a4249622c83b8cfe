"""Direct message exceptions."""

from .base import BaseAppException, NotFoundError


class SelfMessageError(BaseAppException):
    """Raised when a user addresses a message to themselves."""

    def __init__(self, message: str = "Cannot send message to yourself"):
        super().__init__(message=message, status_code=400, error_code="SELF_MESSAGE")


class RecipientNotFoundError(NotFoundError):
    """Raised when the recipient of a message does not exist."""

    def __init__(self, message: str = "Recipient not found"):
        super().__init__(message=message, error_code="RECIPIENT_NOT_FOUND")


class MessageNotFoundOrUnauthorizedError(NotFoundError):
    """Raised when a message is absent or the caller may not act on it.

    Both causes share one error so callers cannot discover messages
    addressed to other users.
    """

    def __init__(self, message: str = "Message not found or unauthorized"):
        super().__init__(message=message, error_code="MESSAGE_NOT_FOUND_OR_UNAUTHORIZED")
