"""Group chat exceptions."""

from typing import Any

from .base import AppPermissionError


class ForbiddenNotMemberError(AppPermissionError):
    """Raised when the acting user is not a member of the group."""

    def __init__(
        self,
        message: str = "You are not a member of this group",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message=message, details=details, error_code="NOT_GROUP_MEMBER")
