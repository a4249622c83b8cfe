# ruff: noqa: D107
"""AI service exceptions."""

from typing import Any

from .base import BaseAppException


class AIServiceError(BaseAppException):
    """Base exception for AI provider failures."""

    def __init__(
        self,
        message: str = "AI service error occurred",
        error_code: str = "AI_SERVICE_ERROR",
        details: dict[str, Any] | None = None,
        status_code: int = 503,
    ):
        super().__init__(
            message=message, status_code=status_code, error_code=error_code, details=details
        )


class AIServiceUnavailableError(AIServiceError):
    """Exception raised when the AI provider cannot produce a response."""

    def __init__(
        self,
        message: str = "AI service is temporarily unavailable",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, "UPSTREAM_UNAVAILABLE", details)


class AIConfigurationError(AIServiceError):
    """Exception raised when AI service is not properly configured."""

    def __init__(
        self,
        message: str = "AI service is not properly configured",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, "AI_CONFIGURATION_ERROR", details)


def classify_provider_error(exc: Exception) -> str:
    """Classify a raw provider exception into a short, client-safe reason."""
    if isinstance(exc, TimeoutError):
        return "timeout"
    error_msg = str(exc).lower()
    if "api key" in error_msg or "permission" in error_msg or "unauthenticated" in error_msg:
        return "configuration_error"
    if "quota" in error_msg or "rate limit" in error_msg or "429" in error_msg:
        return "rate_limited"
    if "safety" in error_msg or "blocked" in error_msg:
        return "content_filtered"
    if "deadline" in error_msg or "timed out" in error_msg:
        return "timeout"
    return "service_unavailable"
