"""Errors raised by the DebtEase API client, and a classifier for UI messages."""

from dataclasses import dataclass

import httpx


class ApiError(Exception):
    """Request failed with a non-retryable or exhausted error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NetworkError(ApiError):
    pass


class AuthenticationError(ApiError):
    pass


class RateLimitError(ApiError):
    pass


class ServerError(ApiError):
    pass


@dataclass(frozen=True)
class ErrorClassification:
    kind: str  # "network" | "auth" | "validation" | "server" | "unknown"
    message: str
    can_retry: bool
    user_message: str


def classify_error(error: Exception) -> ErrorClassification:
    """Map an exception onto a kind and a message fit to show a user."""
    message = str(error)

    if isinstance(error, (NetworkError, httpx.TransportError)):
        return ErrorClassification(
            "network", message, True,
            "Network connection issue. Please check your internet and try again.",
        )
    if isinstance(error, AuthenticationError):
        return ErrorClassification(
            "auth", message, True,
            "Authentication issue. Please log in again.",
        )
    if isinstance(error, ValueError):
        return ErrorClassification("validation", message, False, message)
    if isinstance(error, (ServerError, RateLimitError)):
        return ErrorClassification(
            "server", message, True,
            "Server is temporarily unavailable. Please try again in a moment.",
        )
    return ErrorClassification(
        "unknown", message, True,
        "An unexpected error occurred. Please try again.",
    )
