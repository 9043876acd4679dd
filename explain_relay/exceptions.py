"""
Error taxonomy for the relay.

Request-scoped errors carry the HTTP status they map to; the app factory
registers a handler that renders them as ``{"error": ..., "details": ...}``.
"""
from typing import Any, Optional

from fastapi import status


class RelayError(Exception):
    """Base class for errors that are converted into JSON error responses."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details


class ValidationError(RelayError):
    """The client sent a request without usable code."""

    status_code = status.HTTP_400_BAD_REQUEST


class UpstreamError(RelayError):
    """The completion provider could not be reached or answered with an error."""

    def __init__(self, details: Optional[str] = None):
        super().__init__("Server error", details=details)


class EmptyCompletionError(RelayError):
    """The provider answered but produced no usable content."""

    def __init__(self):
        super().__init__("Failed to generate explanation")


class ConfigurationError(Exception):
    """Startup configuration is unusable; the service must not start serving."""
