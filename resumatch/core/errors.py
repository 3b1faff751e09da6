"""Application-level exception types.

The match service adapter raises these; the request controller turns them
into failed analysis states and the HTTP layer into JSON error bodies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict

# User-facing messages shown in place of a result.
MISSING_FIELDS_MESSAGE = "Both fields are required."
SERVICE_FALLBACK_MESSAGE = "Something went wrong."
TRANSPORT_FALLBACK_MESSAGE = "Server took too long to respond."
MALFORMED_RESPONSE_MESSAGE = "Match service returned a malformed response."
CANCELLED_MESSAGE = "Analysis was cancelled."


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients."""

    http_status: int
    field: str
    error_type: str
    timeout_seconds: float
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when input/config validation fails before any network call."""


class ServiceAppError(AppError):
    """Raised when the match service answered with a non-success status."""


class TransportAppError(AppError):
    """Raised when the match service could not be reached or answered garbage."""
