"""Application-level exception types.

Domain errors shared by services, adapters and routes so that logging and
API responses stay consistent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients."""

    hint: str
    field: str
    environment: str
    storage_key: str
    path: str
    preset: str
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
    """Raised when input/config validation fails."""


class AccessDeniedAppError(AppError):
    """Raised when a caller is not allowed to use an endpoint."""


class StorageAppError(AppError):
    """Raised when a persistence backend cannot be read or written."""
