"""Pydantic schemas for client error reports."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ErrorLogEntry(BaseModel):
    """An error reported by the dashboard front end.

    Accepts both ``snake_case`` and ``camelCase`` keys; responses use
    camelCase.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    message: str = Field(
        ...,
        min_length=1,
        description="Error message as shown in the browser.",
    )
    stack: str | None = Field(
        default=None,
        description="JavaScript stack trace, if available.",
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the error happened; defaults to the time it was received.",
    )
    url: str | None = Field(
        default=None,
        description="Page URL where the error occurred.",
    )
    user_agent: str | None = Field(
        default=None,
        description="Browser user agent string.",
    )
    user_id: str | None = Field(
        default=None,
        description="Signed-in user identifier.",
    )
    account_id: str | None = Field(
        default=None,
        description="Google Ads customer account in view when the error occurred.",
    )
    context: dict[str, Any] | None = Field(
        default=None,
        description="Free-form component state or breadcrumbs.",
    )


class ErrorLogAck(BaseModel):
    success: bool = True


class ErrorLogListResponse(BaseModel):
    """Response of the admin read endpoint."""

    success: bool = True
    count: int = Field(..., description="Number of entries in this response.")
    errors: list[ErrorLogEntry] = Field(
        default_factory=list,
        description="Most recent entries first.",
    )
