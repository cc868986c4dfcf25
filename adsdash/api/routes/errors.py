from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, Query, Request
from pydantic import ValidationError

from adsdash.core.config import settings
from adsdash.core.errors import AccessDeniedAppError, ValidationAppError
from adsdash.core.rate_limit import rate_limit
from adsdash.schemas.error_log import ErrorLogAck, ErrorLogEntry, ErrorLogListResponse
from adsdash.services.error_log_service import ErrorLogBuffer, get_error_log_buffer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Errors"])


def require_error_log_access() -> None:
    """Allow error log reads only in the configured non-production environment.

    Raises:
        AccessDeniedAppError: Rendered as 403 so monitoring can tell a denied
            read from an empty buffer.
    """
    if settings.app_env.lower() == settings.app.error_log_read_env.lower():
        return

    logger.warning(
        "error_log.read_denied",
        extra={"environment": settings.app_env},
    )
    raise AccessDeniedAppError(
        code="error_log_forbidden",
        message="Error logs are only available in development",
        details={"environment": settings.app_env},
    )


@router.post(
    "/errors",
    response_model=ErrorLogAck,
    dependencies=[Depends(rate_limit("default"))],
)
async def report_error(
    request: Request,
    buffer: ErrorLogBuffer = Depends(get_error_log_buffer),
) -> ErrorLogAck:
    """Record an error reported by the browser.

    The body is parsed by hand so that any malformed payload, including
    invalid JSON, yields the same generic 400 envelope.

    Raises:
        ValidationAppError: If the body is not a valid error report.
    """
    try:
        payload = json.loads(await request.body())
        entry = ErrorLogEntry.model_validate(payload)
    except (ValueError, ValidationError) as exc:
        logger.info(
            "error_log.rejected",
            extra={"error_type": type(exc).__name__},
        )
        raise ValidationAppError(
            code="invalid_error_report",
            message="Failed to record error report",
        ) from exc

    buffer.record(entry)
    logger.error(
        "error_log.recorded",
        extra={
            "client_message": entry.message,
            "url": entry.url,
            "user_id": entry.user_id,
            "account_id": entry.account_id,
            "has_stack": entry.stack is not None,
            "buffered": len(buffer),
        },
    )
    return ErrorLogAck()


@router.get(
    "/errors",
    response_model=ErrorLogListResponse,
    dependencies=[Depends(require_error_log_access)],
)
async def list_errors(
    limit: int | None = Query(
        None,
        ge=1,
        description="Maximum entries to return (capped server-side at 100).",
    ),
    buffer: ErrorLogBuffer = Depends(get_error_log_buffer),
) -> ErrorLogListResponse:
    """Return the most recent client errors, newest first."""
    entries = buffer.list(limit or settings.app.error_log_default_list)
    return ErrorLogListResponse(count=len(entries), errors=entries)
