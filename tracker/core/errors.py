from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class TrackerError(Exception):
    """Base class for failures that map onto a client-facing response."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "internal_error"

    def __init__(self, message: str, *, details: Any | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ClientError(TrackerError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "bad_request"


class AuthenticationError(TrackerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthorized"


class NotFoundError(TrackerError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class ConflictError(TrackerError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"


class StorageError(TrackerError):
    code = "storage_error"


class ErrorEnvelope(JSONResponse):
    def __init__(
        self,
        *,
        status_code: int,
        code: str,
        message: str,
        details: Any | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        payload: dict[str, Any] = {"code": code, "message": message}
        if details is not None:
            payload["details"] = details
        super().__init__(payload, status_code=status_code, headers=headers)


async def tracker_error_handler(request: Request, exc: TrackerError):
    if exc.status_code >= 500:
        logger.error(
            "request.failed",
            exc_info=exc.__cause__ or exc,
            extra={"extra_data": {"path": request.url.path, "code": exc.code}},
        )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return ErrorEnvelope(
        status_code=exc.status_code,
        code=exc.code,
        message=exc.message,
        details=exc.details,
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    message = detail if isinstance(detail, str) else "Error"
    details = detail if isinstance(detail, dict) else None
    return ErrorEnvelope(
        status_code=exc.status_code,
        code="http_error",
        message=message,
        details=details,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Malformed bodies are client errors here, not 422s.
    return ErrorEnvelope(
        status_code=status.HTTP_400_BAD_REQUEST,
        code="validation_error",
        message="Malformed JSON sent",
        details={"errors": _plain_errors(exc.errors())},
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "request.crashed",
        exc_info=exc,
        extra={"extra_data": {"path": request.url.path}},
    )
    return ErrorEnvelope(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        code="internal_error",
        message="Internal server error",
    )


def _plain_errors(errors: Any) -> list[dict[str, Any]]:
    # ``ctx`` may hold the raw exception object, which is not JSON-serialisable.
    cleaned: list[dict[str, Any]] = []
    for error in errors:
        item = {key: value for key, value in dict(error).items() if key not in ("ctx", "url")}
        if "input" in item and isinstance(item["input"], bytes):
            item["input"] = item["input"].decode("utf-8", errors="replace")
        cleaned.append(item)
    return cleaned
