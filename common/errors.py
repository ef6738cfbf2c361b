"""Error types rendered into the JSON failure envelope."""

from __future__ import annotations

from typing import Any, Mapping

from werkzeug.exceptions import HTTPException


class AppError(Exception):
    """Base application error.

    Subclasses pick the HTTP status and the default error ``code``; callers
    may pass a more specific dotted code such as ``label_crop.file_missing``.
    """

    status_code = 400
    default_code = "error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: Mapping[str, Any] | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details or {}),
        }


class ValidationAppError(AppError):
    """Invalid upload or form input."""

    default_code = "validation_error"


class NotFoundAppError(AppError):
    status_code = 404
    default_code = "not_found"


class PayloadTooLargeAppError(AppError):
    """Request body above ``MAX_CONTENT_LENGTH``."""

    status_code = 413
    default_code = "payload_too_large"


class InternalAppError(AppError):
    """Server side failure; the message never carries a traceback."""

    status_code = 500
    default_code = "internal_error"


_HTTP_ERRORS: dict[int, tuple[type[AppError], str | None]] = {
    400: (ValidationAppError, None),
    404: (NotFoundAppError, "Resource not found"),
    413: (PayloadTooLargeAppError, "Uploaded payload is too large"),
}


def from_http_exception(error: HTTPException) -> AppError:
    """Translate a werkzeug HTTP error into the matching :class:`AppError`."""

    status = error.code or 500
    known = _HTTP_ERRORS.get(status)
    if known is None:
        return AppError(
            error.description or error.name,
            code="http_error",
            status_code=status,
        )
    error_type, message = known
    return error_type(message or error.description or error.name)


def ensure_app_error(error: Exception, *, fallback_code: str = "internal_error") -> AppError:
    if isinstance(error, AppError):
        return error
    if isinstance(error, HTTPException):
        return from_http_exception(error)
    return InternalAppError(str(error) or type(error).__name__, code=fallback_code)


__all__ = [
    "AppError",
    "InternalAppError",
    "NotFoundAppError",
    "PayloadTooLargeAppError",
    "ValidationAppError",
    "ensure_app_error",
    "from_http_exception",
]
