from __future__ import annotations

from typing import Mapping

from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    ServerError,
    ValidationError,
)

DEFAULT_ERROR_MESSAGE = "An error occurred"


def _message_from(payload: Mapping[str, object]) -> str:
    message = payload.get("message")
    # NestJS-style validation errors carry a list of messages
    if isinstance(message, list):
        joined = "; ".join(str(part) for part in message if part)
        return joined or DEFAULT_ERROR_MESSAGE
    if message:
        return str(message)
    return DEFAULT_ERROR_MESSAGE


def map_error(status_code: int, payload: Mapping[str, object] | None) -> ApiError:
    payload = payload or {}
    code = str(payload.get("code") or payload.get("error") or "HTTP_ERROR")
    mapped: type[ApiError]
    if status_code == 401:
        mapped = AuthError
    elif status_code == 403:
        mapped = PermissionDeniedError
    elif status_code == 404:
        mapped = NotFoundError
    elif status_code in {400, 422}:
        mapped = ValidationError
    elif status_code == 409:
        mapped = ConflictError
    elif status_code == 429:
        mapped = RateLimitError
    elif status_code >= 500:
        mapped = ServerError
    else:
        mapped = ApiError
    return mapped(
        code=code,
        message=_message_from(payload),
        details=payload.get("details"),
        status_code=status_code,
        raw_payload=dict(payload),
    )
