from __future__ import annotations

from dataclasses import dataclass

from scanstock_sdk.exceptions import ApiError, StorageError


@dataclass(frozen=True)
class ServiceError(RuntimeError):
    message: str
    details: str | None = None
    status_code: int | None = None

    def __str__(self) -> str:
        return self.message


def _api_details(exc: ApiError) -> str:
    details = f"{exc.code} (HTTP {exc.status_code})"
    if exc.details:
        details = f"{details}: {exc.details}"
    return details


def normalize_error(exc: Exception, fallback: str) -> ServiceError:
    if isinstance(exc, ServiceError):
        return exc
    if isinstance(exc, ApiError):
        # blank server messages read as the caller's fallback
        message = (exc.message or "").strip() or fallback
        return ServiceError(message=message, details=_api_details(exc), status_code=exc.status_code)
    if isinstance(exc, StorageError):
        return ServiceError(message=fallback, details=str(exc))
    return ServiceError(message=str(exc) or fallback)
