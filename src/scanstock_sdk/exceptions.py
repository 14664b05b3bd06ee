from __future__ import annotations

from dataclasses import dataclass

NETWORK_ERROR_MESSAGE = "Network error, please check your connection"


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None
    status_code: int
    raw_payload: object | None = None

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.code}: {self.message}"


class AuthError(ApiError):
    """401: token missing, expired or rejected."""


class PermissionDeniedError(ApiError):
    """403 from the backend."""


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    """400/422 payload rejected by the backend."""


class ConflictError(ApiError):
    pass


class RateLimitError(ApiError):
    pass


class ServerError(ApiError):
    """5xx server-side failures."""


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""

    @classmethod
    def from_exception(cls, exc: BaseException) -> "TransportError":
        return cls(
            code="NETWORK_ERROR",
            message=NETWORK_ERROR_MESSAGE,
            details={"type": type(exc).__name__, "reason": str(exc)},
            status_code=0,
        )


class StorageError(RuntimeError):
    """Device-local storage could not be read or written."""
