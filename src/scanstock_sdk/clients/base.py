from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import BaseModel

from ..http_client import HttpClient

M = TypeVar("M", bound=BaseModel)


@dataclass
class BaseClient:
    http: HttpClient
    access_token: str | None = None

    def _auth_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _request(self, method: str, path: str, **kwargs):
        headers = kwargs.pop("headers", {})
        merged = {**self._auth_headers(), **headers}
        return self.http.request(method, path, headers=merged, **kwargs)


def coerce_model(value: Any, model_type: type[M]) -> M:
    if isinstance(value, model_type):
        return value
    return model_type.model_validate(value)


def expect_object(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"Expected {what} response to be a JSON object")
    return data


def expect_list(data: Any, what: str) -> list[Any]:
    # some list endpoints wrap rows as {"data": [...]}
    if isinstance(data, dict) and isinstance(data.get("data"), list):
        return data["data"]
    if not isinstance(data, list):
        raise ValueError(f"Expected {what} response to be a JSON array")
    return data
