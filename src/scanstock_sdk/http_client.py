from __future__ import annotations

import json
import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import ApiError, TransportError

logger = logging.getLogger(__name__)

JsonPayload = dict[str, Any] | list[Any] | None
UnauthorizedHook = Callable[[ApiError], None]

_CACHE_KEY_HEADERS = {"Authorization"}


@dataclass
class LastOperation:
    module: str
    operation: str
    duration_ms: int
    result: str


def _redact(headers: Mapping[str, str]) -> dict[str, str]:
    return {
        key: ("Bearer [REDACTED]" if key.lower() == "authorization" else value)
        for key, value in headers.items()
    }


@dataclass
class HttpClient:
    config: ClientConfig
    session: requests.Session | None = None
    on_unauthorized: UnauthorizedHook | None = None
    cache_ttl_seconds: float = 3.0
    enable_get_cache: bool = True
    _cache: dict[str, tuple[float, JsonPayload]] | None = None
    last_operation: LastOperation | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)
        if self._cache is None:
            self._cache = {}

    def _build_url(self, path: str) -> str:
        base = self.config.api_base_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        module: str = "unknown",
        operation: str = "unknown",
        use_get_cache: bool = True,
        invalidate_paths: list[str] | None = None,
    ) -> JsonPayload:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        request_headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if headers:
            request_headers.update(headers)

        normalized_method = method.upper()
        url = self._build_url(path)
        logger.debug(
            "http_request",
            extra={
                "method": normalized_method,
                "url": url,
                "headers": _redact(request_headers),
                "params": params,
            },
        )

        can_retry = normalized_method in {"GET", "HEAD"}
        attempts = self.config.retries + 1 if can_retry else 1
        should_use_get_cache = self.enable_get_cache and use_get_cache and normalized_method == "GET"
        cache_key = self._cache_key(url, request_headers, params) if should_use_get_cache else None
        if cache_key:
            cached = self._read_cache(cache_key)
            if cached is not None:
                self.last_operation = LastOperation(module, operation, 0, "success(cache)")
                return cached

        started = time.monotonic()
        response: requests.Response | None = None
        for attempt in range(attempts):
            try:
                response = self.session.request(
                    method=normalized_method,
                    url=url,
                    headers=request_headers,
                    json=json_body,
                    params=params,
                    timeout=(self.config.connect_timeout_seconds, self.config.read_timeout_seconds),
                    verify=self.config.verify_ssl,
                )
            except requests.RequestException as exc:
                if attempt >= attempts - 1:
                    self._record_operation(module, operation, started, "network_error")
                    logger.warning(
                        "http_transport_error",
                        extra={"method": normalized_method, "url": url, "error": type(exc).__name__},
                    )
                    raise TransportError.from_exception(exc) from exc
            else:
                if response.status_code < 500 or attempt >= attempts - 1:
                    break
            time.sleep(self.config.retry_backoff_seconds * (2**attempt))

        if response is None:
            raise RuntimeError("HTTP request finished without a response")

        logger.debug(
            "http_response",
            extra={"method": normalized_method, "url": url, "status_code": response.status_code},
        )
        if response.ok:
            self._record_operation(module, operation, started, "success")
            if normalized_method != "GET":
                self._invalidate_cache(invalidate_paths or [])
            if not response.content:
                return None
            parsed = response.json()
            if cache_key:
                self._write_cache(cache_key, parsed)
            return parsed

        try:
            payload = response.json()
        except ValueError:
            payload = {"message": response.text}
        self._record_operation(module, operation, started, "error")
        error = map_error(response.status_code, payload if isinstance(payload, dict) else {})
        logger.warning(
            "http_error_response",
            extra={"method": normalized_method, "url": url, "status_code": response.status_code, "code": error.code},
        )
        if response.status_code == 401 and self.on_unauthorized:
            self.on_unauthorized(error)
        raise error

    def clear_cache(self) -> None:
        if self._cache is not None:
            self._cache.clear()

    def invalidate(self, *paths: str) -> None:
        self._invalidate_cache(list(paths))

    def _record_operation(self, module: str, operation: str, started: float, result: str) -> None:
        self.last_operation = LastOperation(
            module=module,
            operation=operation,
            duration_ms=int((time.monotonic() - started) * 1000),
            result=result,
        )

    def _cache_key(self, url: str, headers: Mapping[str, str], params: dict[str, Any] | None) -> str:
        safe_headers = {key: value for key, value in headers.items() if key in _CACHE_KEY_HEADERS}
        return json.dumps({"url": url, "headers": safe_headers, "params": params or {}}, sort_keys=True)

    def _read_cache(self, key: str) -> JsonPayload:
        if self._cache is None:
            return None
        record = self._cache.get(key)
        if not record:
            return None
        expires_at, payload = record
        if time.monotonic() >= expires_at:
            self._cache.pop(key, None)
            return None
        return payload

    def _write_cache(self, key: str, payload: JsonPayload) -> None:
        if self._cache is None:
            self._cache = {}
        self._cache[key] = (time.monotonic() + self.cache_ttl_seconds, payload)

    def _invalidate_cache(self, paths: list[str]) -> None:
        if not self._cache or not paths:
            return
        prefixes = [self._build_url(path) for path in paths]
        doomed = [
            key for key in self._cache if any(json.loads(key)["url"].startswith(prefix) for prefix in prefixes)
        ]
        for key in doomed:
            self._cache.pop(key, None)
