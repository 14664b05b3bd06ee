from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_data_dir

from .exceptions import StorageError

logger = logging.getLogger(__name__)

CART_KEY = "cart"
AUTH_TOKEN_KEY = "userToken"


@dataclass
class DeviceStorage:
    """String key/value store kept in a single JSON document on the device.

    Every write rewrites the whole document through a temporary file so a
    crash mid-write never leaves a truncated store behind.
    """

    app_name: str = "scanstock"
    filename: str = "storage.json"
    base_dir: str | Path | None = None

    def _path(self) -> Path:
        base = Path(self.base_dir) if self.base_dir else Path(user_data_dir(self.app_name, "ScanStock"))
        try:
            base.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create storage directory {base}: {exc}") from exc
        return base / self.filename

    @property
    def directory(self) -> Path:
        return self._path().parent

    def get_item(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key not in data:
            return
        data.pop(key)
        self._write(data)

    def clear(self) -> None:
        self._write({})

    def _read(self) -> dict[str, str]:
        path = self._path()
        if not path.exists():
            return {}
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot read {path}: {exc}") from exc
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("device_storage_corrupt", extra={"path": str(path)})
            return {}
        if not isinstance(data, dict):
            logger.warning("device_storage_corrupt", extra={"path": str(path)})
            return {}
        return data

    def _write(self, data: dict[str, str]) -> None:
        path = self._path()
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as exc:
            raise StorageError(f"Cannot write {path}: {exc}") from exc
        try:
            path.chmod(0o600)
        except OSError:
            logger.debug("device_storage_chmod_failed", extra={"path": str(path)})
