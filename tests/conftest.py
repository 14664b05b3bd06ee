from __future__ import annotations

import pytest

from scanstock_sdk import DeviceStorage

from factories import BASE_URL

_SCANSTOCK_VARS = (
    "SCANSTOCK_ENV",
    "SCANSTOCK_API_BASE_URL_DEV",
    "SCANSTOCK_TIMEOUT_SECONDS",
    "SCANSTOCK_CONNECT_TIMEOUT_SECONDS",
    "SCANSTOCK_READ_TIMEOUT_SECONDS",
    "SCANSTOCK_RETRIES",
    "SCANSTOCK_MAX_CONNECTIONS",
    "SCANSTOCK_VERIFY_SSL",
    "SCANSTOCK_DUPLICATE_SCAN_WINDOW_MS",
    "SCANSTOCK_RESOLUTION_DELAY_MS",
    "SCANSTOCK_TOAST_DURATION_MS",
    "SCANSTOCK_RESCAN_DELAY_MS",
    "SCANSTOCK_LOW_STOCK_THRESHOLD",
    "SCANSTOCK_CURRENCY_SYMBOL",
    "SCANSTOCK_BUSINESS_NAME",
    "SCANSTOCK_RECEIPTS_DIR",
)


@pytest.fixture(autouse=True)
def scanstock_env(monkeypatch, tmp_path):
    for name in _SCANSTOCK_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SCANSTOCK_API_BASE_URL", BASE_URL)
    monkeypatch.setenv("SCANSTOCK_RETRY_BACKOFF_SECONDS", "0")
    monkeypatch.setenv("SCANSTOCK_DATA_DIR", str(tmp_path / "data"))
    return tmp_path


@pytest.fixture
def storage(tmp_path) -> DeviceStorage:
    return DeviceStorage(base_dir=tmp_path / "device")
