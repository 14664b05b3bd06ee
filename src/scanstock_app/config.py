from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from scanstock_sdk.config import ConfigError, check, read_int


class AppConfigError(ConfigError):
    """Raised when workflow configuration is out of range."""


@dataclass(frozen=True)
class AppConfig:
    duplicate_scan_window_ms: int = 3000
    resolution_delay_ms: int = 1000
    toast_duration_ms: int = 3000
    rescan_delay_ms: int = 1000
    low_stock_threshold: int = 5
    currency_symbol: str = "$"
    business_fallback_name: str = "ScanStock Pro"
    receipts_dir: str | None = None


def load_app_config(env_file: str | None = None) -> AppConfig:
    load_dotenv(env_file)

    values: dict[str, int] = {}
    for name, env_key, default in (
        ("duplicate_scan_window_ms", "SCANSTOCK_DUPLICATE_SCAN_WINDOW_MS", "3000"),
        ("resolution_delay_ms", "SCANSTOCK_RESOLUTION_DELAY_MS", "1000"),
        ("toast_duration_ms", "SCANSTOCK_TOAST_DURATION_MS", "3000"),
        ("rescan_delay_ms", "SCANSTOCK_RESCAN_DELAY_MS", "1000"),
    ):
        try:
            value = read_int(env_key, default)
            check(value >= 0, f"Invalid {env_key}: expected >= 0, got {value}")
        except ConfigError as exc:
            raise AppConfigError(str(exc)) from exc
        values[name] = value

    try:
        threshold = read_int("SCANSTOCK_LOW_STOCK_THRESHOLD", "5")
        check(threshold >= 0, f"Invalid SCANSTOCK_LOW_STOCK_THRESHOLD: expected >= 0, got {threshold}")
    except ConfigError as exc:
        raise AppConfigError(str(exc)) from exc

    receipts_dir = (os.getenv("SCANSTOCK_RECEIPTS_DIR") or "").strip() or None
    if receipts_dir:
        receipts_dir = str(Path(receipts_dir).expanduser())

    return AppConfig(
        **values,
        low_stock_threshold=threshold,
        currency_symbol=os.getenv("SCANSTOCK_CURRENCY_SYMBOL", "$"),
        business_fallback_name=os.getenv("SCANSTOCK_BUSINESS_NAME", "ScanStock Pro"),
        receipts_dir=receipts_dir,
    )
