from __future__ import annotations

import random
import time

# Symbologies the camera scanner is configured to decode.
SUPPORTED_SYMBOLOGIES: tuple[str, ...] = (
    "upc_e",
    "upc_a",
    "ean13",
    "ean8",
    "code128",
    "code39",
    "code93",
    "codabar",
    "itf14",
    "qr",
    "datamatrix",
    "pdf417",
)


def normalize_barcode(value: str | None) -> str | None:
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed or None


def is_supported_symbology(symbology: str | None) -> bool:
    if not symbology:
        return True
    return symbology.strip().lower().replace("-", "").replace("_", "") in {
        item.replace("_", "") for item in SUPPORTED_SYMBOLOGIES
    }


def generate_barcode(now_ms: int | None = None, rng: random.Random | None = None) -> str:
    """Fourteen digits: the last ten of the epoch milliseconds plus four random ones."""
    stamp = str(now_ms if now_ms is not None else int(time.time() * 1000))[-10:]
    suffix = (rng or random).randint(0, 9999)
    return f"{stamp}{suffix:04d}"
