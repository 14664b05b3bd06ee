from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Route(str, Enum):
    PRODUCT_DETAIL = "product_detail"
    NEW_PRODUCT = "new_product"
    CHECKOUT = "checkout"
    RECEIPTS = "receipts"


class ScanMode(str, Enum):
    INVENTORY = "inventory"
    CHECKOUT = "checkout"

    def toggled(self) -> "ScanMode":
        return ScanMode.CHECKOUT if self is ScanMode.INVENTORY else ScanMode.INVENTORY


@dataclass
class ScanSession:
    """In-memory scanner state. Never persisted."""

    mode: ScanMode = ScanMode.INVENTORY
    last_scanned_barcode: str | None = None
    last_scanned_at_ms: int | None = None
    current_barcode: str | None = None
    current_product_id: int | None = None
    generation: int = 0

    def is_duplicate(self, barcode: str, now_ms: int, window_ms: int) -> bool:
        if self.last_scanned_barcode != barcode or self.last_scanned_at_ms is None:
            return False
        return now_ms - self.last_scanned_at_ms < window_ms

    def begin(self, barcode: str, now_ms: int) -> int:
        self.last_scanned_barcode = barcode
        self.last_scanned_at_ms = now_ms
        self.current_barcode = barcode
        self.generation += 1
        return self.generation

    def reset(self, product_id: int | None = None) -> None:
        """Clear the in-flight scan; any pending work for it becomes stale."""
        self.current_barcode = None
        self.current_product_id = product_id
        self.generation += 1

    def clear(self) -> None:
        self.reset()
        self.last_scanned_barcode = None
        self.last_scanned_at_ms = None
