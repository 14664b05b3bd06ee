from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from scanstock_app.app.state import Route
from scanstock_app.services.errors import ServiceError
from scanstock_app.services.receipt_service import ReceiptService, SavedReceipt
from scanstock_app.ui.shared.outcomes import ErrorPrompt, Navigation, Outcome, Toast


@dataclass
class ReceiptsController:
    """Lists saved receipts and lets them be shared again or deleted."""

    receipts: ReceiptService
    on_outcome: Callable[[Outcome], None] | None = None
    active_prompt: ErrorPrompt | None = None
    history: list[Outcome] = field(default_factory=list)
    entries: list[SavedReceipt] = field(default_factory=list)

    def open(self) -> Outcome:
        try:
            self.entries = self.receipts.list_saved()
        except ServiceError as exc:
            self.entries = []
            return self._emit(ErrorPrompt(title="Receipts Unavailable", message=exc.message, details=exc.details))
        return self._emit(Navigation(Route.RECEIPTS, {"count": len(self.entries)}))

    def rows(self) -> list[dict[str, Any]]:
        return [
            {
                "name": entry.name,
                "receipt_number": entry.receipt_number,
                "saved_at": entry.saved_at.isoformat(),
                "size_bytes": entry.size_bytes,
            }
            for entry in self.entries
        ]

    def share(self, name: str) -> Path | None:
        try:
            path = self.receipts.share_saved(name)
        except ServiceError as exc:
            self._emit(ErrorPrompt(title="Share Failed", message=exc.message, details=exc.details))
            return None
        self._emit(Toast(message="Receipt shared"))
        return path

    def delete(self, name: str) -> bool:
        try:
            self.receipts.delete_saved(name)
        except ServiceError as exc:
            self._emit(ErrorPrompt(title="Delete Failed", message=exc.message, details=exc.details))
            return False
        self.entries = [entry for entry in self.entries if entry.name != Path(name).name]
        self._emit(Toast(message="Receipt deleted"))
        return True

    def dismiss(self) -> None:
        self.active_prompt = None

    def _emit(self, outcome: Outcome) -> Outcome:
        self.history.append(outcome)
        if isinstance(outcome, ErrorPrompt):
            self.active_prompt = outcome
        if self.on_outcome is not None:
            self.on_outcome(outcome)
        return outcome
