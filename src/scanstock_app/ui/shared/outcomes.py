from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from scanstock_app.app.state import Route


class PromptAction(str, Enum):
    CANCEL = "cancel"
    ADD_PRODUCT = "add_product"
    RESCAN = "rescan"
    ACKNOWLEDGE = "acknowledge"
    DISMISS = "dismiss"
    DOWNLOAD = "download"
    SHARE = "share"


@dataclass(frozen=True)
class ConfirmPrompt:
    title: str
    message: str
    actions: tuple[PromptAction, ...]
    barcode: str | None = None
    kind: str = field(default="confirm", init=False)

    def allows(self, action: PromptAction) -> bool:
        return action in self.actions


@dataclass(frozen=True)
class WarnPrompt:
    title: str
    message: str
    actions: tuple[PromptAction, ...] = (PromptAction.ACKNOWLEDGE,)
    product_id: int | None = None
    kind: str = field(default="warn", init=False)

    def allows(self, action: PromptAction) -> bool:
        return action in self.actions


@dataclass(frozen=True)
class ErrorPrompt:
    title: str
    message: str
    details: str | None = None
    actions: tuple[PromptAction, ...] = (PromptAction.DISMISS,)
    kind: str = field(default="error", init=False)

    def allows(self, action: PromptAction) -> bool:
        return action in self.actions


@dataclass(frozen=True)
class ReceiptPrompt:
    title: str
    message: str
    receipt_number: str | None
    sale_id: int
    actions: tuple[PromptAction, ...] = (PromptAction.DOWNLOAD, PromptAction.SHARE, PromptAction.DISMISS)
    kind: str = field(default="receipt", init=False)

    def allows(self, action: PromptAction) -> bool:
        return action in self.actions


@dataclass(frozen=True)
class Toast:
    message: str
    duration_ms: int = 3000
    level: str = "success"
    kind: str = field(default="toast", init=False)


@dataclass(frozen=True)
class Navigation:
    route: Route
    params: dict[str, Any] = field(default_factory=dict)
    kind: str = field(default="navigation", init=False)


Prompt = Union[ConfirmPrompt, WarnPrompt, ErrorPrompt, ReceiptPrompt]
Outcome = Union[ConfirmPrompt, WarnPrompt, ErrorPrompt, ReceiptPrompt, Toast, Navigation]


def describe(outcome: Outcome) -> dict[str, Any]:
    payload: dict[str, Any] = {"kind": outcome.kind}
    if isinstance(outcome, Navigation):
        payload.update(route=outcome.route.value, params=dict(outcome.params))
    elif isinstance(outcome, Toast):
        payload.update(message=outcome.message, level=outcome.level)
    else:
        payload.update(
            title=outcome.title,
            message=outcome.message,
            actions=[action.value for action in outcome.actions],
        )
    return payload
