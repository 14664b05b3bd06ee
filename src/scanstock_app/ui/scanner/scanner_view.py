from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from scanstock_sdk import Product
from scanstock_sdk.barcodes import is_supported_symbology, normalize_barcode

from scanstock_app.app.scheduler import Scheduler, TaskGroup
from scanstock_app.app.state import Route, ScanMode, ScanSession
from scanstock_app.config import AppConfig
from scanstock_app.services.barcode_resolution import ResolverChain
from scanstock_app.services.cart_store import CartStore
from scanstock_app.services.catalog import ProductCatalog
from scanstock_app.ui.shared.notification_center import NotificationCenter
from scanstock_app.ui.shared.outcomes import (
    ConfirmPrompt,
    Navigation,
    Outcome,
    Prompt,
    PromptAction,
    Toast,
    WarnPrompt,
)

logger = logging.getLogger(__name__)

RESOLVE_TASK = "resolve"
RESCAN_TASK = "rescan"


@dataclass
class ScannerController:
    """Turns scan events into navigation, prompts and cart additions.

    Resolution runs in a task scheduled ``resolution_delay_ms`` after the
    scan. Every scan, reset and mode switch bumps the session generation,
    so a task or prompt answer belonging to an older scan does nothing.
    Scans are ignored while a prompt is waiting for an answer.
    """

    config: AppConfig
    scheduler: Scheduler
    cart: CartStore
    catalog: ProductCatalog
    chain: ResolverChain
    session: ScanSession = field(default_factory=ScanSession)
    notifications: NotificationCenter | None = None
    feedback: Callable[[], None] | None = None
    on_outcome: Callable[[Outcome], None] | None = None
    active_prompt: Prompt | None = None
    history: list[Outcome] = field(default_factory=list)
    resolution_attempts: int = 0
    _tasks: TaskGroup | None = None

    def __post_init__(self) -> None:
        self._tasks = TaskGroup(self.scheduler)
        if self.notifications is None:
            self.notifications = NotificationCenter(self.scheduler)

    @property
    def mode(self) -> ScanMode:
        return self.session.mode

    @property
    def is_resolving(self) -> bool:
        return any(task.label == RESOLVE_TASK for task in self._tasks.active)

    def handle_scan(self, raw_barcode: str | None, symbology: str | None = None) -> bool:
        barcode = normalize_barcode(raw_barcode)
        if barcode is None:
            logger.debug("scan_ignored", extra={"reason": "empty"})
            return False
        if not is_supported_symbology(symbology):
            logger.info("scan_ignored", extra={"reason": "symbology", "symbology": symbology})
            return False
        now = self.scheduler.now_ms()
        if self.session.is_duplicate(barcode, now, self.config.duplicate_scan_window_ms):
            logger.info("scan_duplicate_suppressed", extra={"barcode": barcode})
            return False
        if self.active_prompt is not None:
            logger.info("scan_ignored", extra={"reason": "prompt_open", "barcode": barcode})
            return False

        self._tasks.cancel_all()
        generation = self.session.begin(barcode, now)
        logger.info("scan_accepted", extra={"barcode": barcode, "mode": self.mode.value})
        if self.feedback is not None:
            self.feedback()
        self.catalog.refresh()
        self._tasks.schedule(
            self.config.resolution_delay_ms,
            lambda: self._resolve(generation, barcode),
            label=RESOLVE_TASK,
        )
        return True

    def respond(self, action: PromptAction, prompt: Prompt | None = None) -> Outcome | None:
        current = self.active_prompt
        if current is None or (prompt is not None and prompt is not current) or not current.allows(action):
            logger.info("prompt_response_ignored", extra={"action": action.value})
            return None
        self.active_prompt = None
        if action is PromptAction.ADD_PRODUCT:
            barcode = getattr(current, "barcode", None)
            self.session.reset()
            return self._emit(Navigation(Route.NEW_PRODUCT, {"barcode": barcode}))
        self.session.reset()
        return None

    def rescan(self) -> None:
        self._tasks.cancel_all()
        self.active_prompt = None
        self.session.reset()

    def toggle_mode(self) -> ScanMode:
        return self.set_mode(self.mode.toggled())

    def set_mode(self, mode: ScanMode) -> ScanMode:
        self._tasks.cancel_all()
        self.active_prompt = None
        self.session.clear()
        self.session.mode = mode
        logger.info("scan_mode_changed", extra={"mode": mode.value})
        return mode

    def teardown(self) -> None:
        self._tasks.cancel_all()
        self.notifications.clear()
        self.active_prompt = None
        self.session.reset()

    def _resolve(self, generation: int, barcode: str) -> None:
        if generation != self.session.generation:
            logger.debug("scan_resolution_stale", extra={"barcode": barcode})
            return
        self.resolution_attempts += 1
        resolution = self.chain.resolve(barcode)
        if generation != self.session.generation:
            return
        product = resolution.product if resolution else None
        if self.mode is ScanMode.INVENTORY:
            self._handle_inventory(barcode, product)
        else:
            self._handle_checkout(generation, barcode, product)

    def _handle_inventory(self, barcode: str, product: Product | None) -> None:
        if product is None:
            self._emit(
                ConfirmPrompt(
                    title="Product Not Found",
                    message=f"No product found with barcode {barcode}. Would you like to add it?",
                    actions=(PromptAction.CANCEL, PromptAction.ADD_PRODUCT),
                    barcode=barcode,
                )
            )
            return
        self._emit(Navigation(Route.PRODUCT_DETAIL, {"product_id": product.id}))
        self.session.reset(product_id=product.id)

    def _handle_checkout(self, generation: int, barcode: str, product: Product | None) -> None:
        if product is None:
            self._emit(
                ConfirmPrompt(
                    title="Product Not Found",
                    message=f"No product found with barcode {barcode}.",
                    actions=(PromptAction.RESCAN, PromptAction.ADD_PRODUCT),
                    barcode=barcode,
                )
            )
            return
        if product.quantity <= 0:
            self._emit(
                WarnPrompt(
                    title="Out of Stock",
                    message=f"{product.name} is out of stock.",
                    product_id=product.id,
                )
            )
            return
        self.cart.add_to_cart(product, 1)
        self._emit(Toast(message=f"{product.name} added to cart", duration_ms=self.config.toast_duration_ms))
        self._tasks.schedule(
            self.config.rescan_delay_ms,
            lambda: self._finish_checkout_scan(generation, product.id),
            label=RESCAN_TASK,
        )

    def _finish_checkout_scan(self, generation: int, product_id: int) -> None:
        if generation == self.session.generation:
            self.session.reset(product_id=product_id)

    def _emit(self, outcome: Outcome) -> Outcome:
        self.history.append(outcome)
        if isinstance(outcome, Toast):
            self.notifications.push(outcome)
        elif not isinstance(outcome, Navigation):
            self.active_prompt = outcome
        if self.on_outcome is not None:
            self.on_outcome(outcome)
        return outcome
