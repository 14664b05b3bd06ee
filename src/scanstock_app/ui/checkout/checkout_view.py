from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Mapping

from scanstock_sdk import BusinessProfile, CustomerInfo, Sale

from scanstock_app.app.state import Route
from scanstock_app.services.business_service import BusinessService
from scanstock_app.services.cart_store import CartItem, CartStore
from scanstock_app.services.catalog import ProductCatalog
from scanstock_app.services.errors import ServiceError
from scanstock_app.services.receipt_service import Receipt, ReceiptService
from scanstock_app.services.sales_service import SalesService
from scanstock_app.ui.shared.outcomes import (
    ErrorPrompt,
    Navigation,
    Outcome,
    Prompt,
    PromptAction,
    ReceiptPrompt,
    Toast,
)

logger = logging.getLogger(__name__)

EMPTY_CART_MESSAGE = "Your cart is empty"
CHECKOUT_FAILED_MESSAGE = "Checkout failed"
RECEIPT_ERROR_MESSAGE = "The sale was recorded but the receipt could not be generated."


@dataclass(frozen=True)
class CompletedSale:
    """A submitted sale and the cart it was built from, held until the receipt step ends."""

    sale: Sale
    items: tuple[CartItem, ...]
    customer: CustomerInfo | None
    total: Decimal
    business: BusinessProfile | None = None


@dataclass
class CheckoutController:
    cart: CartStore
    sales: SalesService
    business: BusinessService
    receipts: ReceiptService
    catalog: ProductCatalog | None = None
    on_outcome: Callable[[Outcome], None] | None = None
    active_prompt: Prompt | None = None
    history: list[Outcome] = field(default_factory=list)
    is_submitting: bool = False
    last_sale: Sale | None = None
    pending: CompletedSale | None = None
    receipt: Receipt | None = None
    last_receipt: Receipt | None = None

    def handle_checkout(self) -> Outcome:
        if self.cart.is_empty:
            return self._emit(ErrorPrompt(title="Empty Cart", message=EMPTY_CART_MESSAGE))
        return self._emit(
            Navigation(
                Route.CHECKOUT,
                {"item_count": self.cart.get_item_count(), "total": str(self.cart.get_cart_total())},
            )
        )

    def confirm_checkout(
        self,
        customer_info: CustomerInfo | Mapping[str, Any] | None = None,
        *,
        payment_method: str | None = None,
        notes: str | None = None,
    ) -> Outcome | None:
        if self.is_submitting:
            logger.info("checkout_already_in_progress")
            return None
        if self.pending is not None:
            # the cart still holds goods that were already sold
            logger.info("checkout_awaiting_receipt", extra={"sale_id": self.pending.sale.id})
            return self._emit(self._receipt_prompt())
        if self.cart.is_empty:
            return self._emit(ErrorPrompt(title="Empty Cart", message=EMPTY_CART_MESSAGE))

        items = self.cart.items
        total = self.cart.get_cart_total()
        self.is_submitting = True
        try:
            customer = self._customer(customer_info)
            request = self.sales.build_request(
                items, total, customer, payment_method=payment_method, notes=notes
            )
            sale = self.sales.submit_sale(request)
        except ServiceError as exc:
            logger.warning("checkout_failed", extra={"error": exc.message, "status_code": exc.status_code})
            return self._emit(
                ErrorPrompt(title="Checkout Failed", message=exc.message or CHECKOUT_FAILED_MESSAGE, details=exc.details)
            )
        finally:
            self.is_submitting = False

        self.last_sale = sale
        logger.info("checkout_completed", extra={"sale_id": sale.id, "total": str(total)})
        if self.catalog is not None:
            self.catalog.refresh()

        try:
            business = self.business.load_profile()
        except ServiceError as exc:
            logger.warning("receipt_business_unavailable", extra={"error": exc.message})
            business = None

        snapshot = tuple(replace(item) for item in items)
        self.pending = CompletedSale(sale=sale, items=snapshot, customer=customer, total=total, business=business)
        self._generate_receipt()
        return self._emit(self._receipt_prompt())

    def download_receipt(self) -> Path | None:
        return self._finish_receipt(self.receipts.save, "Receipt saved")

    def share_receipt(self) -> Path | None:
        return self._finish_receipt(self.receipts.share, "Receipt shared")

    def respond(self, action: PromptAction, prompt: Prompt | None = None) -> Path | None:
        current = self.active_prompt
        if current is None or (prompt is not None and prompt is not current) or not current.allows(action):
            logger.info("prompt_response_ignored", extra={"action": action.value})
            return None
        if action is PromptAction.DOWNLOAD:
            return self.download_receipt()
        if action is PromptAction.SHARE:
            return self.share_receipt()
        if isinstance(current, ReceiptPrompt):
            logger.info("receipt_dismissed", extra={"sale_id": current.sale_id})
            self._close_sale()
            return None
        self.active_prompt = None
        if self.pending is not None:
            self._emit(self._receipt_prompt())
        return None

    def change_quantity(self, product_id: int, delta: int) -> int | None:
        item = self.cart.find(product_id)
        if item is None:
            return None
        quantity = max(1, item.quantity + delta)
        self.cart.update_cart_item_quantity(product_id, quantity)
        return quantity

    def remove_item(self, product_id: int) -> None:
        self.cart.remove_from_cart(product_id)

    def summary(self) -> dict[str, Any]:
        items = self.cart.items
        return {
            "count": len(items),
            "item_count": self.cart.get_item_count(),
            "total": self.cart.get_cart_total(),
            "rows": [
                {
                    "product_id": item.product_id,
                    "name": item.product.name,
                    "quantity": item.quantity,
                    "unit_price": item.unit_price,
                    "line_total": item.line_total,
                }
                for item in items
            ],
        }

    def _finish_receipt(self, action: Callable[[Receipt], Path], done_message: str) -> Path | None:
        if self.pending is None:
            logger.info("receipt_action_ignored", extra={"reason": "no_sale"})
            return None
        receipt = self.receipt or self._generate_receipt()
        if receipt is None:
            self._emit(ErrorPrompt(title="Receipt Error", message=RECEIPT_ERROR_MESSAGE))
            return None
        try:
            path = action(receipt)
        except ServiceError as exc:
            self._emit(ErrorPrompt(title="Receipt Error", message=exc.message, details=exc.details))
            return None
        self.last_receipt = receipt
        self._close_sale()
        self._emit(Toast(message=done_message))
        return path

    def _generate_receipt(self) -> Receipt | None:
        pending = self.pending
        try:
            self.receipt = self.receipts.generate(pending.items, pending.customer, pending.total, pending.business)
        except Exception:
            logger.exception("receipt_generation_failed", extra={"sale_id": pending.sale.id})
            self.receipt = None
        return self.receipt

    def _receipt_prompt(self) -> ReceiptPrompt:
        if self.receipt is None:
            return ReceiptPrompt(
                title="Sale Completed",
                message="The sale was recorded. The receipt is generated when you download or share it.",
                receipt_number=None,
                sale_id=self.pending.sale.id,
            )
        return ReceiptPrompt(
            title="Sale Completed",
            message="Download or share the receipt to finish.",
            receipt_number=self.receipt.receipt_number,
            sale_id=self.pending.sale.id,
        )

    def _close_sale(self) -> None:
        self.pending = None
        self.receipt = None
        self.active_prompt = None
        self.cart.clear_cart()

    @staticmethod
    def _customer(customer_info: CustomerInfo | Mapping[str, Any] | None) -> CustomerInfo | None:
        if customer_info is None or isinstance(customer_info, CustomerInfo):
            return customer_info
        try:
            return CustomerInfo.model_validate(dict(customer_info))
        except ValueError as exc:
            raise ServiceError(message="Invalid customer details", details=str(exc)) from exc

    def _emit(self, outcome: Outcome) -> Outcome:
        self.history.append(outcome)
        if not isinstance(outcome, (Toast, Navigation)):
            self.active_prompt = outcome
        if self.on_outcome is not None:
            self.on_outcome(outcome)
        return outcome
