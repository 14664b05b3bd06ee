from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable

from pydantic import ValidationError as ModelValidationError

from scanstock_sdk import CART_KEY, DeviceStorage, Product
from scanstock_sdk.exceptions import StorageError

logger = logging.getLogger(__name__)

CartListener = Callable[[list["CartItem"]], None]


@dataclass
class CartItem:
    product: Product
    quantity: int

    @property
    def product_id(self) -> int:
        return self.product.id

    @property
    def unit_price(self) -> Decimal:
        return Decimal(str(self.product.price))

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_payload(self) -> dict[str, Any]:
        return {"product": self.product.model_dump(mode="json", by_alias=True), "quantity": self.quantity}

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "CartItem":
        quantity = int(payload["quantity"])
        if quantity < 1:
            raise ValueError(f"cart quantity must be at least 1, got {quantity}")
        return cls(product=Product.model_validate(payload["product"]), quantity=quantity)


@dataclass
class CartStore:
    """Cart lines for the current device, mirrored to device storage.

    The in-memory list is authoritative for the session; every mutation
    rewrites the stored copy, and a failed write is logged without undoing
    the mutation.
    """

    storage: DeviceStorage
    _items: list[CartItem] = field(default_factory=list)
    _listeners: list[CartListener] = field(default_factory=list)

    def load(self) -> list[CartItem]:
        try:
            raw = self.storage.get_item(CART_KEY)
        except StorageError:
            logger.exception("cart_load_failed")
            self._items = []
            return self.items
        self._items = self._decode(raw) if raw else []
        logger.info("cart_loaded", extra={"line_count": len(self._items)})
        self._notify()
        return self.items

    @property
    def items(self) -> list[CartItem]:
        return list(self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    def find(self, product_id: int) -> CartItem | None:
        for item in self._items:
            if item.product_id == product_id:
                return item
        return None

    def add_to_cart(self, product: Product, quantity: int = 1) -> CartItem:
        if quantity <= 0:
            raise ValueError("quantity must be greater than 0")
        item = self.find(product.id)
        if item is None:
            item = CartItem(product=product, quantity=quantity)
            self._items.append(item)
        else:
            item.quantity += quantity
        logger.info("cart_item_added", extra={"product_id": product.id, "quantity": item.quantity})
        self._commit()
        return item

    def remove_from_cart(self, product_id: int) -> None:
        remaining = [item for item in self._items if item.product_id != product_id]
        if len(remaining) == len(self._items):
            return
        self._items = remaining
        logger.info("cart_item_removed", extra={"product_id": product_id})
        self._commit()

    def update_cart_item_quantity(self, product_id: int, quantity: int) -> None:
        if quantity <= 0:
            self.remove_from_cart(product_id)
            return
        item = self.find(product_id)
        if item is None:
            return
        item.quantity = quantity
        self._commit()

    def clear_cart(self) -> None:
        self._items = []
        try:
            self.storage.remove_item(CART_KEY)
        except StorageError:
            logger.exception("cart_persist_failed")
        logger.info("cart_cleared")
        self._notify()

    def get_cart_total(self) -> Decimal:
        return sum((item.line_total for item in self._items), Decimal("0"))

    def get_item_count(self) -> int:
        return sum(item.quantity for item in self._items)

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self) -> None:
        payload = json.dumps([item.to_payload() for item in self._items])
        try:
            self.storage.set_item(CART_KEY, payload)
        except StorageError:
            logger.exception("cart_persist_failed")
        self._notify()

    def _notify(self) -> None:
        snapshot = self.items
        for listener in list(self._listeners):
            listener(snapshot)

    @staticmethod
    def _decode(raw: str) -> list[CartItem]:
        try:
            rows = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("cart_payload_corrupt")
            return []
        if not isinstance(rows, list):
            logger.warning("cart_payload_corrupt")
            return []
        by_id: dict[int, CartItem] = {}
        for row in rows:
            try:
                item = CartItem.from_payload(row)
            except (KeyError, TypeError, ValueError, ModelValidationError):
                logger.warning("cart_line_dropped", extra={"row": row})
                continue
            # one line per product
            if item.product_id in by_id:
                by_id[item.product_id].quantity += item.quantity
            else:
                by_id[item.product_id] = item
        return list(by_id.values())
