from __future__ import annotations

import logging
from decimal import Decimal
from typing import Sequence

from scanstock_sdk import ApiSession, CustomerInfo, Sale, SaleCreateRequest, SaleItemCreate, SaleStatistics

from .cart_store import CartItem
from .errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)


class SalesService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    @staticmethod
    def build_request(
        items: Sequence[CartItem],
        total: Decimal,
        customer_info: CustomerInfo | None = None,
        *,
        payment_method: str | None = None,
        notes: str | None = None,
    ) -> SaleCreateRequest:
        if not items:
            raise ServiceError(message="Your cart is empty")
        customer = customer_info if customer_info is not None and not customer_info.is_empty else None
        return SaleCreateRequest(
            items=[
                SaleItemCreate(product_id=item.product_id, quantity=item.quantity, price=item.unit_price)
                for item in items
            ],
            total=total,
            customer_info=customer,
            payment_method=payment_method,
            notes=(notes or "").strip() or None,
        )

    def submit_sale(self, request: SaleCreateRequest) -> Sale:
        try:
            sale = self.session.sales_client().create_sale(request)
        except Exception as exc:
            logger.warning("sale_submit_failed", extra={"line_count": len(request.items)})
            raise normalize_error(exc, "Checkout failed") from exc
        logger.info("sale_submitted", extra={"sale_id": sale.id, "receipt_number": sale.receipt_number})
        return sale

    def list_sales(self) -> list[Sale]:
        try:
            return self.session.sales_client().list_sales()
        except Exception as exc:
            raise normalize_error(exc, "Failed to load sales") from exc

    def get_sale(self, sale_id: int) -> Sale:
        try:
            return self.session.sales_client().get_sale(sale_id)
        except Exception as exc:
            raise normalize_error(exc, "Failed to load sale") from exc

    def cancel_sale(self, sale_id: int) -> Sale:
        try:
            sale = self.session.sales_client().cancel_sale(sale_id)
        except Exception as exc:
            raise normalize_error(exc, "Failed to cancel sale") from exc
        logger.info("sale_cancelled", extra={"sale_id": sale_id})
        return sale

    def refund_sale(self, sale_id: int) -> Sale:
        try:
            sale = self.session.sales_client().refund_sale(sale_id)
        except Exception as exc:
            raise normalize_error(exc, "Failed to refund sale") from exc
        logger.info("sale_refunded", extra={"sale_id": sale_id})
        return sale

    def statistics(self, start: str | None = None, end: str | None = None) -> SaleStatistics:
        try:
            return self.session.sales_client().statistics(start, end)
        except Exception as exc:
            raise normalize_error(exc, "Failed to load sales statistics") from exc
