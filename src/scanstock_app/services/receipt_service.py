from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Callable, Sequence

from jinja2 import Environment

from scanstock_sdk import BusinessProfile, CustomerInfo

from .cart_store import CartItem
from .errors import ServiceError

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")
SAVED_RECEIPT_PATTERN = re.compile(r"^receipt_(\d+)\.html$")

RECEIPT_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>Receipt {{ receipt_number }}</title>
<style>
body { font-family: Helvetica, Arial, sans-serif; max-width: 420px; margin: 0 auto; padding: 16px; }
h1 { font-size: 20px; text-align: center; margin-bottom: 4px; }
.business, .meta { text-align: center; color: #555; font-size: 12px; }
table { width: 100%; border-collapse: collapse; margin-top: 12px; }
td, th { padding: 4px 0; font-size: 13px; }
td.num, th.num { text-align: right; }
.totals td { border-top: 1px solid #ddd; }
.grand td { font-weight: bold; }
</style>
</head>
<body>
<h1>{{ business_name }}</h1>
<div class="business">
{% for line in address_lines %}<div>{{ line }}</div>{% endfor %}
{% if phone %}<div>Tel: {{ phone }}</div>{% endif %}
{% if website %}<div>{{ website }}</div>{% endif %}
{% if tax_id %}<div>Tax ID: {{ tax_id }}</div>{% endif %}
</div>
<div class="meta">
<div>Receipt #{{ receipt_number }}</div>
<div>{{ issued_at }}</div>
</div>
{% if customer %}
<div class="customer">
<h2>Customer</h2>
{% if customer.name %}<div>{{ customer.name }}</div>{% endif %}
{% if customer.email %}<div>{{ customer.email }}</div>{% endif %}
{% if customer.phone %}<div>{{ customer.phone }}</div>{% endif %}
</div>
{% endif %}
<table>
<thead><tr><th>Item</th><th class="num">Qty</th><th class="num">Price</th><th class="num">Total</th></tr></thead>
<tbody>
{% for line in lines %}
<tr><td>{{ line.name }}</td><td class="num">{{ line.quantity }}</td><td class="num">{{ line.price }}</td><td class="num">{{ line.total }}</td></tr>
{% endfor %}
</tbody>
<tbody class="totals">
<tr><td colspan="3">Subtotal</td><td class="num">{{ subtotal }}</td></tr>
<tr><td colspan="3">Tax</td><td class="num">{{ tax }}</td></tr>
<tr class="grand"><td colspan="3">Total</td><td class="num">{{ total }}</td></tr>
</tbody>
</table>
<p class="meta">Thank you for your purchase!</p>
</body>
</html>
"""

_environment = Environment(autoescape=True)


@dataclass(frozen=True)
class Receipt:
    receipt_number: str
    issued_at: datetime
    total: Decimal
    html: str

    @property
    def issued_ms(self) -> int:
        return int(self.issued_at.timestamp() * 1000)


def receipt_number_for(epoch_ms: int) -> str:
    return f"R-{str(epoch_ms)[-6:]}"


@dataclass(frozen=True)
class SavedReceipt:
    path: Path
    issued_ms: int
    size_bytes: int

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def receipt_number(self) -> str:
        return receipt_number_for(self.issued_ms)

    @property
    def saved_at(self) -> datetime:
        seconds, millis = divmod(self.issued_ms, 1000)
        return datetime.fromtimestamp(seconds, tz=timezone.utc) + timedelta(milliseconds=millis)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ReceiptService:
    receipts_dir: Path
    currency_symbol: str = "$"
    fallback_business_name: str = "ScanStock Pro"
    share_hook: Callable[[Path], None] | None = None
    clock: Callable[[], datetime] = _utcnow

    def generate(
        self,
        items: Sequence[CartItem],
        customer_info: CustomerInfo | None,
        total: Decimal,
        business: BusinessProfile | None,
    ) -> Receipt:
        if not items:
            raise ServiceError(message="Cannot generate a receipt without items")
        issued_at = self.clock()
        number = receipt_number_for(int(issued_at.timestamp() * 1000))
        subtotal = sum((item.line_total for item in items), Decimal("0"))
        customer = customer_info if customer_info is not None and not customer_info.is_empty else None
        html = _environment.from_string(RECEIPT_TEMPLATE).render(
            receipt_number=number,
            issued_at=issued_at.strftime("%Y-%m-%d %H:%M"),
            business_name=(business.name if business and business.name else self.fallback_business_name),
            address_lines=business.address_lines() if business else [],
            phone=business.phone_number if business else None,
            website=business.website if business else None,
            tax_id=business.tax_id if business else None,
            customer=customer,
            lines=[
                {
                    "name": item.product.name,
                    "quantity": item.quantity,
                    "price": self.format_money(item.unit_price),
                    "total": self.format_money(item.line_total),
                }
                for item in items
            ],
            subtotal=self.format_money(subtotal),
            tax=self.format_money(Decimal("0")),
            total=self.format_money(total),
        )
        return Receipt(receipt_number=number, issued_at=issued_at, total=total, html=html)

    def save(self, receipt: Receipt) -> Path:
        path = self.receipts_dir / f"receipt_{receipt.issued_ms}.html"
        try:
            self.receipts_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(receipt.html, encoding="utf-8")
        except OSError as exc:
            logger.error("receipt_save_failed", extra={"path": str(path), "error": str(exc)})
            raise ServiceError(message="Failed to save receipt", details=str(exc)) from exc
        logger.info("receipt_saved", extra={"path": str(path), "receipt_number": receipt.receipt_number})
        return path

    def share(self, receipt: Receipt) -> Path:
        if self.share_hook is None:
            raise ServiceError(message="Sharing is not available on this device")
        path = self.save(receipt)
        self._share_path(path, receipt.receipt_number)
        return path

    def list_saved(self) -> list[SavedReceipt]:
        """Saved receipts in ``receipts_dir``, newest first."""
        if not self.receipts_dir.exists():
            return []
        saved = []
        try:
            for path in self.receipts_dir.iterdir():
                entry = self._saved_entry(path)
                if entry is not None:
                    saved.append(entry)
        except OSError as exc:
            logger.error("receipt_list_failed", extra={"path": str(self.receipts_dir), "error": str(exc)})
            raise ServiceError(message="Failed to load receipts", details=str(exc)) from exc
        saved.sort(key=lambda entry: entry.issued_ms, reverse=True)
        return saved

    def share_saved(self, name: str | Path) -> Path:
        entry = self._find_saved(name)
        if self.share_hook is None:
            raise ServiceError(message="Sharing is not available on this device")
        self._share_path(entry.path, entry.receipt_number)
        return entry.path

    def delete_saved(self, name: str | Path) -> None:
        entry = self._find_saved(name)
        try:
            entry.path.unlink()
        except OSError as exc:
            logger.error("receipt_delete_failed", extra={"path": str(entry.path), "error": str(exc)})
            raise ServiceError(message="Failed to delete receipt", details=str(exc)) from exc
        logger.info("receipt_deleted", extra={"path": str(entry.path), "receipt_number": entry.receipt_number})

    def _find_saved(self, name: str | Path) -> SavedReceipt:
        # only bare file names inside receipts_dir are addressable
        entry = self._saved_entry(self.receipts_dir / Path(name).name)
        if entry is None:
            raise ServiceError(message="Receipt not found", details=str(name))
        return entry

    @staticmethod
    def _saved_entry(path: Path) -> SavedReceipt | None:
        match = SAVED_RECEIPT_PATTERN.match(path.name)
        if match is None or not path.is_file():
            return None
        return SavedReceipt(path=path, issued_ms=int(match.group(1)), size_bytes=path.stat().st_size)

    def _share_path(self, path: Path, receipt_number: str) -> None:
        try:
            self.share_hook(path)
        except Exception as exc:
            logger.error("receipt_share_failed", extra={"path": str(path), "error": str(exc)})
            raise ServiceError(message="Failed to share receipt", details=str(exc)) from exc
        logger.info("receipt_shared", extra={"path": str(path), "receipt_number": receipt_number})

    def format_money(self, value: Decimal) -> str:
        return f"{self.currency_symbol}{Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)}"
