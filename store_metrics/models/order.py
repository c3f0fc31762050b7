"""
Sipariş veri modeli - WooCommerce siparişleri bu modele dönüşür.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    ON_HOLD = "on-hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"
    FAILED = "failed"
    DRAFT = "checkout-draft"

    @classmethod
    def from_value(cls, value: str) -> "OrderStatus":
        """'wc-completed' ve 'completed' biçimlerinin ikisini de kabul eder."""
        cleaned = (value or "").strip().lower()
        if cleaned.startswith("wc-"):
            cleaned = cleaned[3:]
        try:
            return cls(cleaned)
        except ValueError:
            return cls.PENDING


# İstatistiğe dahil edilen durumlar (completed, processing, on-hold)
QUALIFYING_STATUSES = frozenset({
    OrderStatus.COMPLETED,
    OrderStatus.PROCESSING,
    OrderStatus.ON_HOLD,
})


@dataclass
class OrderItem:
    """Siparişteki tek bir ürün kalemi."""
    product_id: int
    quantity: int
    name: str = ""


@dataclass
class Order:
    """WooCommerce siparişi."""
    order_id: int
    status: OrderStatus
    total: float
    date_created: datetime
    items: list[OrderItem] = field(default_factory=list)
    currency: str = "USD"

    # Ham veri referansı
    raw_data: dict = field(default_factory=dict, repr=False)

    @property
    def is_qualifying(self) -> bool:
        return self.status in QUALIFYING_STATUSES

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def placed_in(self, year: int, month: int) -> bool:
        return self.date_created.year == year and self.date_created.month == month

