"""
Sipariş ve ürün kaynağı arayüzü.

İstatistik servisi WooCommerce'e doğrudan değil bu arayüz üzerinden erişir;
canlı REST API de yerel JSON dışa aktarımı da aynı üç çağrıyı sağlar.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, Optional

from store_metrics.models.order import Order, OrderStatus
from store_metrics.models.product import Product


def month_bounds(year: int, month: int) -> Optional[tuple[datetime, datetime]]:
    """
    Ayın başlangıcı (dahil) ve bir sonraki ayın başlangıcı (hariç).
    Geçersiz yıl/ay için None döner; çağıran boş sonuç üretir.
    """
    try:
        start = datetime(int(year), int(month), 1)
        if start.month == 12:
            end = datetime(start.year + 1, 1, 1)
        else:
            end = datetime(start.year, start.month + 1, 1)
    except (TypeError, ValueError, OverflowError):
        return None
    return start, end


class OrderSource(ABC):
    """WooCommerce sipariş/ürün sorgu katmanı."""

    @abstractmethod
    def get_order_ids(self, statuses: Iterable[OrderStatus], year: int, month: int) -> list[int]:
        """Durumu verilenlerden biri olan ve o ay oluşturulan siparişlerin id'leri."""

    @abstractmethod
    def get_order(self, order_id: int) -> Optional[Order]:
        """Sipariş bulunamazsa None."""

    @abstractmethod
    def get_product(self, product_id: int) -> Optional[Product]:
        """Ürün bulunamazsa (silinmiş vb.) None."""

    def list_products(self) -> list[Product]:
        """Maliyet fiyatı düzenleyicisi için ürün listesi."""
        return []
