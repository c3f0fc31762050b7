"""
Yerel WooCommerce dışa aktarımından (orders.json / products.json) okuyan kaynak.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from store_metrics.models.order import Order, OrderStatus
from store_metrics.models.product import Product
from store_metrics.parsers.woocommerce_json import parse_orders_file, parse_products_file
from store_metrics.sources.base import OrderSource, month_bounds

logger = logging.getLogger(__name__)

ORDERS_FILE = "orders.json"
PRODUCTS_FILE = "products.json"


class LocalOrderSource(OrderSource):
    """Bellekteki sipariş ve ürün listeleri üzerinde çalışır."""

    def __init__(self, orders: Iterable[Order] = (), products: Iterable[Product] = ()):
        self._orders = {o.order_id: o for o in orders}
        self._products = {p.product_id: p for p in products}

    @classmethod
    def from_directory(cls, data_dir: Path) -> "LocalOrderSource":
        """Klasördeki orders.json ve products.json dosyalarını yükler."""
        data_dir = Path(data_dir)
        orders: list[Order] = []
        products: list[Product] = []

        orders_path = data_dir / ORDERS_FILE
        if orders_path.exists():
            orders = parse_orders_file(orders_path)
        products_path = data_dir / PRODUCTS_FILE
        if products_path.exists():
            products = parse_products_file(products_path)

        logger.info(
            "Yerel veri yuklendi: %d siparis, %d urun (%s)",
            len(orders), len(products), data_dir,
        )
        return cls(orders, products)

    @staticmethod
    def has_data(data_dir: Path) -> bool:
        return (Path(data_dir) / ORDERS_FILE).exists()

    def get_order_ids(self, statuses: Iterable[OrderStatus], year: int, month: int) -> list[int]:
        bounds = month_bounds(year, month)
        if bounds is None:
            return []
        start, end = bounds
        wanted = set(statuses)
        return [
            o.order_id
            for o in sorted(self._orders.values(), key=lambda o: o.date_created)
            if o.status in wanted and start <= o.date_created < end
        ]

    def get_order(self, order_id: int) -> Optional[Order]:
        return self._orders.get(order_id)

    def get_product(self, product_id: int) -> Optional[Product]:
        return self._products.get(product_id)

    def list_products(self) -> list[Product]:
        return sorted(self._products.values(), key=lambda p: p.name.lower())
