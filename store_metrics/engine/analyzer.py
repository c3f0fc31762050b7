"""
Sipariş verilerini analiz eder, aylık toplamları üretir.
"""
from __future__ import annotations

from collections import defaultdict
from typing import Callable, Iterable, Optional

from store_metrics.models.order import Order
from store_metrics.models.store_summary import MonthlyAggregate


def aggregate_orders(
    orders: Iterable[Order],
    cost_price_of: Callable[[int], float],
    year: int,
    month: int,
) -> MonthlyAggregate:
    """
    Siparişlerin toplamını, sayısını, ürün bazında satış adedini ve
    toplam maliyeti (maliyet fiyatı × adet) hesaplar.

    Filtreleme çağıranın işidir; burada gelen her sipariş bir "deal" sayılır.
    """
    product_sales: dict[int, int] = defaultdict(int)
    total_sales = 0.0
    total_deals = 0
    total_cost = 0.0

    for order in orders:
        total_sales += order.total
        total_deals += 1
        for item in order.items:
            product_sales[item.product_id] += item.quantity
            total_cost += cost_price_of(item.product_id) * item.quantity

    return MonthlyAggregate(
        year=year,
        month=month,
        total_sales=total_sales,
        total_deals=total_deals,
        total_cost_price=total_cost,
        product_sales=dict(product_sales),
    )


def rank_products(product_sales: dict[int, int], limit: Optional[int] = None) -> list[tuple[int, int]]:
    """Ürünleri satış adedine göre (çoktan aza) sıralar; eşitlikte id küçük olan önce."""
    ranked = sorted(product_sales.items(), key=lambda x: (-x[1], x[0]))
    if limit is not None:
        ranked = ranked[:max(limit, 0)]
    return ranked
