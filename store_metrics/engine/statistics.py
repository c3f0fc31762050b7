"""
İstatistik servisi - panel ve CLI'nin tek giriş noktası.

Her çağrı siparişleri kaynaktan yeniden okur; sonuçlar saklanmaz.
"""
from __future__ import annotations

import logging
from typing import Optional

from store_metrics.config.settings import TOP_PRODUCTS_LIMIT
from store_metrics.engine.analyzer import aggregate_orders, rank_products
from store_metrics.engine.roi import calculate_roi
from store_metrics.models.order import QUALIFYING_STATUSES, Order
from store_metrics.models.store_summary import MonthlyAggregate, StoreSummary, TopProduct
from store_metrics.sources.base import OrderSource
from store_metrics.stores.cost_price import CostPriceStore
from store_metrics.stores.monthly_budget import BudgetCategory, MonthlyBudgetStore

logger = logging.getLogger(__name__)


class StatisticsService:
    """Seçili yıl/ay için satış, sipariş, en çok satan ve ROI verilerini toplar."""

    def __init__(
        self,
        source: OrderSource,
        cost_prices: CostPriceStore,
        budgets: MonthlyBudgetStore,
    ):
        self.source = source
        self.cost_prices = cost_prices
        self.budgets = budgets

    def _qualifying_orders(self, year: int, month: int) -> list[Order]:
        order_ids = self.source.get_order_ids(QUALIFYING_STATUSES, year, month)
        orders = []
        for order_id in order_ids:
            order = self.source.get_order(order_id)
            if order is None:
                logger.warning("Siparis #%s bulunamadi, atlaniyor", order_id)
                continue
            if not order.is_qualifying or not order.placed_in(year, month):
                continue
            orders.append(order)
        return orders

    def aggregate(self, year: int, month: int) -> MonthlyAggregate:
        orders = self._qualifying_orders(year, month)

        cost_cache: dict[int, float] = {}

        def cost_price_of(product_id: int) -> float:
            if product_id not in cost_cache:
                cost_cache[product_id] = self.cost_prices.get(product_id)
            return cost_cache[product_id]

        result = aggregate_orders(orders, cost_price_of, year, month)
        logger.debug(
            "%s-%s: %d siparis, satis=%.2f, maliyet=%.2f",
            year, month, result.total_deals, result.total_sales, result.total_cost_price,
        )
        return result

    def get_top_products(
        self,
        year: int,
        month: int,
        limit: int = TOP_PRODUCTS_LIMIT,
        aggregate: Optional[MonthlyAggregate] = None,
    ) -> list[TopProduct]:
        """En çok satan ürünler; sipariş yoksa boş liste."""
        aggregate = aggregate or self.aggregate(year, month)
        if not aggregate.product_sales:
            return []

        result = []
        for product_id, sales_count in rank_products(aggregate.product_sales, limit):
            product = self.source.get_product(product_id)
            if product is None:
                logger.warning("Urun #%s bulunamadi, listeden cikarildi", product_id)
                continue
            result.append(TopProduct(
                product_id=product_id,
                name=product.name,
                sales_count=sales_count,
                price=product.price,
                cost_price=self.cost_prices.get(product_id),
                permalink=product.permalink,
                image=product.image_url,
            ))
        return result

    def get_total_sales(self, year: int, month: int) -> float:
        return self.aggregate(year, month).total_sales

    def get_total_deals(self, year: int, month: int) -> int:
        return self.aggregate(year, month).total_deals

    def get_total_cost_price(self, year: int, month: int) -> float:
        return self.aggregate(year, month).total_cost_price

    def calculate_roi(
        self,
        year: int,
        month: int,
        aggregate: Optional[MonthlyAggregate] = None,
    ) -> str:
        aggregate = aggregate or self.aggregate(year, month)
        return calculate_roi(
            aggregate.total_sales,
            aggregate.total_cost_price,
            self.budgets.get(BudgetCategory.PR_BUDGET, year, month),
            self.budgets.get(BudgetCategory.ADDITIONAL_COSTS, year, month),
        )

    def build_summary(
        self,
        year: int,
        month: int,
        limit: int = TOP_PRODUCTS_LIMIT,
    ) -> StoreSummary:
        """Panel için tek geçişte tüm metrikler."""
        aggregate = self.aggregate(year, month)
        return StoreSummary(
            year=year,
            month=month,
            total_sales=aggregate.total_sales,
            total_deals=aggregate.total_deals,
            total_cost_price=aggregate.total_cost_price,
            pr_budget=self.budgets.get(BudgetCategory.PR_BUDGET, year, month),
            additional_costs=self.budgets.get(BudgetCategory.ADDITIONAL_COSTS, year, month),
            roi=self.calculate_roi(year, month, aggregate=aggregate),
            top_products=self.get_top_products(year, month, limit, aggregate=aggregate),
        )
