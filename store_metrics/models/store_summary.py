"""
Aylık mağaza özet verileri - Dashboard ve raporlar için.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class MonthlyAggregate:
    """Bir ayın siparişlerinden türetilen ham toplamlar."""
    year: int
    month: int
    total_sales: float = 0.0
    total_deals: int = 0
    total_cost_price: float = 0.0
    product_sales: dict[int, int] = field(default_factory=dict)

    @property
    def total_items_sold(self) -> int:
        return sum(self.product_sales.values())

    @property
    def avg_order_value(self) -> float:
        if self.total_deals == 0:
            return 0.0
        return self.total_sales / self.total_deals


@dataclass
class TopProduct:
    """En çok satanlar tablosundaki tek satır."""
    product_id: int
    name: str
    sales_count: int
    price: float = 0.0
    cost_price: float = 0.0
    permalink: str = ""
    image: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "id": self.product_id,
            "name": self.name,
            "permalink": self.permalink,
            "image": self.image,
            "sales_count": self.sales_count,
            "price": self.price,
            "cost_price": self.cost_price,
        }


@dataclass
class StoreSummary:
    """Seçili ay için panelde gösterilen her şey."""
    year: int
    month: int
    total_sales: float = 0.0
    total_deals: int = 0
    total_cost_price: float = 0.0
    pr_budget: float = 0.0
    additional_costs: float = 0.0
    roi: str = "0%"
    top_products: list[TopProduct] = field(default_factory=list)

    @property
    def period_key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def investment(self) -> float:
        """PR bütçesi + toplam maliyet + ek giderler."""
        return self.pr_budget + self.total_cost_price + self.additional_costs
