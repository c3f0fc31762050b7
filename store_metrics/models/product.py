"""
Ürün veri modeli - WooCommerce ürünleri bu modele dönüşür.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Product:
    """WooCommerce ürünü. Maliyet fiyatı ayrı tutulur (CostPriceStore)."""
    product_id: int
    name: str
    price: float = 0.0
    permalink: str = ""
    image_url: Optional[str] = None
    sku: Optional[str] = None
    status: str = "publish"

    # Ham veri referansı
    raw_data: dict = field(default_factory=dict, repr=False)

    def profit_margin(self, cost_price: float) -> Optional[float]:
        """Kar marjı (%) - fiyat sıfırsa None."""
        if self.price == 0:
            return None
        return ((self.price - cost_price) / self.price) * 100
