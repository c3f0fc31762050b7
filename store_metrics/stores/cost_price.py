"""
Ürün maliyet fiyatı - ürün meta kaydında saklanır, okurken sayıya çevrilir.
"""
from __future__ import annotations

import math
import re
from typing import Any

from store_metrics.config.settings import COST_PRICE_META_KEY
from store_metrics.stores.json_store import JsonStore

# Baştaki sayısal kısım: "12,5" → "12", "9.50 TL" → "9.50"
LEADING_NUMBER = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def _parse_cost(value: Any) -> float:
    """Kaydedilmiş ham değeri maliyete çevirir. Boş/geçersiz/negatif/sonsuz → 0."""
    if value is None or value == "":
        return 0.0
    match = LEADING_NUMBER.match(str(value))
    if match is None:
        return 0.0
    cost = float(match.group(0))
    if not math.isfinite(cost) or cost < 0:
        return 0.0
    return cost


class CostPriceStore:
    """Ürün başına maliyet fiyatı okur/yazar."""

    def __init__(self, store: JsonStore, meta_key: str = COST_PRICE_META_KEY):
        self.store = store
        self.meta_key = meta_key

    def get(self, product_id: int) -> float:
        return _parse_cost(self.store.get_meta(product_id, self.meta_key))

    def set(self, product_id: int, value: Any) -> None:
        """Ham girdiyi (boşlukları temizlenmiş) olduğu gibi kaydeder."""
        raw = "" if value is None else str(value).strip()
        self.store.update_meta(product_id, self.meta_key, raw)
