"""
Aylık bütçe kayıtları (PR bütçesi ve ek giderler).

Her kategori "YYYY-MM" → tutar sözlüğü olarak bir ayar kaydında durur.
Yazarken geçersiz anahtarlar atılır, kalanlar mevcut kayıtla birleştirilir.
"""
from __future__ import annotations

import logging
import math
import re
from enum import Enum
from typing import Any, Mapping

from store_metrics.config.settings import (
    ADDITIONAL_COSTS_OPTION,
    MONTHLY_OPTION_SUFFIX,
    PR_BUDGET_OPTION,
)
from store_metrics.stores.json_store import JsonStore

logger = logging.getLogger(__name__)

MONTH_KEY_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


class BudgetCategory(str, Enum):
    PR_BUDGET = "pr_budget"
    ADDITIONAL_COSTS = "additional_costs"

    @property
    def option_name(self) -> str:
        base = PR_BUDGET_OPTION if self is BudgetCategory.PR_BUDGET else ADDITIONAL_COSTS_OPTION
        return base + MONTHLY_OPTION_SUFFIX


def month_key(year: int, month: int) -> str:
    """2024, 7 → '2024-07'"""
    return f"{int(year)}-{int(month):02d}"


def is_valid_month_key(key: Any) -> bool:
    return isinstance(key, str) and bool(MONTH_KEY_PATTERN.match(key))


def _parse_amount(value: Any) -> float:
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(amount) or amount < 0:
        return 0.0
    return amount


class MonthlyBudgetStore:
    """Kategori bazında aylık tutarları okur ve birleştirerek yazar."""

    def __init__(self, store: JsonStore):
        self.store = store

    def entries(self, category: BudgetCategory) -> dict[str, float]:
        """Kategorideki tüm geçerli kayıtlar, ay sırasına göre."""
        raw = self.store.get_option(BudgetCategory(category).option_name, {})
        if not isinstance(raw, dict):
            return {}
        return {
            key: _parse_amount(value)
            for key, value in sorted(raw.items())
            if is_valid_month_key(key)
        }

    def get(self, category: BudgetCategory, year: int, month: int) -> float:
        return self.entries(category).get(month_key(year, month), 0.0)

    def set_bulk(self, category: BudgetCategory, entries: Mapping[str, Any]) -> dict[str, float]:
        """
        Gelen kayıtları mevcut olanlarla birleştirir ve kaydeder.
        Biçimi "YYYY-MM" olmayan anahtarlar atlanır, uyarı loglanır.
        """
        category = BudgetCategory(category)
        merged = self.entries(category)
        if not isinstance(entries, Mapping):
            return merged

        for key, value in entries.items():
            if not is_valid_month_key(key):
                logger.warning("Gecersiz ay anahtari atlandi: %r (%s)", key, category.value)
                continue
            merged[key] = _parse_amount(value)

        self.store.update_option(category.option_name, merged)
        return merged
