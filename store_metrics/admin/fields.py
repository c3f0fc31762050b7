"""
Panel form alanlarının tanımları.

Alanlar çizim katmanından bağımsız sözlükler olarak üretilir; Streamlit
paneli bunları widget'a çevirir. "Bu alan zaten eklendi mi?" bilgisi her
sayfa çiziminde yeni oluşturulan RenderState nesnesinde tutulur.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from store_metrics.config.settings import COST_PRICE_META_KEY, YEARS_BACK
from store_metrics.stores.cost_price import CostPriceStore
from store_metrics.stores.monthly_budget import BudgetCategory, MonthlyBudgetStore, month_key

MONTH_NAMES = [
    "Ocak", "Şubat", "Mart", "Nisan", "Mayıs", "Haziran",
    "Temmuz", "Ağustos", "Eylül", "Ekim", "Kasım", "Aralık",
]

BUDGET_LABELS = {
    BudgetCategory.PR_BUDGET: "PR Bütçesi",
    BudgetCategory.ADDITIONAL_COSTS: "Ek Giderler",
}


@dataclass
class RenderState:
    """Tek bir sayfa çizimine ait durum."""
    added_fields: set[str] = field(default_factory=set)

    def claim(self, field_id: str) -> bool:
        """Alan bu çizimde ilk kez ekleniyorsa True."""
        if field_id in self.added_fields:
            return False
        self.added_fields.add(field_id)
        return True


def month_label(month: int) -> str:
    if 1 <= month <= 12:
        return MONTH_NAMES[month - 1]
    return str(month)


def year_options(today: Optional[date] = None, selected: Optional[int] = None) -> list[int]:
    """
    Dönem seçimi için son YEARS_BACK yıl + bu yıl, artan sırada.
    Aralık dışındaki seçili yıl da listeye eklenir.
    """
    current = (today or date.today()).year
    years = set(range(current - YEARS_BACK, current + 1))
    if selected is not None:
        years.add(selected)
    return sorted(years)


def cost_price_field(state: RenderState, product_id: int, store: CostPriceStore) -> Optional[dict]:
    """Maliyet fiyatı alanı; aynı çizimde ikinci kez istenirse None."""
    if not state.claim(COST_PRICE_META_KEY):
        return None
    return {
        "id": COST_PRICE_META_KEY,
        "label": "Maliyet Fiyatı",
        "help": "Bu ürünün maliyet fiyatını girin",
        "min_value": 0.0,
        "value": store.get(product_id),
    }


def budget_field(
    category: BudgetCategory,
    year: int,
    month: int,
    store: MonthlyBudgetStore,
) -> dict:
    """Seçili ay için PR bütçesi / ek gider alanı."""
    category = BudgetCategory(category)
    label = BUDGET_LABELS[category]
    return {
        "id": f"{category.option_name}[{month_key(year, month)}]",
        "key": month_key(year, month),
        "label": label,
        "help": f"{month_label(month)} {year} için {label}",
        "value": store.get(category, year, month),
    }
