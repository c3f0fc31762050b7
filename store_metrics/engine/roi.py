"""
Yatırım getirisi (ROI) hesabı.

    yatırım = PR bütçesi + toplam maliyet + ek giderler
    ROI     = (toplam satış - yatırım) / yatırım × 100
"""
from __future__ import annotations

from typing import Optional


def roi_ratio(
    total_sales: float,
    total_cost_price: float,
    pr_budget: float,
    additional_costs: float,
) -> Optional[float]:
    """ROI yüzdesi sayı olarak; yatırım sıfır veya negatifse None."""
    investment = pr_budget + total_cost_price + additional_costs
    if investment <= 0:
        return None
    return (total_sales - investment) / investment * 100


def calculate_roi(
    total_sales: float,
    total_cost_price: float,
    pr_budget: float,
    additional_costs: float,
) -> str:
    """ROI'yi '400.00%' biçiminde döner. Yatırım <= 0 ise '0%'."""
    roi = roi_ratio(total_sales, total_cost_price, pr_budget, additional_costs)
    if roi is None:
        return "0%"
    # -0.00 yerine 0.00
    roi = round(roi, 2) + 0.0
    return f"{roi:,.2f}%"
