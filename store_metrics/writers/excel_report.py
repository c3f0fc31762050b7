"""
Excel aylık mağaza raporu yazıcı.
3 sayfa: OZET, URUNLER, BUTCE
"""
from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Iterable, Mapping, Optional

from openpyxl import Workbook
from openpyxl.chart import BarChart, Reference
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from store_metrics.admin.fields import BUDGET_LABELS, month_label
from store_metrics.config.settings import CURRENCIES, DEFAULT_CURRENCY, REPORT_DATE_FORMAT
from store_metrics.models.store_summary import StoreSummary
from store_metrics.stores.monthly_budget import BudgetCategory


def _solid(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


def _font(size: int = 10, bold: bool = False, color: Optional[str] = None) -> Font:
    return Font(name="Calibri", size=size, bold=bold, color=color)


# ── Stil Sabitleri ────────────────────────────────────────
BRAND_COLOR = "2E86AB"
HEADER_STYLE = {
    "font": _font(11, bold=True, color="FFFFFF"),
    "fill": _solid(BRAND_COLOR),
    "alignment": Alignment(horizontal="center", vertical="center"),
}
DATA_STYLE = {
    "font": _font(),
    "alignment": Alignment(vertical="center"),
}
TOTAL_STYLE = {
    "font": _font(bold=True),
    "fill": _solid("E0E0E0"),
}
GRID_SIDE = Side(style="thin", color="CCCCCC")
GRID_BORDER = Border(left=GRID_SIDE, right=GRID_SIDE, top=GRID_SIDE, bottom=GRID_SIDE)
MONEY_FORMAT = f'#,##0.00 "{CURRENCIES.get(DEFAULT_CURRENCY, "$")}"'

# OZET sayfasındaki metrik satırlarının arka planı
METRIC_FILLS = {
    "sales": _solid("E8F5E9"),
    "deals": _solid("E3F2FD"),
    "cost": _solid("FFF3E0"),
    "budget": _solid("F3E5F5"),
    "investment": _solid("FFEBEE"),
}


def _style_row(ws, row: int, columns: int, style: Mapping) -> None:
    """1..columns arasındaki hücrelere stil ve çerçeve uygular."""
    for col in range(1, columns + 1):
        cell = ws.cell(row=row, column=col)
        cell.border = GRID_BORDER
        for attr, value in style.items():
            setattr(cell, attr, value)


def _write_row(ws, row: int, values: Iterable, style: Mapping, money_cols: Iterable[int] = ()) -> None:
    values = list(values)
    for col, value in enumerate(values, 1):
        ws.cell(row=row, column=col, value=value)
    for col in money_cols:
        ws.cell(row=row, column=col).number_format = MONEY_FORMAT
    _style_row(ws, row, len(values), style)


def _fit_columns(ws, narrowest: int = 10, widest: int = 40) -> None:
    """Her sütunu en uzun değerine göre genişletir."""
    for cells in ws.columns:
        longest = max((len(str(c.value)) + 2 for c in cells if c.value), default=0)
        letter = get_column_letter(cells[0].column)
        ws.column_dimensions[letter].width = min(max(longest, narrowest), widest)


def generate_report(
    summary: StoreSummary,
    budgets: Mapping[BudgetCategory, Mapping[str, float]],
    output_path: Path,
    store_name: str = "Mağaza",
) -> Path:
    """
    Seçili ayın Excel raporunu oluşturur.

    budgets: kategori → {"YYYY-MM": tutar} (MonthlyBudgetStore.entries)
    Returns: kaydedilen dosyanın yolu
    """
    wb = Workbook()

    _write_summary_sheet(wb, summary, store_name)
    _write_products_sheet(wb, summary)
    _write_budget_sheet(wb, budgets)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(output_path)
    return output_path


# ══════════════════════════════════════════════════════════
#  SAYFA 1: ÖZET
# ══════════════════════════════════════════════════════════
def _write_summary_sheet(wb, summary: StoreSummary, store_name: str):
    ws = wb.active
    ws.title = "OZET"
    ws.sheet_properties.tabColor = BRAND_COLOR

    period = f"{month_label(summary.month)} {summary.year}"
    for cell_range, text, font in (
        ("A1:C1", f"{store_name} - Aylık Rapor", _font(14, bold=True, color=BRAND_COLOR)),
        ("A2:C2", f"Rapor Tarihi: {date.today().strftime(REPORT_DATE_FORMAT)} | Dönem: {period}",
         _font(11, bold=True, color="444444")),
    ):
        ws.merge_cells(cell_range)
        top_left = ws[cell_range.split(":")[0]]
        top_left.value = text
        top_left.font = font
        top_left.alignment = Alignment(horizontal="center")

    _write_row(ws, 4, ["Metrik", "Değer"], HEADER_STYLE)

    metrics = [
        ("Toplam Satış", summary.total_sales, "sales", True),
        ("Toplam Sipariş", summary.total_deals, "deals", False),
        ("Toplam Maliyet", summary.total_cost_price, "cost", True),
        ("PR Bütçesi", summary.pr_budget, "budget", True),
        ("Ek Giderler", summary.additional_costs, "budget", True),
        ("Yatırım", summary.investment, "investment", True),
        ("ROI", summary.roi, "sales", False),
    ]
    for row, (label, value, fill, is_money) in enumerate(metrics, 5):
        _write_row(
            ws, row, [label, value],
            {"fill": METRIC_FILLS[fill]},
            money_cols=(2,) if is_money else (),
        )
        ws.cell(row=row, column=1).font = _font(bold=True)

    _fit_columns(ws)


# ══════════════════════════════════════════════════════════
#  SAYFA 2: EN ÇOK SATANLAR
# ══════════════════════════════════════════════════════════
def _write_products_sheet(wb, summary: StoreSummary):
    ws = wb.create_sheet("URUNLER")
    ws.sheet_properties.tabColor = "FF9800"

    _write_row(ws, 1, ["#", "Ürün", "Satış", "Fiyat", "Maliyet Fiyatı", "Bağlantı"], HEADER_STYLE)

    products = summary.top_products
    for rank, p in enumerate(products, 1):
        _write_row(
            ws, rank + 1,
            [rank, p.name[:50], p.sales_count, p.price, p.cost_price, p.permalink],
            DATA_STYLE,
            money_cols=(4, 5),
        )

    if products:
        chart = BarChart()
        chart.type = "col"
        chart.title = "En Çok Satan Ürünler"
        chart.y_axis.title = "Adet"
        chart.width, chart.height = 20, 10
        last_row = len(products) + 1
        chart.add_data(Reference(ws, min_col=3, min_row=1, max_row=last_row), titles_from_data=True)
        chart.set_categories(Reference(ws, min_col=2, min_row=2, max_row=last_row))
        ws.add_chart(chart, "H2")
    else:
        ws["A2"] = "Seçili dönemde ürün bulunamadı"

    ws.freeze_panes = "A2"
    _fit_columns(ws)


# ══════════════════════════════════════════════════════════
#  SAYFA 3: AYLIK BÜTÇELER
# ══════════════════════════════════════════════════════════
def _write_budget_sheet(wb, budgets: Mapping[BudgetCategory, Mapping[str, float]]):
    ws = wb.create_sheet("BUTCE")
    ws.sheet_properties.tabColor = "9C27B0"

    categories = list(BudgetCategory)
    columns = ["Ay"] + [BUDGET_LABELS[c] for c in categories] + ["Toplam"]
    money_cols = range(2, len(columns) + 1)
    _write_row(ws, 1, columns, HEADER_STYLE)

    months = sorted({key for c in categories for key in budgets.get(c, {})})
    row = 2
    for key in months:
        amounts = [budgets.get(c, {}).get(key, 0.0) for c in categories]
        _write_row(ws, row, [key, *amounts, sum(amounts)], DATA_STYLE, money_cols)
        row += 1

    totals = [sum(budgets.get(c, {}).values()) for c in categories]
    _write_row(ws, row, ["TOPLAM", *totals, sum(totals)], TOTAL_STYLE, money_cols)

    ws.freeze_panes = "A2"
    _fit_columns(ws)
