"""
Tests for the Excel monthly report.
"""
from openpyxl import load_workbook

from store_metrics.models.store_summary import StoreSummary, TopProduct
from store_metrics.stores.monthly_budget import BudgetCategory
from store_metrics.writers.excel_report import generate_report


def _summary(top_products=None):
    return StoreSummary(
        year=2024,
        month=7,
        total_sales=100.0,
        total_deals=1,
        total_cost_price=20.0,
        roi="400.00%",
        top_products=top_products or [],
    )


class TestExcelReport:
    def test_sheets(self, tmp_path):
        path = generate_report(_summary(), {}, tmp_path / "out" / "report.xlsx")
        assert path.exists()
        wb = load_workbook(path)
        assert wb.sheetnames == ["OZET", "URUNLER", "BUTCE"]

    def test_summary_values(self, tmp_path):
        path = generate_report(_summary(), {}, tmp_path / "report.xlsx")
        ws = load_workbook(path)["OZET"]
        values = {ws.cell(row=r, column=1).value: ws.cell(row=r, column=2).value for r in range(5, 12)}
        assert values["Toplam Satış"] == 100.0
        assert values["Toplam Sipariş"] == 1
        assert values["Yatırım"] == 20.0
        assert values["ROI"] == "400.00%"

    def test_products_sheet(self, tmp_path):
        top = [
            TopProduct(product_id=1, name="P1", sales_count=2, price=60.0, cost_price=10.0,
                       permalink="https://shop.example.com/p1/"),
            TopProduct(product_id=2, name="P2", sales_count=1, price=50.0),
        ]
        path = generate_report(_summary(top), {}, tmp_path / "report.xlsx")
        ws = load_workbook(path)["URUNLER"]
        assert ws["B2"].value == "P1"
        assert ws["C2"].value == 2
        assert ws["E2"].value == 10.0
        assert ws["F2"].value == "https://shop.example.com/p1/"
        assert ws["B3"].value == "P2"

    def test_empty_products(self, tmp_path):
        path = generate_report(_summary(), {}, tmp_path / "report.xlsx")
        ws = load_workbook(path)["URUNLER"]
        assert ws["A2"].value == "Seçili dönemde ürün bulunamadı"

    def test_budget_sheet(self, tmp_path):
        budgets = {
            BudgetCategory.PR_BUDGET: {"2024-06": 10.0, "2024-07": 30.0},
            BudgetCategory.ADDITIONAL_COSTS: {"2024-07": 5.0},
        }
        path = generate_report(_summary(), budgets, tmp_path / "report.xlsx")
        ws = load_workbook(path)["BUTCE"]
        rows = [[c.value for c in row] for row in ws.iter_rows(min_row=2)]
        assert rows == [
            ["2024-06", 10.0, 0.0, 10.0],
            ["2024-07", 30.0, 5.0, 35.0],
            ["TOPLAM", 40.0, 5.0, 45.0],
        ]
