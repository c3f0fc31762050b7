"""
store_metrics CLI - WooCommerce mağaza metrikleri.

Kullanım:
    python -m store_metrics sample                         → Örnek veri oluştur
    python -m store_metrics analyze --year 2025 --month 7  → Ayın metriklerini göster
    python -m store_metrics report --year 2025 --month 7   → Excel rapor oluştur
    python -m store_metrics budget set pr_budget 2025-07 250
    python -m store_metrics budget show
    python -m store_metrics cost-price set 101 9.50
    python -m store_metrics cost-price get 101
"""
from __future__ import annotations

import argparse
import logging
from datetime import date

from store_metrics.config.settings import (
    CURRENCIES,
    DEFAULT_CURRENCY,
    LOG_FORMAT,
    LOG_LEVEL,
    REPORTS_DIR,
    STORE_FILE,
    WOOCOMMERCE_DATA_DIR,
)
from store_metrics.exceptions import StoreMetricsError

logger = logging.getLogger("store_metrics")


def _build_service():
    from store_metrics.engine.statistics import StatisticsService
    from store_metrics.sources.factory import build_source
    from store_metrics.stores.cost_price import CostPriceStore
    from store_metrics.stores.json_store import JsonStore
    from store_metrics.stores.monthly_budget import MonthlyBudgetStore

    store = JsonStore(STORE_FILE)
    service = StatisticsService(
        build_source(),
        CostPriceStore(store),
        MonthlyBudgetStore(store),
    )
    return service


def _money(value: float) -> str:
    symbol = CURRENCIES.get(DEFAULT_CURRENCY, "$")
    return f"{symbol}{value:,.2f}"


def cmd_sample(args):
    """Örnek veri oluşturur."""
    from store_metrics.scripts.generate_sample import main as generate
    generate()


def cmd_analyze(args):
    """Seçili ayın metriklerini ekrana yazdırır."""
    from store_metrics.admin.fields import month_label

    service = _build_service()
    summary = service.build_summary(args.year, args.month)

    print(f"\n{'='*60}")
    print(f"  MAGAZA METRIKLERI - {month_label(summary.month)} {summary.year}")
    print(f"{'='*60}\n")

    print(f"  Toplam Satis:   {_money(summary.total_sales)}")
    print(f"  Toplam Siparis: {summary.total_deals}")
    print(f"  Toplam Maliyet: {_money(summary.total_cost_price)}")
    print(f"  PR Butcesi:     {_money(summary.pr_budget)}")
    print(f"  Ek Giderler:    {_money(summary.additional_costs)}")
    print(f"  ROI:            {summary.roi}")

    if summary.top_products:
        print(f"\n  En Cok Satanlar:")
        for i, p in enumerate(summary.top_products, 1):
            print(f"    {i}. {p.name[:40]:40s} {p.sales_count:3d} adet  {_money(p.price)}")
    else:
        print("\n  Secili donemde urun bulunamadi.")
    print()


def cmd_report(args):
    """Excel raporu oluşturur."""
    from store_metrics.stores.monthly_budget import BudgetCategory
    from store_metrics.writers.excel_report import generate_report

    service = _build_service()
    summary = service.build_summary(args.year, args.month)
    budgets = {c: service.budgets.entries(c) for c in BudgetCategory}

    output = args.output or REPORTS_DIR / f"store_metrics_{summary.period_key}.xlsx"
    path = generate_report(summary, budgets, output)
    print(f"  Rapor olusturuldu: {path}")


def cmd_budget(args):
    """Aylık bütçe kayıtlarını gösterir / günceller."""
    from store_metrics.stores.json_store import JsonStore
    from store_metrics.stores.monthly_budget import BudgetCategory, MonthlyBudgetStore, is_valid_month_key

    budgets = MonthlyBudgetStore(JsonStore(STORE_FILE))

    if args.budget_command == "set":
        if not is_valid_month_key(args.month_key):
            print(f"  Gecersiz ay: {args.month_key} (YYYY-MM bekleniyor)")
            return
        category = BudgetCategory(args.category)
        budgets.set_bulk(category, {args.month_key: args.amount})
        print(f"  {category.value} {args.month_key}: {_money(budgets.entries(category)[args.month_key])}")
        return

    for category in BudgetCategory:
        entries = budgets.entries(category)
        print(f"\n  {category.value}:")
        if not entries:
            print("    (kayit yok)")
        for key, amount in entries.items():
            print(f"    {key}: {_money(amount)}")
    print()


def cmd_cost_price(args):
    """Ürün maliyet fiyatını gösterir / günceller."""
    from store_metrics.stores.cost_price import CostPriceStore
    from store_metrics.stores.json_store import JsonStore

    cost_prices = CostPriceStore(JsonStore(STORE_FILE))
    if args.cost_command == "set":
        cost_prices.set(args.product_id, args.value)
    print(f"  Urun #{args.product_id} maliyet: {_money(cost_prices.get(args.product_id))}")


def main(argv=None):
    today = date.today()
    parser = argparse.ArgumentParser(
        prog="store_metrics",
        description="WooCommerce Magaza Metrikleri",
    )
    sub = parser.add_subparsers(dest="command", help="Komutlar")

    sub.add_parser("sample", help="Ornek veri olustur")

    p_analyze = sub.add_parser("analyze", help="Ayin metriklerini goster")
    p_report = sub.add_parser("report", help="Excel rapor olustur")
    for p in (p_analyze, p_report):
        p.add_argument("--year", type=int, default=today.year)
        p.add_argument("--month", type=int, default=today.month)
    p_report.add_argument("--output", default=None, help="Cikti dosyasi (.xlsx)")

    p_budget = sub.add_parser("budget", help="Aylik butceler")
    budget_sub = p_budget.add_subparsers(dest="budget_command")
    p_budget_set = budget_sub.add_parser("set", help="Bir ayin butcesini kaydet")
    p_budget_set.add_argument("category", choices=["pr_budget", "additional_costs"])
    p_budget_set.add_argument("month_key", help="YYYY-MM")
    p_budget_set.add_argument("amount")
    budget_sub.add_parser("show", help="Tum butceleri goster")

    p_cost = sub.add_parser("cost-price", help="Urun maliyet fiyati")
    cost_sub = p_cost.add_subparsers(dest="cost_command")
    p_cost_set = cost_sub.add_parser("set")
    p_cost_set.add_argument("product_id", type=int)
    p_cost_set.add_argument("value")
    p_cost_get = cost_sub.add_parser("get")
    p_cost_get.add_argument("product_id", type=int)

    args = parser.parse_args(argv)
    logging.basicConfig(format=LOG_FORMAT, level=LOG_LEVEL)

    commands = {
        "sample": cmd_sample,
        "analyze": cmd_analyze,
        "report": cmd_report,
        "budget": cmd_budget,
        "cost-price": cmd_cost_price,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 0
    if args.command == "cost-price" and not args.cost_command:
        p_cost.print_help()
        return 0

    try:
        handler(args)
    except StoreMetricsError as e:
        logger.error("%s", e)
        print(f"\n  Hata: {e}")
        if args.command in ("analyze", "report"):
            print("  Once 'python -m store_metrics sample' ile ornek veri olusturun.")
            print(f"  Veya WooCommerce dosyalarinizi su klasore koyun: {WOOCOMMERCE_DATA_DIR}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
