"""
Test için örnek WooCommerce dışa aktarımı (orders.json / products.json),
maliyet fiyatları ve aylık bütçeler oluşturur.
"""
import json
import random
from datetime import datetime, timedelta
from pathlib import Path

from store_metrics.config.settings import STORE_FILE, WOOCOMMERCE_DATA_DIR
from store_metrics.stores.cost_price import CostPriceStore
from store_metrics.stores.json_store import JsonStore
from store_metrics.stores.monthly_budget import BudgetCategory, MonthlyBudgetStore, month_key

SHOP_URL = "https://shop.example.com"

# ── Örnek ürünler (id, ad, fiyat, maliyet) ────────────────

PRODUCTS = [
    (101, "Handmade Wooden Phone Stand", 24.99, 9.50),
    (102, "Custom Name Necklace - Gold", 34.50, 12.00),
    (103, "Vintage Style Leather Journal", 29.00, 11.25),
    (104, "Macrame Wall Hanging - Large", 55.00, 21.00),
    (105, "Ceramic Coffee Mug - Handmade", 18.00, 6.40),
    (106, "Bamboo Cutting Board Set (3 Pack)", 28.99, 10.10),
    (107, "LED Desk Lamp with USB Charging", 32.50, 14.75),
    (108, "Stainless Steel Water Bottle 750ml", 19.99, 5.80),
    (109, "Organic Cotton Tote Bag - 5 Pack", 22.00, 7.00),
    (110, "Yoga Mat with Carrying Strap", 35.00, 13.30),
]

STATUSES = ["completed"] * 6 + ["processing"] * 2 + ["on-hold", "cancelled", "refunded", "failed"]


def random_date(days_back: int = 120) -> datetime:
    start = datetime.now() - timedelta(days=days_back)
    return start + timedelta(
        days=random.randint(0, days_back),
        hours=random.randint(0, 23),
        minutes=random.randint(0, 59),
    )


def _slug(name: str) -> str:
    return "".join(c if c.isalnum() else "-" for c in name.lower()).strip("-")


def generate_products(data_dir: Path) -> None:
    """products.json oluşturur."""
    data_dir.mkdir(parents=True, exist_ok=True)
    filepath = data_dir / "products.json"

    rows = []
    for pid, name, price, _ in PRODUCTS:
        slug = _slug(name)
        rows.append({
            "id": pid,
            "name": name,
            "slug": slug,
            "permalink": f"{SHOP_URL}/product/{slug}/",
            "status": "publish",
            "sku": f"SKU-{pid}",
            "price": f"{price:.2f}",
            "images": [{
                "id": pid * 10,
                "src": f"{SHOP_URL}/wp-content/uploads/{slug}.jpg",
                "thumbnail": f"{SHOP_URL}/wp-content/uploads/{slug}-150x150.jpg",
            }],
        })

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(rows, f, indent=2)

    print(f"  Urunler:    {filepath} ({len(rows)} urun)")


def generate_orders(data_dir: Path, count: int = 150) -> None:
    """orders.json oluşturur."""
    data_dir.mkdir(parents=True, exist_ok=True)
    filepath = data_dir / "orders.json"

    rows = []
    for i in range(count):
        created = random_date()
        line_items = []
        for product in random.sample(PRODUCTS, k=random.choices([1, 2, 3], weights=[70, 20, 10])[0]):
            qty = random.choices([1, 2, 3], weights=[70, 20, 10])[0]
            line_items.append({
                "id": i * 10 + len(line_items),
                "name": product[1],
                "product_id": product[0],
                "quantity": qty,
                "total": f"{product[2] * qty:.2f}",
            })
        shipping = random.choice([0, 3.99, 5.99])
        total = sum(float(li["total"]) for li in line_items) + shipping

        rows.append({
            "id": 5000 + i,
            "status": random.choice(STATUSES),
            "currency": "USD",
            "date_created": created.strftime("%Y-%m-%dT%H:%M:%S"),
            "total": f"{total:.2f}",
            "shipping_total": f"{shipping:.2f}",
            "line_items": line_items,
        })

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(rows, f, indent=2)

    print(f"  Siparisler: {filepath} ({count} siparis)")


def generate_settings(store_file: Path) -> None:
    """Maliyet fiyatları ve son 4 ayın bütçelerini kaydeder."""
    store = JsonStore(store_file)
    cost_prices = CostPriceStore(store)
    for pid, _, _, cost in PRODUCTS:
        cost_prices.set(pid, f"{cost:.2f}")

    today = datetime.now()
    pr_budget = {}
    additional = {}
    year, month = today.year, today.month
    for _ in range(4):
        key = month_key(year, month)
        pr_budget[key] = random.choice([150, 250, 400])
        additional[key] = random.choice([50, 80, 120])
        year, month = (year, month - 1) if month > 1 else (year - 1, 12)

    budgets = MonthlyBudgetStore(store)
    budgets.set_bulk(BudgetCategory.PR_BUDGET, pr_budget)
    budgets.set_bulk(BudgetCategory.ADDITIONAL_COSTS, additional)

    print(f"  Ayarlar:    {store_file}")


def main():
    print("Ornek veri olusturuluyor...\n")
    generate_products(WOOCOMMERCE_DATA_DIR)
    generate_orders(WOOCOMMERCE_DATA_DIR, 150)
    generate_settings(STORE_FILE)
    print("\nTamamlandi! 'data/' klasorunu kontrol edin.")


if __name__ == "__main__":
    main()
