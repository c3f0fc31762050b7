"""
WooCommerce REST API JSON yanıtlarını ortak veri modeline dönüştürür.

Hem canlı API (/wp-json/wc/v3) hem de dışa aktarılmış JSON dosyaları
aynı biçimde olduğundan iki kaynak da bu fonksiyonları kullanır:
  - orders.json    → GET /orders yanıtlarının listesi
  - products.json  → GET /products yanıtlarının listesi
"""
from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from store_metrics.models.order import Order, OrderItem, OrderStatus
from store_metrics.models.product import Product

logger = logging.getLogger(__name__)


def _parse_date(date_str: Optional[str]) -> Optional[datetime]:
    """WooCommerce tarih formatlarını parse eder."""
    if not date_str:
        return None
    formats = [
        "%Y-%m-%dT%H:%M:%S",      # "2025-01-15T10:20:30" (date_created)
        "%Y-%m-%dT%H:%M:%SZ",     # "2025-01-15T10:20:30Z" (date_created_gmt)
        "%Y-%m-%d %H:%M:%S",      # "2025-01-15 10:20:30"
        "%Y-%m-%d",               # "2025-01-15"
    ]
    for fmt in formats:
        try:
            return datetime.strptime(date_str.strip(), fmt)
        except ValueError:
            continue
    return None


def _parse_money(value: Any) -> float:
    """Para değerini float'a çevirir. '12.50' → 12.50"""
    if value is None or value == "":
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    cleaned = str(value).replace("$", "").replace(",", "").replace("€", "").replace("£", "").strip()
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def _parse_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def parse_order(data: dict) -> Optional[Order]:
    """
    Tek bir WooCommerce sipariş nesnesini parse eder.

    Kullanılan alanlar:
        id, status, total, currency, date_created,
        line_items[].product_id, line_items[].quantity, line_items[].name
    """
    order_id = _parse_int(data.get("id"))
    created = _parse_date(data.get("date_created")) or _parse_date(data.get("date_created_gmt"))
    if not order_id or created is None:
        logger.warning("Siparis atlandi, id veya tarih eksik: %r", data.get("id"))
        return None

    items = [
        OrderItem(
            product_id=_parse_int(line.get("product_id")),
            quantity=_parse_int(line.get("quantity"), 1),
            name=(line.get("name") or "").strip(),
        )
        for line in data.get("line_items") or []
    ]

    return Order(
        order_id=order_id,
        status=OrderStatus.from_value(data.get("status", "pending")),
        total=_parse_money(data.get("total")),
        date_created=created,
        items=items,
        currency=(data.get("currency") or "USD").strip(),
        raw_data=data,
    )


def parse_product(data: dict) -> Optional[Product]:
    """
    Tek bir WooCommerce ürün nesnesini parse eder.

    Kullanılan alanlar: id, name, permalink, price, sku, status, images[0]
    """
    product_id = _parse_int(data.get("id"))
    if not product_id:
        return None

    images = data.get("images") or []
    image_url = None
    if images:
        first = images[0]
        image_url = first.get("thumbnail") or first.get("src")

    return Product(
        product_id=product_id,
        name=(data.get("name") or "").strip(),
        price=_parse_money(data.get("price")),
        permalink=data.get("permalink") or "",
        image_url=image_url,
        sku=data.get("sku") or None,
        status=data.get("status") or "publish",
        raw_data=data,
    )


def _load_json_list(file_path: Path) -> list[dict]:
    with open(file_path, "r", encoding="utf-8-sig") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{file_path.name}: JSON listesi bekleniyordu")
    return data


def parse_orders_file(file_path: Path) -> list[Order]:
    """orders.json dosyasını parse eder, bozuk kayıtları atlar."""
    orders = []
    for row in _load_json_list(file_path):
        order = parse_order(row)
        if order is not None:
            orders.append(order)
    return orders


def parse_products_file(file_path: Path) -> list[Product]:
    """products.json dosyasını parse eder."""
    products = []
    for row in _load_json_list(file_path):
        product = parse_product(row)
        if product is not None:
            products.append(product)
    return products
