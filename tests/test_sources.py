"""
Tests for the WooCommerce JSON parsers, LocalOrderSource and build_source.
"""
import json
from datetime import datetime

import pytest

from store_metrics.exceptions import SourceNotConfiguredError
from store_metrics.models.order import QUALIFYING_STATUSES, OrderStatus
from store_metrics.parsers.woocommerce_json import (
    parse_order,
    parse_orders_file,
    parse_product,
    parse_products_file,
)
from store_metrics.sources.base import month_bounds
from store_metrics.sources.factory import build_source
from store_metrics.sources.local import LocalOrderSource
from store_metrics.sources.woocommerce import WooCommerceClient

ORDER_ROWS = [
    {
        "id": 1001,
        "status": "completed",
        "currency": "USD",
        "total": "45.50",
        "date_created": "2024-07-03T09:15:00",
        "line_items": [
            {"product_id": 101, "quantity": 2, "name": "Wooden Phone Stand"},
            {"product_id": 102, "quantity": 1, "name": "Ceramic Mug"},
        ],
    },
    {
        "id": 1002,
        "status": "cancelled",
        "total": "18.00",
        "date_created": "2024-07-04T11:00:00",
        "line_items": [{"product_id": 102, "quantity": 1}],
    },
    {
        "id": 1003,
        "status": "processing",
        "total": "29.00",
        "date_created": "2024-08-01T00:00:00",
        "line_items": [{"product_id": 103, "quantity": 1}],
    },
    {"id": 1004, "status": "completed", "total": "5.00"},
]

PRODUCT_ROWS = [
    {
        "id": 101,
        "name": "Wooden Phone Stand",
        "price": "24.99",
        "permalink": "https://shop.example.com/product/wooden-phone-stand/",
        "sku": "WPS-01",
        "images": [{"src": "https://shop.example.com/img/stand.jpg"}],
    },
    {"id": 102, "name": "Ceramic Mug", "price": "18", "images": []},
    {"id": 103, "name": "Leather Journal", "price": ""},
    {"name": "No id"},
]


@pytest.fixture
def data_dir(tmp_path):
    (tmp_path / "orders.json").write_text(json.dumps(ORDER_ROWS), encoding="utf-8")
    (tmp_path / "products.json").write_text(json.dumps(PRODUCT_ROWS), encoding="utf-8")
    return tmp_path


class TestParseOrder:
    def test_fields(self):
        order = parse_order(ORDER_ROWS[0])
        assert order.order_id == 1001
        assert order.status == OrderStatus.COMPLETED
        assert order.total == 45.5
        assert order.date_created == datetime(2024, 7, 3, 9, 15)
        assert [(i.product_id, i.quantity) for i in order.items] == [(101, 2), (102, 1)]
        assert order.item_count == 3
        assert order.is_qualifying
        assert order.placed_in(2024, 7)
        assert not order.placed_in(2024, 8)

    def test_missing_date_skipped(self):
        assert parse_order(ORDER_ROWS[3]) is None

    def test_missing_quantity_defaults_to_one(self):
        order = parse_order({"id": 5, "date_created": "2024-01-01", "line_items": [{"product_id": 9}]})
        assert order.items[0].quantity == 1

    def test_gmt_date_fallback(self):
        order = parse_order({"id": 5, "date_created_gmt": "2024-02-10T08:00:00Z"})
        assert order.date_created == datetime(2024, 2, 10, 8, 0)

    @pytest.mark.parametrize("raw, expected", [
        ("wc-completed", OrderStatus.COMPLETED),
        ("on-hold", OrderStatus.ON_HOLD),
        ("WC-PROCESSING", OrderStatus.PROCESSING),
        ("something-else", OrderStatus.PENDING),
        ("", OrderStatus.PENDING),
    ])
    def test_status_values(self, raw, expected):
        assert OrderStatus.from_value(raw) is expected

    def test_qualifying_statuses(self):
        assert QUALIFYING_STATUSES == {
            OrderStatus.COMPLETED, OrderStatus.PROCESSING, OrderStatus.ON_HOLD,
        }


class TestParseProduct:
    def test_fields(self):
        product = parse_product(PRODUCT_ROWS[0])
        assert product.product_id == 101
        assert product.price == 24.99
        assert product.image_url == "https://shop.example.com/img/stand.jpg"
        assert product.sku == "WPS-01"

    def test_empty_price_and_images(self):
        product = parse_product(PRODUCT_ROWS[2])
        assert product.price == 0.0
        assert product.image_url is None
        assert product.profit_margin(5.0) is None

    def test_missing_id(self):
        assert parse_product(PRODUCT_ROWS[3]) is None

    def test_profit_margin(self):
        product = parse_product({"id": 1, "name": "x", "price": "20"})
        assert product.profit_margin(5.0) == pytest.approx(75.0)


class TestFiles:
    def test_parse_files(self, data_dir):
        assert [o.order_id for o in parse_orders_file(data_dir / "orders.json")] == [1001, 1002, 1003]
        assert [p.product_id for p in parse_products_file(data_dir / "products.json")] == [101, 102, 103]

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "orders.json"
        path.write_text("{}", encoding="utf-8")
        with pytest.raises(ValueError):
            parse_orders_file(path)


class TestMonthBounds:
    def test_regular(self):
        assert month_bounds(2024, 2) == (datetime(2024, 2, 1), datetime(2024, 3, 1))

    def test_december(self):
        assert month_bounds(2024, 12) == (datetime(2024, 12, 1), datetime(2025, 1, 1))

    @pytest.mark.parametrize("year, month", [(2024, 0), (2024, 13), (0, 5), ("x", 1)])
    def test_invalid(self, year, month):
        assert month_bounds(year, month) is None


class TestLocalOrderSource:
    def test_from_directory(self, data_dir):
        source = LocalOrderSource.from_directory(data_dir)
        assert source.get_order_ids(QUALIFYING_STATUSES, 2024, 7) == [1001]
        assert source.get_order_ids(QUALIFYING_STATUSES, 2024, 8) == [1003]
        assert source.get_order_ids([OrderStatus.CANCELLED], 2024, 7) == [1002]

    def test_lookup(self, data_dir):
        source = LocalOrderSource.from_directory(data_dir)
        assert source.get_order(1001).total == 45.5
        assert source.get_order(1) is None
        assert source.get_product(102).name == "Ceramic Mug"
        assert source.get_product(999) is None

    def test_list_products_sorted_by_name(self, data_dir):
        names = [p.name for p in LocalOrderSource.from_directory(data_dir).list_products()]
        assert names == ["Ceramic Mug", "Leather Journal", "Wooden Phone Stand"]

    def test_has_data(self, data_dir, tmp_path_factory):
        assert LocalOrderSource.has_data(data_dir)
        assert not LocalOrderSource.has_data(tmp_path_factory.mktemp("empty"))

    def test_invalid_month(self, data_dir):
        assert LocalOrderSource.from_directory(data_dir).get_order_ids(QUALIFYING_STATUSES, 2024, 13) == []


class TestBuildSource:
    def test_url_gives_client(self, tmp_path):
        source = build_source(store_url="https://shop.example.com", data_dir=tmp_path)
        assert isinstance(source, WooCommerceClient)
        assert source.base_url == "https://shop.example.com/wp-json/wc/v3"

    def test_local_data(self, data_dir):
        assert isinstance(build_source(store_url="", data_dir=data_dir), LocalOrderSource)

    def test_nothing_configured(self, tmp_path):
        with pytest.raises(SourceNotConfiguredError) as exc_info:
            build_source(store_url="", data_dir=tmp_path)
        assert exc_info.value.message == "Store Metrics requires WooCommerce to be active."
