"""
Pytest configuration and shared fixtures.
"""
from datetime import datetime

import pytest

from store_metrics.engine.statistics import StatisticsService
from store_metrics.models.order import Order, OrderItem, OrderStatus
from store_metrics.models.product import Product
from store_metrics.sources.local import LocalOrderSource
from store_metrics.stores.cost_price import CostPriceStore
from store_metrics.stores.json_store import JsonStore
from store_metrics.stores.monthly_budget import MonthlyBudgetStore


def make_order(order_id, status, total, created, items=()):
    """Kısa yoldan Order oluşturur. items: [(product_id, quantity), ...]"""
    return Order(
        order_id=order_id,
        status=OrderStatus(status),
        total=total,
        date_created=created,
        items=[OrderItem(product_id=pid, quantity=qty) for pid, qty in items],
    )


@pytest.fixture
def store():
    """Bellekte çalışan depo."""
    return JsonStore()


@pytest.fixture
def cost_prices(store):
    return CostPriceStore(store)


@pytest.fixture
def budgets(store):
    return MonthlyBudgetStore(store)


@pytest.fixture
def products():
    return [
        Product(
            product_id=1,
            name="Wooden Phone Stand",
            price=24.99,
            permalink="https://shop.example.com/product/wooden-phone-stand/",
            image_url="https://shop.example.com/wp-content/uploads/stand-150x150.jpg",
        ),
        Product(product_id=2, name="Ceramic Mug", price=18.00),
        Product(product_id=3, name="Leather Journal", price=29.00),
    ]


@pytest.fixture
def example_source():
    """
    O1: completed, 100, P1 x2
    O2: cancelled, 50, P2 x1
    Aynı ay (Temmuz 2024).
    """
    orders = [
        make_order(1, "completed", 100.0, datetime(2024, 7, 5, 10, 0), [(1, 2)]),
        make_order(2, "cancelled", 50.0, datetime(2024, 7, 6, 12, 0), [(2, 1)]),
    ]
    products = [
        Product(product_id=1, name="P1", price=60.0, permalink="https://shop.example.com/p1/"),
        Product(product_id=2, name="P2", price=50.0),
    ]
    return LocalOrderSource(orders, products)


@pytest.fixture
def service(example_source, cost_prices, budgets):
    cost_prices.set(1, 10)
    return StatisticsService(example_source, cost_prices, budgets)
