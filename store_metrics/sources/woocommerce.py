"""
WooCommerce REST API (v3) istemcisi.

Siparişleri ay aralığı ve durum filtresiyle sayfa sayfa çeker, ürünleri
id ile getirir. Kimlik doğrulama consumer key / secret ile (Basic Auth).
Bir istemci nesnesi tek bir sayfa gösterimi boyunca kullanılır; listelenen
siparişler sadece o nesnede tutulur, istekler arasında önbellek yoktur.
"""
from __future__ import annotations

import logging
from datetime import timedelta
from typing import Iterable, Optional

import requests

from store_metrics.config.settings import (
    WOOCOMMERCE_CONSUMER_KEY,
    WOOCOMMERCE_CONSUMER_SECRET,
    WOOCOMMERCE_PER_PAGE,
    WOOCOMMERCE_TIMEOUT,
    WOOCOMMERCE_URL,
)
from store_metrics.exceptions import WooCommerceAPIError
from store_metrics.models.order import Order, OrderStatus
from store_metrics.models.product import Product
from store_metrics.parsers.woocommerce_json import parse_order, parse_product
from store_metrics.sources.base import OrderSource, month_bounds

logger = logging.getLogger(__name__)

API_PREFIX = "/wp-json/wc/v3"


def _get_session(consumer_key: str, consumer_secret: str) -> requests.Session:
    """Oturum oluşturur."""
    session = requests.Session()
    session.auth = (consumer_key, consumer_secret)
    session.headers.update({
        "Accept": "application/json",
        "User-Agent": "store-metrics/1.0",
    })
    return session


class WooCommerceClient(OrderSource):
    """WooCommerce mağazasına REST API üzerinden bağlanan kaynak."""

    def __init__(
        self,
        store_url: str = WOOCOMMERCE_URL,
        consumer_key: str = WOOCOMMERCE_CONSUMER_KEY,
        consumer_secret: str = WOOCOMMERCE_CONSUMER_SECRET,
        timeout: int = WOOCOMMERCE_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        if not store_url:
            raise ValueError("WOOCOMMERCE_URL is required")
        self.base_url = store_url.rstrip("/") + API_PREFIX
        self.timeout = timeout
        self.session = session or _get_session(consumer_key, consumer_secret)
        self._listed_orders: dict[int, Order] = {}

    def _get(self, path: str, params: Optional[dict] = None) -> Optional[requests.Response]:
        """GET isteği atar. 404 → None, diğer hatalar → WooCommerceAPIError."""
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise WooCommerceAPIError("WooCommerce API unreachable", str(e)) from e

        if resp.status_code == 404:
            return None
        if resp.status_code != 200:
            raise WooCommerceAPIError(
                f"WooCommerce API error {resp.status_code}",
                resp.text[:200],
                status_code=resp.status_code,
            )
        return resp

    def get_order_ids(self, statuses: Iterable[OrderStatus], year: int, month: int) -> list[int]:
        bounds = month_bounds(year, month)
        if bounds is None:
            return []
        start, end = bounds
        status_param = ",".join(OrderStatus(s).value for s in statuses)

        ids: list[int] = []
        page = 1
        while True:
            resp = self._get("/orders", params={
                "status": status_param,
                "after": (start - timedelta(seconds=1)).isoformat(),
                "before": end.isoformat(),
                "per_page": WOOCOMMERCE_PER_PAGE,
                "page": page,
                "orderby": "date",
                "order": "asc",
            })
            rows = resp.json() if resp is not None else []
            if not rows:
                break

            for row in rows:
                order = parse_order(row)
                if order is None or not order.placed_in(year, month):
                    continue
                self._listed_orders[order.order_id] = order
                ids.append(order.order_id)

            total_pages = int(resp.headers.get("X-WP-TotalPages", page))
            if page >= total_pages or len(rows) < WOOCOMMERCE_PER_PAGE:
                break
            page += 1

        logger.debug("WooCommerce %04d-%02d: %d siparis listelendi", int(year), int(month), len(ids))
        return ids

    def get_order(self, order_id: int) -> Optional[Order]:
        if order_id in self._listed_orders:
            return self._listed_orders[order_id]
        resp = self._get(f"/orders/{int(order_id)}")
        if resp is None:
            return None
        return parse_order(resp.json())

    def get_product(self, product_id: int) -> Optional[Product]:
        resp = self._get(f"/products/{int(product_id)}")
        if resp is None:
            return None
        return parse_product(resp.json())

    def list_products(self) -> list[Product]:
        products: list[Product] = []
        page = 1
        while True:
            resp = self._get("/products", params={"per_page": WOOCOMMERCE_PER_PAGE, "page": page})
            rows = resp.json() if resp is not None else []
            for row in rows:
                product = parse_product(row)
                if product is not None:
                    products.append(product)
            if len(rows) < WOOCOMMERCE_PER_PAGE:
                break
            page += 1
        return sorted(products, key=lambda p: p.name.lower())
