"""
Ayarlara göre uygun sipariş kaynağını seçer.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from store_metrics.config.settings import WOOCOMMERCE_DATA_DIR, WOOCOMMERCE_URL
from store_metrics.exceptions import SourceNotConfiguredError
from store_metrics.sources.base import OrderSource
from store_metrics.sources.local import LocalOrderSource
from store_metrics.sources.woocommerce import WooCommerceClient


def build_source(
    store_url: str = WOOCOMMERCE_URL,
    data_dir: Optional[Path] = None,
) -> OrderSource:
    """
    WOOCOMMERCE_URL tanımlıysa canlı API, yoksa yerel dışa aktarım.
    İkisi de yoksa SourceNotConfiguredError.
    """
    if store_url:
        return WooCommerceClient(store_url=store_url)

    data_dir = Path(data_dir) if data_dir is not None else WOOCOMMERCE_DATA_DIR
    if LocalOrderSource.has_data(data_dir):
        return LocalOrderSource.from_directory(data_dir)

    raise SourceNotConfiguredError(
        "Store Metrics requires WooCommerce to be active.",
        f"Set WOOCOMMERCE_URL or place orders.json in {data_dir}",
    )
