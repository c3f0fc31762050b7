"""
Store Metrics hata hiyerarşisi.

    StoreMetricsError (temel)
    ├── PermissionDeniedError     - Yetkisiz erişim (sayfa hiç çizilmez)
    ├── NonceVerificationError    - Geçersiz / eksik güvenlik anahtarı
    ├── SourceNotConfiguredError  - WooCommerce bağlantısı veya yerel veri yok
    └── WooCommerceAPIError       - REST API hata döndü ya da erişilemedi

Eksik sipariş/ürün ve geçersiz bütçe anahtarları hata sayılmaz;
atlanır ve uyarı olarak loglanır.
"""
from __future__ import annotations

from typing import Optional


class StoreMetricsError(Exception):
    """Tüm Store Metrics hatalarının temeli."""

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class PermissionDeniedError(StoreMetricsError):
    """Kullanıcının gerekli yetkisi yok."""

    def __init__(self, capability: str, details: Optional[str] = None):
        super().__init__(
            "You do not have sufficient permissions to access this page.",
            details,
        )
        self.capability = capability


class NonceVerificationError(StoreMetricsError):
    """Yenileme formundaki güvenlik anahtarı doğrulanamadı."""

    def __init__(self, details: Optional[str] = None):
        super().__init__("Nonce verification failed", details)


class SourceNotConfiguredError(StoreMetricsError):
    """Ne WooCommerce API bilgileri ne de yerel dışa aktarım bulundu."""


class WooCommerceAPIError(StoreMetricsError):
    """WooCommerce REST API beklenmeyen bir yanıt döndü."""

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, details)
        self.status_code = status_code
