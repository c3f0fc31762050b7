"""
"İstatistikleri Yenile" eylemi.

Sonuçlar zaten her gösterimde canlı hesaplandığı için eylem sadece
anahtarı doğrular ve panele başarı mesajıyla geri yönlendirir.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Mapping, Optional

from store_metrics.admin.security import NonceSigner
from store_metrics.config.settings import REFRESH_ACTION

logger = logging.getLogger(__name__)

NONCE_FIELD = "store_metrics_nonce"
YEAR_FIELD = "store_metrics_year"
MONTH_FIELD = "store_metrics_month"
NOTICE_FIELD = "store_metrics_notice"

REFRESH_NOTICE = "Statistics refreshed successfully!"


def _int_or(value, default: int) -> int:
    if value is None:
        return default
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def selected_period(params: Mapping[str, str], today: Optional[date] = None) -> tuple[int, int]:
    """Sorgu/form parametrelerinden yıl ve ay; yoksa bugünün yılı/ayı."""
    today = today or date.today()
    year = _int_or(params.get(YEAR_FIELD), today.year)
    month = _int_or(params.get(MONTH_FIELD), today.month)
    return year, month


def refresh_form(signer: NonceSigner, year: int, month: int) -> dict[str, str]:
    """Yenileme formunun gizli alanları."""
    return {
        NONCE_FIELD: signer.create(REFRESH_ACTION),
        YEAR_FIELD: str(year),
        MONTH_FIELD: str(month),
    }


def handle_refresh_stats(
    form: Mapping[str, str],
    signer: NonceSigner,
    today: Optional[date] = None,
) -> dict[str, str]:
    """
    Formu doğrular ve yönlendirme sorgu parametrelerini döner.
    Anahtar geçersizse NonceVerificationError (işlem durur).
    """
    signer.verify(form.get(NONCE_FIELD), REFRESH_ACTION)
    year, month = selected_period(form, today)
    logger.info("Istatistik yenileme istendi: %s-%02d", year, month)
    return {
        NOTICE_FIELD: REFRESH_NOTICE,
        YEAR_FIELD: str(year),
        MONTH_FIELD: str(month),
    }
