"""
Yönetim paneli güvenliği: yetki kontrolü ve form güvenlik anahtarı (nonce).
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from store_metrics.config.settings import NONCE_MAX_AGE, REQUIRED_CAPABILITY, SECRET_KEY
from store_metrics.exceptions import NonceVerificationError, PermissionDeniedError

logger = logging.getLogger(__name__)

NONCE_SALT = "store-metrics-nonce"


def require_capability(capabilities: Iterable[str], capability: str = REQUIRED_CAPABILITY) -> None:
    """Yetki yoksa PermissionDeniedError fırlatır."""
    if capability not in set(capabilities or ()):
        logger.warning("Yetkisiz erisim denemesi: %s gerekli", capability)
        raise PermissionDeniedError(capability)


class NonceSigner:
    """Bir eylem adına bağlı, süreli ve imzalı anahtar üretir/doğrular."""

    def __init__(self, secret_key: str = SECRET_KEY, max_age: int = NONCE_MAX_AGE):
        if not secret_key:
            raise ValueError("STORE_METRICS_SECRET_KEY must be set")
        self.max_age = max_age
        self._serializer = URLSafeTimedSerializer(secret_key, salt=NONCE_SALT)

    def create(self, action: str) -> str:
        return self._serializer.dumps({"action": action})

    def verify(self, token: Optional[str], action: str) -> None:
        """Anahtar eksik, süresi geçmiş veya başka eyleme aitse hata verir."""
        if not token:
            raise NonceVerificationError("missing token")
        try:
            payload = self._serializer.loads(token, max_age=self.max_age)
        except SignatureExpired as e:
            raise NonceVerificationError("token expired") from e
        except BadSignature as e:
            raise NonceVerificationError("bad signature") from e

        if not isinstance(payload, dict) or payload.get("action") != action:
            raise NonceVerificationError("action mismatch")
