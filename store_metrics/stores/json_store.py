"""
JSON dosyasında tutulan basit anahtar-değer deposu.

WordPress'teki iki kaydı taklit eder:
  - options       → get_option / update_option
  - product meta  → get_post_meta / update_post_meta

path=None verilirse veriler sadece bellekte tutulur (testler için).
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


class JsonStore:
    """Seçenek ve ürün meta değerlerini tek bir JSON dosyasında saklar."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else None
        self._data: dict[str, dict] = {"options": {}, "product_meta": {}}
        self._load()

    def _load(self) -> None:
        if self.path is None or not self.path.exists():
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                loaded = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Depo dosyasi okunamadi (%s): %s", self.path, exc)
            return
        if isinstance(loaded, dict):
            self._data["options"] = dict(loaded.get("options") or {})
            self._data["product_meta"] = dict(loaded.get("product_meta") or {})

    def _save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(self._data, f, ensure_ascii=False, indent=2, sort_keys=True)
        os.replace(tmp_name, self.path)

    # ── Options ───────────────────────────────────────────
    def get_option(self, name: str, default: Any = None) -> Any:
        return self._data["options"].get(name, default)

    def update_option(self, name: str, value: Any) -> None:
        self._data["options"][name] = value
        self._save()
        logger.info("Ayar kaydedildi: %s", name)

    # ── Product meta ──────────────────────────────────────
    def get_meta(self, product_id: int, key: str, default: Any = None) -> Any:
        meta = self._data["product_meta"].get(str(product_id), {})
        return meta.get(key, default)

    def update_meta(self, product_id: int, key: str, value: Any) -> None:
        meta = self._data["product_meta"].setdefault(str(product_id), {})
        meta[key] = value
        self._save()
        logger.info("Urun meta kaydedildi: #%s %s", product_id, key)
