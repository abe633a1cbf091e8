"""
JSON dosyası tabanlı ürün deposu.

Dosya şekli: {"products": [ {camelCase ürün dokümanı + userId}, ... ]}
Depo nesnesi giriş noktasında oluşturulur ve çağıranlara parametre olarak
verilir; modül seviyesinde paylaşılan bağlantı yoktur.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from catalog_dashboard.config.settings import DEFAULT_CATEGORY
from catalog_dashboard.errors import (
    InvalidSaleError,
    ProductNotFoundError,
    ProductValidationError,
)
from catalog_dashboard.models.product import (
    Product,
    SaleEvent,
    product_from_dict,
    product_to_dict,
    sale_event_to_dict,
    validate_product_data,
)

logger = logging.getLogger(__name__)

# Düzenleme formunda değiştirilebilen alanlar
EDITABLE_FIELDS = ("name", "description", "price", "stock", "category", "image_url")


class JsonProductStore:
    """Kullanıcı bazlı ürün kataloğu (tek JSON dosyası)."""

    def __init__(self, path: Path):
        self.path = Path(path)

    # ── Dosya erişimi ─────────────────────────────────────

    def _load(self) -> list[dict]:
        if not self.path.exists():
            return []
        with open(self.path, "r", encoding="utf-8") as f:
            payload = json.load(f)
        return list(payload.get("products", []))

    def _save(self, documents: list[dict]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Geçici dosyaya yaz, sonra atomik olarak değiştir
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump({"products": documents}, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    @staticmethod
    def _find(documents: list[dict], user_id: str, product_id: str) -> int:
        for i, doc in enumerate(documents):
            if doc.get("userId") == user_id and str(doc.get("_id")) == product_id:
                return i
        raise ProductNotFoundError(product_id)

    # ── Okuma ─────────────────────────────────────────────

    def list_products(self, user_id: str) -> list[Product]:
        """Kullanıcının tüm ürünleri, ekleme sırasıyla."""
        return [
            product_from_dict(doc)
            for doc in self._load()
            if doc.get("userId") == user_id
        ]

    def get_product(self, user_id: str, product_id: str) -> Product:
        documents = self._load()
        return product_from_dict(documents[self._find(documents, user_id, product_id)])

    # ── Yazma ─────────────────────────────────────────────

    def add_product(
        self,
        user_id: str,
        data: dict,
        now: Optional[datetime] = None,
    ) -> Product:
        """Doğrulanmış yeni ürün ekler."""
        clean = validate_product_data(data)
        product = Product(
            product_id=uuid.uuid4().hex,
            name=clean.name,
            category=clean.category or DEFAULT_CATEGORY,
            price=clean.price,
            stock=clean.stock,
            description=clean.description,
            image_url=clean.image_url,
            user_id=user_id,
            created_at=now or datetime.now(),
        )
        documents = self._load()
        documents.append(product_to_dict(product))
        self._save(documents)
        logger.info("Ürün eklendi: %s (%s)", product.name, product.product_id)
        return product

    def delete_product(self, user_id: str, product_id: str) -> None:
        documents = self._load()
        index = self._find(documents, user_id, product_id)
        removed = documents.pop(index)
        self._save(documents)
        logger.info("Ürün silindi: %s", removed.get("name"))

    def _update(self, user_id: str, product_id: str, change) -> Product:
        """
        `change(product, doc)` yazılacak alanları döner. Sadece bu alanlar
        dokümana yazılır; dokunulmayan alanlar (bozuk olsalar bile) aynen kalır.
        """
        documents = self._load()
        index = self._find(documents, user_id, product_id)
        doc = documents[index]
        fields = change(product_from_dict(doc), doc)
        documents[index] = {**doc, **fields}
        self._save(documents)
        return product_from_dict(documents[index])

    def update_product(self, user_id: str, product_id: str, data: dict) -> Product:
        """
        Ürünün düzenlenebilir alanlarını günceller. `data` kısmi olabilir;
        verilmeyen alanlar mevcut değerlerle doldurulup şemadan geçirilir.
        Satılan, gelir ve satış geçmişi değişmez.
        """
        def apply(product: Product, doc: dict) -> dict:
            current = {key: getattr(product, key) for key in EDITABLE_FIELDS}
            current.update({k: v for k, v in data.items() if k in EDITABLE_FIELDS})
            clean = validate_product_data(current)
            return {
                "name": clean.name,
                "description": clean.description,
                "price": clean.price,
                "stock": clean.stock,
                "category": clean.category or DEFAULT_CATEGORY,
                "image": clean.image_url,
            }

        product = self._update(user_id, product_id, apply)
        logger.info("Ürün güncellendi: %s (%s)", product.name, product.product_id)
        return product

    def mark_sold(
        self,
        user_id: str,
        product_id: str,
        units: Any,
        now: Optional[datetime] = None,
    ) -> Product:
        """
        Satış kaydeder: stok düşer, satılan artar, gelir o anki fiyattan eklenir
        ve satış geçmişine yeni olay yazılır.
        """
        if isinstance(units, bool) or not isinstance(units, int) or units <= 0:
            raise InvalidSaleError("Invalid number of units")

        sold_at = now or datetime.now()

        def apply(product: Product, doc: dict) -> dict:
            if units > product.stock:
                raise InvalidSaleError(f"Not enough stock. Available: {product.stock}")
            revenue = product.price * units
            history = doc.get("salesHistory")
            if not isinstance(history, list):
                history = doc.get("sales_history")
            if not isinstance(history, list):
                history = []
            event = SaleEvent(date=sold_at, units=units, revenue=revenue)
            return {
                "stock": product.stock - units,
                "sold": product.sold + units,
                "totalIntake": product.total_intake + revenue,
                "salesHistory": [*history, sale_event_to_dict(event)],
            }

        product = self._update(user_id, product_id, apply)
        logger.info("%d adet satıldı: %s", units, product.name)
        return product

    def restock(self, user_id: str, product_id: str, units: Any) -> Product:
        """Stoğa adet ekler; satılan sayacına dokunmaz."""
        if isinstance(units, bool) or not isinstance(units, int) or units <= 0:
            raise ProductValidationError({"units": "must be a positive integer"})

        def apply(product: Product, doc: dict) -> dict:
            return {"stock": product.stock + units}

        return self._update(user_id, product_id, apply)
