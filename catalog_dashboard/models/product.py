"""
Ürün veri modeli - mağaza dokümanları bu ortak modele dönüşür.

Mağazadan gelen ham dokümanlarda alanlar eksik veya bozuk olabilir.
Tüm varsayılanlar `normalize_product` içinde tek noktada uygulanır,
böylece hesaplama katmanı her alanın dolu olduğunu varsayabilir.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from catalog_dashboard.config.settings import DEFAULT_CATEGORY, LOW_STOCK_THRESHOLD
from catalog_dashboard.errors import ProductValidationError


@dataclass
class SaleEvent:
    """Tek bir satış kaydı."""
    date: Optional[datetime]
    units: int = 0
    revenue: float = 0.0


@dataclass
class Product:
    """Mağazadan bağımsız ürün modeli."""
    product_id: str
    name: str
    category: str = DEFAULT_CATEGORY
    price: float = 0.0

    # Stok & satış sayaçları (birbirinden bağımsız)
    stock: int = 0
    sold: int = 0
    total_intake: float = 0.0

    # Detaylar
    description: str = ""
    image_url: Optional[str] = None
    user_id: Optional[str] = None

    # Tarihler
    created_at: Optional[datetime] = None
    sales_history: list[SaleEvent] = field(default_factory=list)

    @property
    def inventory_value(self) -> float:
        """Eldeki stokun güncel fiyatla değeri."""
        return self.price * self.stock

    @property
    def sales_value(self) -> float:
        """Satılan adetlerin güncel fiyatla değeri."""
        return self.price * self.sold

    @property
    def is_low_stock(self) -> bool:
        return self.stock < LOW_STOCK_THRESHOLD


# ── Yeni / düzenlenen ürün şeması ─────────────────────────

class ProductCreate(BaseModel):
    """Ürün ekleme ve düzenleme formunun şeması."""
    model_config = ConfigDict(strict=True, str_strip_whitespace=True)

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price: float = Field(gt=0)
    stock: int = Field(ge=0)
    category: Optional[str] = None
    image_url: Optional[str] = None


def validate_product_data(data: dict) -> ProductCreate:
    """
    Ürün verisini doğrular. Hatalı her alan ProductValidationError.errors
    içinde alan → mesaj olarak döner.
    """
    try:
        return ProductCreate.model_validate(data)
    except ValidationError as e:
        errors = {
            ".".join(str(part) for part in err["loc"]) or "data": err["msg"]
            for err in e.errors()
        }
        raise ProductValidationError(errors) from e


# ── Dönüştürücüler ────────────────────────────────────────

def _to_number(value: Any) -> float:
    """Sayısal değeri float'a çevirir. Eksik, bozuk veya negatif → 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        cleaned = value.replace("₹", "").replace("$", "").replace(",", "").strip()
        if not cleaned:
            return 0.0
        try:
            value = float(cleaned)
        except ValueError:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number) or number < 0:
        return 0.0
    return number


def _to_int(value: Any) -> int:
    return int(_to_number(value))


def _to_category(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        return DEFAULT_CATEGORY
    return value.strip()


def parse_datetime(value: Any) -> Optional[datetime]:
    """
    Tarih değerini naive (yerel saat) datetime'a çevirir.

    Kabul edilenler: datetime, date, ISO-8601 metni ("Z" sonekiyle de),
    epoch milisaniye. Parse edilemeyen değer → None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)):
        try:
            parsed = datetime.fromtimestamp(value / 1000)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _normalize_event(event: SaleEvent) -> SaleEvent:
    return SaleEvent(
        date=parse_datetime(event.date),
        units=_to_int(event.units),
        revenue=_to_number(event.revenue),
    )


def normalize_product(product: Product) -> Product:
    """
    Varsayılan kuralları uygulanmış bir kopya döner:
        - eksik/bozuk/negatif sayılar → 0
        - boş kategori → "Others"
        - parse edilemeyen tarih → None (zaman bazlı hesaplardan düşer)
    """
    return replace(
        product,
        name=str(product.name) if product.name is not None else "",
        category=_to_category(product.category),
        price=_to_number(product.price),
        stock=_to_int(product.stock),
        sold=_to_int(product.sold),
        total_intake=_to_number(product.total_intake),
        created_at=parse_datetime(product.created_at),
        sales_history=[_normalize_event(e) for e in product.sales_history or []],
    )


def _pick(raw: dict, *keys: str) -> Any:
    """İlk dolu anahtarın değerini döner (camelCase / snake_case)."""
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return None


def _raw_event(raw: Any) -> SaleEvent:
    if not isinstance(raw, dict):
        return SaleEvent(date=None)
    return SaleEvent(date=raw.get("date"), units=raw.get("units"), revenue=raw.get("revenue"))


def product_from_dict(raw: dict) -> Product:
    """Ham mağaza dokümanını normalize edilmiş Product'a dönüştürür. Asla hata fırlatmaz."""
    history_raw = _pick(raw, "salesHistory", "sales_history") or []
    if not isinstance(history_raw, list):
        history_raw = []

    product = Product(
        product_id=str(_pick(raw, "_id", "id", "product_id") or ""),
        name=_pick(raw, "name", "title"),
        category=_pick(raw, "category"),
        price=raw.get("price"),
        stock=raw.get("stock"),
        sold=raw.get("sold"),
        total_intake=_pick(raw, "totalIntake", "total_intake"),
        description=str(raw.get("description") or ""),
        image_url=_pick(raw, "image", "image_url"),
        user_id=_pick(raw, "userId", "user_id"),
        created_at=_pick(raw, "createdAt", "created_at"),
        sales_history=[_raw_event(e) for e in history_raw],
    )
    return normalize_product(product)


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def sale_event_to_dict(event: SaleEvent) -> dict:
    return {"date": format_datetime(event.date), "units": event.units, "revenue": event.revenue}


def product_to_dict(product: Product) -> dict:
    """Product'ı mağaza dosyasındaki camelCase doküman şekline çevirir."""
    return {
        "_id": product.product_id,
        "userId": product.user_id,
        "name": product.name,
        "description": product.description,
        "category": product.category,
        "price": product.price,
        "stock": product.stock,
        "sold": product.sold,
        "totalIntake": product.total_intake,
        "image": product.image_url,
        "createdAt": format_datetime(product.created_at),
        "salesHistory": [sale_event_to_dict(e) for e in product.sales_history],
    }
