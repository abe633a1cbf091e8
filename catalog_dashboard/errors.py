"""
Katalog işlemlerinde kullanılan hata sınıfları.
"""
from __future__ import annotations


class CatalogError(Exception):
    """Tüm katalog hatalarının tabanı."""


class ProductNotFoundError(CatalogError, LookupError):
    """İstenen ürün kullanıcının kataloğunda yok."""

    def __init__(self, product_id: str):
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


class ProductValidationError(CatalogError, ValueError):
    """Ürün verisi geçersiz. `errors` alan → mesaj eşlemesidir."""

    def __init__(self, errors: dict[str, str]):
        detail = "; ".join(f"{k}: {v}" for k, v in errors.items())
        super().__init__(f"Invalid product data ({detail})")
        self.errors = errors


class InvalidSaleError(CatalogError, ValueError):
    """Satış kaydı yapılamıyor (geçersiz adet veya yetersiz stok)."""


class AuthenticationError(CatalogError):
    """Giriş bilgileri eksik veya hatalı."""
