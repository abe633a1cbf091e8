"""
Test için örnek ürün kataloğu (products.json) oluşturur.
"""
import random
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

from catalog_dashboard.config.settings import ADMIN_CREDENTIALS, PRODUCTS_FILE
from catalog_dashboard.store.json_store import JsonProductStore

# ── Örnek ürünler ─────────────────────────────────────────

SAMPLE_PRODUCTS = [
    ("Wireless Earbuds Pro", "Electronics", 2499),
    ("Smart Fitness Band", "Electronics", 1799),
    ("USB-C Fast Charger 30W", "Electronics", 899),
    ("Cotton Kurta - Indigo", "Fashion", 1299),
    ("Denim Jacket Classic", "Fashion", 2199),
    ("Leather Wallet Slim", "Accessories", 749),
    ("Steel Water Bottle 1L", "Home & Kitchen", 549),
    ("Ceramic Dinner Set (12 pcs)", "Home & Kitchen", 3299),
    ("Yoga Mat Anti-Slip", "Sports", 999),
    ("Cricket Bat - Kashmir Willow", "Sports", 1899),
    ("Herbal Face Wash", "Beauty", 299),
    ("Handmade Notebook A5", "", 199),
]


def random_date(days_back: int = 90) -> datetime:
    start = datetime.now() - timedelta(days=days_back)
    return start + timedelta(
        days=random.randint(0, days_back),
        hours=random.randint(0, 23),
        minutes=random.randint(0, 59),
    )


def generate_catalog(
    store: JsonProductStore,
    user_id: str,
    sales_per_product: int = 6,
) -> int:
    """Kullanıcı için örnek ürünler ekler ve satış geçmişi üretir."""
    count = 0
    for name, category, price in SAMPLE_PRODUCTS:
        product = store.add_product(
            user_id,
            {
                "name": name,
                "description": f"{name} - sample catalog item",
                "category": category,
                "price": price,
                "stock": random.randint(5, 60),
            },
            now=random_date(days_back=200),
        )
        for _ in range(random.randint(0, sales_per_product)):
            current = store.get_product(user_id, product.product_id)
            if current.stock <= 1:
                break
            units = random.randint(1, min(4, current.stock - 1))
            store.mark_sold(user_id, product.product_id, units, now=random_date(days_back=35))
        count += 1
    return count


def main(path: Optional[Path] = None) -> None:
    target = path or PRODUCTS_FILE
    store = JsonProductStore(target)
    user_id = ADMIN_CREDENTIALS[0]["email"].lower()

    print("Örnek katalog oluşturuluyor...")
    count = generate_catalog(store, user_id)
    print(f"  {count} ürün eklendi → {target}")
    print(f"  Kullanıcı: {user_id}")


if __name__ == "__main__":
    main()
