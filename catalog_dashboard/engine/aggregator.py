"""
Ürün kayıtlarından dashboard istatistiklerini hesaplar.

Tüm fonksiyonlar saf: girdi listesi değiştirilmez, her çağrıda yeni bir
DashboardStats üretilir. Sıralamalar kararlıdır; eşitlikte girdi sırası korunur.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Union

from catalog_dashboard.config.settings import (
    LOW_STOCK_LIMIT,
    LOW_STOCK_THRESHOLD,
    MONTH_NAMES,
    TOP_SELLING_LIMIT,
    TREND_DAYS,
    TREND_SHORT_DAYS,
)
from catalog_dashboard.models.product import Product, normalize_product, product_from_dict
from catalog_dashboard.models.stats import (
    CategoryStat,
    DashboardStats,
    MonthlySales,
    ProductLine,
    TrendPoint,
)

logger = logging.getLogger(__name__)

ProductInput = Union[Product, dict]


def _normalize(products: Iterable[ProductInput]) -> list[Product]:
    return [
        normalize_product(p) if isinstance(p, Product) else product_from_dict(p)
        for p in products
    ]


def get_category_stats(products: list[Product]) -> list[CategoryStat]:
    """Kategori bazında stok, satış ve stok değeri. Değere göre azalan."""
    groups: dict[str, CategoryStat] = {}

    for p in products:
        stat = groups.get(p.category)
        if stat is None:
            stat = groups[p.category] = CategoryStat(category=p.category)
        stat.stock += p.stock
        stat.sold += p.sold
        stat.value += p.inventory_value

    return sorted(groups.values(), key=lambda c: c.value, reverse=True)


def get_top_selling(
    products: list[Product],
    limit: int = TOP_SELLING_LIMIT,
) -> list[ProductLine]:
    """En çok satan ürünler (satış adedine göre). Değer = fiyat × satılan."""
    lines = [
        ProductLine(name=p.name, stock=p.stock, sold=p.sold, value=p.sales_value)
        for p in products
    ]
    return sorted(lines, key=lambda x: x.sold, reverse=True)[:limit]


def get_low_stock_list(
    products: list[Product],
    limit: int = LOW_STOCK_LIMIT,
    threshold: int = LOW_STOCK_THRESHOLD,
) -> list[ProductLine]:
    """Stoku eşiğin altındaki ürünler, en az stoktan başlayarak."""
    lines = [
        ProductLine(name=p.name, stock=p.stock, sold=p.sold, value=p.inventory_value)
        for p in products
        if p.stock < threshold
    ]
    return sorted(lines, key=lambda x: x.stock)[:limit]


def calculate_sell_through(total_sold: int, total_inventory: int) -> float:
    """Satılan / (satılan + eldeki stok) yüzdesi. Payda 0 ise 0."""
    denominator = total_sold + total_inventory
    if denominator <= 0:
        return 0.0
    return total_sold / denominator * 100


def get_monthly_sales(products: list[Product], year: int) -> list[MonthlySales]:
    """
    Yılın 12 ayı için satış toplamları.

    Not: ürünün toplam `sold` değeri, satış olaylarının tarihine değil
    ürünün oluşturulduğu aya yazılır. Sadece `year` yılında oluşturulan
    ürünler sayılır; oluşturma tarihi bilinmeyenler atlanır.
    """
    months = [MonthlySales(month=name) for name in MONTH_NAMES]

    for p in products:
        created = p.created_at
        if created is None or created.year != year:
            continue
        bucket = months[created.month - 1]
        bucket.sales += p.sales_value
        bucket.units += p.sold

    return months


def get_sales_trend(
    products: list[Product],
    today: date,
    days: int = TREND_DAYS,
) -> list[TrendPoint]:
    """
    Son N gün için günlük satış (satış geçmişinden).

    `today` dahil N ardışık nokta döner; kaydı olmayan günler 0'dır.
    """
    start = today - timedelta(days=days - 1)

    daily: dict[date, TrendPoint] = {}
    current = start
    while current <= today:
        daily[current] = TrendPoint(date=current)
        current += timedelta(days=1)

    skipped = 0
    for p in products:
        for event in p.sales_history:
            if event.date is None:
                skipped += 1
                continue
            bucket = daily.get(event.date.date())
            if bucket is not None:
                bucket.units += event.units
                bucket.revenue += event.revenue

    if skipped:
        logger.debug("Tarihi okunamayan %d satış kaydı trendden çıkarıldı", skipped)

    return list(daily.values())


def compute_dashboard_stats(
    products: Iterable[ProductInput],
    now: Optional[datetime] = None,
) -> DashboardStats:
    """
    Dashboard istatistik özetini oluşturur.

    Boş girdi (oturum yok veya ürün yok) → tüm değerler sıfır, listeler boş,
    `monthly_sales` 12 sıfır ay, trendler sıfır günler.
    """
    now = now or datetime.now()
    items = _normalize(products)

    total_inventory = sum(p.stock for p in items)
    total_sold = sum(p.sold for p in items)

    sales_trend_30 = get_sales_trend(items, now.date(), days=TREND_DAYS)

    return DashboardStats(
        total_products=len(items),
        total_inventory=total_inventory,
        low_stock_products=sum(1 for p in items if p.is_low_stock),
        total_value=sum(p.inventory_value for p in items),
        total_sold=total_sold,
        total_intake=sum(p.total_intake for p in items),
        category_stats=get_category_stats(items),
        top_selling=get_top_selling(items),
        low_stock_list=get_low_stock_list(items),
        sell_through=calculate_sell_through(total_sold, total_inventory),
        monthly_sales=get_monthly_sales(items, now.year),
        sales_trend_30=sales_trend_30,
        sales_trend_7=sales_trend_30[-TREND_SHORT_DAYS:],
    )
