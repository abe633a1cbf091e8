"""
Dashboard istatistik özeti - her istekte yeniden hesaplanır, saklanmaz.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass
class CategoryStat:
    """Kategori bazında stok, satış ve stok değeri."""
    category: str
    stock: int = 0
    sold: int = 0
    value: float = 0.0


@dataclass
class ProductLine:
    """Top-selling / düşük stok listelerindeki tek satır."""
    name: str
    stock: int = 0
    sold: int = 0
    value: float = 0.0


@dataclass
class MonthlySales:
    month: str
    sales: float = 0.0
    units: int = 0


@dataclass
class TrendPoint:
    """Tek bir takvim gününün satış toplamı."""
    date: date
    units: int = 0
    revenue: float = 0.0


def _line_dict(line: ProductLine) -> dict:
    return {"name": line.name, "stock": line.stock, "sold": line.sold, "value": line.value}


@dataclass
class DashboardStats:
    """Kullanıcının kataloğu için anlık istatistik görüntüsü."""
    total_products: int = 0
    total_inventory: int = 0
    low_stock_products: int = 0
    total_value: float = 0.0
    total_sold: int = 0
    total_intake: float = 0.0

    category_stats: list[CategoryStat] = field(default_factory=list)
    top_selling: list[ProductLine] = field(default_factory=list)
    low_stock_list: list[ProductLine] = field(default_factory=list)
    sell_through: float = 0.0

    monthly_sales: list[MonthlySales] = field(default_factory=list)
    sales_trend_30: list[TrendPoint] = field(default_factory=list)
    sales_trend_7: list[TrendPoint] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Render katmanı ve AI danışmanı için camelCase sözlük."""
        return {
            "totalProducts": self.total_products,
            "totalInventory": self.total_inventory,
            "lowStockProducts": self.low_stock_products,
            "totalValue": self.total_value,
            "totalSold": self.total_sold,
            "totalIntake": self.total_intake,
            "categoryStats": [
                {"category": c.category, "stock": c.stock, "sold": c.sold, "value": c.value}
                for c in self.category_stats
            ],
            "topSelling": [_line_dict(p) for p in self.top_selling],
            "lowStockList": [_line_dict(p) for p in self.low_stock_list],
            "sellThrough": self.sell_through,
            "monthlySales": [
                {"month": m.month, "sales": m.sales, "units": m.units}
                for m in self.monthly_sales
            ],
            "salesTrend30": [
                {"date": p.date.isoformat(), "units": p.units, "revenue": p.revenue}
                for p in self.sales_trend_30
            ],
            "salesTrend7": [
                {"date": p.date.isoformat(), "units": p.units, "revenue": p.revenue}
                for p in self.sales_trend_7
            ],
        }
