"""
Excel katalog raporu yazıcı.
5 sayfa: OZET, KATEGORILER, URUNLER, AYLIK_SATIS, TREND
"""
from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional

from openpyxl import Workbook
from openpyxl.chart import BarChart, LineChart, Reference
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from catalog_dashboard.config.settings import REPORT_DATE_FORMAT
from catalog_dashboard.models.stats import DashboardStats, ProductLine

# ── Stil Sabitleri ────────────────────────────────────────
HEADER_FILL = PatternFill(start_color="2E86AB", end_color="2E86AB", fill_type="solid")
HEADER_FONT = Font(name="Calibri", bold=True, color="FFFFFF", size=11)
TITLE_FONT = Font(name="Calibri", bold=True, size=14, color="2E86AB")
SUBTITLE_FONT = Font(name="Calibri", bold=True, size=11, color="444444")
NORMAL_FONT = Font(name="Calibri", size=10)
MONEY_FORMAT = '#,##0.00 "₹"'
PERCENT_FORMAT = '0.0"%"'
THIN_BORDER = Border(
    left=Side(style="thin", color="CCCCCC"),
    right=Side(style="thin", color="CCCCCC"),
    top=Side(style="thin", color="CCCCCC"),
    bottom=Side(style="thin", color="CCCCCC"),
)

# KPI kartları için renkler
KPI_FILLS = {
    "green": PatternFill(start_color="E8F5E9", end_color="E8F5E9", fill_type="solid"),
    "blue": PatternFill(start_color="E3F2FD", end_color="E3F2FD", fill_type="solid"),
    "orange": PatternFill(start_color="FFF3E0", end_color="FFF3E0", fill_type="solid"),
    "red": PatternFill(start_color="FFEBEE", end_color="FFEBEE", fill_type="solid"),
    "purple": PatternFill(start_color="F3E5F5", end_color="F3E5F5", fill_type="solid"),
}
ALERT_FILL = PatternFill(start_color="FFCDD2", end_color="FFCDD2", fill_type="solid")


def _apply_header_row(ws, row: int, col_start: int, col_end: int):
    """Başlık satırına stil uygular."""
    for col in range(col_start, col_end + 1):
        cell = ws.cell(row=row, column=col)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = Alignment(horizontal="center", vertical="center")
        cell.border = THIN_BORDER


def _apply_data_row(ws, row: int, col_start: int, col_end: int):
    """Veri satırına stil uygular."""
    for col in range(col_start, col_end + 1):
        cell = ws.cell(row=row, column=col)
        cell.font = NORMAL_FONT
        cell.border = THIN_BORDER
        cell.alignment = Alignment(vertical="center")


def _auto_width(ws, min_width: int = 10, max_width: int = 40):
    """Sütun genişliklerini otomatik ayarlar."""
    for col_cells in ws.columns:
        max_len = min_width
        col_letter = get_column_letter(col_cells[0].column)
        for cell in col_cells:
            if cell.value:
                cell_len = len(str(cell.value))
                if cell_len > max_len:
                    max_len = min(cell_len + 2, max_width)
        ws.column_dimensions[col_letter].width = max_len


def _write_headers(ws, row: int, headers: list[str]):
    for i, h in enumerate(headers, 1):
        ws.cell(row=row, column=i, value=h)
    _apply_header_row(ws, row, 1, len(headers))


def generate_report(
    stats: DashboardStats,
    output_path: Path,
    store_name: str = "Mağaza",
    report_date: Optional[date] = None,
) -> Path:
    """
    Excel katalog raporu oluşturur.

    Returns: oluşturulan dosya yolu
    """
    wb = Workbook()

    _write_summary_sheet(wb, stats, store_name, report_date or date.today())
    _write_category_sheet(wb, stats)
    _write_product_sheet(wb, stats)
    _write_monthly_sheet(wb, stats)
    _write_trend_sheet(wb, stats)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(output_path)
    return output_path


# ══════════════════════════════════════════════════════════
#  SAYFA 1: ÖZET
# ══════════════════════════════════════════════════════════
def _write_summary_sheet(wb, stats: DashboardStats, store_name: str, report_date: date):
    ws = wb.active
    ws.title = "OZET"
    ws.sheet_properties.tabColor = "2E86AB"

    ws.merge_cells("A1:C1")
    ws["A1"] = f"{store_name} - Katalog Raporu"
    ws["A1"].font = TITLE_FONT
    ws["A1"].alignment = Alignment(horizontal="center")

    ws.merge_cells("A2:C2")
    ws["A2"] = f"Rapor Tarihi: {report_date.strftime(REPORT_DATE_FORMAT)}"
    ws["A2"].font = SUBTITLE_FONT
    ws["A2"].alignment = Alignment(horizontal="center")

    # ── KPI Kartları ──
    row = 4
    kpis = [
        ("Toplam Ürün", stats.total_products, "green", None),
        ("Toplam Stok", stats.total_inventory, "blue", None),
        ("Düşük Stoklu Ürün", stats.low_stock_products, "red", None),
        ("Stok Değeri", stats.total_value, "orange", MONEY_FORMAT),
        ("Satılan Adet", stats.total_sold, "green", None),
        ("Toplam Gelir", stats.total_intake, "purple", MONEY_FORMAT),
        ("Sell-Through", stats.sell_through, "blue", PERCENT_FORMAT),
    ]

    _write_headers(ws, row, ["Metrik", "Değer"])

    for metric_name, value, color, fmt in kpis:
        row += 1
        ws.cell(row=row, column=1, value=metric_name)
        ws.cell(row=row, column=1).font = Font(name="Calibri", bold=True, size=10)
        cell = ws.cell(row=row, column=2, value=value)
        if fmt:
            cell.number_format = fmt
        for col in range(1, 3):
            ws.cell(row=row, column=col).fill = KPI_FILLS[color]
            ws.cell(row=row, column=col).border = THIN_BORDER

    _auto_width(ws)


# ══════════════════════════════════════════════════════════
#  SAYFA 2: KATEGORİLER
# ══════════════════════════════════════════════════════════
def _write_category_sheet(wb, stats: DashboardStats):
    ws = wb.create_sheet("KATEGORILER")
    ws.sheet_properties.tabColor = "4CAF50"

    _write_headers(ws, 1, ["Kategori", "Stok", "Satılan", "Stok Değeri"])

    for row, c in enumerate(stats.category_stats, 2):
        ws.cell(row=row, column=1, value=c.category)
        ws.cell(row=row, column=2, value=c.stock)
        ws.cell(row=row, column=3, value=c.sold)
        ws.cell(row=row, column=4, value=c.value)
        ws.cell(row=row, column=4).number_format = MONEY_FORMAT
        _apply_data_row(ws, row, 1, 4)

    last_row = len(stats.category_stats) + 1
    if stats.category_stats:
        chart = BarChart()
        chart.type = "col"
        chart.title = "Kategori Bazında Stok Değeri"
        chart.style = 10
        chart.y_axis.title = "Değer (₹)"
        chart.width = 20
        chart.height = 10

        data_ref = Reference(ws, min_col=4, min_row=1, max_row=last_row)
        cats_ref = Reference(ws, min_col=1, min_row=2, max_row=last_row)
        chart.add_data(data_ref, titles_from_data=True)
        chart.set_categories(cats_ref)
        ws.add_chart(chart, "F2")

    _auto_width(ws)


# ══════════════════════════════════════════════════════════
#  SAYFA 3: ÜRÜNLER
# ══════════════════════════════════════════════════════════
def _write_lines(ws, row: int, title: str, lines: list[ProductLine], value_label: str,
                 highlight: bool = False) -> int:
    ws.cell(row=row, column=1, value=title)
    ws.cell(row=row, column=1).font = SUBTITLE_FONT
    row += 1
    _write_headers(ws, row, ["#", "Ürün", "Stok", "Satılan", value_label])

    for rank, line in enumerate(lines, 1):
        row += 1
        ws.cell(row=row, column=1, value=rank)
        ws.cell(row=row, column=2, value=line.name[:50])
        ws.cell(row=row, column=3, value=line.stock)
        ws.cell(row=row, column=4, value=line.sold)
        ws.cell(row=row, column=5, value=line.value)
        ws.cell(row=row, column=5).number_format = MONEY_FORMAT
        _apply_data_row(ws, row, 1, 5)
        if highlight and line.stock == 0:
            ws.cell(row=row, column=3).fill = ALERT_FILL
    return row


def _write_product_sheet(wb, stats: DashboardStats):
    ws = wb.create_sheet("URUNLER")
    ws.sheet_properties.tabColor = "FF9800"

    row = _write_lines(ws, 1, "En Çok Satan 5 Ürün", stats.top_selling, "Satış Değeri")
    _write_lines(ws, row + 2, "Düşük Stoklu Ürünler", stats.low_stock_list, "Stok Değeri",
                 highlight=True)

    _auto_width(ws)


# ══════════════════════════════════════════════════════════
#  SAYFA 4: AYLIK SATIŞ
# ══════════════════════════════════════════════════════════
def _write_monthly_sheet(wb, stats: DashboardStats):
    ws = wb.create_sheet("AYLIK_SATIS")
    ws.sheet_properties.tabColor = "9C27B0"

    _write_headers(ws, 1, ["Ay", "Satış (₹)", "Adet"])

    for row, m in enumerate(stats.monthly_sales, 2):
        ws.cell(row=row, column=1, value=m.month)
        ws.cell(row=row, column=2, value=m.sales)
        ws.cell(row=row, column=2).number_format = MONEY_FORMAT
        ws.cell(row=row, column=3, value=m.units)
        _apply_data_row(ws, row, 1, 3)

    last_row = len(stats.monthly_sales) + 1
    chart = LineChart()
    chart.title = "Aylık Satış"
    chart.style = 10
    chart.y_axis.title = "Satış (₹)"
    chart.x_axis.title = "Ay"
    chart.width = 20
    chart.height = 10

    data_ref = Reference(ws, min_col=2, min_row=1, max_row=last_row)
    cats_ref = Reference(ws, min_col=1, min_row=2, max_row=last_row)
    chart.add_data(data_ref, titles_from_data=True)
    chart.set_categories(cats_ref)
    ws.add_chart(chart, "E2")

    _auto_width(ws)


# ══════════════════════════════════════════════════════════
#  SAYFA 5: GÜNLÜK TREND
# ══════════════════════════════════════════════════════════
def _write_trend_sheet(wb, stats: DashboardStats):
    ws = wb.create_sheet("TREND")
    ws.sheet_properties.tabColor = "E91E63"

    _write_headers(ws, 1, ["Tarih", "Adet", "Gelir (₹)"])

    for row, p in enumerate(stats.sales_trend_30, 2):
        ws.cell(row=row, column=1, value=p.date.strftime("%d.%m"))
        ws.cell(row=row, column=2, value=p.units)
        ws.cell(row=row, column=3, value=p.revenue)
        ws.cell(row=row, column=3).number_format = MONEY_FORMAT
        _apply_data_row(ws, row, 1, 3)

    # Toplam satırı
    total_row = len(stats.sales_trend_30) + 2
    ws.cell(row=total_row, column=1, value="TOPLAM")
    ws.cell(row=total_row, column=1).font = Font(name="Calibri", bold=True, size=11)
    ws.cell(row=total_row, column=2, value=sum(p.units for p in stats.sales_trend_30))
    ws.cell(row=total_row, column=3, value=sum(p.revenue for p in stats.sales_trend_30))
    ws.cell(row=total_row, column=3).number_format = MONEY_FORMAT

    _auto_width(ws)
