"""
catalog_dashboard CLI - Ürün kataloğu yönetim sistemi.

Kullanım:
    python -m catalog_dashboard sample            → Örnek katalog oluştur
    python -m catalog_dashboard list              → Ürünleri listele
    python -m catalog_dashboard add --name ...    → Ürün ekle
    python -m catalog_dashboard edit ID --price . → Ürün düzenle
    python -m catalog_dashboard delete ID         → Ürün sil
    python -m catalog_dashboard analyze           → Katalog istatistiklerini göster
    python -m catalog_dashboard report            → Excel rapor oluştur
    python -m catalog_dashboard advice            → AI danışman önerisi
    python -m catalog_dashboard sell ID ADET      → Satış kaydet
    python -m catalog_dashboard restock ID ADET   → Stok ekle
"""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from catalog_dashboard.config.settings import (
    ADMIN_CREDENTIALS,
    CURRENCY_SYMBOL,
    PRODUCTS_FILE,
    REPORTS_DIR,
)
from catalog_dashboard.errors import CatalogError
from catalog_dashboard.store.json_store import JsonProductStore


def cmd_sample(args, store):
    """Örnek katalog oluşturur."""
    from catalog_dashboard.scripts.generate_sample import main as generate
    generate(store.path)


def cmd_analyze(args, store):
    """Katalog istatistiklerini hesaplar ve özet gösterir."""
    from catalog_dashboard.engine.aggregator import compute_dashboard_stats

    products = store.list_products(args.user)
    if not products:
        print("\n  Ürün bulunamadı!")
        print("  Önce 'python -m catalog_dashboard sample' ile örnek katalog oluşturun.")
        return

    stats = compute_dashboard_stats(products)
    _print_stats(stats)


def _print_stats(stats):
    """İstatistik özetini ekrana yazdırır."""
    cur = CURRENCY_SYMBOL
    print(f"\n{'='*60}")
    print(f"  KATALOG ANALİZ RAPORU")
    print(f"{'='*60}\n")
    print(f"  Toplam Ürün:    {stats.total_products}")
    print(f"  Toplam Stok:    {stats.total_inventory} adet")
    print(f"  Düşük Stok:     {stats.low_stock_products} ürün")
    print(f"  Stok Değeri:    {cur}{stats.total_value:,.2f}")
    print(f"  Satılan:        {stats.total_sold} adet")
    print(f"  Toplam Gelir:   {cur}{stats.total_intake:,.2f}")
    print(f"  Sell-Through:   {stats.sell_through:.1f}%")

    if stats.category_stats:
        print(f"\n  Kategoriler:")
        for c in stats.category_stats:
            print(f"    {c.category[:25]:25s} stok {c.stock:4d}  satılan {c.sold:4d}  {cur}{c.value:,.2f}")

    if stats.top_selling:
        print(f"\n  En Çok Satanlar:")
        for i, p in enumerate(stats.top_selling, 1):
            print(f"    {i}. {p.name[:40]:40s} {p.sold:3d} adet  {cur}{p.value:,.2f}")

    if stats.low_stock_list:
        print(f"\n  ⚠ Düşük Stok:")
        for p in stats.low_stock_list:
            print(f"    - {p.name} ({p.stock} adet)")

    week_units = sum(p.units for p in stats.sales_trend_7)
    week_revenue = sum(p.revenue for p in stats.sales_trend_7)
    print(f"\n  Son 7 Gün:      {week_units} adet  {cur}{week_revenue:,.2f}")
    print()


def cmd_report(args, store):
    """Excel rapor oluşturur."""
    from catalog_dashboard.engine.aggregator import compute_dashboard_stats
    from catalog_dashboard.writers.excel_report import generate_report

    stats = compute_dashboard_stats(store.list_products(args.user))
    output = Path(args.output) if args.output else REPORTS_DIR / f"katalog_{date.today():%Y%m%d}.xlsx"
    path = generate_report(stats, output, store_name=args.user)
    print(f"  Rapor oluşturuldu: {path}")


def cmd_advice(args, store):
    """AI danışman önerisini gösterir."""
    from catalog_dashboard.advisor.advice import build_advice_summary, get_advice
    from catalog_dashboard.engine.aggregator import compute_dashboard_stats

    stats = compute_dashboard_stats(store.list_products(args.user))
    advice = get_advice(build_advice_summary(stats))
    print(f"\n  AI Danışman ({advice.provider}):\n")
    for line in advice.text.splitlines():
        print(f"    {line.strip()}")
    print()


def cmd_list(args, store):
    """Kullanıcının ürünlerini tablo olarak yazdırır."""
    products = store.list_products(args.user)
    if not products:
        print("\n  Ürün bulunamadı!")
        return

    cur = CURRENCY_SYMBOL
    print()
    for p in products:
        flag = " ⚠" if p.is_low_stock else ""
        print(f"  {p.product_id}  {p.name[:30]:30s} {p.category[:15]:15s} "
              f"{cur}{p.price:>10,.2f}  stok {p.stock:4d}  satılan {p.sold:4d}{flag}")
    print(f"\n  {len(products)} ürün\n")


def _product_fields(args) -> dict:
    """Komut satırında verilen ürün alanları (verilmeyenler hariç)."""
    fields = {
        "name": args.name,
        "description": args.description,
        "price": args.price,
        "stock": args.stock,
        "category": args.category,
        "image_url": args.image_url,
    }
    return {k: v for k, v in fields.items() if v is not None}


def cmd_add(args, store):
    product = store.add_product(args.user, _product_fields(args))
    print(f"  Ürün eklendi: {product.name} ({product.product_id})")


def cmd_edit(args, store):
    product = store.update_product(args.user, args.product_id, _product_fields(args))
    print(f"  Ürün güncellendi: {product.name} ({CURRENCY_SYMBOL}{product.price:,.2f}, stok {product.stock})")


def cmd_delete(args, store):
    store.delete_product(args.user, args.product_id)
    print(f"  Ürün silindi: {args.product_id}")


def cmd_sell(args, store):
    product = store.mark_sold(args.user, args.product_id, args.units)
    print(f"  {args.units} adet satıldı: {product.name} (kalan stok: {product.stock})")


def cmd_restock(args, store):
    product = store.restock(args.user, args.product_id, args.units)
    print(f"  Stok eklendi: {product.name} (yeni stok: {product.stock})")


COMMANDS = {
    "sample": cmd_sample,
    "list": cmd_list,
    "add": cmd_add,
    "edit": cmd_edit,
    "delete": cmd_delete,
    "analyze": cmd_analyze,
    "report": cmd_report,
    "advice": cmd_advice,
    "sell": cmd_sell,
    "restock": cmd_restock,
}


def _add_product_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--name", help="Ürün adı")
    parser.add_argument("--description", help="Açıklama")
    parser.add_argument("--price", type=float, help="Fiyat")
    parser.add_argument("--stock", type=int, help="Stok adedi")
    parser.add_argument("--category", help="Kategori (boş → Others)")
    parser.add_argument("--image-url", dest="image_url", help="Görsel adresi")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catalog_dashboard",
        description="Ürün Kataloğu Yönetim Sistemi",
    )
    parser.add_argument("--data", default=str(PRODUCTS_FILE), help="Katalog dosyası")
    parser.add_argument(
        "--user",
        default=ADMIN_CREDENTIALS[0]["email"].lower(),
        help="Kullanıcı (e-posta)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Detaylı log")
    sub = parser.add_subparsers(dest="command", help="Komutlar")

    sub.add_parser("sample", help="Örnek katalog oluştur")
    sub.add_parser("list", help="Ürünleri listele")

    add = sub.add_parser("add", help="Ürün ekle")
    _add_product_arguments(add)

    edit = sub.add_parser("edit", help="Ürün düzenle (sadece verilen alanlar)")
    edit.add_argument("product_id")
    _add_product_arguments(edit)

    delete = sub.add_parser("delete", help="Ürün sil")
    delete.add_argument("product_id")

    sub.add_parser("analyze", help="Katalog istatistiklerini göster")
    report = sub.add_parser("report", help="Excel rapor oluştur")
    report.add_argument("--output", help="Çıktı dosyası (.xlsx)")
    sub.add_parser("advice", help="AI danışman önerisi")

    sell = sub.add_parser("sell", help="Satış kaydet")
    sell.add_argument("product_id")
    sell.add_argument("units", type=int)

    restock = sub.add_parser("restock", help="Stok ekle")
    restock.add_argument("product_id")
    restock.add_argument("units", type=int)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    store = JsonProductStore(Path(args.data))
    try:
        handler(args, store)
    except CatalogError as e:
        print(f"  Hata: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
