"""JSON ürün deposu testleri."""

import json
from datetime import datetime

import pytest

from catalog_dashboard.errors import (
    InvalidSaleError,
    ProductNotFoundError,
    ProductValidationError,
)
from catalog_dashboard.models.product import validate_product_data
from catalog_dashboard.store.json_store import JsonProductStore

USER = "admin@xyz.com"
OTHER = "admin2@xyz.com"


def _valid(**overrides) -> dict:
    data = {"name": "Lamp", "description": "Desk lamp", "price": 500, "stock": 8}
    data.update(overrides)
    return data


@pytest.fixture
def store(tmp_path) -> JsonProductStore:
    return JsonProductStore(tmp_path / "data" / "products.json")


class TestValidation:

    def test_valid_data(self):
        clean = validate_product_data(_valid(name="  Lamp ", category="Home"))
        assert clean.name == "Lamp"
        assert clean.category == "Home"
        assert clean.price == 500
        assert clean.image_url is None

    def test_collects_all_errors(self):
        with pytest.raises(ProductValidationError) as exc:
            validate_product_data({"name": "", "price": 0, "stock": -1})
        assert set(exc.value.errors) == {"name", "description", "price", "stock"}

    def test_numeric_strings_rejected(self):
        with pytest.raises(ProductValidationError) as exc:
            validate_product_data(_valid(price="500", stock="8"))
        assert set(exc.value.errors) == {"price", "stock"}

    def test_stock_must_be_integer(self):
        with pytest.raises(ProductValidationError):
            validate_product_data(_valid(stock=2.5))

    def test_bool_is_not_a_number(self):
        with pytest.raises(ProductValidationError):
            validate_product_data(_valid(stock=True))


class TestCrud:

    def test_missing_file_is_empty(self, store):
        assert store.list_products(USER) == []

    def test_add_and_list(self, store):
        created = store.add_product(USER, _valid(category="Home"), now=datetime(2026, 5, 1))
        products = store.list_products(USER)
        assert len(products) == 1
        assert products[0].product_id == created.product_id
        assert products[0].category == "Home"
        assert products[0].created_at == datetime(2026, 5, 1)
        assert products[0].sold == 0
        assert products[0].total_intake == 0

    def test_scoped_to_user(self, store):
        store.add_product(USER, _valid(name="Mine"))
        store.add_product(OTHER, _valid(name="Theirs"))
        assert [p.name for p in store.list_products(USER)] == ["Mine"]
        assert [p.name for p in store.list_products(OTHER)] == ["Theirs"]

    def test_insertion_order(self, store):
        for name in ["A", "B", "C"]:
            store.add_product(USER, _valid(name=name))
        assert [p.name for p in store.list_products(USER)] == ["A", "B", "C"]

    def test_get_other_users_product_fails(self, store):
        created = store.add_product(OTHER, _valid())
        with pytest.raises(ProductNotFoundError):
            store.get_product(USER, created.product_id)

    def test_delete(self, store):
        created = store.add_product(USER, _valid())
        store.delete_product(USER, created.product_id)
        assert store.list_products(USER) == []
        with pytest.raises(ProductNotFoundError):
            store.delete_product(USER, created.product_id)

    def test_empty_category_defaults_to_others(self, store):
        created = store.add_product(USER, _valid(category="   "))
        assert created.category == "Others"
        assert store.get_product(USER, created.product_id).category == "Others"

    def test_file_shape(self, store):
        store.add_product(USER, _valid())
        payload = json.loads(store.path.read_text(encoding="utf-8"))
        doc = payload["products"][0]
        assert doc["userId"] == USER
        assert {"_id", "totalIntake", "createdAt", "salesHistory"} <= set(doc)


class TestMarkSold:
    """Satış kaydı: stok, satılan, gelir ve geçmiş birlikte güncellenir."""

    def test_updates_counters_and_history(self, store):
        created = store.add_product(USER, _valid(price=250, stock=10))
        sold_at = datetime(2026, 10, 18, 14, 0)
        product = store.mark_sold(USER, created.product_id, 3, now=sold_at)

        assert product.stock == 7
        assert product.sold == 3
        assert product.total_intake == 750
        assert len(product.sales_history) == 1
        event = product.sales_history[0]
        assert (event.date, event.units, event.revenue) == (sold_at, 3, 750)

        reloaded = store.get_product(USER, created.product_id)
        assert reloaded.stock == 7
        assert reloaded.sales_history[0].date == sold_at

    def test_intake_uses_price_at_sale(self, store):
        created = store.add_product(USER, _valid(price=100, stock=10))
        store.mark_sold(USER, created.product_id, 2)

        raw = json.loads(store.path.read_text(encoding="utf-8"))
        raw["products"][0]["price"] = 150
        store.path.write_text(json.dumps(raw), encoding="utf-8")

        product = store.mark_sold(USER, created.product_id, 1)
        assert product.total_intake == 350

    def test_not_enough_stock(self, store):
        created = store.add_product(USER, _valid(stock=2))
        with pytest.raises(InvalidSaleError, match="Available: 2"):
            store.mark_sold(USER, created.product_id, 3)
        assert store.get_product(USER, created.product_id).stock == 2

    @pytest.mark.parametrize("units", [0, -1, 1.5, None, True])
    def test_invalid_units(self, store, units):
        created = store.add_product(USER, _valid())
        with pytest.raises(InvalidSaleError):
            store.mark_sold(USER, created.product_id, units)

    def test_unknown_product(self, store):
        with pytest.raises(ProductNotFoundError):
            store.mark_sold(USER, "missing", 1)


class TestRestock:

    def test_adds_stock_without_touching_sold(self, store):
        created = store.add_product(USER, _valid(stock=5))
        store.mark_sold(USER, created.product_id, 2)
        product = store.restock(USER, created.product_id, 10)
        assert product.stock == 13
        assert product.sold == 2

    def test_invalid_units(self, store):
        created = store.add_product(USER, _valid())
        with pytest.raises(ProductValidationError):
            store.restock(USER, created.product_id, 0)

    def test_keeps_untouched_fields_verbatim(self, store):
        """Bozuk ama değişmeyen alanlar (tarih, eski satış kaydı) olduğu gibi kalır."""
        store.path.parent.mkdir(parents=True)
        legacy = {
            "_id": "p1", "userId": USER, "name": "Lamp", "description": "Desk lamp",
            "price": 100, "stock": 10, "sold": 1, "totalIntake": 100,
            "createdAt": "03/05/2026", "vendorNote": "keep me",
            "salesHistory": [{"date": "yesterday", "units": 1, "revenue": 100}],
        }
        store.path.write_text(json.dumps({"products": [legacy]}), encoding="utf-8")

        store.mark_sold(USER, "p1", 2, now=datetime(2026, 10, 18, 9, 0))
        store.restock(USER, "p1", 5)

        doc = json.loads(store.path.read_text(encoding="utf-8"))["products"][0]
        assert doc["createdAt"] == "03/05/2026"
        assert doc["vendorNote"] == "keep me"
        assert doc["price"] == 100
        assert doc["salesHistory"][0] == {"date": "yesterday", "units": 1, "revenue": 100}
        assert doc["salesHistory"][1]["date"] == "2026-10-18T09:00:00"
        assert (doc["stock"], doc["sold"], doc["totalIntake"]) == (13, 3, 300)


class TestUpdateProduct:

    def test_partial_edit(self, store):
        created = store.add_product(USER, _valid(category="Home", image_url="a.png"))
        product = store.update_product(USER, created.product_id, {"price": 650, "name": " Lamp XL "})
        assert product.name == "Lamp XL"
        assert product.price == 650
        assert product.description == "Desk lamp"
        assert product.category == "Home"
        assert product.image_url == "a.png"

    def test_keeps_sales_counters(self, store):
        created = store.add_product(USER, _valid(stock=10))
        store.mark_sold(USER, created.product_id, 4)
        product = store.update_product(USER, created.product_id, {"stock": 20})
        assert product.stock == 20
        assert product.sold == 4
        assert product.total_intake == 2000
        assert len(product.sales_history) == 1

    def test_empty_category_falls_back(self, store):
        created = store.add_product(USER, _valid(category="Home"))
        product = store.update_product(USER, created.product_id, {"category": "  "})
        assert product.category == "Others"

    def test_invalid_edit_leaves_document(self, store):
        created = store.add_product(USER, _valid())
        with pytest.raises(ProductValidationError) as exc:
            store.update_product(USER, created.product_id, {"price": 0, "description": ""})
        assert set(exc.value.errors) == {"price", "description"}
        assert store.get_product(USER, created.product_id).price == 500

    def test_unknown_product(self, store):
        with pytest.raises(ProductNotFoundError):
            store.update_product(USER, "missing", {"price": 10})

    def test_other_users_product(self, store):
        created = store.add_product(OTHER, _valid())
        with pytest.raises(ProductNotFoundError):
            store.update_product(USER, created.product_id, {"price": 10})
