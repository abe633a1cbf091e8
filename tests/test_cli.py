"""Komut satırı testleri."""

from catalog_dashboard.__main__ import main
from catalog_dashboard.store.json_store import JsonProductStore

USER = "admin@xyz.com"


def _seed(path):
    store = JsonProductStore(path)
    product = store.add_product(USER, {
        "name": "Lamp", "description": "Desk lamp", "category": "Home", "price": 500, "stock": 8,
    })
    return store, product


class TestCli:

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()

    def test_analyze_empty(self, tmp_path, capsys):
        assert main(["--data", str(tmp_path / "p.json"), "analyze"]) == 0
        assert "Ürün bulunamadı" in capsys.readouterr().out

    def test_analyze(self, tmp_path, capsys):
        path = tmp_path / "p.json"
        _seed(path)
        assert main(["--data", str(path), "analyze"]) == 0
        out = capsys.readouterr().out
        assert "Toplam Ürün:    1" in out
        assert "Lamp" in out

    def test_sell_and_error(self, tmp_path, capsys):
        path = tmp_path / "p.json"
        store, product = _seed(path)

        assert main(["--data", str(path), "sell", product.product_id, "3"]) == 0
        assert store.get_product(USER, product.product_id).stock == 5

        assert main(["--data", str(path), "sell", product.product_id, "50"]) == 1
        assert "Not enough stock" in capsys.readouterr().out

    def test_restock(self, tmp_path):
        path = tmp_path / "p.json"
        store, product = _seed(path)
        assert main(["--data", str(path), "restock", product.product_id, "4"]) == 0
        assert store.get_product(USER, product.product_id).stock == 12

    def test_report(self, tmp_path):
        path = tmp_path / "p.json"
        _seed(path)
        output = tmp_path / "r.xlsx"
        assert main(["--data", str(path), "report", "--output", str(output)]) == 0
        assert output.exists()

    def test_sample(self, tmp_path):
        path = tmp_path / "p.json"
        assert main(["--data", str(path), "sample"]) == 0
        products = JsonProductStore(path).list_products(USER)
        assert len(products) == 12
        assert all(p.sold + p.stock > 0 for p in products)
        assert any(p.category == "Others" for p in products)

    def test_list(self, tmp_path, capsys):
        path = tmp_path / "p.json"
        _, product = _seed(path)
        assert main(["--data", str(path), "list"]) == 0
        out = capsys.readouterr().out
        assert product.product_id in out
        assert "Lamp" in out
        assert "⚠" in out
        assert "1 ürün" in out

    def test_list_empty(self, tmp_path, capsys):
        assert main(["--data", str(tmp_path / "p.json"), "list"]) == 0
        assert "Ürün bulunamadı" in capsys.readouterr().out

    def test_add(self, tmp_path, capsys):
        path = tmp_path / "p.json"
        code = main(["--data", str(path), "add", "--name", "Mug", "--description", "Coffee mug",
                     "--price", "199", "--stock", "25"])
        assert code == 0
        assert "Ürün eklendi: Mug" in capsys.readouterr().out
        [product] = JsonProductStore(path).list_products(USER)
        assert (product.price, product.stock, product.category) == (199, 25, "Others")

    def test_add_invalid(self, tmp_path, capsys):
        path = tmp_path / "p.json"
        assert main(["--data", str(path), "add", "--name", "Mug", "--price", "0", "--stock", "1"]) == 1
        out = capsys.readouterr().out
        assert "description" in out
        assert "price" in out
        assert JsonProductStore(path).list_products(USER) == []

    def test_edit(self, tmp_path):
        path = tmp_path / "p.json"
        store, product = _seed(path)
        assert main(["--data", str(path), "edit", product.product_id, "--price", "650",
                     "--category", "Lighting"]) == 0
        edited = store.get_product(USER, product.product_id)
        assert edited.price == 650
        assert edited.category == "Lighting"
        assert edited.name == "Lamp"
        assert edited.stock == 8

    def test_edit_unknown(self, tmp_path, capsys):
        path = tmp_path / "p.json"
        _seed(path)
        assert main(["--data", str(path), "edit", "missing", "--price", "10"]) == 1
        assert "missing" in capsys.readouterr().out

    def test_delete(self, tmp_path):
        path = tmp_path / "p.json"
        store, product = _seed(path)
        assert main(["--data", str(path), "delete", product.product_id]) == 0
        assert store.list_products(USER) == []
        assert main(["--data", str(path), "delete", product.product_id]) == 1
