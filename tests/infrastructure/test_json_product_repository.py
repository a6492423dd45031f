"""Tests for the JSON-file product store, against a real temp file."""

import json
import os
import threading
from pathlib import Path

import pytest

from catalog.application.add_product import AddProductHandler
from catalog.domain.exceptions import StorageError, ValidationError
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import Money
from catalog.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def _product(pid, code, title="Mate"):
    return Product(pid, title, "desc", Money.of("12.50"), "thumb.jpg", code, 3)


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "products.json"


class TestFileLifecycle:

    def test_missing_file_created_empty(self, store_path):
        repo = JsonProductRepository(store_path)
        assert store_path.read_text(encoding="utf-8") == "[]"
        assert repo.list_all() == []

    def test_existing_file_not_overwritten(self, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text(json.dumps([{
            "id": 4, "title": "Mate", "description": "d", "price": 10,
            "thumbnail": "t", "code": "M", "stock": 1,
        }]), encoding="utf-8")
        repo = JsonProductRepository(store_path)
        assert [p.id for p in repo.list_all()] == [4]

    def test_numeric_price_from_older_files_is_read(self, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text(json.dumps([{
            "id": 1, "title": "Mate", "description": "d", "price": 19.99,
            "thumbnail": "t", "code": "M", "stock": 1,
        }]), encoding="utf-8")
        product = JsonProductRepository(store_path).get_by_id(1)
        assert str(product.price) == "$19.99"


class TestRoundTrip:

    def test_write_then_read_keeps_order_and_content(self, store_path):
        repo = JsonProductRepository(store_path)
        products = [_product(1, "A"), _product(2, "B", "Bombilla"), _product(3, "C")]
        for p in products:
            repo.save(p)

        reread = JsonProductRepository(store_path).list_all()
        assert reread == products

    def test_save_without_id_assigns_next(self, store_path):
        repo = JsonProductRepository(store_path)
        repo.save(_product(1, "A"))
        new = _product(None, "B")
        repo.save(new)
        assert new.id == 2

    def test_save_existing_replaces_in_place(self, store_path):
        repo = JsonProductRepository(store_path)
        for p in (_product(1, "A"), _product(2, "B"), _product(3, "C")):
            repo.save(p)
        repo.save(_product(2, "B", "Renamed"))
        titles = [p.title for p in repo.list_all()]
        assert titles == ["Mate", "Renamed", "Mate"]

    def test_lookup_by_id_and_code(self, store_path):
        repo = JsonProductRepository(store_path)
        repo.save(_product(1, "A"))
        assert repo.get_by_id(1).code == "A"
        assert repo.get_by_id(2) is None
        assert repo.get_by_code("A").id == 1
        assert repo.get_by_code("Z") is None


class TestNextId:

    def test_empty_store_starts_at_one(self, store_path):
        assert JsonProductRepository(store_path).next_id() == 1

    def test_one_more_than_max(self, store_path):
        repo = JsonProductRepository(store_path)
        repo.save(_product(1, "A"))
        repo.save(_product(7, "B"))
        assert repo.next_id() == 8


class TestDelete:

    def test_delete_removes_record(self, store_path):
        repo = JsonProductRepository(store_path)
        repo.save(_product(1, "A"))
        repo.save(_product(2, "B"))
        repo.delete(1)
        assert [p.id for p in repo.list_all()] == [2]

    def test_delete_unknown_id_leaves_file_unchanged(self, store_path):
        repo = JsonProductRepository(store_path)
        repo.save(_product(1, "A"))
        before = store_path.read_bytes()
        repo.delete(99)
        assert store_path.read_bytes() == before


class TestStorageFailures:

    def test_malformed_json_raises_storage_error(self, store_path):
        repo = JsonProductRepository(store_path)
        store_path.write_text("[{not json", encoding="utf-8")
        with pytest.raises(StorageError, match="Cannot read"):
            repo.list_all()

    def test_non_list_payload_raises_storage_error(self, store_path):
        repo = JsonProductRepository(store_path)
        store_path.write_text('{"id": 1}', encoding="utf-8")
        with pytest.raises(StorageError, match="not a list"):
            repo.list_all()

    def test_record_missing_field_raises_storage_error(self, store_path):
        repo = JsonProductRepository(store_path)
        store_path.write_text('[{"id": 1, "title": "x"}]', encoding="utf-8")
        with pytest.raises(StorageError, match="malformed"):
            repo.get_by_id(1)

    def test_unreadable_store_is_not_reported_as_not_found(self, store_path):
        repo = JsonProductRepository(store_path)
        store_path.unlink()
        with pytest.raises(StorageError):
            repo.get_by_id(1)

    def test_boolean_id_raises_storage_error(self, store_path):
        repo = JsonProductRepository(store_path)
        store_path.write_text(json.dumps([{
            "id": True, "title": "Mate", "description": "d", "price": "1",
            "thumbnail": "t", "code": "M", "stock": 1,
        }]), encoding="utf-8")
        with pytest.raises(StorageError, match="not a list of records"):
            repo.list_all()

    def test_failed_write_raises_storage_error_and_keeps_file(self, store_path, monkeypatch):
        repo = JsonProductRepository(store_path)
        repo.save(_product(1, "A"))
        before = store_path.read_bytes()

        def refuse(src, dst):
            raise PermissionError("read-only filesystem")

        monkeypatch.setattr(os, "replace", refuse)
        with pytest.raises(StorageError, match="Cannot write") as excinfo:
            repo.save(_product(2, "B"))

        assert isinstance(excinfo.value.__cause__, OSError)
        assert store_path.read_bytes() == before
        assert [p.name for p in store_path.parent.iterdir()] == ["products.json"]


class TestDuplicateCode:

    def test_rejected_add_leaves_file_bytes_unchanged(self, store_path):
        repo = JsonProductRepository(store_path)
        handler = AddProductHandler(repo)
        handler.handle(
            title="Mate", description="d", price="10",
            thumbnail="t", code="MAT-01", stock=1,
        )
        before = store_path.read_bytes()

        with pytest.raises(ValidationError, match="already exists"):
            handler.handle(
                title="Otro mate", description="d", price="12",
                thumbnail="t", code="MAT-01", stock=2,
            )

        assert store_path.read_bytes() == before
        assert [p.code for p in repo.list_all()] == ["MAT-01"]


class TestWrites:

    def test_no_temp_files_left_behind(self, store_path):
        repo = JsonProductRepository(store_path)
        repo.save(_product(1, "A"))
        repo.delete(1)
        assert [p.name for p in store_path.parent.iterdir()] == ["products.json"]

    def test_concurrent_adds_lose_nothing(self, store_path):
        errors = []

        def worker(n):
            # Each thread gets its own repository instance on the same file
            handler = AddProductHandler(JsonProductRepository(store_path))
            try:
                for i in range(5):
                    handler.handle(
                        title="Item", description="d", price="1",
                        thumbnail="t", code=f"T{n}-{i}", stock=1,
                    )
            except Exception as exc:
                errors.append(exc)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        products = JsonProductRepository(store_path).list_all()
        assert len(products) == 40
        assert sorted(p.id for p in products) == list(range(1, 41))
