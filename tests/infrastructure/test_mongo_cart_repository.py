"""Tests for the MongoDB cart store, against a mongomock collection."""

import mongomock
import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from catalog.domain.exceptions import (
    ConcurrentModificationError,
    EntityNotFoundError,
    StorageError,
)
from catalog.domain.model.cart import Cart, CartLineItem
from catalog.domain.model.value_objects import Quantity
from catalog.infrastructure.persistence.mongo_cart_repository import (
    MongoCartRepository,
)


@pytest.fixture
def collection():
    return mongomock.MongoClient().db.carts


@pytest.fixture
def repo(collection):
    return MongoCartRepository(collection)


class TestAddAndRead:

    def test_add_assigns_database_id(self, repo, collection):
        cart = Cart.create([CartLineItem(1, Quantity(2))])
        repo.add(cart)
        assert ObjectId.is_valid(cart.id)
        doc = collection.find_one({"_id": ObjectId(cart.id)})
        assert doc["products"] == [{"product": 1, "quantity": 2}]
        assert doc["version"] == 0

    def test_get_by_id_round_trip(self, repo):
        cart = Cart.create([CartLineItem(3), CartLineItem(1, Quantity(4))])
        repo.add(cart)
        loaded = repo.get_by_id(cart.id)
        assert loaded == cart

    def test_unknown_id_is_none(self, repo):
        assert repo.get_by_id(str(ObjectId())) is None

    def test_malformed_id_is_none(self, repo):
        assert repo.get_by_id("not-an-object-id") is None

    def test_list_all(self, repo):
        first, second = Cart.create(), Cart.create()
        repo.add(first)
        repo.add(second)
        assert [c.id for c in repo.list_all()] == [first.id, second.id]

    def test_document_without_version_reads_as_zero(self, repo, collection):
        oid = collection.insert_one({"products": [{"product": 2, "quantity": 1}]}).inserted_id
        cart = repo.get_by_id(str(oid))
        assert cart.version == 0
        assert cart.items[0].product_id == 2

    def test_malformed_document_raises_storage_error(self, repo, collection):
        oid = collection.insert_one({"products": [{"quantity": 1}]}).inserted_id
        with pytest.raises(StorageError, match="malformed"):
            repo.get_by_id(str(oid))


class TestSave:

    def test_save_writes_items_and_bumps_version(self, repo, collection):
        cart = Cart.create()
        repo.add(cart)
        cart.add_product(5)
        cart.add_product(5)
        repo.save(cart)

        assert cart.version == 1
        doc = collection.find_one({"_id": ObjectId(cart.id)})
        assert doc["products"] == [{"product": 5, "quantity": 2}]
        assert doc["version"] == 1

    def test_successive_saves(self, repo):
        cart = Cart.create()
        repo.add(cart)
        cart.add_product(1)
        repo.save(cart)
        cart.add_product(1)
        repo.save(cart)
        loaded = repo.get_by_id(cart.id)
        assert loaded.version == 2
        assert loaded.items[0].quantity.value == 2

    def test_stale_writer_rejected(self, repo):
        cart = Cart.create()
        repo.add(cart)
        first = repo.get_by_id(cart.id)
        second = repo.get_by_id(cart.id)

        first.add_product(1)
        repo.save(first)

        second.add_product(2)
        with pytest.raises(ConcurrentModificationError):
            repo.save(second)

        assert [i.product_id for i in repo.get_by_id(cart.id).items] == [1]

    def test_save_legacy_document_without_version(self, repo, collection):
        oid = collection.insert_one({"products": []}).inserted_id
        cart = repo.get_by_id(str(oid))
        cart.add_product(9)
        repo.save(cart)
        assert collection.find_one({"_id": oid})["version"] == 1

    def test_save_missing_cart_raises_not_found(self, repo):
        cart = Cart(id=str(ObjectId()), items=[CartLineItem(1)])
        with pytest.raises(EntityNotFoundError):
            repo.save(cart)

    def test_clear_persists_empty_list(self, repo, collection):
        cart = Cart.create([CartLineItem(1), CartLineItem(2)])
        repo.add(cart)
        cart.clear()
        repo.save(cart)
        assert collection.find_one({"_id": ObjectId(cart.id)})["products"] == []

    def test_integral_double_quantity_is_read(self, repo, collection):
        oid = collection.insert_one({"products": [{"product": 1, "quantity": 2.0}]}).inserted_id
        cart = repo.get_by_id(str(oid))
        assert cart.items[0].quantity == Quantity(2)

    def test_fractional_quantity_raises_storage_error(self, repo, collection):
        oid = collection.insert_one({"products": [{"product": 1, "quantity": 1.5}]}).inserted_id
        with pytest.raises(StorageError, match="malformed"):
            repo.get_by_id(str(oid))


class _UnreachableCollection:
    """Collection whose every call fails as if the server were down."""

    def _fail(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("no servers available")

    find = find_one = insert_one = find_one_and_update = _fail


class TestStorageFailures:

    @pytest.fixture
    def down_repo(self):
        return MongoCartRepository(_UnreachableCollection())

    def test_list_all(self, down_repo):
        with pytest.raises(StorageError, match="Cannot list carts"):
            down_repo.list_all()

    def test_get_by_id(self, down_repo):
        with pytest.raises(StorageError, match="Cannot read cart"):
            down_repo.get_by_id(str(ObjectId()))

    def test_add(self, down_repo):
        cart = Cart.create()
        with pytest.raises(StorageError, match="Cannot create cart"):
            down_repo.add(cart)
        assert cart.id is None

    def test_save(self, down_repo):
        cart = Cart(id=str(ObjectId()), items=[CartLineItem(1)])
        with pytest.raises(StorageError, match="Cannot update cart"):
            down_repo.save(cart)
        assert cart.version == 0

    def test_driver_error_is_chained(self, down_repo):
        with pytest.raises(StorageError) as excinfo:
            down_repo.list_all()
        assert isinstance(excinfo.value.__cause__, ServerSelectionTimeoutError)
