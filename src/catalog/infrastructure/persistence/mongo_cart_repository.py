"""MongoDB-backed implementation of CartRepository.

One document per cart::

    {"_id": ObjectId, "products": [{"product": 3, "quantity": 2}], "version": 4}

Line items are written back in one ``find_one_and_update`` that also
checks ``version``, so two writers racing on the same cart cannot
silently drop each other's changes.
"""

from __future__ import annotations

import logging
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from catalog.domain.exceptions import (
    ConcurrentModificationError,
    DomainException,
    EntityNotFoundError,
    StorageError,
)
from catalog.domain.model.cart import Cart, CartLineItem
from catalog.domain.model.value_objects import Quantity
from catalog.domain.repository.cart_repository import CartRepository

logger = logging.getLogger(__name__)


class MongoCartRepository(CartRepository):

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    # --- CartRepository interface ---------------------------------------------

    def list_all(self) -> list[Cart]:
        try:
            docs = list(self._collection.find())
        except PyMongoError as exc:
            logger.error("Cannot list carts: %s", exc)
            raise StorageError("Cannot list carts") from exc
        return [self._to_domain(doc) for doc in docs]

    def get_by_id(self, cart_id: str) -> Cart | None:
        oid = _object_id(cart_id)
        if oid is None:
            logger.debug("Cart id %r is not a valid ObjectId", cart_id)
            return None
        try:
            doc = self._collection.find_one({"_id": oid})
        except PyMongoError as exc:
            logger.error("Cannot read cart %s: %s", cart_id, exc)
            raise StorageError(f"Cannot read cart {cart_id}") from exc
        if doc is None:
            logger.debug("Cart %s not found", cart_id)
            return None
        return self._to_domain(doc)

    def add(self, cart: Cart) -> None:
        doc = {"products": self._items_to_raw(cart.items), "version": 0}
        try:
            result = self._collection.insert_one(doc)
        except PyMongoError as exc:
            logger.error("Cannot create cart: %s", exc)
            raise StorageError("Cannot create cart") from exc
        cart.id = str(result.inserted_id)
        cart.version = 0
        logger.info("Created cart %s with %d line item(s)", cart.id, len(cart.items))

    def save(self, cart: Cart) -> None:
        oid = _object_id(cart.id)
        if oid is None:
            raise EntityNotFoundError(f"Cart {cart.id} not found")

        query: dict[str, Any] = {"_id": oid, "version": cart.version}
        if not cart.version:
            # Documents written before versioning have no version field at all
            query = {
                "_id": oid,
                "$or": [{"version": 0}, {"version": {"$exists": False}}],
            }
        try:
            updated = self._collection.find_one_and_update(
                query,
                {
                    "$set": {"products": self._items_to_raw(cart.items)},
                    "$inc": {"version": 1},
                },
                return_document=ReturnDocument.AFTER,
            )
            if updated is None:
                exists = self._collection.find_one({"_id": oid}, {"_id": 1})
        except PyMongoError as exc:
            logger.error("Cannot update cart %s: %s", cart.id, exc)
            raise StorageError(f"Cannot update cart {cart.id}") from exc

        if updated is None:
            if exists is None:
                raise EntityNotFoundError(f"Cart {cart.id} not found")
            logger.warning("Cart %s was modified concurrently", cart.id)
            raise ConcurrentModificationError(
                f"Cart {cart.id} was modified by another request, reload and retry"
            )
        cart.version = updated["version"]
        logger.info("Updated cart %s (version %d)", cart.id, cart.version)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _items_to_raw(items: list[CartLineItem]) -> list[dict]:
        return [
            {"product": item.product_id, "quantity": item.quantity.value}
            for item in items
        ]

    @staticmethod
    def _to_domain(doc: dict) -> Cart:
        try:
            items = [
                CartLineItem(
                    product_id=raw["product"],
                    quantity=Quantity(_stored_quantity(raw.get("quantity", 1))),
                )
                for raw in doc.get("products", [])
            ]
        except (KeyError, TypeError, DomainException) as exc:
            logger.error("Malformed cart document %s: %s", doc.get("_id"), exc)
            raise StorageError(f"Cart {doc.get('_id')} is malformed") from exc
        return Cart(id=str(doc["_id"]), items=items, version=doc.get("version", 0))


def _stored_quantity(value: object) -> object:
    # The mongo shell and other drivers write numbers as doubles
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _object_id(cart_id: str | None) -> ObjectId | None:
    if cart_id is None:
        return None
    try:
        return ObjectId(cart_id)
    except (InvalidId, TypeError):
        return None
