"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from pymongo import MongoClient

from catalog.infrastructure.config import get_settings
from catalog.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from catalog.infrastructure.persistence.mongo_cart_repository import (
    MongoCartRepository,
)


@lru_cache
def _mongo_client(url: str) -> MongoClient:
    # MongoClient connects lazily and pools connections; share one per URL.
    return MongoClient(url)


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(get_settings().products_file)


def cart_repository() -> MongoCartRepository:
    settings = get_settings()
    database = _mongo_client(settings.mongo_url)[settings.mongo_database]
    return MongoCartRepository(database[settings.carts_collection])
