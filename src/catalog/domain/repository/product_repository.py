"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. The file-backed implementation lives in
``catalog.infrastructure.persistence``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from catalog.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def exclusive(self) -> AbstractContextManager[None]:
        """Hold the writer lock for a whole read-modify-write sequence."""

    @abstractmethod
    def next_id(self) -> int:
        """Return one more than the highest stored ID, or 1 if empty."""

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_code(self, code: str) -> Product | None:
        """Return the product using *code*, or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in stored order."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def delete(self, product_id: int) -> None:
        """Remove a product. Unknown IDs leave the store unchanged."""
