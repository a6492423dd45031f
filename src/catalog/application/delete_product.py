"""Application service: Delete Product use case."""

from __future__ import annotations

from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.repository.product_repository import ProductRepository


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: int) -> None:
        """Remove a product from the catalog.

        Carts that still reference the product keep their line item;
        it shows up without product details until removed.
        """
        with self._product_repo.exclusive():
            if self._product_repo.get_by_id(product_id) is None:
                raise EntityNotFoundError(f"Product #{product_id} not found")
            self._product_repo.delete(product_id)
