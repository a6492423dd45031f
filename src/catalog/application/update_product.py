"""Application service: Update Product use case."""

from __future__ import annotations

from typing import Any

from catalog.domain.exceptions import EntityNotFoundError, ValidationError
from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: int, changes: dict[str, Any]) -> Product:
        """Merge *changes* into a product; fields not given are kept."""
        with self._product_repo.exclusive():
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product #{product_id} not found")

            product.apply_changes(changes)

            owner = self._product_repo.get_by_code(product.code)
            if owner is not None and owner.id != product.id:
                raise ValidationError(
                    f"Product code '{product.code}' already exists, try another code"
                )

            self._product_repo.save(product)
        return product
