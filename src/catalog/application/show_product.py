"""Application service: Show Product / List Products use cases (queries)."""

from __future__ import annotations

from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository


class ShowProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: int) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product #{product_id} not found")
        return product


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self) -> list[Product]:
        return self._product_repo.list_all()
