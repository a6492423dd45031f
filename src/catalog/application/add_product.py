"""Application service: Add Product use case."""

from __future__ import annotations

from decimal import Decimal

from catalog.domain.exceptions import ValidationError
from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        title: str,
        description: str,
        price: str | int | float | Decimal,
        thumbnail: str,
        code: str,
        stock: int,
    ) -> Product:
        """Add a new product to the catalog.

        Every field is required and ``code`` must not be used by any
        other product. The new product gets the next sequential ID.
        """
        product = Product.create(
            title=title,
            description=description,
            price=price,
            thumbnail=thumbnail,
            code=code,
            stock=stock,
        )

        with self._product_repo.exclusive():
            if self._product_repo.get_by_code(product.code) is not None:
                raise ValidationError(
                    f"Product code '{product.code}' already exists, try another code"
                )
            product.id = self._product_repo.next_id()
            self._product_repo.save(product)
        return product
