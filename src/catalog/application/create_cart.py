"""Application service: Create Cart use case."""

from __future__ import annotations

from catalog.application.dto import CartItemSpec
from catalog.application.replace_cart_items import line_items_from_specs
from catalog.domain.model.cart import Cart
from catalog.domain.repository.cart_repository import CartRepository
from catalog.domain.repository.product_repository import ProductRepository


class CreateCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, specs: list[CartItemSpec] | None = None) -> Cart:
        """Create a cart, empty unless initial items are given."""
        items = line_items_from_specs(specs or [], self._product_repo)
        cart = Cart.create(items)
        self._cart_repo.add(cart)
        return cart
