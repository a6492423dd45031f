"""Application service: Add Product To Cart use case.

Adding a product that is already in the cart bumps its quantity by one
instead of creating a second line item.
"""

from __future__ import annotations

from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.model.cart import Cart
from catalog.domain.repository.cart_repository import CartRepository
from catalog.domain.repository.product_repository import ProductRepository


class AddProductToCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, cart_id: str, product_id: int) -> Cart:
        cart = self._cart_repo.get_by_id(cart_id)
        if cart is None:
            raise EntityNotFoundError(f"Cart {cart_id} not found")
        if self._product_repo.get_by_id(product_id) is None:
            raise EntityNotFoundError(f"Product #{product_id} not found")

        cart.add_product(product_id)
        self._cart_repo.save(cart)
        return cart
