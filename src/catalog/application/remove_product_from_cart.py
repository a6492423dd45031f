"""Application service: Remove Product From Cart use case."""

from __future__ import annotations

from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.model.cart import Cart
from catalog.domain.repository.cart_repository import CartRepository


class RemoveProductFromCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, cart_id: str, product_id: int) -> Cart:
        cart = self._cart_repo.get_by_id(cart_id)
        if cart is None:
            raise EntityNotFoundError(f"Cart {cart_id} not found")

        cart.remove_product(product_id)
        self._cart_repo.save(cart)
        return cart
