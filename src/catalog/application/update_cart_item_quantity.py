"""Application service: Update Cart Item Quantity use case."""

from __future__ import annotations

from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.model.cart import Cart
from catalog.domain.model.value_objects import Quantity
from catalog.domain.repository.cart_repository import CartRepository
from catalog.domain.repository.product_repository import ProductRepository


class UpdateCartItemQuantityHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, cart_id: str, product_id: int, quantity: int) -> Cart:
        """Set the quantity of a product that is already in the cart."""
        new_quantity = Quantity(quantity)

        cart = self._cart_repo.get_by_id(cart_id)
        if cart is None:
            raise EntityNotFoundError(f"Cart {cart_id} not found")
        if self._product_repo.get_by_id(product_id) is None:
            raise EntityNotFoundError(f"Product #{product_id} not found")

        cart.set_quantity(product_id, new_quantity)
        self._cart_repo.save(cart)
        return cart
