"""Application service: Replace Cart Items use case."""

from __future__ import annotations

from catalog.application.dto import CartItemSpec
from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.model.cart import Cart, CartLineItem
from catalog.domain.model.value_objects import Quantity
from catalog.domain.repository.cart_repository import CartRepository
from catalog.domain.repository.product_repository import ProductRepository


def line_items_from_specs(
    specs: list[CartItemSpec], product_repo: ProductRepository
) -> list[CartLineItem]:
    """Turn requested items into line items, checking every product exists."""
    items: list[CartLineItem] = []
    for spec in specs:
        if product_repo.get_by_id(spec.product_id) is None:
            raise EntityNotFoundError(f"Product #{spec.product_id} not found")
        items.append(
            CartLineItem(product_id=spec.product_id, quantity=Quantity(spec.quantity))
        )
    return items


class ReplaceCartItemsHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, cart_id: str, specs: list[CartItemSpec]) -> Cart:
        """Swap the cart's whole line-item list for *specs*."""
        cart = self._cart_repo.get_by_id(cart_id)
        if cart is None:
            raise EntityNotFoundError(f"Cart {cart_id} not found")

        cart.replace_items(line_items_from_specs(specs, self._product_repo))
        self._cart_repo.save(cart)
        return cart
