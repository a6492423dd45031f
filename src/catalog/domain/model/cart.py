"""Cart aggregate.

A cart owns an ordered list of line items, at most one per product.
Every mutation goes through the aggregate so that invariant holds no
matter which store persists the cart.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from catalog.domain.exceptions import EntityNotFoundError, ValidationError
from catalog.domain.model.value_objects import Quantity


@dataclass
class CartLineItem:
    product_id: int
    quantity: Quantity = field(default_factory=lambda: Quantity(1))


@dataclass
class Cart:
    """Aggregate root for shopping carts.

    ``id`` is assigned by the store on insert. ``version`` belongs to the
    store as well: it is bumped on every save and checked on the next
    one to catch concurrent writers.
    """

    id: str | None
    items: list[CartLineItem] = field(default_factory=list)
    version: int = 0

    @staticmethod
    def create(items: list[CartLineItem] | None = None) -> Cart:
        cart = Cart(id=None)
        if items:
            cart.replace_items(items)
        return cart

    def find_item(self, product_id: int) -> CartLineItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def add_product(self, product_id: int) -> CartLineItem:
        """Increment the line item for *product_id*, or append it at quantity 1."""
        item = self.find_item(product_id)
        if item is not None:
            item.quantity = item.quantity.increment()
            return item
        item = CartLineItem(product_id=product_id)
        self.items.append(item)
        return item

    def remove_product(self, product_id: int) -> None:
        item = self.find_item(product_id)
        if item is None:
            raise EntityNotFoundError(
                f"Product {product_id} is not in cart {self.id}"
            )
        self.items.remove(item)

    def set_quantity(self, product_id: int, quantity: Quantity) -> None:
        item = self.find_item(product_id)
        if item is None:
            raise EntityNotFoundError(
                f"Product {product_id} is not in cart {self.id}"
            )
        item.quantity = quantity

    def replace_items(self, items: list[CartLineItem]) -> None:
        """Replace every line item at once."""
        if not items:
            raise ValidationError("New line item list must not be empty")
        seen: set[int] = set()
        for item in items:
            if item.product_id in seen:
                raise ValidationError(
                    f"Product {item.product_id} appears more than once"
                )
            seen.add(item.product_id)
        self.items = list(items)

    def clear(self) -> None:
        self.items = []

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity.value for item in self.items)
