"""Application service: Show Cart / List Carts use cases (queries).

Showing a cart resolves every line item against the product store,
the way a reference field is populated on read.
"""

from __future__ import annotations

from catalog.application.dto import CartDTO, CartLineDTO
from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.model.cart import Cart
from catalog.domain.model.value_objects import Money
from catalog.domain.repository.cart_repository import CartRepository
from catalog.domain.repository.product_repository import ProductRepository


class ShowCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, cart_id: str) -> CartDTO:
        cart = self._cart_repo.get_by_id(cart_id)
        if cart is None:
            raise EntityNotFoundError(f"Cart {cart_id} not found")
        return self._to_dto(cart)

    def _to_dto(self, cart: Cart) -> CartDTO:
        products_by_id = {p.id: p for p in self._product_repo.list_all()}
        lines: list[CartLineDTO] = []
        total = Money.zero()
        for item in cart.items:
            product = products_by_id.get(item.product_id)
            if product is None:
                lines.append(
                    CartLineDTO(
                        product_id=item.product_id,
                        quantity=item.quantity.value,
                        title=None,
                        code=None,
                        unit_price=None,
                        line_total=None,
                    )
                )
                continue
            line_total = product.price * item.quantity.value
            total = total + line_total
            lines.append(
                CartLineDTO(
                    product_id=item.product_id,
                    quantity=item.quantity.value,
                    title=product.title,
                    code=product.code,
                    unit_price=str(product.price),
                    line_total=str(line_total),
                )
            )
        return CartDTO(
            id=cart.id,  # type: ignore[arg-type]
            items=lines,
            total_quantity=cart.total_quantity,
            total=str(total),
        )


class ListCartsHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self) -> list[Cart]:
        return self._cart_repo.list_all()
