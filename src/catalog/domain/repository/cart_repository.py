"""Abstract repository for Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from catalog.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def list_all(self) -> list[Cart]:
        """Return every cart."""

    @abstractmethod
    def get_by_id(self, cart_id: str) -> Cart | None:
        """Return a cart by its ID, or None if not found."""

    @abstractmethod
    def add(self, cart: Cart) -> None:
        """Insert a new cart and assign its ID."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Write back the line items of an existing cart.

        Raises ConcurrentModificationError if the cart was saved by
        someone else since it was read.
        """
