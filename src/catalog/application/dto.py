"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CartItemSpec:
    """Input: one product to put in a cart, and how many."""

    product_id: int
    quantity: int = 1


@dataclass(frozen=True)
class CartLineDTO:
    """Output: a line item with its product details filled in.

    The product fields are None when the referenced product has since
    been deleted from the catalog.
    """

    product_id: int
    quantity: int
    title: str | None
    code: str | None
    unit_price: str | None  # formatted, e.g. "$15.00"
    line_total: str | None


@dataclass(frozen=True)
class CartDTO:
    """Output: a complete cart as displayed to the user."""

    id: str
    items: list[CartLineDTO]
    total_quantity: int
    total: str
