"""Product aggregate.

Products live in the catalog independently of carts. A cart line item
only references a product by id; it never owns a copy of it.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from catalog.domain.exceptions import ValidationError
from catalog.domain.model.value_objects import Money

TEXT_FIELDS = ("title", "description", "thumbnail", "code")
EDITABLE_FIELDS = frozenset(TEXT_FIELDS + ("price", "stock"))


@dataclass
class Product:
    """A product in the catalog.

    Use ``Product.create()`` for new products, it validates every field.
    ``__init__`` stays plain so the repository can rebuild stored
    records without running the checks again.
    """

    id: int | None
    title: str
    description: str
    price: Money
    thumbnail: str
    code: str
    stock: int

    @staticmethod
    def create(
        title: str,
        description: str,
        price: str | int | float | Decimal | Money,
        thumbnail: str,
        code: str,
        stock: int,
    ) -> Product:
        """Build a new, not yet persisted product. All fields are required."""
        return Product(
            id=None,
            title=_required_text("title", title),
            description=_required_text("description", description),
            price=_price(price),
            thumbnail=_required_text("thumbnail", thumbnail),
            code=_required_text("code", code),
            stock=_stock(stock),
        )

    def apply_changes(self, changes: dict[str, Any]) -> None:
        """Shallow-merge *changes* into this product.

        Fields missing from *changes* keep their current value. Values
        are validated before anything is assigned, so a bad payload
        leaves the product untouched.
        """
        if "id" in changes:
            raise ValidationError("Product id cannot be changed")
        unknown = sorted(set(changes) - EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown product field(s): {', '.join(unknown)}")

        validated: dict[str, Any] = {}
        for name, value in changes.items():
            if name in TEXT_FIELDS:
                validated[name] = _required_text(name, value)
            elif name == "price":
                validated[name] = _price(value)
            else:
                validated[name] = _stock(value)

        for name, value in validated.items():
            setattr(self, name, value)


def _required_text(name: str, value: Any) -> str:
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Product {name} is required")
    return value.strip()


def _price(value: Any) -> Money:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("Product price is required")
    price = value if isinstance(value, Money) else Money.of(value)
    if price.amount <= 0:
        raise ValidationError("Product price must be greater than zero")
    return price


def _stock(value: Any) -> int:
    if value is None:
        raise ValidationError("Product stock is required")
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"Product stock must be an integer, got {type(value).__name__}"
        )
    if value < 0:
        raise ValidationError("Product stock cannot be negative")
    return value
