"""CLI commands for the Cart aggregate."""

from __future__ import annotations

import click

from catalog.application.add_product_to_cart import AddProductToCartHandler
from catalog.application.clear_cart import ClearCartHandler
from catalog.application.create_cart import CreateCartHandler
from catalog.application.dto import CartDTO, CartItemSpec
from catalog.application.remove_product_from_cart import RemoveProductFromCartHandler
from catalog.application.replace_cart_items import ReplaceCartItemsHandler
from catalog.application.show_cart import ListCartsHandler, ShowCartHandler
from catalog.application.update_cart_item_quantity import (
    UpdateCartItemQuantityHandler,
)
from catalog.domain.exceptions import DomainException
from catalog.infrastructure.bootstrap import cart_repository, product_repository


def _parse_items(raw: str) -> list[CartItemSpec]:
    """Parse '3:2,5,7:1' into CartItemSpec list (quantity defaults to 1)."""
    specs: list[CartItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        id_str, _, qty_str = pair.partition(":")
        try:
            product_id = int(id_str)
            qty = int(qty_str) if qty_str else 1
        except ValueError:
            raise click.BadParameter(
                f"Invalid item '{pair}'. Expected 'ProductID' or 'ProductID:Quantity'."
            )
        specs.append(CartItemSpec(product_id=product_id, quantity=qty))
    return specs


def _display_cart(dto: CartDTO) -> None:
    click.echo(f"Cart {dto.id}")
    click.echo()
    if not dto.items:
        click.echo("  (empty)")
        return
    click.echo(f"  {'ID':<6} {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*54}")
    for line in dto.items:
        title = line.title if line.title is not None else "(removed)"
        click.echo(
            f"  {line.product_id:<6} {title:<20} {line.quantity:>5} "
            f"{line.unit_price or '-':>10} {line.line_total or '-':>10}"
        )
    click.echo(f"  {'-'*54}")
    click.echo(f"  {'Cart Total':<27} {dto.total_quantity:>5} {dto.total:>21}")


def _show(cart_id: str) -> None:
    dto = ShowCartHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
    ).handle(cart_id)
    _display_cart(dto)


@click.command("create")
@click.option("--items", default=None, help="Initial items as 'ProductID:Qty,ProductID:Qty'.")
def cart_create(items: str | None) -> None:
    """Create a new cart."""
    specs = _parse_items(items) if items else None

    handler = CreateCartHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
    )

    try:
        cart = handler.handle(specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart {cart.id} created with {len(cart.items)} line item(s).")


@click.command("list")
def cart_list() -> None:
    """List all carts."""
    handler = ListCartsHandler(cart_repo=cart_repository())

    try:
        carts = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not carts:
        click.echo("No carts found.")
        return

    click.echo(f"{'ID':<26} {'Lines':>6} {'Units':>6}")
    click.echo("-" * 40)
    for cart in carts:
        click.echo(f"{cart.id:<26} {len(cart.items):>6} {cart.total_quantity:>6}")


@click.command("show")
@click.option("--id", "cart_id", required=True, help="Cart ID.")
def cart_show(cart_id: str) -> None:
    """Show a cart with its product details."""
    try:
        _show(cart_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))


@click.command("add")
@click.option("--cart", "cart_id", required=True, help="Cart ID.")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
def cart_add(cart_id: str, product_id: int) -> None:
    """Add one unit of a product to a cart."""
    handler = AddProductToCartHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
    )

    try:
        cart = handler.handle(cart_id, product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    item = cart.find_item(product_id)
    click.echo(f"Product #{product_id} in cart {cart_id}: quantity {item.quantity}")


@click.command("remove")
@click.option("--cart", "cart_id", required=True, help="Cart ID.")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
def cart_remove(cart_id: str, product_id: int) -> None:
    """Remove a product from a cart."""
    handler = RemoveProductFromCartHandler(cart_repo=cart_repository())

    try:
        handler.handle(cart_id, product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} removed from cart {cart_id}.")


@click.command("replace")
@click.option("--cart", "cart_id", required=True, help="Cart ID.")
@click.option("--items", required=True, help="Items as 'ProductID:Qty,ProductID:Qty'.")
def cart_replace(cart_id: str, items: str) -> None:
    """Replace every line item of a cart."""
    specs = _parse_items(items)

    handler = ReplaceCartItemsHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
    )

    try:
        cart = handler.handle(cart_id, specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart {cart_id} now has {len(cart.items)} line item(s).")


@click.command("set-quantity")
@click.option("--cart", "cart_id", required=True, help="Cart ID.")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="New quantity.")
def cart_set_quantity(cart_id: str, product_id: int, quantity: int) -> None:
    """Set the quantity of a product already in a cart."""
    handler = UpdateCartItemQuantityHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
    )

    try:
        handler.handle(cart_id, product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} in cart {cart_id}: quantity {quantity}")


@click.command("clear")
@click.option("--cart", "cart_id", required=True, help="Cart ID.")
def cart_clear(cart_id: str) -> None:
    """Remove every product from a cart."""
    handler = ClearCartHandler(cart_repo=cart_repository())

    try:
        handler.handle(cart_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart {cart_id} emptied.")
