"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from catalog.application.add_product import AddProductHandler
from catalog.application.delete_product import DeleteProductHandler
from catalog.application.show_product import ListProductsHandler, ShowProductHandler
from catalog.application.update_product import UpdateProductHandler
from catalog.domain.exceptions import DomainException
from catalog.domain.model.product import Product
from catalog.infrastructure.bootstrap import product_repository


def _display_product(product: Product) -> None:
    click.echo(f"Product #{product.id}  (code={product.code})")
    click.echo(f"Title:       {product.title}")
    click.echo(f"Description: {product.description}")
    click.echo(f"Price:       {product.price}")
    click.echo(f"Thumbnail:   {product.thumbnail}")
    click.echo(f"Stock:       {product.stock}")


@click.command("add")
@click.option("--title", required=True, help="Product title.")
@click.option("--description", required=True, help="Product description.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--thumbnail", required=True, help="Thumbnail path or URL.")
@click.option("--code", required=True, help="Unique product code.")
@click.option("--stock", required=True, type=int, help="Units in stock.")
def product_add(
    title: str, description: str, price: str, thumbnail: str, code: str, stock: int
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            title=title,
            description=description,
            price=price,
            thumbnail=thumbnail,
            code=code,
            stock=stock,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.title}' added at {product.price}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    handler = ListProductsHandler(product_repo=product_repository())

    try:
        products = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Code':<12} {'Title':<20} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 59)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.code:<12} {p.title:<20} {str(p.price):>10} {p.stock:>7}"
        )


@click.command("show")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_show(product_id: int) -> None:
    """Show a single product."""
    handler = ShowProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(product)


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--title", default=None, help="New title.")
@click.option("--description", default=None, help="New description.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--thumbnail", default=None, help="New thumbnail.")
@click.option("--code", default=None, help="New unique code.")
@click.option("--stock", default=None, type=int, help="New stock level.")
def product_update(product_id: int, **fields: object) -> None:
    """Update some fields of a product; the rest are kept."""
    changes = {name: value for name, value in fields.items() if value is not None}
    if not changes:
        raise click.ClickException("Nothing to update, pass at least one field")

    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(product_id=product_id, changes=changes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} updated ({', '.join(sorted(changes))})")


@click.command("delete")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_delete(product_id: int) -> None:
    """Remove a product from the catalog."""
    handler = DeleteProductHandler(product_repo=product_repository())

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deleted.")
