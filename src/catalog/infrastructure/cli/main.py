import logging

import click

from catalog.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_create,
    cart_list,
    cart_remove,
    cart_replace,
    cart_set_quantity,
    cart_show,
)
from catalog.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from catalog.infrastructure.config import get_settings


@click.group()
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Override LOG_LEVEL from the environment.",
)
def cli(log_level: str | None) -> None:
    """Catalog: products and carts"""
    logging.basicConfig(
        level=(log_level or get_settings().log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def cart() -> None:
    """Manage carts."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_create)
cart.add_command(cart_list)
cart.add_command(cart_remove)
cart.add_command(cart_replace)
cart.add_command(cart_set_quantity)
cart.add_command(cart_show)
