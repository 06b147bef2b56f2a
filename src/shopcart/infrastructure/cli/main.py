import click

from shopcart.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_sweep_abandoned,
    cart_update,
)
from shopcart.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_restock,
)
from shopcart.infrastructure.config import load_settings
from shopcart.infrastructure.logging import configure_logging


@click.group()
def cli() -> None:
    """shopcart - Shopping Cart"""
    settings = load_settings()
    configure_logging(level=settings.log_level, environment=settings.environment)


@cli.group()
def cart() -> None:
    """Manage shopping carts."""


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_sweep_abandoned)
cart.add_command(cart_update)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_restock)
