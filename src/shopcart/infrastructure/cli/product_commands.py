"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from shopcart.application.add_product import AddProductHandler
from shopcart.application.restock_product import RestockProductHandler
from shopcart.domain.exceptions import DomainException
from shopcart.infrastructure.bootstrap import product_repository


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", required=True, type=int, help="Units in stock.")
@click.option("--category", required=True, help="Category name.")
@click.option("--description", default="", help="Optional description.")
def product_add(name: str, price: str, stock: int, category: str, description: str) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            name=name, price=price, stock=stock, category=category, description=description
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' added at {product.price} "
        f"({product.stock} in stock)"
    )


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    repo = product_repository()
    products = repo.list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Category':<14} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 61)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.name.value:<20} {p.category.value:<14} {str(p.price):>10} {p.stock.value:>7}"
        )


@click.command("restock")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units received.")
def product_restock(product_id: int, quantity: int) -> None:
    """Add received units to a product's stock."""
    handler = RestockProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} now has {product.stock} in stock")
