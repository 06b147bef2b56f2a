"""CLI commands for the Cart aggregate."""

from __future__ import annotations

from datetime import timedelta

import click

from shopcart.application.add_item import AddItemToCartHandler
from shopcart.application.clear_cart import ClearCartHandler
from shopcart.application.detect_abandoned_carts import DetectAbandonedCartsHandler
from shopcart.application.dto import CartDTO
from shopcart.application.get_cart import GetCartHandler
from shopcart.application.remove_item import RemoveItemHandler
from shopcart.application.update_item_quantity import UpdateItemQuantityHandler
from shopcart.domain.exceptions import DomainException
from shopcart.infrastructure.bootstrap import (
    cart_repository,
    event_publisher,
    product_repository,
)
from shopcart.infrastructure.config import load_settings
from shopcart.infrastructure.events.dispatcher import EventDispatchError


def _display_cart(dto: CartDTO) -> None:
    """Shared formatting for displaying a cart."""
    click.echo(f"Cart #{dto.id}  (user={dto.user_id})")
    click.echo(f"Updated:  {dto.updated_at}")
    click.echo()

    if not dto.items:
        click.echo("  Cart is empty.")
        return

    click.echo(f"  {'ID':<5} {'Product':<20} {'Qty':>5} {'Price':>10} {'Subtotal':>10}")
    click.echo(f"  {'-'*53}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:<5} {item.product_name:<20} {item.quantity:>5} "
            f"{item.unit_price:>10} {item.subtotal:>10}"
        )
    click.echo(f"  {'-'*53}")
    click.echo(f"  {'Items':<27} {dto.item_count:>26}")
    click.echo(f"  {'Units':<27} {dto.product_count:>26}")
    click.echo(f"  {'Cart Total':<27} {dto.total:>26}")


@click.command("show")
@click.option("--user", "user_id", required=True, help="Cart owner.")
def cart_show(user_id: str) -> None:
    """Show a user's cart (creates an empty one on first use)."""
    handler = GetCartHandler(cart_repo=cart_repository(), publisher=event_publisher())

    try:
        dto = handler.handle(user_id)
    except (DomainException, EventDispatchError) as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("add")
@click.option("--user", "user_id", required=True, help="Cart owner.")
@click.option("--product-id", required=True, type=int, help="Product to add.")
@click.option("--quantity", default=1, show_default=True, type=int, help="Units to add.")
def cart_add(user_id: str, product_id: int, quantity: int) -> None:
    """Add a product to a user's cart."""
    handler = AddItemToCartHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
        publisher=event_publisher(),
    )

    try:
        dto = handler.handle(user_id=user_id, product_id=product_id, quantity=quantity)
    except (DomainException, EventDispatchError) as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("update")
@click.option("--user", "user_id", required=True, help="Cart owner.")
@click.option("--product-id", required=True, type=int, help="Product in the cart.")
@click.option("--quantity", required=True, type=int, help="New quantity (0 removes).")
def cart_update(user_id: str, product_id: int, quantity: int) -> None:
    """Set the quantity of a product already in the cart."""
    handler = UpdateItemQuantityHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
        publisher=event_publisher(),
    )

    try:
        dto = handler.handle(user_id=user_id, product_id=product_id, quantity=quantity)
    except (DomainException, EventDispatchError) as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("remove")
@click.option("--user", "user_id", required=True, help="Cart owner.")
@click.option("--product-id", required=True, type=int, help="Product to remove.")
def cart_remove(user_id: str, product_id: int) -> None:
    """Remove a product from a user's cart."""
    handler = RemoveItemHandler(cart_repo=cart_repository(), publisher=event_publisher())

    try:
        found = handler.handle(user_id=user_id, product_id=product_id)
    except (DomainException, EventDispatchError) as exc:
        raise click.ClickException(str(exc))

    if not found:
        raise click.ClickException(f"No cart found for user '{user_id}'")
    click.echo(f"Product #{product_id} removed from {user_id}'s cart.")


@click.command("clear")
@click.option("--user", "user_id", required=True, help="Cart owner.")
def cart_clear(user_id: str) -> None:
    """Remove every item from a user's cart."""
    handler = ClearCartHandler(cart_repo=cart_repository(), publisher=event_publisher())

    try:
        found = handler.handle(user_id)
    except (DomainException, EventDispatchError) as exc:
        raise click.ClickException(str(exc))

    if not found:
        raise click.ClickException(f"No cart found for user '{user_id}'")
    click.echo(f"Cart for {user_id} cleared.")


@click.command("sweep-abandoned")
@click.option(
    "--minutes",
    type=int,
    default=None,
    help="Idle minutes before a cart counts as abandoned "
    "(defaults to SHOPCART_ABANDON_AFTER_MINUTES).",
)
def cart_sweep_abandoned(minutes: int | None) -> None:
    """Flag non-empty carts that have been idle too long."""
    if minutes is not None and minutes < 0:
        raise click.BadParameter("--minutes cannot be negative")

    threshold = (
        timedelta(minutes=minutes) if minutes is not None else load_settings().abandon_after
    )
    handler = DetectAbandonedCartsHandler(
        cart_repo=cart_repository(), publisher=event_publisher()
    )
    try:
        flagged = handler.handle(threshold)
    except EventDispatchError as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{flagged} abandoned cart(s) flagged.")
