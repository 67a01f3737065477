"""CLI commands for inventory and the movement ledger."""

from __future__ import annotations

import click

from fulfillment.application.adjust_inventory import AdjustInventoryHandler
from fulfillment.application.dto import InventoryDTO
from fulfillment.application.remove_inventory import RemoveInventoryHandler
from fulfillment.application.show_inventory import ShowInventoryHandler
from fulfillment.application.show_movements import ShowMovementsHandler
from fulfillment.application.stock_inventory import StockInventoryHandler
from fulfillment.domain.exceptions import DomainException
from fulfillment.infrastructure.cli.context import CliContext, DomainClickException, pass_context


def _display_rows(rows: list[InventoryDTO]) -> None:
    if not rows:
        click.echo("No inventory records found.")
        return

    click.echo(
        f"{'ID':<6} {'Warehouse':>10} {'Product':>8} {'On hand':>8} {'Reserved':>10} {'Available':>10}"
    )
    click.echo("-" * 57)
    for row in rows:
        click.echo(
            f"{row.id:<6} {row.warehouse_id:>10} {row.product_id:>8} "
            f"{row.qty_on_hand:>8} {row.qty_reserved:>10} {row.available:>10}"
        )


@click.command("stock")
@click.option("--warehouse", "warehouse_id", required=True, type=int, help="Warehouse ID.")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@click.option("--on-hand", "qty_on_hand", required=True, type=int, help="Quantity on hand.")
@click.option("--reserved", "qty_reserved", default=0, type=int, help="Quantity reserved.")
@pass_context
def inventory_stock(
    ctx: CliContext, warehouse_id: int, product_id: int, qty_on_hand: int, qty_reserved: int
) -> None:
    """Open the inventory row of a product in a warehouse."""
    try:
        ctx.authorize("inventory.stock")
        row = StockInventoryHandler(ctx.uow()).handle(
            warehouse_id, product_id, qty_on_hand, qty_reserved
        )
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(
        f"Inventory #{row.id} opened: product {row.product_id} in warehouse "
        f"{row.warehouse_id} (on hand={row.qty_on_hand}, reserved={row.qty_reserved})"
    )


@click.command("adjust")
@click.option("--id", "inventory_id", required=True, type=int, help="Inventory ID.")
@click.option("--on-hand", "qty_on_hand", default=None, type=int, help="Counted quantity on hand.")
@click.option("--reserved", "qty_reserved", default=None, type=int, help="New reserved quantity.")
@pass_context
def inventory_adjust(
    ctx: CliContext, inventory_id: int, qty_on_hand: int | None, qty_reserved: int | None
) -> None:
    """Overwrite quantities after a manual count."""
    try:
        ctx.authorize("inventory.adjust")
        row = AdjustInventoryHandler(ctx.uow()).handle(inventory_id, qty_on_hand, qty_reserved)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(
        f"Inventory #{row.id} adjusted (on hand={row.qty_on_hand}, "
        f"reserved={row.qty_reserved}, available={row.available})"
    )


@click.command("remove")
@click.option("--id", "inventory_id", required=True, type=int, help="Inventory ID.")
@pass_context
def inventory_remove(ctx: CliContext, inventory_id: int) -> None:
    """Delete an inventory row."""
    try:
        ctx.authorize("inventory.remove")
        RemoveInventoryHandler(ctx.uow()).handle(inventory_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Inventory #{inventory_id} removed.")


@click.command("show")
@click.option("--warehouse", "warehouse_id", default=None, type=int, help="Only this warehouse.")
@click.option("--product", "product_id", default=None, type=int, help="Only this product.")
@pass_context
def inventory_show(ctx: CliContext, warehouse_id: int | None, product_id: int | None) -> None:
    """Show current inventory levels."""
    try:
        ctx.authorize("inventory.show")
        rows = ShowInventoryHandler(ctx.uow()).handle(warehouse_id, product_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    _display_rows(rows)


@click.command("low-stock")
@click.option("--warehouse", "warehouse_id", required=True, type=int, help="Warehouse ID.")
@click.option("--threshold", default=None, type=int, help="Available quantity threshold.")
@pass_context
def inventory_low_stock(ctx: CliContext, warehouse_id: int, threshold: int | None) -> None:
    """Show rows of a warehouse whose available stock is below a threshold."""
    if threshold is None:
        threshold = ctx.settings.low_stock_threshold
    try:
        ctx.authorize("inventory.show")
        rows = ShowInventoryHandler(ctx.uow()).low_stock(warehouse_id, threshold)
    except DomainException as exc:
        raise DomainClickException(exc)

    _display_rows(rows)


@click.command("totals")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@pass_context
def inventory_totals(ctx: CliContext, product_id: int) -> None:
    """Show total and available stock of a product across warehouses."""
    try:
        ctx.authorize("inventory.show")
        totals = ShowInventoryHandler(ctx.uow()).totals(product_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(
        f"Product {totals.product_id}: on hand={totals.total_on_hand}, "
        f"available={totals.total_available}"
    )


@click.command("movements")
@click.option("--id", "inventory_id", default=None, type=int, help="Only this inventory row.")
@click.option("--reference", default=None, help="Only this reference document (e.g. SO-1).")
@click.option("--warehouse", "warehouse_id", default=None, type=int, help="Only this warehouse.")
@pass_context
def inventory_movements(
    ctx: CliContext, inventory_id: int | None, reference: str | None, warehouse_id: int | None
) -> None:
    """Show the movement ledger."""
    try:
        ctx.authorize("inventory.movements")
        movements = ShowMovementsHandler(ctx.uow()).handle(inventory_id, reference, warehouse_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    if not movements:
        click.echo("No movements found.")
        return

    click.echo(f"{'ID':<6} {'Inventory':>9} {'Type':<11} {'Qty':>6} {'Reference':<16} {'When'}")
    click.echo("-" * 70)
    for m in movements:
        click.echo(
            f"{m.id:<6} {m.inventory_id:>9} {m.type:<11} {m.quantity:>6} "
            f"{m.reference_document:<16} {m.occurred_at:%Y-%m-%d %H:%M}"
        )
