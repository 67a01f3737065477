"""CLI commands for the PurchaseOrder aggregate."""

from __future__ import annotations

from datetime import datetime

import click

from fulfillment.application.approve_purchase_order import ApprovePurchaseOrderHandler
from fulfillment.application.cancel_purchase_order import CancelPurchaseOrderHandler
from fulfillment.application.create_purchase_order import (
    CreatePurchaseOrderHandler,
    UpdatePurchaseOrderHandler,
)
from fulfillment.application.delete_purchase_order import DeletePurchaseOrderHandler
from fulfillment.application.dto import PurchaseOrderDTO, PurchaseOrderLineSpec
from fulfillment.application.receive_purchase_order import ReceivePurchaseOrderHandler
from fulfillment.application.show_purchase_order import ShowPurchaseOrderHandler
from fulfillment.domain.exceptions import DomainException
from fulfillment.domain.model.purchase_order import PurchaseOrderStatus
from fulfillment.infrastructure.cli.context import CliContext, DomainClickException, pass_context

_DATE = click.DateTime(formats=["%Y-%m-%d"])


def _parse_lines(raw: str) -> list[PurchaseOrderLineSpec]:
    """Parse '1:10:4.50,2:5:12.00' (product:qty:unit price) into line specs."""
    specs: list[PurchaseOrderLineSpec] = []
    for item in raw.split(","):
        parts = item.strip().split(":")
        if len(parts) != 3:
            raise click.BadParameter(
                f"Invalid line format '{item.strip()}'. Expected 'ProductId:Quantity:UnitPrice'."
            )
        product_str, qty_str, price = parts
        try:
            specs.append(
                PurchaseOrderLineSpec(
                    product_id=int(product_str), quantity=int(qty_str), unit_price=price
                )
            )
        except ValueError:
            raise click.BadParameter(f"Invalid product id or quantity in '{item.strip()}'.")
    return specs


def _display_order(dto: PurchaseOrderDTO) -> None:
    click.echo(f"Purchase order #{dto.id}  (status={dto.status})")
    click.echo(f"Supplier: {dto.supplier_id}")
    if dto.expected_delivery:
        click.echo(f"Expected: {dto.expected_delivery:%Y-%m-%d}")
    if dto.received_warehouse_id is not None:
        click.echo(f"Received into warehouse {dto.received_warehouse_id}")
    click.echo()
    click.echo(f"  {'Product':>8} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*36}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_id:>8} {line.quantity:>5} {line.unit_price:>10} {line.line_total:>10}"
        )
    click.echo(f"  {'-'*36}")
    click.echo(f"  {'Order Total':<20} {dto.total:>15}")


def _day(value: datetime | None):
    return value.date() if value is not None else None


@click.command("create")
@click.option("--supplier", "supplier_id", required=True, type=int, help="Supplier ID.")
@click.option("--lines", required=True, help="Lines as 'ProductId:Qty:UnitPrice,...'.")
@click.option("--expected", default=None, type=_DATE, help="Expected delivery date.")
@pass_context
def purchase_create(
    ctx: CliContext, supplier_id: int, lines: str, expected: datetime | None
) -> None:
    """Create a purchase order."""
    specs = _parse_lines(lines)
    try:
        ctx.authorize("purchase.create")
        dto = CreatePurchaseOrderHandler(ctx.uow()).handle(supplier_id, specs, _day(expected))
    except DomainException as exc:
        raise DomainClickException(exc)

    _display_order(dto)


@click.command("update")
@click.option("--id", "order_id", required=True, type=int, help="Purchase order ID.")
@click.option("--supplier", "supplier_id", required=True, type=int, help="Supplier ID.")
@click.option("--lines", required=True, help="Lines as 'ProductId:Qty:UnitPrice,...'.")
@click.option("--expected", default=None, type=_DATE, help="Expected delivery date.")
@pass_context
def purchase_update(
    ctx: CliContext, order_id: int, supplier_id: int, lines: str, expected: datetime | None
) -> None:
    """Replace the supplier, lines and expected delivery of an open order."""
    specs = _parse_lines(lines)
    try:
        ctx.authorize("purchase.update")
        dto = UpdatePurchaseOrderHandler(ctx.uow()).handle(
            order_id, supplier_id, specs, _day(expected)
        )
    except DomainException as exc:
        raise DomainClickException(exc)

    _display_order(dto)


@click.command("approve")
@click.option("--id", "order_id", required=True, type=int, help="Purchase order ID.")
@pass_context
def purchase_approve(ctx: CliContext, order_id: int) -> None:
    """Approve a created purchase order."""
    try:
        ctx.authorize("purchase.approve")
        ApprovePurchaseOrderHandler(ctx.uow()).handle(order_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Purchase order #{order_id} approved.")


@click.command("receive")
@click.option("--id", "order_id", required=True, type=int, help="Purchase order ID.")
@click.option("--warehouse", "warehouse_id", required=True, type=int, help="Receiving warehouse ID.")
@pass_context
def purchase_receive(ctx: CliContext, order_id: int, warehouse_id: int) -> None:
    """Receive an approved purchase order into a warehouse."""
    try:
        ctx.authorize("purchase.receive")
        dto = ReceivePurchaseOrderHandler(ctx.uow()).handle(order_id, warehouse_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(
        f"Purchase order #{order_id} received into warehouse {warehouse_id} "
        f"({len(dto.lines)} line(s) credited)."
    )


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Purchase order ID.")
@pass_context
def purchase_cancel(ctx: CliContext, order_id: int) -> None:
    """Cancel a purchase order that has not been received."""
    try:
        ctx.authorize("purchase.cancel")
        CancelPurchaseOrderHandler(ctx.uow()).handle(order_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Purchase order #{order_id} canceled.")


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Purchase order ID.")
@pass_context
def purchase_delete(ctx: CliContext, order_id: int) -> None:
    """Delete a CREATED or CANCELED purchase order."""
    try:
        ctx.authorize("purchase.delete")
        DeletePurchaseOrderHandler(ctx.uow()).handle(order_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Purchase order #{order_id} deleted.")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Purchase order ID.")
@pass_context
def purchase_show(ctx: CliContext, order_id: int) -> None:
    """Show details of a purchase order."""
    try:
        ctx.authorize("purchase.show")
        dto = ShowPurchaseOrderHandler(ctx.uow()).handle(order_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    _display_order(dto)


@click.command("list")
@click.option(
    "--status",
    default=None,
    type=click.Choice([s.value for s in PurchaseOrderStatus]),
    help="Only orders in this status.",
)
@click.option("--supplier", "supplier_id", default=None, type=int, help="Only this supplier.")
@pass_context
def purchase_list(ctx: CliContext, status: str | None, supplier_id: int | None) -> None:
    """List purchase orders."""
    try:
        ctx.authorize("purchase.show")
        orders = ShowPurchaseOrderHandler(ctx.uow()).list(
            PurchaseOrderStatus(status) if status else None, supplier_id
        )
    except DomainException as exc:
        raise DomainClickException(exc)

    if not orders:
        click.echo("No purchase orders found.")
        return

    click.echo(f"{'ID':<6} {'Supplier':>8} {'Status':<10} {'Total':>10}")
    click.echo("-" * 37)
    for o in orders:
        click.echo(f"{o.id:<6} {o.supplier_id:>8} {o.status:<10} {o.total:>10}")
