"""CLI commands for the SalesOrder aggregate."""

from __future__ import annotations

import click

from fulfillment.application.access_policy import Role
from fulfillment.application.cancel_order import CancelOrderHandler
from fulfillment.application.create_sales_order import CreateSalesOrderHandler
from fulfillment.application.deliver_order import DeliverOrderHandler
from fulfillment.application.dto import SalesOrderDTO, SalesOrderLineSpec
from fulfillment.application.release_expired_reservations import (
    ReleaseExpiredReservationsHandler,
)
from fulfillment.application.reserve_stock import ReserveStockHandler
from fulfillment.application.ship_order import ShipOrderHandler
from fulfillment.application.show_sales_order import ShowSalesOrderHandler
from fulfillment.domain.exceptions import DomainException
from fulfillment.domain.model.sales_order import SalesOrderStatus
from fulfillment.infrastructure.bootstrap import reservation_ttl
from fulfillment.infrastructure.cli.context import CliContext, DomainClickException, pass_context


def _parse_lines(raw: str) -> list[SalesOrderLineSpec]:
    """Parse '1:3,2:5@4' (product:qty[@warehouse]) into SalesOrderLineSpec list."""
    specs: list[SalesOrderLineSpec] = []
    for item in raw.split(","):
        item = item.strip()
        warehouse_id = None
        if "@" in item:
            item, warehouse_str = item.split("@", 1)
            warehouse_id = _to_int(warehouse_str, "warehouse id")
        if ":" not in item:
            raise click.BadParameter(
                f"Invalid line format '{item}'. Expected 'ProductId:Quantity[@WarehouseId]'."
            )
        product_str, qty_str = item.split(":", 1)
        specs.append(
            SalesOrderLineSpec(
                product_id=_to_int(product_str, "product id"),
                quantity=_to_int(qty_str, "quantity"),
                warehouse_id=warehouse_id,
            )
        )
    return specs


def _to_int(raw: str, what: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise click.BadParameter(f"Invalid {what} '{raw}'.")


def _display_order(dto: SalesOrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Sales order #{dto.id}  (status={dto.status})")
    click.echo(f"Client:   {dto.client_id}")
    click.echo(f"Created:  {dto.created_at:%Y-%m-%d %H:%M}")
    if dto.tracking_number:
        click.echo(f"Shipment: #{dto.shipment_id} tracking {dto.tracking_number}")
    click.echo()
    click.echo(f"  {'Product':>8} {'Warehouse':>10} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_id:>8} {line.warehouse_id:>10} {line.quantity:>5} "
            f"{line.unit_price:>10} {line.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


def _authorize_owned(ctx: CliContext, operation: str, order_id: int) -> None:
    """Clients may only touch their own orders, so look the owner up first."""
    owner = None
    if ctx.caller.role == Role.CLIENT:
        owner = ShowSalesOrderHandler(ctx.uow()).handle(order_id).client_id
    ctx.authorize(operation, owner)


@click.command("create")
@click.option("--client", "client_id", default=None, type=int, help="Client ID (defaults to the caller).")
@click.option("--lines", required=True, help="Lines as 'ProductId:Qty[@WarehouseId],...'.")
@pass_context
def order_create(ctx: CliContext, client_id: int | None, lines: str) -> None:
    """Create a sales order and try to reserve its stock."""
    specs = _parse_lines(lines)
    if client_id is None:
        client_id = ctx.caller.client_id
    if client_id is None:
        raise click.BadParameter("--client is required", param_hint="--client")

    try:
        ctx.authorize("order.create", client_id)
        placement = CreateSalesOrderHandler(ctx.uow()).handle(client_id, specs)
    except DomainException as exc:
        raise DomainClickException(exc)

    _display_order(placement.order)
    click.echo()
    if placement.reserved:
        click.echo("Stock reserved.")
    else:
        click.echo("Not enough stock; order kept as backorder:")
        for s in placement.shortages:
            click.echo(
                f"  product {s.product_id} in warehouse {s.warehouse_id}: "
                f"requested {s.requested}, available {s.available}"
            )


@click.command("reserve")
@click.option("--id", "order_id", required=True, type=int, help="Sales order ID.")
@pass_context
def order_reserve(ctx: CliContext, order_id: int) -> None:
    """Reserve stock for a backordered sales order."""
    try:
        ctx.authorize("order.reserve")
        ReserveStockHandler(ctx.uow()).handle(order_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Sales order #{order_id} reserved.")


@click.command("ship")
@click.option("--id", "order_id", required=True, type=int, help="Sales order ID.")
@pass_context
def order_ship(ctx: CliContext, order_id: int) -> None:
    """Ship a reserved order (consumes stock, plans its shipment)."""
    try:
        ctx.authorize("order.ship")
        dto = ShipOrderHandler(ctx.uow(), cutoff=ctx.settings.shipment_cutoff).handle(order_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(
        f"Sales order #{order_id} shipped - shipment #{dto.shipment_id} "
        f"tracking {dto.tracking_number}"
    )


@click.command("deliver")
@click.option("--id", "order_id", required=True, type=int, help="Sales order ID.")
@pass_context
def order_deliver(ctx: CliContext, order_id: int) -> None:
    """Mark a shipped order as delivered."""
    try:
        ctx.authorize("order.deliver")
        DeliverOrderHandler(ctx.uow()).handle(order_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Sales order #{order_id} delivered.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Sales order ID.")
@pass_context
def order_cancel(ctx: CliContext, order_id: int) -> None:
    """Cancel an order (releases reserved stock)."""
    try:
        _authorize_owned(ctx, "order.cancel", order_id)
        CancelOrderHandler(ctx.uow()).handle(order_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Sales order #{order_id} canceled.")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Sales order ID.")
@pass_context
def order_show(ctx: CliContext, order_id: int) -> None:
    """Show details of a sales order."""
    try:
        _authorize_owned(ctx, "order.show", order_id)
        dto = ShowSalesOrderHandler(ctx.uow()).handle(order_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    _display_order(dto)


@click.command("list")
@click.option(
    "--status",
    default=None,
    type=click.Choice([s.value for s in SalesOrderStatus]),
    help="Only orders in this status.",
)
@click.option("--client", "client_id", default=None, type=int, help="Only this client's orders.")
@pass_context
def order_list(ctx: CliContext, status: str | None, client_id: int | None) -> None:
    """List sales orders."""
    if ctx.caller.role == Role.CLIENT and client_id is None:
        client_id = ctx.caller.client_id
    order_status = SalesOrderStatus(status) if status else None

    try:
        ctx.authorize("order.list", client_id)
        orders = ShowSalesOrderHandler(ctx.uow()).list(order_status, client_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    if not orders:
        click.echo("No sales orders found.")
        return

    click.echo(f"{'ID':<6} {'Client':>7} {'Status':<10} {'Total':>10} {'Tracking'}")
    click.echo("-" * 60)
    for o in orders:
        click.echo(f"{o.id:<6} {o.client_id:>7} {o.status:<10} {o.total:>10} {o.tracking_number or '-'}")
    click.echo(f"{len(orders)} order(s)")


@click.command("expire")
@pass_context
def order_expire(ctx: CliContext) -> None:
    """Cancel RESERVED orders whose reservation is older than the TTL."""
    try:
        ctx.authorize("order.expire")
        expired = ReleaseExpiredReservationsHandler(
            ctx.uow(), reservation_ttl(ctx.settings)
        ).handle()
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"{len(expired)} expired reservation(s) released.")
