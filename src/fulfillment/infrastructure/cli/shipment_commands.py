"""CLI commands for the Shipment aggregate."""

from __future__ import annotations

import click

from fulfillment.application.assign_carrier import (
    AssignCarrierHandler,
    AssignMultipleShipmentsHandler,
)
from fulfillment.application.delete_shipment import DeleteShipmentHandler
from fulfillment.application.dto import ShipmentDTO
from fulfillment.application.reschedule_shipment import RescheduleShipmentHandler
from fulfillment.application.show_shipment import ShowShipmentHandler
from fulfillment.application.track_shipment import MarkDeliveredHandler, MarkInTransitHandler
from fulfillment.domain.exceptions import DomainException
from fulfillment.domain.model.shipment import ShipmentStatus
from fulfillment.infrastructure.cli.context import CliContext, DomainClickException, pass_context


def _display_shipment(dto: ShipmentDTO) -> None:
    click.echo(f"Shipment #{dto.id}  (status={dto.status})")
    click.echo(f"Sales order: #{dto.sales_order_id}")
    click.echo(f"Tracking:    {dto.tracking_number}")
    click.echo(f"Planned:     {dto.planned_date:%Y-%m-%d}")
    click.echo(f"Carrier:     {dto.carrier_id if dto.carrier_id is not None else '-'}")
    if dto.shipped_date:
        click.echo(f"Shipped:     {dto.shipped_date:%Y-%m-%d %H:%M}")
    if dto.delivered_date:
        click.echo(f"Delivered:   {dto.delivered_date:%Y-%m-%d %H:%M}")


def _parse_ids(raw: str) -> list[int]:
    try:
        return [int(part.strip()) for part in raw.split(",") if part.strip()]
    except ValueError:
        raise click.BadParameter(f"Invalid id list '{raw}'. Expected '1,2,3'.")


@click.command("show")
@click.option("--id", "shipment_id", default=None, type=int, help="Shipment ID.")
@click.option("--order", "order_id", default=None, type=int, help="Sales order ID.")
@click.option("--tracking", default=None, help="Tracking number.")
@pass_context
def shipment_show(
    ctx: CliContext, shipment_id: int | None, order_id: int | None, tracking: str | None
) -> None:
    """Show a shipment by id, sales order or tracking number."""
    handler = ShowShipmentHandler(ctx.uow())
    try:
        ctx.authorize("shipment.show")
        if shipment_id is not None:
            dto = handler.handle(shipment_id)
        elif order_id is not None:
            dto = handler.by_sales_order(order_id)
        elif tracking is not None:
            dto = handler.by_tracking_number(tracking)
        else:
            raise click.UsageError("Give one of --id, --order or --tracking.")
    except DomainException as exc:
        raise DomainClickException(exc)

    _display_shipment(dto)


@click.command("list")
@click.option(
    "--status",
    default=None,
    type=click.Choice([s.value for s in ShipmentStatus]),
    help="Only shipments in this status.",
)
@pass_context
def shipment_list(ctx: CliContext, status: str | None) -> None:
    """List shipments."""
    try:
        ctx.authorize("shipment.show")
        shipments = ShowShipmentHandler(ctx.uow()).list(ShipmentStatus(status) if status else None)
    except DomainException as exc:
        raise DomainClickException(exc)

    if not shipments:
        click.echo("No shipments found.")
        return

    click.echo(f"{'ID':<6} {'Order':>6} {'Status':<11} {'Planned':<11} {'Carrier':>8} {'Tracking'}")
    click.echo("-" * 75)
    for s in shipments:
        carrier = s.carrier_id if s.carrier_id is not None else "-"
        click.echo(
            f"{s.id:<6} {s.sales_order_id:>6} {s.status:<11} "
            f"{s.planned_date:%Y-%m-%d} {carrier!s:>9} {s.tracking_number}"
        )


@click.command("assign")
@click.option("--id", "shipment_id", required=True, type=int, help="Shipment ID.")
@click.option("--carrier", "carrier_id", required=True, type=int, help="Carrier ID.")
@pass_context
def shipment_assign(ctx: CliContext, shipment_id: int, carrier_id: int) -> None:
    """Assign a planned shipment to a carrier."""
    try:
        ctx.authorize("shipment.assign")
        AssignCarrierHandler(ctx.uow()).handle(shipment_id, carrier_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Shipment #{shipment_id} assigned to carrier #{carrier_id}.")


@click.command("assign-batch")
@click.option("--carrier", "carrier_id", required=True, type=int, help="Carrier ID.")
@click.option("--ids", required=True, help="Shipment IDs as '1,2,3'.")
@pass_context
def shipment_assign_batch(ctx: CliContext, carrier_id: int, ids: str) -> None:
    """Assign several planned shipments to one carrier (all or none)."""
    shipment_ids = _parse_ids(ids)
    try:
        ctx.authorize("shipment.assign")
        shipments = AssignMultipleShipmentsHandler(ctx.uow()).handle(carrier_id, shipment_ids)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"{len(shipments)} shipment(s) assigned to carrier #{carrier_id}.")


@click.command("transit")
@click.option("--id", "shipment_id", required=True, type=int, help="Shipment ID.")
@pass_context
def shipment_transit(ctx: CliContext, shipment_id: int) -> None:
    """Mark a planned shipment as in transit."""
    try:
        ctx.authorize("shipment.transit")
        MarkInTransitHandler(ctx.uow()).handle(shipment_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Shipment #{shipment_id} in transit.")


@click.command("deliver")
@click.option("--id", "shipment_id", required=True, type=int, help="Shipment ID.")
@pass_context
def shipment_deliver(ctx: CliContext, shipment_id: int) -> None:
    """Mark a shipment delivered (frees the carrier slot)."""
    try:
        ctx.authorize("shipment.deliver")
        MarkDeliveredHandler(ctx.uow()).handle(shipment_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Shipment #{shipment_id} delivered.")


@click.command("reschedule")
@click.option("--id", "shipment_id", required=True, type=int, help="Shipment ID.")
@click.option("--date", "planned", required=True, type=click.DateTime(formats=["%Y-%m-%d"]), help="New planned date.")
@pass_context
def shipment_reschedule(ctx: CliContext, shipment_id: int, planned) -> None:
    """Move a shipment's planned dispatch date."""
    try:
        ctx.authorize("shipment.reschedule")
        dto = RescheduleShipmentHandler(ctx.uow()).handle(shipment_id, planned.date())
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Shipment #{shipment_id} planned for {dto.planned_date:%Y-%m-%d}.")


@click.command("delete")
@click.option("--id", "shipment_id", required=True, type=int, help="Shipment ID.")
@pass_context
def shipment_delete(ctx: CliContext, shipment_id: int) -> None:
    """Delete a planned shipment."""
    try:
        ctx.authorize("shipment.delete")
        DeleteShipmentHandler(ctx.uow()).handle(shipment_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Shipment #{shipment_id} deleted.")
