"""CLI commands for the Carrier aggregate."""

from __future__ import annotations

import click

from fulfillment.application.register_carrier import RegisterCarrierHandler
from fulfillment.application.reset_daily_capacity import ResetDailyCapacityHandler
from fulfillment.application.show_carriers import ShowCarriersHandler
from fulfillment.application.update_carrier_status import UpdateCarrierStatusHandler
from fulfillment.domain.exceptions import DomainException
from fulfillment.domain.model.carrier import CarrierStatus
from fulfillment.infrastructure.cli.context import CliContext, DomainClickException, pass_context


@click.command("register")
@click.option("--code", required=True, help="Unique carrier code.")
@click.option("--name", required=True, help="Carrier name.")
@click.option("--capacity", required=True, type=int, help="Max shipments per day.")
@pass_context
def carrier_register(ctx: CliContext, code: str, name: str, capacity: int) -> None:
    """Register a new carrier."""
    try:
        ctx.authorize("carrier.register")
        dto = RegisterCarrierHandler(ctx.uow()).handle(code, name, capacity)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Carrier #{dto.id} {dto.code} registered (capacity {dto.max_daily_capacity}/day)")


@click.command("status")
@click.option("--id", "carrier_id", required=True, type=int, help="Carrier ID.")
@click.option(
    "--status",
    required=True,
    type=click.Choice([s.value for s in CarrierStatus]),
    help="New status.",
)
@pass_context
def carrier_status(ctx: CliContext, carrier_id: int, status: str) -> None:
    """Activate or suspend a carrier."""
    try:
        ctx.authorize("carrier.status")
        dto = UpdateCarrierStatusHandler(ctx.uow()).handle(carrier_id, CarrierStatus(status))
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Carrier #{dto.id} is now {dto.status}.")


@click.command("reset")
@pass_context
def carrier_reset(ctx: CliContext) -> None:
    """Reset every carrier's daily shipment counter."""
    try:
        ctx.authorize("carrier.reset")
        count = ResetDailyCapacityHandler(ctx.uow()).handle()
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Daily capacity reset for {count} carrier(s).")


@click.command("list")
@click.option("--available", is_flag=True, default=False, help="Only ACTIVE carriers with room left.")
@pass_context
def carrier_list(ctx: CliContext, available: bool) -> None:
    """List carriers and their capacity usage."""
    try:
        ctx.authorize("carrier.list")
        carriers = ShowCarriersHandler(ctx.uow()).handle(available_only=available)
    except DomainException as exc:
        raise DomainClickException(exc)

    if not carriers:
        click.echo("No carriers found.")
        return

    click.echo(f"{'ID':<6} {'Code':<10} {'Name':<20} {'Status':<10} {'Used':>5} {'Max':>5}")
    click.echo("-" * 61)
    for c in carriers:
        click.echo(
            f"{c.id:<6} {c.code:<10} {c.name:<20} {c.status:<10} "
            f"{c.current_daily_shipments:>5} {c.max_daily_capacity:>5}"
        )
