import logging

import click

from fulfillment.application.access_policy import Caller, Role
from fulfillment.infrastructure.cli.carrier_commands import (
    carrier_list,
    carrier_register,
    carrier_reset,
    carrier_status,
)
from fulfillment.infrastructure.cli.catalog_commands import (
    catalog_add_client,
    catalog_add_product,
    catalog_add_supplier,
    catalog_add_warehouse,
    catalog_list,
)
from fulfillment.infrastructure.cli.context import CliContext
from fulfillment.infrastructure.cli.inventory_commands import (
    inventory_adjust,
    inventory_low_stock,
    inventory_movements,
    inventory_remove,
    inventory_show,
    inventory_stock,
    inventory_totals,
)
from fulfillment.infrastructure.cli.order_commands import (
    order_cancel,
    order_create,
    order_deliver,
    order_expire,
    order_list,
    order_reserve,
    order_ship,
    order_show,
)
from fulfillment.infrastructure.cli.purchase_commands import (
    purchase_approve,
    purchase_cancel,
    purchase_create,
    purchase_delete,
    purchase_list,
    purchase_receive,
    purchase_show,
    purchase_update,
)
from fulfillment.infrastructure.cli.shipment_commands import (
    shipment_assign,
    shipment_assign_batch,
    shipment_delete,
    shipment_deliver,
    shipment_list,
    shipment_reschedule,
    shipment_show,
    shipment_transit,
)
from fulfillment.infrastructure.config import get_settings


@click.group()
@click.option(
    "--role",
    type=click.Choice([r.value for r in Role], case_sensitive=False),
    required=True,
    envvar="FULFILLMENT_ROLE",
    help="Role of the caller (or FULFILLMENT_ROLE).",
)
@click.option(
    "--client-id",
    type=int,
    default=None,
    envvar="FULFILLMENT_CLIENT_ID",
    help="Client id of the caller (CLIENT role).",
)
@click.pass_context
def cli(ctx: click.Context, role: str, client_id: int | None) -> None:
    """Fulfillment: inventory, sales orders, shipments and replenishment"""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = CliContext(settings=settings, caller=Caller(Role(role.upper()), client_id))


@cli.group()
def catalog() -> None:
    """Manage products, warehouses, clients and suppliers."""


@cli.group()
def inventory() -> None:
    """Manage stock levels and the movement ledger."""


@cli.group()
def order() -> None:
    """Manage sales orders."""


@cli.group()
def shipment() -> None:
    """Manage shipments."""


@cli.group()
def carrier() -> None:
    """Manage carriers and their daily capacity."""


@cli.group()
def purchase() -> None:
    """Manage purchase orders."""


# Register subcommands
catalog.add_command(catalog_add_product)
catalog.add_command(catalog_add_warehouse)
catalog.add_command(catalog_add_client)
catalog.add_command(catalog_add_supplier)
catalog.add_command(catalog_list)
inventory.add_command(inventory_stock)
inventory.add_command(inventory_adjust)
inventory.add_command(inventory_remove)
inventory.add_command(inventory_show)
inventory.add_command(inventory_low_stock)
inventory.add_command(inventory_totals)
inventory.add_command(inventory_movements)
order.add_command(order_create)
order.add_command(order_reserve)
order.add_command(order_ship)
order.add_command(order_deliver)
order.add_command(order_cancel)
order.add_command(order_show)
order.add_command(order_list)
order.add_command(order_expire)
shipment.add_command(shipment_show)
shipment.add_command(shipment_list)
shipment.add_command(shipment_assign)
shipment.add_command(shipment_assign_batch)
shipment.add_command(shipment_transit)
shipment.add_command(shipment_deliver)
shipment.add_command(shipment_reschedule)
shipment.add_command(shipment_delete)
carrier.add_command(carrier_register)
carrier.add_command(carrier_status)
carrier.add_command(carrier_reset)
carrier.add_command(carrier_list)
purchase.add_command(purchase_create)
purchase.add_command(purchase_update)
purchase.add_command(purchase_approve)
purchase.add_command(purchase_receive)
purchase.add_command(purchase_cancel)
purchase.add_command(purchase_delete)
purchase.add_command(purchase_show)
purchase.add_command(purchase_list)
