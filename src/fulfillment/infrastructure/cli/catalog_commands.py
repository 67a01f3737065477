"""CLI commands for the catalog (products, warehouses, clients, suppliers)."""

from __future__ import annotations

import click

from fulfillment.application.add_partner import AddClientHandler, AddSupplierHandler
from fulfillment.application.add_product import AddProductHandler
from fulfillment.application.add_warehouse import AddWarehouseHandler
from fulfillment.application.show_catalog import ShowCatalogHandler
from fulfillment.domain.exceptions import DomainException
from fulfillment.infrastructure.cli.context import CliContext, DomainClickException, pass_context


@click.command("add-product")
@click.option("--sku", required=True, help="Unique stock keeping unit.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Selling price (e.g. 15.00).")
@click.option("--category", default="", help="Product category.")
@pass_context
def catalog_add_product(ctx: CliContext, sku: str, name: str, price: str, category: str) -> None:
    """Add a new product to the catalog."""
    try:
        ctx.authorize("catalog.add_product")
        product = AddProductHandler(ctx.uow()).handle(sku, name, price, category)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Product #{product.id} {product.sku} '{product.name}' added at {product.price}")


@click.command("add-warehouse")
@click.option("--code", required=True, help="Unique warehouse code.")
@click.option("--name", required=True, help="Warehouse name.")
@click.option("--capacity", default=0, type=int, help="Storage capacity.")
@click.option("--manager-id", default=None, type=int, help="Managing user id.")
@pass_context
def catalog_add_warehouse(
    ctx: CliContext, code: str, name: str, capacity: int, manager_id: int | None
) -> None:
    """Add a new warehouse."""
    try:
        ctx.authorize("catalog.add_warehouse")
        warehouse = AddWarehouseHandler(ctx.uow()).handle(code, name, capacity, manager_id)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Warehouse #{warehouse.id} {warehouse.code} '{warehouse.name}' added")


@click.command("add-client")
@click.option("--name", required=True, help="Client name.")
@click.option("--email", default="", help="Contact e-mail.")
@pass_context
def catalog_add_client(ctx: CliContext, name: str, email: str) -> None:
    """Register a client."""
    try:
        ctx.authorize("catalog.add_client")
        client = AddClientHandler(ctx.uow()).handle(name, email)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Client #{client.id} '{client.name}' added")


@click.command("add-supplier")
@click.option("--name", required=True, help="Supplier name.")
@click.option("--contact", default="", help="Contact details.")
@pass_context
def catalog_add_supplier(ctx: CliContext, name: str, contact: str) -> None:
    """Register a supplier."""
    try:
        ctx.authorize("catalog.add_supplier")
        supplier = AddSupplierHandler(ctx.uow()).handle(name, contact)
    except DomainException as exc:
        raise DomainClickException(exc)

    click.echo(f"Supplier #{supplier.id} '{supplier.name}' added")


@click.command("list")
@click.argument(
    "kind",
    type=click.Choice(["products", "warehouses", "clients", "suppliers"]),
    default="products",
)
@pass_context
def catalog_list(ctx: CliContext, kind: str) -> None:
    """List catalog entries of one kind."""
    try:
        ctx.authorize("catalog.list")
    except DomainException as exc:
        raise DomainClickException(exc)

    handler = ShowCatalogHandler(ctx.uow())
    if kind == "products":
        products = handler.products()
        if not products:
            click.echo("No products found.")
            return
        click.echo(f"{'ID':<6} {'SKU':<12} {'Name':<20} {'Price':>10} {'Active':>7}")
        click.echo("-" * 59)
        for p in products:
            click.echo(f"{p.id:<6} {p.sku:<12} {p.name:<20} {str(p.price):>10} {str(p.active):>7}")
    elif kind == "warehouses":
        warehouses = handler.warehouses()
        if not warehouses:
            click.echo("No warehouses found.")
            return
        click.echo(f"{'ID':<6} {'Code':<10} {'Name':<20} {'Capacity':>9}")
        click.echo("-" * 48)
        for w in warehouses:
            click.echo(f"{w.id:<6} {w.code:<10} {w.name:<20} {w.capacity:>9}")
    elif kind == "clients":
        for c in handler.clients():
            click.echo(f"{c.id:<6} {c.name:<20} {c.email}")
    else:
        for s in handler.suppliers():
            click.echo(f"{s.id:<6} {s.name:<20} {s.contact}")
