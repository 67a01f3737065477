"""End-to-end tests of the command line, backed by a JSON state file."""

import pytest
from click.testing import CliRunner

from fulfillment.infrastructure.cli.main import cli


@pytest.fixture
def run(monkeypatch, tmp_path):
    monkeypatch.setenv("FULFILLMENT_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("FULFILLMENT_ROLE", "ADMIN")
    monkeypatch.delenv("FULFILLMENT_CLIENT_ID", raising=False)
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()

    def invoke(*args):
        return runner.invoke(cli, list(args))

    return invoke


@pytest.fixture
def seeded(run):
    """One product (#1) stocked with 100 units in warehouse #1, one client (#1)."""
    assert run("catalog", "add-product", "--sku", "WID-1", "--name", "Widget", "--price", "15.00").exit_code == 0
    assert run("catalog", "add-warehouse", "--code", "MAIN", "--name", "Main").exit_code == 0
    assert run("catalog", "add-client", "--name", "Acme").exit_code == 0
    assert run("inventory", "stock", "--warehouse", "1", "--product", "1", "--on-hand", "100").exit_code == 0
    return run


class TestCatalogCommands:

    def test_add_and_list_products(self, run):
        result = run("catalog", "add-product", "--sku", "WID-1", "--name", "Widget", "--price", "15")
        assert result.exit_code == 0
        assert "Product #1 WID-1 'Widget' added at 15.00" in result.output

        listing = run("catalog", "list", "products")
        assert "WID-1" in listing.output

    def test_duplicate_sku_exits_with_conflict(self, run):
        run("catalog", "add-product", "--sku", "WID-1", "--name", "Widget", "--price", "15")
        result = run("catalog", "add-product", "--sku", "WID-1", "--name", "Again", "--price", "15")
        assert result.exit_code == 4
        assert "already exists" in result.output


class TestOrderFlow:

    def test_create_ship_and_deliver(self, seeded):
        created = seeded("order", "create", "--client", "1", "--lines", "1:10@1")
        assert created.exit_code == 0
        assert "Stock reserved." in created.output
        assert "150.00" in created.output

        shipped = seeded("order", "ship", "--id", "1")
        assert shipped.exit_code == 0
        assert "shipment #1 tracking TRK-SO-1-" in shipped.output

        assert seeded("carrier", "register", "--code", "UPS", "--name", "UPS", "--capacity", "2").exit_code == 0
        assert seeded("shipment", "assign", "--id", "1", "--carrier", "1").exit_code == 0
        assert seeded("shipment", "transit", "--id", "1").exit_code == 0
        assert seeded("shipment", "deliver", "--id", "1").exit_code == 0

        shown = seeded("order", "show", "--id", "1")
        assert "status=DELIVERED" in shown.output

        movements = seeded("inventory", "movements", "--reference", "SO-1")
        assert "OUTBOUND" in movements.output

        totals = seeded("inventory", "totals", "--product", "1")
        assert "on hand=90, available=90" in totals.output

    def test_shortage_leaves_a_backorder(self, seeded):
        result = seeded("order", "create", "--client", "1", "--lines", "1:500@1")

        assert result.exit_code == 0
        assert "kept as backorder" in result.output
        assert "requested 500, available 100" in result.output
        assert "status=CREATED" in result.output

        retry = seeded("order", "reserve", "--id", "1")
        assert retry.exit_code == 4
        assert "Insufficient quantity" in retry.output

    def test_cancel_releases_stock(self, seeded):
        seeded("order", "create", "--client", "1", "--lines", "1:30@1")

        assert seeded("order", "cancel", "--id", "1").exit_code == 0

        shown = seeded("inventory", "show", "--warehouse", "1")
        assert "100" in shown.output
        assert seeded("order", "list", "--status", "CANCELED").output.count("CANCELED") == 1

    def test_unknown_order_exits_with_not_found(self, seeded):
        result = seeded("order", "show", "--id", "99")
        assert result.exit_code == 3
        assert "Sales order not found with id: '99'" in result.output

    def test_zero_quantity_exits_with_invalid_argument(self, seeded):
        result = seeded("order", "create", "--client", "1", "--lines", "1:0@1")
        assert result.exit_code == 5

    def test_malformed_lines_are_a_usage_error(self, seeded):
        result = seeded("order", "create", "--client", "1", "--lines", "oops")
        assert result.exit_code == 2
        assert "Invalid line format" in result.output


class TestRoles:

    def test_client_sees_only_own_orders(self, seeded):
        seeded("order", "create", "--client", "1", "--lines", "1:1@1")

        own = seeded("--role", "CLIENT", "--client-id", "1", "order", "show", "--id", "1")
        other = seeded("--role", "CLIENT", "--client-id", "2", "order", "show", "--id", "1")

        assert own.exit_code == 0
        assert other.exit_code == 6
        assert "their own sales orders" in other.output

    def test_client_orders_for_itself_by_default(self, seeded):
        result = seeded("--role", "client", "--client-id", "1", "order", "create", "--lines", "1:2")
        assert result.exit_code == 0
        assert "Client:   1" in result.output

    def test_client_cannot_ship(self, seeded):
        seeded("order", "create", "--client", "1", "--lines", "1:1@1")
        result = seeded("--role", "CLIENT", "--client-id", "1", "order", "ship", "--id", "1")
        assert result.exit_code == 6

    def test_manager_cannot_register_carriers(self, run):
        result = run(
            "--role", "WAREHOUSE_MANAGER",
            "carrier", "register", "--code", "UPS", "--name", "UPS", "--capacity", "2",
        )
        assert result.exit_code == 6

    def test_role_is_required(self, run, monkeypatch):
        monkeypatch.delenv("FULFILLMENT_ROLE")
        result = run("catalog", "list")
        assert result.exit_code == 2
        assert "Missing option" in result.output

    def test_role_from_environment(self, run, monkeypatch):
        monkeypatch.setenv("FULFILLMENT_ROLE", "WAREHOUSE_MANAGER")
        result = run("carrier", "register", "--code", "UPS", "--name", "UPS", "--capacity", "2")
        assert result.exit_code == 6


class TestShipmentsAndPurchasing:

    def test_batch_over_capacity_is_rejected(self, seeded):
        for _ in range(3):
            seeded("order", "create", "--client", "1", "--lines", "1:1@1")
        for order_id in ("1", "2", "3"):
            seeded("order", "ship", "--id", order_id)
        seeded("carrier", "register", "--code", "UPS", "--name", "UPS", "--capacity", "2")

        result = seeded("shipment", "assign-batch", "--carrier", "1", "--ids", "1,2,3")

        assert result.exit_code == 4
        assert "requested 3, available 2" in result.output
        listing = seeded("shipment", "list", "--status", "PLANNED")
        assert listing.output.count("PLANNED") == 3

    def test_purchase_receipt_restocks(self, seeded):
        seeded("catalog", "add-supplier", "--name", "Parts Inc")
        created = seeded("purchase", "create", "--supplier", "1", "--lines", "1:25:4.50")
        assert created.exit_code == 0
        assert seeded("purchase", "approve", "--id", "1").exit_code == 0

        received = seeded("purchase", "receive", "--id", "1", "--warehouse", "1")

        assert received.exit_code == 0
        assert "1 line(s) credited" in received.output
        assert "on hand=125" in seeded("inventory", "totals", "--product", "1").output
        assert "INBOUND" in seeded("inventory", "movements", "--reference", "PO-1").output
