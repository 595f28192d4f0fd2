"""Shared BDD fixtures and step definitions for the warehouse console."""

import pytest
from pytest_bdd import given, parsers, then, when

from warehouse.console import WarehouseConsole
from warehouse.fulfillment.carrier import get_carrier
from warehouse.fulfillment.carrier.port import CarrierError


@pytest.fixture()
def error():
    """Container for a captured carrier refusal."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("the demo warehouse", target_fixture="console")
def demo_warehouse():
    console = WarehouseConsole(store=None)
    console.start()
    return console


@given(parsers.cfparse('item "{item_id}" has been removed from the ledger'))
def item_removed(console, item_id):
    console.engine.remove_item(item_id)


@given("the carrier is refusing shipments")
def carrier_refusing():
    get_carrier().configure(should_succeed=False, failure_reason="Depot closed")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('{quantity:d} units of item "{item_id}" are received on order "{order_id}" into "{location}"'))
def receive(console, quantity, item_id, order_id, location):
    console.engine.receive(order_id, item_id, quantity, location)


@when(parsers.cfparse('{quantity:d} units of item "{item_id}" are picked for order "{order_id}"'))
def pick(console, quantity, item_id, order_id):
    console.engine.pick(order_id, item_id, quantity)


@when(parsers.cfparse('order "{order_id}" is packed in "{packaging}"'))
def pack(console, order_id, packaging):
    console.engine.pack(order_id, packaging)


@when(parsers.cfparse('order "{order_id}" is shipped with "{carrier}"'))
def ship_with_carrier(console, error, order_id, carrier):
    try:
        console.ship_with_carrier(order_id, carrier)
    except CarrierError as exc:
        error["exc"] = exc


@when(parsers.cfparse('order "{order_id}" is shipped by "{carrier}" with tracking "{tracking}"'))
def ship_with_tracking(console, order_id, carrier, tracking):
    console.engine.ship(order_id, carrier, tracking)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('order "{order_id}" has status "{status}"'))
def order_status(console, order_id, status):
    assert console.snapshot.order(order_id)["status"] == status


@then(parsers.cfparse('order "{order_id}" has a tracking number'))
def order_tracked(console, order_id):
    assert console.snapshot.order(order_id)["tracking_number"].startswith("TRK-")


@then(parsers.cfparse('item "{item_id}" has {quantity:d} units at "{location}"'))
def item_stock(console, item_id, quantity, location):
    item = console.snapshot.item(item_id)
    assert item["quantity"] == quantity
    assert item["location"] == location


@then(parsers.cfparse('item "{item_id}" is not in the ledger'))
def item_gone(console, item_id):
    assert console.snapshot.item(item_id) is None


@then(parsers.cfparse('line "{item_id}" of order "{order_id}" shows {received:d} received'))
def line_received(console, item_id, order_id, received):
    line = next(li for li in console.snapshot.order(order_id)["items"] if li["item_id"] == item_id)
    assert line["received"] == received


@then("the shipment is refused")
def shipment_refused(error):
    assert isinstance(error["exc"], CarrierError)
    assert "Depot closed" in str(error["exc"])
