"""Value snapshots of the whole warehouse state.

A Snapshot is a detached copy of every ledger item and order, taken after each
mutation and handed to the UI/persistence collaborators. Its serialized form is
opaque to the core: only ``serialize_snapshot`` and ``deserialize_snapshot``
read or write it.
"""

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime

import structlog
from protean.utils.globals import current_domain

from warehouse.orders.order import Order
from warehouse.orders.queries import list_orders
from warehouse.stock.item import InventoryItem
from warehouse.stock.queries import list_items

logger = structlog.get_logger(__name__)

SNAPSHOT_FORMAT_VERSION = 1

# Keys a record needs before it can be rebuilt into an aggregate.
ITEM_KEYS = ("id", "sku", "name")
ORDER_KEYS = ("id", "order_type")
LINE_KEYS = ("item_id", "quantity")


@dataclass(frozen=True)
class Snapshot:
    inventory: tuple[dict, ...] = ()
    orders: tuple[dict, ...] = ()
    taken_at: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    def item(self, item_id: str) -> dict | None:
        return next((i for i in self.inventory if i["id"] == str(item_id)), None)

    def order(self, order_id: str) -> dict | None:
        return next((o for o in self.orders if o["id"] == str(order_id)), None)


def take_snapshot() -> Snapshot:
    """Copy the current ledger and order store into a Snapshot."""
    return Snapshot(
        inventory=tuple(item.as_record() for item in list_items()),
        orders=tuple(order.as_record() for order in list_orders()),
    )


def restore_snapshot(snapshot: Snapshot) -> None:
    """Replace all warehouse state with the contents of ``snapshot``.

    This is the "load initial state" hook; it runs before any command is
    processed in a session.
    """
    for _, provider in current_domain.providers.items():
        provider._data_reset()

    item_repo = current_domain.repository_for(InventoryItem)
    for record in snapshot.inventory:
        item_repo.add(InventoryItem.from_record(record))

    order_repo = current_domain.repository_for(Order)
    for record in snapshot.orders:
        order_repo.add(Order.from_record(record))

    logger.info(
        "Warehouse state restored",
        items=len(snapshot.inventory),
        orders=len(snapshot.orders),
        taken_at=snapshot.taken_at,
    )


def serialize_snapshot(snapshot: Snapshot) -> str:
    return json.dumps(
        {
            "version": SNAPSHOT_FORMAT_VERSION,
            "taken_at": snapshot.taken_at,
            "inventory": list(snapshot.inventory),
            "orders": list(snapshot.orders),
        },
        indent=2,
    )


def _check_records(records, required: tuple[str, ...], kind: str) -> tuple[dict, ...]:
    if not isinstance(records, list):
        raise ValueError(f"Snapshot {kind} must be a list")
    for record in records:
        if not isinstance(record, dict):
            raise ValueError(f"Snapshot {kind} record is not an object")
        missing = [key for key in required if record.get(key) in (None, "")]
        if missing:
            raise ValueError(f"Snapshot {kind} record missing {', '.join(missing)}")
    return tuple(records)


def deserialize_snapshot(payload: str) -> Snapshot:
    """Parse a serialized snapshot, rejecting records that cannot be restored."""
    data = json.loads(payload)
    if not isinstance(data, dict):
        raise ValueError("Snapshot payload must be an object")
    version = data.get("version", SNAPSHOT_FORMAT_VERSION)
    if version != SNAPSHOT_FORMAT_VERSION:
        raise ValueError(f"Unsupported snapshot version: {version}")

    orders = _check_records(data.get("orders", []), ORDER_KEYS, "order")
    for order in orders:
        _check_records(order.get("items", []), LINE_KEYS, "order line")
    return Snapshot(
        inventory=_check_records(data.get("inventory", []), ITEM_KEYS, "inventory"),
        orders=orders,
        taken_at=data.get("taken_at") or datetime.now(UTC).isoformat(),
    )
