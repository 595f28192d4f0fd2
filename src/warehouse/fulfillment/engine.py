"""Fulfillment Engine: the single write API over the ledger and the order store.

Each method turns a console action into a command, processes it synchronously
through the domain, and hands back a fresh Snapshot. Registered listeners
(persistence) are told about every snapshot after the change is applied; a
listener failure is logged and does not undo the change.
"""

import json
from collections.abc import Callable

import structlog
from protean.utils.globals import current_domain

from warehouse.fulfillment.packing import CompletePacking
from warehouse.fulfillment.picking import PickOrderItem
from warehouse.fulfillment.receiving import ReceiveOrderItem
from warehouse.fulfillment.shipping import ShipOrder
from warehouse.snapshot import Snapshot, restore_snapshot, take_snapshot
from warehouse.stock.ledger import (
    AddInventoryItem,
    RecordCycleCount,
    RemoveInventoryItem,
    UpdateInventoryItem,
)

logger = structlog.get_logger(__name__)

Listener = Callable[[Snapshot], None]


class FulfillmentEngine:
    def __init__(self) -> None:
        self._listeners: list[Listener] = []
        self.snapshot: Snapshot | None = None

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def load(self, snapshot: Snapshot) -> Snapshot:
        """Replace all state with ``snapshot``. Listeners are not notified."""
        restore_snapshot(snapshot)
        self.snapshot = take_snapshot()
        return self.snapshot

    def _dispatch(self, command):
        return current_domain.process(command, asynchronous=False)

    def _publish(self) -> Snapshot:
        self.snapshot = take_snapshot()
        for listener in self._listeners:
            try:
                listener(self.snapshot)
            except Exception:
                logger.exception("Snapshot listener failed", listener=repr(listener))
        return self.snapshot

    # -------------------------------------------------------------------
    # Order workflows
    # -------------------------------------------------------------------
    def receive(self, order_id: str, item_id: str, quantity: int, location: str | None = None) -> Snapshot:
        self._dispatch(
            ReceiveOrderItem(
                order_id=order_id,
                item_id=item_id,
                quantity=quantity,
                location=location,
            )
        )
        return self._publish()

    def pick(self, order_id: str, item_id: str, quantity: int) -> Snapshot:
        self._dispatch(PickOrderItem(order_id=order_id, item_id=item_id, quantity=quantity))
        return self._publish()

    def pack(self, order_id: str, packaging: str | None = None) -> Snapshot:
        self._dispatch(CompletePacking(order_id=order_id, packaging=packaging))
        return self._publish()

    def ship(self, order_id: str, carrier: str, tracking_number: str) -> Snapshot:
        self._dispatch(ShipOrder(order_id=order_id, carrier=carrier, tracking_number=tracking_number))
        return self._publish()

    # -------------------------------------------------------------------
    # Ledger maintenance
    # -------------------------------------------------------------------
    def add_item(self, **draft) -> tuple[str, Snapshot]:
        """Add an item; returns its new id together with the snapshot."""
        fields = {key: value for key, value in draft.items() if value is not None}
        item_id = self._dispatch(AddInventoryItem(**fields))
        return item_id, self._publish()

    def update_item(self, item_id: str, **changes) -> Snapshot:
        self._dispatch(UpdateInventoryItem(item_id=item_id, changes=json.dumps(changes)))
        return self._publish()

    def remove_item(self, item_id: str) -> Snapshot:
        self._dispatch(RemoveInventoryItem(item_id=item_id))
        return self._publish()

    def record_cycle_count(self, item_id: str, counted_quantity: int) -> Snapshot:
        self._dispatch(RecordCycleCount(item_id=item_id, counted_quantity=counted_quantity))
        return self._publish()
