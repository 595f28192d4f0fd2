"""Order aggregate (CQRS): inbound receipts and outbound shipments.

Both order types share one status field. Status is never set directly except
by the packing and shipping triggers; everything else is re-derived from line
progress after each update.

State Machine:
    INBOUND:  PENDING → PROCESSING → COMPLETED
              (COMPLETED once every line has received >= quantity)
    OUTBOUND: PENDING ⇄ PROCESSING → PACKED → SHIPPED
              (PROCESSING once every line has picked >= quantity,
               otherwise PENDING; PACKED and SHIPPED are external triggers
               accepted from any state)
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, HasMany, Identifier, Integer, String

from warehouse.config import ProgressPolicy, get_progress_policy
from warehouse.domain import warehouse
from warehouse.orders.events import OrderItemPicked, OrderItemReceived, OrderPacked, OrderShipped


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderType(Enum):
    INBOUND = "Inbound"
    OUTBOUND = "Outbound"


class OrderStatus(Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    PACKED = "Packed"
    SHIPPED = "Shipped"
    RECEIVED = "Received"  # part of the shared vocabulary, never derived
    COMPLETED = "Completed"


# ---------------------------------------------------------------------------
# Status derivation
# ---------------------------------------------------------------------------
def derive_receiving_status(lines) -> OrderStatus:
    """COMPLETED when every line is fully received, else PROCESSING."""
    if all((line.received or 0) >= line.quantity for line in lines):
        return OrderStatus.COMPLETED
    return OrderStatus.PROCESSING


def derive_picking_status(lines) -> OrderStatus:
    """PROCESSING (ready to pack) when every line is fully picked, else PENDING."""
    if all((line.picked or 0) >= line.quantity for line in lines):
        return OrderStatus.PROCESSING
    return OrderStatus.PENDING


def advance_progress(current: int | None, quantity: int, ordered: int, policy: ProgressPolicy) -> int:
    """Add ``quantity`` to a line's progress counter under ``policy``.

    The result is never lower than ``current``.
    """
    current = current or 0
    progressed = current + quantity
    if policy is ProgressPolicy.CLAMPED:
        progressed = min(progressed, max(ordered, current))
    return progressed


def _isoformat(value):
    return value.isoformat() if value else None


def _parse_datetime(value):
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@warehouse.entity(part_of="Order")
class OrderItem:
    """One order line. ``item_id`` is a lookup-only reference into the ledger;
    ``sku`` and ``name`` are copied at order creation and never re-synced."""

    item_id = Identifier(required=True)
    sku = String(required=True, max_length=50)
    name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=0)
    received = Integer(default=0, min_value=0)
    picked = Integer(default=0, min_value=0)
    position = Integer(default=0)

    @property
    def remaining_to_receive(self) -> int:
        return max(0, self.quantity - (self.received or 0))

    @property
    def remaining_to_pick(self) -> int:
        return max(0, self.quantity - (self.picked or 0))

    def as_record(self) -> dict:
        return {
            "id": str(self.id),
            "item_id": str(self.item_id),
            "sku": self.sku,
            "name": self.name,
            "quantity": self.quantity,
            "received": self.received or 0,
            "picked": self.picked or 0,
        }


# ---------------------------------------------------------------------------
# Aggregate Root (CQRS)
# ---------------------------------------------------------------------------
@warehouse.aggregate
class Order:
    order_type = String(required=True, choices=OrderType)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    partner_name = String(max_length=255)  # supplier (inbound) or customer (outbound)
    date = DateTime()
    items = HasMany(OrderItem)
    carrier = String(max_length=100)
    tracking_number = String(max_length=255)
    packaging = String(max_length=500)
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        order_id: str,
        order_type: str,
        partner_name: str,
        items_data: list[dict],
        status: str = OrderStatus.PENDING.value,
        date: datetime | str | None = None,
        carrier: str | None = None,
        tracking_number: str | None = None,
        packaging: str | None = None,
    ):
        """Build a pre-populated order (seed data or order intake)."""
        order = cls(
            id=order_id,
            order_type=order_type,
            status=status,
            partner_name=partner_name,
            date=_parse_datetime(date) or datetime.now(UTC),
            carrier=carrier,
            tracking_number=tracking_number,
            packaging=packaging,
        )
        for position, line in enumerate(items_data):
            data = {key: value for key, value in line.items() if value is not None}
            data.setdefault("received", 0)
            data.setdefault("picked", 0)
            data["item_id"] = str(data["item_id"])
            order.add_items(OrderItem(position=position, **data))
        return order

    @property
    def is_inbound(self) -> bool:
        return OrderType(self.order_type) == OrderType.INBOUND

    @property
    def is_outbound(self) -> bool:
        return OrderType(self.order_type) == OrderType.OUTBOUND

    @property
    def lines(self) -> list[OrderItem]:
        """Order lines in their original sequence."""
        return sorted(self.items or [], key=lambda line: line.position or 0)

    def lines_for(self, item_id: str) -> list[OrderItem]:
        return [line for line in self.lines if str(line.item_id) == str(item_id)]

    # -------------------------------------------------------------------
    # Inbound
    # -------------------------------------------------------------------
    def apply_receiving_progress(self, item_id: str, quantity: int, policy: ProgressPolicy | None = None) -> bool:
        """Add received quantity to every line for ``item_id`` and re-derive status.

        Returns False (and changes nothing) when the order is not inbound or
        has no such line.
        """
        matching = self.lines_for(item_id)
        if not self.is_inbound or not matching:
            return False

        policy = policy or get_progress_policy()
        for line in matching:
            line.received = advance_progress(line.received, quantity, line.quantity, policy)

        now = datetime.now(UTC)
        self.status = derive_receiving_status(self.lines).value
        self.updated_at = now
        for line in matching:
            self.raise_(
                OrderItemReceived(
                    order_id=str(self.id),
                    item_id=str(item_id),
                    quantity=quantity,
                    received=line.received,
                    status=self.status,
                    received_at=now,
                )
            )
        return True

    # -------------------------------------------------------------------
    # Outbound
    # -------------------------------------------------------------------
    def apply_picking_progress(self, item_id: str, quantity: int, policy: ProgressPolicy | None = None) -> bool:
        """Add picked quantity to every line for ``item_id`` and re-derive status.

        A partially picked order derives back to PENDING; there is no
        separate "partially picked" state.
        """
        matching = self.lines_for(item_id)
        if not self.is_outbound or not matching:
            return False

        policy = policy or get_progress_policy()
        for line in matching:
            line.picked = advance_progress(line.picked, quantity, line.quantity, policy)

        now = datetime.now(UTC)
        self.status = derive_picking_status(self.lines).value
        self.updated_at = now
        for line in matching:
            self.raise_(
                OrderItemPicked(
                    order_id=str(self.id),
                    item_id=str(item_id),
                    quantity=quantity,
                    picked=line.picked,
                    status=self.status,
                    picked_at=now,
                )
            )
        return True

    def mark_packed(self, packaging: str | None = None) -> None:
        """Record packing completion. Accepted from any state."""
        previous = self.status
        now = datetime.now(UTC)
        self.status = OrderStatus.PACKED.value
        if packaging:
            self.packaging = packaging
        self.updated_at = now
        self.raise_(
            OrderPacked(
                order_id=str(self.id),
                packaging=self.packaging or "",
                previous_status=previous,
                packed_at=now,
            )
        )

    def mark_shipped(self, carrier: str, tracking_number: str) -> None:
        """Ship the order. No check that every line was picked."""
        previous = self.status
        now = datetime.now(UTC)
        self.status = OrderStatus.SHIPPED.value
        self.carrier = carrier
        self.tracking_number = tracking_number
        self.updated_at = now
        self.raise_(
            OrderShipped(
                order_id=str(self.id),
                carrier=carrier,
                tracking_number=tracking_number,
                previous_status=previous,
                shipped_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Snapshot support
    # -------------------------------------------------------------------
    def as_record(self) -> dict:
        record = {
            "id": str(self.id),
            "order_type": self.order_type,
            "status": self.status,
            "partner_name": self.partner_name,
            "date": _isoformat(self.date),
            "items": [line.as_record() for line in self.lines],
        }
        for key in ("carrier", "tracking_number", "packaging"):
            value = getattr(self, key)
            if value:
                record[key] = value
        return record

    @classmethod
    def from_record(cls, record: dict):
        """Rebuild an order from ``as_record()`` output, keeping its identity."""
        return cls.create(
            order_id=str(record["id"]),
            order_type=record["order_type"],
            partner_name=record.get("partner_name") or "",
            items_data=[{key: value for key, value in line.items() if key != "id"} for line in record.get("items", [])],
            status=record.get("status") or OrderStatus.PENDING.value,
            date=record.get("date"),
            carrier=record.get("carrier"),
            tracking_number=record.get("tracking_number"),
            packaging=record.get("packaging"),
        )
