"""Read-side helpers over the Order Store: work queues and pick lists."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from warehouse.orders.order import Order, OrderStatus, OrderType
from warehouse.stock.queries import find_item

UNKNOWN_LOCATION = "UNKNOWN"


def list_orders(order_type: str | None = None, status: str | None = None) -> list[Order]:
    """Orders sorted by id, optionally filtered by type and/or status value."""
    criteria = {}
    if order_type:
        criteria["order_type"] = order_type
    if status:
        criteria["status"] = status

    dao = current_domain.repository_for(Order)._dao
    query = dao.query.filter(**criteria) if criteria else dao.query
    # Lift the default page size; snapshots must carry every order.
    orders = query.limit(None).all().items
    return sorted(orders, key=lambda o: str(o.id))


def find_order(order_id: str) -> Order | None:
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        return None


def inbound_queue() -> list[Order]:
    """Expected arrivals (ASNs) that still have something to receive."""
    return [
        order
        for order in list_orders(order_type=OrderType.INBOUND.value)
        if order.status != OrderStatus.COMPLETED.value
    ]


def pick_queue() -> list[Order]:
    return list_orders(order_type=OrderType.OUTBOUND.value, status=OrderStatus.PENDING.value)


def pack_queue() -> list[Order]:
    return list_orders(order_type=OrderType.OUTBOUND.value, status=OrderStatus.PROCESSING.value)


def ship_queue() -> list[Order]:
    return list_orders(order_type=OrderType.OUTBOUND.value, status=OrderStatus.PACKED.value)


def pick_list(order_id: str) -> list[dict]:
    """Lines of an order enriched with their current bin, walked in location order.

    Lines whose item has left the ledger keep their snapshot and sort under
    ``UNKNOWN``.
    """
    order = find_order(order_id)
    if order is None:
        return []

    entries = []
    for line in order.lines:
        item = find_item(str(line.item_id))
        entries.append(
            {
                **line.as_record(),
                "location": (item.location if item is not None else None) or UNKNOWN_LOCATION,
                "remaining": line.remaining_to_pick,
            }
        )
    return sorted(entries, key=lambda entry: entry["location"])
