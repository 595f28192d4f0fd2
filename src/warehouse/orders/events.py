"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from warehouse.domain import warehouse


@warehouse.event(part_of="Order")
class OrderItemReceived:
    """Inbound progress was recorded against an order line."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True)
    received = Integer(required=True)
    status = String(required=True)
    received_at = DateTime(required=True)


@warehouse.event(part_of="Order")
class OrderItemPicked:
    """Outbound pick progress was recorded against an order line."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True)
    picked = Integer(required=True)
    status = String(required=True)
    picked_at = DateTime(required=True)


@warehouse.event(part_of="Order")
class OrderPacked:
    """Packing was completed for an outbound order."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    packaging = String()
    previous_status = String(required=True)
    packed_at = DateTime(required=True)


@warehouse.event(part_of="Order")
class OrderShipped:
    """The order left the warehouse with a carrier."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    carrier = String(required=True)
    tracking_number = String(required=True)
    previous_status = String(required=True)
    shipped_at = DateTime(required=True)
