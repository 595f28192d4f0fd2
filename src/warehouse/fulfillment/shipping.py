"""Outbound shipping: command and handler.

Shipping stamps carrier and tracking details and forces the order to SHIPPED
from whatever state it is in. Inventory is untouched; stock already left the
shelf when it was picked.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from warehouse.domain import warehouse
from warehouse.orders.order import Order

logger = structlog.get_logger(__name__)


@warehouse.command(part_of="Order")
class ShipOrder:
    """Hand an order to a carrier."""

    order_id = Identifier(required=True)
    carrier = String(required=True, max_length=100)
    tracking_number = String(required=True, max_length=255)


@warehouse.command_handler(part_of=Order)
class ShippingHandler:
    @handle(ShipOrder)
    def ship_order(self, command):
        repo = current_domain.repository_for(Order)
        try:
            order = repo.get(command.order_id)
        except ObjectNotFoundError:
            logger.warning("Ignoring shipment for unknown order", order_id=str(command.order_id))
            return False
        order.mark_shipped(command.carrier, command.tracking_number)
        repo.add(order)
        logger.info(
            "Order shipped",
            order_id=str(order.id),
            carrier=command.carrier,
            tracking_number=command.tracking_number,
        )
        return True
