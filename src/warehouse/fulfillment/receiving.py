"""Inbound receiving: command and handler.

Receiving is a paired write: the order line's ``received`` counter and the
ledger item's on-hand quantity move by the same caller-supplied amount inside
one unit of work. Putaway happens in the same step: the item's bin is
overwritten with the location the stock was put away to.

Each side is looked up on its own. A missing order (or a line the inbound
order does not have) leaves the order store alone; a missing item leaves the
ledger alone. Whatever side exists is still updated.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from warehouse.domain import warehouse
from warehouse.orders.order import Order
from warehouse.stock.item import InventoryItem

logger = structlog.get_logger(__name__)


@warehouse.command(part_of="Order")
class ReceiveOrderItem:
    """Receive a quantity of one order line into stock at a location."""

    order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=0)
    location = String(max_length=50)  # putaway bin


@warehouse.command_handler(part_of=Order)
class ReceivingHandler:
    @handle(ReceiveOrderItem)
    def receive_item(self, command):
        order_id, item_id = str(command.order_id), str(command.item_id)

        order_repo = current_domain.repository_for(Order)
        try:
            order = order_repo.get(order_id)
        except ObjectNotFoundError:
            order = None
            logger.warning("Received stock against an unknown order", order_id=order_id, item_id=item_id)
        else:
            if order.apply_receiving_progress(item_id, command.quantity):
                order_repo.add(order)
            else:
                logger.warning("Order has no inbound line for item", order_id=order_id, item_id=item_id)
                order = None

        item_repo = current_domain.repository_for(InventoryItem)
        try:
            item = item_repo.get(item_id)
        except ObjectNotFoundError:
            item = None
            # Order progress still advances; stock cannot be created here.
            logger.warning(
                "Received stock for an item missing from the ledger",
                order_id=order_id,
                item_id=item_id,
                quantity=command.quantity,
            )
        else:
            item.apply_delta(command.quantity, location=command.location)
            item_repo.add(item)

        logger.info(
            "Order item received",
            order_id=order_id,
            item_id=item_id,
            quantity=command.quantity,
            location=command.location,
            status=order.status if order is not None else None,
        )
        return order is not None
