"""Outbound picking: command and handler.

Picking records progress on the order line and takes the same quantity off
the shelf. Stock floors at zero: picking more than is on hand empties the bin
rather than failing. As with receiving, the order and the item are resolved
independently and a miss on either side only skips that side.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from warehouse.domain import warehouse
from warehouse.orders.order import Order
from warehouse.stock.item import InventoryItem

logger = structlog.get_logger(__name__)


@warehouse.command(part_of="Order")
class PickOrderItem:
    """Pick a quantity of one order line from its bin."""

    order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=0)


@warehouse.command_handler(part_of=Order)
class PickingHandler:
    @handle(PickOrderItem)
    def pick_item(self, command):
        order_id, item_id = str(command.order_id), str(command.item_id)

        order_repo = current_domain.repository_for(Order)
        try:
            order = order_repo.get(order_id)
        except ObjectNotFoundError:
            order = None
            logger.warning("Picked stock against an unknown order", order_id=order_id, item_id=item_id)
        else:
            if order.apply_picking_progress(item_id, command.quantity):
                order_repo.add(order)
            else:
                logger.warning("Order has no outbound line for item", order_id=order_id, item_id=item_id)
                order = None

        item_repo = current_domain.repository_for(InventoryItem)
        try:
            item = item_repo.get(item_id)
        except ObjectNotFoundError:
            logger.warning("Picked an item missing from the ledger", order_id=order_id, item_id=item_id)
        else:
            if command.quantity > item.quantity:
                logger.warning(
                    "Pick exceeds on-hand stock, clamping to zero",
                    item_id=item_id,
                    on_hand=item.quantity,
                    requested=command.quantity,
                )
            item.apply_delta(-command.quantity)
            item_repo.add(item)

        logger.info(
            "Order item picked",
            order_id=order_id,
            item_id=item_id,
            quantity=command.quantity,
            status=order.status if order is not None else None,
        )
        return order is not None
