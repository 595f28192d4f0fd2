"""Outbound packing: command and handler.

Packing completion is an operator action, not something derived from line
progress, so the trigger is accepted as given.
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
class CompletePacking:
    """Mark an outbound order as packed, optionally noting the box used."""

    order_id = Identifier(required=True)
    packaging = String(max_length=500)


@warehouse.command_handler(part_of=Order)
class PackingHandler:
    @handle(CompletePacking)
    def complete_packing(self, command):
        repo = current_domain.repository_for(Order)
        try:
            order = repo.get(command.order_id)
        except ObjectNotFoundError:
            logger.warning("Ignoring packing for unknown order", order_id=str(command.order_id))
            return False
        order.mark_packed(command.packaging)
        repo.add(order)
        logger.info("Order packed", order_id=str(order.id), packaging=order.packaging)
        return True
