"""Inventory Ledger: commands and handler for item maintenance.

Edits, removals and cycle counts against an unknown item id are silent no-ops:
the console only offers ids it has listed, so a miss means the item was
removed in the meantime.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from warehouse.domain import warehouse
from warehouse.stock.item import InventoryItem

logger = structlog.get_logger(__name__)


@warehouse.command(part_of="InventoryItem")
class AddInventoryItem:
    """Add a new stock item to the ledger."""

    sku = String(required=True, max_length=50)
    name = String(required=True, max_length=255)
    category = String(max_length=100, default="Other")
    quantity = Integer(min_value=0, default=0)
    min_stock_level = Integer(min_value=0, default=10)
    location = String(max_length=50)
    price = Float(min_value=0.0)
    description = Text()
    batch_number = String(max_length=100)
    serial_number = String(max_length=100)
    expiration_date = String(max_length=10)
    dimensions = String(max_length=100)
    weight = Float(min_value=0.0)


@warehouse.command(part_of="InventoryItem")
class UpdateInventoryItem:
    """Merge a partial set of attributes into an existing item."""

    item_id = Identifier(required=True)
    changes = Text(required=True)  # JSON-encoded field map


@warehouse.command(part_of="InventoryItem")
class RemoveInventoryItem:
    """Delete an item from the ledger. Orders keep their own line snapshots."""

    item_id = Identifier(required=True)


@warehouse.command(part_of="InventoryItem")
class RecordCycleCount:
    """Overwrite on-hand quantity with a physical recount."""

    item_id = Identifier(required=True)
    counted_quantity = Integer(required=True, min_value=0)


@warehouse.command_handler(part_of=InventoryItem)
class InventoryLedgerHandler:
    @handle(AddInventoryItem)
    def add_item(self, command):
        item = InventoryItem.create(
            sku=command.sku,
            name=command.name,
            category=command.category,
            quantity=command.quantity or 0,
            min_stock_level=command.min_stock_level if command.min_stock_level is not None else 10,
            location=command.location or "",
            price=command.price,
            description=command.description,
            batch_number=command.batch_number,
            serial_number=command.serial_number,
            expiration_date=command.expiration_date,
            dimensions=command.dimensions,
            weight=command.weight,
        )
        current_domain.repository_for(InventoryItem).add(item)
        logger.info("Inventory item added", item_id=str(item.id), sku=item.sku)
        return str(item.id)

    @handle(UpdateInventoryItem)
    def update_item(self, command):
        repo = current_domain.repository_for(InventoryItem)
        try:
            item = repo.get(command.item_id)
        except ObjectNotFoundError:
            logger.warning("Ignoring edit for unknown inventory item", item_id=str(command.item_id))
            return None

        changes = json.loads(command.changes) if isinstance(command.changes, str) else command.changes
        applied = item.update_details(**changes)
        skipped = sorted(set(changes) - set(applied))
        if skipped:
            logger.warning("Ignoring unknown inventory fields", item_id=str(item.id), fields=skipped)
        if applied:
            repo.add(item)
        return applied

    @handle(RemoveInventoryItem)
    def remove_item(self, command):
        repo = current_domain.repository_for(InventoryItem)
        try:
            item = repo.get(command.item_id)
        except ObjectNotFoundError:
            logger.warning("Ignoring removal of unknown inventory item", item_id=str(command.item_id))
            return None
        item.mark_removed()
        repo._dao.delete(item)
        logger.info("Inventory item removed", item_id=str(command.item_id), sku=item.sku)
        return str(command.item_id)

    @handle(RecordCycleCount)
    def record_cycle_count(self, command):
        repo = current_domain.repository_for(InventoryItem)
        try:
            item = repo.get(command.item_id)
        except ObjectNotFoundError:
            logger.warning("Ignoring cycle count for unknown inventory item", item_id=str(command.item_id))
            return None
        item.record_cycle_count(command.counted_quantity)
        repo.add(item)
        return item.quantity
