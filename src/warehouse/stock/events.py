"""Domain events for the InventoryItem aggregate.

Immutable facts about ledger changes. Nothing replays them; they exist so that
the rest of the system can react to stock movements.
"""

from protean.fields import DateTime, Identifier, Integer, String, Text

from warehouse.domain import warehouse


@warehouse.event(part_of="InventoryItem")
class InventoryItemAdded:
    """A new stock item was added to the ledger."""

    __version__ = "v1"

    item_id = Identifier(required=True)
    sku = String(required=True)
    name = String(required=True)
    quantity = Integer(required=True)
    location = String()
    added_at = DateTime(required=True)


@warehouse.event(part_of="InventoryItem")
class InventoryItemUpdated:
    """One or more item attributes were edited."""

    __version__ = "v1"

    item_id = Identifier(required=True)
    changed_fields = Text(required=True)  # JSON list of field names
    updated_at = DateTime(required=True)


@warehouse.event(part_of="InventoryItem")
class StockLevelChanged:
    """On-hand quantity moved by a receiving or picking delta."""

    __version__ = "v1"

    item_id = Identifier(required=True)
    sku = String(required=True)
    delta = Integer(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    location = String()
    changed_at = DateTime(required=True)


@warehouse.event(part_of="InventoryItem")
class CycleCountRecorded:
    """A manual recount overwrote the on-hand quantity."""

    __version__ = "v1"

    item_id = Identifier(required=True)
    counted_quantity = Integer(required=True)
    expected_quantity = Integer(required=True)
    discrepancy = Integer(required=True)
    counted_at = DateTime(required=True)


@warehouse.event(part_of="InventoryItem")
class LowStockDetected:
    """Quantity dropped to or below the item's minimum stock level."""

    __version__ = "v1"

    item_id = Identifier(required=True)
    sku = String(required=True)
    quantity = Integer(required=True)
    min_stock_level = Integer(required=True)
    detected_at = DateTime(required=True)


@warehouse.event(part_of="InventoryItem")
class InventoryItemRemoved:
    """An item was deleted from the ledger. Order lines keep their snapshots."""

    __version__ = "v1"

    item_id = Identifier(required=True)
    sku = String(required=True)
    removed_at = DateTime(required=True)
