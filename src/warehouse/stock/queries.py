"""Read-side helpers over the Inventory Ledger.

Low-stock status and dashboard figures are computed from the live items on
every call; nothing here is persisted.
"""

from collections import defaultdict

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from warehouse.stock.item import InventoryItem


def list_items() -> list[InventoryItem]:
    """All ledger items in the order they were added."""
    # Lift the default page size; snapshots must carry every item.
    items = current_domain.repository_for(InventoryItem)._dao.query.limit(None).all().items
    return sorted(items, key=lambda i: (i.added_at is None, i.added_at, str(i.id)))


def find_item(item_id: str) -> InventoryItem | None:
    try:
        return current_domain.repository_for(InventoryItem).get(item_id)
    except ObjectNotFoundError:
        return None


def search_items(term: str) -> list[InventoryItem]:
    """Items whose name, SKU or location contains ``term`` (case-insensitive)."""
    needle = (term or "").strip().lower()
    if not needle:
        return list_items()
    return [
        item
        for item in list_items()
        if needle in (item.name or "").lower()
        or needle in (item.sku or "").lower()
        or needle in (item.location or "").lower()
    ]


def low_stock_items() -> list[InventoryItem]:
    return [item for item in list_items() if item.is_low_stock]


def inventory_stats(items: list[InventoryItem] | None = None) -> dict:
    """Dashboard headline figures for the given (or all) items."""
    items = list_items() if items is None else items
    units_by_category: dict[str, int] = defaultdict(int)
    for item in items:
        units_by_category[item.category or "Other"] += item.quantity

    return {
        "total_units": sum(item.quantity for item in items),
        "unique_skus": len(items),
        "low_stock_count": sum(1 for item in items if item.is_low_stock),
        "total_value": round(sum(item.stock_value for item in items), 2),
        "units_by_category": dict(units_by_category),
    }
