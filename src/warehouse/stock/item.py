"""InventoryItem aggregate (CQRS): one stock record in the Inventory Ledger.

Quantity Model:
    quantity:         Physical on-hand count, never negative
    min_stock_level:  Threshold for the low-stock signal

The low-stock signal is derived on read (quantity <= min_stock_level) and is
never stored. Receiving and picking move quantity through apply_delta(), which
floors the result at zero instead of failing.
"""

import json
from datetime import UTC, datetime

from protean.fields import DateTime, Float, Integer, String, Text

from warehouse.domain import warehouse
from warehouse.stock.events import (
    CycleCountRecorded,
    InventoryItemAdded,
    InventoryItemRemoved,
    InventoryItemUpdated,
    LowStockDetected,
    StockLevelChanged,
)

CATEGORIES = ("Electronics", "Furniture", "Office Supplies", "Apparel", "Industrial", "Other")

# Attributes an edit may touch. Identity and bookkeeping timestamps are excluded.
UPDATABLE_FIELDS = (
    "sku",
    "name",
    "category",
    "quantity",
    "min_stock_level",
    "location",
    "price",
    "description",
    "batch_number",
    "serial_number",
    "expiration_date",
    "dimensions",
    "weight",
)

OPTIONAL_FIELDS = (
    "price",
    "description",
    "batch_number",
    "serial_number",
    "expiration_date",
    "dimensions",
    "weight",
)


def _isoformat(value):
    return value.isoformat() if value else None


# ---------------------------------------------------------------------------
# Aggregate Root (CQRS)
# ---------------------------------------------------------------------------
@warehouse.aggregate
class InventoryItem:
    """A stock-keeping record: what it is, how many are on hand, and where."""

    sku = String(required=True, max_length=50)
    name = String(required=True, max_length=255)
    category = String(max_length=100, default="Other")
    quantity = Integer(default=0, min_value=0)
    min_stock_level = Integer(default=10, min_value=0)
    location = String(max_length=50, default="")
    price = Float(min_value=0.0)
    description = Text()
    batch_number = String(max_length=100)
    serial_number = String(max_length=100)
    expiration_date = String(max_length=10)  # ISO date, YYYY-MM-DD
    dimensions = String(max_length=100)  # LxWxH, free-form
    weight = Float(min_value=0.0)
    last_updated = DateTime()
    added_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        sku: str,
        name: str,
        category: str = "Other",
        quantity: int = 0,
        min_stock_level: int = 10,
        location: str = "",
        **details,
    ):
        """Add a new item to the ledger with a fresh identity and timestamp.

        SKUs are not checked for uniqueness; two records may share one.
        """
        now = datetime.now(UTC)
        optional = {key: details[key] for key in OPTIONAL_FIELDS if details.get(key) is not None}
        item = cls(
            sku=sku,
            name=name,
            category=category or "Other",
            quantity=quantity,
            min_stock_level=min_stock_level,
            location=location or "",
            last_updated=now,
            added_at=now,
            **optional,
        )
        item.raise_(
            InventoryItemAdded(
                item_id=str(item.id),
                sku=sku,
                name=name,
                quantity=quantity,
                location=item.location,
                added_at=now,
            )
        )
        return item

    # -------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------
    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.min_stock_level

    @property
    def stock_value(self) -> float:
        return self.quantity * (self.price or 0.0)

    def _check_low_stock(self, previous_quantity: int) -> None:
        """Raise LowStockDetected when quantity crosses into the low-stock band."""
        if self.is_low_stock and previous_quantity > self.min_stock_level:
            self.raise_(
                LowStockDetected(
                    item_id=str(self.id),
                    sku=self.sku,
                    quantity=self.quantity,
                    min_stock_level=self.min_stock_level,
                    detected_at=datetime.now(UTC),
                )
            )

    # -------------------------------------------------------------------
    # Edits
    # -------------------------------------------------------------------
    def update_details(self, **changes) -> list[str]:
        """Merge a partial set of attributes into the item.

        Unknown names are skipped. Returns the names that were applied.
        """
        applied = []
        for field_name in UPDATABLE_FIELDS:
            if field_name in changes:
                setattr(self, field_name, changes[field_name])
                applied.append(field_name)

        if not applied:
            return applied

        now = datetime.now(UTC)
        if "quantity" in applied:
            self.last_updated = now
        self.raise_(
            InventoryItemUpdated(
                item_id=str(self.id),
                changed_fields=json.dumps(applied),
                updated_at=now,
            )
        )
        return applied

    # -------------------------------------------------------------------
    # Quantity movements
    # -------------------------------------------------------------------
    def apply_delta(self, delta: int, location: str | None = None) -> None:
        """Move on-hand quantity by ``delta``, flooring at zero.

        ``location`` overwrites the bin code when given (putaway).
        """
        previous = self.quantity or 0
        now = datetime.now(UTC)
        self.quantity = max(0, previous + delta)
        if location:
            self.location = location
        self.last_updated = now
        self.raise_(
            StockLevelChanged(
                item_id=str(self.id),
                sku=self.sku,
                delta=delta,
                previous_quantity=previous,
                new_quantity=self.quantity,
                location=self.location,
                changed_at=now,
            )
        )
        self._check_low_stock(previous)

    def record_cycle_count(self, counted_quantity: int) -> None:
        """Overwrite on-hand quantity with a physical recount."""
        expected = self.quantity or 0
        now = datetime.now(UTC)
        self.quantity = counted_quantity
        self.last_updated = now
        self.raise_(
            CycleCountRecorded(
                item_id=str(self.id),
                counted_quantity=counted_quantity,
                expected_quantity=expected,
                discrepancy=counted_quantity - expected,
                counted_at=now,
            )
        )
        self._check_low_stock(expected)

    def mark_removed(self) -> None:
        """Record that the item is leaving the ledger."""
        self.raise_(
            InventoryItemRemoved(
                item_id=str(self.id),
                sku=self.sku,
                removed_at=datetime.now(UTC),
            )
        )

    # -------------------------------------------------------------------
    # Snapshot support
    # -------------------------------------------------------------------
    def as_record(self) -> dict:
        """Plain-value copy of the item, detached from the aggregate."""
        record = {
            "id": str(self.id),
            "sku": self.sku,
            "name": self.name,
            "category": self.category,
            "quantity": self.quantity,
            "min_stock_level": self.min_stock_level,
            "location": self.location,
            "last_updated": _isoformat(self.last_updated),
            "added_at": _isoformat(self.added_at),
        }
        for field_name in OPTIONAL_FIELDS:
            value = getattr(self, field_name)
            if value is not None:
                record[field_name] = value
        return record

    @classmethod
    def from_record(cls, record: dict):
        """Rebuild an item from ``as_record()`` output, keeping its identity."""
        data = {key: record[key] for key in ("sku", "name") if key in record}
        for key in ("category", "quantity", "min_stock_level", "location", *OPTIONAL_FIELDS):
            if record.get(key) is not None:
                data[key] = record[key]
        for key in ("last_updated", "added_at"):
            if record.get(key):
                data[key] = datetime.fromisoformat(record[key])
        return cls(id=str(record["id"]), **data)
