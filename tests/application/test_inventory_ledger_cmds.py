"""Application tests for inventory ledger commands."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from warehouse.stock.item import InventoryItem
from warehouse.stock.ledger import (
    AddInventoryItem,
    RecordCycleCount,
    RemoveInventoryItem,
    UpdateInventoryItem,
)
from warehouse.stock.queries import find_item, list_items


def _add_item(**overrides):
    defaults = {
        "sku": "OFF-300",
        "name": "Desk Stapler",
        "category": "Office Supplies",
        "quantity": 12,
        "min_stock_level": 5,
        "location": "C-02-01",
    }
    defaults.update(overrides)
    return current_domain.process(AddInventoryItem(**defaults), asynchronous=False)


class TestAddItem:
    def test_add_returns_new_id(self):
        item_id = _add_item()
        item = current_domain.repository_for(InventoryItem).get(item_id)
        assert item.sku == "OFF-300"
        assert item.quantity == 12

    def test_duplicate_skus_are_allowed(self):
        _add_item()
        _add_item()
        assert len([i for i in list_items() if i.sku == "OFF-300"]) == 2

    def test_negative_quantity_rejected_before_processing(self):
        with pytest.raises(ValidationError):
            AddInventoryItem(sku="X", name="X", quantity=-3)


class TestUpdateItem:
    def test_update_merges_fields(self):
        item_id = _add_item()
        applied = current_domain.process(
            UpdateInventoryItem(item_id=item_id, changes=json.dumps({"location": "C-09-09", "colour": "red"})),
            asynchronous=False,
        )
        assert applied == ["location"]
        assert find_item(item_id).location == "C-09-09"

    def test_update_unknown_item_is_noop(self):
        result = current_domain.process(
            UpdateInventoryItem(item_id="missing", changes=json.dumps({"name": "Ghost"})),
            asynchronous=False,
        )
        assert result is None
        assert list_items() == []


class TestRemoveItem:
    def test_remove_deletes_item(self):
        item_id = _add_item()
        current_domain.process(RemoveInventoryItem(item_id=item_id), asynchronous=False)
        assert find_item(item_id) is None

    def test_remove_unknown_item_is_noop(self):
        item_id = _add_item()
        assert current_domain.process(RemoveInventoryItem(item_id="missing"), asynchronous=False) is None
        assert find_item(item_id) is not None


class TestCycleCount:
    def test_cycle_count_overwrites_quantity(self):
        item_id = _add_item(quantity=12)
        current_domain.process(RecordCycleCount(item_id=item_id, counted_quantity=7), asynchronous=False)
        assert find_item(item_id).quantity == 7

    def test_cycle_count_rejects_negative(self):
        with pytest.raises(ValidationError):
            RecordCycleCount(item_id="1", counted_quantity=-1)

    def test_cycle_count_unknown_item_is_noop(self):
        result = current_domain.process(
            RecordCycleCount(item_id="missing", counted_quantity=3),
            asynchronous=False,
        )
        assert result is None
