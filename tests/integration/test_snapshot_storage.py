"""Integration tests for snapshot round trips and the JSON snapshot store."""

import json

import pytest

from warehouse.orders.queries import pick_queue
from warehouse.seed import seed_snapshot
from warehouse.snapshot import (
    SNAPSHOT_FORMAT_VERSION,
    Snapshot,
    deserialize_snapshot,
    restore_snapshot,
    serialize_snapshot,
    take_snapshot,
)
from warehouse.stock.queries import list_items
from warehouse.storage import JsonSnapshotStore


class TestSnapshotRoundTrip:
    def test_restore_then_take_reproduces_state(self, engine):
        engine.receive("PO-2024-001", "1", 7, "A-01-09")
        engine.pack("SO-2024-102", "Small Box")
        before = take_snapshot()

        restore_snapshot(deserialize_snapshot(serialize_snapshot(before)))
        after = take_snapshot()

        assert after.inventory == before.inventory
        assert [_without_line_ids(o) for o in after.orders] == [_without_line_ids(o) for o in before.orders]

    def test_large_inventory_survives_round_trip(self, engine):
        for n in range(120):
            engine.add_item(sku=f"BULK-{n:03d}", name=f"Bulk item {n}", quantity=n)
        snapshot = take_snapshot()
        assert len(snapshot.inventory) == 124

        restore_snapshot(deserialize_snapshot(serialize_snapshot(snapshot)))

        assert len(list_items()) == 124
        assert len(take_snapshot().inventory) == 124

    def test_large_order_book_survives_round_trip(self):
        orders = tuple(
            {
                "id": f"SO-BULK-{n:03d}",
                "order_type": "Outbound",
                "status": "Pending",
                "partner_name": "Bulk Buyer",
                "items": [{"item_id": "1", "sku": "TECH-001", "name": "Mouse", "quantity": 1, "picked": 0}],
            }
            for n in range(110)
        )
        restore_snapshot(Snapshot(orders=orders))

        assert len(take_snapshot().orders) == 110
        assert len(pick_queue()) == 110

    def test_restore_replaces_existing_state(self, seeded):
        restore_snapshot(deserialize_snapshot(json.dumps({"version": SNAPSHOT_FORMAT_VERSION})))
        assert list_items() == []

    def test_unknown_version_is_rejected(self):
        with pytest.raises(ValueError):
            deserialize_snapshot(json.dumps({"version": 99}))


def _without_line_ids(order):
    return {**order, "items": [{k: v for k, v in line.items() if k != "id"} for line in order["items"]]}


class TestJsonSnapshotStore:
    def test_missing_file_loads_nothing(self, tmp_path):
        assert JsonSnapshotStore(tmp_path / "absent.json").load() is None

    def test_unreadable_file_loads_nothing(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        assert JsonSnapshotStore(path).load() is None

    def test_save_then_load(self, tmp_path):
        store = JsonSnapshotStore(tmp_path / "nested" / "warehouse.json")
        snapshot = seed_snapshot()
        store.save(snapshot)
        assert store.load() == snapshot

    def test_save_overwrites_previous_file(self, tmp_path):
        store = JsonSnapshotStore(tmp_path / "warehouse.json")
        store.save(seed_snapshot())
        emptied = deserialize_snapshot(json.dumps({"version": SNAPSHOT_FORMAT_VERSION, "taken_at": "now"}))
        store.save(emptied)
        assert store.load().inventory == ()
        assert [p.name for p in tmp_path.iterdir()] == ["warehouse.json"]

    def test_record_without_id_loads_nothing(self, tmp_path):
        path = tmp_path / "warehouse.json"
        path.write_text(
            json.dumps({"version": SNAPSHOT_FORMAT_VERSION, "inventory": [{"sku": "X-1", "name": "No id"}]}),
            encoding="utf-8",
        )
        assert JsonSnapshotStore(path).load() is None

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            {"inventory": {"id": "1"}},
            {"orders": [{"id": "SO-1"}]},
            {"orders": [{"id": "SO-1", "order_type": "Outbound", "items": [{"sku": "X"}]}]},
        ],
    )
    def test_malformed_records_are_rejected(self, payload):
        with pytest.raises(ValueError):
            deserialize_snapshot(json.dumps(payload))
