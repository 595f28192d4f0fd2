"""Integration tests for the WarehouseConsole session wiring."""

import asyncio
import json

import pytest

from warehouse.advisory.fake_adapter import FakeAdvisor
from warehouse.advisory.port import Insight
from warehouse.advisory.service import AdvisoryService
from warehouse.console import WarehouseConsole
from warehouse.storage import JsonSnapshotStore


@pytest.fixture()
def store(tmp_path):
    return JsonSnapshotStore(tmp_path / "warehouse.json")


class TestStartup:
    def test_first_start_uses_seed(self, store):
        snapshot = WarehouseConsole(store=store).start()
        assert [i["id"] for i in snapshot.inventory] == ["1", "2", "3", "4"]
        assert store.load() is None

    def test_changes_are_persisted(self, store):
        console = WarehouseConsole(store=store)
        console.start()
        console.engine.pick("SO-2024-102", "1", 5)
        assert store.load().item("1")["quantity"] == 40

    def test_restart_loads_saved_state(self, store):
        first = WarehouseConsole(store=store)
        first.start()
        first.engine.record_cycle_count("3", 99)

        snapshot = WarehouseConsole(store=store).start()
        assert snapshot.item("3")["quantity"] == 99

    def test_malformed_saved_state_falls_back_to_seed(self, store):
        store.path.write_text(json.dumps({"version": 1, "orders": [{"order_type": "Inbound"}]}), encoding="utf-8")
        snapshot = WarehouseConsole(store=store).start()
        assert [i["id"] for i in snapshot.inventory] == ["1", "2", "3", "4"]


class TestInsights:
    @pytest.mark.asyncio
    async def test_start_inside_loop_schedules_refresh(self):
        console = WarehouseConsole(store=None)
        console.start()
        await asyncio.gather(*console._background)
        assert [i.kind for i in console.insights] == ["warning", "warning", "suggestion"]

    def test_start_without_loop_schedules_nothing(self):
        console = WarehouseConsole(store=None)
        console.start()
        assert console.request_insights() is None
        assert console.insights == []

    @pytest.mark.asyncio
    async def test_failed_refresh_keeps_previous_insights(self):
        advisor = FakeAdvisor()
        console = WarehouseConsole(advisory=AdvisoryService(advisor=advisor), store=None)
        console.start()
        await asyncio.gather(*console._background)
        console.insights = [Insight(kind="success", message="All good")]

        advisor.configure(should_succeed=False)
        assert await console.refresh_insights() == [Insight(kind="success", message="All good")]


class TestAdvisoryHelpers:
    @pytest.mark.asyncio
    async def test_putaway_for_line_missing_from_ledger_uses_line_snapshot(self):
        advisor = FakeAdvisor()
        console = WarehouseConsole(advisory=AdvisoryService(advisor=advisor), store=None)
        console.start()
        console.engine.remove_item("4")

        location = await console.suggest_putaway("PO-2024-001", "4")

        call = next(c for c in advisor.calls if c["method"] == "suggest_location")
        assert call["item"]["name"] == "USB-C Docking Station"
        # No category on the line, so the item lands in overflow
        assert location == "F-01-01"

    @pytest.mark.asyncio
    async def test_chat_keeps_history(self):
        console = WarehouseConsole(store=None)
        console.start()
        await console.ask("How much paper?")
        await console.ask("And mice?")
        assert [turn["role"] for turn in console.chat_history] == ["user", "assistant", "user", "assistant"]
