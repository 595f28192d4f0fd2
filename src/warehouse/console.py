"""WarehouseConsole: the session object behind every outer surface.

Owns one FulfillmentEngine, the advisory service, the carrier and the snapshot
store. State transitions go through the engine and complete synchronously;
advisory work runs beside them and is never awaited by a transition.
"""

import asyncio

import structlog

from warehouse.advisory.port import Insight
from warehouse.advisory.service import AdvisoryService
from warehouse.config import get_snapshot_path
from warehouse.fulfillment.carrier import get_carrier
from warehouse.fulfillment.carrier.port import CarrierError, CarrierPort, RateQuote
from warehouse.fulfillment.engine import FulfillmentEngine
from warehouse.orders import queries as order_queries
from warehouse.seed import seed_snapshot
from warehouse.snapshot import Snapshot
from warehouse.stock import queries as stock_queries
from warehouse.storage import JsonSnapshotStore

logger = structlog.get_logger(__name__)

# How many existing bins the putaway advisor gets to see.
LOCATION_SAMPLE_SIZE = 5


class WarehouseConsole:
    def __init__(
        self,
        engine: FulfillmentEngine | None = None,
        advisory: AdvisoryService | None = None,
        store: JsonSnapshotStore | None = None,
        carrier: CarrierPort | None = None,
    ) -> None:
        self.engine = engine or FulfillmentEngine()
        self.advisory = advisory or AdvisoryService()
        self.store = store
        self._carrier = carrier
        self.insights: list[Insight] = []
        self.chat_history: list[dict] = []
        self._background: set[asyncio.Task] = set()

    @property
    def carrier(self) -> CarrierPort:
        return self._carrier or get_carrier()

    @property
    def snapshot(self) -> Snapshot | None:
        return self.engine.snapshot

    def start(self) -> Snapshot:
        """Load the saved state (or the demo seed) and start persisting changes."""
        saved = self.store.load() if self.store is not None else None
        snapshot = self.engine.load(saved if saved is not None else seed_snapshot())
        if self.store is not None:
            self.engine.subscribe(self.store.save)
        self.engine.subscribe(self._on_change)
        logger.info(
            "Console started",
            source="store" if saved is not None else "seed",
            items=len(snapshot.inventory),
            orders=len(snapshot.orders),
        )
        self.request_insights()
        return snapshot

    def _on_change(self, _snapshot: Snapshot) -> None:
        if not self.insights:
            self.request_insights()

    # -------------------------------------------------------------------
    # Insights
    # -------------------------------------------------------------------
    def request_insights(self) -> asyncio.Task | None:
        """Schedule a background refresh when an event loop is running."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return None
        task = loop.create_task(self.refresh_insights())
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    async def refresh_insights(self) -> list[Insight]:
        """Ask the advisor for fresh insights; an empty answer keeps the old ones."""
        inventory = list(self.snapshot.inventory) if self.snapshot else []
        insights = await self.advisory.summarize_insights(inventory)
        if insights:
            self.insights = insights
        return self.insights

    # -------------------------------------------------------------------
    # Advisory helpers
    # -------------------------------------------------------------------
    async def suggest_putaway(self, order_id: str, item_id: str) -> str:
        snapshot = self.snapshot
        item = snapshot.item(item_id)
        if item is None:
            order = snapshot.order(order_id) or {}
            item = next((line for line in order.get("items", []) if line["item_id"] == str(item_id)), {})
        context = {
            "categories": sorted({i["category"] for i in snapshot.inventory if i.get("category")}),
            "locations": [i["location"] for i in snapshot.inventory if i.get("location")][:LOCATION_SAMPLE_SIZE],
        }
        draft = {"name": item.get("name"), "category": item.get("category")}
        return await self.advisory.suggest_location(draft, context)

    async def suggest_packaging(self, order_id: str) -> str:
        order = self.snapshot.order(order_id) or {}
        lines = [{"name": line["name"], "quantity": line["quantity"]} for line in order.get("items", [])]
        return await self.advisory.suggest_packaging(lines)

    async def identify_item(self, image_b64: str) -> dict:
        return await self.advisory.identify_item(image_b64)

    async def ask(self, message: str) -> str:
        """Chat with the advisor about the current inventory, keeping the history."""
        reply = await self.advisory.chat(list(self.snapshot.inventory), message, list(self.chat_history))
        self.chat_history.append({"role": "user", "content": message})
        self.chat_history.append({"role": "assistant", "content": reply})
        return reply

    # -------------------------------------------------------------------
    # Shipping
    # -------------------------------------------------------------------
    def rate_quotes(self, order_id: str) -> list[RateQuote]:
        return self.carrier.quote_rates(order_id)

    def ship_with_carrier(self, order_id: str, carrier: str) -> Snapshot:
        """Book a label with the carrier and ship the order under its tracking number."""
        label = self.carrier.create_label(order_id, carrier)
        if not label.success:
            logger.warning("Carrier refused shipment", order_id=order_id, carrier=carrier, reason=label.failure_reason)
            raise CarrierError(label.failure_reason or "Carrier unavailable")
        return self.engine.ship(order_id, label.carrier, label.tracking_number)

    # -------------------------------------------------------------------
    # Read models
    # -------------------------------------------------------------------
    def dashboard(self) -> dict:
        return {
            **stock_queries.inventory_stats(),
            "low_stock": [item.as_record() for item in stock_queries.low_stock_items()],
            "queues": {
                "inbound": len(order_queries.inbound_queue()),
                "pick": len(order_queries.pick_queue()),
                "pack": len(order_queries.pack_queue()),
                "ship": len(order_queries.ship_queue()),
            },
            "insights": [insight.as_dict() for insight in self.insights],
        }


_console: WarehouseConsole | None = None


def get_console() -> WarehouseConsole:
    """Return the started session console, creating it on first use."""
    global _console
    if _console is None:
        _console = WarehouseConsole(store=JsonSnapshotStore(get_snapshot_path()))
        _console.start()
    return _console


def set_console(console: WarehouseConsole) -> None:
    global _console
    _console = console


def reset_console() -> None:
    global _console
    _console = None
