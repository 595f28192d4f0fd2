"""FastAPI routes for the warehouse console.

Mutations go through the session console's FulfillmentEngine and answer with
the resulting snapshot. A mutation against an unknown id is a silent no-op, so
it still answers 200 with an unchanged snapshot; only reads answer 404.
"""

from fastapi import APIRouter, HTTPException, Query

from warehouse.api.schemas import (
    AddItemRequest,
    ChatRequest,
    ChatResponse,
    CycleCountRequest,
    IdentifyRequest,
    InsightSchema,
    ItemIdResponse,
    LocationResponse,
    PackagingResponse,
    PackRequest,
    PickRequest,
    PutawayRequest,
    RateQuoteResponse,
    ReceiveRequest,
    ShipRequest,
    SnapshotResponse,
    UpdateItemRequest,
)
from warehouse.console import get_console
from warehouse.fulfillment.carrier.port import CarrierError
from warehouse.orders import queries as order_queries
from warehouse.snapshot import Snapshot
from warehouse.stock import queries as stock_queries

QUEUES = {
    "inbound": order_queries.inbound_queue,
    "pick": order_queries.pick_queue,
    "pack": order_queries.pack_queue,
    "ship": order_queries.ship_queue,
}


def _snapshot_response(snapshot: Snapshot) -> SnapshotResponse:
    return SnapshotResponse(
        inventory=list(snapshot.inventory),
        orders=list(snapshot.orders),
        taken_at=snapshot.taken_at,
    )


# ---------------------------------------------------------------------------
# Inventory Router
# ---------------------------------------------------------------------------
inventory_router = APIRouter(prefix="/inventory", tags=["inventory"])


@inventory_router.get("")
async def list_inventory(q: str | None = None) -> list[dict]:
    items = stock_queries.search_items(q) if q else stock_queries.list_items()
    return [item.as_record() for item in items]


@inventory_router.get("/low-stock")
async def low_stock() -> list[dict]:
    return [item.as_record() for item in stock_queries.low_stock_items()]


@inventory_router.get("/{item_id}")
async def get_item(item_id: str) -> dict:
    item = stock_queries.find_item(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Inventory item {item_id} not found")
    return item.as_record()


@inventory_router.post("", status_code=201, response_model=ItemIdResponse)
async def add_item(body: AddItemRequest) -> ItemIdResponse:
    item_id, _ = get_console().engine.add_item(**body.model_dump())
    return ItemIdResponse(item_id=item_id)


@inventory_router.patch("/{item_id}", response_model=SnapshotResponse)
async def update_item(item_id: str, body: UpdateItemRequest) -> SnapshotResponse:
    changes = body.model_dump(exclude_unset=True)
    return _snapshot_response(get_console().engine.update_item(item_id, **changes))


@inventory_router.delete("/{item_id}", response_model=SnapshotResponse)
async def remove_item(item_id: str) -> SnapshotResponse:
    return _snapshot_response(get_console().engine.remove_item(item_id))


@inventory_router.put("/{item_id}/count", response_model=SnapshotResponse)
async def record_cycle_count(item_id: str, body: CycleCountRequest) -> SnapshotResponse:
    snapshot = get_console().engine.record_cycle_count(item_id, body.counted_quantity)
    return _snapshot_response(snapshot)


# ---------------------------------------------------------------------------
# Orders Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("")
async def list_orders(
    order_type: str | None = Query(default=None, alias="type"),
    status: str | None = None,
) -> list[dict]:
    return [order.as_record() for order in order_queries.list_orders(order_type=order_type, status=status)]


@order_router.get("/queues/{queue}")
async def work_queue(queue: str) -> list[dict]:
    if queue not in QUEUES:
        raise HTTPException(status_code=404, detail=f"Unknown queue {queue}")
    return [order.as_record() for order in QUEUES[queue]()]


@order_router.get("/{order_id}")
async def get_order(order_id: str) -> dict:
    order = order_queries.find_order(order_id)
    if order is None:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")
    return order.as_record()


@order_router.get("/{order_id}/pick-list")
async def pick_list(order_id: str) -> list[dict]:
    if order_queries.find_order(order_id) is None:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")
    return order_queries.pick_list(order_id)


@order_router.put("/{order_id}/receive", response_model=SnapshotResponse)
async def receive(order_id: str, body: ReceiveRequest) -> SnapshotResponse:
    snapshot = get_console().engine.receive(order_id, body.item_id, body.quantity, body.location)
    return _snapshot_response(snapshot)


@order_router.put("/{order_id}/pick", response_model=SnapshotResponse)
async def pick(order_id: str, body: PickRequest) -> SnapshotResponse:
    return _snapshot_response(get_console().engine.pick(order_id, body.item_id, body.quantity))


@order_router.put("/{order_id}/pack", response_model=SnapshotResponse)
async def pack(order_id: str, body: PackRequest) -> SnapshotResponse:
    return _snapshot_response(get_console().engine.pack(order_id, body.packaging))


@order_router.put("/{order_id}/ship", response_model=SnapshotResponse)
async def ship(order_id: str, body: ShipRequest) -> SnapshotResponse:
    console = get_console()
    if body.tracking_number:
        return _snapshot_response(console.engine.ship(order_id, body.carrier, body.tracking_number))
    try:
        snapshot = console.ship_with_carrier(order_id, body.carrier)
    except CarrierError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return _snapshot_response(snapshot)


@order_router.get("/{order_id}/rates", response_model=list[RateQuoteResponse])
async def shipping_rates(order_id: str) -> list[RateQuoteResponse]:
    return [
        RateQuoteResponse(carrier=q.carrier, service=q.service, transit=q.transit, price=q.price)
        for q in get_console().rate_quotes(order_id)
    ]


# ---------------------------------------------------------------------------
# Advisory Router
# ---------------------------------------------------------------------------
advisory_router = APIRouter(prefix="/advisory", tags=["advisory"])


@advisory_router.post("/putaway", response_model=LocationResponse)
async def suggest_putaway(body: PutawayRequest) -> LocationResponse:
    location = await get_console().suggest_putaway(body.order_id, body.item_id)
    return LocationResponse(location=location)


@advisory_router.get("/packaging/{order_id}", response_model=PackagingResponse)
async def suggest_packaging(order_id: str) -> PackagingResponse:
    return PackagingResponse(packaging=await get_console().suggest_packaging(order_id))


@advisory_router.post("/identify")
async def identify_item(body: IdentifyRequest) -> dict:
    return await get_console().identify_item(body.image_b64)


@advisory_router.post("/chat", response_model=ChatResponse)
async def chat(body: ChatRequest) -> ChatResponse:
    return ChatResponse(reply=await get_console().ask(body.message))


@advisory_router.get("/insights", response_model=list[InsightSchema])
async def insights() -> list[InsightSchema]:
    console = get_console()
    current = await console.refresh_insights()
    return [InsightSchema(**insight.as_dict()) for insight in current]


# ---------------------------------------------------------------------------
# Dashboard Router
# ---------------------------------------------------------------------------
dashboard_router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@dashboard_router.get("")
async def dashboard() -> dict:
    return get_console().dashboard()
