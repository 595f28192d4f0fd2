"""Pydantic request/response schemas for the warehouse API.

These are the external contracts. Quantities are checked here (``ge=0``) so
that a negative amount never reaches a command.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Inventory
# ---------------------------------------------------------------------------
class AddItemRequest(BaseModel):
    sku: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=255)
    category: str = "Other"
    quantity: int = Field(ge=0, default=0)
    min_stock_level: int = Field(ge=0, default=10)
    location: str = ""
    price: float | None = Field(default=None, ge=0)
    description: str | None = None
    batch_number: str | None = None
    serial_number: str | None = None
    expiration_date: str | None = None
    dimensions: str | None = None
    weight: float | None = Field(default=None, ge=0)


class UpdateItemRequest(BaseModel):
    sku: str | None = Field(default=None, min_length=1, max_length=50)
    name: str | None = Field(default=None, min_length=1, max_length=255)
    category: str | None = None
    quantity: int | None = Field(default=None, ge=0)
    min_stock_level: int | None = Field(default=None, ge=0)
    location: str | None = None
    price: float | None = Field(default=None, ge=0)
    description: str | None = None
    batch_number: str | None = None
    serial_number: str | None = None
    expiration_date: str | None = None
    dimensions: str | None = None
    weight: float | None = Field(default=None, ge=0)


class CycleCountRequest(BaseModel):
    counted_quantity: int = Field(ge=0)


class ItemIdResponse(BaseModel):
    item_id: str


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class ReceiveRequest(BaseModel):
    item_id: str
    quantity: int = Field(ge=0)
    location: str | None = None


class PickRequest(BaseModel):
    item_id: str
    quantity: int = Field(ge=0)


class PackRequest(BaseModel):
    packaging: str | None = Field(default=None, max_length=500)


class ShipRequest(BaseModel):
    carrier: str
    tracking_number: str | None = None  # booked with the carrier when omitted


class RateQuoteResponse(BaseModel):
    carrier: str
    service: str
    transit: str
    price: float


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------
class SnapshotResponse(BaseModel):
    inventory: list[dict]
    orders: list[dict]
    taken_at: str


# ---------------------------------------------------------------------------
# Advisory
# ---------------------------------------------------------------------------
class PutawayRequest(BaseModel):
    order_id: str
    item_id: str


class LocationResponse(BaseModel):
    location: str


class PackagingResponse(BaseModel):
    packaging: str


class IdentifyRequest(BaseModel):
    image_b64: str = Field(min_length=1)


class ChatRequest(BaseModel):
    message: str = Field(min_length=1)


class ChatResponse(BaseModel):
    reply: str


class InsightSchema(BaseModel):
    kind: str
    message: str
    actionable: bool = False
