"""Warehouse bounded context: Inventory Ledger, Order Store and Fulfillment.

Tracks stock items and inbound/outbound orders for a single-session console.
Both aggregates live in one domain so that receiving and picking can update
order progress and on-hand stock inside the same unit of work. Standard CQRS
aggregates (not event sourced).
"""

import structlog
from protean.domain import Domain

warehouse = Domain(name="warehouse")

logger = structlog.get_logger(__name__)
