"""Demo data used when no saved snapshot exists."""

from datetime import UTC, datetime, timedelta

from warehouse.snapshot import Snapshot


def seed_snapshot(now: datetime | None = None) -> Snapshot:
    """Four stock items, one open ASN and two outbound orders."""
    now = now or datetime.now(UTC)
    stamp = now.isoformat()

    inventory = (
        {
            "id": "1",
            "sku": "TECH-001",
            "name": "Wireless Ergonomic Mouse",
            "category": "Electronics",
            "quantity": 45,
            "min_stock_level": 20,
            "location": "A-12-01",
            "last_updated": stamp,
            "added_at": stamp,
            "price": 59.99,
            "description": "High precision wireless mouse with 2 year battery life.",
            "batch_number": "B-2023-001",
            "weight": 0.2,
        },
        {
            "id": "2",
            "sku": "FUR-105",
            "name": "Mesh Office Chair",
            "category": "Furniture",
            "quantity": 8,
            "min_stock_level": 10,
            "location": "B-05-02",
            "last_updated": stamp,
            "added_at": stamp,
            "price": 129.50,
            "description": "Breathable mesh back support office chair.",
            "dimensions": "60x60x100 cm",
            "weight": 12.5,
        },
        {
            "id": "3",
            "sku": "OFF-202",
            "name": "A4 Printer Paper (500 sheets)",
            "category": "Office Supplies",
            "quantity": 120,
            "min_stock_level": 50,
            "location": "C-01-05",
            "last_updated": stamp,
            "added_at": stamp,
            "price": 5.99,
            "description": "Premium bright white paper.",
            "batch_number": "P-9982",
            "weight": 2.5,
        },
        {
            "id": "4",
            "sku": "TECH-009",
            "name": "USB-C Docking Station",
            "category": "Electronics",
            "quantity": 15,
            "min_stock_level": 15,
            "location": "A-12-04",
            "last_updated": stamp,
            "added_at": stamp,
            "price": 199.99,
            "description": "Dual 4K monitor support docking station.",
            "serial_number": "SN-99283-X",
            "weight": 0.8,
        },
    )

    orders = (
        {
            "id": "PO-2024-001",
            "order_type": "Inbound",
            "status": "Pending",
            "partner_name": "Tech Supplies Inc.",
            "date": stamp,
            "items": [
                {"item_id": "1", "sku": "TECH-001", "name": "Wireless Ergonomic Mouse", "quantity": 20, "received": 0},
                {"item_id": "4", "sku": "TECH-009", "name": "USB-C Docking Station", "quantity": 5, "received": 0},
            ],
        },
        {
            "id": "SO-2024-101",
            "order_type": "Outbound",
            "status": "Pending",
            "partner_name": "Acme Corp HQ",
            "date": stamp,
            "items": [
                {"item_id": "2", "sku": "FUR-105", "name": "Mesh Office Chair", "quantity": 2, "picked": 0},
                {"item_id": "3", "sku": "OFF-202", "name": "A4 Printer Paper", "quantity": 10, "picked": 0},
            ],
        },
        {
            "id": "SO-2024-102",
            "order_type": "Outbound",
            "status": "Processing",
            "partner_name": "Startup Hub",
            "date": (now - timedelta(hours=1)).isoformat(),
            "items": [
                {"item_id": "1", "sku": "TECH-001", "name": "Wireless Ergonomic Mouse", "quantity": 5, "picked": 0},
            ],
        },
    )

    return Snapshot(inventory=inventory, orders=orders, taken_at=stamp)
