"""Rule-based advisory adapter for development and testing.

Answers every capability deterministically from the data it is given, without
any network call. Like the fake carrier it can be switched into failure mode,
and it can also be slowed down to exercise the service timeout.
"""

import asyncio

from warehouse.advisory.port import AdvisorPort, AdvisorUnavailable

# Putaway zones by category; anything else goes to overflow.
ZONES = {
    "Electronics": "A",
    "Furniture": "B",
    "Office Supplies": "C",
    "Apparel": "D",
    "Industrial": "E",
}
OVERFLOW_ZONE = "F"

BOX_SIZES = (
    (2, "Small Box (10x10x10 in)"),
    (10, "Medium Box (14x14x14 in)"),
    (50, "Large Box (20x20x20 in)"),
)
PALLET = "Pallet (48x40 in), shrink-wrapped"


class FakeAdvisor(AdvisorPort):
    """Deterministic advisor. Succeeds immediately by default."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Advisor unavailable"
        self.delay: float = 0.0
        self.calls: list[dict] = []

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Advisor unavailable",
        delay: float = 0.0,
    ) -> None:
        """Configure advisor behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.delay = delay

    async def _begin(self, method: str, **arguments) -> None:
        self.calls.append({"method": method, **arguments})
        if self.delay:
            await asyncio.sleep(self.delay)
        if not self.should_succeed:
            raise AdvisorUnavailable(self.failure_reason)

    async def suggest_location(self, item: dict, context: dict) -> str:
        await self._begin("suggest_location", item=item)
        zone = ZONES.get(item.get("category"), OVERFLOW_ZONE)
        used = {loc for loc in context.get("locations", []) if loc.startswith(f"{zone}-")}
        aisle = 1
        while f"{zone}-{aisle:02d}-01" in used:
            aisle += 1
        return f"Suggested bin: {zone}-{aisle:02d}-01"

    async def suggest_packaging(self, items: list[dict]) -> str:
        await self._begin("suggest_packaging", items=items)
        units = sum(int(line.get("quantity") or 0) for line in items)
        for limit, box in BOX_SIZES:
            if units <= limit:
                return box
        return PALLET

    async def summarize_insights(self, inventory: list[dict]) -> list[dict]:
        await self._begin("summarize_insights", count=len(inventory))
        low = [i for i in inventory if (i.get("quantity") or 0) <= (i.get("min_stock_level") or 0)]
        if not low:
            return [{"type": "success", "message": "All items are above their minimum stock level."}]

        insights = [
            {
                "type": "warning",
                "message": f"{item['name']} ({item['sku']}) is at {item['quantity']} units.",
                "actionable": True,
            }
            for item in low[:3]
        ]
        insights.append(
            {
                "type": "suggestion",
                "message": f"Raise purchase orders for {len(low)} low-stock item(s).",
                "actionable": True,
            }
        )
        return insights

    async def identify_item(self, image_b64: str) -> dict:
        await self._begin("identify_item", size=len(image_b64))
        return {"name": "Unidentified Item", "category": "Other", "description": "Identified from photo."}

    async def chat(self, inventory: list[dict], message: str, history: list[dict]) -> str:
        await self._begin("chat", message=message)
        text = message.lower()
        matches = [i for i in inventory if i["name"].lower() in text or i["sku"].lower() in text]
        if not matches:
            total = sum(i.get("quantity") or 0 for i in inventory)
            return f"The warehouse holds {total} units across {len(inventory)} SKUs."
        return "\n".join(
            f"{i['name']} ({i['sku']}): {i['quantity']} units at {i.get('location') or 'no location'}."
            for i in matches
        )
