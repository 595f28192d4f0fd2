"""OpenAI advisory adapter.

Talks to the Chat Completions API through ``openai.AsyncOpenAI``. Structured
capabilities ask for a JSON object reply; parsing errors propagate so that
AdvisoryService can substitute its fallback.
"""

import json

import structlog
from openai import AsyncOpenAI

from warehouse.advisory.port import AdvisorPort
from warehouse.config import get_advisor_model
from warehouse.stock.item import CATEGORIES

logger = structlog.get_logger(__name__)

CHAT_SYSTEM_PROMPT = (
    "You are Nexus, a helpful Warehouse AI Assistant.\n"
    "You have access to the following current inventory data:\n{context}\n\n"
    "Answer questions about stock levels, locations, and item details strictly based on this data. "
    "If asked to perform actions, explain that you can guide them but they must use the console."
)


class OpenAIAdvisor(AdvisorPort):
    def __init__(self, client: AsyncOpenAI | None = None, model: str | None = None) -> None:
        self.client = client or AsyncOpenAI()
        self.model = model or get_advisor_model()

    async def _complete(self, messages: list[dict], json_mode: bool = False) -> str:
        options = {"response_format": {"type": "json_object"}} if json_mode else {}
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            **options,
        )
        content = response.choices[0].message.content or ""
        logger.debug("Advisor reply received", model=self.model, length=len(content))
        return content

    async def suggest_location(self, item: dict, context: dict) -> str:
        prompt = (
            "Suggest a warehouse location code for a new item.\n"
            f"Item: {json.dumps(item)}\n"
            f"Existing categories: {json.dumps(context.get('categories', []))}\n"
            f"Example existing locations: {json.dumps(context.get('locations', [])[:5])}\n\n"
            'Format: return ONLY the location code string (e.g. "A-05-01").\n'
            "Logic: Electronics in Zone A, Furniture in Zone B, Office Supplies in Zone C."
        )
        return await self._complete([{"role": "user", "content": prompt}])

    async def suggest_packaging(self, items: list[dict]) -> str:
        lines = [{"name": line.get("name"), "qty": line.get("quantity")} for line in items]
        prompt = (
            "Recommend the best shipping box size for these items:\n"
            f"{json.dumps(lines)}\n"
            "Options: Small Box (10x10x10), Medium Box (14x14x14), Large Box (20x20x20), Pallet.\n"
            "Return just the box name and brief reason."
        )
        return await self._complete([{"role": "user", "content": prompt}])

    async def summarize_insights(self, inventory: list[dict]) -> list[dict]:
        summary = [
            {
                "name": item["name"],
                "qty": item.get("quantity"),
                "min": item.get("min_stock_level"),
                "cat": item.get("category"),
            }
            for item in inventory
        ]
        prompt = (
            "Analyze this inventory data and provide 3 key insights or actionable recommendations.\n"
            'Reply with a JSON object {"insights": [{"type": "warning" | "suggestion" | "success", '
            '"message": string, "actionable": boolean}]}.\n'
            f"Data: {json.dumps(summary)}"
        )
        reply = await self._complete([{"role": "user", "content": prompt}], json_mode=True)
        return json.loads(reply).get("insights", [])

    async def identify_item(self, image_b64: str) -> dict:
        prompt = (
            "Analyze this image for a warehouse inventory system. Identify the item name, "
            f"a likely category ({', '.join(CATEGORIES)}), an estimated price (number only), "
            "and a short description. Provide a suggested SKU if possible. "
            "Reply with a JSON object with keys name, category, price, description, sku."
        )
        messages = [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": prompt},
                    {"type": "image_url", "image_url": {"url": f"data:image/jpeg;base64,{image_b64}"}},
                ],
            }
        ]
        reply = await self._complete(messages, json_mode=True)
        return json.loads(reply) if reply else {}

    async def chat(self, inventory: list[dict], message: str, history: list[dict]) -> str:
        context = "\n".join(
            f"{i['name']} (ID: {i['sku']}): {i.get('quantity')} in stock (Loc: {i.get('location')})"
            for i in inventory
        )
        messages = [
            {"role": "system", "content": CHAT_SYSTEM_PROMPT.format(context=context)},
            *({"role": turn["role"], "content": turn["content"]} for turn in history),
            {"role": "user", "content": message},
        ]
        return await self._complete(messages)
