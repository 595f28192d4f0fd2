"""AdvisoryService: the only way the console talks to an advisor.

Every capability is bounded by ``ADVISOR_TIMEOUT_SECONDS``. A timeout or any
adapter exception is logged and replaced by the capability's fallback, so
callers never see an advisory failure. Replies are normalized before they
leave this module.
"""

import asyncio
import re

import structlog

from warehouse.advisory import get_advisor
from warehouse.advisory.port import (
    CHAT_EMPTY_REPLY,
    CHAT_FALLBACK,
    DEFAULT_LOCATION,
    DEFAULT_PACKAGING,
    INSIGHT_KINDS,
    AdvisorPort,
    Insight,
)
from warehouse.config import get_advisor_timeout
from warehouse.stock.item import CATEGORIES

logger = structlog.get_logger(__name__)

LOCATION_PATTERN = re.compile(r"\b([A-Z]{1,3}-\d{2}-\d{2})\b")
DRAFT_FIELDS = ("name", "category", "price", "description", "sku")


def extract_location(text: str | None) -> str:
    """First bin code in ``text`` (e.g. ``B-04-02``), else the default bin."""
    match = LOCATION_PATTERN.search((text or "").upper())
    return match.group(1) if match else DEFAULT_LOCATION


def clean_packaging(text: str | None) -> str:
    text = (text or "").strip()
    return text[:500] if text else DEFAULT_PACKAGING


def clean_insights(raw) -> list[Insight]:
    """Keep well-formed insights; drop unknown kinds and empty messages."""
    insights = []
    for entry in raw or []:
        if isinstance(entry, Insight):
            entry = entry.as_dict()
        if not isinstance(entry, dict):
            continue
        kind = str(entry.get("type") or entry.get("kind") or "").strip().lower()
        message = str(entry.get("message") or "").strip()
        if kind not in INSIGHT_KINDS or not message:
            continue
        insights.append(Insight(kind=kind, message=message, actionable=bool(entry.get("actionable", False))))
    return insights


def clean_draft(raw) -> dict:
    """Reduce an identification reply to a partial item draft."""
    if not isinstance(raw, dict):
        return {}
    draft = {}
    for key in ("name", "description", "sku"):
        value = raw.get(key)
        if isinstance(value, str) and value.strip():
            draft[key] = value.strip()
    if "category" in raw:
        draft["category"] = raw["category"] if raw["category"] in CATEGORIES else "Other"
    try:
        price = float(raw["price"])
    except (KeyError, TypeError, ValueError):
        pass
    else:
        if price >= 0:
            draft["price"] = round(price, 2)
    return draft


class AdvisoryService:
    def __init__(self, advisor: AdvisorPort | None = None, timeout: float | None = None) -> None:
        self._advisor = advisor
        self.timeout = timeout if timeout is not None else get_advisor_timeout()

    @property
    def advisor(self) -> AdvisorPort:
        return self._advisor or get_advisor()

    async def _call(self, capability: str, call, fallback):
        """Await ``call()`` under the timeout; any failure yields ``fallback``.

        ``call`` is resolved inside the guard so adapter construction errors
        are recovered too.
        """
        try:
            return await asyncio.wait_for(call(), timeout=self.timeout)
        except TimeoutError:
            logger.warning("Advisory call timed out, using fallback", capability=capability, timeout=self.timeout)
        except Exception as exc:
            logger.warning("Advisory call failed, using fallback", capability=capability, error=str(exc))
        return fallback

    async def suggest_location(self, item: dict, context: dict | None = None) -> str:
        reply = await self._call(
            "suggest_location",
            lambda: self.advisor.suggest_location(item, context or {}),
            DEFAULT_LOCATION,
        )
        return extract_location(reply)

    async def suggest_packaging(self, items: list[dict]) -> str:
        reply = await self._call("suggest_packaging", lambda: self.advisor.suggest_packaging(items), DEFAULT_PACKAGING)
        return clean_packaging(reply)

    async def summarize_insights(self, inventory: list[dict]) -> list[Insight]:
        reply = await self._call("summarize_insights", lambda: self.advisor.summarize_insights(inventory), [])
        return clean_insights(reply)

    async def identify_item(self, image_b64: str) -> dict:
        reply = await self._call("identify_item", lambda: self.advisor.identify_item(image_b64), {})
        return clean_draft(reply)

    async def chat(self, inventory: list[dict], message: str, history: list[dict] | None = None) -> str:
        reply = await self._call("chat", lambda: self.advisor.chat(inventory, message, history or []), CHAT_FALLBACK)
        return reply.strip() if isinstance(reply, str) and reply.strip() else CHAT_EMPTY_REPLY
