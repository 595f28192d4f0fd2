"""Advisory Gateway port (abstract interface).

Defines the contract that every generative-AI adapter implements. Adapters may
be slow, fail outright, or return low-quality text; AdvisoryService wraps them
with a timeout and normalizes what comes back. Nothing an adapter returns ever
touches inventory or order state directly.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

DEFAULT_LOCATION = "A-01-01"
DEFAULT_PACKAGING = "Medium Box"
CHAT_FALLBACK = "Sorry, I encountered an error processing your request."
CHAT_EMPTY_REPLY = "I'm having trouble connecting to the neural network right now."

INSIGHT_KINDS = ("warning", "suggestion", "success")


class AdvisorUnavailable(Exception):
    """Raised by an adapter that cannot produce an answer."""


@dataclass(frozen=True)
class Insight:
    """One short observation about the current stock."""

    kind: str  # warning | suggestion | success
    message: str
    actionable: bool = False

    def as_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message, "actionable": self.actionable}


class AdvisorPort(ABC):
    """Abstract advisory interface. All capabilities are coroutines."""

    @abstractmethod
    async def suggest_location(self, item: dict, context: dict) -> str:
        """Propose a putaway bin for ``item``.

        ``context`` carries the ``categories`` and a sample of ``locations``
        already in use. The reply is free text; a bin code is extracted later.
        """
        ...

    @abstractmethod
    async def suggest_packaging(self, items: list[dict]) -> str:
        """Describe a box for the given order lines."""
        ...

    @abstractmethod
    async def summarize_insights(self, inventory: list[dict]) -> list[dict]:
        """Return raw insight mappings (``type``/``message``/``actionable``)."""
        ...

    @abstractmethod
    async def identify_item(self, image_b64: str) -> dict:
        """Guess a partial item draft from a base64-encoded photo."""
        ...

    @abstractmethod
    async def chat(self, inventory: list[dict], message: str, history: list[dict]) -> str:
        """Answer a free-form question about the inventory."""
        ...
