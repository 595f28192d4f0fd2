"""Carrier port: abstract interface for shipping carrier integrations.

The console programs against the port; adapters are swapped via
configuration. Rates are flat in this domain; no live rate shopping.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class CarrierError(Exception):
    """Raised when a carrier refuses to book a shipment."""


@dataclass(frozen=True)
class RateQuote:
    """A selectable shipping option."""

    carrier: str
    service: str
    transit: str
    price: float


@dataclass(frozen=True)
class ShippingLabel:
    """Result of a label request."""

    success: bool
    carrier: str
    tracking_number: str | None = None
    failure_reason: str | None = None


class CarrierPort(ABC):
    """Abstract interface for carrier adapters."""

    @abstractmethod
    def quote_rates(self, order_id: str) -> list[RateQuote]:
        """Return the shipping options offered for an order."""
        ...

    @abstractmethod
    def create_label(self, order_id: str, carrier: str) -> ShippingLabel:
        """Book a shipment and return its tracking number."""
        ...
