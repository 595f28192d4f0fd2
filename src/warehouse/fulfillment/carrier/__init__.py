"""Carrier factory.

get_carrier() builds the adapter named by ``CARRIER_ADAPTER`` on first use;
set_carrier() installs a specific instance instead.
"""

import os

from warehouse.fulfillment.carrier.port import CarrierPort

ADAPTERS = ("fake",)

_current_carrier: CarrierPort | None = None


def _build(adapter: str) -> CarrierPort:
    if adapter == "fake":
        from warehouse.fulfillment.carrier.fake_adapter import FakeCarrier

        return FakeCarrier()
    raise ValueError(f"Unknown carrier adapter: {adapter!r} (expected one of: {', '.join(ADAPTERS)})")


def get_carrier() -> CarrierPort:
    """Return the active carrier, building the configured one if needed."""
    global _current_carrier
    if _current_carrier is None:
        _current_carrier = _build(os.environ.get("CARRIER_ADAPTER", "fake"))
    return _current_carrier


def set_carrier(carrier: CarrierPort) -> None:
    global _current_carrier
    _current_carrier = carrier


def reset_carrier() -> None:
    global _current_carrier
    _current_carrier = None
