"""Fake carrier adapter: flat-rate carrier for development and testing.

Quotes two fixed services and generates ``TRK-`` tracking numbers.
Configurable success/failure behavior for integration testing.
"""

from uuid import uuid4

from warehouse.fulfillment.carrier.port import CarrierPort, RateQuote, ShippingLabel

FLAT_RATES = (
    RateQuote(carrier="FedEx Express", service="Express", transit="1-2 Days • Air", price=24.50),
    RateQuote(carrier="UPS Ground", service="Ground", transit="3-5 Days • Truck", price=12.95),
)


def generate_tracking_number() -> str:
    return f"TRK-{uuid4().hex[:9].upper()}"


class FakeCarrier(CarrierPort):
    """Fake carrier that always succeeds by default."""

    def __init__(self):
        self.should_succeed = True
        self.failure_reason = "Carrier unavailable"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Carrier unavailable"):
        """Configure the fake carrier behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def quote_rates(self, _order_id: str) -> list[RateQuote]:
        return list(FLAT_RATES)

    def create_label(self, _order_id: str, carrier: str) -> ShippingLabel:
        if not self.should_succeed:
            return ShippingLabel(success=False, carrier=carrier, failure_reason=self.failure_reason)
        return ShippingLabel(success=True, carrier=carrier, tracking_number=generate_tracking_number())
