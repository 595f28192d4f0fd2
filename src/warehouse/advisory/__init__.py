"""Advisory adapter factory.

Provides get_advisor() / set_advisor() to swap implementations:
- FakeAdvisor for development and testing
- OpenAIAdvisor when ADVISOR_ADAPTER=openai
"""

import os

from warehouse.advisory.port import AdvisorPort

_current_advisor: AdvisorPort | None = None


def get_advisor() -> AdvisorPort:
    """Return the current advisor. Defaults to FakeAdvisor."""
    global _current_advisor
    if _current_advisor is None:
        adapter = os.environ.get("ADVISOR_ADAPTER", "fake")
        if adapter == "fake":
            from warehouse.advisory.fake_adapter import FakeAdvisor

            _current_advisor = FakeAdvisor()
        elif adapter == "openai":
            from warehouse.advisory.openai_adapter import OpenAIAdvisor

            _current_advisor = OpenAIAdvisor()
        else:
            raise ValueError(f"Unknown advisor adapter: {adapter}")
    return _current_advisor


def set_advisor(advisor: AdvisorPort) -> None:
    """Override the active advisor (useful for tests)."""
    global _current_advisor
    _current_advisor = advisor


def reset_advisor() -> None:
    """Reset to the configured default advisor."""
    global _current_advisor
    _current_advisor = None
