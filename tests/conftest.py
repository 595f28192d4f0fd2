import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Initialize the warehouse domain and push its context so that it can be
    referred to elsewhere as `current_domain`.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from warehouse.domain import warehouse

    warehouse.init()
    warehouse.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(autouse=True)
def run_around_tests(monkeypatch):
    """Reset adapters and wipe every repository after each test."""
    monkeypatch.delenv("WAREHOUSE_PROGRESS_POLICY", raising=False)
    monkeypatch.setenv("ADVISOR_ADAPTER", "fake")
    monkeypatch.setenv("CARRIER_ADAPTER", "fake")

    yield

    from protean import current_domain

    from warehouse.advisory import reset_advisor
    from warehouse.console import reset_console
    from warehouse.fulfillment.carrier import reset_carrier

    reset_advisor()
    reset_carrier()
    reset_console()

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Shared builders
# ---------------------------------------------------------------------------
@pytest.fixture()
def seeded():
    """Load the demo seed into the repositories and return its snapshot."""
    from warehouse.seed import seed_snapshot
    from warehouse.snapshot import restore_snapshot, take_snapshot

    restore_snapshot(seed_snapshot())
    return take_snapshot()


@pytest.fixture()
def engine(seeded):
    from warehouse.fulfillment.engine import FulfillmentEngine

    engine = FulfillmentEngine()
    engine.snapshot = seeded
    return engine
