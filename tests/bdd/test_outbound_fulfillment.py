"""BDD tests for outbound pick, pack and ship."""

from pytest_bdd import scenarios

scenarios("features/outbound_fulfillment.feature")
