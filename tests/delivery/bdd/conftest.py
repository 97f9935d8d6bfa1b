"""Shared BDD fixtures and step definitions for delivery."""

import pytest
from delivery.errors import DeliveryError
from delivery.scan.scan_log import ScanLog
from delivery.shipment.shipment import Shipment
from protean import current_domain
from pytest_bdd import parsers, then


@pytest.fixture()
def outcome():
    """Container for the last step's result or captured error."""
    return {"result": None, "error": None}


@pytest.fixture()
def attempt(outcome):
    """Run a callable and record either its result or the DeliveryError it raised."""

    def _attempt(fn, *args, **kwargs):
        try:
            outcome["result"] = fn(*args, **kwargs)
            outcome["error"] = None
        except DeliveryError as exc:
            outcome["result"] = None
            outcome["error"] = exc
        return outcome

    return _attempt


@pytest.fixture()
def drivers(driver, other_driver):
    return {"dan": driver, "dora": other_driver}


@pytest.fixture()
def shipment():
    def _shipment(shipment_id):
        return current_domain.repository_for(Shipment).get(shipment_id)

    return _shipment


# ---------------------------------------------------------------------------
# Shared Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the scan is rejected with "{kind}"'))
@then(parsers.cfparse('the order is refused with "{kind}"'))
def _(outcome, kind):
    assert outcome["error"] is not None
    assert outcome["error"].kind.value == kind


@then(parsers.re(r"the scan log has (?P<count>\d+) entr(y|ies)"), converters={"count": int})
def _(count):
    assert len(current_domain.repository_for(ScanLog)._dao.query.all().items) == count
