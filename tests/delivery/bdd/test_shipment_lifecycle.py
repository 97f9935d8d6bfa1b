"""BDD tests for the shipment lifecycle and the scan log."""

from delivery.shipment.proof import AttachProof
from delivery.shipment.scanning import scan_shipment
from protean import current_domain
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/shipment_lifecycle.feature")


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a shipment for a customer order", target_fixture="shipment_id")
def _(placed_shipment):
    return placed_shipment


@given(parsers.cfparse('the shipment is on driver "{name}"\'s route'))
def _(shipment_id, drivers, open_route, link_shipment, name):
    link_shipment(open_route(for_driver=drivers[name]), shipment_id)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('driver "{name}" scans the shipment for "{action}"'))
def _(shipment_id, drivers, attempt, shipment, name, action):
    driver = drivers[name]
    attempt(scan_shipment, str(driver.id), driver.role, code=shipment(shipment_id).code, action=action)


@when(parsers.cfparse('driver "{name}" attaches proof "{url}"'))
def _(shipment_id, drivers, attempt, shipment, name, url):
    driver = drivers[name]
    command = AttachProof(
        actor_id=str(driver.id),
        actor_role=driver.role,
        code=shipment(shipment_id).code,
        proof_photo_url=url,
    )
    attempt(current_domain.process, command, asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the shipment is "{status}"'))
def _(shipment_id, shipment, status):
    assert shipment(shipment_id).status == status


@then("the shipment has a delivery time")
def _(shipment_id, shipment):
    assert shipment(shipment_id).delivered_at is not None


@then(parsers.cfparse('the shipment\'s proof is "{url}"'))
def _(shipment_id, shipment, url):
    assert shipment(shipment_id).proof_photo_url == url
