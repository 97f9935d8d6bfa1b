from datetime import date

from delivery.projections.driver_manifest import DriverManifest, manifest_for
from delivery.shipment.proof import AttachProof
from delivery.shipment.scanning import scan_shipment
from delivery.shipment.shipment import Shipment
from protean import current_domain


def _row(shipment_id):
    return current_domain.repository_for(DriverManifest).get(shipment_id)


class TestDriverManifestProjection:
    def test_unrouted_shipment_is_not_on_a_manifest(self, placed_shipment, driver):
        assert manifest_for(str(driver.id)) == []

    def test_assignment_adds_a_row(self, assigned_shipment, driver, load):
        shipment = load(Shipment, assigned_shipment)

        row = _row(assigned_shipment)
        assert row.driver_id == str(driver.id)
        assert row.code == shipment.code
        assert row.order_id == shipment.order_id
        assert row.route_date == date(2026, 10, 20)
        assert row.status == "assigned"

    def test_scans_move_the_row_along(self, assigned_shipment, driver, load):
        code = load(Shipment, assigned_shipment).code

        scan_shipment(str(driver.id), "driver", code=code, action="pickup")
        assert _row(assigned_shipment).status == "out_for_delivery"

        scan_shipment(str(driver.id), "driver", code=code, action="delivered")
        row = _row(assigned_shipment)
        assert row.status == "delivered"
        assert row.delivered_at is not None

    def test_proof_is_copied(self, assigned_shipment, driver, load):
        url = "https://photos.lastmile.test/p.jpg"
        current_domain.process(
            AttachProof(
                actor_id=str(driver.id),
                actor_role="driver",
                code=load(Shipment, assigned_shipment).code,
                proof_photo_url=url,
            ),
            asynchronous=False,
        )
        assert _row(assigned_shipment).proof_photo_url == url

    def test_manifest_is_per_driver_and_day(self, make_product, place_order, open_route, link_shipment, driver, other_driver):
        product_id = make_product(stock=10)
        today, tomorrow = date(2026, 10, 20), date(2026, 10, 21)
        first = place_order((product_id, 1))["shipment_id"]
        second = place_order((product_id, 1))["shipment_id"]
        third = place_order((product_id, 1))["shipment_id"]

        link_shipment(open_route(route_date=today), first)
        link_shipment(open_route(route_date=tomorrow), second)
        link_shipment(open_route(for_driver=other_driver, route_date=today), third)

        assert [row.shipment_id for row in manifest_for(str(driver.id))] == [first, second]
        assert [row.shipment_id for row in manifest_for(str(driver.id), route_date=tomorrow)] == [second]
        assert [row.shipment_id for row in manifest_for(str(other_driver.id))] == [third]
