"""Driver manifest — the shipments a driver has to carry, with their progress."""

from protean.core.projector import on
from protean.fields import Date, DateTime, Identifier, String
from protean.utils.globals import current_domain

from delivery.domain import delivery
from delivery.shipment.events import (
    ProofOfDeliveryAttached,
    ShipmentAssigned,
    ShipmentDelivered,
    ShipmentPickedUp,
)
from delivery.shipment.shipment import Shipment, ShipmentStatus


@delivery.projection
class DriverManifest:
    shipment_id = Identifier(identifier=True, required=True)
    route_id = Identifier(required=True)
    driver_id = Identifier(required=True)
    route_date = Date(required=True)
    order_id = Identifier(required=True)
    code = String(required=True)
    status = String(required=True)
    proof_photo_url = String()
    delivered_at = DateTime()
    updated_at = DateTime()


@delivery.projector(projector_for=DriverManifest, aggregates=[Shipment])
class DriverManifestProjector:
    @on(ShipmentAssigned)
    def on_shipment_assigned(self, event):
        current_domain.repository_for(DriverManifest).add(
            DriverManifest(
                shipment_id=event.shipment_id,
                route_id=event.route_id,
                driver_id=event.driver_id,
                route_date=event.route_date,
                order_id=event.order_id,
                code=event.code,
                status=ShipmentStatus.ASSIGNED.value,
                updated_at=event.assigned_at,
            )
        )

    @on(ShipmentPickedUp)
    def on_shipment_picked_up(self, event):
        repo = current_domain.repository_for(DriverManifest)
        row = repo.get(event.shipment_id)
        row.status = ShipmentStatus.OUT_FOR_DELIVERY.value
        row.updated_at = event.picked_up_at
        repo.add(row)

    @on(ShipmentDelivered)
    def on_shipment_delivered(self, event):
        repo = current_domain.repository_for(DriverManifest)
        row = repo.get(event.shipment_id)
        row.status = ShipmentStatus.DELIVERED.value
        row.delivered_at = event.delivered_at
        row.updated_at = event.delivered_at
        repo.add(row)

    @on(ProofOfDeliveryAttached)
    def on_proof_attached(self, event):
        repo = current_domain.repository_for(DriverManifest)
        row = repo.get(event.shipment_id)
        row.proof_photo_url = event.proof_photo_url
        row.updated_at = event.attached_at
        repo.add(row)


def manifest_for(driver_id: str, route_date=None) -> list[DriverManifest]:
    """A driver's manifest rows, optionally for one day, oldest route first."""
    query = current_domain.repository_for(DriverManifest)._dao.query.filter(driver_id=str(driver_id))
    if route_date is not None:
        query = query.filter(route_date=route_date)
    return query.order_by("route_date").all().items
