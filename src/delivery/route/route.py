"""Route and RouteShipment aggregates — which driver carries which shipments, and when."""

from datetime import UTC, date, datetime
from enum import Enum

from protean.fields import Date, DateTime, Identifier, String

from delivery.domain import delivery
from delivery.route.events import RouteCreated, ShipmentLinkedToRoute


class RouteStatus(Enum):
    """Route-level status; independent of the status of the shipments on it."""

    ASSIGNED = "assigned"


@delivery.aggregate
class Route:
    driver_id = Identifier(required=True)
    route_date = Date(required=True)
    status = String(choices=RouteStatus, default=RouteStatus.ASSIGNED.value)
    created_by = Identifier()
    created_at = DateTime()

    @classmethod
    def plan(cls, driver_id: str, route_date: date, created_by: str | None = None):
        now = datetime.now(UTC)
        route = cls(
            driver_id=driver_id,
            route_date=route_date,
            status=RouteStatus.ASSIGNED.value,
            created_by=created_by,
            created_at=now,
        )
        route.raise_(
            RouteCreated(
                route_id=str(route.id),
                driver_id=driver_id,
                route_date=route_date,
                created_at=now,
            )
        )
        return route


@delivery.aggregate
class RouteShipment:
    """Link between a route and one shipment. A shipment has at most one link."""

    route_id = Identifier(required=True)
    shipment_id = Identifier(required=True, unique=True)
    linked_at = DateTime()

    @classmethod
    def link(cls, route_id: str, shipment_id: str):
        now = datetime.now(UTC)
        route_shipment = cls(route_id=route_id, shipment_id=shipment_id, linked_at=now)
        route_shipment.raise_(
            ShipmentLinkedToRoute(
                route_shipment_id=str(route_shipment.id),
                route_id=route_id,
                shipment_id=shipment_id,
                linked_at=now,
            )
        )
        return route_shipment
