"""Route events."""

from protean.fields import Date, DateTime, Identifier

from delivery.domain import delivery


@delivery.event(part_of="Route")
class RouteCreated:
    __version__ = 1

    route_id = Identifier(required=True)
    driver_id = Identifier(required=True)
    route_date = Date(required=True)
    created_at = DateTime(required=True)


@delivery.event(part_of="RouteShipment")
class ShipmentLinkedToRoute:
    __version__ = 1

    route_shipment_id = Identifier(required=True)
    route_id = Identifier(required=True)
    shipment_id = Identifier(required=True)
    linked_at = DateTime(required=True)
