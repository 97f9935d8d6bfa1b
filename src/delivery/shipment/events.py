"""Shipment domain events — immutable facts about a parcel's progress.

All events are past tense and versioned. Assignment events carry the route
and driver so the driver manifest can be built without reading the route.
"""

from protean.fields import Date, DateTime, Identifier, String

from delivery.domain import delivery


@delivery.event(part_of="Shipment")
class ShipmentCreated:
    __version__ = 1

    shipment_id = Identifier(required=True)
    order_id = Identifier(required=True)
    code = String(required=True)
    created_at = DateTime(required=True)


@delivery.event(part_of="Shipment")
class ShipmentAssigned:
    """The shipment was put on a driver's route."""

    __version__ = 1

    shipment_id = Identifier(required=True)
    order_id = Identifier(required=True)
    code = String(required=True)
    route_id = Identifier(required=True)
    driver_id = Identifier(required=True)
    route_date = Date(required=True)
    assigned_at = DateTime(required=True)


@delivery.event(part_of="Shipment")
class ShipmentPickedUp:
    __version__ = 1

    shipment_id = Identifier(required=True)
    driver_id = Identifier(required=True)
    picked_up_at = DateTime(required=True)


@delivery.event(part_of="Shipment")
class ShipmentDelivered:
    __version__ = 1

    shipment_id = Identifier(required=True)
    driver_id = Identifier(required=True)
    delivered_at = DateTime(required=True)


@delivery.event(part_of="Shipment")
class ProofOfDeliveryAttached:
    __version__ = 1

    shipment_id = Identifier(required=True)
    driver_id = Identifier(required=True)
    proof_photo_url = String(required=True)
    attached_at = DateTime(required=True)
