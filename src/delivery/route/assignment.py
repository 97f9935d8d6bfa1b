"""Shipment-to-route assignment — command and handler.

Creating the link and moving the shipment to ``assigned`` happen in the same
unit of work: there is never a link without an assigned shipment, or the
other way round. ``RouteShipment.shipment_id`` is unique, which turns a
racing second link into a validation failure at insert time.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from delivery.access.gate import require_role
from delivery.access.user import Role
from delivery.domain import delivery
from delivery.errors import DeliveryError, ErrorKind
from delivery.route.lookup import links_for_shipment, load_route
from delivery.route.route import RouteShipment
from delivery.shipment.shipment import Shipment, ShipmentStatus

logger = structlog.get_logger(__name__)


@delivery.command(part_of="RouteShipment")
class LinkShipmentToRoute:
    """Put a shipment on a route."""

    actor_id = Identifier(required=True)
    actor_role = String(required=True)
    route_id = Identifier(required=True)
    shipment_id = Identifier(required=True)


def _already_assigned(shipment_id) -> DeliveryError:
    return DeliveryError(
        ErrorKind.SHIPMENT_ALREADY_ASSIGNED,
        f"Shipment {shipment_id} is already on a route",
        shipment_id=str(shipment_id),
    )


@delivery.command_handler(part_of=RouteShipment)
class RouteAssignmentHandler:
    @handle(LinkShipmentToRoute)
    def link_shipment(self, command):
        require_role(command.actor_role, {Role.ADMIN})

        route = load_route(command.route_id)

        shipment_repo = current_domain.repository_for(Shipment)
        try:
            shipment = shipment_repo.get(command.shipment_id)
        except ObjectNotFoundError:
            raise DeliveryError(
                ErrorKind.SHIPMENT_NOT_FOUND, f"Shipment {command.shipment_id} does not exist"
            ) from None

        if shipment.status != ShipmentStatus.CREATED.value or links_for_shipment(shipment.id):
            raise _already_assigned(shipment.id)

        shipment.assign(
            route_id=str(route.id),
            driver_id=str(route.driver_id),
            route_date=route.route_date,
        )

        link = RouteShipment.link(route_id=str(route.id), shipment_id=str(shipment.id))
        try:
            current_domain.repository_for(RouteShipment).add(link)
        except ValidationError:
            raise _already_assigned(shipment.id) from None
        shipment_repo.add(shipment)

        logger.info(
            "shipment_linked",
            route_id=str(route.id),
            shipment_id=str(shipment.id),
            driver_id=str(route.driver_id),
        )
        return {"route_shipment_id": str(link.id), "shipment_id": str(shipment.id)}
