"""Read helpers shared by route assignment and driver scans."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from delivery.errors import DeliveryError, ErrorKind
from delivery.route.route import Route, RouteShipment


def links_for_shipment(shipment_id: str) -> list:
    repo = current_domain.repository_for(RouteShipment)
    return repo._dao.query.filter(shipment_id=str(shipment_id)).all().items


def load_route(route_id: str) -> Route:
    try:
        return current_domain.repository_for(Route).get(route_id)
    except ObjectNotFoundError:
        raise DeliveryError(ErrorKind.ROUTE_NOT_FOUND, f"Route {route_id} does not exist") from None


def route_owned_by(driver_id: str, shipment_id: str) -> Route | None:
    """Return the route carrying ``shipment_id`` if it belongs to ``driver_id``."""
    for link in links_for_shipment(shipment_id):
        route = load_route(link.route_id)
        if str(route.driver_id) == str(driver_id):
            return route
    return None


def ensure_on_drivers_route(driver_id: str, shipment_id: str) -> Route:
    route = route_owned_by(driver_id, shipment_id)
    if route is None:
        raise DeliveryError(
            ErrorKind.NOT_IN_YOUR_ROUTE,
            f"Shipment {shipment_id} is not on any of your routes",
            shipment_id=str(shipment_id),
        )
    return route
