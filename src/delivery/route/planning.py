"""Route planning — command and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Date, Identifier, String
from protean.utils.globals import current_domain

from delivery.access.gate import require_role
from delivery.access.user import Role, User
from delivery.domain import delivery
from delivery.errors import DeliveryError, ErrorKind
from delivery.route.route import Route

logger = structlog.get_logger(__name__)


@delivery.command(part_of="Route")
class CreateRoute:
    """Open a route for a driver on a given day."""

    actor_id = Identifier(required=True)
    actor_role = String(required=True)
    driver_id = Identifier(required=True)
    route_date = Date(required=True)


@delivery.command_handler(part_of=Route)
class RoutePlanningHandler:
    @handle(CreateRoute)
    def create_route(self, command):
        require_role(command.actor_role, {Role.ADMIN})

        try:
            driver = current_domain.repository_for(User).get(command.driver_id)
        except ObjectNotFoundError:
            raise DeliveryError(ErrorKind.DRIVER_NOT_FOUND, f"User {command.driver_id} does not exist") from None
        if driver.role != Role.DRIVER.value:
            raise DeliveryError(ErrorKind.TARGET_NOT_DRIVER, f"User {command.driver_id} is not a driver")

        route = Route.plan(
            driver_id=str(driver.id),
            route_date=command.route_date,
            created_by=command.actor_id,
        )
        current_domain.repository_for(Route).add(route)
        logger.info("route_created", route_id=str(route.id), driver_id=str(driver.id))
        return str(route.id)
