"""Driver scans — command, handler and the caller-facing ``scan_shipment``.

A scan is authorized (driver role, shipment on the driver's route), checked
against the shipment's current status and then applied. Whatever the result,
the attempt is appended to the scan log in the same unit of work. A rejected
scan therefore has to *commit* (so its log entry survives) and report the
rejection afterwards: the handler returns the outcome and ``scan_shipment``
raises once processing has finished.

A wrong role is the one rejection that is not logged: it is refused before
any persisted state is read.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from delivery.access.gate import require_role
from delivery.access.user import Role
from delivery.codes.port import MIN_CODE_LENGTH
from delivery.domain import delivery
from delivery.errors import DeliveryError, ErrorKind
from delivery.route.lookup import ensure_on_drivers_route
from delivery.scan.ledger import ScanLedger
from delivery.scan.scan_log import ScanAction, ScanOutcome
from delivery.shipment.lookup import find_by_code
from delivery.shipment.shipment import Shipment

logger = structlog.get_logger(__name__)


@delivery.command(part_of="Shipment")
class ScanShipment:
    """A driver scanned a shipment's code to record a pickup or a delivery."""

    actor_id = Identifier(required=True)
    actor_role = String(required=True)
    code = String(required=True, min_length=MIN_CODE_LENGTH, max_length=64)
    action = String(required=True, choices=ScanAction)


def _apply(shipment: Shipment, action: ScanAction, driver_id: str) -> None:
    if action is ScanAction.PICKUP:
        shipment.pick_up(driver_id)
    else:
        shipment.deliver(driver_id)


@delivery.command_handler(part_of=Shipment)
class ScanHandler:
    @handle(ScanShipment)
    def scan(self, command):
        require_role(command.actor_role, {Role.DRIVER})

        action = ScanAction(command.action)
        shipment = None
        try:
            shipment = find_by_code(command.code)
            ensure_on_drivers_route(command.actor_id, shipment.id)
            _apply(shipment, action, command.actor_id)
        except DeliveryError as exc:
            entry = ScanLedger().record(
                actor_id=command.actor_id,
                action=action.value,
                code=command.code,
                shipment_id=str(shipment.id) if shipment else None,
                outcome=ScanOutcome.REJECTED,
                rejection=exc.kind.value,
            )
            logger.warning(
                "scan_rejected",
                code=command.code,
                action=action.value,
                reason=exc.kind.value,
            )
            return {
                "scan_id": str(entry.id),
                "shipment_id": str(shipment.id) if shipment else None,
                "outcome": ScanOutcome.REJECTED.value,
                "rejection": exc.kind.value,
                "detail": exc.detail,
            }

        current_domain.repository_for(Shipment).add(shipment)
        entry = ScanLedger().record(
            actor_id=command.actor_id,
            action=action.value,
            code=command.code,
            shipment_id=str(shipment.id),
        )
        return {
            "scan_id": str(entry.id),
            "shipment_id": str(shipment.id),
            "outcome": ScanOutcome.APPLIED.value,
            "status": shipment.status,
        }


def scan_shipment(actor_id: str, actor_role: str, code: str, action: str) -> dict:
    """Process a scan and raise its rejection, if any, after the log entry is committed."""
    outcome = current_domain.process(
        ScanShipment(actor_id=actor_id, actor_role=actor_role, code=code, action=action),
        asynchronous=False,
    )
    if outcome["outcome"] == ScanOutcome.REJECTED.value:
        raise DeliveryError(ErrorKind(outcome["rejection"]), outcome["detail"], scan_id=outcome["scan_id"])
    return outcome
