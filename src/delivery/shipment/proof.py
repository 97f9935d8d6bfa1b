"""Proof of delivery — command and handler.

A proof photo can be attached before or after the delivery scan; it never
gates the delivery and is not a scan, so it leaves no scan log entry.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from delivery.access.gate import require_role
from delivery.access.user import Role
from delivery.codes.port import MIN_CODE_LENGTH
from delivery.domain import delivery
from delivery.route.lookup import ensure_on_drivers_route
from delivery.shipment.lookup import find_by_code
from delivery.shipment.shipment import Shipment

logger = structlog.get_logger(__name__)


@delivery.command(part_of="Shipment")
class AttachProof:
    actor_id = Identifier(required=True)
    actor_role = String(required=True)
    code = String(required=True, min_length=MIN_CODE_LENGTH, max_length=64)
    proof_photo_url = String(required=True, max_length=1000, sanitize=False)


@delivery.command_handler(part_of=Shipment)
class ProofHandler:
    @handle(AttachProof)
    def attach_proof(self, command):
        require_role(command.actor_role, {Role.DRIVER})

        shipment = find_by_code(command.code)
        ensure_on_drivers_route(command.actor_id, shipment.id)
        shipment.attach_proof(command.proof_photo_url, driver_id=command.actor_id)
        current_domain.repository_for(Shipment).add(shipment)

        logger.info("proof_attached", shipment_id=str(shipment.id))
        return str(shipment.id)
