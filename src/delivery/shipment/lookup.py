"""Shipment lookups by scannable code."""

from protean.utils.globals import current_domain

from delivery.errors import DeliveryError, ErrorKind
from delivery.shipment.shipment import Shipment


def find_by_code(code: str) -> Shipment:
    repo = current_domain.repository_for(Shipment)
    matches = repo._dao.query.filter(code=code).all().items
    if not matches:
        raise DeliveryError(ErrorKind.SHIPMENT_NOT_FOUND, f"No shipment matches code {code}")
    return repo.get(matches[0].id)
