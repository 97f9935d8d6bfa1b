"""Shipment aggregate — the physical parcel and its delivery lifecycle.

State Machine:
    CREATED → ASSIGNED → OUT_FOR_DELIVERY → DELIVERED

CREATED is set when the order is placed, ASSIGNED when the shipment is linked
to a driver's route, OUT_FOR_DELIVERY on the driver's pickup scan and
DELIVERED on the delivery scan. Nothing skips a stage or moves backward.
"""

from datetime import UTC, date, datetime
from enum import Enum
from urllib.parse import urlparse

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String

from delivery.codes.port import MIN_CODE_LENGTH
from delivery.domain import delivery
from delivery.errors import DeliveryError, ErrorKind
from delivery.shipment.events import (
    ProofOfDeliveryAttached,
    ShipmentAssigned,
    ShipmentCreated,
    ShipmentDelivered,
    ShipmentPickedUp,
)


class ShipmentStatus(Enum):
    CREATED = "created"
    ASSIGNED = "assigned"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"


_VALID_TRANSITIONS = {
    ShipmentStatus.CREATED: {ShipmentStatus.ASSIGNED},
    ShipmentStatus.ASSIGNED: {ShipmentStatus.OUT_FOR_DELIVERY},
    ShipmentStatus.OUT_FOR_DELIVERY: {ShipmentStatus.DELIVERED},
    ShipmentStatus.DELIVERED: set(),  # terminal
}


def can_transition(current: ShipmentStatus, target: ShipmentStatus) -> bool:
    return target in _VALID_TRANSITIONS.get(current, set())


def is_photo_url(value: str | None) -> bool:
    if not value:
        return False
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


@delivery.aggregate
class Shipment:
    order_id = Identifier(required=True)
    status = String(choices=ShipmentStatus, default=ShipmentStatus.CREATED.value)
    code = String(required=True, min_length=MIN_CODE_LENGTH, max_length=64, unique=True)
    proof_photo_url = String(max_length=1000, sanitize=False)
    delivered_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def delivered_shipments_carry_delivery_time(self):
        if self.status == ShipmentStatus.DELIVERED.value and self.delivered_at is None:
            raise ValidationError({"delivered_at": ["A delivered shipment must record when it was delivered"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, order_id: str, code: str):
        now = datetime.now(UTC)
        shipment = cls(
            order_id=order_id,
            code=code,
            status=ShipmentStatus.CREATED.value,
            created_at=now,
            updated_at=now,
        )
        shipment.raise_(
            ShipmentCreated(
                shipment_id=str(shipment.id),
                order_id=order_id,
                code=code,
                created_at=now,
            )
        )
        return shipment

    # -------------------------------------------------------------------
    # State transition helper
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target: ShipmentStatus) -> None:
        current = ShipmentStatus(self.status)
        if not can_transition(current, target):
            raise DeliveryError(
                ErrorKind.INVALID_TRANSITION,
                f"Cannot move shipment from {current.value} to {target.value}",
                shipment_id=str(self.id),
                status=current.value,
            )

    # -------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------
    def assign(self, route_id: str, driver_id: str, route_date: date) -> None:
        """Placed on a driver's route."""
        self._assert_can_transition(ShipmentStatus.ASSIGNED)
        now = datetime.now(UTC)
        self.status = ShipmentStatus.ASSIGNED.value
        self.updated_at = now
        self.raise_(
            ShipmentAssigned(
                shipment_id=str(self.id),
                order_id=str(self.order_id),
                code=self.code,
                route_id=route_id,
                driver_id=driver_id,
                route_date=route_date,
                assigned_at=now,
            )
        )

    def pick_up(self, driver_id: str) -> None:
        """Driver scanned the parcel on collection."""
        self._assert_can_transition(ShipmentStatus.OUT_FOR_DELIVERY)
        now = datetime.now(UTC)
        self.status = ShipmentStatus.OUT_FOR_DELIVERY.value
        self.updated_at = now
        self.raise_(
            ShipmentPickedUp(
                shipment_id=str(self.id),
                driver_id=driver_id,
                picked_up_at=now,
            )
        )

    def deliver(self, driver_id: str) -> None:
        """Driver scanned the parcel at the door."""
        self._assert_can_transition(ShipmentStatus.DELIVERED)
        now = datetime.now(UTC)
        self.delivered_at = now
        self.status = ShipmentStatus.DELIVERED.value
        self.updated_at = now
        self.raise_(
            ShipmentDelivered(
                shipment_id=str(self.id),
                driver_id=driver_id,
                delivered_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Proof of delivery
    # -------------------------------------------------------------------
    def attach_proof(self, photo_url: str, driver_id: str) -> None:
        """Record a proof photo. Allowed in any status; never changes it."""
        if not is_photo_url(photo_url):
            raise DeliveryError(ErrorKind.INVALID_INPUT, "Proof photo must be an http(s) URL")

        now = datetime.now(UTC)
        self.proof_photo_url = photo_url
        self.updated_at = now
        self.raise_(
            ProofOfDeliveryAttached(
                shipment_id=str(self.id),
                driver_id=driver_id,
                proof_photo_url=photo_url,
                attached_at=now,
            )
        )
