"""ScanLog aggregate — one row per driver scan, whatever became of it.

The log is a forensic trail: rejected and out-of-order scans are recorded
alongside the ones that moved a shipment forward. Entries are never updated.
"""

from enum import Enum

from protean.fields import DateTime, Identifier, String

from delivery.domain import delivery


class ScanAction(Enum):
    PICKUP = "pickup"
    DELIVERED = "delivered"


class ScanOutcome(Enum):
    APPLIED = "applied"
    REJECTED = "rejected"


@delivery.aggregate
class ScanLog:
    actor_id: Identifier(required=True)
    shipment_id: Identifier()  # empty when the code matched no shipment
    action: String(required=True, choices=ScanAction)
    code: String(required=True, max_length=64)
    outcome: String(required=True, choices=ScanOutcome)
    rejection: String(max_length=50)
    scanned_at: DateTime(required=True)
