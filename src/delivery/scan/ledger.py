"""Scan ledger — append-only writer for ScanLog entries."""

from datetime import UTC, datetime

import structlog
from protean.utils.globals import current_domain

from delivery.scan.scan_log import ScanLog, ScanOutcome

logger = structlog.get_logger(__name__)


class ScanLedger:
    def record(
        self,
        actor_id: str,
        action: str,
        code: str,
        shipment_id: str | None = None,
        outcome: ScanOutcome = ScanOutcome.APPLIED,
        rejection: str | None = None,
    ) -> ScanLog:
        """Append one entry. Identical scans produce identical, separate entries."""
        entry = ScanLog(
            actor_id=actor_id,
            shipment_id=shipment_id,
            action=action,
            code=code,
            outcome=outcome.value,
            rejection=rejection,
            scanned_at=datetime.now(UTC),
        )
        current_domain.repository_for(ScanLog).add(entry)
        logger.info(
            "scan_recorded",
            scan_id=str(entry.id),
            shipment_id=shipment_id,
            action=action,
            outcome=outcome.value,
            rejection=rejection,
        )
        return entry

    def entries_for(self, shipment_id: str) -> list[ScanLog]:
        repo = current_domain.repository_for(ScanLog)
        return repo._dao.query.filter(shipment_id=str(shipment_id)).order_by("scanned_at").all().items
