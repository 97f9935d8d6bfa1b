"""Inventory ledger — all-or-none stock reservation across order lines.

Every requested product is loaded and checked before any of them is touched,
so a failing line leaves every product exactly as it was. The ledger writes
through the current unit of work; the caller owns the transaction.
"""

from dataclasses import dataclass
from decimal import Decimal

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from delivery.errors import DeliveryError, ErrorKind
from delivery.product.product import Product

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Line:
    """One ``(product_id, quantity)`` pair of an order request."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class ReservedLine:
    product_id: str
    quantity: int
    unit_price: Decimal

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Reservation:
    lines: tuple[ReservedLine, ...]

    @property
    def total(self) -> Decimal:
        return sum((line.subtotal for line in self.lines), Decimal("0"))


class InventoryLedger:
    def __init__(self):
        self.repo = current_domain.repository_for(Product)

    def _load(self, product_id: str) -> Product:
        try:
            return self.repo.get(product_id)
        except ObjectNotFoundError:
            raise DeliveryError(
                ErrorKind.PRODUCT_NOT_FOUND,
                f"Product {product_id} does not exist",
                product_id=product_id,
            ) from None

    def reserve(self, lines: list[Line]) -> Reservation:
        """Decrement stock for every line, or for none of them.

        Raises ``DeliveryError`` naming the first failing line:
        ``PRODUCT_NOT_FOUND``, ``PRODUCT_NOT_ACTIVE`` or ``OUT_OF_STOCK``.
        """
        products = []
        for line in lines:
            product = self._load(line.product_id)
            product.check_reservable(line.quantity)
            products.append(product)

        reserved = []
        for line, product in zip(lines, products, strict=True):
            product.reserve(line.quantity)
            self.repo.add(product)
            reserved.append(
                ReservedLine(
                    product_id=str(product.id),
                    quantity=line.quantity,
                    unit_price=Decimal(str(product.price)),
                )
            )

        reservation = Reservation(lines=tuple(reserved))
        logger.info(
            "stock_reserved",
            lines=len(reservation.lines),
            total=str(reservation.total),
        )
        return reservation

    def release(self, reservation: Reservation) -> None:
        """Compensate a reservation by putting every reserved unit back."""
        for line in reservation.lines:
            product = self._load(line.product_id)
            product.release(line.quantity)
            self.repo.add(product)

        logger.warning("stock_released", lines=len(reservation.lines))
