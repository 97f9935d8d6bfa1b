"""Product aggregate — price, stock and availability of a sellable item.

Stock is only ever changed through ``reserve``/``release``/``restock``; the
Integer field's lower bound keeps it from going negative even if a caller
skips the availability check.
"""

from datetime import UTC, datetime
from decimal import Decimal

from protean.fields import Boolean, DateTime, Decimal as DecimalField, Integer, String

from delivery.domain import delivery
from delivery.errors import DeliveryError, ErrorKind
from delivery.product.events import (
    ProductActivated,
    ProductAdded,
    ProductDeactivated,
    ProductRestocked,
    StockReleased,
    StockReserved,
)


@delivery.aggregate
class Product:
    name = String(required=True, max_length=200)
    price = DecimalField(required=True, min_value=0)
    stock = Integer(required=True, min_value=0, default=0)
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def add(cls, name: str, price: Decimal, stock: int = 0, is_active: bool = True):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            price=price,
            stock=stock,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=name,
                price=product.price,
                stock=stock,
                is_active=is_active,
                added_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Availability
    # -------------------------------------------------------------------
    def check_reservable(self, quantity: int) -> None:
        """Raise unless ``quantity`` units could be reserved right now."""
        if not self.is_active:
            raise DeliveryError(
                ErrorKind.PRODUCT_NOT_ACTIVE,
                f"Product {self.id} is not available for sale",
                product_id=str(self.id),
            )
        if self.stock < quantity:
            raise DeliveryError(
                ErrorKind.OUT_OF_STOCK,
                f"Insufficient stock for product {self.id}: {self.stock} available, {quantity} requested",
                product_id=str(self.id),
            )

    # -------------------------------------------------------------------
    # Stock movements
    # -------------------------------------------------------------------
    def reserve(self, quantity: int) -> None:
        self.check_reservable(quantity)

        previous = self.stock
        now = datetime.now(UTC)
        self.stock = previous - quantity
        self.updated_at = now
        self.raise_(
            StockReserved(
                product_id=str(self.id),
                quantity=quantity,
                previous_stock=previous,
                new_stock=self.stock,
                reserved_at=now,
            )
        )

    def release(self, quantity: int) -> None:
        """Return previously reserved units to stock."""
        previous = self.stock
        now = datetime.now(UTC)
        self.stock = previous + quantity
        self.updated_at = now
        self.raise_(
            StockReleased(
                product_id=str(self.id),
                quantity=quantity,
                previous_stock=previous,
                new_stock=self.stock,
                released_at=now,
            )
        )

    def restock(self, quantity: int) -> None:
        if quantity <= 0:
            raise DeliveryError(ErrorKind.INVALID_INPUT, "Restock quantity must be positive")

        previous = self.stock
        now = datetime.now(UTC)
        self.stock = previous + quantity
        self.updated_at = now
        self.raise_(
            ProductRestocked(
                product_id=str(self.id),
                quantity=quantity,
                new_stock=self.stock,
                restocked_at=now,
            )
        )

    def activate(self) -> None:
        if self.is_active:
            return
        now = datetime.now(UTC)
        self.is_active = True
        self.updated_at = now
        self.raise_(ProductActivated(product_id=str(self.id), activated_at=now))

    def deactivate(self) -> None:
        if not self.is_active:
            return
        now = datetime.now(UTC)
        self.is_active = False
        self.updated_at = now
        self.raise_(ProductDeactivated(product_id=str(self.id), deactivated_at=now))
