"""Product and stock events.

Every stock movement carries the before and after levels so the event
stream alone can reconstruct the inventory history.
"""

from protean.fields import Boolean, DateTime, Decimal, Identifier, Integer, String

from delivery.domain import delivery


@delivery.event(part_of="Product")
class ProductAdded:
    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Decimal(required=True)
    stock = Integer(required=True)
    is_active = Boolean(required=True)
    added_at = DateTime(required=True)


@delivery.event(part_of="Product")
class StockReserved:
    """Units were taken out of stock for an order."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    reserved_at = DateTime(required=True)


@delivery.event(part_of="Product")
class StockReleased:
    """Units reserved earlier were put back."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    released_at = DateTime(required=True)


@delivery.event(part_of="Product")
class ProductRestocked:
    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    new_stock = Integer(required=True)
    restocked_at = DateTime(required=True)


@delivery.event(part_of="Product")
class ProductActivated:
    __version__ = 1

    product_id = Identifier(required=True)
    activated_at = DateTime(required=True)


@delivery.event(part_of="Product")
class ProductDeactivated:
    __version__ = 1

    product_id = Identifier(required=True)
    deactivated_at = DateTime(required=True)
