"""Order aggregate — what a customer bought and at which prices.

Line prices are snapshots taken at reservation time; later price changes on
the product never alter an existing order or its total.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Decimal, HasMany, Identifier, Integer, String

from delivery.domain import delivery
from delivery.order.events import OrderPlaced


class OrderStatus(Enum):
    PENDING = "pending"


@delivery.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price_at_order = Decimal(required=True, min_value=0)


@delivery.aggregate
class Order:
    customer_id = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    total_amount = Decimal(required=True, min_value=0)
    items = HasMany(OrderItem)
    created_at = DateTime()

    @classmethod
    def place(cls, customer_id: str, reservation):
        """Build a pending order from a stock reservation."""
        now = datetime.now(UTC)
        order = cls(
            customer_id=customer_id,
            status=OrderStatus.PENDING.value,
            total_amount=reservation.total,
            created_at=now,
        )
        for line in reservation.lines:
            order.add_items(
                OrderItem(
                    product_id=line.product_id,
                    quantity=line.quantity,
                    price_at_order=line.unit_price,
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=customer_id,
                total_amount=reservation.total,
                items=json.dumps(
                    [
                        {
                            "product_id": line.product_id,
                            "quantity": line.quantity,
                            "price_at_order": str(line.unit_price),
                        }
                        for line in reservation.lines
                    ]
                ),
                item_count=len(reservation.lines),
                placed_at=now,
            )
        )
        return order
