"""Order placement — the transaction that turns a cart into an order and a shipment.

Steps, all inside the handler's unit of work:
    validate lines → reserve stock → persist order + items → create shipment

Any failure after the reservation releases it again before the error
propagates, and the unit of work discards every write, so stock is never
decremented without a persisted order behind it.
"""

import json
from uuid import UUID

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from delivery.access.gate import require_role
from delivery.access.user import Role
from delivery.codes import get_code_generator
from delivery.domain import delivery
from delivery.errors import DeliveryError, ErrorKind
from delivery.order.order import Order
from delivery.product.ledger import InventoryLedger, Line
from delivery.shipment.shipment import Shipment

logger = structlog.get_logger(__name__)


@delivery.command(part_of="Order")
class PlaceOrder:
    """Place an order for one or more products on behalf of a customer."""

    actor_id = Identifier(required=True)
    actor_role = String(required=True)
    items = Text(required=True)  # JSON list of {product_id, quantity}


def _invalid(message: str) -> DeliveryError:
    return DeliveryError(ErrorKind.INVALID_INPUT, message)


def parse_lines(raw) -> list[Line]:
    """Validate an order request's items and return them as ledger lines.

    Rejects an empty list, malformed product ids, non-positive or non-integer
    quantities and repeated products.
    """
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            raise _invalid("Items must be a JSON list") from None

    if not isinstance(raw, list) or not raw:
        raise _invalid("An order needs at least one item")

    lines = []
    seen = set()
    for position, item in enumerate(raw):
        if not isinstance(item, dict):
            raise _invalid(f"Item {position} must be an object")

        product_id = item.get("product_id")
        try:
            product_id = str(UUID(str(product_id)))
        except ValueError:
            raise _invalid(f"Item {position} has a malformed product_id") from None

        quantity = item.get("quantity")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise _invalid(f"Item {position} quantity must be a positive integer")

        if product_id in seen:
            raise _invalid(f"Product {product_id} appears more than once")
        seen.add(product_id)

        lines.append(Line(product_id=product_id, quantity=quantity))
    return lines


@delivery.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        require_role(command.actor_role, {Role.CUSTOMER})
        lines = parse_lines(command.items)

        ledger = InventoryLedger()
        reservation = ledger.reserve(lines)

        try:
            order = Order.place(customer_id=command.actor_id, reservation=reservation)
            current_domain.repository_for(Order).add(order)

            shipment = Shipment.create(order_id=str(order.id), code=get_code_generator().generate())
            current_domain.repository_for(Shipment).add(shipment)
        except Exception as exc:
            logger.warning("order_placement_failed", customer_id=command.actor_id, exc_info=True)
            ledger.release(reservation)
            raise DeliveryError(ErrorKind.INTERNAL_ERROR, "The order could not be recorded") from exc

        logger.info(
            "order_placed",
            order_id=str(order.id),
            shipment_id=str(shipment.id),
            total=str(order.total_amount),
        )
        return {"order_id": str(order.id), "shipment_id": str(shipment.id)}
