"""Order events."""

from protean.fields import DateTime, Decimal, Identifier, Integer, Text

from delivery.domain import delivery


@delivery.event(part_of="Order")
class OrderPlaced:
    """A customer's order was accepted and its stock reserved."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    total_amount = Decimal(required=True)
    items = Text(required=True)  # JSON list of {product_id, quantity, price_at_order}
    item_count = Integer(required=True)
    placed_at = DateTime(required=True)
