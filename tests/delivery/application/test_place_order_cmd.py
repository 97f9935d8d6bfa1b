"""Tests for PlaceOrder — the order transaction coordinator."""

import json
from decimal import Decimal
from uuid import uuid4

import pytest
from delivery.errors import DeliveryError, ErrorKind
from delivery.order.order import Order
from delivery.order.placement import PlaceOrder
from delivery.product.product import Product
from delivery.shipment.shipment import Shipment, ShipmentStatus
from protean import current_domain


def _all(aggregate_cls):
    return current_domain.repository_for(aggregate_cls)._dao.query.all().items


def _stock(product_id):
    return current_domain.repository_for(Product).get(product_id).stock


class TestPlaceOrder:
    def test_two_units_at_ten(self, make_product, place_order, load):
        product_id = make_product(price="10.00", stock=5)

        result = place_order((product_id, 2))

        order = load(Order, result["order_id"])
        assert order.total_amount == Decimal("20.00")
        assert order.status == "pending"
        assert len(order.items) == 1
        assert order.items[0].price_at_order == Decimal("10.00")
        assert order.items[0].quantity == 2

        shipment = load(Shipment, result["shipment_id"])
        assert shipment.status == ShipmentStatus.CREATED.value
        assert shipment.order_id == result["order_id"]
        assert _stock(product_id) == 3

    def test_order_belongs_to_the_customer(self, make_product, place_order, customer, load):
        product_id = make_product()
        result = place_order((product_id, 1))
        assert load(Order, result["order_id"]).customer_id == str(customer.id)

    def test_shipment_gets_a_generated_code(self, make_product, place_order, codes, load):
        codes.configure(codes=["CODE-ABC123"])
        product_id = make_product()
        result = place_order((product_id, 1))
        assert load(Shipment, result["shipment_id"]).code == "CODE-ABC123"

    def test_later_price_change_does_not_touch_the_order(self, make_product, place_order, load):
        product_id = make_product(price="10.00")
        result = place_order((product_id, 1))

        repo = current_domain.repository_for(Product)
        product = repo.get(product_id)
        product.price = Decimal("99.00")
        repo.add(product)

        order = load(Order, result["order_id"])
        assert order.total_amount == Decimal("10.00")
        assert order.items[0].price_at_order == Decimal("10.00")

    def test_one_shipment_per_order(self, make_product, place_order):
        first = make_product(name="Mug")
        second = make_product(name="Plate")
        place_order((first, 1), (second, 2))
        assert len(_all(Shipment)) == 1
        assert len(_all(Order)) == 1


class TestRejectedOrders:
    def test_only_customers_may_order(self, make_product, place_order, driver):
        product_id = make_product(stock=5)
        with pytest.raises(DeliveryError) as exc:
            place_order((product_id, 1), actor=driver)
        assert exc.value.kind is ErrorKind.ROLE_NOT_ALLOWED
        assert _stock(product_id) == 5

    def test_empty_order(self, customer):
        with pytest.raises(DeliveryError) as exc:
            current_domain.process(
                PlaceOrder(actor_id=str(customer.id), actor_role="customer", items="[]"),
                asynchronous=False,
            )
        assert exc.value.kind is ErrorKind.INVALID_INPUT

    def test_non_positive_quantity(self, make_product, place_order):
        product_id = make_product(stock=5)
        with pytest.raises(DeliveryError) as exc:
            place_order((product_id, 0))
        assert exc.value.kind is ErrorKind.INVALID_INPUT
        assert _stock(product_id) == 5

    def test_out_of_stock_creates_nothing(self, make_product, place_order):
        plenty = make_product(stock=10, name="Plenty")
        scarce = make_product(stock=1, name="Scarce")

        with pytest.raises(DeliveryError) as exc:
            place_order((plenty, 3), (scarce, 2))

        assert exc.value.kind is ErrorKind.OUT_OF_STOCK
        assert _stock(plenty) == 10
        assert _stock(scarce) == 1
        assert _all(Order) == []
        assert _all(Shipment) == []

    def test_inactive_product(self, make_product, place_order):
        product_id = make_product(is_active=False)
        with pytest.raises(DeliveryError) as exc:
            place_order((product_id, 1))
        assert exc.value.kind is ErrorKind.PRODUCT_NOT_ACTIVE

    def test_unknown_product(self, place_order):
        with pytest.raises(DeliveryError) as exc:
            place_order((str(uuid4()), 1))
        assert exc.value.kind is ErrorKind.PRODUCT_NOT_FOUND


class TestAtomicity:
    def test_failure_after_reservation_restores_stock(self, make_product, place_order, codes):
        product_id = make_product(stock=4)
        codes.configure(failure=RuntimeError("code service down"))

        with pytest.raises(DeliveryError) as exc:
            place_order((product_id, 3))

        assert exc.value.kind is ErrorKind.INTERNAL_ERROR
        assert _stock(product_id) == 4
        assert _all(Order) == []
        assert _all(Shipment) == []

    def test_duplicate_shipment_code_rolls_everything_back(self, make_product, place_order, codes):
        product_id = make_product(stock=4)
        codes.configure(codes=["DUPLICATE-1", "DUPLICATE-1"])
        place_order((product_id, 1))

        with pytest.raises(DeliveryError) as exc:
            place_order((product_id, 2))

        assert exc.value.kind is ErrorKind.INTERNAL_ERROR
        assert _stock(product_id) == 3
        assert len(_all(Order)) == 1
        assert len(_all(Shipment)) == 1

    def test_repeated_submission_creates_a_second_order(self, make_product, customer):
        product_id = make_product(stock=5)
        items = json.dumps([{"product_id": product_id, "quantity": 1}])
        for _ in range(2):
            current_domain.process(
                PlaceOrder(actor_id=str(customer.id), actor_role="customer", items=items),
                asynchronous=False,
            )

        assert len(_all(Order)) == 2
        assert _stock(product_id) == 3
