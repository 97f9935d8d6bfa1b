"""Tests for the Product aggregate — stock movements and availability."""

from decimal import Decimal

import pytest
from delivery.errors import DeliveryError, ErrorKind
from delivery.product.events import ProductAdded, StockReleased, StockReserved
from delivery.product.product import Product
from protean.exceptions import ValidationError


def _product(stock=5, is_active=True, price="10.00"):
    product = Product.add(name="Ceramic mug", price=Decimal(price), stock=stock, is_active=is_active)
    product._events.clear()
    return product


class TestProductCreation:
    def test_add_raises_product_added(self):
        product = Product.add(name="Ceramic mug", price=Decimal("10.00"), stock=3)
        assert isinstance(product._events[-1], ProductAdded)
        assert product.is_active is True

    def test_negative_stock_is_rejected(self):
        with pytest.raises(ValidationError):
            Product(name="Broken", price=Decimal("1.00"), stock=-1)

    def test_negative_price_is_rejected(self):
        with pytest.raises(ValidationError):
            Product(name="Broken", price=Decimal("-1.00"), stock=1)


class TestReserve:
    def test_reserve_decrements_stock(self):
        product = _product(stock=5)
        product.reserve(2)
        assert product.stock == 3

    def test_reserve_can_take_the_last_unit(self):
        product = _product(stock=1)
        product.reserve(1)
        assert product.stock == 0

    def test_reserve_raises_event_with_levels(self):
        product = _product(stock=5)
        product.reserve(2)
        event = product._events[-1]
        assert isinstance(event, StockReserved)
        assert event.previous_stock == 5
        assert event.new_stock == 3
        assert event.quantity == 2

    def test_reserving_more_than_stock_fails(self):
        product = _product(stock=1)
        with pytest.raises(DeliveryError) as exc:
            product.reserve(2)
        assert exc.value.kind is ErrorKind.OUT_OF_STOCK
        assert product.stock == 1

    def test_inactive_product_cannot_be_reserved(self):
        product = _product(stock=10, is_active=False)
        with pytest.raises(DeliveryError) as exc:
            product.reserve(1)
        assert exc.value.kind is ErrorKind.PRODUCT_NOT_ACTIVE
        assert product.stock == 10

    def test_inactive_is_reported_before_stock(self):
        product = _product(stock=0, is_active=False)
        with pytest.raises(DeliveryError) as exc:
            product.check_reservable(1)
        assert exc.value.kind is ErrorKind.PRODUCT_NOT_ACTIVE


class TestReleaseAndRestock:
    def test_release_returns_units(self):
        product = _product(stock=5)
        product.reserve(3)
        product.release(3)
        assert product.stock == 5
        assert isinstance(product._events[-1], StockReleased)

    def test_restock_adds_units(self):
        product = _product(stock=0)
        product.restock(4)
        assert product.stock == 4

    def test_restock_requires_positive_quantity(self):
        product = _product(stock=0)
        with pytest.raises(DeliveryError) as exc:
            product.restock(0)
        assert exc.value.kind is ErrorKind.INVALID_INPUT


class TestActivation:
    def test_deactivate_then_activate(self):
        product = _product()
        product.deactivate()
        assert product.is_active is False
        product.activate()
        assert product.is_active is True

    def test_deactivating_twice_raises_one_event(self):
        product = _product()
        product.deactivate()
        product.deactivate()
        assert len(product._events) == 1
