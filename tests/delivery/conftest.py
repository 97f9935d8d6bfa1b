import json
from datetime import date
from decimal import Decimal

import pytest
from protean.integrations.pytest import DomainFixture

ROUTE_DAY = date(2026, 10, 20)


@pytest.fixture(scope="session")
def delivery_bed():
    from delivery.domain import delivery

    bed = DomainFixture(delivery)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(delivery_bed):
    with delivery_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def codes():
    """Deterministic shipment codes for every test."""
    from delivery.codes import reset_code_generator, set_code_generator
    from delivery.codes.fake_adapter import FakeCodeGenerator

    generator = FakeCodeGenerator()
    set_code_generator(generator)
    yield generator
    reset_code_generator()


# ---------------------------------------------------------------------------
# People
# ---------------------------------------------------------------------------
def _user(email, role):
    from delivery.access.user import User
    from protean import current_domain

    user = User.register(email=email, name=email.split("@")[0], role=role)
    current_domain.repository_for(User).add(user)
    return user


@pytest.fixture()
def admin():
    from delivery.access.user import Role

    return _user("admin@lastmile.test", Role.ADMIN)


@pytest.fixture()
def customer():
    from delivery.access.user import Role

    return _user("carol@lastmile.test", Role.CUSTOMER)


@pytest.fixture()
def driver():
    from delivery.access.user import Role

    return _user("dan@lastmile.test", Role.DRIVER)


@pytest.fixture()
def other_driver():
    from delivery.access.user import Role

    return _user("dora@lastmile.test", Role.DRIVER)


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_product():
    from delivery.product.product import Product
    from protean import current_domain

    def _make(price="10.00", stock=5, is_active=True, name="Ceramic mug"):
        product = Product.add(name=name, price=Decimal(price), stock=stock, is_active=is_active)
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    return _make


@pytest.fixture()
def place_order(customer):
    from delivery.order.placement import PlaceOrder
    from protean import current_domain

    def _place(*lines, actor=None):
        actor = actor or customer
        items = [{"product_id": product_id, "quantity": quantity} for product_id, quantity in lines]
        return current_domain.process(
            PlaceOrder(actor_id=str(actor.id), actor_role=actor.role, items=json.dumps(items)),
            asynchronous=False,
        )

    return _place


@pytest.fixture()
def open_route(admin, driver):
    from delivery.route.planning import CreateRoute
    from protean import current_domain

    def _open(for_driver=None, route_date=ROUTE_DAY):
        for_driver = for_driver or driver
        return current_domain.process(
            CreateRoute(
                actor_id=str(admin.id),
                actor_role=admin.role,
                driver_id=str(for_driver.id),
                route_date=route_date,
            ),
            asynchronous=False,
        )

    return _open


@pytest.fixture()
def link_shipment(admin):
    from delivery.route.assignment import LinkShipmentToRoute
    from protean import current_domain

    def _link(route_id, shipment_id):
        return current_domain.process(
            LinkShipmentToRoute(
                actor_id=str(admin.id),
                actor_role=admin.role,
                route_id=route_id,
                shipment_id=shipment_id,
            ),
            asynchronous=False,
        )

    return _link


@pytest.fixture()
def placed_shipment(make_product, place_order):
    """A shipment in ``created`` status, with its order."""
    product_id = make_product(price="10.00", stock=5)
    return place_order((product_id, 1))["shipment_id"]


@pytest.fixture()
def assigned_shipment(placed_shipment, open_route, link_shipment):
    """A shipment sitting on ``driver``'s route."""
    route_id = open_route()
    link_shipment(route_id, placed_shipment)
    return placed_shipment


def reload(aggregate_cls, identifier):
    from protean import current_domain

    return current_domain.repository_for(aggregate_cls).get(identifier)


@pytest.fixture()
def load():
    return reload
