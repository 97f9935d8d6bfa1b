"""FastAPI routes for the delivery domain.

Endpoints translate requests into commands, process them synchronously and
read the resulting aggregates back for the response body.
"""

import json
from datetime import date

from fastapi import APIRouter, Depends, Header
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from delivery.access.gate import Actor, require_role
from delivery.access.registration import ChangeUserRole, RegisterUser
from delivery.access.user import Role
from delivery.api.dependencies import current_actor
from delivery.api.schemas import (
    AddProductRequest,
    ChangeRoleRequest,
    CreateRouteRequest,
    CreateRouteResponse,
    LinkShipmentRequest,
    LinkShipmentResponse,
    ManifestEntryResponse,
    ManifestResponse,
    OrderItemResponse,
    OrderResponse,
    PlaceOrderRequest,
    PlaceOrderResponse,
    ProductResponse,
    ProofRequest,
    RegisterUserRequest,
    RestockRequest,
    RoleResponse,
    RouteResponse,
    RouteShipmentResponse,
    ScanRequest,
    ScanResponse,
    ShipmentEnvelope,
    ShipmentResponse,
    StatusResponse,
    UserIdResponse,
)
from delivery.errors import DeliveryError, ErrorKind
from delivery.order.order import Order
from delivery.order.placement import PlaceOrder
from delivery.product.management import ActivateProduct, AddProduct, DeactivateProduct, RestockProduct
from delivery.product.product import Product
from delivery.projections.driver_manifest import manifest_for
from delivery.route.assignment import LinkShipmentToRoute
from delivery.route.planning import CreateRoute
from delivery.route.route import Route, RouteShipment
from delivery.shipment.proof import AttachProof
from delivery.shipment.scanning import scan_shipment
from delivery.shipment.shipment import Shipment


# ---------------------------------------------------------------------------
# Response builders
# ---------------------------------------------------------------------------
def _product_response(product) -> ProductResponse:
    return ProductResponse(
        product_id=str(product.id),
        name=product.name,
        price=str(product.price),
        stock=product.stock,
        is_active=product.is_active,
    )


def _order_response(order) -> OrderResponse:
    return OrderResponse(
        order_id=str(order.id),
        customer_id=str(order.customer_id),
        status=order.status,
        total_amount=str(order.total_amount),
        items=[
            OrderItemResponse(
                product_id=str(item.product_id),
                quantity=item.quantity,
                price_at_order=str(item.price_at_order),
            )
            for item in order.items
        ],
        created_at=order.created_at,
    )


def _shipment_response(shipment) -> ShipmentResponse:
    return ShipmentResponse(
        shipment_id=str(shipment.id),
        order_id=str(shipment.order_id),
        status=shipment.status,
        code=shipment.code,
        proof_photo_url=shipment.proof_photo_url,
        delivered_at=shipment.delivered_at,
    )


def _route_response(route) -> RouteResponse:
    return RouteResponse(
        route_id=str(route.id),
        driver_id=str(route.driver_id),
        route_date=route.route_date,
        status=route.status,
    )


def _load(aggregate_cls, identifier):
    return current_domain.repository_for(aggregate_cls).get(identifier)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
user_router = APIRouter(prefix="/users", tags=["users"])


@user_router.post("", status_code=201, response_model=UserIdResponse)
async def register_user(body: RegisterUserRequest) -> UserIdResponse:
    """Sign up. New users are customers until an admin says otherwise."""
    user_id = current_domain.process(RegisterUser(email=body.email, name=body.name), asynchronous=False)
    return UserIdResponse(user_id=user_id)


@user_router.put("/{user_id}/role", response_model=RoleResponse)
async def change_user_role(
    user_id: str, body: ChangeRoleRequest, actor: Actor = Depends(current_actor)
) -> RoleResponse:
    role = current_domain.process(
        ChangeUserRole(actor_id=actor.actor_id, actor_role=actor.role, user_id=user_id, role=body.role),
        asynchronous=False,
    )
    return RoleResponse(user_id=user_id, role=role)


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.post("", status_code=201, response_model=ProductResponse)
async def add_product(body: AddProductRequest, actor: Actor = Depends(current_actor)) -> ProductResponse:
    product_id = current_domain.process(
        AddProduct(
            actor_id=actor.actor_id,
            actor_role=actor.role,
            name=body.name,
            price=body.price,
            stock=body.stock,
            is_active=body.is_active,
        ),
        asynchronous=False,
    )
    return _product_response(_load(Product, product_id))


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    try:
        product = _load(Product, product_id)
    except ObjectNotFoundError:
        raise DeliveryError(ErrorKind.PRODUCT_NOT_FOUND, f"Product {product_id} does not exist") from None
    return _product_response(product)


@product_router.put("/{product_id}/restock", response_model=ProductResponse)
async def restock_product(
    product_id: str, body: RestockRequest, actor: Actor = Depends(current_actor)
) -> ProductResponse:
    current_domain.process(
        RestockProduct(
            actor_id=actor.actor_id,
            actor_role=actor.role,
            product_id=product_id,
            quantity=body.quantity,
        ),
        asynchronous=False,
    )
    return _product_response(_load(Product, product_id))


@product_router.put("/{product_id}/deactivate", response_model=StatusResponse)
async def deactivate_product(product_id: str, actor: Actor = Depends(current_actor)) -> StatusResponse:
    current_domain.process(
        DeactivateProduct(actor_id=actor.actor_id, actor_role=actor.role, product_id=product_id),
        asynchronous=False,
    )
    return StatusResponse(status="deactivated")


@product_router.put("/{product_id}/activate", response_model=StatusResponse)
async def activate_product(product_id: str, actor: Actor = Depends(current_actor)) -> StatusResponse:
    current_domain.process(
        ActivateProduct(actor_id=actor.actor_id, actor_role=actor.role, product_id=product_id),
        asynchronous=False,
    )
    return StatusResponse(status="activated")


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=PlaceOrderResponse)
async def place_order(
    body: PlaceOrderRequest,
    actor: Actor = Depends(current_actor),
    idempotency_key: str | None = Header(default=None),
) -> PlaceOrderResponse:
    """Reserve stock, record the order and open its shipment in one transaction."""
    result = current_domain.process(
        PlaceOrder(
            actor_id=actor.actor_id,
            actor_role=actor.role,
            items=json.dumps([item.model_dump() for item in body.items]),
        ),
        asynchronous=False,
        idempotency_key=idempotency_key,
    )
    return PlaceOrderResponse(
        order=_order_response(_load(Order, result["order_id"])),
        shipment=_shipment_response(_load(Shipment, result["shipment_id"])),
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
route_router = APIRouter(prefix="/routes", tags=["routes"])


@route_router.post("", status_code=201, response_model=CreateRouteResponse)
async def create_route(body: CreateRouteRequest, actor: Actor = Depends(current_actor)) -> CreateRouteResponse:
    route_id = current_domain.process(
        CreateRoute(
            actor_id=actor.actor_id,
            actor_role=actor.role,
            driver_id=body.driver_id,
            route_date=body.route_date,
        ),
        asynchronous=False,
    )
    return CreateRouteResponse(route=_route_response(_load(Route, route_id)))


@route_router.post("/{route_id}/shipments", status_code=201, response_model=LinkShipmentResponse)
async def link_shipment(
    route_id: str, body: LinkShipmentRequest, actor: Actor = Depends(current_actor)
) -> LinkShipmentResponse:
    result = current_domain.process(
        LinkShipmentToRoute(
            actor_id=actor.actor_id,
            actor_role=actor.role,
            route_id=route_id,
            shipment_id=body.shipment_id,
        ),
        asynchronous=False,
    )
    link = _load(RouteShipment, result["route_shipment_id"])
    return LinkShipmentResponse(
        route_shipment=RouteShipmentResponse(
            route_shipment_id=str(link.id),
            route_id=str(link.route_id),
            shipment_id=str(link.shipment_id),
            linked_at=link.linked_at,
        ),
        shipment=_shipment_response(_load(Shipment, result["shipment_id"])),
    )


@route_router.get("/manifest", response_model=ManifestResponse)
async def driver_manifest(route_date: date | None = None, actor: Actor = Depends(current_actor)) -> ManifestResponse:
    """Shipments on the calling driver's routes."""
    require_role(actor.role, {Role.DRIVER})
    rows = manifest_for(actor.actor_id, route_date=route_date)
    return ManifestResponse(
        driver_id=actor.actor_id,
        shipments=[
            ManifestEntryResponse(
                shipment_id=str(row.shipment_id),
                route_id=str(row.route_id),
                route_date=row.route_date,
                order_id=str(row.order_id),
                code=row.code,
                status=row.status,
                proof_photo_url=row.proof_photo_url,
                delivered_at=row.delivered_at,
            )
            for row in rows
        ],
    )


# ---------------------------------------------------------------------------
# Shipments
# ---------------------------------------------------------------------------
shipment_router = APIRouter(prefix="/shipments", tags=["shipments"])


@shipment_router.post("/scan", response_model=ScanResponse)
async def scan(body: ScanRequest, actor: Actor = Depends(current_actor)) -> ScanResponse:
    """Record a pickup or delivery scan. Rejected scans are logged, then reported."""
    outcome = scan_shipment(actor.actor_id, actor.role, code=body.code, action=body.action)
    return ScanResponse(
        scan_id=outcome["scan_id"],
        shipment=_shipment_response(_load(Shipment, outcome["shipment_id"])),
    )


@shipment_router.post("/proof", response_model=ShipmentEnvelope)
async def attach_proof(body: ProofRequest, actor: Actor = Depends(current_actor)) -> ShipmentEnvelope:
    shipment_id = current_domain.process(
        AttachProof(
            actor_id=actor.actor_id,
            actor_role=actor.role,
            code=body.code,
            proof_photo_url=body.proof_photo_url,
        ),
        asynchronous=False,
    )
    return ShipmentEnvelope(shipment=_shipment_response(_load(Shipment, shipment_id)))
