"""Pydantic API schemas for the delivery domain.

These are the external API contracts, kept separate from domain commands.
Field-level business validation (quantities, codes, URLs) stays in the domain
so that the HTTP surface and direct command callers get identical errors.
"""

from datetime import date, datetime

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------
class RegisterUserRequest(BaseModel):
    email: str
    name: str | None = None


class ChangeRoleRequest(BaseModel):
    role: str


class AddProductRequest(BaseModel):
    name: str
    price: str
    stock: int = 0
    is_active: bool = True


class RestockRequest(BaseModel):
    quantity: int


class OrderItemRequest(BaseModel):
    product_id: str
    quantity: int


class PlaceOrderRequest(BaseModel):
    items: list[OrderItemRequest]


class CreateRouteRequest(BaseModel):
    driver_id: str
    route_date: date


class LinkShipmentRequest(BaseModel):
    shipment_id: str


class ScanRequest(BaseModel):
    code: str
    action: str


class ProofRequest(BaseModel):
    code: str
    proof_photo_url: str


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------
class UserIdResponse(BaseModel):
    user_id: str


class RoleResponse(BaseModel):
    user_id: str
    role: str


class ProductResponse(BaseModel):
    product_id: str
    name: str
    price: str
    stock: int
    is_active: bool


class OrderItemResponse(BaseModel):
    product_id: str
    quantity: int
    price_at_order: str


class OrderResponse(BaseModel):
    order_id: str
    customer_id: str
    status: str
    total_amount: str
    items: list[OrderItemResponse]
    created_at: datetime | None = None


class ShipmentResponse(BaseModel):
    shipment_id: str
    order_id: str
    status: str
    code: str
    proof_photo_url: str | None = None
    delivered_at: datetime | None = None


class PlaceOrderResponse(BaseModel):
    order: OrderResponse
    shipment: ShipmentResponse


class RouteResponse(BaseModel):
    route_id: str
    driver_id: str
    route_date: date
    status: str


class CreateRouteResponse(BaseModel):
    route: RouteResponse


class RouteShipmentResponse(BaseModel):
    route_shipment_id: str
    route_id: str
    shipment_id: str
    linked_at: datetime | None = None


class LinkShipmentResponse(BaseModel):
    route_shipment: RouteShipmentResponse
    shipment: ShipmentResponse


class ScanResponse(BaseModel):
    scan_id: str
    shipment: ShipmentResponse


class ShipmentEnvelope(BaseModel):
    shipment: ShipmentResponse


class ManifestEntryResponse(BaseModel):
    shipment_id: str
    route_id: str
    route_date: date
    order_id: str
    code: str
    status: str
    proof_photo_url: str | None = None
    delivered_at: datetime | None = None


class ManifestResponse(BaseModel):
    driver_id: str
    shipments: list[ManifestEntryResponse]


class StatusResponse(BaseModel):
    status: str
