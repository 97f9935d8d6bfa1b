"""Error kinds surfaced by the delivery domain.

Every business failure is a ``DeliveryError``: a Protean ``ValidationError``
that also carries a machine-readable ``ErrorKind``. Handlers raise it inside
their unit of work, so raising always means nothing was persisted.
"""

from enum import Enum

from protean.exceptions import ValidationError


class ErrorKind(Enum):
    # Authorization
    UNAUTHENTICATED = "UNAUTHENTICATED"
    ROLE_NOT_ALLOWED = "ROLE_NOT_ALLOWED"
    NOT_IN_YOUR_ROUTE = "NOT_IN_YOUR_ROUTE"

    # Validation
    INVALID_INPUT = "INVALID_INPUT"

    # Not found
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    ROUTE_NOT_FOUND = "ROUTE_NOT_FOUND"
    SHIPMENT_NOT_FOUND = "SHIPMENT_NOT_FOUND"
    DRIVER_NOT_FOUND = "DRIVER_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"

    # Business-rule conflicts
    PRODUCT_NOT_ACTIVE = "PRODUCT_NOT_ACTIVE"
    OUT_OF_STOCK = "OUT_OF_STOCK"
    TARGET_NOT_DRIVER = "TARGET_NOT_DRIVER"
    SHIPMENT_ALREADY_ASSIGNED = "SHIPMENT_ALREADY_ASSIGNED"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    EMAIL_ALREADY_REGISTERED = "EMAIL_ALREADY_REGISTERED"

    # Infrastructure
    INTERNAL_ERROR = "INTERNAL_ERROR"


HTTP_STATUS = {
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.ROLE_NOT_ALLOWED: 403,
    ErrorKind.NOT_IN_YOUR_ROUTE: 403,
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.PRODUCT_NOT_FOUND: 404,
    ErrorKind.ROUTE_NOT_FOUND: 404,
    ErrorKind.SHIPMENT_NOT_FOUND: 404,
    ErrorKind.DRIVER_NOT_FOUND: 404,
    ErrorKind.USER_NOT_FOUND: 404,
    ErrorKind.PRODUCT_NOT_ACTIVE: 400,
    ErrorKind.OUT_OF_STOCK: 400,
    ErrorKind.TARGET_NOT_DRIVER: 400,
    ErrorKind.SHIPMENT_ALREADY_ASSIGNED: 400,
    ErrorKind.INVALID_TRANSITION: 400,
    ErrorKind.EMAIL_ALREADY_REGISTERED: 400,
    ErrorKind.INTERNAL_ERROR: 500,
}


class DeliveryError(ValidationError):
    """A failed delivery operation, identified by its ``ErrorKind``."""

    def __init__(self, kind: ErrorKind, detail: str = "", **context):
        self.kind = kind
        self.detail = detail or kind.value
        self.context = context
        super().__init__({"code": [kind.value], "detail": [self.detail]})

    @property
    def http_status(self) -> int:
        return HTTP_STATUS[self.kind]

    def __reduce__(self):
        return (self.__class__, (self.kind, self.detail))
