"""Product catalogue management — admin commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Decimal, Identifier, Integer, String
from protean.utils.globals import current_domain

from delivery.access.gate import require_role
from delivery.access.user import Role
from delivery.domain import delivery
from delivery.errors import DeliveryError, ErrorKind
from delivery.product.product import Product

logger = structlog.get_logger(__name__)

_CATALOGUE_ROLES = {Role.ADMIN, Role.WAREHOUSE}


@delivery.command(part_of="Product")
class AddProduct:
    actor_id = Identifier(required=True)
    actor_role = String(required=True)
    name = String(required=True, max_length=200)
    price = Decimal(required=True, min_value=0)
    stock = Integer(min_value=0, default=0)
    is_active = Boolean(default=True)


@delivery.command(part_of="Product")
class RestockProduct:
    actor_id = Identifier(required=True)
    actor_role = String(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@delivery.command(part_of="Product")
class DeactivateProduct:
    actor_id = Identifier(required=True)
    actor_role = String(required=True)
    product_id = Identifier(required=True)


@delivery.command(part_of="Product")
class ActivateProduct:
    actor_id = Identifier(required=True)
    actor_role = String(required=True)
    product_id = Identifier(required=True)


@delivery.command_handler(part_of=Product)
class ProductManagementHandler:
    def _load(self, product_id):
        try:
            return current_domain.repository_for(Product).get(product_id)
        except ObjectNotFoundError:
            raise DeliveryError(ErrorKind.PRODUCT_NOT_FOUND, f"Product {product_id} does not exist") from None

    @handle(AddProduct)
    def add_product(self, command):
        require_role(command.actor_role, _CATALOGUE_ROLES)
        product = Product.add(
            name=command.name,
            price=command.price,
            stock=command.stock or 0,
            is_active=command.is_active,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product_added", product_id=str(product.id), stock=product.stock)
        return str(product.id)

    @handle(RestockProduct)
    def restock_product(self, command):
        require_role(command.actor_role, _CATALOGUE_ROLES)
        product = self._load(command.product_id)
        product.restock(command.quantity)
        current_domain.repository_for(Product).add(product)
        return product.stock

    @handle(DeactivateProduct)
    def deactivate_product(self, command):
        require_role(command.actor_role, {Role.ADMIN})
        product = self._load(command.product_id)
        product.deactivate()
        current_domain.repository_for(Product).add(product)

    @handle(ActivateProduct)
    def activate_product(self, command):
        require_role(command.actor_role, {Role.ADMIN})
        product = self._load(command.product_id)
        product.activate()
        current_domain.repository_for(Product).add(product)
