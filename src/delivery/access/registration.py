"""User registration and role management — commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from delivery.access.gate import require_role
from delivery.access.user import Role, User
from delivery.domain import delivery
from delivery.errors import DeliveryError, ErrorKind

logger = structlog.get_logger(__name__)


@delivery.command(part_of="User")
class RegisterUser:
    """Sign up a new user. Everyone starts out as a customer."""

    email = String(required=True, max_length=254)
    name = String(max_length=150)


@delivery.command(part_of="User")
class ChangeUserRole:
    """Grant a different role to an existing user (admin only)."""

    actor_id = Identifier(required=True)
    actor_role = String(required=True)
    user_id = Identifier(required=True)
    role = String(required=True, choices=Role)


@delivery.command_handler(part_of=User)
class UserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        email = command.email.strip().lower()
        if repo._dao.query.filter(email=email).all().items:
            raise DeliveryError(ErrorKind.EMAIL_ALREADY_REGISTERED, f"{email} is already registered")

        user = User.register(email=email, name=command.name)
        repo.add(user)
        logger.info("user_registered", user_id=str(user.id))
        return str(user.id)

    @handle(ChangeUserRole)
    def change_role(self, command):
        require_role(command.actor_role, {Role.ADMIN})

        repo = current_domain.repository_for(User)
        try:
            user = repo.get(command.user_id)
        except ObjectNotFoundError:
            raise DeliveryError(ErrorKind.USER_NOT_FOUND, f"User {command.user_id} does not exist") from None

        user.change_role(Role(command.role))
        repo.add(user)
        logger.info("user_role_changed", user_id=str(user.id), role=user.role, changed_by=command.actor_id)
        return user.role
