"""Access gate — turns a request credential into a typed actor and checks roles.

Authentication proper lives outside this service: the credential presented
here is the user id an upstream identity provider vouched for, carried either
in ``X-Actor-Id`` or as a bearer token. The gate only resolves that id to the
stored role; each operation then checks its own allow-list.
"""

from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from delivery.access.user import Role, User
from delivery.domain import delivery
from delivery.errors import DeliveryError, ErrorKind


@delivery.value_object
class Actor:
    """The ``(actor_id, role)`` pair every operation is authorized against."""

    actor_id = Identifier(required=True)
    role = String(required=True, choices=Role)


def extract_credential(x_actor_id: str | None, authorization: str | None) -> str | None:
    if x_actor_id and x_actor_id.strip():
        return x_actor_id.strip()
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and token.strip():
            return token.strip()
    return None


def resolve_actor(x_actor_id: str | None = None, authorization: str | None = None) -> Actor:
    credential = extract_credential(x_actor_id, authorization)
    if credential is None:
        raise DeliveryError(ErrorKind.UNAUTHENTICATED, "Missing actor credential")

    try:
        user = current_domain.repository_for(User).get(credential)
    except ObjectNotFoundError:
        raise DeliveryError(ErrorKind.UNAUTHENTICATED, "Unknown actor") from None

    return Actor(actor_id=str(user.id), role=user.role)


def require_role(role: str, allowed: set[Role]) -> None:
    """Reject ``role`` unless it is on the operation's allow-list."""
    if role not in {r.value for r in allowed}:
        names = ", ".join(sorted(r.value for r in allowed))
        raise DeliveryError(ErrorKind.ROLE_NOT_ALLOWED, f"Role '{role}' may not perform this action (requires {names})")
