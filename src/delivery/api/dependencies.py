"""Request-scoped dependencies."""

from fastapi import Header

from delivery.access.gate import Actor, resolve_actor
from delivery.utils.logging import bind_actor


async def current_actor(
    x_actor_id: str | None = Header(default=None),
    authorization: str | None = Header(default=None),
) -> Actor:
    """Resolve the calling actor from ``X-Actor-Id`` or a bearer token."""
    actor = resolve_actor(x_actor_id=x_actor_id, authorization=authorization)
    bind_actor(actor.actor_id, actor.role)
    return actor
