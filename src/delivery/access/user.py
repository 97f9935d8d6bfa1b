"""User aggregate — the people who act on the system and the role each one holds."""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, String

from delivery.access.events import UserRegistered, UserRoleChanged
from delivery.domain import delivery


class Role(Enum):
    """What a user is allowed to do."""

    CUSTOMER = "customer"
    DRIVER = "driver"
    WAREHOUSE = "warehouse"
    ADMIN = "admin"


@delivery.aggregate
class User:
    email: String(required=True, max_length=254, unique=True)
    name: String(max_length=150)
    role: String(choices=Role, default=Role.CUSTOMER.value)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def register(cls, email: str, name: str | None = None, role: Role = Role.CUSTOMER):
        now = datetime.now(UTC)
        user = cls(
            email=email.strip().lower(),
            name=name,
            role=role.value,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                email=user.email,
                role=user.role,
                registered_at=now,
            )
        )
        return user

    def change_role(self, role: Role) -> None:
        if self.role == role.value:
            return

        now = datetime.now(UTC)
        previous = self.role
        self.role = role.value
        self.updated_at = now
        self.raise_(
            UserRoleChanged(
                user_id=str(self.id),
                previous_role=previous,
                new_role=role.value,
                changed_at=now,
            )
        )
