"""Role change value objects.

A requested role change is either "set this role" or "unassign" (the
soft-delete path). Callers branch on the type instead of on a ``None`` role.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from psowatch.domain.user.value_objects.user_role import UserRole


@dataclass(frozen=True)
class RoleChange:
    """Base type for a requested role change."""

    @property
    def target_role(self) -> Optional[UserRole]:
        return None

    @property
    def is_unassign(self) -> bool:
        return isinstance(self, Unassign)

    @classmethod
    def from_optional(cls, role: Union[str, UserRole, None]) -> RoleChange:
        """Build a role change from the legacy "null role means delete" form."""
        if role is None:
            return Unassign()
        return SetRole(UserRole.parse(role))


@dataclass(frozen=True)
class SetRole(RoleChange):
    """Assign ``role`` to the target user."""

    role: UserRole

    @property
    def target_role(self) -> Optional[UserRole]:
        return self.role

    def __str__(self) -> str:
        return f"SetRole({self.role.value})"


@dataclass(frozen=True)
class Unassign(RoleChange):
    """Remove the target user's role (soft delete)."""

    def __str__(self) -> str:
        return "Unassign"
