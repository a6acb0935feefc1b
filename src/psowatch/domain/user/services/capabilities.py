"""Named authorization capabilities derived from roles."""

from enum import Enum

from psowatch.domain.user.value_objects import UserRole


class Capability(str, Enum):
    """Boolean authorization predicates over a caller's role."""

    MANAGE_USERS = "manage users"
    DELETE_USERS = "delete users"
    SEND_COMMANDS = "send commands"
    QUERY_USERS = "query users"
    ACCESS_ADMIN = "access admin functions"
    ACCESS_STREAMING_STATUS = "access streaming status"

    def allows(self, role: UserRole) -> bool:
        return UserRole.parse(role) in CAPABILITY_ROLES[self]


CAPABILITY_ROLES: dict[Capability, frozenset[UserRole]] = {
    Capability.MANAGE_USERS: frozenset(
        {UserRole.ADMIN, UserRole.SUPERVISOR, UserRole.SUPER_ADMIN}
    ),
    Capability.DELETE_USERS: frozenset({UserRole.ADMIN, UserRole.SUPER_ADMIN}),
    Capability.SEND_COMMANDS: frozenset(
        {UserRole.ADMIN, UserRole.SUPERVISOR, UserRole.SUPER_ADMIN}
    ),
    Capability.QUERY_USERS: frozenset(
        {UserRole.ADMIN, UserRole.SUPERVISOR, UserRole.SUPER_ADMIN}
    ),
    Capability.ACCESS_ADMIN: frozenset({UserRole.SUPER_ADMIN}),
    Capability.ACCESS_STREAMING_STATUS: frozenset(
        {UserRole.SUPER_ADMIN, UserRole.SUPERVISOR, UserRole.CONTACT_MANAGER}
    ),
}
