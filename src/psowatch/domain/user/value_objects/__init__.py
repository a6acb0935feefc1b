"""Value objects for the user domain."""

from psowatch.domain.user.value_objects.email import Email
from psowatch.domain.user.value_objects.role_change import RoleChange, SetRole, Unassign
from psowatch.domain.user.value_objects.supervisor_assignment import (
    SupervisorAssignment,
    SupervisorChangeType,
)
from psowatch.domain.user.value_objects.user_role import UserRole

__all__ = [
    "Email",
    "RoleChange",
    "SetRole",
    "SupervisorAssignment",
    "SupervisorChangeType",
    "Unassign",
    "UserRole",
]
