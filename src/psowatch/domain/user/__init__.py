"""User domain - identity, roles and supervision.

This domain handles:
- User aggregate (identity, role, supervisor link, soft delete)
- Role hierarchy and named capabilities
- Supervisor assignment and role change value objects

Design notes:
- User ID is a random UUID4 generated at creation (opaque, unpredictable)
- Email is lower-cased and unique
- Users are never hard-deleted; deletion sets role Unassigned and deleted_at
- Directory interface defined here, implementation in infrastructure
"""

from psowatch.domain.user.aggregates import User
from psowatch.domain.user.exceptions import (
    AuthError,
    CallerLookupFailure,
    EmailAlreadyExistsError,
    InvalidEmailError,
    InvalidRoleError,
    SupervisorError,
    UserDeletionError,
    UserNotFoundError,
    UserRoleChangeError,
)
from psowatch.domain.user.repositories import UserDirectory
from psowatch.domain.user.services import (
    CAPABILITY_ROLES,
    ROLE_LEVELS,
    Capability,
    RoleHierarchy,
)
from psowatch.domain.user.value_objects import (
    Email,
    RoleChange,
    SetRole,
    SupervisorAssignment,
    SupervisorChangeType,
    Unassign,
    UserRole,
)

__all__ = [
    "AuthError",
    "CAPABILITY_ROLES",
    "CallerLookupFailure",
    "Capability",
    "Email",
    "EmailAlreadyExistsError",
    "InvalidEmailError",
    "InvalidRoleError",
    "ROLE_LEVELS",
    "RoleChange",
    "RoleHierarchy",
    "SetRole",
    "SupervisorAssignment",
    "SupervisorChangeType",
    "SupervisorError",
    "Unassign",
    "User",
    "UserDeletionError",
    "UserDirectory",
    "UserNotFoundError",
    "UserRole",
    "UserRoleChangeError",
]
