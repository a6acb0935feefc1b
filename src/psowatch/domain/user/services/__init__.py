"""Domain services for the user domain."""

from psowatch.domain.user.services.capabilities import CAPABILITY_ROLES, Capability
from psowatch.domain.user.services.role_hierarchy import ROLE_LEVELS, RoleHierarchy

__all__ = [
    "CAPABILITY_ROLES",
    "Capability",
    "ROLE_LEVELS",
    "RoleHierarchy",
]
