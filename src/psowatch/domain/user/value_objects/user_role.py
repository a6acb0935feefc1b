from enum import Enum
from typing import Union

from psowatch.domain.user.exceptions import InvalidRoleError


class UserRole(str, Enum):
    """User roles, ordered from least to most privileged."""

    UNASSIGNED = "Unassigned"
    EMPLOYEE = "Employee"
    CONTACT_MANAGER = "ContactManager"
    SUPERVISOR = "Supervisor"
    ADMIN = "Admin"
    SUPER_ADMIN = "SuperAdmin"

    @classmethod
    def parse(cls, value: Union[str, "UserRole"]) -> "UserRole":
        """Parse a role name coming from storage or a request.

        Unknown values are rejected immediately instead of travelling
        through the business logic as plain strings.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as e:
            raise InvalidRoleError(value) from e
