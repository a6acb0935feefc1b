"""Role hierarchy rules.

Roles are totally ordered by privilege::

    Unassigned(0) < Employee(1) < ContactManager(2) < Supervisor(3)
        < Admin(4) < SuperAdmin(5)

Everything in here is a pure function of role values.
"""

from typing import Mapping, Optional, Union

from psowatch.domain.user.value_objects import RoleChange, UserRole

ROLE_LEVELS: Mapping[UserRole, int] = {
    UserRole.UNASSIGNED: 0,
    UserRole.EMPLOYEE: 1,
    UserRole.CONTACT_MANAGER: 2,
    UserRole.SUPERVISOR: 3,
    UserRole.ADMIN: 4,
    UserRole.SUPER_ADMIN: 5,
}

# Lowest role allowed to unassign (soft delete) other users
DELETION_MIN_ROLE = UserRole.ADMIN


class RoleHierarchy:
    """Ordering and assignability table over user roles."""

    @staticmethod
    def level_of(role: UserRole) -> int:
        return ROLE_LEVELS[UserRole.parse(role)]

    @classmethod
    def can_assign(cls, caller_role: UserRole, target_role: UserRole) -> bool:
        return cls.level_of(caller_role) >= cls.level_of(target_role)

    @classmethod
    def assignable_roles(cls, caller_role: UserRole) -> frozenset[UserRole]:
        caller_level = cls.level_of(caller_role)
        return frozenset(
            role for role, level in ROLE_LEVELS.items() if level <= caller_level
        )

    @classmethod
    def can_unassign(cls, caller_role: UserRole) -> bool:
        return cls.level_of(caller_role) >= cls.level_of(DELETION_MIN_ROLE)

    @classmethod
    def can_delete(cls, caller_role: UserRole, target_role: UserRole) -> bool:
        """Caller may soft-delete only users strictly below their own level."""
        return cls.can_unassign(caller_role) and (
            cls.level_of(caller_role) > cls.level_of(target_role)
        )

    @classmethod
    def is_valid_role_assignment(
        cls,
        caller_role: UserRole,
        change: Union[RoleChange, UserRole, None],
    ) -> bool:
        """Whether ``caller_role`` may request ``change`` on any user.

        Supervisors may only hand out the Employee role. Unassigning
        requires at least Admin. Everyone else is bounded by their level.
        """
        change = _as_role_change(change)
        if change.is_unassign:
            return cls.can_unassign(caller_role)

        target_role = change.target_role
        if UserRole.parse(caller_role) == UserRole.SUPERVISOR:
            return target_role == UserRole.EMPLOYEE
        return cls.can_assign(caller_role, target_role)

    @classmethod
    def is_role_change_allowed(
        cls,
        caller_role: UserRole,
        current_role: Optional[UserRole],
        change: Union[RoleChange, UserRole, None],
    ) -> bool:
        """Like :meth:`is_valid_role_assignment`, but rejects no-op changes."""
        change = _as_role_change(change)
        if current_role is not None and change.target_role == current_role:
            return False
        return cls.is_valid_role_assignment(caller_role, change)


def _as_role_change(change: Union[RoleChange, UserRole, None]) -> RoleChange:
    if isinstance(change, RoleChange):
        return change
    return RoleChange.from_optional(change)
