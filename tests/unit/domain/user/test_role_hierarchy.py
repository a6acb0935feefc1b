"""Unit tests for RoleHierarchy and Capability."""

import pytest

from psowatch.domain.user import (
    Capability,
    RoleHierarchy,
    SetRole,
    Unassign,
    UserRole,
)

ORDERED_ROLES = [
    UserRole.UNASSIGNED,
    UserRole.EMPLOYEE,
    UserRole.CONTACT_MANAGER,
    UserRole.SUPERVISOR,
    UserRole.ADMIN,
    UserRole.SUPER_ADMIN,
]


class TestLevels:
    def test_levels_strictly_increase_along_role_order(self):
        levels = [RoleHierarchy.level_of(r) for r in ORDERED_ROLES]
        assert levels == sorted(levels)
        assert len(set(levels)) == len(levels)

    def test_level_of_accepts_role_names(self):
        assert RoleHierarchy.level_of("Supervisor") == 3

    def test_can_assign_equal_or_lower_roles(self):
        assert RoleHierarchy.can_assign(UserRole.ADMIN, UserRole.ADMIN)
        assert RoleHierarchy.can_assign(UserRole.ADMIN, UserRole.EMPLOYEE)
        assert not RoleHierarchy.can_assign(UserRole.ADMIN, UserRole.SUPER_ADMIN)

    def test_assignable_roles_of_admin(self):
        assert RoleHierarchy.assignable_roles(UserRole.ADMIN) == frozenset(
            ORDERED_ROLES[:5]
        )

    def test_assignable_roles_of_unassigned(self):
        assert RoleHierarchy.assignable_roles(UserRole.UNASSIGNED) == frozenset(
            {UserRole.UNASSIGNED}
        )


class TestRoleAssignmentRules:
    @pytest.mark.parametrize("role", ORDERED_ROLES[1:])
    def test_supervisor_may_only_set_employee(self, role):
        allowed = RoleHierarchy.is_valid_role_assignment(UserRole.SUPERVISOR, SetRole(role))
        assert allowed is (role == UserRole.EMPLOYEE)

    @pytest.mark.parametrize("role", ORDERED_ROLES[:4])
    def test_below_admin_cannot_unassign(self, role):
        assert not RoleHierarchy.is_valid_role_assignment(role, Unassign())

    @pytest.mark.parametrize("role", [UserRole.ADMIN, UserRole.SUPER_ADMIN])
    def test_admin_and_above_can_unassign(self, role):
        assert RoleHierarchy.is_valid_role_assignment(role, None)

    def test_admin_cannot_grant_super_admin(self):
        assert not RoleHierarchy.is_valid_role_assignment(
            UserRole.ADMIN, UserRole.SUPER_ADMIN
        )

    def test_super_admin_can_grant_super_admin(self):
        assert RoleHierarchy.is_valid_role_assignment(
            UserRole.SUPER_ADMIN, SetRole(UserRole.SUPER_ADMIN)
        )

    def test_role_change_to_current_role_is_rejected(self):
        assert not RoleHierarchy.is_role_change_allowed(
            UserRole.ADMIN, UserRole.EMPLOYEE, SetRole(UserRole.EMPLOYEE)
        )

    def test_role_change_for_new_user_follows_assignment_rules(self):
        assert RoleHierarchy.is_role_change_allowed(
            UserRole.SUPERVISOR, None, SetRole(UserRole.EMPLOYEE)
        )


class TestCanDelete:
    def test_admin_can_delete_supervisor(self):
        assert RoleHierarchy.can_delete(UserRole.ADMIN, UserRole.SUPERVISOR)

    def test_admin_cannot_delete_admin(self):
        assert not RoleHierarchy.can_delete(UserRole.ADMIN, UserRole.ADMIN)

    def test_supervisor_cannot_delete_employee(self):
        assert not RoleHierarchy.can_delete(UserRole.SUPERVISOR, UserRole.EMPLOYEE)

    def test_super_admin_can_delete_admin(self):
        assert RoleHierarchy.can_delete(UserRole.SUPER_ADMIN, UserRole.ADMIN)


class TestCapabilities:
    @pytest.mark.parametrize(
        ("capability", "allowed"),
        [
            (
                Capability.MANAGE_USERS,
                {UserRole.ADMIN, UserRole.SUPERVISOR, UserRole.SUPER_ADMIN},
            ),
            (Capability.DELETE_USERS, {UserRole.ADMIN, UserRole.SUPER_ADMIN}),
            (Capability.ACCESS_ADMIN, {UserRole.SUPER_ADMIN}),
            (
                Capability.ACCESS_STREAMING_STATUS,
                {UserRole.SUPER_ADMIN, UserRole.SUPERVISOR, UserRole.CONTACT_MANAGER},
            ),
        ],
    )
    def test_capability_role_sets(self, capability, allowed):
        assert {r for r in ORDERED_ROLES if capability.allows(r)} == allowed

    def test_contact_manager_cannot_manage_users(self):
        assert not Capability.MANAGE_USERS.allows(UserRole.CONTACT_MANAGER)
