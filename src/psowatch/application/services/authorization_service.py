"""Authorization service.

Turns an opaque caller id (the identity provider's object id) into an
authorization decision. Every guard resolves the caller with a single read
and raises ``AuthError`` before any mutation happens.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Union

from psowatch.domain.shared.exceptions import ErrorCode
from psowatch.domain.user import (
    AuthError,
    CallerLookupFailure,
    Capability,
    RoleChange,
    RoleHierarchy,
    User,
    UserDirectory,
    UserRole,
)

if TYPE_CHECKING:
    from psowatch.application.factories import RepositoryFactory

logger = logging.getLogger(__name__)


class AuthorizationService:
    """Resolves callers and enforces role-based guards."""

    def __init__(self, user_directory: UserDirectory):
        self._users = user_directory

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> AuthorizationService:
        return cls(user_directory=factory.user_directory())

    async def resolve_caller(self, caller_id: str) -> User:
        """Return the active user behind ``caller_id``.

        Missing and soft-deleted callers both raise USER_NOT_FOUND so that
        clients cannot probe which accounts exist; ``AuthError.reason``
        tells them apart for diagnostics.
        """
        if not caller_id:
            raise AuthError(
                "Caller ID not found",
                ErrorCode.CALLER_ID_NOT_FOUND,
                reason=CallerLookupFailure.MISSING_ID,
            )

        user = await self._users.find_by_external_id(caller_id)
        if user is None:
            logger.info("Caller %s not found", caller_id)
            raise AuthError(
                "User not found",
                ErrorCode.USER_NOT_FOUND,
                reason=CallerLookupFailure.NOT_FOUND,
            )

        if not user.is_active:
            logger.info("Caller %s is deleted (user %s)", caller_id, user.id)
            raise AuthError(
                "User not found",
                ErrorCode.USER_NOT_FOUND,
                reason=CallerLookupFailure.DELETED,
            )

        return user

    async def require_active(self, caller_id: str) -> None:
        await self.resolve_caller(caller_id)

    async def require_capability(
        self,
        caller_id: str,
        capability: Capability,
        operation_label: str | None = None,
    ) -> User:
        caller = await self.resolve_caller(caller_id)
        label = operation_label or capability.value

        if not capability.allows(caller.role):
            logger.warning(
                "Caller %s (%s) denied: cannot %s",
                caller_id,
                caller.role.value,
                label,
            )
            raise AuthError(
                f"Insufficient privileges to {label}",
                ErrorCode.INSUFFICIENT_PRIVILEGES,
                details={"operation": label, "role": caller.role.value},
            )

        return caller

    async def require_can_manage_users(self, caller_id: str) -> User:
        return await self.require_capability(
            caller_id,
            Capability.MANAGE_USERS,
            "manage users",
        )

    async def require_role_change_allowed(
        self,
        caller_id: str,
        change: Union[RoleChange, UserRole, None],
    ) -> User:
        """Check that the caller may request ``change`` on some user.

        ``change`` may be given as a ``RoleChange`` or in the legacy form
        where ``None`` means unassign.
        """
        if not isinstance(change, RoleChange):
            change = RoleChange.from_optional(change)

        caller = await self.resolve_caller(caller_id)

        if caller.role == UserRole.SUPERVISOR and not change.is_unassign:
            if change.target_role != UserRole.EMPLOYEE:
                raise self._denied(
                    caller, change, "Supervisors may only assign Employee role"
                )

        if change.is_unassign and not Capability.DELETE_USERS.allows(caller.role):
            raise self._denied(caller, change, "Only Admins can delete users")

        if not Capability.MANAGE_USERS.allows(caller.role):
            raise self._denied(
                caller, change, "Insufficient privileges to change roles"
            )

        if not RoleHierarchy.is_valid_role_assignment(caller.role, change):
            raise self._denied(
                caller,
                change,
                f"Insufficient privileges to assign role {change.target_role.value}",
            )

        return caller

    @staticmethod
    def _denied(caller: User, change: RoleChange, message: str) -> AuthError:
        logger.warning(
            "Role change %s denied for caller %s (%s)",
            change,
            caller.id,
            caller.role.value,
        )
        return AuthError(
            message,
            ErrorCode.INSUFFICIENT_PRIVILEGES,
            details={"caller_role": caller.role.value, "change": str(change)},
        )
