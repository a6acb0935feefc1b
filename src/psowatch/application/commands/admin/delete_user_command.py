"""Soft-delete a user."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from psowatch.application.services import (
    AuditService,
    AuthorizationService,
    NotificationFanout,
)
from psowatch.application.services.session_boundary import (
    commit_core,
    commit_side_effects,
)
from psowatch.application.validation import parse_email
from psowatch.domain.shared.exceptions import ErrorCode
from psowatch.domain.user import (
    AuthError,
    RoleHierarchy,
    Unassign,
    UserDeletionError,
    UserDirectory,
    UserRole,
)

if TYPE_CHECKING:
    from psowatch.application.factories import RepositoryFactory
    from psowatch.application.ports import Notifier, PresenceBroadcaster

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserDeletionResult:
    """Result of a soft delete."""

    email: str
    previous_role: UserRole
    released_count: int = 0


class DeleteUserCommand:
    """Command to soft-delete a user (role Unassigned, ``deleted_at`` set)."""

    def __init__(  # NOQA: PLR0913
        self,
        user_directory: UserDirectory,
        authorization_service: AuthorizationService,
        notification_fanout: NotificationFanout,
        audit_service: AuditService,
        db_session: Optional[Any] = None,
    ):
        self._users = user_directory
        self._authorization = authorization_service
        self._fanout = notification_fanout
        self._audit = audit_service
        self._db_session = db_session

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
        notifier: Notifier,
        presence_broadcaster: PresenceBroadcaster,
    ) -> DeleteUserCommand:
        return cls(
            user_directory=factory.user_directory(),
            authorization_service=AuthorizationService.from_factory(factory),
            notification_fanout=NotificationFanout(notifier, presence_broadcaster),
            audit_service=AuditService.from_factory(factory),
            db_session=factory.session,
        )

    async def execute(self, caller_id: str, user_email: str) -> UserDeletionResult:
        caller = await self._authorization.require_role_change_allowed(
            caller_id, Unassign()
        )
        email = parse_email(user_email, "User email").value

        user = await self._users.find_by_email(email)
        if user is None:
            raise UserDeletionError(
                f"User {email} not found",
                ErrorCode.USER_NOT_FOUND,
                details={"email": email},
            )
        if not user.is_active or user.role == UserRole.UNASSIGNED:
            raise UserDeletionError(
                f"User {email} is already deleted",
                ErrorCode.USER_ALREADY_DELETED,
                details={"email": email},
            )
        if not RoleHierarchy.can_delete(caller.role, user.role):
            raise AuthError(
                f"Insufficient privileges to delete a {user.role.value} user",
                ErrorCode.INSUFFICIENT_PRIVILEGES,
                details={
                    "caller_role": caller.role.value,
                    "target_role": user.role.value,
                },
            )

        before = user.snapshot()
        previous_role = user.role
        was_supervisor = user.is_supervisor
        user.soft_delete()

        released = 0

        async def _write():
            nonlocal released
            await self._users.save(user)
            if was_supervisor:
                released = await self._users.release_supervised(user.id)

        await commit_core(
            self._db_session,
            _write,
            lambda e: UserDeletionError(
                f"Failed to delete user {email}",
                details={"email": email, "error": str(e)},
            ),
            logger,
        )
        logger.info(
            "User %s (%s) deleted by %s, %d supervised user(s) released",
            email,
            previous_role.value,
            caller.email,
            released,
        )

        await self._fanout.set_offline(email)
        if was_supervisor:
            await self._fanout.announce_supervisor_removed(user)

        await self._audit.record_user_deletion(caller.id, before)
        await commit_side_effects(self._db_session, logger)

        return UserDeletionResult(
            email=email,
            previous_role=previous_role,
            released_count=released,
        )
