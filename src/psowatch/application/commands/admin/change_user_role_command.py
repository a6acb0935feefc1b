"""Change a user's role, provisioning the user by email when absent."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Union

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
from psowatch.domain.shared.exceptions import ErrorCode, ValidationError
from psowatch.domain.user import (
    AuthError,
    InvalidRoleError,
    RoleHierarchy,
    SetRole,
    User,
    UserDirectory,
    UserRole,
    UserRoleChangeError,
)

if TYPE_CHECKING:
    from psowatch.application.factories import RepositoryFactory
    from psowatch.application.ports import Notifier, PresenceBroadcaster

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoleChangeResult:
    """Result of a role change."""

    email: str
    previous_role: Optional[UserRole]
    new_role: UserRole
    user_created: bool = False
    changed: bool = True


class ChangeUserRoleCommand:
    """Command to set a user's role."""

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
    ) -> ChangeUserRoleCommand:
        return cls(
            user_directory=factory.user_directory(),
            authorization_service=AuthorizationService.from_factory(factory),
            notification_fanout=NotificationFanout(notifier, presence_broadcaster),
            audit_service=AuditService.from_factory(factory),
            db_session=factory.session,
        )

    async def execute(
        self,
        caller_id: str,
        user_email: str,
        new_role: Union[str, UserRole],
    ) -> RoleChangeResult:
        try:
            role = UserRole.parse(new_role)
        except InvalidRoleError as e:
            raise ValidationError(
                str(e), ErrorCode.INVALID_ROLE_ASSIGNMENT, details={"role": e.value}
            ) from e
        if role == UserRole.UNASSIGNED:
            raise ValidationError(
                "Unassigning a role is done by deleting the user",
                ErrorCode.INVALID_ROLE_ASSIGNMENT,
            )

        caller = await self._authorization.require_role_change_allowed(
            caller_id, SetRole(role)
        )
        email = parse_email(user_email, "User email").value

        user = await self._users.find_by_email(email)
        if user is None:
            return await self._provision(caller, email, role)

        previous_role = user.role
        if user.is_active and previous_role == role:
            return RoleChangeResult(
                email=email,
                previous_role=previous_role,
                new_role=role,
                changed=False,
            )

        if user.is_active and not RoleHierarchy.can_assign(caller.role, previous_role):
            raise AuthError(
                f"Insufficient privileges to modify a {previous_role.value} user",
                ErrorCode.INSUFFICIENT_PRIVILEGES,
                details={
                    "caller_role": caller.role.value,
                    "target_role": previous_role.value,
                },
            )

        before = user.snapshot()
        was_supervisor = user.is_active and user.is_supervisor
        if not user.is_active:
            user.restore()
        user.change_role(role)

        async def _write():
            await self._users.save(user)
            if was_supervisor and not user.is_supervisor:
                released = await self._users.release_supervised(user.id)
                logger.info("Released %d user(s) from supervisor %s", released, email)

        await commit_core(self._db_session, _write, _role_change_failed(email), logger)

        logger.info(
            "Role of %s changed %s -> %s by %s",
            email,
            previous_role.value,
            role.value,
            caller.email,
        )

        await self._after_change(caller, user, before, was_supervisor)
        return RoleChangeResult(email=email, previous_role=previous_role, new_role=role)

    async def _provision(
        self, caller: User, email: str, role: UserRole
    ) -> RoleChangeResult:
        user = User.create(email, role=role)

        await commit_core(
            self._db_session,
            lambda: self._users.save(user),
            _role_change_failed(email),
            logger,
        )
        logger.info("Provisioned %s as %s (by %s)", email, role.value, caller.email)

        await self._after_change(caller, user, None, was_supervisor=False)
        return RoleChangeResult(
            email=email,
            previous_role=None,
            new_role=role,
            user_created=True,
        )

    async def _after_change(
        self,
        caller: User,
        user: User,
        before: Optional[dict[str, Any]],
        was_supervisor: bool,
    ):
        # Employees are moved out of the elevated dashboards
        if user.is_employee:
            await self._fanout.set_offline(user.email)

        if user.is_supervisor and not was_supervisor:
            await self._fanout.announce_supervisor_added(user)
        elif was_supervisor and not user.is_supervisor:
            await self._fanout.announce_supervisor_removed(user)

        await self._audit.record_role_change(caller.id, before, user)
        await commit_side_effects(self._db_session, logger)


def _role_change_failed(email: str):
    def to_error(e: Exception) -> UserRoleChangeError:
        return UserRoleChangeError(
            f"Failed to update role for {email}",
            details={"email": email, "error": str(e)},
        )

    return to_error
