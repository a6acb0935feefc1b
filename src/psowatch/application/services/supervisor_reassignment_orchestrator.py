"""Bulk supervisor reassignment.

The reassignment runs in two stages:

1. Core transaction - authorize the caller, validate every target and the
   new supervisor, then write all supervisor links as one atomic unit.
   Any failure here leaves every target untouched.
2. Side-effect batch - notify the affected PSOs and the presence group,
   then write one audit entry per changed user. Nothing in this stage can
   fail the call or undo stage 1.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Sequence
from uuid import UUID

from psowatch.application.services.audit_service import AuditService
from psowatch.application.services.authorization_service import AuthorizationService
from psowatch.application.services.notification_fanout import NotificationFanout
from psowatch.application.services.session_boundary import (
    commit_core,
    commit_side_effects,
)
from psowatch.application.validation import parse_email
from psowatch.domain.shared.exceptions import ErrorCode, ValidationError
from psowatch.domain.user import (
    SupervisorAssignment,
    SupervisorError,
    User,
    UserDirectory,
    UserRole,
)

if TYPE_CHECKING:
    from psowatch.application.factories import RepositoryFactory
    from psowatch.application.ports import Notifier, PresenceBroadcaster

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReassignmentResult:
    """Outcome of a reassignment.

    ``affected_count`` is what callers see: the number of users now under
    the requested supervisor. ``changed_count`` counts rows actually
    written (users already under that supervisor are left alone).
    """

    affected_count: int
    changed_count: int = 0

    @property
    def unchanged_count(self) -> int:
        return self.affected_count - self.changed_count


class SupervisorReassignmentOrchestrator:
    """Validates, persists and announces a bulk supervisor change."""

    def __init__(  # NOQA: PLR0913
        self,
        user_directory: UserDirectory,
        authorization_service: AuthorizationService,
        notification_fanout: NotificationFanout,
        audit_service: AuditService,
        db_session: Optional[Any] = None,
        log: Optional[logging.Logger] = None,
    ):
        self._users = user_directory
        self._authorization = authorization_service
        self._fanout = notification_fanout
        self._audit = audit_service
        self._db_session = db_session
        self._log = log or logger

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
        notifier: Notifier,
        presence_broadcaster: PresenceBroadcaster,
    ) -> SupervisorReassignmentOrchestrator:
        return cls(
            user_directory=factory.user_directory(),
            authorization_service=AuthorizationService.from_factory(factory),
            notification_fanout=NotificationFanout(notifier, presence_broadcaster),
            audit_service=AuditService.from_factory(factory),
            db_session=factory.session,
        )

    async def reassign_supervisor(
        self,
        caller_id: str,
        assignment: SupervisorAssignment,
    ) -> ReassignmentResult:
        caller = await self._authorization.require_can_manage_users(caller_id)

        emails = self._validate_emails(assignment.user_emails)
        supervisor = await self._resolve_new_supervisor(assignment.new_supervisor_email)
        targets = await self._resolve_targets(emails)

        new_supervisor_id = supervisor.id if supervisor else None
        changed = [t for t in targets if t.supervisor_id != new_supervisor_id]
        previous = {t.id: t.supervisor_id for t in changed}

        await self._persist(changed, new_supervisor_id)
        for target in changed:
            target.assign_supervisor(new_supervisor_id)

        self._log.info(
            "Caller %s reassigned %d user(s) to %s (%d changed)",
            caller.email,
            len(targets),
            supervisor.email if supervisor else "no supervisor",
            len(changed),
        )

        await self._fanout.notify_supervisor_change(assignment, targets, supervisor)
        await self._audit_changes(caller, changed, previous, new_supervisor_id)

        return ReassignmentResult(
            affected_count=len(targets),
            changed_count=len(changed),
        )

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    @staticmethod
    def _validate_emails(user_emails: Sequence[str]) -> list[str]:
        if not user_emails:
            raise ValidationError(
                "User emails are required",
                ErrorCode.EMPLOYEE_EMAIL_REQUIRED,
            )

        return [parse_email(raw, "User email").value for raw in user_emails]

    async def _resolve_new_supervisor(self, email: Optional[str]) -> Optional[User]:
        if email is None:
            return None

        supervisor_email = parse_email(email, "Supervisor email")
        supervisor = await self._users.find_by_email(supervisor_email.value)

        if supervisor is None:
            raise ValidationError(
                "Supervisor not found",
                ErrorCode.TARGET_USER_NOT_FOUND,
                details={"email": supervisor_email.value},
            )
        if not supervisor.is_active:
            raise ValidationError(
                "Supervisor is inactive",
                ErrorCode.TARGET_NOT_EMPLOYEE,
                details={"email": supervisor_email.value},
            )
        if supervisor.role != UserRole.SUPERVISOR:
            raise ValidationError(
                "Target is not a Supervisor",
                ErrorCode.TARGET_NOT_EMPLOYEE,
                details={
                    "email": supervisor_email.value,
                    "role": supervisor.role.value,
                },
            )
        return supervisor

    async def _resolve_targets(self, emails: Sequence[str]) -> list[User]:
        # The whole batch is rejected on the first ineligible target
        targets = []
        for email in emails:
            user = await self._users.find_by_email(email)
            if user is None or not user.is_active:
                raise ValidationError(
                    f"User {email} not found or inactive",
                    ErrorCode.TARGET_USER_NOT_FOUND,
                    details={"email": email},
                )
            if not user.is_employee:
                raise ValidationError(
                    f"User {email} is not an Employee",
                    ErrorCode.TARGET_NOT_EMPLOYEE,
                    details={"email": email, "role": user.role.value},
                )
            targets.append(user)
        return targets

    # -------------------------------------------------------------------------
    # Core transaction
    # -------------------------------------------------------------------------

    async def _persist(self, changed: Sequence[User], supervisor_id: Optional[UUID]):
        async def _write():
            if changed:
                await self._users.update_supervisors(
                    [user.id for user in changed],
                    supervisor_id,
                )

        await commit_core(
            self._db_session,
            _write,
            lambda e: SupervisorError(
                "Failed to change supervisor",
                details={
                    "user_ids": [str(user.id) for user in changed],
                    "error": str(e),
                },
            ),
            self._log,
        )

    # -------------------------------------------------------------------------
    # Side effects
    # -------------------------------------------------------------------------

    async def _audit_changes(
        self,
        caller: User,
        changed: Sequence[User],
        previous: dict[UUID, Optional[UUID]],
        supervisor_id: Optional[UUID],
    ):
        failures = 0
        for user in changed:
            recorded = await self._audit.record_supervisor_change(
                actor_id=caller.id,
                user_id=user.id,
                supervisor_before=previous[user.id],
                supervisor_after=supervisor_id,
            )
            failures += 0 if recorded else 1

        if changed and not await commit_side_effects(self._db_session, self._log):
            failures = len(changed)

        if failures:
            self._log.error(
                "Audit trail incomplete: %d of %d supervisor change(s) not recorded",
                failures,
                len(changed),
            )

