"""Audit recording for user changes.

Audit writes happen after the change they describe has been committed, so a
failure here cannot undo it. Failures are logged at ERROR level for
operators and reported back as ``False``; they are never raised.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional
from uuid import UUID

from psowatch.domain.audit import AuditAction, AuditEntry, AuditSink

if TYPE_CHECKING:
    from psowatch.application.factories import RepositoryFactory
    from psowatch.domain.user import User

logger = logging.getLogger("psowatch.audit")


class AuditService:
    """Writes audit entries for user changes, best effort."""

    def __init__(self, audit_sink: AuditSink, log: Optional[logging.Logger] = None):
        self._sink = audit_sink
        self._log = log or logger

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> AuditService:
        return cls(audit_sink=factory.audit_sink())

    async def record(self, entry: AuditEntry) -> bool:
        try:
            await self._sink.record(entry)
        except Exception as e:
            self._log.error(
                "Audit write failed for %s %s (%s by %s): %s",
                entry.entity,
                entry.entity_id,
                entry.action.value,
                entry.changed_by_id,
                e,
                exc_info=True,
            )
            return False
        return True

    async def record_supervisor_change(
        self,
        actor_id: UUID,
        user_id: UUID,
        supervisor_before: Optional[UUID],
        supervisor_after: Optional[UUID],
    ) -> bool:
        return await self.record(
            AuditEntry.supervisor_change(
                user_id=user_id,
                changed_by_id=actor_id,
                supervisor_before=supervisor_before,
                supervisor_after=supervisor_after,
            )
        )

    async def record_role_change(
        self,
        actor_id: UUID,
        before: Optional[dict[str, Any]],
        user_after: User,
    ) -> bool:
        return await self.record(
            AuditEntry(
                entity="User",
                entity_id=str(user_after.id),
                action=AuditAction.ROLE_CHANGE,
                changed_by_id=actor_id,
                data_before=before,
                data_after=user_after.snapshot(),
            )
        )

    async def record_user_deletion(
        self,
        actor_id: UUID,
        before: dict[str, Any],
    ) -> bool:
        return await self.record(
            AuditEntry(
                entity="User",
                entity_id=before["id"],
                action=AuditAction.DELETE,
                changed_by_id=actor_id,
                data_before=before,
            )
        )
