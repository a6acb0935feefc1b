"""SQLAlchemy implementation of AuditSink."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from psowatch.domain.audit import AuditEntry, AuditSink
from psowatch.infrastructure.persistence.sqlalchemy.models.audit import AuditLogModel

logger = logging.getLogger(__name__)


class AuditSinkSQLAlchemy(AuditSink):
    """Writes audit entries to the ``audit_log`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def record(self, entry: AuditEntry):
        model = AuditLogModel(
            id=entry.id,
            entity=entry.entity,
            entity_id=entry.entity_id,
            action=entry.action.value,
            changed_by_id=entry.changed_by_id,
            data_before=entry.data_before,
            data_after=entry.data_after,
            timestamp=entry.timestamp,
        )
        self._session.add(model)
        await self._session.flush()
        logger.debug(
            "Recorded audit %s for %s %s",
            entry.action.value,
            entry.entity,
            entry.entity_id,
        )
