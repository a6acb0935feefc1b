"""Audit trail entry."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from psowatch.domain.shared.time import utc_now


class AuditAction(str, Enum):
    """Action tags written to the audit trail."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    ROLE_CHANGE = "ROLE_CHANGE"
    SUPERVISOR_CHANGE = "SUPERVISOR_CHANGE"


@dataclass(frozen=True)
class AuditEntry:
    """
    Append-only record of a change made by an acting user.

    ``data_before`` and ``data_after`` are JSON-compatible snapshots
    (``None`` when the entity did not exist before or after the change).
    """

    entity: str
    entity_id: str
    action: AuditAction
    changed_by_id: UUID
    data_before: Optional[dict[str, Any]] = None
    data_after: Optional[dict[str, Any]] = None
    timestamp: datetime = field(default_factory=utc_now)
    id: UUID = field(default_factory=uuid4)

    @classmethod
    def supervisor_change(
        cls,
        user_id: UUID,
        changed_by_id: UUID,
        supervisor_before: Optional[UUID],
        supervisor_after: Optional[UUID],
    ) -> AuditEntry:
        return cls(
            entity="User",
            entity_id=str(user_id),
            action=AuditAction.SUPERVISOR_CHANGE,
            changed_by_id=changed_by_id,
            data_before={"supervisorId": _str_or_none(supervisor_before)},
            data_after={"supervisorId": _str_or_none(supervisor_after)},
        )


def _str_or_none(value: Optional[UUID]) -> Optional[str]:
    return str(value) if value is not None else None
