"""SQLAlchemy model for audit trail entries."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import JSON

from psowatch.domain.shared.time import utc_now
from psowatch.infrastructure.persistence.sqlalchemy.models.base import Base


class AuditLogModel(Base):
    """
    Append-only audit log row.

    Rows are never updated, so there is no ``updated_at``. Before/after
    snapshots are stored as JSON.

    Table: audit_log
    """

    __tablename__ = "audit_log"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    entity: Mapped[str] = mapped_column(String(64), nullable=False)
    entity_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    action: Mapped[str] = mapped_column(String(32), nullable=False)
    changed_by_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    data_before: Mapped[Optional[dict[str, Any]]] = mapped_column(
        JSON,
        nullable=True,
    )
    data_after: Mapped[Optional[dict[str, Any]]] = mapped_column(
        JSON,
        nullable=True,
    )
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<AuditLogModel(id={self.id}, entity={self.entity}, "
            f"entity_id={self.entity_id}, action={self.action})>"
        )
