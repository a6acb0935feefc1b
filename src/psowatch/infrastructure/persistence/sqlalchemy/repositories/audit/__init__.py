"""SQLAlchemy repository implementations for the audit trail."""

from psowatch.infrastructure.persistence.sqlalchemy.repositories.audit.audit_sink import (  # NOQA: E501
    AuditSinkSQLAlchemy,
)

__all__ = ["AuditSinkSQLAlchemy"]
