from psowatch.infrastructure.persistence.sqlalchemy.models.audit.audit_log_model import (  # NOQA: E501
    AuditLogModel,
)

__all__ = ["AuditLogModel"]
