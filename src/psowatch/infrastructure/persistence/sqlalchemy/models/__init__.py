"""SQLAlchemy models for persistence layer."""

from psowatch.infrastructure.persistence.sqlalchemy.models.audit import AuditLogModel
from psowatch.infrastructure.persistence.sqlalchemy.models.base import Base
from psowatch.infrastructure.persistence.sqlalchemy.models.user import UserModel

__all__ = [
    "AuditLogModel",
    "Base",
    "UserModel",
]
