"""SQLAlchemy repository implementations."""

from psowatch.infrastructure.persistence.sqlalchemy.repositories.audit import (
    AuditSinkSQLAlchemy,
)
from psowatch.infrastructure.persistence.sqlalchemy.repositories.factory import (
    SQLAlchemyRepositoryFactory,
)
from psowatch.infrastructure.persistence.sqlalchemy.repositories.user import (
    UserDirectorySQLAlchemy,
)

__all__ = [
    "AuditSinkSQLAlchemy",
    "SQLAlchemyRepositoryFactory",
    "UserDirectorySQLAlchemy",
]
