"""SQLAlchemy repository factory for request-scoped repositories."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from psowatch.infrastructure.persistence.sqlalchemy.repositories.audit import (
    AuditSinkSQLAlchemy,
)
from psowatch.infrastructure.persistence.sqlalchemy.repositories.user import (
    UserDirectorySQLAlchemy,
)


class SQLAlchemyRepositoryFactory:
    """SQLAlchemy implementation of the RepositoryFactory Protocol."""

    def __init__(self, session: AsyncSession):
        self._session = session

        # Cached instances (created on demand)
        self._user_directory: UserDirectorySQLAlchemy | None = None
        self._audit_sink: AuditSinkSQLAlchemy | None = None

    @property
    def session(self) -> AsyncSession:
        return self._session

    def user_directory(self) -> UserDirectorySQLAlchemy:
        if self._user_directory is None:
            self._user_directory = UserDirectorySQLAlchemy(self._session)
        return self._user_directory

    def audit_sink(self) -> AuditSinkSQLAlchemy:
        if self._audit_sink is None:
            self._audit_sink = AuditSinkSQLAlchemy(self._session)
        return self._audit_sink
