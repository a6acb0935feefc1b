"""Repository factory protocol for application layer."""

from __future__ import annotations

from typing import Any, Protocol

from psowatch.domain.audit import AuditSink
from psowatch.domain.user import UserDirectory


class RepositoryFactory(Protocol):
    """Protocol for creating request-scoped repositories."""

    @property
    def session(self) -> Any:
        """Get the database session for transaction management.

        The type is intentionally `Any` to avoid coupling the
        application layer to specific database implementations.
        """
        ...

    def user_directory(self) -> UserDirectory:
        """Get user directory."""
        ...

    def audit_sink(self) -> AuditSink:
        """Get audit sink."""
        ...
