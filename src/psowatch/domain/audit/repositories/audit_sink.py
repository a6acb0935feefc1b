"""Audit sink interface."""

from abc import ABC, abstractmethod

from psowatch.domain.audit.entities import AuditEntry


class AuditSink(ABC):
    """Append-only store for audit entries."""

    @abstractmethod
    async def record(self, entry: AuditEntry) -> None:
        """
        Persist a single audit entry.

        Entries are never updated or deleted once recorded.
        """
