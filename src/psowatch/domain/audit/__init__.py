"""Audit domain - append-only change records."""

from psowatch.domain.audit.entities import AuditAction, AuditEntry
from psowatch.domain.audit.repositories import AuditSink

__all__ = ["AuditAction", "AuditEntry", "AuditSink"]
