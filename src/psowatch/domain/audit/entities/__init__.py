from psowatch.domain.audit.entities.audit_entry import AuditAction, AuditEntry

__all__ = ["AuditAction", "AuditEntry"]
