from psowatch.domain.audit.repositories.audit_sink import AuditSink

__all__ = ["AuditSink"]
