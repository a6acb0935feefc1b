"""Application services - authorization, reassignment and side effects."""

from psowatch.application.services.audit_service import AuditService
from psowatch.application.services.authorization_service import AuthorizationService
from psowatch.application.services.notification_fanout import (
    DeliveryOutcome,
    FanoutReport,
    NotificationFanout,
)
from psowatch.application.services.supervisor_reassignment_orchestrator import (
    ReassignmentResult,
    SupervisorReassignmentOrchestrator,
)

__all__ = [
    "AuditService",
    "AuthorizationService",
    "DeliveryOutcome",
    "FanoutReport",
    "NotificationFanout",
    "ReassignmentResult",
    "SupervisorReassignmentOrchestrator",
]
