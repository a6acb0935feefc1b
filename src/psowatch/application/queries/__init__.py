"""Application queries - read operations on users."""

from psowatch.application.queries.user import ListSupervisorsQuery, SupervisorSummary

__all__ = ["ListSupervisorsQuery", "SupervisorSummary"]
