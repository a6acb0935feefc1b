from psowatch.application.queries.user.list_supervisors_query import (
    ListSupervisorsQuery,
    SupervisorSummary,
)

__all__ = ["ListSupervisorsQuery", "SupervisorSummary"]
