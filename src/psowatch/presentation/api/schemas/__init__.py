from psowatch.presentation.api.schemas.supervisors import (
    SupervisorReassignmentRequest,
    SupervisorReassignmentResponse,
    SupervisorResponse,
)
from psowatch.presentation.api.schemas.users import (
    ChangeRoleRequest,
    CurrentUserResponse,
    RoleChangeResponse,
    SignInRequest,
)

__all__ = [
    "ChangeRoleRequest",
    "CurrentUserResponse",
    "RoleChangeResponse",
    "SignInRequest",
    "SupervisorReassignmentRequest",
    "SupervisorReassignmentResponse",
    "SupervisorResponse",
]
