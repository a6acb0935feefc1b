from fastapi import APIRouter

from psowatch.application.queries import ListSupervisorsQuery
from psowatch.application.services import SupervisorReassignmentOrchestrator
from psowatch.domain.user import SupervisorAssignment
from psowatch.presentation.api.dependencies import (
    CallerId,
    Notifications,
    RepoFactory,
)
from psowatch.presentation.api.schemas import (
    SupervisorReassignmentRequest,
    SupervisorReassignmentResponse,
    SupervisorResponse,
)

router = APIRouter(prefix="/supervisors", tags=["Supervisors"])


@router.post(
    "/reassignments",
    summary="Assign or unassign a supervisor for a batch of PSOs",
    responses={
        200: {"description": "All users reassigned"},
        400: {"description": "Invalid email or a target is not an Employee"},
        401: {"description": "Caller unknown or deleted"},
        403: {"description": "Caller may not manage users"},
        404: {"description": "A target user or the supervisor does not exist"},
        500: {"description": "Nothing was changed"},
    },
)
async def reassign_supervisor(
    request: SupervisorReassignmentRequest,
    caller_id: CallerId,
    factory: RepoFactory,
    notifications: Notifications,
) -> SupervisorReassignmentResponse:
    """
    Reassign every listed user to the new supervisor, or unassign them.

    The change is all-or-nothing. Notifications and audit entries are
    best effort and never fail the request.
    """
    orchestrator = SupervisorReassignmentOrchestrator.from_factory(
        factory,
        notifier=notifications,
        presence_broadcaster=notifications,
    )
    assignment = SupervisorAssignment.create(
        user_emails=request.user_emails,
        new_supervisor_email=request.new_supervisor_email,
    )
    result = await orchestrator.reassign_supervisor(caller_id, assignment)
    return SupervisorReassignmentResponse(affected_count=result.affected_count)


@router.get(
    "",
    summary="List active supervisors",
    responses={
        200: {"description": "Supervisors ordered by name"},
        401: {"description": "Caller unknown or deleted"},
        403: {"description": "Caller may not query users"},
    },
)
async def list_supervisors(
    caller_id: CallerId,
    factory: RepoFactory,
) -> list[SupervisorResponse]:
    query = ListSupervisorsQuery.from_factory(factory)
    supervisors = await query.execute(caller_id)
    return [SupervisorResponse.model_validate(s) for s in supervisors]
