from fastapi import APIRouter, status

from psowatch.application.commands import (
    ChangeUserRoleCommand,
    DeleteUserCommand,
    SignInCommand,
)
from psowatch.domain.user import UserRole
from psowatch.presentation.api.dependencies import (
    CallerId,
    Notifications,
    RepoFactory,
)
from psowatch.presentation.api.schemas import (
    ChangeRoleRequest,
    CurrentUserResponse,
    RoleChangeResponse,
    SignInRequest,
)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "/me",
    summary="Sign in the calling user",
    responses={
        200: {"description": "Caller resolved, linked or provisioned"},
        400: {"description": "Invalid email"},
        401: {"description": "Caller id missing or user deleted"},
    },
)
async def sign_in(
    request: SignInRequest,
    caller_id: CallerId,
    factory: RepoFactory,
) -> CurrentUserResponse:
    """
    Resolve the caller on first access.

    Links the caller id to the user with ``email`` (provisioning an
    Employee when no such user exists) and returns the profile.
    """
    result = await SignInCommand.from_factory(factory).execute(
        caller_id, request.email, request.full_name
    )
    return CurrentUserResponse(
        id=str(result.user.id),
        email=result.user.email,
        full_name=result.user.display_name,
        role=result.user.role.value,
        created=result.created,
    )


@router.patch(
    "/role",
    summary="Change a user's role",
    responses={
        200: {"description": "Role changed (user provisioned if unknown)"},
        400: {"description": "Invalid email or role"},
        401: {"description": "Caller unknown or deleted"},
        403: {"description": "Caller may not grant this role"},
        404: {"description": "User to unassign does not exist"},
        409: {"description": "User to unassign is already deleted"},
    },
)
async def change_role(
    request: ChangeRoleRequest,
    caller_id: CallerId,
    factory: RepoFactory,
    notifications: Notifications,
) -> RoleChangeResponse:
    """
    Set a user's role.

    A null ``role`` unassigns the user, which is the same soft delete as
    ``DELETE /users/{email}``.
    """
    if request.role is None:
        command = DeleteUserCommand.from_factory(factory, notifications, notifications)
        deleted = await command.execute(caller_id, request.user_email)
        return RoleChangeResponse(
            email=deleted.email,
            previous_role=deleted.previous_role.value,
            new_role=UserRole.UNASSIGNED.value,
        )

    command = ChangeUserRoleCommand.from_factory(factory, notifications, notifications)
    result = await command.execute(caller_id, request.user_email, request.role)
    return RoleChangeResponse(
        email=result.email,
        previous_role=result.previous_role.value if result.previous_role else None,
        new_role=result.new_role.value,
        user_created=result.user_created,
    )


@router.delete(
    "/{email}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Soft-delete a user",
    responses={
        204: {"description": "User deleted"},
        401: {"description": "Caller unknown or deleted"},
        403: {"description": "Caller may not delete this user"},
        404: {"description": "User not found"},
        409: {"description": "User already deleted"},
    },
)
async def delete_user(
    email: str,
    caller_id: CallerId,
    factory: RepoFactory,
    notifications: Notifications,
) -> None:
    """Soft-delete a user: role Unassigned, deletion time recorded."""
    command = DeleteUserCommand.from_factory(factory, notifications, notifications)
    await command.execute(caller_id, email)
