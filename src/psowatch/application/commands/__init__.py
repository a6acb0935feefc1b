"""Application commands - write operations on users."""

from psowatch.application.commands.admin import (
    ChangeUserRoleCommand,
    DeleteUserCommand,
    RoleChangeResult,
    UserDeletionResult,
)
from psowatch.application.commands.auth import SignInCommand, SignInResult

__all__ = [
    "ChangeUserRoleCommand",
    "DeleteUserCommand",
    "RoleChangeResult",
    "SignInCommand",
    "SignInResult",
    "UserDeletionResult",
]
