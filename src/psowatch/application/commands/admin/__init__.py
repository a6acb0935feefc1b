from psowatch.application.commands.admin.change_user_role_command import (
    ChangeUserRoleCommand,
    RoleChangeResult,
)
from psowatch.application.commands.admin.delete_user_command import (
    DeleteUserCommand,
    UserDeletionResult,
)

__all__ = [
    "ChangeUserRoleCommand",
    "DeleteUserCommand",
    "RoleChangeResult",
    "UserDeletionResult",
]
