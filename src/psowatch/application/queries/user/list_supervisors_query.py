"""List supervisors query - feeds the supervisor picker."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from psowatch.application.services import AuthorizationService
from psowatch.domain.user import Capability, User, UserDirectory, UserRole

if TYPE_CHECKING:
    from psowatch.application.factories import RepositoryFactory


@dataclass(frozen=True)
class SupervisorSummary:
    email: str
    full_name: str
    external_id: Optional[str]

    @classmethod
    def from_user(cls, user: User) -> SupervisorSummary:
        return cls(
            email=user.email,
            full_name=user.display_name,
            external_id=user.external_id,
        )


class ListSupervisorsQuery:
    """Query to list active supervisors."""

    def __init__(
        self,
        user_directory: UserDirectory,
        authorization_service: AuthorizationService,
    ):
        self._users = user_directory
        self._authorization = authorization_service

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> ListSupervisorsQuery:
        return cls(
            user_directory=factory.user_directory(),
            authorization_service=AuthorizationService.from_factory(factory),
        )

    async def execute(self, caller_id: str) -> list[SupervisorSummary]:
        await self._authorization.require_capability(
            caller_id,
            Capability.QUERY_USERS,
            "list supervisors",
        )
        supervisors = await self._users.list_by_role(UserRole.SUPERVISOR)
        return [SupervisorSummary.from_user(s) for s in supervisors]
