"""Notification ports for application layer.

These abstract the real-time delivery channels (per-user command groups and
the shared presence group) so the application layer stays independent of
the pub/sub transport.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class SupervisorChangeBroadcast:
    """Details broadcast to the presence group after a supervisor change."""

    pso_emails: tuple[str, ...]
    pso_names: tuple[str, ...]
    new_supervisor_email: Optional[str]
    new_supervisor_id: Optional[str]
    new_supervisor_name: str
    old_supervisor_email: Optional[str] = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "psoEmails": list(self.pso_emails),
            "psoNames": list(self.pso_names),
            "oldSupervisorEmail": self.old_supervisor_email,
            "newSupervisorEmail": self.new_supervisor_email or "",
            "newSupervisorId": self.new_supervisor_id,
            "newSupervisorName": self.new_supervisor_name,
        }


@dataclass(frozen=True)
class SupervisorListChange:
    """A supervisor was added to or removed from the supervisor list."""

    email: str
    full_name: str
    external_id: Optional[str]
    action: str  # "added" | "removed"

    def to_payload(self) -> dict[str, Any]:
        return {
            "email": self.email,
            "fullName": self.full_name,
            "azureAdObjectId": self.external_id,
            "action": self.action,
        }


@dataclass(frozen=True)
class UserNotification:
    """Message delivered to a single user's command channel."""

    type: str
    data: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        return {"type": self.type, **self.data}


class Notifier(ABC):
    """Best-effort delivery of messages to individual users."""

    @abstractmethod
    async def send_to_user(self, email: str, notification: UserNotification) -> None:
        """Send ``notification`` to the user identified by ``email``.

        Raises on delivery failure; callers decide whether that is fatal.
        """


class PresenceBroadcaster(ABC):
    """Broadcasts to every connected client of the presence group."""

    @abstractmethod
    async def broadcast_supervisor_change(
        self,
        details: SupervisorChangeBroadcast,
    ) -> None:
        """Tell dashboards that PSOs moved to a different supervisor."""

    @abstractmethod
    async def broadcast_supervisor_list_changed(
        self,
        details: SupervisorListChange,
    ) -> None:
        """Tell dashboards that the list of supervisors changed."""

    @abstractmethod
    async def set_user_offline(self, email: str) -> None:
        """Mark a user offline in the presence group."""
