"""Best-effort notification fan-out after a committed user change.

Runs only after the core change (reassignment, role change, deletion) is
committed. Every delivery is a single independent attempt: failures are
logged with the target and dropped. Nothing is retried and nothing is
raised to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional, Sequence

from psowatch.application.ports import (
    Notifier,
    PresenceBroadcaster,
    SupervisorChangeBroadcast,
    SupervisorListChange,
    UserNotification,
)
from psowatch.domain.user import SupervisorAssignment, SupervisorChangeType, User

logger = logging.getLogger(__name__)

PRESENCE_TARGET = "presence"
UNASSIGNED_SUPERVISOR_NAME = "Unassigned"


@dataclass(frozen=True)
class DeliveryOutcome:
    """Result of one delivery attempt."""

    target: str
    ok: bool
    error: Optional[str] = None


@dataclass
class FanoutReport:
    """Outcomes of one fan-out run (internal, for logs and tests)."""

    outcomes: list[DeliveryOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if not o.ok)

    def failures(self) -> list[DeliveryOutcome]:
        return [o for o in self.outcomes if not o.ok]


class NotificationFanout:
    """Notifies affected PSOs and the presence group of a supervisor change."""

    def __init__(
        self,
        notifier: Notifier,
        presence_broadcaster: PresenceBroadcaster,
        log: Optional[logging.Logger] = None,
    ):
        self._notifier = notifier
        self._broadcaster = presence_broadcaster
        self._log = log or logger

    async def notify_supervisor_change(
        self,
        assignment: SupervisorAssignment,
        targets: Sequence[User],
        new_supervisor: Optional[User],
    ) -> FanoutReport:
        supervisor_name = new_supervisor.display_name if new_supervisor else None
        notification = UserNotification(
            type=SupervisorChangeType.SUPERVISOR_CHANGED.value,
            data={
                "newSupervisorName": supervisor_name,
                "timestamp": assignment.timestamp.isoformat(),
            },
        )

        deliveries = [
            self._attempt(
                target.email,
                lambda email=target.email: self._notifier.send_to_user(
                    email, notification
                ),
            )
            for target in targets
        ]
        broadcast = SupervisorChangeBroadcast(
            pso_emails=tuple(t.email for t in targets),
            pso_names=tuple(t.display_name for t in targets),
            new_supervisor_email=assignment.new_supervisor_email,
            new_supervisor_id=new_supervisor.external_id if new_supervisor else None,
            new_supervisor_name=supervisor_name or UNASSIGNED_SUPERVISOR_NAME,
        )
        deliveries.append(
            self._attempt(
                PRESENCE_TARGET,
                lambda: self._broadcaster.broadcast_supervisor_change(broadcast),
            )
        )

        outcomes = await asyncio.gather(*deliveries)
        report = FanoutReport(outcomes=list(outcomes))

        self._log.info(
            "Supervisor change notifications: %d delivered, %d failed",
            report.succeeded,
            report.failed,
        )
        return report

    async def set_offline(self, email: str) -> DeliveryOutcome:
        return await self._attempt(
            email,
            lambda: self._broadcaster.set_user_offline(email),
        )

    async def announce_supervisor_added(self, supervisor: User) -> DeliveryOutcome:
        return await self._announce_list_change(supervisor, "added")

    async def announce_supervisor_removed(self, supervisor: User) -> DeliveryOutcome:
        return await self._announce_list_change(supervisor, "removed")

    async def _announce_list_change(
        self, supervisor: User, action: str
    ) -> DeliveryOutcome:
        change = SupervisorListChange(
            email=supervisor.email,
            full_name=supervisor.display_name,
            external_id=supervisor.external_id,
            action=action,
        )
        return await self._attempt(
            PRESENCE_TARGET,
            lambda: self._broadcaster.broadcast_supervisor_list_changed(change),
        )

    async def _attempt(
        self,
        target: str,
        deliver: Callable[[], Awaitable[None]],
    ) -> DeliveryOutcome:
        try:
            await deliver()
        except Exception as e:
            self._log.warning(
                "Failed to notify %s: %s",
                target,
                e,
            )
            return DeliveryOutcome(target=target, ok=False, error=str(e))
        return DeliveryOutcome(target=target, ok=True)
