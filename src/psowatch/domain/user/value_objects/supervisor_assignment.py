"""Supervisor assignment command value object."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional

from psowatch.domain.shared.time import ensure_tz_aware, utc_now


class SupervisorChangeType(str, Enum):
    """Kind of supervisor change carried by an assignment."""

    ASSIGN = "assign"
    UNASSIGN = "unassign"
    SUPERVISOR_CHANGED = "SUPERVISOR_CHANGED"


@dataclass(frozen=True)
class SupervisorAssignment:
    """
    Request to move a batch of users under a new supervisor.

    ``user_emails`` keeps the caller's order with duplicates removed and
    every address lower-cased. ``new_supervisor_email`` of ``None`` means
    the targets are unassigned. Emails are normalized here but not
    validated; format validation is done by the reassignment service so
    that it can report the proper error code.
    """

    user_emails: tuple[str, ...]
    new_supervisor_email: Optional[str] = None
    timestamp: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        seen: dict[str, None] = {}
        for email in self.user_emails:
            normalized = (email or "").strip().lower()
            seen.setdefault(normalized, None)
        object.__setattr__(self, "user_emails", tuple(seen))

        supervisor = self.new_supervisor_email
        supervisor = supervisor.strip().lower() if supervisor else None
        object.__setattr__(self, "new_supervisor_email", supervisor or None)
        object.__setattr__(self, "timestamp", ensure_tz_aware(self.timestamp))

    @classmethod
    def create(
        cls,
        user_emails: Iterable[str],
        new_supervisor_email: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> SupervisorAssignment:
        return cls(
            user_emails=tuple(user_emails),
            new_supervisor_email=new_supervisor_email,
            timestamp=timestamp or utc_now(),
        )

    @property
    def is_unassignment(self) -> bool:
        return self.new_supervisor_email is None

    @property
    def change_type(self) -> SupervisorChangeType:
        if self.is_unassignment:
            return SupervisorChangeType.UNASSIGN
        return SupervisorChangeType.ASSIGN
