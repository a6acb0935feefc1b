from psowatch.application.ports.notifications import (
    Notifier,
    PresenceBroadcaster,
    SupervisorChangeBroadcast,
    SupervisorListChange,
    UserNotification,
)

__all__ = [
    "Notifier",
    "PresenceBroadcaster",
    "SupervisorChangeBroadcast",
    "SupervisorListChange",
    "UserNotification",
]
