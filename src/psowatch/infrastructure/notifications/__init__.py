"""Real-time notification adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from psowatch.infrastructure.notifications.logging_client import (
    LoggingNotificationClient,
)
from psowatch.infrastructure.notifications.pubsub_client import (
    PRESENCE_GROUP,
    PubSubNotificationClient,
    command_group,
)

if TYPE_CHECKING:
    from psowatch_config.settings import Settings

NotificationClient = Union[PubSubNotificationClient, LoggingNotificationClient]


def build_notification_client(settings: Settings) -> NotificationClient:
    """Pick the gateway client, or the logging client when pub/sub is off."""
    if not settings.pubsub_enabled:
        return LoggingNotificationClient()

    access_key = settings.pubsub_access_key
    return PubSubNotificationClient(
        base_url=settings.pubsub_base_url,
        hub=settings.pubsub_hub,
        access_key=access_key.get_secret_value() if access_key else None,
        timeout=settings.pubsub_timeout,
    )


__all__ = [
    "LoggingNotificationClient",
    "NotificationClient",
    "PRESENCE_GROUP",
    "PubSubNotificationClient",
    "build_notification_client",
    "command_group",
]
