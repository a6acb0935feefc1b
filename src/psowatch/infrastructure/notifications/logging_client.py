"""Notification client used when the pub/sub gateway is disabled."""

import logging

from psowatch.application.ports import (
    Notifier,
    PresenceBroadcaster,
    SupervisorChangeBroadcast,
    SupervisorListChange,
    UserNotification,
)

logger = logging.getLogger(__name__)


class LoggingNotificationClient(Notifier, PresenceBroadcaster):
    """Logs every message instead of delivering it."""

    async def send_to_user(self, email: str, notification: UserNotification) -> None:
        logger.info("[pubsub disabled] to %s: %s", email, notification.to_payload())

    async def broadcast_supervisor_change(
        self,
        details: SupervisorChangeBroadcast,
    ) -> None:
        logger.info("[pubsub disabled] supervisor change: %s", details.to_payload())

    async def broadcast_supervisor_list_changed(
        self,
        details: SupervisorListChange,
    ) -> None:
        logger.info("[pubsub disabled] supervisor list: %s", details.to_payload())

    async def set_user_offline(self, email: str) -> None:
        logger.info("[pubsub disabled] %s offline", email)

    async def close(self) -> None:
        return None
