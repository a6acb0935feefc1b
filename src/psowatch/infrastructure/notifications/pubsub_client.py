"""HTTP client for the pub/sub gateway.

Messages are posted to ``{base_url}/groups/{group}/messages``. Each user
listens on ``commands:{email}``; dashboards listen on ``presence``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from psowatch.application.ports import (
    Notifier,
    PresenceBroadcaster,
    SupervisorChangeBroadcast,
    SupervisorListChange,
    UserNotification,
)
from psowatch.domain.shared.time import utc_now

logger = logging.getLogger(__name__)

PRESENCE_GROUP = "presence"


def command_group(email: str) -> str:
    return f"commands:{email}"


class PubSubNotificationClient(Notifier, PresenceBroadcaster):
    """HTTP client wrapper for the pub/sub gateway API.

    Delivery failures are raised (``httpx.HTTPError``); the notification
    fan-out decides what to do with them.
    """

    def __init__(
        self,
        base_url: str,
        hub: str,
        access_key: Optional[str] = None,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._hub = hub
        self._access_key = access_key
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {}
            if self._access_key:
                headers["Authorization"] = f"Bearer {self._access_key}"
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    # -------------------------------------------------------------------------
    # Notifier
    # -------------------------------------------------------------------------

    async def send_to_user(self, email: str, notification: UserNotification) -> None:
        await self._send(command_group(email), notification.to_payload())

    # -------------------------------------------------------------------------
    # PresenceBroadcaster
    # -------------------------------------------------------------------------

    async def broadcast_supervisor_change(
        self,
        details: SupervisorChangeBroadcast,
    ) -> None:
        await self._send(
            PRESENCE_GROUP,
            {
                "type": "supervisor_change_notification",
                "data": details.to_payload(),
                "timestamp": utc_now().isoformat(),
            },
        )

    async def broadcast_supervisor_list_changed(
        self,
        details: SupervisorListChange,
    ) -> None:
        await self._send(
            PRESENCE_GROUP,
            {
                "type": "supervisor_list_changed",
                "data": details.to_payload(),
                "timestamp": utc_now().isoformat(),
            },
        )

    async def set_user_offline(self, email: str) -> None:
        await self._send(
            PRESENCE_GROUP,
            {
                "type": "presence",
                "user": {
                    "email": email,
                    "status": "offline",
                    "lastSeenAt": utc_now().isoformat(),
                },
            },
        )

    async def _send(self, group: str, message: dict[str, Any]) -> None:
        client = await self._get_client()
        response = await client.post(
            f"/groups/{group}/messages",
            params={"hub": self._hub},
            json=message,
        )
        response.raise_for_status()
        logger.debug("Sent %s to group %s", message.get("type"), group)
