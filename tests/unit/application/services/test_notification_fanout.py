"""Unit tests for NotificationFanout."""

import logging
from datetime import datetime, timezone

import pytest

from psowatch.application.services import NotificationFanout
from psowatch.domain.user import SupervisorAssignment, UserRole
from tests.shared.fixtures import TestUserFactory


class TestNotifySupervisorChange:
    @pytest.fixture(autouse=True)
    def setup(self, notifier, broadcaster):
        self.notifier = notifier
        self.broadcaster = broadcaster
        self.fanout = NotificationFanout(notifier, broadcaster)
        self.supervisor = TestUserFactory.supervisor()
        self.targets = [
            TestUserFactory.employee("a@x.com", full_name="Ann"),
            TestUserFactory.employee("b@x.com", full_name="Ben"),
        ]
        self.assignment = SupervisorAssignment.create(
            ["a@x.com", "b@x.com"],
            "sup@x.com",
            timestamp=datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc),
        )

    @pytest.mark.asyncio
    async def test_reports_every_delivery(self):
        report = await self.fanout.notify_supervisor_change(
            self.assignment, self.targets, self.supervisor
        )

        assert report.succeeded == 3
        assert report.failed == 0
        assert [o.target for o in report.outcomes] == ["a@x.com", "b@x.com", "presence"]

    @pytest.mark.asyncio
    async def test_user_payload(self):
        await self.fanout.notify_supervisor_change(
            self.assignment, self.targets, self.supervisor
        )

        email, notification = self.notifier.send_to_user.await_args_list[0].args
        assert email == "a@x.com"
        assert notification.to_payload() == {
            "type": "SUPERVISOR_CHANGED",
            "newSupervisorName": "Sam Supervisor",
            "timestamp": "2026-03-01T09:30:00+00:00",
        }

    @pytest.mark.asyncio
    async def test_presence_payload(self):
        await self.fanout.notify_supervisor_change(
            self.assignment, self.targets, self.supervisor
        )

        broadcast = self.broadcaster.broadcast_supervisor_change.await_args.args[0]
        assert broadcast.to_payload() == {
            "psoEmails": ["a@x.com", "b@x.com"],
            "psoNames": ["Ann", "Ben"],
            "oldSupervisorEmail": None,
            "newSupervisorEmail": "sup@x.com",
            "newSupervisorId": TestUserFactory.SUPERVISOR_EXTERNAL_ID,
            "newSupervisorName": "Sam Supervisor",
        }

    @pytest.mark.asyncio
    async def test_failures_are_collected_not_raised(self, caplog):
        async def send(email, _notification):
            if email == "a@x.com":
                raise ConnectionError("refused")

        self.notifier.send_to_user.side_effect = send

        with caplog.at_level(logging.WARNING):
            report = await self.fanout.notify_supervisor_change(
                self.assignment, self.targets, self.supervisor
            )

        assert report.succeeded == 2
        assert [(o.target, o.error) for o in report.failures()] == [
            ("a@x.com", "refused")
        ]
        assert "Failed to notify a@x.com" in caplog.text

    @pytest.mark.asyncio
    async def test_no_targets_still_broadcasts(self):
        report = await self.fanout.notify_supervisor_change(
            self.assignment, [], self.supervisor
        )

        self.notifier.send_to_user.assert_not_awaited()
        assert report.succeeded == 1


class TestPresenceUpdates:
    @pytest.fixture(autouse=True)
    def setup(self, notifier, broadcaster):
        self.broadcaster = broadcaster
        self.fanout = NotificationFanout(notifier, broadcaster)

    @pytest.mark.asyncio
    async def test_set_offline(self):
        outcome = await self.fanout.set_offline("a@x.com")

        assert outcome.ok
        self.broadcaster.set_user_offline.assert_awaited_once_with("a@x.com")

    @pytest.mark.asyncio
    async def test_set_offline_failure(self):
        self.broadcaster.set_user_offline.side_effect = RuntimeError("503")

        outcome = await self.fanout.set_offline("a@x.com")

        assert not outcome.ok
        assert outcome.error == "503"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("action", ["added", "removed"])
    async def test_supervisor_list_change(self, action):
        supervisor = TestUserFactory.user(
            "jane.doe@x.com", UserRole.SUPERVISOR, "oid-jane"
        )
        announce = getattr(self.fanout, f"announce_supervisor_{action}")

        await announce(supervisor)

        change = self.broadcaster.broadcast_supervisor_list_changed.await_args.args[0]
        assert change.to_payload() == {
            "email": "jane.doe@x.com",
            "fullName": "jane doe",
            "azureAdObjectId": "oid-jane",
            "action": action,
        }
