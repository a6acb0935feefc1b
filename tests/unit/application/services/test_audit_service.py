"""Unit tests for AuditService."""

import logging
from uuid import uuid4

import pytest

from psowatch.application.services import AuditService
from psowatch.domain.audit import AuditAction
from psowatch.domain.user import UserRole
from tests.shared.fixtures import TestUserFactory


class TestAuditService:
    @pytest.fixture(autouse=True)
    def setup(self, audit_sink):
        self.sink = audit_sink
        self.service = AuditService(audit_sink)
        self.actor_id = uuid4()

    @pytest.mark.asyncio
    async def test_supervisor_change_entry(self):
        user_id, before, after = uuid4(), None, uuid4()

        assert await self.service.record_supervisor_change(
            self.actor_id, user_id, before, after
        )

        entry = self.sink.record.await_args.args[0]
        assert entry.entity == "User"
        assert entry.entity_id == str(user_id)
        assert entry.action == AuditAction.SUPERVISOR_CHANGE
        assert entry.changed_by_id == self.actor_id
        assert entry.data_before == {"supervisorId": None}
        assert entry.data_after == {"supervisorId": str(after)}

    @pytest.mark.asyncio
    async def test_role_change_entry_snapshots_user(self):
        user = TestUserFactory.employee("a@x.com")
        before = user.snapshot()
        user.change_role(UserRole.SUPERVISOR)

        await self.service.record_role_change(self.actor_id, before, user)

        entry = self.sink.record.await_args.args[0]
        assert entry.action == AuditAction.ROLE_CHANGE
        assert entry.data_before["role"] == "Employee"
        assert entry.data_after["role"] == "Supervisor"

    @pytest.mark.asyncio
    async def test_deletion_entry_has_no_after_data(self):
        user = TestUserFactory.employee("a@x.com")

        await self.service.record_user_deletion(self.actor_id, user.snapshot())

        entry = self.sink.record.await_args.args[0]
        assert entry.action == AuditAction.DELETE
        assert entry.entity_id == str(user.id)
        assert entry.data_after is None

    @pytest.mark.asyncio
    async def test_sink_failure_returns_false(self, caplog):
        self.sink.record.side_effect = RuntimeError("disk full")

        with caplog.at_level(logging.ERROR, logger="psowatch.audit"):
            recorded = await self.service.record_supervisor_change(
                self.actor_id, uuid4(), None, None
            )

        assert recorded is False
        assert "Audit write failed" in caplog.text
