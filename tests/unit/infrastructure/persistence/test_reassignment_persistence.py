"""Supervisor reassignment end to end on a real database session."""

from types import SimpleNamespace

import pytest
import pytest_asyncio
from sqlalchemy import func, select

from psowatch.application.services import SupervisorReassignmentOrchestrator
from psowatch.domain.shared.exceptions import ValidationError
from psowatch.domain.user import SupervisorAssignment, UserRole
from psowatch.infrastructure.notifications import LoggingNotificationClient
from psowatch.infrastructure.persistence.sqlalchemy.models import AuditLogModel
from tests.shared.fixtures import TestUserFactory

CALLER_ID = TestUserFactory.ADMIN_EXTERNAL_ID


@pytest_asyncio.fixture
async def users(seed):
    admin, supervisor, alice, bob, carol = await seed(
        TestUserFactory.admin(),
        TestUserFactory.supervisor(),
        TestUserFactory.employee("alice@x.com"),
        TestUserFactory.employee("bob@x.com"),
        TestUserFactory.user("carol@x.com", UserRole.CONTACT_MANAGER),
    )
    return SimpleNamespace(admin=admin, supervisor=supervisor, alice=alice, bob=bob)


@pytest.fixture
def orchestrator(factory):
    client = LoggingNotificationClient()
    return SupervisorReassignmentOrchestrator.from_factory(factory, client, client)


@pytest.fixture
def supervisor_of(async_session, factory):
    async def _supervisor_of(email: str):
        async_session.expire_all()
        user = await factory.user_directory().find_by_email(email)
        return user.supervisor_id

    return _supervisor_of


@pytest.fixture
def audit_rows(async_session):
    async def _count() -> int:
        stmt = select(func.count()).select_from(AuditLogModel)
        return (await async_session.execute(stmt)).scalar_one()

    return _count


class TestReassignmentPersistence:
    @pytest.mark.asyncio
    async def test_reassignment_is_committed_and_audited(
        self, users, orchestrator, supervisor_of, audit_rows
    ):
        assignment = SupervisorAssignment.create(
            ["alice@x.com", "bob@x.com"], "sup@x.com"
        )

        result = await orchestrator.reassign_supervisor(CALLER_ID, assignment)

        assert result.affected_count == 2
        assert await supervisor_of("alice@x.com") == users.supervisor.id
        assert await supervisor_of("bob@x.com") == users.supervisor.id
        assert await audit_rows() == 2

    @pytest.mark.asyncio
    async def test_ineligible_target_leaves_everyone_untouched(
        self, users, orchestrator, supervisor_of, audit_rows
    ):
        assignment = SupervisorAssignment.create(
            ["alice@x.com", "carol@x.com", "bob@x.com"], "sup@x.com"
        )

        with pytest.raises(ValidationError):
            await orchestrator.reassign_supervisor(CALLER_ID, assignment)

        assert await supervisor_of("alice@x.com") is None
        assert await supervisor_of("bob@x.com") is None
        assert await audit_rows() == 0

    @pytest.mark.asyncio
    async def test_repeating_a_reassignment_writes_nothing_new(
        self, users, orchestrator, supervisor_of, audit_rows
    ):
        assignment = SupervisorAssignment.create(["alice@x.com"], "sup@x.com")

        await orchestrator.reassign_supervisor(CALLER_ID, assignment)
        repeat = await orchestrator.reassign_supervisor(CALLER_ID, assignment)

        assert repeat.affected_count == 1
        assert repeat.changed_count == 0
        assert await audit_rows() == 1
        assert await supervisor_of("alice@x.com") == users.supervisor.id
