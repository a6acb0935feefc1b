"""API tests for the supervisor endpoints."""

import pytest
from sqlalchemy import func, select

from psowatch.infrastructure.persistence.sqlalchemy.models import (
    AuditLogModel,
    UserModel,
)
from tests.shared.fixtures import TestUserFactory

ADMIN = {"X-Caller-Id": TestUserFactory.ADMIN_EXTERNAL_ID}


async def _supervisor_ids(session) -> dict[str, object]:
    session.expire_all()
    rows = (await session.execute(select(UserModel))).scalars().all()
    return {row.email: row.supervisor_id for row in rows}


class TestReassignSupervisorEndpoint:
    @pytest.mark.asyncio
    async def test_reassigns_batch(
        self, client, api_v1_prefix, users, async_session, notifications
    ):
        response = await client.post(
            f"{api_v1_prefix}/supervisors/reassignments",
            json={
                "userEmails": ["alice@x.com", "bob@x.com"],
                "newSupervisorEmail": "sup@x.com",
            },
            headers=ADMIN,
        )

        assert response.status_code == 200
        assert response.json() == {"affected_count": 2}
        supervisors = await _supervisor_ids(async_session)
        assert supervisors["alice@x.com"] == users.supervisor.id
        assert supervisors["bob@x.com"] == users.supervisor.id
        assert notifications.send_to_user.await_count == 2
        notifications.broadcast_supervisor_change.assert_awaited_once()
        audit_count = (
            await async_session.execute(
                select(func.count()).select_from(AuditLogModel)
            )
        ).scalar_one()
        assert audit_count == 2

    @pytest.mark.asyncio
    async def test_accepts_snake_case_and_unassigns(
        self, client, api_v1_prefix, users, async_session
    ):
        await client.post(
            f"{api_v1_prefix}/supervisors/reassignments",
            json={"user_emails": ["alice@x.com"], "new_supervisor_email": "sup@x.com"},
            headers=ADMIN,
        )

        response = await client.post(
            f"{api_v1_prefix}/supervisors/reassignments",
            json={"user_emails": ["alice@x.com"], "new_supervisor_email": None},
            headers={"X-Caller-Id": TestUserFactory.SUPERVISOR_EXTERNAL_ID},
        )

        assert response.status_code == 200
        assert (await _supervisor_ids(async_session))["alice@x.com"] is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("body", "status_code", "code"),
        [
            (
                {"userEmails": ["alice@x.com", "carol@x.com"], "newSupervisorEmail": "sup@x.com"},
                400,
                "TARGET_NOT_EMPLOYEE",
            ),
            (
                {"userEmails": ["alice@x.com"], "newSupervisorEmail": "bob@x.com"},
                400,
                "TARGET_NOT_EMPLOYEE",
            ),
            (
                {"userEmails": ["not-an-email"], "newSupervisorEmail": "sup@x.com"},
                400,
                "INVALID_EMAIL_FORMAT",
            ),
            (
                {"userEmails": [], "newSupervisorEmail": "sup@x.com"},
                400,
                "EMPLOYEE_EMAIL_REQUIRED",
            ),
            (
                {"userEmails": ["alice@x.com", "ghost@x.com"], "newSupervisorEmail": "sup@x.com"},
                404,
                "TARGET_USER_NOT_FOUND",
            ),
            (
                {"userEmails": ["gone@x.com"], "newSupervisorEmail": "sup@x.com"},
                404,
                "TARGET_USER_NOT_FOUND",
            ),
        ],
    )
    async def test_rejections_change_nothing(  # NOQA: PLR0913
        self,
        client,
        api_v1_prefix,
        users,
        async_session,
        notifications,
        body,
        status_code,
        code,
    ):
        response = await client.post(
            f"{api_v1_prefix}/supervisors/reassignments", json=body, headers=ADMIN
        )

        assert response.status_code == status_code
        assert response.json()["code"] == code
        assert "detail" in response.json()
        supervisors = await _supervisor_ids(async_session)
        assert supervisors["alice@x.com"] is None
        notifications.send_to_user.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_caller_header(self, client, api_v1_prefix, users):
        response = await client.post(
            f"{api_v1_prefix}/supervisors/reassignments",
            json={"userEmails": ["alice@x.com"], "newSupervisorEmail": "sup@x.com"},
        )

        assert response.status_code == 401
        assert response.json()["code"] == "CALLER_ID_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_unknown_caller(self, client, api_v1_prefix, users):
        response = await client.post(
            f"{api_v1_prefix}/supervisors/reassignments",
            json={"userEmails": ["alice@x.com"], "newSupervisorEmail": "sup@x.com"},
            headers={"X-Caller-Id": "oid-nobody"},
        )

        assert response.status_code == 401
        assert response.json()["code"] == "USER_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_employee_caller_is_forbidden(self, client, api_v1_prefix, users):
        response = await client.post(
            f"{api_v1_prefix}/supervisors/reassignments",
            json={"userEmails": ["bob@x.com"], "newSupervisorEmail": "sup@x.com"},
            headers={"X-Caller-Id": "oid-alice"},
        )

        assert response.status_code == 403
        assert response.json()["code"] == "INSUFFICIENT_PRIVILEGES"


class TestListSupervisorsEndpoint:
    @pytest.mark.asyncio
    async def test_lists_supervisors(self, client, api_v1_prefix, users):
        response = await client.get(f"{api_v1_prefix}/supervisors", headers=ADMIN)

        assert response.status_code == 200
        assert response.json() == [
            {
                "email": "sup@x.com",
                "full_name": "Sam Supervisor",
                "external_id": TestUserFactory.SUPERVISOR_EXTERNAL_ID,
            }
        ]

    @pytest.mark.asyncio
    async def test_employee_may_not_list(self, client, api_v1_prefix, users):
        response = await client.get(
            f"{api_v1_prefix}/supervisors", headers={"X-Caller-Id": "oid-alice"}
        )

        assert response.status_code == 403


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
