"""Unit tests for ListSupervisorsQuery."""

import pytest

from psowatch.application.queries import ListSupervisorsQuery, SupervisorSummary
from psowatch.application.services import AuthorizationService
from psowatch.domain.shared.exceptions import ErrorCode
from psowatch.domain.user import AuthError, UserRole
from tests.shared.fixtures import TestUserFactory, make_directory


class TestListSupervisorsQuery:
    def setup_method(self):
        self.admin = TestUserFactory.admin()
        self.supervisor = TestUserFactory.supervisor()
        self.retired = TestUserFactory.user(
            "old@x.com", UserRole.SUPERVISOR, deleted=True
        )
        self.employee = TestUserFactory.employee("pso@x.com", external_id="oid-pso")
        directory = make_directory(
            self.admin, self.supervisor, self.retired, self.employee
        )
        self.query = ListSupervisorsQuery(directory, AuthorizationService(directory))

    @pytest.mark.asyncio
    async def test_lists_active_supervisors(self):
        result = await self.query.execute(TestUserFactory.ADMIN_EXTERNAL_ID)

        assert result == [
            SupervisorSummary(
                email="sup@x.com",
                full_name="Sam Supervisor",
                external_id=TestUserFactory.SUPERVISOR_EXTERNAL_ID,
            )
        ]

    @pytest.mark.asyncio
    async def test_employee_may_not_list(self):
        with pytest.raises(AuthError) as exc_info:
            await self.query.execute("oid-pso")

        assert exc_info.value.code == ErrorCode.INSUFFICIENT_PRIVILEGES
        assert exc_info.value.details["operation"] == "list supervisors"
