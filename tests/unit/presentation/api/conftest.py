"""Pytest fixtures for API tests.

Requests run in-process through httpx's ASGI transport. The database is the
shared test database and notifications go to an AsyncMock, so no external
service is needed. The app lifespan (schema creation against PostgreSQL)
is not run.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from psowatch.domain.user import UserRole
from psowatch.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyRepositoryFactory,
)
from psowatch.presentation.api.app import API_V1_PREFIX, create_app
from psowatch.presentation.api.dependencies import (
    get_db_session,
    get_notification_client,
)
from psowatch_config.settings import Settings
from tests.shared.fixtures import TestUserFactory
from tests.shared.fixtures.database import async_engine, async_session  # noqa: F401


class MockNotificationClient:
    """Stands in for the pub/sub client; records deliveries."""

    def __init__(self):
        self.send_to_user = AsyncMock()
        self.broadcast_supervisor_change = AsyncMock()
        self.broadcast_supervisor_list_changed = AsyncMock()
        self.set_user_offline = AsyncMock()
        self.close = AsyncMock()


@pytest.fixture
def api_v1_prefix() -> str:
    return API_V1_PREFIX


@pytest.fixture
def api_settings() -> Settings:
    return Settings(
        postgres_password=SecretStr("test-password"),
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        pubsub_enabled=False,
    )


@pytest.fixture
def notifications():
    return MockNotificationClient()


@pytest.fixture
def app(api_settings, async_engine, notifications):
    application = create_app(api_settings)
    session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def _test_db_session():
        async with session_maker() as session:
            yield session

    application.dependency_overrides[get_db_session] = _test_db_session
    application.dependency_overrides[get_notification_client] = lambda: notifications
    return application


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def users(async_session):
    """Admin, supervisor, two PSOs, a contact manager and a deleted PSO."""
    directory = SQLAlchemyRepositoryFactory(async_session).user_directory()
    seeded = SimpleNamespace(
        admin=TestUserFactory.admin(),
        root=TestUserFactory.super_admin(),
        supervisor=TestUserFactory.supervisor(),
        alice=TestUserFactory.employee("alice@x.com", external_id="oid-alice"),
        bob=TestUserFactory.employee("bob@x.com"),
        carol=TestUserFactory.user("carol@x.com", UserRole.CONTACT_MANAGER),
        gone=TestUserFactory.employee("gone@x.com", deleted=True),
    )
    for user in vars(seeded).values():
        await directory.save(user)
    await async_session.commit()
    return seeded
