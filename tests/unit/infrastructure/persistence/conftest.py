"""Pytest fixtures for persistence tests."""

import pytest_asyncio

from psowatch.domain.user import User
from psowatch.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyRepositoryFactory,
)
from tests.shared.fixtures.database import async_engine, async_session  # noqa: F401


@pytest_asyncio.fixture
async def factory(async_session):
    return SQLAlchemyRepositoryFactory(async_session)


@pytest_asyncio.fixture
async def seed(async_session, factory):
    """Persist and commit users, returning them in order."""

    async def _seed(*users: User) -> tuple[User, ...]:
        directory = factory.user_directory()
        for user in users:
            await directory.save(user)
        await async_session.commit()
        return users

    return _seed
