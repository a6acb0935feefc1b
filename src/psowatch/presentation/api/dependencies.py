"""FastAPI dependency injection for the psowatch API.

Provides dependencies for:
- Database sessions
- Caller identity (``X-Caller-Id`` header set by the auth gateway)
- Repository factory
- Notification client
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated, AsyncGenerator, Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from psowatch.infrastructure.notifications import (
    NotificationClient,
    build_notification_client,
)
from psowatch.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyRepositoryFactory,
)
from psowatch.presentation.api.config import get_api_settings

logger = logging.getLogger(__name__)

CALLER_ID_HEADER = "X-Caller-Id"


@lru_cache()
def get_database_url() -> str:
    """
    Get database URL from application settings.

    Returns
    -------
    Database URL string
    """
    url = get_api_settings().database_url

    # Ensure data directory exists for SQLite
    if url.startswith("sqlite") and ":memory:" not in url:
        db_path = url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return url


# -----------------------------------------------------------------------------
# Database Engine & Session (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    The engine manages the connection pool and is reused across all requests.
    """
    return create_async_engine(
        get_database_url(),
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Get the shared async session maker (singleton)."""
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request using the shared engine/pool.

    Yields
    ------
    AsyncSession for database operations
    """
    async with get_session_maker()() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Caller Identity
# -----------------------------------------------------------------------------


async def get_caller_id(
    x_caller_id: Annotated[Optional[str], Header(alias=CALLER_ID_HEADER)] = None,
) -> str:
    """
    Identity-provider object id of the caller.

    Token validation happens upstream; a missing header is passed on as an
    empty id so the authorization service reports it.
    """
    return (x_caller_id or "").strip()


# Type alias for injected caller id
CallerId = Annotated[str, Depends(get_caller_id)]


# -----------------------------------------------------------------------------
# Repository Factory & Notifications
# -----------------------------------------------------------------------------


async def get_repository_factory(session: DBSession) -> SQLAlchemyRepositoryFactory:
    return SQLAlchemyRepositoryFactory(session=session)


# Type alias for injected repository factory
RepoFactory = Annotated[SQLAlchemyRepositoryFactory, Depends(get_repository_factory)]


@lru_cache(maxsize=1)
def get_notification_client() -> NotificationClient:
    """Shared pub/sub client (singleton, closed on shutdown)."""
    return build_notification_client(get_api_settings())


# Type alias for injected notification client
Notifications = Annotated[NotificationClient, Depends(get_notification_client)]

# -----------------------------------------------------------------------------
# Application Commands & Services
# -----------------------------------------------------------------------------
# Application layer classes have from_factory() classmethods. Use them
# directly in routers:
#
#   orchestrator = SupervisorReassignmentOrchestrator.from_factory(
#       factory, notifications, notifications
#   )
