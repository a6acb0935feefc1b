"""Port mocks for application-layer tests."""

from unittest.mock import AsyncMock

import pytest

from psowatch.application.ports import Notifier, PresenceBroadcaster
from psowatch.domain.audit import AuditSink


@pytest.fixture
def notifier():
    return AsyncMock(spec=Notifier)


@pytest.fixture
def broadcaster():
    return AsyncMock(spec=PresenceBroadcaster)


@pytest.fixture
def audit_sink():
    return AsyncMock(spec=AuditSink)


@pytest.fixture
def db_session():
    """Stands in for AsyncSession (only commit/rollback are used)."""
    return AsyncMock()
