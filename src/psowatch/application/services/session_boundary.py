"""Commit boundaries shared by the user-changing services.

Every user change is committed in two steps: the core write, which must
succeed or leave nothing behind, and the side-effect batch (audit rows),
whose commit failure is logged and swallowed.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Optional

from psowatch.domain.shared.exceptions import DomainException


async def commit_core(
    db_session: Optional[Any],
    persist: Callable[[], Awaitable[Any]],
    to_error: Callable[[Exception], DomainException],
    log: logging.Logger,
) -> None:
    """Run ``persist`` and commit; roll back and raise ``to_error(e)`` on failure."""
    try:
        await persist()
        if db_session is not None:
            await db_session.commit()
    except Exception as e:
        if db_session is not None:
            await db_session.rollback()
        error = to_error(e)
        log.error("%s: %s", error.message, e, exc_info=True)
        raise error from e


async def commit_side_effects(db_session: Optional[Any], log: logging.Logger) -> bool:
    if db_session is None:
        return True
    try:
        await db_session.commit()
    except Exception as e:
        await db_session.rollback()
        log.error("Side-effect commit failed: %s", e, exc_info=True)
        return False
    return True
