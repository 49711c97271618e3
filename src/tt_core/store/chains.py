"""Continuation chain queries for the time store.

A chain is a root session plus every session created to resume it. Chains
are flat: each continuation points directly at the root through
``continues_session_id``, so resolving a root or a whole chain takes a fixed
number of queries and never walks a linked list.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from tt_core.models.enums import SessionState
from tt_core.store.decorators import database_operation
from tt_core.store.models import Session
from tt_core.store.sessions import get_session, rows_to_sessions

if TYPE_CHECKING:
    from tt_core.store.core import TimeStore

logger = logging.getLogger(__name__)


@database_operation("get chain root")
def get_chain_root(store: TimeStore, session_id: int) -> Session | None:
    """Resolve the root of the chain a session belongs to.

    Returns:
        The session itself when it continues nothing, else the session it
        continues. None if ``session_id`` does not exist.
    """
    session = get_session(store, session_id)
    if session is None:
        return None
    if session.continues_session_id is None:
        return session
    return get_session(store, session.continues_session_id)


@database_operation("get continuation chain")
def get_continuation_chain(store: TimeStore, session_id: int) -> list[Session]:
    """Get the whole chain of a session, root first.

    Returns:
        Root plus its continuations ordered by start time ascending, or an
        empty list if the root cannot be resolved.
    """
    root = get_chain_root(store, session_id)
    if root is None or root.id is None:
        return []

    conn = store._get_connection()
    cursor = conn.execute(
        """
        SELECT * FROM sessions
        WHERE id = ? OR continues_session_id = ?
        ORDER BY start_time ASC, id ASC
        """,
        (root.id, root.id),
    )
    return rows_to_sessions(store, cursor.fetchall())


@database_operation("get incomplete chains")
def get_incomplete_chains(store: TimeStore) -> list[Session]:
    """Get the roots of chains whose latest member is paused or working.

    A chain is unfinished business as long as its most recently started
    member has been neither completed nor abandoned.

    Returns:
        Chain roots, most recently started first.
    """
    conn = store._get_connection()
    cursor = conn.execute(
        """
        SELECT r.* FROM sessions r
        WHERE r.continues_session_id IS NULL
          AND (
            SELECT m.state FROM sessions m
            WHERE m.id = r.id OR m.continues_session_id = r.id
            ORDER BY m.start_time DESC, m.id DESC
            LIMIT 1
          ) IN (?, ?)
        ORDER BY r.start_time DESC
        """,
        (SessionState.PAUSED.value, SessionState.WORKING.value),
    )
    return rows_to_sessions(store, cursor.fetchall())


def chain_total_minutes(chain: list[Session], now: datetime | None = None) -> int:
    """Total minutes spent across a chain, rounded to the nearest minute.

    Closed members count their start-to-end span; a working member counts
    up to ``now``.
    """
    now = now or datetime.now()
    return round(sum(session.elapsed_minutes(now) for session in chain))
