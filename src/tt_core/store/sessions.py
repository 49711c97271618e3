"""Session operations for the time store.

Functions for inserting, updating, querying and deleting work sessions.
Every returned Session carries its tags.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from typing import TYPE_CHECKING, Any

from tt_core.models.enums import SessionState
from tt_core.store.decorators import database_operation
from tt_core.store.models import Session, to_db_time
from tt_core.store.tags import get_session_tags

if TYPE_CHECKING:
    from tt_core.store.core import TimeStore

logger = logging.getLogger(__name__)

# Columns that update_session() accepts
UPDATABLE_SESSION_FIELDS = frozenset(
    {
        "start_time",
        "end_time",
        "description",
        "project",
        "estimate_minutes",
        "explicit_duration_minutes",
        "remark",
        "state",
        "parent_session_id",
        "continues_session_id",
    }
)


def _to_column_value(name: str, value: Any) -> Any:
    """Convert an update value to its stored representation."""
    if value is None:
        return None
    if name in ("start_time", "end_time"):
        return to_db_time(value)
    if name == "state":
        return SessionState(value).value
    return value


def rows_to_sessions(store: TimeStore, rows: list[sqlite3.Row]) -> list[Session]:
    """Build sessions from rows, loading each session's tags."""
    return [Session.from_row(row, get_session_tags(store, row["id"])) for row in rows]


@database_operation("insert session")
def insert_session(store: TimeStore, session: Session) -> int:
    """Insert a session (its id and tags are ignored).

    Args:
        store: The TimeStore instance.
        session: Session to insert.

    Returns:
        The store-assigned session id.
    """
    with store._transaction() as conn:
        cursor = conn.execute(
            """
            INSERT INTO sessions (
                start_time, end_time, description, project,
                estimate_minutes, explicit_duration_minutes,
                remark, state, parent_session_id, continues_session_id,
                created_at, updated_at
            ) VALUES (
                :start_time, :end_time, :description, :project,
                :estimate_minutes, :explicit_duration_minutes,
                :remark, :state, :parent_session_id, :continues_session_id,
                :created_at, :updated_at
            )
            """,
            session.to_row(),
        )
        session_id = cursor.lastrowid

    if session_id is None:
        raise sqlite3.DatabaseError("insert did not return a row id")

    logger.debug(f"Inserted session {session_id} ({session.state}): {session.description[:50]}")
    return session_id


@database_operation("update session")
def update_session(store: TimeStore, session_id: int, **updates: Any) -> None:
    """Update selected session columns in place.

    Only keys present in ``updates`` are written; an explicit None clears the
    column. ``updated_at`` is refreshed whenever something changes.

    Args:
        store: The TimeStore instance.
        session_id: Session to update.
        **updates: Column values keyed by field name.

    Raises:
        ValueError: If a key is not an updatable session field.
    """
    unknown = set(updates) - UPDATABLE_SESSION_FIELDS
    if unknown:
        raise ValueError(f"Unknown session fields: {', '.join(sorted(unknown))}")
    if not updates:
        return

    fields = [f"{name} = ?" for name in updates]
    params = [_to_column_value(name, value) for name, value in updates.items()]
    fields.append("updated_at = ?")
    params.append(to_db_time(datetime.now()))
    params.append(session_id)

    with store._transaction() as conn:
        conn.execute(
            f"UPDATE sessions SET {', '.join(fields)} WHERE id = ?",  # noqa: S608
            params,
        )

    logger.debug(f"Updated session {session_id}: {', '.join(updates)}")


@database_operation("get session")
def get_session(store: TimeStore, session_id: int) -> Session | None:
    """Get session by ID."""
    conn = store._get_connection()
    row = conn.execute("SELECT * FROM sessions WHERE id = ?", (session_id,)).fetchone()
    if not row:
        return None
    return Session.from_row(row, get_session_tags(store, session_id))


@database_operation("get active session")
def get_active_session(store: TimeStore) -> Session | None:
    """Get the open working session, if there is one."""
    conn = store._get_connection()
    row = conn.execute(
        """
        SELECT * FROM sessions
        WHERE state = ? AND end_time IS NULL
        ORDER BY start_time DESC
        LIMIT 1
        """,
        (SessionState.WORKING.value,),
    ).fetchone()
    if not row:
        return None
    return Session.from_row(row, get_session_tags(store, row["id"]))


@database_operation("get all active sessions")
def get_all_active_sessions(store: TimeStore) -> list[Session]:
    """Get every session without an end time, oldest first."""
    conn = store._get_connection()
    cursor = conn.execute("SELECT * FROM sessions WHERE end_time IS NULL ORDER BY start_time ASC")
    return rows_to_sessions(store, cursor.fetchall())


@database_operation("get sessions by time range")
def get_sessions_by_time_range(
    store: TimeStore,
    start: datetime,
    end: datetime,
    project: str | None = None,
    tags: list[str] | None = None,
    state: SessionState | str | None = None,
) -> list[Session]:
    """Get sessions that started within ``[start, end)``.

    Args:
        store: The TimeStore instance.
        start: Inclusive lower bound on start time.
        end: Exclusive upper bound on start time.
        project: Only sessions of this project.
        tags: Only sessions carrying at least one of these tags.
        state: Only sessions in this state.

    Returns:
        Matching sessions ordered by start time ascending.
    """
    query = "SELECT DISTINCT s.* FROM sessions s"
    conditions: list[str] = []
    params: list[Any] = []

    if tags:
        query += " INNER JOIN session_tags st ON s.id = st.session_id"
        conditions.append(f"st.tag IN ({', '.join('?' for _ in tags)})")
        params.extend(tags)

    conditions.append("s.start_time >= ?")
    conditions.append("s.start_time < ?")
    params.extend([to_db_time(start), to_db_time(end)])

    if project:
        conditions.append("s.project = ?")
        params.append(project)

    if state:
        if state not in SessionState.values():
            expected = ", ".join(SessionState.values())
            raise ValueError(f"Unknown session state {state!r}; expected one of {expected}")
        conditions.append("s.state = ?")
        params.append(SessionState(state).value)

    query += f" WHERE {' AND '.join(conditions)} ORDER BY s.start_time ASC"

    conn = store._get_connection()
    cursor = conn.execute(query, params)
    return rows_to_sessions(store, cursor.fetchall())


@database_operation("find paused session")
def find_paused_session_to_resume(
    store: TimeStore,
    description: str | None = None,
    project: str | None = None,
    primary_tag: str | None = None,
) -> Session | None:
    """Find the most recently started paused session matching the filters.

    ``primary_tag`` is compared with the first tag the store returns for the
    candidate; if it differs, nothing is returned.
    """
    query = "SELECT * FROM sessions WHERE state = ?"
    params: list[Any] = [SessionState.PAUSED.value]

    if description:
        query += " AND description = ?"
        params.append(description)
    if project:
        query += " AND project = ?"
        params.append(project)

    query += " ORDER BY start_time DESC LIMIT 1"

    conn = store._get_connection()
    row = conn.execute(query, params).fetchone()
    if not row:
        return None

    tags = get_session_tags(store, row["id"])
    if primary_tag and (not tags or tags[0] != primary_tag):
        return None

    return Session.from_row(row, tags)


@database_operation("delete session")
def delete_session(store: TimeStore, session_id: int) -> bool:
    """Delete a session outright (its tags go with it).

    Returns:
        True if a session was deleted, False if not found.
    """
    with store._transaction() as conn:
        cursor = conn.execute("DELETE FROM sessions WHERE id = ?", (session_id,))
        deleted = cursor.rowcount > 0

    if deleted:
        logger.debug(f"Deleted session {session_id}")
    return deleted
