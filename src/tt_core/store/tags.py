"""Tag operations for the time store.

Sessions and scheduled tasks each own a satellite tag table keyed by the
owner's id. Duplicates within one call are dropped before storage, and
replacing a tag set happens inside a single transaction.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tt_core.store.decorators import database_operation

if TYPE_CHECKING:
    from tt_core.store.core import TimeStore

logger = logging.getLogger(__name__)

# owner kind -> (table, owner column)
_TAG_TABLES: dict[str, tuple[str, str]] = {
    "session": ("session_tags", "session_id"),
    "task": ("scheduled_task_tags", "scheduled_task_id"),
}


def _unique(tags: list[str]) -> list[str]:
    """Drop duplicates, keeping first occurrence order."""
    return list(dict.fromkeys(tags))


def _insert(store: TimeStore, kind: str, owner_id: int, tags: list[str]) -> None:
    if not tags:
        return
    table, column = _TAG_TABLES[kind]
    unique_tags = _unique(tags)
    with store._transaction() as conn:
        conn.executemany(
            f"INSERT INTO {table} ({column}, tag) VALUES (?, ?)",  # noqa: S608
            [(owner_id, tag) for tag in unique_tags],
        )
    logger.debug(f"Tagged {kind} {owner_id}: {', '.join(unique_tags)}")


def _get(store: TimeStore, kind: str, owner_id: int) -> list[str]:
    table, column = _TAG_TABLES[kind]
    conn = store._get_connection()
    cursor = conn.execute(
        f"SELECT tag FROM {table} WHERE {column} = ?",  # noqa: S608
        (owner_id,),
    )
    return [row["tag"] for row in cursor.fetchall()]


def _replace(store: TimeStore, kind: str, owner_id: int, tags: list[str]) -> None:
    table, column = _TAG_TABLES[kind]
    with store._transaction() as conn:
        conn.execute(f"DELETE FROM {table} WHERE {column} = ?", (owner_id,))  # noqa: S608
        if tags:
            conn.executemany(
                f"INSERT INTO {table} ({column}, tag) VALUES (?, ?)",  # noqa: S608
                [(owner_id, tag) for tag in _unique(tags)],
            )
    logger.debug(f"Replaced tags of {kind} {owner_id} ({len(tags)} given)")


# ==========================================================================
# Session tags
# ==========================================================================


@database_operation("insert session tags")
def insert_session_tags(store: TimeStore, session_id: int, tags: list[str]) -> None:
    """Attach tags to a session. No-op for an empty list."""
    _insert(store, "session", session_id, tags)


@database_operation("get session tags")
def get_session_tags(store: TimeStore, session_id: int) -> list[str]:
    """Get a session's tags in whatever order the store returns them."""
    return _get(store, "session", session_id)


@database_operation("update session tags")
def update_session_tags(store: TimeStore, session_id: int, tags: list[str]) -> None:
    """Replace a session's tag set atomically."""
    _replace(store, "session", session_id, tags)


# ==========================================================================
# Scheduled task tags
# ==========================================================================


@database_operation("insert scheduled task tags")
def insert_scheduled_task_tags(store: TimeStore, task_id: int, tags: list[str]) -> None:
    """Attach tags to a scheduled task. No-op for an empty list."""
    _insert(store, "task", task_id, tags)


@database_operation("get scheduled task tags")
def get_scheduled_task_tags(store: TimeStore, task_id: int) -> list[str]:
    """Get a scheduled task's tags."""
    return _get(store, "task", task_id)


@database_operation("update scheduled task tags")
def update_scheduled_task_tags(store: TimeStore, task_id: int, tags: list[str]) -> None:
    """Replace a scheduled task's tag set atomically."""
    _replace(store, "task", task_id, tags)
