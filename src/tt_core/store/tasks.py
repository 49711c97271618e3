"""Scheduled task operations for the time store.

A scheduled task has no state machine: being present in the table means it
is pending. Completing or deleting it removes the row.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import TYPE_CHECKING, Any

from tt_core.store.decorators import database_operation
from tt_core.store.models import ScheduledTask, to_db_time
from tt_core.store.tags import get_scheduled_task_tags

if TYPE_CHECKING:
    from tt_core.store.core import TimeStore

logger = logging.getLogger(__name__)

UPDATABLE_TASK_FIELDS = frozenset(
    {"description", "project", "estimate_minutes", "priority", "scheduled_date_time"}
)


def rows_to_tasks(store: TimeStore, rows: list[sqlite3.Row]) -> list[ScheduledTask]:
    """Build scheduled tasks from rows, loading each task's tags."""
    return [ScheduledTask.from_row(row, get_scheduled_task_tags(store, row["id"])) for row in rows]


@database_operation("insert scheduled task")
def insert_scheduled_task(store: TimeStore, task: ScheduledTask) -> int:
    """Insert a scheduled task (its id and tags are ignored).

    Returns:
        The store-assigned task id.
    """
    with store._transaction() as conn:
        cursor = conn.execute(
            """
            INSERT INTO scheduled_tasks (
                description, project, estimate_minutes, priority,
                scheduled_date_time, created_at
            ) VALUES (
                :description, :project, :estimate_minutes, :priority,
                :scheduled_date_time, :created_at
            )
            """,
            task.to_row(),
        )
        task_id = cursor.lastrowid

    if task_id is None:
        raise sqlite3.DatabaseError("insert did not return a row id")

    logger.debug(f"Inserted scheduled task {task_id} (priority {task.priority})")
    return task_id


@database_operation("update scheduled task")
def update_scheduled_task(store: TimeStore, task_id: int, **updates: Any) -> None:
    """Update selected task columns; an explicit None clears the column.

    Raises:
        ValueError: If a key is not an updatable task field.
    """
    unknown = set(updates) - UPDATABLE_TASK_FIELDS
    if unknown:
        raise ValueError(f"Unknown scheduled task fields: {', '.join(sorted(unknown))}")
    if not updates:
        return

    fields: list[str] = []
    params: list[Any] = []
    for name, value in updates.items():
        fields.append(f"{name} = ?")
        if name == "scheduled_date_time" and value is not None:
            value = to_db_time(value)
        params.append(value)
    params.append(task_id)

    with store._transaction() as conn:
        conn.execute(
            f"UPDATE scheduled_tasks SET {', '.join(fields)} WHERE id = ?",  # noqa: S608
            params,
        )

    logger.debug(f"Updated scheduled task {task_id}: {', '.join(updates)}")


@database_operation("get scheduled task")
def get_scheduled_task(store: TimeStore, task_id: int) -> ScheduledTask | None:
    """Get a scheduled task by ID."""
    conn = store._get_connection()
    row = conn.execute("SELECT * FROM scheduled_tasks WHERE id = ?", (task_id,)).fetchone()
    if not row:
        return None
    return ScheduledTask.from_row(row, get_scheduled_task_tags(store, task_id))


@database_operation("get scheduled tasks")
def get_all_scheduled_tasks(store: TimeStore) -> list[ScheduledTask]:
    """Get every scheduled task, oldest first."""
    conn = store._get_connection()
    cursor = conn.execute("SELECT * FROM scheduled_tasks ORDER BY created_at ASC, id ASC")
    return rows_to_tasks(store, cursor.fetchall())


@database_operation("delete scheduled task")
def delete_scheduled_task(store: TimeStore, task_id: int) -> bool:
    """Delete a scheduled task.

    Returns:
        True if deleted, False if not found.
    """
    with store._transaction() as conn:
        cursor = conn.execute("DELETE FROM scheduled_tasks WHERE id = ?", (task_id,))
        deleted = cursor.rowcount > 0

    if deleted:
        logger.debug(f"Deleted scheduled task {task_id}")
    return deleted
