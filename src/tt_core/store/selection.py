"""Daily-plan candidate queries for the time store.

Each task category is a fixed (name, predicate, ordering, cap) definition and
is queried independently; the caps apply before categories are merged, so the
merge itself happens in the scheduler.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, time
from typing import TYPE_CHECKING, Any

from tt_core.constants import (
    CATEGORY_IMPORTANT,
    CATEGORY_OLDEST,
    CATEGORY_URGENT,
    DEFAULT_PRIORITY,
    SELECTION_CATEGORY_LIMIT,
)
from tt_core.models.enums import SessionState
from tt_core.store.chains import chain_total_minutes, get_continuation_chain
from tt_core.store.decorators import database_operation
from tt_core.store.models import (
    IncompleteChain,
    ScheduledTask,
    TaskSelection,
    to_db_time,
)
from tt_core.store.tasks import rows_to_tasks

if TYPE_CHECKING:
    from tt_core.store.core import TimeStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskCategory:
    """A ranked slice of the scheduled task backlog."""

    name: str
    where: str | None
    order_by: str
    limit: int = SELECTION_CATEGORY_LIMIT


TASK_CATEGORIES: tuple[TaskCategory, ...] = (
    # Due today or overdue
    TaskCategory(
        name=CATEGORY_URGENT,
        where="scheduled_date_time IS NOT NULL AND scheduled_date_time <= :end_of_day",
        order_by="scheduled_date_time ASC, id ASC",
    ),
    # Explicitly prioritized (anything but the default)
    TaskCategory(
        name=CATEGORY_IMPORTANT,
        where="priority != :default_priority",
        order_by="priority ASC, created_at ASC, id ASC",
    ),
    # FIFO backlog
    TaskCategory(
        name=CATEGORY_OLDEST,
        where=None,
        order_by="created_at ASC, id ASC",
    ),
)


def end_of_day(moment: datetime) -> datetime:
    """Last representable instant of the calendar day of ``moment``."""
    return datetime.combine(moment.date(), time.max)


def fetch_category(
    store: TimeStore, category: TaskCategory, now: datetime
) -> list[ScheduledTask]:
    """Run one category query."""
    where_clause = f"WHERE {category.where}" if category.where else ""
    params: dict[str, Any] = {
        "end_of_day": to_db_time(end_of_day(now)),
        "default_priority": DEFAULT_PRIORITY,
        "limit": category.limit,
    }
    conn = store._get_connection()
    cursor = conn.execute(
        f"""
        SELECT * FROM scheduled_tasks
        {where_clause}
        ORDER BY {category.order_by}
        LIMIT :limit
        """,  # noqa: S608
        params,
    )
    return rows_to_tasks(store, cursor.fetchall())


def get_incomplete_chains_for_selection(
    store: TimeStore,
    now: datetime | None = None,
    limit: int = SELECTION_CATEGORY_LIMIT,
) -> list[IncompleteChain]:
    """Reduce unfinished chains to one representative each.

    Starts from paused sessions that did not interrupt anything, groups them
    by chain root and keeps chains whose latest member is still paused or
    working. The latest member represents the chain.

    Returns:
        Representatives with chain totals, most recently started first.
    """
    now = now or datetime.now()
    conn = store._get_connection()
    cursor = conn.execute(
        """
        SELECT id, continues_session_id FROM sessions
        WHERE state = ? AND parent_session_id IS NULL
        ORDER BY start_time DESC
        """,
        (SessionState.PAUSED.value,),
    )

    # dict keeps the first (most recent) occurrence order of each root
    root_ids: dict[int, None] = {}
    for row in cursor.fetchall():
        root_ids.setdefault(row["continues_session_id"] or row["id"], None)

    chains: list[IncompleteChain] = []
    for root_id in root_ids:
        chain = get_continuation_chain(store, root_id)
        if not chain:
            continue
        latest = chain[-1]
        if not latest.state.is_incomplete:
            continue
        chains.append(
            IncompleteChain(
                session=latest,
                total_minutes=chain_total_minutes(chain, now),
                chain_session_count=len(chain),
            )
        )

    chains.sort(key=lambda item: item.session.start_time, reverse=True)
    return chains[:limit]


@database_operation("get scheduled tasks for selection")
def get_scheduled_tasks_for_selection(
    store: TimeStore, now: datetime | None = None
) -> TaskSelection:
    """Collect every daily-plan category.

    Args:
        store: The TimeStore instance.
        now: Reference time for "due today"; defaults to the current time.

    Returns:
        TaskSelection with incomplete chains and the urgent, important and
        oldest task lists, each independently capped.
    """
    now = now or datetime.now()
    by_name = {category.name: fetch_category(store, category, now) for category in TASK_CATEGORIES}
    selection = TaskSelection(
        incomplete=get_incomplete_chains_for_selection(store, now),
        urgent=by_name[CATEGORY_URGENT],
        important=by_name[CATEGORY_IMPORTANT],
        oldest=by_name[CATEGORY_OLDEST],
    )
    logger.debug(
        f"Selection: {len(selection.incomplete)} incomplete, {len(selection.urgent)} urgent, "
        f"{len(selection.important)} important, {len(selection.oldest)} oldest"
    )
    return selection
