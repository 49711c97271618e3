"""Tests for daily-plan candidate selection.

Covers:
- urgent / important / oldest task categories and their caps
- incomplete chain representatives with totals
"""

from datetime import datetime, timedelta

from tt_core.constants import SELECTION_CATEGORY_LIMIT
from tt_core.models.enums import SessionState
from tt_core.store.core import TimeStore
from tt_core.store.models import ScheduledTask, Session
from tt_core.store.selection import end_of_day

NOW = datetime(2025, 3, 10, 12, 0)


def _task(
    store: TimeStore,
    description: str,
    priority: int = 5,
    scheduled: datetime | None = None,
    created_at: datetime | None = None,
) -> int:
    return store.insert_scheduled_task(
        ScheduledTask(
            description=description,
            priority=priority,
            scheduled_date_time=scheduled,
            created_at=created_at,
        )
    )


def _session(
    store: TimeStore,
    start: datetime,
    state: SessionState,
    end: datetime | None = None,
    continues: int | None = None,
    parent: int | None = None,
    estimate: int | None = None,
) -> int:
    return store.insert_session(
        Session(
            start_time=start,
            end_time=end,
            description="Session work",
            state=state,
            continues_session_id=continues,
            parent_session_id=parent,
            estimate_minutes=estimate,
        )
    )


class TestEndOfDay:
    def test_last_instant_of_same_day(self) -> None:
        eod = end_of_day(NOW)

        assert eod.date() == NOW.date()
        assert eod > NOW
        assert eod + timedelta(microseconds=1) == datetime(2025, 3, 11)


# ==========================================================================
# Task categories
# ==========================================================================


class TestTaskCategories:
    """Urgent, important and oldest lists."""

    def test_urgent_includes_today_and_overdue_only(self, store: TimeStore) -> None:
        overdue = _task(store, "Overdue", scheduled=NOW - timedelta(days=2))
        tonight = _task(store, "Tonight", scheduled=datetime(2025, 3, 10, 23, 30))
        _task(store, "Tomorrow", scheduled=datetime(2025, 3, 11, 0, 0))
        _task(store, "Unscheduled")

        selection = store.get_scheduled_tasks_for_selection(NOW)

        assert [t.id for t in selection.urgent] == [overdue, tonight]

    def test_important_is_non_default_priority_ordered(self, store: TimeStore) -> None:
        low = _task(store, "Low", priority=8)
        _task(store, "Default", priority=5)
        top = _task(store, "Top", priority=1)
        high_a = _task(store, "High A", priority=3)
        high_b = _task(store, "High B", priority=3)

        selection = store.get_scheduled_tasks_for_selection(NOW)

        assert [t.id for t in selection.important] == [top, high_a, high_b, low]

    def test_oldest_is_fifo_over_all_tasks(self, store: TimeStore) -> None:
        ids = [_task(store, f"Task {i}", priority=1 + i) for i in range(3)]

        selection = store.get_scheduled_tasks_for_selection(NOW)

        assert [t.id for t in selection.oldest] == ids

    def test_each_category_is_capped(self, store: TimeStore) -> None:
        for i in range(SELECTION_CATEGORY_LIMIT + 5):
            _task(store, f"Urgent {i}", priority=2, scheduled=NOW - timedelta(hours=1))

        selection = store.get_scheduled_tasks_for_selection(NOW)

        assert len(selection.urgent) == SELECTION_CATEGORY_LIMIT
        assert len(selection.important) == SELECTION_CATEGORY_LIMIT
        assert len(selection.oldest) == SELECTION_CATEGORY_LIMIT

    def test_tasks_carry_tags(self, store: TimeStore) -> None:
        task_id = _task(store, "Tagged")
        store.insert_scheduled_task_tags(task_id, ["ops"])

        selection = store.get_scheduled_tasks_for_selection(NOW)

        assert selection.oldest[0].tags == ["ops"]

    def test_empty_store(self, store: TimeStore) -> None:
        selection = store.get_scheduled_tasks_for_selection(NOW)

        assert selection.incomplete == []
        assert selection.urgent == []
        assert selection.important == []
        assert selection.oldest == []


# ==========================================================================
# Incomplete chains
# ==========================================================================


class TestIncompleteSelection:
    """One representative per unfinished chain."""

    def test_latest_paused_member_represents_chain(self, store: TimeStore) -> None:
        t0 = NOW - timedelta(hours=3)
        root = _session(store, t0, SessionState.PAUSED, end=t0 + timedelta(minutes=30))
        latest = _session(
            store,
            t0 + timedelta(hours=1),
            SessionState.PAUSED,
            end=t0 + timedelta(hours=1, minutes=20),
            continues=root,
        )

        selection = store.get_scheduled_tasks_for_selection(NOW)

        assert len(selection.incomplete) == 1
        chain = selection.incomplete[0]
        assert chain.session.id == latest
        assert chain.total_minutes == 50
        assert chain.chain_session_count == 2

    def test_finished_chain_is_excluded(self, store: TimeStore) -> None:
        t0 = NOW - timedelta(hours=3)
        root = _session(store, t0, SessionState.PAUSED, end=t0 + timedelta(minutes=30))
        _session(
            store,
            t0 + timedelta(hours=1),
            SessionState.COMPLETED,
            end=t0 + timedelta(hours=2),
            continues=root,
        )

        assert store.get_scheduled_tasks_for_selection(NOW).incomplete == []

    def test_interruptions_are_not_candidates(self, store: TimeStore) -> None:
        t0 = NOW - timedelta(hours=3)
        main = _session(store, t0, SessionState.COMPLETED, end=t0 + timedelta(hours=2))
        _session(
            store,
            t0 + timedelta(minutes=10),
            SessionState.PAUSED,
            end=t0 + timedelta(minutes=15),
            parent=main,
        )

        assert store.get_scheduled_tasks_for_selection(NOW).incomplete == []

    def test_most_recent_chains_first(self, store: TimeStore) -> None:
        older = _session(
            store, NOW - timedelta(hours=5), SessionState.PAUSED, end=NOW - timedelta(hours=4)
        )
        newer = _session(
            store, NOW - timedelta(hours=2), SessionState.PAUSED, end=NOW - timedelta(hours=1)
        )

        incomplete = store.get_scheduled_tasks_for_selection(NOW).incomplete

        assert [c.session.id for c in incomplete] == [newer, older]

    def test_incomplete_is_capped(self, store: TimeStore) -> None:
        for i in range(SELECTION_CATEGORY_LIMIT + 3):
            start = NOW - timedelta(hours=i + 1)
            _session(store, start, SessionState.PAUSED, end=start + timedelta(minutes=10))

        incomplete = store.get_scheduled_tasks_for_selection(NOW).incomplete

        assert len(incomplete) == SELECTION_CATEGORY_LIMIT
