"""Tests for scheduled task operations in the time store."""

from datetime import datetime

import pytest

from tt_core.constants import DEFAULT_PRIORITY
from tt_core.exceptions import DatabaseError
from tt_core.store.core import TimeStore
from tt_core.store.models import ScheduledTask

DUE = datetime(2025, 3, 10, 17, 0)


class TestScheduledTaskRoundTrip:
    """Insert, read back, update and delete."""

    def test_insert_and_get(self, store: TimeStore) -> None:
        task_id = store.insert_scheduled_task(
            ScheduledTask(
                description="Renew certificate",
                project="ops",
                estimate_minutes=30,
                priority=2,
                scheduled_date_time=DUE,
            )
        )

        task = store.get_scheduled_task(task_id)

        assert task is not None
        assert task.id == task_id
        assert task.description == "Renew certificate"
        assert task.project == "ops"
        assert task.estimate_minutes == 30
        assert task.priority == 2
        assert task.scheduled_date_time == DUE
        assert task.created_at is not None

    def test_priority_defaults_to_five(self, store: TimeStore) -> None:
        task_id = store.insert_scheduled_task(ScheduledTask(description="Plain"))

        task = store.get_scheduled_task(task_id)

        assert task is not None
        assert task.priority == DEFAULT_PRIORITY

    def test_priority_outside_range_is_rejected(self, store: TimeStore) -> None:
        with pytest.raises(DatabaseError):
            store.insert_scheduled_task(ScheduledTask(description="Bad", priority=10))

    def test_get_missing_task_returns_none(self, store: TimeStore) -> None:
        assert store.get_scheduled_task(42) is None

    def test_update_sets_and_clears_fields(self, store: TimeStore) -> None:
        task_id = store.insert_scheduled_task(
            ScheduledTask(description="Draft", scheduled_date_time=DUE)
        )

        store.update_scheduled_task(task_id, priority=1, scheduled_date_time=None)

        task = store.get_scheduled_task(task_id)
        assert task is not None
        assert task.priority == 1
        assert task.scheduled_date_time is None

    def test_update_rejects_unknown_fields(self, store: TimeStore) -> None:
        task_id = store.insert_scheduled_task(ScheduledTask(description="Draft"))

        with pytest.raises(ValueError, match="state"):
            store.update_scheduled_task(task_id, state="done")

    def test_delete_reports_whether_row_existed(self, store: TimeStore) -> None:
        task_id = store.insert_scheduled_task(ScheduledTask(description="Drop me"))

        assert store.delete_scheduled_task(task_id) is True
        assert store.delete_scheduled_task(task_id) is False


class TestAllScheduledTasks:
    """get_all_scheduled_tasks() is FIFO."""

    def test_oldest_first(self, store: TimeStore) -> None:
        ids = [
            store.insert_scheduled_task(ScheduledTask(description=f"Task {i}"))
            for i in range(3)
        ]

        assert [t.id for t in store.get_all_scheduled_tasks()] == ids

    def test_explicit_created_at_controls_order(self, store: TimeStore) -> None:
        newer = store.insert_scheduled_task(
            ScheduledTask(description="Newer", created_at=datetime(2025, 3, 2))
        )
        older = store.insert_scheduled_task(
            ScheduledTask(description="Older", created_at=datetime(2025, 3, 1))
        )

        assert [t.id for t in store.get_all_scheduled_tasks()] == [older, newer]
