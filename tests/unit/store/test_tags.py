"""Tests for session and scheduled task tag operations."""

from datetime import datetime

import pytest

from tt_core.exceptions import DatabaseError
from tt_core.store.core import TimeStore
from tt_core.store.models import ScheduledTask, Session


@pytest.fixture()
def session_id(store: TimeStore) -> int:
    return store.insert_session(Session(start_time=datetime(2025, 3, 10, 9), description="Tagged"))


@pytest.fixture()
def task_id(store: TimeStore) -> int:
    return store.insert_scheduled_task(ScheduledTask(description="Tagged task"))


class TestSessionTags:
    """Tag sets attached to sessions."""

    def test_insert_and_get(self, store: TimeStore, session_id: int) -> None:
        store.insert_session_tags(session_id, ["b", "a"])

        assert sorted(store.get_session_tags(session_id)) == ["a", "b"]

    def test_duplicates_within_one_call_are_dropped(
        self, store: TimeStore, session_id: int
    ) -> None:
        store.insert_session_tags(session_id, ["a", "a", "b"])

        assert sorted(store.get_session_tags(session_id)) == ["a", "b"]

    def test_empty_insert_is_noop(self, store: TimeStore, session_id: int) -> None:
        store.insert_session_tags(session_id, [])

        assert store.get_session_tags(session_id) == []

    def test_update_replaces_whole_set(self, store: TimeStore, session_id: int) -> None:
        store.insert_session_tags(session_id, ["a", "b"])

        store.update_session_tags(session_id, ["c"])

        assert store.get_session_tags(session_id) == ["c"]

    def test_update_with_empty_list_clears(self, store: TimeStore, session_id: int) -> None:
        store.insert_session_tags(session_id, ["a"])

        store.update_session_tags(session_id, [])

        assert store.get_session_tags(session_id) == []

    def test_repeated_insert_of_existing_tag_raises_database_error(
        self, store: TimeStore, session_id: int
    ) -> None:
        store.insert_session_tags(session_id, ["a"])

        with pytest.raises(DatabaseError) as exc_info:
            store.insert_session_tags(session_id, ["a"])

        assert exc_info.value.operation == "insert session tags"
        assert exc_info.value.__cause__ is not None

    def test_tags_for_missing_session_violate_foreign_key(self, store: TimeStore) -> None:
        with pytest.raises(DatabaseError):
            store.insert_session_tags(12345, ["orphan"])


class TestScheduledTaskTags:
    """Tag sets attached to scheduled tasks."""

    def test_insert_and_get(self, store: TimeStore, task_id: int) -> None:
        store.insert_scheduled_task_tags(task_id, ["x", "y", "x"])

        assert sorted(store.get_scheduled_task_tags(task_id)) == ["x", "y"]

    def test_update_replaces_whole_set(self, store: TimeStore, task_id: int) -> None:
        store.insert_scheduled_task_tags(task_id, ["x"])

        store.update_scheduled_task_tags(task_id, ["y", "z"])

        assert sorted(store.get_scheduled_task_tags(task_id)) == ["y", "z"]

    def test_deleting_task_cascades_tags(self, store: TimeStore, task_id: int) -> None:
        store.insert_scheduled_task_tags(task_id, ["x"])

        store.delete_scheduled_task(task_id)

        assert store.get_scheduled_task_tags(task_id) == []

    def test_task_and_session_tags_are_separate(
        self, store: TimeStore, session_id: int, task_id: int
    ) -> None:
        store.insert_session_tags(session_id, ["shared"])

        assert store.get_scheduled_task_tags(task_id) == []
