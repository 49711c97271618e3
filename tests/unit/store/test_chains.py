"""Tests for continuation chain queries.

Covers:
- get_chain_root(): flat chains resolve in one hop
- get_continuation_chain(): root plus continuations, start-ordered
- get_incomplete_chains(): chains whose latest member is paused or working
- chain_total_minutes(): rounded sum over members
"""

from datetime import datetime, timedelta

from tt_core.models.enums import SessionState
from tt_core.store.chains import chain_total_minutes
from tt_core.store.core import TimeStore
from tt_core.store.models import Session

T0 = datetime(2025, 3, 10, 9, 0)


def _add(
    store: TimeStore,
    start_offset_min: int,
    duration_min: int | None,
    state: SessionState,
    continues: int | None = None,
    description: str = "Chain work",
) -> int:
    """Insert a session starting ``start_offset_min`` after T0."""
    start = T0 + timedelta(minutes=start_offset_min)
    end = start + timedelta(minutes=duration_min) if duration_min is not None else None
    return store.insert_session(
        Session(
            start_time=start,
            end_time=end,
            description=description,
            state=state,
            continues_session_id=continues,
        )
    )


# ==========================================================================
# Root resolution
# ==========================================================================


class TestChainRoot:
    """get_chain_root() returns the session or the root it continues."""

    def test_standalone_session_is_its_own_root(self, store: TimeStore) -> None:
        session_id = _add(store, 0, None, SessionState.WORKING)

        root = store.get_chain_root(session_id)

        assert root is not None
        assert root.id == session_id

    def test_continuation_resolves_to_root(self, store: TimeStore) -> None:
        root_id = _add(store, 0, 30, SessionState.PAUSED)
        second = _add(store, 60, 30, SessionState.PAUSED, continues=root_id)
        third = _add(store, 120, None, SessionState.WORKING, continues=root_id)

        for member in (root_id, second, third):
            root = store.get_chain_root(member)
            assert root is not None
            assert root.id == root_id

    def test_missing_session_has_no_root(self, store: TimeStore) -> None:
        assert store.get_chain_root(404) is None


# ==========================================================================
# Whole chain
# ==========================================================================


class TestContinuationChain:
    """get_continuation_chain() returns every member, root first."""

    def test_chain_from_any_member_is_identical(self, store: TimeStore) -> None:
        root_id = _add(store, 0, 30, SessionState.PAUSED)
        second = _add(store, 60, 30, SessionState.PAUSED, continues=root_id)
        third = _add(store, 120, None, SessionState.WORKING, continues=root_id)
        _add(store, 200, 10, SessionState.COMPLETED, description="Unrelated")

        expected = [root_id, second, third]
        for member in expected:
            assert [s.id for s in store.get_continuation_chain(member)] == expected

    def test_every_continuation_points_at_root(self, store: TimeStore) -> None:
        root_id = _add(store, 0, 30, SessionState.PAUSED)
        _add(store, 60, 30, SessionState.PAUSED, continues=root_id)
        _add(store, 120, None, SessionState.WORKING, continues=root_id)

        chain = store.get_continuation_chain(root_id)

        assert chain[0].continues_session_id is None
        assert all(s.continues_session_id == root_id for s in chain[1:])

    def test_single_session_chain(self, store: TimeStore) -> None:
        session_id = _add(store, 0, 15, SessionState.COMPLETED)

        assert [s.id for s in store.get_continuation_chain(session_id)] == [session_id]

    def test_missing_session_gives_empty_chain(self, store: TimeStore) -> None:
        assert store.get_continuation_chain(404) == []


# ==========================================================================
# Incomplete chains
# ==========================================================================


class TestIncompleteChains:
    """get_incomplete_chains() judges a chain by its latest member."""

    def test_paused_root_is_incomplete(self, store: TimeStore) -> None:
        root_id = _add(store, 0, 30, SessionState.PAUSED)

        assert [s.id for s in store.get_incomplete_chains()] == [root_id]

    def test_completed_latest_member_finishes_chain(self, store: TimeStore) -> None:
        root_id = _add(store, 0, 30, SessionState.PAUSED)
        _add(store, 60, 30, SessionState.COMPLETED, continues=root_id)

        assert store.get_incomplete_chains() == []

    def test_working_latest_member_keeps_chain_open(self, store: TimeStore) -> None:
        root_id = _add(store, 0, 30, SessionState.PAUSED)
        _add(store, 60, None, SessionState.WORKING, continues=root_id)

        assert [s.id for s in store.get_incomplete_chains()] == [root_id]

    def test_abandoned_standalone_is_not_listed(self, store: TimeStore) -> None:
        _add(store, 0, 30, SessionState.ABANDONED)

        assert store.get_incomplete_chains() == []

    def test_roots_newest_first(self, store: TimeStore) -> None:
        older = _add(store, 0, 30, SessionState.PAUSED, description="Older")
        newer = _add(store, 60, 30, SessionState.PAUSED, description="Newer")

        assert [s.id for s in store.get_incomplete_chains()] == [newer, older]


# ==========================================================================
# Totals
# ==========================================================================


class TestChainTotalMinutes:
    """chain_total_minutes() sums member spans."""

    def test_sums_closed_members(self, store: TimeStore) -> None:
        root_id = _add(store, 0, 30, SessionState.PAUSED)
        _add(store, 60, 45, SessionState.PAUSED, continues=root_id)

        chain = store.get_continuation_chain(root_id)

        assert chain_total_minutes(chain) == 75

    def test_working_member_counts_up_to_now(self, store: TimeStore) -> None:
        root_id = _add(store, 0, 30, SessionState.PAUSED)
        _add(store, 60, None, SessionState.WORKING, continues=root_id)

        chain = store.get_continuation_chain(root_id)
        now = T0 + timedelta(minutes=80)

        assert chain_total_minutes(chain, now) == 50

    def test_rounds_to_nearest_minute(self) -> None:
        chain = [
            Session(
                start_time=T0,
                end_time=T0 + timedelta(minutes=10, seconds=40),
                description="Short",
                state=SessionState.COMPLETED,
            )
        ]

        assert chain_total_minutes(chain) == 11
