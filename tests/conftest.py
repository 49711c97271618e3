"""Pytest configuration and fixtures for tt-core tests."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from tt_core.services.scheduler import TTScheduler
from tt_core.services.time_tracking import TimeTrackingService
from tt_core.store.core import TimeStore


@pytest.fixture()
def db_path(tmp_path: Path) -> Path:
    """Database location inside the test's temporary directory."""
    return tmp_path / "tt" / "tt.db"


@pytest.fixture()
def store(db_path: Path) -> Iterator[TimeStore]:
    """Create a TimeStore with a real temp SQLite database."""
    with TimeStore(db_path) as time_store:
        yield time_store


@pytest.fixture()
def service(store: TimeStore) -> TimeTrackingService:
    """Session lifecycle service over the temp store."""
    return TimeTrackingService(store)


@pytest.fixture()
def scheduler(store: TimeStore) -> TTScheduler:
    """Daily-plan scheduler over the temp store."""
    return TTScheduler(store)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep TT_* variables from the developer's shell out of the tests."""
    for name in ("TT_DB_PATH", "TT_PLAN_LIMIT", "TT_WORKDAY_MINUTES", "TT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_tt_logger() -> Iterator[None]:
    """Drop handlers attached by configure_logging() during a test."""
    yield
    tt_logger = logging.getLogger("tt_core")
    for handler in tt_logger.handlers:
        handler.close()
    tt_logger.handlers.clear()
    tt_logger.propagate = True
    tt_logger.setLevel(logging.NOTSET)
