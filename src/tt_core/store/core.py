"""Core TimeStore class for the time store.

Contains the main TimeStore class with connection management and delegation
to operation modules.
"""

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from types import TracebackType
from typing import Any, Self

from tt_core.config.paths import MEMORY_DB
from tt_core.exceptions import DatabaseError
from tt_core.models.enums import SessionState
from tt_core.store import chains, selection, sessions, tags, tasks
from tt_core.store.models import ScheduledTask, Session, TaskSelection
from tt_core.store.schema import SCHEMA_SQL, SCHEMA_VERSION

logger = logging.getLogger(__name__)


class TimeStore:
    """SQLite-based store for sessions and scheduled tasks.

    Owns all persisted state. Single-process and synchronous: one
    connection per store instance.
    """

    def __init__(self, db_path: Path | str = MEMORY_DB):
        """Open (and if needed create) the store.

        Args:
            db_path: Path to SQLite database file, or ":memory:".

        Raises:
            DatabaseError: If the database cannot be opened or initialized.
        """
        self.db_path = db_path
        self._conn: sqlite3.Connection | None = None
        try:
            self._ensure_schema()
        except (sqlite3.Error, OSError) as e:
            self.close()
            raise DatabaseError(
                f"Failed to open database: {e}", operation="open database", cause=e
            ) from e

    @property
    def is_memory(self) -> bool:
        """Whether this store lives only in memory."""
        return str(self.db_path) == MEMORY_DB

    def _get_connection(self) -> sqlite3.Connection:
        """Get the database connection, opening it on first use."""
        if self._conn is None:
            if not self.is_memory:
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(str(self.db_path), timeout=30.0)
            self._conn.row_factory = sqlite3.Row
            # WAL for durability without blocking readers
            self._conn.execute("PRAGMA journal_mode=WAL")
            self._conn.execute("PRAGMA synchronous=NORMAL")
            # foreign_keys: tag ownership and session self-links
            self._conn.execute("PRAGMA foreign_keys = ON")
        return self._conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database transactions."""
        conn = self._get_connection()
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Database transaction error: {e}", exc_info=True)
            raise

    def _ensure_schema(self) -> None:
        """Create database schema if needed."""
        with self._transaction() as conn:
            try:
                row = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()
                current_version = row[0] if row and row[0] is not None else 0
            except sqlite3.OperationalError:
                current_version = 0

            if current_version < SCHEMA_VERSION:
                conn.executescript(SCHEMA_SQL)
                conn.execute("DELETE FROM schema_version")
                conn.execute("INSERT INTO schema_version (version) VALUES (?)", (SCHEMA_VERSION,))
                logger.info(f"Time store schema initialized (v{SCHEMA_VERSION})")

    def get_schema_version(self) -> int:
        """Get current database schema version.

        Returns:
            Schema version number, or 0 if schema_version table doesn't exist.
        """
        try:
            cursor = self._get_connection().execute(
                "SELECT version FROM schema_version ORDER BY version DESC LIMIT 1"
            )
            row = cursor.fetchone()
            return row[0] if row else 0
        except sqlite3.OperationalError:
            return 0

    def close(self) -> None:
        """Checkpoint the WAL and close the connection.

        The checkpoint is best effort: an in-memory database has nothing to
        checkpoint, and a failure here must not prevent closing.
        """
        if self._conn is None:
            return
        try:
            self._conn.execute("PRAGMA wal_checkpoint(RESTART)")
        except sqlite3.Error as e:
            logger.debug(f"WAL checkpoint skipped: {e}")
        self._conn.close()
        self._conn = None

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ==========================================================================
    # Session operations - delegate to sessions module
    # ==========================================================================

    def insert_session(self, session: Session) -> int:
        """Insert a session and return its id."""
        return sessions.insert_session(self, session)

    def update_session(self, session_id: int, **updates: Any) -> None:
        """Update selected session fields."""
        sessions.update_session(self, session_id, **updates)

    def get_session(self, session_id: int) -> Session | None:
        """Get session by ID."""
        return sessions.get_session(self, session_id)

    def get_active_session(self) -> Session | None:
        """Get the open working session."""
        return sessions.get_active_session(self)

    def get_all_active_sessions(self) -> list[Session]:
        """Get all sessions without an end time."""
        return sessions.get_all_active_sessions(self)

    def get_sessions_by_time_range(
        self,
        start: datetime,
        end: datetime,
        project: str | None = None,
        tags: list[str] | None = None,
        state: SessionState | str | None = None,
    ) -> list[Session]:
        """Get sessions started within [start, end)."""
        return sessions.get_sessions_by_time_range(
            self, start, end, project=project, tags=tags, state=state
        )

    def find_paused_session_to_resume(
        self,
        description: str | None = None,
        project: str | None = None,
        primary_tag: str | None = None,
    ) -> Session | None:
        """Find the most recent matching paused session."""
        return sessions.find_paused_session_to_resume(self, description, project, primary_tag)

    def delete_session(self, session_id: int) -> bool:
        """Delete a session."""
        return sessions.delete_session(self, session_id)

    # ==========================================================================
    # Tag operations - delegate to tags module
    # ==========================================================================

    def insert_session_tags(self, session_id: int, tag_list: list[str]) -> None:
        """Attach tags to a session."""
        tags.insert_session_tags(self, session_id, tag_list)

    def get_session_tags(self, session_id: int) -> list[str]:
        """Get a session's tags."""
        return tags.get_session_tags(self, session_id)

    def update_session_tags(self, session_id: int, tag_list: list[str]) -> None:
        """Replace a session's tags."""
        tags.update_session_tags(self, session_id, tag_list)

    def insert_scheduled_task_tags(self, task_id: int, tag_list: list[str]) -> None:
        """Attach tags to a scheduled task."""
        tags.insert_scheduled_task_tags(self, task_id, tag_list)

    def get_scheduled_task_tags(self, task_id: int) -> list[str]:
        """Get a scheduled task's tags."""
        return tags.get_scheduled_task_tags(self, task_id)

    def update_scheduled_task_tags(self, task_id: int, tag_list: list[str]) -> None:
        """Replace a scheduled task's tags."""
        tags.update_scheduled_task_tags(self, task_id, tag_list)

    # ==========================================================================
    # Scheduled task operations - delegate to tasks module
    # ==========================================================================

    def insert_scheduled_task(self, task: ScheduledTask) -> int:
        """Insert a scheduled task and return its id."""
        return tasks.insert_scheduled_task(self, task)

    def update_scheduled_task(self, task_id: int, **updates: Any) -> None:
        """Update selected scheduled task fields."""
        tasks.update_scheduled_task(self, task_id, **updates)

    def get_scheduled_task(self, task_id: int) -> ScheduledTask | None:
        """Get scheduled task by ID."""
        return tasks.get_scheduled_task(self, task_id)

    def get_all_scheduled_tasks(self) -> list[ScheduledTask]:
        """Get all scheduled tasks, oldest first."""
        return tasks.get_all_scheduled_tasks(self)

    def delete_scheduled_task(self, task_id: int) -> bool:
        """Delete a scheduled task."""
        return tasks.delete_scheduled_task(self, task_id)

    def get_scheduled_tasks_for_selection(self, now: datetime | None = None) -> TaskSelection:
        """Get categorized candidates for a daily plan."""
        return selection.get_scheduled_tasks_for_selection(self, now)

    # ==========================================================================
    # Chain operations - delegate to chains module
    # ==========================================================================

    def get_chain_root(self, session_id: int) -> Session | None:
        """Resolve the root of a session's chain."""
        return chains.get_chain_root(self, session_id)

    def get_continuation_chain(self, session_id: int) -> list[Session]:
        """Get the full chain of a session, root first."""
        return chains.get_continuation_chain(self, session_id)

    def get_incomplete_chains(self) -> list[Session]:
        """Get roots of chains whose latest member is paused or working."""
        return chains.get_incomplete_chains(self)
