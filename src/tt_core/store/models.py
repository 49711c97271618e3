"""Data models for the time store.

Dataclasses representing sessions, scheduled tasks and the derived views
assembled for daily planning.
"""

import sqlite3
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from tt_core.constants import DEFAULT_PRIORITY
from tt_core.models.enums import SessionState


def to_db_time(value: datetime) -> str:
    """Serialize a datetime for storage.

    Aware datetimes are converted to naive local time and every value is
    written with microseconds, so stored strings compare chronologically.
    """
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value.isoformat(timespec="microseconds")


def from_db_time(value: str | None) -> datetime | None:
    """Parse a stored timestamp."""
    return datetime.fromisoformat(value) if value else None


@dataclass
class Session:
    """A single span of tracked work."""

    start_time: datetime
    description: str
    state: SessionState = SessionState.WORKING
    id: int | None = None
    end_time: datetime | None = None  # None while the session is open
    project: str | None = None
    estimate_minutes: int | None = None
    explicit_duration_minutes: int | None = None
    remark: str | None = None
    parent_session_id: int | None = None  # Session this one interrupted
    continues_session_id: int | None = None  # Always the chain root
    created_at: datetime | None = None
    updated_at: datetime | None = None
    tags: list[str] = field(default_factory=list)

    @property
    def is_open(self) -> bool:
        """Whether the session has no end time yet."""
        return self.end_time is None

    def elapsed_minutes(self, now: datetime | None = None) -> float:
        """Minutes covered by this session.

        Closed sessions count up to their end time, a working session counts
        up to ``now``. Anything else contributes nothing.
        """
        if self.end_time is not None:
            return (self.end_time - self.start_time).total_seconds() / 60
        if self.state == SessionState.WORKING:
            return ((now or datetime.now()) - self.start_time).total_seconds() / 60
        return 0.0

    def to_row(self) -> dict[str, Any]:
        """Convert to database row."""
        now = datetime.now()
        return {
            "start_time": to_db_time(self.start_time),
            "end_time": to_db_time(self.end_time) if self.end_time else None,
            "description": self.description,
            "project": self.project,
            "estimate_minutes": self.estimate_minutes,
            "explicit_duration_minutes": self.explicit_duration_minutes,
            "remark": self.remark,
            "state": SessionState(self.state).value,
            "parent_session_id": self.parent_session_id,
            "continues_session_id": self.continues_session_id,
            "created_at": to_db_time(self.created_at or now),
            "updated_at": to_db_time(self.updated_at or now),
        }

    @classmethod
    def from_row(cls, row: sqlite3.Row, tags: list[str] | None = None) -> "Session":
        """Create from database row."""
        return cls(
            id=row["id"],
            start_time=datetime.fromisoformat(row["start_time"]),
            end_time=from_db_time(row["end_time"]),
            description=row["description"],
            project=row["project"],
            estimate_minutes=row["estimate_minutes"],
            explicit_duration_minutes=row["explicit_duration_minutes"],
            remark=row["remark"],
            state=SessionState(row["state"]),
            parent_session_id=row["parent_session_id"],
            continues_session_id=row["continues_session_id"],
            created_at=from_db_time(row["created_at"]),
            updated_at=from_db_time(row["updated_at"]),
            tags=list(tags) if tags else [],
        )


@dataclass
class ScheduledTask:
    """A planned work item that has not been started."""

    description: str
    priority: int = DEFAULT_PRIORITY  # 1 (most important) to 9
    id: int | None = None
    project: str | None = None
    estimate_minutes: int | None = None
    scheduled_date_time: datetime | None = None  # None means no deadline
    created_at: datetime | None = None
    tags: list[str] = field(default_factory=list)

    def to_row(self) -> dict[str, Any]:
        """Convert to database row."""
        return {
            "description": self.description,
            "project": self.project,
            "estimate_minutes": self.estimate_minutes,
            "priority": self.priority,
            "scheduled_date_time": (
                to_db_time(self.scheduled_date_time) if self.scheduled_date_time else None
            ),
            "created_at": to_db_time(self.created_at or datetime.now()),
        }

    @classmethod
    def from_row(cls, row: sqlite3.Row, tags: list[str] | None = None) -> "ScheduledTask":
        """Create from database row."""
        return cls(
            id=row["id"],
            description=row["description"],
            project=row["project"],
            estimate_minutes=row["estimate_minutes"],
            priority=row["priority"],
            scheduled_date_time=from_db_time(row["scheduled_date_time"]),
            created_at=from_db_time(row["created_at"]),
            tags=list(tags) if tags else [],
        )


@dataclass
class IncompleteChain:
    """The latest member of an unfinished chain, with chain totals.

    Computed on read for daily planning; never persisted.
    """

    session: Session
    total_minutes: int
    chain_session_count: int


@dataclass
class TaskSelection:
    """Candidate lists for a daily plan, one per category."""

    incomplete: list[IncompleteChain] = field(default_factory=list)
    urgent: list[ScheduledTask] = field(default_factory=list)
    important: list[ScheduledTask] = field(default_factory=list)
    oldest: list[ScheduledTask] = field(default_factory=list)
