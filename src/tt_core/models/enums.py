"""Enum types for tt-core."""

from enum import Enum


class SessionState(str, Enum):
    """Lifecycle state of a work session.

    ``working`` is the only open state. ``paused`` sessions are closed but
    can be resumed; ``completed`` and ``abandoned`` are terminal.
    """

    WORKING = "working"
    PAUSED = "paused"
    COMPLETED = "completed"
    ABANDONED = "abandoned"

    @classmethod
    def values(cls) -> list[str]:
        """Return list of all state values."""
        return [s.value for s in cls]

    @property
    def is_terminal(self) -> bool:
        """Whether no further transitions are allowed."""
        return self in (SessionState.COMPLETED, SessionState.ABANDONED)

    @property
    def is_incomplete(self) -> bool:
        """Whether the work is neither completed nor abandoned."""
        return self in (SessionState.WORKING, SessionState.PAUSED)
