"""Session lifecycle service.

Drives the session state machine on top of the TimeStore:

    working -> paused | completed | abandoned
    paused  -> abandoned

Resuming a paused session never reopens it. It starts a new session linked
to the chain root, which is the only way a chain grows.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from tt_core.constants import ENTITY_SESSION
from tt_core.exceptions import NotFoundError, ValidationError
from tt_core.models.enums import SessionState
from tt_core.store.chains import chain_total_minutes
from tt_core.store.core import TimeStore
from tt_core.store.models import Session

logger = logging.getLogger(__name__)


@dataclass
class StartSessionResult:
    """Outcome of starting (or resuming) a session."""

    session: Session
    paused_session: Session | None = None


class TimeTrackingService:
    """Manages session lifecycle: start, stop, pause, resume, abandon.

    Holds no state of its own; every call reads fresh from the store.
    The single-active-session rule is checked before writing, which is
    enough for one user in one process but not safe against concurrent
    writers.
    """

    def __init__(self, store: TimeStore):
        """Initialize the service.

        Args:
            store: Store that owns all sessions.
        """
        self.store = store

    def _require_session(self, session_id: int) -> Session:
        session = self.store.get_session(session_id)
        if session is None:
            raise NotFoundError(
                f"Session {session_id} not found", entity=ENTITY_SESSION, entity_id=session_id
            )
        return session

    def start_session(
        self,
        description: str,
        project: str | None = None,
        tags: list[str] | None = None,
        estimate_minutes: int | None = None,
        start_time: datetime | None = None,
        pause_active: bool = False,
        continues_session_id: int | None = None,
        parent_session_id: int | None = None,
    ) -> StartSessionResult:
        """Start a new working session.

        Args:
            description: What is being worked on.
            project: Optional project label.
            tags: Optional tags.
            estimate_minutes: Optional estimate.
            start_time: Defaults to now.
            pause_active: Pause the currently active session instead of failing.
            continues_session_id: Chain root this session resumes.
            parent_session_id: Session this one interrupts.

        Returns:
            The new session and, if one was paused to make room, that session.

        Raises:
            ValidationError: If a session is active and pause_active is False.
        """
        start_time = start_time or datetime.now()
        paused_session: Session | None = None

        active = self.store.get_active_session()
        if active is not None and active.id is not None:
            if not pause_active:
                raise ValidationError(
                    f'Cannot start session: already tracking "{active.description}". '
                    "Use pause_active to pause it first.",
                    session_id=active.id,
                    state=active.state.value,
                )
            self.store.update_session(active.id, state=SessionState.PAUSED, end_time=start_time)
            paused_session = self._require_session(active.id)
            logger.info(f"Paused session {active.id} to start a new one")

        session_id = self.store.insert_session(
            Session(
                start_time=start_time,
                description=description,
                project=project,
                estimate_minutes=estimate_minutes,
                state=SessionState.WORKING,
                continues_session_id=continues_session_id,
                parent_session_id=parent_session_id,
            )
        )
        if tags:
            self.store.insert_session_tags(session_id, tags)

        session = self._require_session(session_id)
        logger.info(f"Started session {session_id}: {description[:50]}")
        return StartSessionResult(session=session, paused_session=paused_session)

    def stop_session(
        self,
        end_time: datetime | None = None,
        remark: str | None = None,
        explicit_duration_minutes: int | None = None,
    ) -> Session:
        """Complete the active session.

        Raises:
            ValidationError: If no session is active.
        """
        active = self.store.get_active_session()
        if active is None or active.id is None:
            raise ValidationError("No active session to stop")

        updates: dict[str, object] = {
            "state": SessionState.COMPLETED,
            "end_time": end_time or datetime.now(),
        }
        if remark is not None:
            updates["remark"] = remark
        if explicit_duration_minutes is not None:
            updates["explicit_duration_minutes"] = explicit_duration_minutes
        self.store.update_session(active.id, **updates)

        logger.info(f"Completed session {active.id}")
        return self._require_session(active.id)

    def pause_session(self, end_time: datetime | None = None) -> Session:
        """Pause the active session.

        Only closes the current session; resuming later creates the chain link.

        Raises:
            ValidationError: If no session is active.
        """
        active = self.store.get_active_session()
        if active is None or active.id is None:
            raise ValidationError("No active session to pause")

        self.store.update_session(
            active.id, state=SessionState.PAUSED, end_time=end_time or datetime.now()
        )
        logger.info(f"Paused session {active.id}")
        return self._require_session(active.id)

    def resume_session(
        self, session_id: int, start_time: datetime | None = None
    ) -> StartSessionResult:
        """Resume a paused session by starting a continuation of its chain.

        The new session always points at the chain root, never at the paused
        session itself when that is already a continuation, so chains stay
        one level deep. Any other active session is paused first.

        Raises:
            NotFoundError: If the session does not exist.
            ValidationError: If the session is not paused.
        """
        session = self._require_session(session_id)
        if session.state != SessionState.PAUSED:
            raise ValidationError(
                f'Cannot resume session in state "{session.state.value}". '
                "Only paused sessions can be resumed.",
                session_id=session_id,
                state=session.state.value,
            )

        root = self.store.get_chain_root(session_id)
        root_id = root.id if root is not None and root.id is not None else session_id

        result = self.start_session(
            description=session.description,
            project=session.project,
            tags=session.tags,
            estimate_minutes=session.estimate_minutes,
            start_time=start_time or datetime.now(),
            pause_active=True,
            continues_session_id=root_id,
        )
        logger.info(f"Resumed chain {root_id} as session {result.session.id}")
        return result

    def abandon_session(self, session_id: int) -> Session:
        """Mark a session abandoned, keeping its end time if it has one.

        Raises:
            NotFoundError: If the session does not exist.
            ValidationError: If the session is already completed or abandoned.
        """
        session = self._require_session(session_id)
        if session.state.is_terminal:
            raise ValidationError(
                f"Cannot abandon session that is already {session.state.value}",
                session_id=session_id,
                state=session.state.value,
            )

        self.store.update_session(
            session_id,
            state=SessionState.ABANDONED,
            end_time=datetime.now() if session.is_open else session.end_time,
        )
        logger.info(f"Abandoned session {session_id}")
        return self._require_session(session_id)

    def get_active_session(self) -> Session | None:
        """Get the currently active session."""
        return self.store.get_active_session()

    def get_incomplete_chains(self) -> list[Session]:
        """Get roots of all unfinished chains."""
        return self.store.get_incomplete_chains()

    def get_continuation_chain(self, session_id: int) -> list[Session]:
        """Get the full continuation chain for a session."""
        return self.store.get_continuation_chain(session_id)

    def chain_root(self, session_id: int) -> Session:
        """Resolve a session's chain root.

        Raises:
            NotFoundError: If the session does not exist.
        """
        self._require_session(session_id)
        root = self.store.get_chain_root(session_id)
        if root is None:
            raise NotFoundError(
                f"Chain root of session {session_id} not found",
                entity=ENTITY_SESSION,
                entity_id=session_id,
            )
        return root

    def find_paused_session(
        self,
        description: str | None = None,
        project: str | None = None,
        primary_tag: str | None = None,
    ) -> Session | None:
        """Find a paused session to resume based on criteria."""
        return self.store.find_paused_session_to_resume(description, project, primary_tag)

    def get_chain_total_minutes(self, session_id: int, now: datetime | None = None) -> int:
        """Total minutes spent on a session's chain, rounded."""
        return chain_total_minutes(self.store.get_continuation_chain(session_id), now)

    def get_sessions(
        self,
        start: datetime,
        end: datetime,
        project: str | None = None,
        tags: list[str] | None = None,
        state: SessionState | str | None = None,
    ) -> list[Session]:
        """Get sessions started within [start, end)."""
        return self.store.get_sessions_by_time_range(
            start, end, project=project, tags=tags, state=state
        )
