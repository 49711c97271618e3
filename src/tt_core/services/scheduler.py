"""Daily-plan scheduler backed by the time store.

Ordering logic, highest precedence first:
1. Incomplete chains (resume work in progress)
2. Urgent tasks (scheduled for today or overdue)
3. Important tasks (priority other than the default)
4. Oldest tasks (FIFO for everything else)

Each category is capped on its own before the merge. The merge walks the
categories in order, skips anything already added and stops at the limit.
"""

import logging
from datetime import date, datetime

from tt_core.constants import (
    CATEGORY_IMPORTANT,
    CATEGORY_INCOMPLETE,
    CATEGORY_OLDEST,
    CATEGORY_URGENT,
    DEFAULT_PLAN_LIMIT,
    DEFAULT_PRIORITY,
    ENTITY_TASK,
    INCOMPLETE_SESSION_PRIORITY,
    PLAN_ITEM_SESSION,
    PLAN_ITEM_TASK,
    SELECTION_CATEGORIES,
    WORKDAY_MINUTES,
)
from tt_core.exceptions import NotFoundError
from tt_core.models.enums import SessionState
from tt_core.models.plan import CompletionData, DailyPlan, NewTask, PlanTask
from tt_core.services.base import TaskScheduler
from tt_core.store.core import TimeStore
from tt_core.store.models import IncompleteChain, ScheduledTask, Session

logger = logging.getLogger(__name__)


class TTScheduler(TaskScheduler):
    """TaskScheduler with simple FIFO + priority ordering.

    Plan items are either scheduled tasks or incomplete sessions, and both
    share one id space from the caller's point of view: lookups try the
    scheduled task table first and fall back to sessions.
    """

    def __init__(
        self,
        store: TimeStore,
        plan_limit: int = DEFAULT_PLAN_LIMIT,
        workday_minutes: int = WORKDAY_MINUTES,
    ):
        """Initialize the scheduler.

        Args:
            store: Store holding tasks and sessions.
            plan_limit: Default maximum number of plan entries.
            workday_minutes: Nominal workday used for remaining minutes.
        """
        self.store = store
        self.plan_limit = plan_limit
        self.workday_minutes = workday_minutes

    def get_daily_plan(self, day: date | datetime, limit: int | None = None) -> DailyPlan:
        """Build a ranked plan from the current backlog.

        Urgency is judged against the end of the current calendar day; ``day``
        is recorded in the log only.

        Args:
            day: The day being planned.
            limit: Maximum number of entries (defaults to plan_limit).

        Returns:
            DailyPlan with entries, total estimated minutes and what is left
            of the workday.
        """
        limit = self.plan_limit if limit is None else limit
        selection = self.store.get_scheduled_tasks_for_selection()

        candidates_by_category: dict[str, list[PlanTask]] = {
            CATEGORY_INCOMPLETE: [self._chain_to_plan_task(c) for c in selection.incomplete],
            CATEGORY_URGENT: [self._task_to_plan_task(t) for t in selection.urgent],
            CATEGORY_IMPORTANT: [self._task_to_plan_task(t) for t in selection.important],
            CATEGORY_OLDEST: [self._task_to_plan_task(t) for t in selection.oldest],
        }

        seen: set[tuple[str, int]] = set()
        tasks: list[PlanTask] = []
        for category in SELECTION_CATEGORIES:
            for item in candidates_by_category[category]:
                if len(tasks) >= limit:
                    break
                key = (item.kind, item.id)
                if key in seen:
                    continue
                seen.add(key)
                tasks.append(item)
            logger.debug(f"Plan after {category}: {len(tasks)} entries")

        total_minutes = sum(task.estimate_minutes or 0 for task in tasks)
        remaining_minutes = max(0, self.workday_minutes - total_minutes)

        logger.info(f"Daily plan for {day:%Y-%m-%d}: {len(tasks)} entries, {total_minutes} min")
        return DailyPlan(
            tasks=tasks,
            total_minutes=total_minutes,
            remaining_minutes=remaining_minutes,
        )

    def get_task(self, task_id: int) -> PlanTask | None:
        """Look up a scheduled task, else a paused or working session."""
        task = self.store.get_scheduled_task(task_id)
        if task is not None:
            return self._task_to_plan_task(task)

        session = self.store.get_session(task_id)
        if session is not None and session.state.is_incomplete:
            return self._session_to_plan_task(session)

        return None

    def list_tasks(self) -> list[PlanTask]:
        """Get the whole scheduled backlog, oldest first."""
        return [self._task_to_plan_task(task) for task in self.store.get_all_scheduled_tasks()]

    def add_task(self, task: NewTask) -> PlanTask:
        """Add a scheduled task.

        Priority defaults to 5; the deadline stands in for the scheduled
        date-time when only that is given.
        """
        task_id = self.store.insert_scheduled_task(
            ScheduledTask(
                description=task.title,
                project=task.project,
                estimate_minutes=task.estimate_minutes,
                priority=task.priority if task.priority is not None else DEFAULT_PRIORITY,
                scheduled_date_time=task.scheduled_date_time or task.deadline,
            )
        )
        if task.tags:
            self.store.insert_scheduled_task_tags(task_id, task.tags)

        stored = self.store.get_scheduled_task(task_id)
        if stored is None:
            raise NotFoundError(
                f"Scheduled task {task_id} vanished after insert",
                entity=ENTITY_TASK,
                entity_id=task_id,
            )
        logger.info(f"Added task {task_id}: {task.title[:50]}")
        return self._task_to_plan_task(stored)

    def remove_task(self, task_id: int) -> None:
        """Delete a scheduled task, else hard-delete the session with that id.

        Deleting a session bypasses the lifecycle: it is not an abandon.

        Raises:
            NotFoundError: If neither a task nor a session has this id.
        """
        if self.store.get_scheduled_task(task_id) is not None:
            self.store.delete_scheduled_task(task_id)
            logger.info(f"Removed task {task_id}")
            return

        if self.store.get_session(task_id) is not None:
            self.store.delete_session(task_id)
            logger.info(f"Deleted session {task_id}")
            return

        raise NotFoundError(f"Task {task_id} not found", entity=ENTITY_TASK, entity_id=task_id)

    def complete_task(self, completion: CompletionData) -> None:
        """Finish a plan item.

        A scheduled task is deleted. A session is marked completed at
        ``completed_at``; ``actual_minutes`` is not stored because session
        durations come from timestamps.

        Raises:
            NotFoundError: If neither a task nor a session has this id.
        """
        task_id = completion.task_id
        if self.store.get_scheduled_task(task_id) is not None:
            self.store.delete_scheduled_task(task_id)
            logger.info(f"Completed task {task_id}")
            return

        if self.store.get_session(task_id) is not None:
            self.store.update_session(
                task_id, state=SessionState.COMPLETED, end_time=completion.completed_at
            )
            logger.info(f"Completed session {task_id}")
            return

        raise NotFoundError(f"Task {task_id} not found", entity=ENTITY_TASK, entity_id=task_id)

    # ==========================================================================
    # Conversion helpers
    # ==========================================================================

    @staticmethod
    def _task_to_plan_task(task: ScheduledTask) -> PlanTask:
        if task.id is None:
            raise ValueError("Cannot plan a task without an id")
        return PlanTask(
            id=task.id,
            title=task.description,
            kind=PLAN_ITEM_TASK,
            project=task.project,
            tags=task.tags,
            estimate_minutes=task.estimate_minutes,
            priority=task.priority,
            scheduled_date_time=task.scheduled_date_time,
            deadline=task.scheduled_date_time,
        )

    @staticmethod
    def _session_to_plan_task(
        session: Session,
        total_minutes: int | None = None,
        chain_session_count: int | None = None,
    ) -> PlanTask:
        if session.id is None:
            raise ValueError("Cannot plan a session without an id")
        return PlanTask(
            id=session.id,
            title=session.description,
            kind=PLAN_ITEM_SESSION,
            project=session.project,
            tags=session.tags,
            estimate_minutes=session.estimate_minutes,
            priority=INCOMPLETE_SESSION_PRIORITY,
            chain_total_minutes=total_minutes,
            chain_session_count=chain_session_count,
        )

    def _chain_to_plan_task(self, chain: IncompleteChain) -> PlanTask:
        return self._session_to_plan_task(
            chain.session,
            total_minutes=chain.total_minutes,
            chain_session_count=chain.chain_session_count,
        )
