"""Base class for task schedulers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime

from tt_core.models.plan import CompletionData, DailyPlan, NewTask, PlanTask


class TaskScheduler(ABC):
    """Abstract task-scheduling protocol.

    A scheduler owns a backlog of tasks, can rank them into a plan for a
    day, and is told when a task was finished.
    """

    @abstractmethod
    def get_daily_plan(self, day: date | datetime, limit: int | None = None) -> DailyPlan:
        """Build the plan for a day.

        Args:
            day: The day to plan for
            limit: Maximum number of plan entries

        Returns:
            Ranked, deduplicated plan
        """

    @abstractmethod
    def get_task(self, task_id: int) -> PlanTask | None:
        """Look up a single plan item by id."""

    @abstractmethod
    def add_task(self, task: NewTask) -> PlanTask:
        """Add a task to the backlog.

        Returns:
            The stored task with its assigned id
        """

    @abstractmethod
    def remove_task(self, task_id: int) -> None:
        """Remove a task from the backlog."""

    @abstractmethod
    def complete_task(self, completion: CompletionData) -> None:
        """Record that a task was finished."""

    def is_available(self) -> bool:
        """Whether the scheduler can serve requests."""
        return True
