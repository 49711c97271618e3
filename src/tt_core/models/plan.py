"""Task-scheduling protocol models.

These are the value types exchanged through the TaskScheduler interface:
what a caller adds, what a plan contains, and how completion is reported.
They are view models assembled on read and are never persisted directly.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from tt_core.constants import MAX_PRIORITY, MIN_PRIORITY


class NewTask(BaseModel):
    """A task to be added to the scheduler."""

    title: str = Field(..., min_length=1, description="What needs to be done")
    project: str | None = None
    tags: list[str] = Field(default_factory=list)
    estimate_minutes: int | None = Field(default=None, ge=0)
    priority: int | None = Field(
        default=None,
        ge=MIN_PRIORITY,
        le=MAX_PRIORITY,
        description="1 (most important) to 9; unset means the default priority",
    )
    scheduled_date_time: datetime | None = None
    deadline: datetime | None = Field(
        default=None,
        description="Used as the scheduled date-time when that is not given",
    )


class PlanTask(BaseModel):
    """A single entry in a daily plan.

    Scheduled tasks carry their own priority. Incomplete sessions always
    carry priority 1 and are annotated with their chain totals.
    """

    id: int
    title: str
    kind: str = Field(description="'task' or 'session'")
    project: str | None = None
    tags: list[str] = Field(default_factory=list)
    estimate_minutes: int | None = None
    priority: int
    scheduled_date_time: datetime | None = None
    deadline: datetime | None = None
    chain_total_minutes: int | None = None
    chain_session_count: int | None = None


class DailyPlan(BaseModel):
    """Ranked, deduplicated and capped plan for one day."""

    tasks: list[PlanTask] = Field(default_factory=list)
    total_minutes: int = 0
    remaining_minutes: int = 0


class CompletionData(BaseModel):
    """Report that a plan item was finished."""

    task_id: int
    completed_at: datetime
    actual_minutes: int | None = Field(default=None, ge=0)
