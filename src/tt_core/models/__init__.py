"""Models for tt-core."""

from tt_core.models.enums import SessionState
from tt_core.models.plan import CompletionData, DailyPlan, NewTask, PlanTask

__all__ = [
    "CompletionData",
    "DailyPlan",
    "NewTask",
    "PlanTask",
    "SessionState",
]
