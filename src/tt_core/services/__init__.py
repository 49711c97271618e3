"""Service layer for tt-core."""

from tt_core.services.base import TaskScheduler
from tt_core.services.scheduler import TTScheduler
from tt_core.services.time_tracking import StartSessionResult, TimeTrackingService

__all__ = [
    "StartSessionResult",
    "TTScheduler",
    "TaskScheduler",
    "TimeTrackingService",
]
