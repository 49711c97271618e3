"""Time store package.

Modules:
- schema.py: Database schema version and SQL
- models.py: Data models (Session, ScheduledTask, IncompleteChain, TaskSelection)
- core.py: Main TimeStore class with connection management
- sessions.py: Session CRUD and queries
- tags.py: Session and scheduled task tags
- tasks.py: Scheduled task CRUD
- chains.py: Continuation chain resolution
- selection.py: Daily-plan candidate categories
"""

from tt_core.store.core import TimeStore
from tt_core.store.models import IncompleteChain, ScheduledTask, Session, TaskSelection
from tt_core.store.schema import SCHEMA_SQL, SCHEMA_VERSION

__all__ = [
    # Main class
    "TimeStore",
    # Data models
    "IncompleteChain",
    "ScheduledTask",
    "Session",
    "TaskSelection",
    # Schema constants
    "SCHEMA_VERSION",
    "SCHEMA_SQL",
]
