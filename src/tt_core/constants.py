"""Constants for tt-core.

Centralizes the magic numbers and strings used by the store, the lifecycle
service and the daily planner.
"""

from typing import Final

# =============================================================================
# Scheduled tasks
# =============================================================================

DEFAULT_PRIORITY: Final[int] = 5
MIN_PRIORITY: Final[int] = 1
MAX_PRIORITY: Final[int] = 9

# Incomplete work always maps to the most important priority in a plan
INCOMPLETE_SESSION_PRIORITY: Final[int] = 1

# =============================================================================
# Daily plan
# =============================================================================

DEFAULT_PLAN_LIMIT: Final[int] = 20
WORKDAY_MINUTES: Final[int] = 8 * 60
SELECTION_CATEGORY_LIMIT: Final[int] = 10

PLAN_ITEM_SESSION: Final[str] = "session"
PLAN_ITEM_TASK: Final[str] = "task"

CATEGORY_INCOMPLETE: Final[str] = "incomplete"
CATEGORY_URGENT: Final[str] = "urgent"
CATEGORY_IMPORTANT: Final[str] = "important"
CATEGORY_OLDEST: Final[str] = "oldest"
SELECTION_CATEGORIES: Final[tuple[str, ...]] = (
    CATEGORY_INCOMPLETE,
    CATEGORY_URGENT,
    CATEGORY_IMPORTANT,
    CATEGORY_OLDEST,
)

# =============================================================================
# Entities (used in error details)
# =============================================================================

ENTITY_SESSION: Final[str] = "session"
ENTITY_TASK: Final[str] = "task"
