"""Database schema for the time store.

Contains schema version and SQL for creating the database schema.
"""

# Schema version for migrations
# v1: sessions, scheduled_tasks and their tag tables
SCHEMA_VERSION = 1

SCHEMA_SQL = """
-- Schema version tracking
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY
);

-- Work sessions (one tracked span of work)
CREATE TABLE IF NOT EXISTS sessions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    start_time TEXT NOT NULL,
    end_time TEXT,  -- NULL while the session is open
    description TEXT NOT NULL,
    project TEXT,
    estimate_minutes INTEGER,
    explicit_duration_minutes INTEGER,  -- Overrides the timestamp-derived duration
    remark TEXT,
    state TEXT NOT NULL DEFAULT 'working'
        CHECK (state IN ('working', 'paused', 'completed', 'abandoned')),
    parent_session_id INTEGER,  -- Session this one interrupted
    continues_session_id INTEGER,  -- Chain root this session resumes
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    FOREIGN KEY (parent_session_id) REFERENCES sessions(id) ON DELETE SET NULL,
    FOREIGN KEY (continues_session_id) REFERENCES sessions(id) ON DELETE SET NULL
);

CREATE INDEX IF NOT EXISTS idx_sessions_start_time ON sessions(start_time);
CREATE INDEX IF NOT EXISTS idx_sessions_state ON sessions(state, end_time);
CREATE INDEX IF NOT EXISTS idx_sessions_continues ON sessions(continues_session_id);

CREATE TABLE IF NOT EXISTS session_tags (
    session_id INTEGER NOT NULL,
    tag TEXT NOT NULL,
    PRIMARY KEY (session_id, tag),
    FOREIGN KEY (session_id) REFERENCES sessions(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_session_tags_tag ON session_tags(tag);

-- Scheduled tasks (planned, not yet started; present means pending)
CREATE TABLE IF NOT EXISTS scheduled_tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    description TEXT NOT NULL,
    project TEXT,
    estimate_minutes INTEGER,
    priority INTEGER NOT NULL DEFAULT 5 CHECK (priority BETWEEN 1 AND 9),
    scheduled_date_time TEXT,  -- NULL means no deadline
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_scheduled_tasks_created ON scheduled_tasks(created_at);
CREATE INDEX IF NOT EXISTS idx_scheduled_tasks_scheduled ON scheduled_tasks(scheduled_date_time);
CREATE INDEX IF NOT EXISTS idx_scheduled_tasks_priority ON scheduled_tasks(priority, created_at);

CREATE TABLE IF NOT EXISTS scheduled_task_tags (
    scheduled_task_id INTEGER NOT NULL,
    tag TEXT NOT NULL,
    PRIMARY KEY (scheduled_task_id, tag),
    FOREIGN KEY (scheduled_task_id) REFERENCES scheduled_tasks(id) ON DELETE CASCADE
);
"""
