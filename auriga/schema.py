"""Database schema creation and versioning."""

from __future__ import annotations

import sqlite3

_CURRENT_VERSION = 4

_SCHEMA_V1 = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS traces (
    id TEXT PRIMARY KEY,
    agent_id TEXT NOT NULL,
    session_id TEXT NOT NULL,
    status TEXT NOT NULL,
    started_at TEXT NOT NULL,
    completed_at TEXT,
    turn_count INTEGER NOT NULL,
    input_tokens INTEGER NOT NULL,
    output_tokens INTEGER NOT NULL,
    cache_creation_input_tokens INTEGER,
    cache_read_input_tokens INTEGER,
    provider TEXT NOT NULL,
    model TEXT
);

CREATE TABLE IF NOT EXISTS turns (
    id INTEGER PRIMARY KEY,
    trace_id TEXT NOT NULL REFERENCES traces(id),
    agent_id TEXT NOT NULL,
    number INTEGER NOT NULL,
    status TEXT NOT NULL,
    uuid TEXT NOT NULL,
    parent_uuid TEXT,
    session_id TEXT,
    timestamp TEXT NOT NULL,
    message_type TEXT NOT NULL,
    cwd TEXT,
    git_branch TEXT,
    role TEXT NOT NULL,
    content TEXT NOT NULL,
    meta TEXT NOT NULL,
    extra TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_turns_trace_id ON turns(trace_id);
CREATE INDEX IF NOT EXISTS idx_traces_agent_id ON traces(agent_id);
"""


def init(conn: sqlite3.Connection) -> None:
    """Create missing tables and bring the stored schema version up to date."""
    version = get_version(conn)
    if version < 1:
        conn.executescript(_SCHEMA_V1)
    # Versions 2 to 4 held a schema that has since been removed.
    if version < _CURRENT_VERSION:
        _set_version(conn, _CURRENT_VERSION)


def get_version(conn: sqlite3.Connection) -> int:
    """The stored schema version, or 0 when there is none."""
    try:
        (exists,) = conn.execute(
            "SELECT COUNT(*) > 0 FROM sqlite_master "
            "WHERE type='table' AND name='schema_version'"
        ).fetchone()
    except sqlite3.Error:
        return 0
    if not exists:
        return 0
    try:
        row = conn.execute("SELECT version FROM schema_version LIMIT 1").fetchone()
    except sqlite3.Error:
        return 0
    if row is None or not isinstance(row[0], int):
        return 0
    return row[0]


def _set_version(conn: sqlite3.Connection, version: int) -> None:
    with conn:
        conn.execute("DELETE FROM schema_version")
        conn.execute("INSERT INTO schema_version (version) VALUES (?)", (version,))