"""Persistence of traces and their turns."""

from __future__ import annotations

import json
import sqlite3
import uuid
from enum import Enum
from typing import Any, Iterable

from auriga.agent import AgentId
from auriga.trace import Trace, TraceId, TraceStatus
from auriga.turn import (
    MessageType,
    TokenUsage,
    Turn,
    TurnId,
    TurnRole,
    TurnStatus,
    content_from_json,
    content_to_json,
    meta_from_json,
    meta_to_json,
)

_TRACE_COLUMNS = (
    "id, agent_id, session_id, status, started_at, completed_at, turn_count, "
    "input_tokens, output_tokens, cache_creation_input_tokens, "
    "cache_read_input_tokens, provider, model"
)
_TURN_COLUMNS = (
    "id, trace_id, agent_id, number, status, uuid, parent_uuid, session_id, "
    "timestamp, message_type, cwd, git_branch, role, content, meta, extra"
)


class TraceOperations:
    """Trace storage on an initialised SQLite connection."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def save_trace(self, trace: Trace, turns: Iterable[Turn]) -> None:
        """Insert or replace a trace and its turns in one transaction."""
        trace_id = str(trace.id)
        usage = trace.token_usage
        with self.conn:
            self.conn.execute(
                f"INSERT OR REPLACE INTO traces ({_TRACE_COLUMNS}) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    trace_id,
                    str(trace.agent_id),
                    trace.session_id,
                    trace.status.value,
                    trace.started_at,
                    trace.completed_at,
                    trace.turn_count,
                    usage.input_tokens,
                    usage.output_tokens,
                    usage.cache_creation_input_tokens,
                    usage.cache_read_input_tokens,
                    trace.provider,
                    trace.model,
                ),
            )
            for turn in turns:
                self.conn.execute(
                    f"INSERT OR REPLACE INTO turns ({_TURN_COLUMNS}) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                    (
                        turn.id.value,
                        trace_id,
                        str(turn.agent_id),
                        turn.number,
                        turn.status.value,
                        turn.uuid,
                        turn.parent_uuid,
                        turn.session_id,
                        turn.timestamp,
                        turn.message_type.value,
                        turn.cwd,
                        turn.git_branch,
                        turn.role.value,
                        _dumps(content_to_json(turn.content)),
                        _dumps(meta_to_json(turn.meta)),
                        _dumps(turn.extra),
                    ),
                )

    def load_trace(self, id: TraceId) -> Trace | None:
        """The trace with this id, or None if there is none."""
        row = self.conn.execute(
            f"SELECT {_TRACE_COLUMNS} FROM traces WHERE id = ?", (str(id),)
        ).fetchone()
        return None if row is None else _row_to_trace(row)

    def load_turns(self, trace_id: TraceId) -> list[Turn]:
        """The turns of a trace, ordered by turn id."""
        rows = self.conn.execute(
            f"SELECT {_TURN_COLUMNS} FROM turns WHERE trace_id = ? ORDER BY id",
            (str(trace_id),),
        ).fetchall()
        return [_row_to_turn(row) for row in rows]

    def list_traces(self, limit: int, offset: int) -> list[Trace]:
        """A page of traces, most recently started first."""
        rows = self.conn.execute(
            f"SELECT {_TRACE_COLUMNS} FROM traces ORDER BY started_at DESC LIMIT ? OFFSET ?",
            (limit, offset),
        ).fetchall()
        return [_row_to_trace(row) for row in rows]

    def list_agent_traces(self, agent_id: AgentId) -> list[Trace]:
        """All traces of one agent, most recently started first."""
        rows = self.conn.execute(
            f"SELECT {_TRACE_COLUMNS} FROM traces WHERE agent_id = ? ORDER BY started_at DESC",
            (str(agent_id),),
        ).fetchall()
        return [_row_to_trace(row) for row in rows]


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _parse_enum(enum_cls: type[Enum], value: str, default: Any) -> Any:
    """Stored enum text back to a member; unknown text falls back to the default."""
    try:
        return enum_cls(value)
    except ValueError:
        return default


def _row_to_trace(row: tuple[Any, ...]) -> Trace:
    (
        id_text,
        agent_text,
        session_id,
        status,
        started_at,
        completed_at,
        turn_count,
        input_tokens,
        output_tokens,
        cache_creation,
        cache_read,
        provider,
        model,
    ) = row
    if not isinstance(turn_count, int) or not 0 <= turn_count <= 0xFFFFFFFF:
        raise ValueError(f"turn_count out of range: {turn_count!r}")
    return Trace(
        id=TraceId(uuid.UUID(id_text)),
        agent_id=AgentId(uuid.UUID(agent_text)),
        session_id=session_id,
        status=_parse_enum(TraceStatus, status, TraceStatus.ACTIVE),
        started_at=started_at,
        completed_at=completed_at,
        turn_count=turn_count,
        token_usage=TokenUsage(
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            cache_creation_input_tokens=cache_creation,
            cache_read_input_tokens=cache_read,
        ),
        provider=provider,
        model=model,
    )


def _row_to_turn(row: tuple[Any, ...]) -> Turn:
    (
        turn_id,
        _trace_id,
        agent_text,
        number,
        status,
        turn_uuid,
        parent_uuid,
        session_id,
        timestamp,
        message_type,
        cwd,
        git_branch,
        role,
        content_text,
        meta_text,
        extra_text,
    ) = row
    return Turn(
        id=TurnId(turn_id),
        agent_id=AgentId(uuid.UUID(agent_text)),
        number=number,
        status=_parse_enum(TurnStatus, status, TurnStatus.ACTIVE),
        uuid=turn_uuid,
        parent_uuid=parent_uuid,
        session_id=session_id,
        timestamp=timestamp,
        message_type=_parse_enum(MessageType, message_type, MessageType.USER),
        cwd=cwd,
        git_branch=git_branch,
        role=_parse_enum(TurnRole, role, TurnRole.USER),
        content=content_from_json(json.loads(content_text)),
        meta=meta_from_json(json.loads(meta_text)),
        extra=json.loads(extra_text),
    )