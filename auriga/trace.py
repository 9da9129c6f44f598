"""Traces: session-level groupings of turns."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum

from auriga.agent import AgentId
from auriga.turn import TokenUsage


@dataclass(frozen=True)
class TraceId:
    """Unique identifier of a trace."""

    value: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def new(cls) -> TraceId:
        return cls()

    @classmethod
    def from_u128(cls, val: int) -> TraceId:
        """Create a deterministic identifier from a 128-bit integer."""
        return cls(uuid.UUID(int=val))

    def __str__(self) -> str:
        return str(self.value)


class TraceStatus(Enum):
    ACTIVE = "Active"
    COMPLETE = "Complete"
    ABORTED = "Aborted"


@dataclass
class Trace:
    """One agent conversation session and its totals."""

    id: TraceId
    agent_id: AgentId
    session_id: str
    status: TraceStatus
    started_at: str
    completed_at: str | None
    turn_count: int
    token_usage: TokenUsage
    provider: str
    model: str | None = None