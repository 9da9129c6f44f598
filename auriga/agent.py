"""Agent identity and runtime state."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class AgentId:
    """Unique identifier of an agent."""

    value: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def new(cls) -> AgentId:
        """Create a random identifier."""
        return cls()

    @classmethod
    def from_u128(cls, val: int) -> AgentId:
        """Create a deterministic identifier from a 128-bit integer."""
        return cls(uuid.UUID(int=val))

    def __str__(self) -> str:
        return str(self.value)


class AgentStatus(Enum):
    IDLE = "Idle"
    WORKING = "Working"


class DisplayMode(Enum):
    """How an agent's output is shown in the agent pane."""

    NATIVE = "Native"
    PROVIDER = "Provider"


@dataclass
class Agent:
    """A running agent and the state the UI tracks for it."""

    id: AgentId
    name: str
    provider: str
    status: AgentStatus = AgentStatus.IDLE
    display_mode: DisplayMode = DisplayMode.NATIVE
    session_id: str | None = None
    child_pid: int | None = None
    system_prompt_name: str | None = None
    # Monotonic timestamp of the last terminal activity.
    last_active_at: float | None = None