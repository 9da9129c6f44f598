"""Managed agent session identity and lifecycle."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class SessionId:
    """Unique identifier of a managed session."""

    value: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def new(cls) -> SessionId:
        return cls()

    @classmethod
    def from_u128(cls, val: int) -> SessionId:
        """Create a deterministic identifier from a 128-bit integer."""
        return cls(uuid.UUID(int=val))

    def __str__(self) -> str:
        return str(self.value)


class SessionStatus(Enum):
    """Lifecycle status of a managed session."""

    READY = "Ready"
    GENERATING = "Generating"
    TOOL_PENDING = "ToolPending"
    COMPLETE = "Complete"
    ABORTED = "Aborted"