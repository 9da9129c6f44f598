"""Generation requests and responses, tools, commands and skills."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from auriga.turn import ContentBlock, MessageContent, StopReason, TokenUsage, ToolUseBlock


@dataclass
class ToolDefinition:
    """A tool the model may invoke, with a JSON Schema for its input."""

    name: str
    description: str
    input_schema: Any


@dataclass
class ToolCall:
    """A tool invocation requested by the model."""

    id: str
    name: str
    input: Any


@dataclass
class ToolOutput:
    """Result of executing a tool call."""

    tool_call_id: str
    content: str
    is_error: bool = False


def extract_tool_calls(blocks: Iterable[ContentBlock]) -> list[ToolCall]:
    """Collect the tool calls among the given content blocks, in order."""
    return [
        ToolCall(id=block.id, name=block.name, input=block.input)
        for block in blocks
        if isinstance(block, ToolUseBlock)
    ]


class Role(Enum):
    USER = "User"
    ASSISTANT = "Assistant"


@dataclass
class Message:
    role: Role
    content: MessageContent


@dataclass(kw_only=True)
class GenerateRequest:
    """A single-shot generation request."""

    model: str
    max_tokens: int
    messages: list[Message] = field(default_factory=list)
    system: str | None = None
    temperature: float | None = None
    tools: list[ToolDefinition] = field(default_factory=list)
    stop_sequences: list[str] = field(default_factory=list)
    resume_session_id: str | None = None


@dataclass(kw_only=True)
class GenerateResponse:
    """Response from a single generation call."""

    content: list[ContentBlock]
    model: str
    stop_reason: StopReason
    usage: TokenUsage
    request_id: str | None = None
    provider_session_id: str | None = None


@dataclass
class CommandSpec:
    """How to start a native CLI agent process."""

    program: str
    args: list[str] = field(default_factory=list)
    env: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class SkillStatus:
    """A registered skill and whether it has been written to the project."""

    name: str
    description: str
    downloaded: bool = False