"""Conversation turns, their content blocks and metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from auriga.agent import AgentId


@dataclass(frozen=True)
class TurnId:
    """Store-assigned identifier of a turn."""

    value: int


class MessageType(Enum):
    """Envelope-level message type."""

    USER = "User"
    ASSISTANT = "Assistant"
    SYSTEM = "System"


class TurnRole(Enum):
    """API-level conversation role."""

    USER = "User"
    ASSISTANT = "Assistant"


class StopReason(Enum):
    """Why the model stopped generating."""

    END_TURN = "EndTurn"
    TOOL_USE = "ToolUse"
    MAX_TOKENS = "MaxTokens"
    STOP_SEQUENCE = "StopSequence"


class TurnStatus(Enum):
    ACTIVE = "Active"
    COMPLETE = "Complete"


class ImageSourceType(Enum):
    BASE64 = "Base64"


@dataclass
class ImageSource:
    """Embedded image data."""

    source_type: ImageSourceType
    media_type: str
    data: str


@dataclass
class TextBlock:
    text: str


@dataclass
class ThinkingBlock:
    thinking: str
    signature: str | None = None


@dataclass
class ToolUseBlock:
    id: str
    name: str
    input: Any


@dataclass
class ToolResultBlock:
    """Result of a tool call; content is plain text or nested blocks."""

    tool_use_id: str
    content: str | list[ContentBlock]
    is_error: bool = False


@dataclass
class ImageBlock:
    source: ImageSource


ContentBlock = Union[TextBlock, ThinkingBlock, ToolUseBlock, ToolResultBlock, ImageBlock]
# Message body: a plain string or a list of content blocks.
MessageContent = Union[str, list]


@dataclass
class TokenUsage:
    """Token usage reported for a model response."""

    input_tokens: int
    output_tokens: int
    cache_creation_input_tokens: int | None = None
    cache_read_input_tokens: int | None = None

    def total(self) -> int:
        return self.input_tokens + self.output_tokens

    def to_dict(self) -> dict[str, Any]:
        return {
            "input_tokens": self.input_tokens,
            "output_tokens": self.output_tokens,
            "cache_creation_input_tokens": self.cache_creation_input_tokens,
            "cache_read_input_tokens": self.cache_read_input_tokens,
        }

    @classmethod
    def from_dict(cls, data: Any) -> TokenUsage:
        """Parse a usage object; raises ValueError on malformed data."""
        obj = _object(data, "token usage")
        return cls(
            input_tokens=_count(_field(obj, "input_tokens", int), "input_tokens"),
            output_tokens=_count(_field(obj, "output_tokens", int), "output_tokens"),
            cache_creation_input_tokens=_optional_count(obj, "cache_creation_input_tokens"),
            cache_read_input_tokens=_optional_count(obj, "cache_read_input_tokens"),
        )


@dataclass
class AssistantMeta:
    """Assistant-specific metadata from the model response."""

    model: str | None = None
    stop_reason: StopReason | None = None
    stop_sequence: str | None = None
    usage: TokenUsage | None = None
    request_id: str | None = None


@dataclass
class UserMeta:
    is_meta: bool = False
    is_compact_summary: bool = False
    source_tool_assistant_uuid: str | None = None


@dataclass
class SystemMeta:
    subtype: str | None = None
    level: str | None = None


TurnMeta = Union[UserMeta, AssistantMeta, SystemMeta]


@dataclass
class Turn:
    """One message in an agent's conversation history."""

    id: TurnId
    agent_id: AgentId
    number: int
    status: TurnStatus
    uuid: str
    parent_uuid: str | None
    session_id: str | None
    timestamp: str
    message_type: MessageType
    cwd: str | None
    git_branch: str | None
    role: TurnRole
    content: MessageContent
    meta: TurnMeta
    # Unmodelled fields from the log, kept losslessly.
    extra: Any = field(default_factory=dict)


@dataclass
class TurnBuilder:
    """A turn before the store assigns its id, agent and number."""

    uuid: str
    parent_uuid: str | None
    session_id: str | None
    timestamp: str
    message_type: MessageType
    cwd: str | None
    git_branch: str | None
    role: TurnRole
    content: MessageContent
    meta: TurnMeta
    status: TurnStatus
    extra: Any = field(default_factory=dict)

    def build(self, id: TurnId, agent_id: AgentId, number: int) -> Turn:
        return Turn(
            id=id,
            agent_id=agent_id,
            number=number,
            status=self.status,
            uuid=self.uuid,
            parent_uuid=self.parent_uuid,
            session_id=self.session_id,
            timestamp=self.timestamp,
            message_type=self.message_type,
            cwd=self.cwd,
            git_branch=self.git_branch,
            role=self.role,
            content=self.content,
            meta=self.meta,
            extra=self.extra,
        )


# ---------------------------------------------------------------------------
# JSON conversion (externally tagged variants)
# ---------------------------------------------------------------------------


def content_to_json(content: MessageContent) -> dict[str, Any]:
    """Convert message content to a JSON-compatible value."""
    if isinstance(content, str):
        return {"Text": content}
    if isinstance(content, list):
        return {"Blocks": [_block_to_json(block) for block in content]}
    raise TypeError(f"not message content: {content!r}")


def content_from_json(data: Any) -> MessageContent:
    """Parse message content; raises ValueError on malformed data."""
    tag, payload = _variant(data, "message content")
    if tag == "Text":
        return _check(payload, str, "Text")
    if tag == "Blocks":
        return _blocks_from_json(payload)
    raise ValueError(f"unknown message content variant {tag!r}")


def meta_to_json(meta: TurnMeta) -> dict[str, Any]:
    """Convert turn metadata to a JSON-compatible value."""
    match meta:
        case UserMeta():
            return {
                "User": {
                    "is_meta": meta.is_meta,
                    "is_compact_summary": meta.is_compact_summary,
                    "source_tool_assistant_uuid": meta.source_tool_assistant_uuid,
                }
            }
        case AssistantMeta():
            return {
                "Assistant": {
                    "model": meta.model,
                    "stop_reason": meta.stop_reason.value if meta.stop_reason else None,
                    "stop_sequence": meta.stop_sequence,
                    "usage": meta.usage.to_dict() if meta.usage else None,
                    "request_id": meta.request_id,
                }
            }
        case SystemMeta():
            return {"System": {"subtype": meta.subtype, "level": meta.level}}
    raise TypeError(f"not turn metadata: {meta!r}")


def meta_from_json(data: Any) -> TurnMeta:
    """Parse turn metadata; raises ValueError on malformed data."""
    tag, payload = _variant(data, "turn metadata")
    obj = _object(payload, tag)
    if tag == "User":
        return UserMeta(
            is_meta=_field(obj, "is_meta", bool),
            is_compact_summary=_field(obj, "is_compact_summary", bool),
            source_tool_assistant_uuid=_optional(obj, "source_tool_assistant_uuid", str),
        )
    if tag == "Assistant":
        stop_reason = obj.get("stop_reason")
        usage = obj.get("usage")
        return AssistantMeta(
            model=_optional(obj, "model", str),
            stop_reason=None if stop_reason is None else _enum(StopReason, stop_reason),
            stop_sequence=_optional(obj, "stop_sequence", str),
            usage=None if usage is None else TokenUsage.from_dict(usage),
            request_id=_optional(obj, "request_id", str),
        )
    if tag == "System":
        return SystemMeta(
            subtype=_optional(obj, "subtype", str),
            level=_optional(obj, "level", str),
        )
    raise ValueError(f"unknown turn metadata variant {tag!r}")


def _block_to_json(block: ContentBlock) -> dict[str, Any]:
    match block:
        case TextBlock(text=text):
            return {"Text": {"text": text}}
        case ThinkingBlock(thinking=thinking, signature=signature):
            return {"Thinking": {"thinking": thinking, "signature": signature}}
        case ToolUseBlock(id=tool_id, name=name, input=tool_input):
            return {"ToolUse": {"id": tool_id, "name": name, "input": tool_input}}
        case ToolResultBlock(tool_use_id=tool_use_id, content=content, is_error=is_error):
            return {
                "ToolResult": {
                    "tool_use_id": tool_use_id,
                    "content": content_to_json(content),
                    "is_error": is_error,
                }
            }
        case ImageBlock(source=source):
            return {
                "Image": {
                    "source": {
                        "source_type": source.source_type.value,
                        "media_type": source.media_type,
                        "data": source.data,
                    }
                }
            }
    raise TypeError(f"not a content block: {block!r}")


def _blocks_from_json(data: Any) -> list[ContentBlock]:
    if not isinstance(data, list):
        raise ValueError(f"expected a list of content blocks, got {data!r}")
    return [_block_from_json(item) for item in data]


def _block_from_json(data: Any) -> ContentBlock:
    tag, payload = _variant(data, "content block")
    obj = _object(payload, tag)
    if tag == "Text":
        return TextBlock(text=_field(obj, "text", str))
    if tag == "Thinking":
        return ThinkingBlock(
            thinking=_field(obj, "thinking", str),
            signature=_optional(obj, "signature", str),
        )
    if tag == "ToolUse":
        if "input" not in obj:
            raise ValueError("missing field 'input'")
        return ToolUseBlock(
            id=_field(obj, "id", str),
            name=_field(obj, "name", str),
            input=obj["input"],
        )
    if tag == "ToolResult":
        if "content" not in obj:
            raise ValueError("missing field 'content'")
        return ToolResultBlock(
            tool_use_id=_field(obj, "tool_use_id", str),
            content=content_from_json(obj["content"]),
            is_error=_field(obj, "is_error", bool),
        )
    if tag == "Image":
        source = _object(_field(obj, "source", dict), "image source")
        return ImageBlock(
            source=ImageSource(
                source_type=_enum(ImageSourceType, _field(source, "source_type", str)),
                media_type=_field(source, "media_type", str),
                data=_field(source, "data", str),
            )
        )
    raise ValueError(f"unknown content block variant {tag!r}")


def _variant(data: Any, what: str) -> tuple[str, Any]:
    if not isinstance(data, dict) or len(data) != 1:
        raise ValueError(f"expected a single-key object for {what}, got {data!r}")
    ((tag, payload),) = data.items()
    return tag, payload


def _object(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object for {what}, got {data!r}")
    return data


def _check(value: Any, kind: type, key: str) -> Any:
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ValueError(f"field {key!r} must be {kind.__name__}, got {value!r}")
    return value


def _field(obj: dict[str, Any], key: str, kind: type) -> Any:
    if key not in obj:
        raise ValueError(f"missing field {key!r}")
    return _check(obj[key], kind, key)


def _optional(obj: dict[str, Any], key: str, kind: type) -> Any:
    value = obj.get(key)
    return None if value is None else _check(value, kind, key)


def _count(value: int, key: str) -> int:
    if value < 0:
        raise ValueError(f"field {key!r} must not be negative, got {value}")
    return value


def _optional_count(obj: dict[str, Any], key: str) -> int | None:
    value = _optional(obj, key, int)
    return None if value is None else _count(value, key)


def _enum(enum_cls: type[Enum], value: Any) -> Any:
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        raise ValueError(f"unknown {enum_cls.__name__} {value!r}") from None