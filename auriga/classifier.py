"""Classifier triggers, results and configuration files."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from auriga.trace import TraceId
from auriga.turn import ToolResultBlock, ToolUseBlock, Turn


@dataclass(frozen=True)
class ClassificationId:
    """Unique identifier of a classification result."""

    value: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def new(cls) -> ClassificationId:
        return cls()

    @classmethod
    def from_u128(cls, val: int) -> ClassificationId:
        """Create a deterministic identifier from a 128-bit integer."""
        return cls(uuid.UUID(int=val))

    def __str__(self) -> str:
        return str(self.value)


class TriggerPhase(Enum):
    """When a classifier runs."""

    INCREMENTAL = "incremental"
    ON_COMPLETE = "on_complete"
    BOTH = "both"


_PHASE_NAMES = {
    TriggerPhase.INCREMENTAL: "Incremental",
    TriggerPhase.ON_COMPLETE: "OnComplete",
    TriggerPhase.BOTH: "Both",
}


@dataclass
class TurnFilter:
    """Which turns a classifier sees."""

    tools: list[str] = field(default_factory=list)
    tool_error: bool | None = None

    def has_filter(self) -> bool:
        return bool(self.tools) or self.tool_error is not None

    def matches(self, turn: Turn) -> bool:
        """Whether a turn satisfies every criterion of the filter."""
        if isinstance(turn.content, str):
            # Text-only turns carry no tool blocks.
            return not self.tools and self.tool_error is None
        blocks = turn.content
        if self.tools and not any(
            isinstance(block, ToolUseBlock) and block.name in self.tools for block in blocks
        ):
            return False
        if self.tool_error is True and not any(
            isinstance(block, ToolResultBlock) and block.is_error for block in blocks
        ):
            return False
        return True


@dataclass
class ClassifierTrigger:
    """When a classifier runs and which turns it is given."""

    phase: TriggerPhase
    filter: TurnFilter = field(default_factory=TurnFilter)

    @classmethod
    def incremental(cls) -> ClassifierTrigger:
        return cls(TriggerPhase.INCREMENTAL)

    @classmethod
    def on_complete(cls) -> ClassifierTrigger:
        return cls(TriggerPhase.ON_COMPLETE)

    def runs_incremental(self) -> bool:
        return self.phase in (TriggerPhase.INCREMENTAL, TriggerPhase.BOTH)

    def runs_on_complete(self) -> bool:
        return self.phase in (TriggerPhase.ON_COMPLETE, TriggerPhase.BOTH)

    def has_filter(self) -> bool:
        return self.filter.has_filter()

    def filter_turns(self, turns: Iterable[Turn]) -> list[Turn]:
        """The turns matching the trigger's filter, in order."""
        if not self.has_filter():
            return list(turns)
        return [turn for turn in turns if self.filter.matches(turn)]

    def display_name(self) -> str:
        """Human-readable summary."""
        phase = _PHASE_NAMES[self.phase]
        if not self.has_filter():
            return phase
        parts = [phase]
        if self.filter.tools:
            parts.append("tools=" + ",".join(self.filter.tools))
        if self.filter.tool_error is True:
            parts.append("errors")
        return ", ".join(parts)


@dataclass
class Notification:
    """A message sent to the agent when a classifier fires."""

    message: str

    def format_xml(self, classifier: str, trace_id: str) -> str:
        return (
            f'<auriga-notification classifier="{classifier}" trace="{trace_id}">\n'
            f"{self.message}\n"
            "</auriga-notification>\n"
        )


@dataclass
class ClassificationResult:
    """The output of one classifier run over a trace."""

    id: ClassificationId
    trace_id: TraceId
    classifier_name: str
    timestamp: str
    payload: Any
    notification: Notification | None = None


@dataclass
class ClassifierStatus:
    name: str
    trigger: ClassifierTrigger
    enabled: bool


# ---------------------------------------------------------------------------
# Configuration file types
# ---------------------------------------------------------------------------


class ClassifierType(Enum):
    ML = "ml"
    LLM = "llm"
    CLI = "cli"


@dataclass
class TriggerConfig:
    """Object form of a trigger in a classifier configuration."""

    on: TriggerPhase
    tools: list[str] = field(default_factory=list)
    tool_error: bool | None = None


@dataclass
class NotificationConfig:
    message: str


@dataclass
class LabelConfig:
    label: str
    notification: NotificationConfig


@dataclass
class ClassifierConfig:
    """A classifier definition as stored in its JSON file."""

    name: str
    description: str
    version: str
    enabled: bool
    trigger: TriggerPhase | TriggerConfig
    labels: list[LabelConfig] = field(default_factory=list)
    classifier_type: ClassifierType = ClassifierType.ML
    runtime: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> ClassifierConfig:
        """Parse a configuration object; raises ValueError on malformed data."""
        obj = _object(data, "classifier config")
        if "trigger" not in obj:
            raise ValueError("missing field 'trigger'")
        labels = _field(obj, "labels", list)
        kind = obj.get("type", ClassifierType.ML.value)
        return cls(
            name=_field(obj, "name", str),
            description=_field(obj, "description", str),
            version=_field(obj, "version", str),
            enabled=_field(obj, "enabled", bool),
            trigger=_parse_config_trigger(obj["trigger"]),
            classifier_type=_enum(ClassifierType, kind),
            runtime=obj.get("runtime"),
            labels=[_label_from_dict(item) for item in labels],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "enabled": self.enabled,
            "trigger": _config_trigger_to_json(self.trigger),
            "type": self.classifier_type.value,
            "runtime": self.runtime,
            "labels": [
                {"label": label.label, "notification": {"message": label.notification.message}}
                for label in self.labels
            ],
        }


def trigger_from_config(data: Any) -> ClassifierTrigger:
    """Build a trigger from its configuration form.

    Accepts a phase string, a trigger object, or their parsed forms.
    """
    parsed = data if isinstance(data, (TriggerPhase, TriggerConfig)) else _parse_config_trigger(data)
    if isinstance(parsed, TriggerPhase):
        return ClassifierTrigger(parsed, TurnFilter())
    return ClassifierTrigger(parsed.on, TurnFilter(list(parsed.tools), parsed.tool_error))


def _parse_config_trigger(data: Any) -> TriggerPhase | TriggerConfig:
    if isinstance(data, str):
        return _enum(TriggerPhase, data)
    if isinstance(data, dict):
        if "on" not in data:
            raise ValueError("missing field 'on' in trigger")
        tools = data.get("tools", [])
        if not isinstance(tools, list) or not all(isinstance(t, str) for t in tools):
            raise ValueError(f"field 'tools' must be a list of strings, got {tools!r}")
        tool_error = data.get("tool_error")
        if tool_error is not None and not isinstance(tool_error, bool):
            raise ValueError(f"field 'tool_error' must be bool, got {tool_error!r}")
        return TriggerConfig(on=_enum(TriggerPhase, data["on"]), tools=list(tools), tool_error=tool_error)
    raise ValueError(f"trigger must be a string or an object, got {data!r}")


def _config_trigger_to_json(trigger: TriggerPhase | TriggerConfig) -> Any:
    if isinstance(trigger, TriggerPhase):
        return trigger.value
    out: dict[str, Any] = {"on": trigger.on.value}
    if trigger.tools:
        out["tools"] = list(trigger.tools)
    if trigger.tool_error is not None:
        out["tool_error"] = trigger.tool_error
    return out


def _label_from_dict(data: Any) -> LabelConfig:
    obj = _object(data, "label")
    notification = _object(_field(obj, "notification", dict), "notification")
    return LabelConfig(
        label=_field(obj, "label", str),
        notification=NotificationConfig(message=_field(notification, "message", str)),
    )


def _object(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object for {what}, got {data!r}")
    return data


def _field(obj: dict[str, Any], key: str, kind: type) -> Any:
    if key not in obj:
        raise ValueError(f"missing field {key!r}")
    value = obj[key]
    if not isinstance(value, kind):
        raise ValueError(f"field {key!r} must be {kind.__name__}, got {value!r}")
    return value


def _enum(enum_cls: type[Enum], value: Any) -> Any:
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        raise ValueError(f"unknown {enum_cls.__name__} {value!r}") from None