"""Command-line configuration for the Claude Code CLI."""

from __future__ import annotations

import json
import math
from collections.abc import Iterator
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any

from auriga.claude_settings import ClaudeSettings


class PermissionMode(Enum):
    """Permission mode of a CLI session."""

    DEFAULT = "default"
    ACCEPT_EDITS = "acceptEdits"
    PLAN = "plan"
    AUTO = "auto"
    DONT_ASK = "dontAsk"
    BYPASS_PERMISSIONS = "bypassPermissions"


class OutputFormat(Enum):
    """Output format for non-interactive (print) mode."""

    TEXT = "text"
    JSON = "json"
    STREAM_JSON = "stream-json"


class EffortLevel(Enum):
    """Effort level for adaptive reasoning."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    MAX = "max"


_STRING_FIELDS = (
    "resume",
    "model",
    "system_prompt",
    "append_system_prompt",
    "agent",
    "agents",
    "worktree",
)
_BOOL_FIELDS = (
    "continue_session",
    "dangerously_skip_permissions",
    "strict_mcp_config",
    "bare",
    "verbose",
    "disable_slash_commands",
)
_LIST_FIELDS = ("allowed_tools", "disallowed_tools", "add_dirs", "tools")


@dataclass
class ClaudeCliConfig:
    """Flags for the `claude` command; every field is optional."""

    # Session identity
    name: str | None = None
    resume: str | None = None
    continue_session: bool = False

    # Model and reasoning; model overrides the agent config's model when set.
    model: str | None = None
    effort: EffortLevel | None = None

    # Permissions and safety
    permission_mode: PermissionMode | None = None
    allowed_tools: list[str] = field(default_factory=list)
    disallowed_tools: list[str] = field(default_factory=list)
    dangerously_skip_permissions: bool = False

    # Prompts and context
    system_prompt: str | None = None
    append_system_prompt: str | None = None
    add_dirs: list[str] = field(default_factory=list)

    # MCP
    mcp_config: str | None = None
    strict_mcp_config: bool = False

    # Output (print mode)
    output_format: OutputFormat | None = None
    max_budget_usd: float | None = None

    # Tools and agents; an empty tool list means the default set.
    tools: list[str] = field(default_factory=list)
    agent: str | None = None
    agents: str | None = None

    # Worktree and settings
    worktree: str | None = None
    settings: ClaudeSettings | None = None

    # Behaviour flags
    bare: bool = False
    verbose: bool = False
    disable_slash_commands: bool = False

    # Extra environment variables for the CLI process
    env: list[tuple[str, str]] = field(default_factory=list)

    def _args(self) -> Iterator[str]:
        if self.name is not None:
            yield from ("--name", self.name)
        if self.resume is not None:
            yield from ("--resume", self.resume)
        if self.continue_session:
            yield "--continue"

        if self.model is not None:
            yield from ("--model", self.model)
        if self.effort is not None:
            yield from ("--effort", self.effort.value)

        if self.permission_mode is not None:
            yield from ("--permission-mode", self.permission_mode.value)
        for tool in self.allowed_tools:
            yield from ("--allowedTools", tool)
        for tool in self.disallowed_tools:
            yield from ("--disallowedTools", tool)
        if self.dangerously_skip_permissions:
            yield "--dangerously-skip-permissions"

        if self.system_prompt is not None:
            yield from ("--system-prompt", self.system_prompt)
        if self.append_system_prompt is not None:
            yield from ("--append-system-prompt", self.append_system_prompt)
        for directory in self.add_dirs:
            yield from ("--add-dir", directory)

        if self.mcp_config is not None:
            yield from ("--mcp-config", self.mcp_config)
        if self.strict_mcp_config:
            yield "--strict-mcp-config"

        if self.output_format is not None:
            yield from ("--output-format", self.output_format.value)
        if self.max_budget_usd is not None:
            yield from ("--max-budget-usd", _format_number(self.max_budget_usd))

        if self.tools:
            yield from ("--tools", ",".join(self.tools))
        if self.agent is not None:
            yield from ("--agent", self.agent)
        if self.agents is not None:
            yield from ("--agents", self.agents)

        if self.worktree is not None:
            yield from ("--worktree", self.worktree)
        if self.settings is not None:
            document = json.dumps(
                self.settings.to_dict(), separators=(",", ":"), ensure_ascii=False
            )
            yield from ("--settings", document)

        if self.bare:
            yield "--bare"
        if self.verbose:
            yield "--verbose"
        if self.disable_slash_commands:
            yield "--disable-slash-commands"

    def to_args(self) -> list[str]:
        """Arguments for the `claude` command."""
        return list(self._args())

    def to_dict(self) -> dict[str, Any]:
        """The JSON form; settings is left out when unset."""
        out: dict[str, Any] = {
            "session_name": self.name,
            "resume": self.resume,
            "continue_session": self.continue_session,
            "model": self.model,
            "effort": self.effort.value if self.effort else None,
            "permission_mode": self.permission_mode.value if self.permission_mode else None,
            "allowed_tools": list(self.allowed_tools),
            "disallowed_tools": list(self.disallowed_tools),
            "dangerously_skip_permissions": self.dangerously_skip_permissions,
            "system_prompt": self.system_prompt,
            "append_system_prompt": self.append_system_prompt,
            "add_dirs": list(self.add_dirs),
            "mcp_config": self.mcp_config,
            "strict_mcp_config": self.strict_mcp_config,
            "output_format": self.output_format.value if self.output_format else None,
            "max_budget_usd": self.max_budget_usd,
            "tools": list(self.tools),
            "agent": self.agent,
            "agents": self.agents,
            "worktree": self.worktree,
        }
        if self.settings is not None:
            out["settings"] = self.settings.to_dict()
        out.update(
            {
                "bare": self.bare,
                "verbose": self.verbose,
                "disable_slash_commands": self.disable_slash_commands,
                "env": [[key, value] for key, value in self.env],
            }
        )
        return out

    @classmethod
    def from_dict(cls, data: Any) -> ClaudeCliConfig:
        """Parse the JSON form; missing fields take defaults, bad values raise ValueError.

        The MCP config path is also accepted under its older key, mcp_config_path.
        """
        if not isinstance(data, dict):
            raise ValueError(f"expected an object for claude config, got {data!r}")
        kwargs: dict[str, Any] = {}

        if data.get("session_name") is not None:
            kwargs["name"] = _string(data["session_name"], "session_name")
        for key in _STRING_FIELDS:
            if data.get(key) is not None:
                kwargs[key] = _string(data[key], key)

        if "mcp_config" in data and "mcp_config_path" in data:
            raise ValueError("duplicate field 'mcp_config'")
        for key in ("mcp_config", "mcp_config_path"):
            if data.get(key) is not None:
                kwargs["mcp_config"] = _string(data[key], key)

        for key in _BOOL_FIELDS:
            if key in data:
                if not isinstance(data[key], bool):
                    raise ValueError(f"field {key!r} must be bool, got {data[key]!r}")
                kwargs[key] = data[key]

        for key in _LIST_FIELDS:
            if key in data:
                value = data[key]
                if not isinstance(value, list):
                    raise ValueError(f"field {key!r} must be a list, got {value!r}")
                kwargs[key] = [_string(item, key) for item in value]

        if "env" in data:
            kwargs["env"] = _pairs(data["env"], "env")

        if data.get("effort") is not None:
            kwargs["effort"] = _enum(EffortLevel, data["effort"])
        if data.get("permission_mode") is not None:
            kwargs["permission_mode"] = _enum(PermissionMode, data["permission_mode"])
        if data.get("output_format") is not None:
            kwargs["output_format"] = _enum(OutputFormat, data["output_format"])

        budget = data.get("max_budget_usd")
        if budget is not None:
            if isinstance(budget, bool) or not isinstance(budget, (int, float)):
                raise ValueError(f"field 'max_budget_usd' must be a number, got {budget!r}")
            kwargs["max_budget_usd"] = float(budget)

        if data.get("settings") is not None:
            kwargs["settings"] = ClaudeSettings.from_dict(data["settings"])

        return cls(**kwargs)


def _format_number(value: float) -> str:
    """Shortest plain decimal form of a float, without exponent or trailing '.0'."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        text = str(int(value))
        return "-0" if value == 0 and math.copysign(1.0, value) < 0 else text
    return format(Decimal(repr(value)), "f")


def _string(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must hold strings, got {value!r}")
    return value


def _pairs(value: Any, key: str) -> list[tuple[str, str]]:
    if not isinstance(value, list):
        raise ValueError(f"field {key!r} must be a list of pairs, got {value!r}")
    pairs = []
    for item in value:
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise ValueError(f"field {key!r} must hold pairs, got {item!r}")
        pairs.append((_string(item[0], key), _string(item[1], key)))
    return pairs


def _enum(enum_cls: type[Enum], value: Any) -> Any:
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        raise ValueError(f"unknown {enum_cls.__name__} {value!r}") from None