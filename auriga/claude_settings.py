"""Settings document passed to the Claude Code CLI with --settings."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, ClassVar

_STRINGS = "strings"
_JSON = "json"
_U32_MAX = 0xFFFFFFFF


def _camel_case(name: str) -> str:
    first, *rest = name.split("_")
    return first + "".join(part.capitalize() for part in rest)


def _opt(kind: Any) -> Any:
    """An optional field, omitted from the JSON form when unset."""
    return field(default=None, metadata={"kind": kind})


def _strings() -> Any:
    """A list of strings, omitted from the JSON form when empty."""
    return field(default_factory=list, metadata={"kind": _STRINGS, "skip_empty": True})


def _key(cls: Any, name: str) -> str:
    return _camel_case(name) if getattr(cls, "_camel", True) else name


def _load(value: Any, kind: Any, key: str) -> Any:
    if kind is _JSON:
        return value
    if kind is _STRINGS:
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ValueError(f"field {key!r} must be a list of strings, got {value!r}")
        return list(value)
    if kind is bool:
        if not isinstance(value, bool):
            raise ValueError(f"field {key!r} must be bool, got {value!r}")
        return value
    if kind is int:
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _U32_MAX:
            raise ValueError(f"field {key!r} must be an unsigned 32-bit integer, got {value!r}")
        return value
    if kind is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"field {key!r} must be a number, got {value!r}")
        return float(value)
    if kind is str:
        if not isinstance(value, str):
            raise ValueError(f"field {key!r} must be str, got {value!r}")
        return value
    return kind.from_dict(value)


def _dump(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return value.to_dict()
    if isinstance(value, list):
        return list(value)
    return value


def _to_dict(obj: Any) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if value is None or (f.metadata.get("skip_empty") and not value):
            continue
        out[_key(type(obj), f.name)] = _dump(value)
    return out


def _from_dict(cls: Any, data: Any) -> Any:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object for {cls.__name__}, got {data!r}")
    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        key = _key(cls, f.name)
        if key not in data:
            continue
        value = data[key]
        if value is None:
            if f.metadata.get("skip_empty"):
                raise ValueError(f"field {key!r} must not be null")
            kwargs[f.name] = None
            continue
        kwargs[f.name] = _load(value, f.metadata["kind"], key)
    return cls(**kwargs)


@dataclass
class PermissionsConfig:
    """Tool permission rules."""

    allow: list[str] = _strings()
    deny: list[str] = _strings()
    ask: list[str] = _strings()
    default_mode: str | None = _opt(str)
    additional_directories: list[str] | None = _opt(_STRINGS)

    def to_dict(self) -> dict[str, Any]:
        """The JSON form, leaving out unset fields and empty lists."""
        return _to_dict(self)

    @classmethod
    def from_dict(cls, data: Any) -> PermissionsConfig:
        """Parse the JSON form; unknown keys are ignored, bad values raise ValueError."""
        return _from_dict(cls, data)


@dataclass
class AttributionConfig:
    """Attribution text for git commits and pull requests."""

    _camel: ClassVar[bool] = False

    commit: str | None = _opt(str)
    pr: str | None = _opt(str)

    def to_dict(self) -> dict[str, Any]:
        """The JSON form, leaving out unset fields."""
        return _to_dict(self)

    @classmethod
    def from_dict(cls, data: Any) -> AttributionConfig:
        """Parse the JSON form; unknown keys are ignored, bad values raise ValueError."""
        return _from_dict(cls, data)


@dataclass
class WorktreeConfig:
    """Worktree options."""

    sparse_paths: list[str] | None = _opt(_STRINGS)

    def to_dict(self) -> dict[str, Any]:
        """The JSON form, leaving out unset fields."""
        return _to_dict(self)

    @classmethod
    def from_dict(cls, data: Any) -> WorktreeConfig:
        """Parse the JSON form; unknown keys are ignored, bad values raise ValueError."""
        return _from_dict(cls, data)


@dataclass
class ClaudeSettings:
    """The Claude Code settings document; every field is optional."""

    # Permissions
    permissions: PermissionsConfig | None = _opt(PermissionsConfig)

    # Model and reasoning
    model: str | None = _opt(str)
    available_models: list[str] | None = _opt(_STRINGS)
    model_overrides: Any = _opt(_JSON)
    effort_level: str | None = _opt(str)
    fast_mode: bool | None = _opt(bool)
    fast_mode_per_session_opt_in: bool | None = _opt(bool)
    always_thinking_enabled: bool | None = _opt(bool)

    # Environment
    env: Any = _opt(_JSON)

    # Memory and context
    auto_memory_enabled: bool | None = _opt(bool)
    claude_md_excludes: list[str] | None = _opt(_STRINGS)
    include_git_instructions: bool | None = _opt(bool)
    respect_gitignore: bool | None = _opt(bool)

    # Language and output
    language: str | None = _opt(str)
    output_style: str | None = _opt(str)

    # Attribution
    attribution: AttributionConfig | None = _opt(AttributionConfig)
    include_co_authored_by: bool | None = _opt(bool)

    # Hooks
    hooks: Any = _opt(_JSON)
    disable_all_hooks: bool | None = _opt(bool)
    allowed_http_hook_urls: list[str] | None = _opt(_STRINGS)
    http_hook_allowed_env_vars: list[str] | None = _opt(_STRINGS)

    # Plugins
    enabled_plugins: Any = _opt(_JSON)
    plugin_configs: Any = _opt(_JSON)
    extra_known_marketplaces: Any = _opt(_JSON)
    skipped_marketplaces: list[str] | None = _opt(_STRINGS)
    skipped_plugins: list[str] | None = _opt(_STRINGS)

    # MCP servers
    enable_all_project_mcp_servers: bool | None = _opt(bool)
    enabled_mcpjson_servers: list[str] | None = _opt(_STRINGS)
    disabled_mcpjson_servers: list[str] | None = _opt(_STRINGS)

    # Sandbox
    sandbox: Any = _opt(_JSON)

    # UI
    spinner_verbs: Any = _opt(_JSON)
    spinner_tips_enabled: bool | None = _opt(bool)
    spinner_tips_override: Any = _opt(_JSON)
    terminal_progress_bar_enabled: bool | None = _opt(bool)
    show_turn_duration: bool | None = _opt(bool)
    prefers_reduced_motion: bool | None = _opt(bool)
    status_line: Any = _opt(_JSON)
    file_suggestion: Any = _opt(_JSON)

    # Session and storage
    cleanup_period_days: int | None = _opt(int)
    plans_directory: str | None = _opt(str)
    auto_updates_channel: str | None = _opt(str)
    feedback_survey_rate: float | None = _opt(float)

    # Auth
    api_key_helper: str | None = _opt(str)
    aws_credential_export: str | None = _opt(str)
    aws_auth_refresh: str | None = _opt(str)
    force_login_method: str | None = _opt(str)
    force_login_org_uuid: str | None = _opt(str)
    otel_headers_helper: str | None = _opt(str)
    skip_web_fetch_preflight: bool | None = _opt(bool)

    # Teams
    teammate_mode: str | None = _opt(str)
    company_announcements: list[str] | None = _opt(_STRINGS)

    # Worktree
    worktree: WorktreeConfig | None = _opt(WorktreeConfig)

    def to_dict(self) -> dict[str, Any]:
        """The JSON form, leaving out unset fields."""
        return _to_dict(self)

    @classmethod
    def from_dict(cls, data: Any) -> ClaudeSettings:
        """Parse the JSON form; unknown keys are ignored, bad values raise ValueError."""
        return _from_dict(cls, data)