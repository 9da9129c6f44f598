"""Command-line configuration for the Codex CLI."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SandboxMode(Enum):
    READ_ONLY = "read-only"
    WORKSPACE_WRITE = "workspace-write"
    DANGER_FULL_ACCESS = "danger-full-access"


class ApprovalPolicy(Enum):
    UNTRUSTED = "untrusted"
    ON_REQUEST = "on-request"
    NEVER = "never"


@dataclass
class CodexCliConfig:
    """Flags for interactive `codex` and for `codex exec`."""

    # Model and profile
    model: str | None = None
    profile: str | None = None

    # Sandbox and approvals
    sandbox: SandboxMode | None = None
    # Interactive mode only; `codex exec` rejects it.
    approval: ApprovalPolicy | None = None
    full_auto: bool = False
    dangerously_bypass: bool = False

    # Working directory
    cd: str | None = None
    add_dirs: list[str] = field(default_factory=list)

    # `-c key=value` overrides, repeatable
    config_overrides: list[tuple[str, str]] = field(default_factory=list)

    # Feature flags
    enable_features: list[str] = field(default_factory=list)
    disable_features: list[str] = field(default_factory=list)

    # Provider selection
    oss: bool = False
    local_provider: str | None = None

    images: list[str] = field(default_factory=list)

    # Interactive only
    search: bool = False
    no_alt_screen: bool = False

    # Exec only
    ephemeral: bool = False
    skip_git_repo_check: bool = False
    output_schema: str | None = None

    # Environment variables for the CLI process
    env: list[tuple[str, str]] = field(default_factory=list)

    def _shared_args(self) -> Iterator[str]:
        for key, value in self.config_overrides:
            yield from ("-c", f"{key}={value}")
        for feature in self.enable_features:
            yield from ("--enable", feature)
        for feature in self.disable_features:
            yield from ("--disable", feature)
        if self.model is not None:
            yield from ("--model", self.model)
        if self.profile is not None:
            yield from ("--profile", self.profile)
        if self.sandbox is not None:
            yield from ("--sandbox", self.sandbox.value)
        if self.full_auto:
            yield "--full-auto"
        if self.dangerously_bypass:
            yield "--dangerously-bypass-approvals-and-sandbox"
        if self.cd is not None:
            yield from ("--cd", self.cd)
        for directory in self.add_dirs:
            yield from ("--add-dir", directory)
        if self.oss:
            yield "--oss"
        if self.local_provider is not None:
            yield from ("--local-provider", self.local_provider)
        for image in self.images:
            yield from ("--image", image)

    def to_interactive_args(self) -> list[str]:
        """Arguments for launching interactive `codex`."""
        args = list(self._shared_args())
        if self.approval is not None:
            args += ["--ask-for-approval", self.approval.value]
        if self.search:
            args.append("--search")
        if self.no_alt_screen:
            args.append("--no-alt-screen")
        return args

    def to_exec_args(self) -> list[str]:
        """Arguments following `codex exec`; always includes --json."""
        args = list(self._shared_args())
        args.append("--json")
        if self.ephemeral:
            args.append("--ephemeral")
        if self.skip_git_repo_check:
            args.append("--skip-git-repo-check")
        if self.output_schema is not None:
            args += ["--output-schema", self.output_schema]
        return args

    def to_dict(self) -> dict[str, Any]:
        """The JSON form, with every field present."""
        return {
            "model": self.model,
            "profile": self.profile,
            "sandbox": self.sandbox.value if self.sandbox else None,
            "approval": self.approval.value if self.approval else None,
            "full_auto": self.full_auto,
            "dangerously_bypass": self.dangerously_bypass,
            "cd": self.cd,
            "add_dirs": list(self.add_dirs),
            "config_overrides": [[k, v] for k, v in self.config_overrides],
            "enable_features": list(self.enable_features),
            "disable_features": list(self.disable_features),
            "oss": self.oss,
            "local_provider": self.local_provider,
            "images": list(self.images),
            "search": self.search,
            "no_alt_screen": self.no_alt_screen,
            "ephemeral": self.ephemeral,
            "skip_git_repo_check": self.skip_git_repo_check,
            "output_schema": self.output_schema,
            "env": [[k, v] for k, v in self.env],
        }

    @classmethod
    def from_dict(cls, data: Any) -> CodexCliConfig:
        """Parse the JSON form; missing fields take defaults, bad values raise ValueError."""
        if not isinstance(data, dict):
            raise ValueError(f"expected an object for codex config, got {data!r}")
        kwargs: dict[str, Any] = {}
        for key in ("model", "profile", "cd", "local_provider", "output_schema"):
            if data.get(key) is not None:
                kwargs[key] = _string(data[key], key)
        for key in (
            "full_auto",
            "dangerously_bypass",
            "oss",
            "search",
            "no_alt_screen",
            "ephemeral",
            "skip_git_repo_check",
        ):
            if key in data:
                if not isinstance(data[key], bool):
                    raise ValueError(f"field {key!r} must be bool, got {data[key]!r}")
                kwargs[key] = data[key]
        for key in ("add_dirs", "enable_features", "disable_features", "images"):
            if key in data:
                value = data[key]
                if not isinstance(value, list):
                    raise ValueError(f"field {key!r} must be a list, got {value!r}")
                kwargs[key] = [_string(item, key) for item in value]
        for key in ("config_overrides", "env"):
            if key in data:
                kwargs[key] = _pairs(data[key], key)
        if data.get("sandbox") is not None:
            kwargs["sandbox"] = _enum(SandboxMode, data["sandbox"])
        if data.get("approval") is not None:
            kwargs["approval"] = _enum(ApprovalPolicy, data["approval"])
        return cls(**kwargs)


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