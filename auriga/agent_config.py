"""Agent configuration templates and system prompt composition."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class AgentMode(Enum):
    """How the application interacts with the agent."""

    GENERATE = "generate"
    MANAGED = "managed"
    NATIVE_CLI = "native_cli"


@dataclass(kw_only=True)
class AgentConfig:
    """How to create and configure an LLM agent; stored as a reusable template."""

    name: str
    provider: str
    model: str
    max_tokens: int
    mode: AgentMode
    system_prompt: str | None = None
    temperature: float | None = None
    # Provider-specific settings, interpreted by the provider.
    provider_config: Any = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> AgentConfig:
        """Parse a configuration object; raises ValueError on malformed data."""
        if not isinstance(data, dict):
            raise ValueError(f"expected an object for agent config, got {data!r}")
        max_tokens = _field(data, "max_tokens", int)
        if isinstance(max_tokens, bool) or not 0 <= max_tokens <= 0xFFFFFFFF:
            raise ValueError(f"field 'max_tokens' out of range: {max_tokens!r}")
        system_prompt = data.get("system_prompt")
        if system_prompt is not None and not isinstance(system_prompt, str):
            raise ValueError(f"field 'system_prompt' must be str, got {system_prompt!r}")
        temperature = data.get("temperature")
        if temperature is not None and (
            isinstance(temperature, bool) or not isinstance(temperature, (int, float))
        ):
            raise ValueError(f"field 'temperature' must be a number, got {temperature!r}")
        mode = _field(data, "mode", str)
        try:
            parsed_mode = AgentMode(mode)
        except ValueError:
            raise ValueError(f"unknown agent mode {mode!r}") from None
        return cls(
            name=_field(data, "name", str),
            provider=_field(data, "provider", str),
            model=_field(data, "model", str),
            max_tokens=max_tokens,
            mode=parsed_mode,
            system_prompt=system_prompt,
            temperature=None if temperature is None else float(temperature),
            provider_config=data["provider_config"] if "provider_config" in data else {},
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "name": self.name,
            "provider": self.provider,
            "model": self.model,
            "max_tokens": self.max_tokens,
        }
        if self.system_prompt is not None:
            out["system_prompt"] = self.system_prompt
        if self.temperature is not None:
            out["temperature"] = self.temperature
        out["mode"] = self.mode.value
        out["provider_config"] = self.provider_config
        return out


class SystemPromptBuilder:
    """Composes a system prompt from sections separated by horizontal rules.

    Empty sections are skipped.
    """

    SEPARATOR = "\n\n---\n\n"

    def __init__(self) -> None:
        self._sections: list[str] = []

    def section(self, content: str) -> SystemPromptBuilder:
        if content:
            self._sections.append(content)
        return self

    def titled_section(self, title: str, content: str) -> SystemPromptBuilder:
        if content:
            self._sections.append(f"# {title}\n\n{content}")
        return self

    def build(self) -> str | None:
        """The composed prompt, or None if there are no sections."""
        if not self._sections:
            return None
        return self.SEPARATOR.join(self._sections)


def _field(obj: dict[str, Any], key: str, kind: type) -> Any:
    if key not in obj:
        raise ValueError(f"missing field {key!r}")
    value = obj[key]
    if not isinstance(value, kind):
        raise ValueError(f"field {key!r} must be {kind.__name__}, got {value!r}")
    return value