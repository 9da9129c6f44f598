"""File tree entries and recent file activity."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path

from auriga.agent import AgentId


@dataclass
class FileEntry:
    """A row of the file tree with its modification stats."""

    path: Path
    is_dir: bool
    depth: int
    expanded: bool = False
    last_modified: float | None = None
    modify_count: int = 0
    modified_by: AgentId | None = None
    lines_added: int = 0
    lines_removed: int = 0

    @classmethod
    def dir(cls, path: Path | str, depth: int) -> FileEntry:
        """A directory entry; expanded when it is at the root."""
        return cls(Path(path), is_dir=True, depth=depth, expanded=depth == 0)

    @classmethod
    def file(cls, path: Path | str, depth: int) -> FileEntry:
        return cls(Path(path), is_dir=False, depth=depth)

    def touch(self, agent: AgentId | None = None) -> None:
        """Record a modification, optionally by an agent."""
        self.last_modified = time.monotonic()
        self.modify_count += 1
        if agent is not None:
            self.modified_by = agent

    def set_diff(self, added: int, removed: int) -> None:
        self.lines_added = added
        self.lines_removed = removed

    def age_secs(self) -> float | None:
        """Seconds since the last modification, or None if never touched."""
        if self.last_modified is None:
            return None
        return time.monotonic() - self.last_modified

    def display_name(self) -> str:
        return self.path.name


@dataclass
class FileActivity:
    """A recently modified file; creation counts as the first modification."""

    path: Path
    modified_by: AgentId | None = None
    last_modified: float = field(default_factory=time.monotonic)
    modify_count: int = 1

    def touch(self, agent: AgentId | None = None) -> None:
        self.last_modified = time.monotonic()
        self.modify_count += 1
        if agent is not None:
            self.modified_by = agent

    def age_secs(self) -> float:
        return time.monotonic() - self.last_modified