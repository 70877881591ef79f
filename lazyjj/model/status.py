"""Working-copy status records."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class FileState(Enum):
    ADDED = "A"
    MODIFIED = "M"
    DELETED = "D"
    RENAMED = "R"
    CONFLICTED = "C"


@dataclass(frozen=True)
class FileStatus:
    path: str
    state: FileState
    renamed_from: str | None = None

    @property
    def indicator(self) -> str:
        return self.state.value


@dataclass
class Status:
    files: list[FileStatus] = field(default_factory=list)
    has_conflicts: bool = False
    working_copy_change_id: str = ""
    parent_change_id: str = ""

    def is_clean(self) -> bool:
        return not self.files

    def count_by_state(self, state: FileState) -> int:
        return sum(1 for entry in self.files if entry.state is state)
