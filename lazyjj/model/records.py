"""Flat records for operations, conflicts, annotations and evolog entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Operation:
    id: str
    user: str
    timestamp: str
    description: str
    is_current: bool = False

    @property
    def short_id(self) -> str:
        return self.id[:12]


@dataclass(frozen=True)
class ConflictFile:
    path: str
    description: str


@dataclass(frozen=True)
class AnnotationLine:
    change_id: str
    author: str
    timestamp: str
    line_number: int
    content: str
    first_in_hunk: bool = False

    def short_timestamp(self) -> str:
        """Return ``MM-DD`` from an ISO-ish timestamp, else the raw value."""
        if len(self.timestamp) >= 10:
            return self.timestamp[5:10]
        return self.timestamp

    def short_author(self, max_len: int) -> str:
        if len(self.author) <= max_len:
            return self.author
        return self.author[: max(0, max_len - 1)] + "…"


@dataclass
class AnnotationContent:
    file_path: str
    lines: list[AnnotationLine] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.lines)


@dataclass(frozen=True)
class EvologEntry:
    commit_id: str
    change_id: str
    author: str
    timestamp: str
    is_empty: bool
    description: str


class RebaseMode(Enum):
    REVISION = "-r"
    SOURCE = "-s"
    BRANCH = "-b"
    INSERT_AFTER = "-A"
    INSERT_BEFORE = "-B"

    @property
    def is_insert(self) -> bool:
        return self in (RebaseMode.INSERT_AFTER, RebaseMode.INSERT_BEFORE)
