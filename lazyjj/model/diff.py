"""Typed diff content shared by the three diff output layouts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DiffLineKind(Enum):
    FILE_HEADER = "file_header"
    SEPARATOR = "separator"
    CONTEXT = "context"
    ADDED = "added"
    DELETED = "deleted"


LineNumbers = tuple[int | None, int | None]


@dataclass(frozen=True)
class DiffLine:
    kind: DiffLineKind
    content: str = ""
    line_numbers: LineNumbers | None = None

    @classmethod
    def file_header(cls, path: str) -> DiffLine:
        return cls(DiffLineKind.FILE_HEADER, path)

    @classmethod
    def separator(cls) -> DiffLine:
        return cls(DiffLineKind.SEPARATOR)

    @classmethod
    def context(cls, content: str, old: int | None = None, new: int | None = None) -> DiffLine:
        numbers = (old, new) if old is not None or new is not None else None
        return cls(DiffLineKind.CONTEXT, content, numbers)


@dataclass
class DiffContent:
    """Header metadata plus an ordered list of classified lines."""

    commit_id: str = ""
    author: str = ""
    timestamp: str = ""
    description: str = ""
    lines: list[DiffLine] = field(default_factory=list)

    def has_changes(self) -> bool:
        return any(line.kind is DiffLineKind.FILE_HEADER for line in self.lines)

    def file_paths(self) -> list[str]:
        return [line.content for line in self.lines if line.kind is DiffLineKind.FILE_HEADER]


class DiffDisplayFormat(Enum):
    COLOR_WORDS = "color-words"
    STAT = "stat"
    GIT = "git"

    def next(self) -> DiffDisplayFormat:
        order = list(DiffDisplayFormat)
        return order[(order.index(self) + 1) % len(order)]

    @property
    def label(self) -> str:
        return self.value

    @property
    def position(self) -> int:
        return list(DiffDisplayFormat).index(self) + 1

    @classmethod
    def from_label(cls, label: object) -> DiffDisplayFormat:
        for fmt in cls:
            if fmt.value == label:
                return fmt
        return cls.COLOR_WORDS
