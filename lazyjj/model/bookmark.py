"""Bookmark records from ``jj bookmark list``."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Bookmark:
    name: str
    remote: str | None = None
    is_tracked: bool = False

    @property
    def full_name(self) -> str:
        return f"{self.name}@{self.remote}" if self.remote is not None else self.name

    @property
    def is_untracked_remote(self) -> bool:
        return self.remote is not None and not self.is_tracked

    @property
    def is_local(self) -> bool:
        return self.remote is None


@dataclass(frozen=True)
class BookmarkInfo:
    """Bookmark plus the change it points at, when it has a single target.

    ``change_id`` is ``None`` for remote-only or conflicted bookmarks.
    """

    bookmark: Bookmark
    change_id: str | None = None
    commit_id: str | None = None
    description: str | None = None

    def is_jumpable(self) -> bool:
        return self.change_id is not None

    def display_label(self, max_len: int) -> str:
        label = self.bookmark.full_name
        if self.description:
            label = f"{label}: {self.description}"
        if len(label) <= max_len:
            return label
        return label[: max(0, max_len - 1)] + "…"
