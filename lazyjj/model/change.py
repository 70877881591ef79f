"""Change records produced by the log parser."""

from __future__ import annotations

from dataclasses import dataclass

ROOT_CHANGE_ID = "zzzzzzzz"


@dataclass(frozen=True)
class Change:
    """One row of ``jj log`` output.

    Graph-only rows carry just ``graph_prefix`` so that connector glyphs
    stay aligned with the real entries around them.
    """

    change_id: str = ""
    commit_id: str = ""
    author: str = ""
    timestamp: str = ""
    description: str = ""
    is_working_copy: bool = False
    is_empty: bool = False
    bookmarks: tuple[str, ...] = ()
    graph_prefix: str = ""
    is_graph_only: bool = False
    has_conflict: bool = False

    @classmethod
    def graph_only(cls, prefix: str) -> Change:
        return cls(graph_prefix=prefix, is_graph_only=True)

    @property
    def short_id(self) -> str:
        return self.change_id

    @property
    def is_root(self) -> bool:
        return self.change_id == ROOT_CHANGE_ID

    def display_description(self) -> str:
        return self.description if self.description else "(no description set)"
