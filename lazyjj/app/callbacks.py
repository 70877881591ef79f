"""Dialog callback tokens, one frozen dataclass per multi-step workflow.

Each token carries exactly what its handler needs; ``DialogCallback`` is the
closed union matched in ``dispatch``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..jj.executor import PushBulkMode


@dataclass(frozen=True)
class GitPush:
    """Push the selected (or pending) bookmarks."""


@dataclass(frozen=True)
class GitPushChange:
    change_id: str


@dataclass(frozen=True)
class GitPushRemoteSelect:
    pass


@dataclass(frozen=True)
class GitPushModeSelect:
    change_id: str


@dataclass(frozen=True)
class GitPushBulkConfirm:
    mode: PushBulkMode
    remote: str | None = None


@dataclass(frozen=True)
class GitPushRevisions:
    change_id: str
    bookmarks: tuple[str, ...]


@dataclass(frozen=True)
class GitPushMultiBookmarkMode:
    change_id: str
    bookmarks: tuple[str, ...]


@dataclass(frozen=True)
class GitFetch:
    pass


@dataclass(frozen=True)
class GitFetchBranch:
    pass


@dataclass(frozen=True)
class DeleteBookmarks:
    pass


@dataclass(frozen=True)
class MoveBookmark:
    name: str
    change_id: str


@dataclass(frozen=True)
class BookmarkJump:
    pass


@dataclass(frozen=True)
class BookmarkForget:
    pass


@dataclass(frozen=True)
class BookmarkMoveToWc:
    name: str


@dataclass(frozen=True)
class BookmarkMoveBackwards:
    name: str


@dataclass(frozen=True)
class Track:
    pass


@dataclass(frozen=True)
class OpRestore:
    operation_id: str


@dataclass(frozen=True)
class RestoreFile:
    file_path: str


@dataclass(frozen=True)
class RestoreAll:
    pass


@dataclass(frozen=True)
class Revert:
    change_id: str


@dataclass(frozen=True)
class Abandon:
    change_id: str


@dataclass(frozen=True)
class SimplifyParents:
    change_id: str


@dataclass(frozen=True)
class Parallelize:
    from_id: str
    to_id: str


DialogCallback = Union[
    GitPush,
    GitPushChange,
    GitPushRemoteSelect,
    GitPushModeSelect,
    GitPushBulkConfirm,
    GitPushRevisions,
    GitPushMultiBookmarkMode,
    GitFetch,
    GitFetchBranch,
    DeleteBookmarks,
    MoveBookmark,
    BookmarkJump,
    BookmarkForget,
    BookmarkMoveToWc,
    BookmarkMoveBackwards,
    Track,
    OpRestore,
    RestoreFile,
    RestoreAll,
    Revert,
    Abandon,
    SimplifyParents,
    Parallelize,
]
