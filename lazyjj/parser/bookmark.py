"""Parse bookmark and remote listings."""

from __future__ import annotations

from ..jj.templates import FIELD_SEPARATOR
from ..model import Bookmark, BookmarkInfo

# jj mirrors git refs as bookmarks on the pseudo-remote "git"; they are
# not pushable or trackable.
GIT_PSEUDO_REMOTE = "git"


def parse_bookmark_list(output: str) -> list[Bookmark]:
    """Parse ``name[<TAB>remote]<TAB>tracked`` lines; other shapes are skipped."""
    bookmarks: list[Bookmark] = []
    for line in output.splitlines():
        if not line:
            continue
        parts = line.split(FIELD_SEPARATOR)
        if len(parts) == 2:
            bookmarks.append(Bookmark(parts[0], None, parts[1] == "true"))
        elif len(parts) == 3:
            if parts[1] == GIT_PSEUDO_REMOTE:
                continue
            bookmarks.append(Bookmark(parts[0], parts[1], parts[2] == "true"))
    return bookmarks


def parse_bookmark_info_list(output: str) -> list[BookmarkInfo]:
    infos: list[BookmarkInfo] = []
    for line in output.splitlines():
        if not line:
            continue
        parts = line.split(FIELD_SEPARATOR)
        if len(parts) < 6:
            continue
        name, remote, tracked, change_id, commit_id, description = parts[:6]
        if remote == GIT_PSEUDO_REMOTE:
            continue
        infos.append(
            BookmarkInfo(
                bookmark=Bookmark(name, remote or None, tracked == "true"),
                change_id=change_id or None,
                commit_id=commit_id or None,
                description=description or None,
            )
        )
    return infos


def parse_remote_list(output: str) -> list[str]:
    """Remote names from ``jj git remote list`` (``name url`` per line)."""
    remotes: list[str] = []
    for line in output.splitlines():
        tokens = line.split()
        if tokens:
            remotes.append(tokens[0])
    return remotes
