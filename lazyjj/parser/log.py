"""Parse templated ``jj log`` output, graph glyphs included.

Each data line is ``<graph glyphs><change id><TAB><fields...>``; lines with
no tab are connector rows and are kept so the graph stays aligned.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..jj.errors import ParseError
from ..jj.templates import FIELD_SEPARATOR
from ..model import Change

MIN_LOG_FIELDS = 6


def _is_change_id_char(ch: str) -> bool:
    return "a" <= ch <= "z"


def split_graph_prefix(head: str) -> tuple[str, str]:
    """Split ``head`` (text before the first tab) into ``(prefix, change_id)``.

    Scans backward and stops at the first non-lowercase character once a
    lowercase run has been seen.
    """
    id_start = len(head)
    for index in range(len(head) - 1, -1, -1):
        if _is_change_id_char(head[index]):
            id_start = index
        elif id_start < len(head):
            break
    if id_start == len(head):
        raise ParseError(f"Cannot extract change_id from: {head}")
    return head[:id_start], head[id_start:]


def parse_log_fields(change_id: str, fields: list[str], graph_prefix: str = "") -> Change:
    if len(fields) < MIN_LOG_FIELDS:
        raise ParseError(
            f"Expected at least {MIN_LOG_FIELDS} fields after change id, got {len(fields)}"
        )
    bookmarks_field = fields[6] if len(fields) > 6 else ""
    bookmarks = tuple(name for name in bookmarks_field.split(",") if name)
    return Change(
        change_id=change_id,
        commit_id=fields[0],
        author=fields[1],
        timestamp=fields[2],
        description=fields[3],
        is_working_copy=fields[4] == "true",
        is_empty=fields[5] == "true",
        bookmarks=bookmarks,
        graph_prefix=graph_prefix,
        has_conflict=len(fields) > 7 and fields[7] == "true",
    )


def parse_log_record(record: str) -> Change:
    """Parse one graph-free record (``--no-graph`` output)."""
    change_id, _, rest = record.partition(FIELD_SEPARATOR)
    return parse_log_fields(change_id, rest.split(FIELD_SEPARATOR))


def parse_log(output: str) -> list[Change]:
    """Parse graph-prefixed log output.

    Raises ``ParseError`` if any data line is short or has no change id;
    partial change data is never returned.
    """
    changes: list[Change] = []
    for line in output.splitlines():
        if not line:
            continue
        if FIELD_SEPARATOR not in line:
            changes.append(Change.graph_only(line))
            continue
        head, _, rest = line.partition(FIELD_SEPARATOR)
        prefix, change_id = split_graph_prefix(head)
        changes.append(parse_log_fields(change_id, rest.split(FIELD_SEPARATOR), prefix))
    return changes


@dataclass(frozen=True)
class ChangeInfo:
    """Summary of one revision, used in confirmation dialogs."""

    change_id: str
    bookmarks: tuple[str, ...]
    author: str
    timestamp: str
    description: str


def parse_change_info(output: str) -> ChangeInfo | None:
    for line in output.splitlines():
        if not line:
            continue
        parts = line.split(FIELD_SEPARATOR)
        if len(parts) < 5:
            return None
        return ChangeInfo(
            change_id=parts[0],
            bookmarks=tuple(name for name in parts[1].split(",") if name),
            author=parts[2],
            timestamp=parts[3],
            description=parts[4],
        )
    return None
