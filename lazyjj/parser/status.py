"""Parse ``jj status`` output."""

from __future__ import annotations

import re

from ..model import FileState, FileStatus, Status

_STATE_BY_CHAR = {
    "A": FileState.ADDED,
    "M": FileState.MODIFIED,
    "D": FileState.DELETED,
    "C": FileState.CONFLICTED,
}

# Newer jj: "R src/{old.rs => new.rs}"; older jj: "R old.rs -> new.rs".
_BRACE_RENAME = re.compile(r"^(?P<prefix>[^{]*)\{(?P<old>.*?) => (?P<new>.*?)\}(?P<suffix>.*)$")
_ARROW_RENAME = re.compile(r"^(?P<old>.+?) -> (?P<new>.+)$")


def _parse_rename(rest: str) -> FileStatus | None:
    match = _BRACE_RENAME.match(rest)
    if match is not None:
        prefix, suffix = match.group("prefix"), match.group("suffix")
        return FileStatus(
            path=f"{prefix}{match.group('new')}{suffix}",
            state=FileState.RENAMED,
            renamed_from=f"{prefix}{match.group('old')}{suffix}",
        )
    match = _ARROW_RENAME.match(rest)
    if match is not None:
        return FileStatus(
            path=match.group("new"),
            state=FileState.RENAMED,
            renamed_from=match.group("old"),
        )
    return None


def parse_status_line(line: str) -> FileStatus | None:
    """Parse one ``<letter> <path>`` line; anything else yields ``None``."""
    if len(line) < 3 or line[1] != " ":
        return None
    rest = line[2:].strip()
    if not rest:
        return None
    if line[0] == "R":
        return _parse_rename(rest)
    state = _STATE_BY_CHAR.get(line[0])
    if state is None:
        return None
    return FileStatus(path=rest, state=state)


def _first_token_after_colon(line: str) -> str | None:
    _, sep, info = line.partition(": ")
    if not sep:
        return None
    tokens = info.split()
    return tokens[0] if tokens else None


def parse_status(output: str) -> Status:
    status = Status()
    for raw_line in output.splitlines():
        line = raw_line.strip()
        if line.startswith("Working copy"):
            change_id = _first_token_after_colon(line)
            if change_id is not None:
                status.working_copy_change_id = change_id
            continue
        if line.startswith("Parent commit"):
            change_id = _first_token_after_colon(line)
            if change_id is not None:
                status.parent_change_id = change_id
            continue
        entry = parse_status_line(line)
        if entry is None:
            continue
        if entry.state is FileState.CONFLICTED:
            status.has_conflicts = True
        status.files.append(entry)
    return status
