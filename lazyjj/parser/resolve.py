"""Parse ``jj resolve --list`` output."""

from __future__ import annotations

import re

from ..jj.templates import FIELD_SEPARATOR
from ..model import ConflictFile

# Space-delimited layout: "<path>  <N>-sided conflict" (paths may contain spaces).
_SPACED_LINE = re.compile(r"^(.+?)\s{2,}(\d+-sided\s+conflict.*)$")


def parse_resolve_line(line: str) -> ConflictFile | None:
    if FIELD_SEPARATOR in line:
        path, _, description = line.partition(FIELD_SEPARATOR)
        return ConflictFile(path.strip(), description.strip())
    match = _SPACED_LINE.match(line)
    if match is None:
        return None
    return ConflictFile(match.group(1).strip(), match.group(2).strip())


def parse_resolve_list(output: str) -> list[ConflictFile]:
    files: list[ConflictFile] = []
    for line in output.splitlines():
        if not line:
            continue
        entry = parse_resolve_line(line)
        if entry is not None:
            files.append(entry)
    return files
