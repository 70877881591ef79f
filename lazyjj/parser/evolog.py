"""Parse templated ``jj evolog`` output."""

from __future__ import annotations

from ..jj.templates import FIELD_SEPARATOR
from ..model import EvologEntry

EMPTY_MARKER = "[empty]"


def parse_evolog(output: str) -> list[EvologEntry]:
    entries: list[EvologEntry] = []
    for line in output.splitlines():
        if not line:
            continue
        parts = line.split(FIELD_SEPARATOR, 5)
        if len(parts) < 6:
            continue
        entries.append(
            EvologEntry(
                commit_id=parts[0],
                change_id=parts[1],
                author=parts[2],
                timestamp=parts[3],
                is_empty=parts[4] == EMPTY_MARKER,
                description=parts[5],
            )
        )
    return entries
