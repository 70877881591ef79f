"""Parse ``jj file annotate`` output."""

from __future__ import annotations

import re

from ..model import AnnotationContent, AnnotationLine

_ANNOTATE_LINE = re.compile(
    r"^(\S+)\s+(.+?)\s+(\d{4}-\d{2}-\d{2}\s+\d{2}:\d{2}:\d{2})\s+(\d+):\s?(.*)$"
)


def parse_file_annotate(output: str, file_path: str) -> AnnotationContent:
    """Parse annotate lines; ``first_in_hunk`` marks a change of change id."""
    content = AnnotationContent(file_path)
    previous: str | None = None
    for line in output.splitlines():
        if not line:
            continue
        match = _ANNOTATE_LINE.match(line)
        if match is None:
            continue
        change_id = match.group(1)
        content.lines.append(
            AnnotationLine(
                change_id=change_id,
                author=match.group(2).strip(),
                timestamp=match.group(3),
                line_number=int(match.group(4)),
                content=match.group(5),
                first_in_hunk=change_id != previous,
            )
        )
        previous = change_id
    return content
