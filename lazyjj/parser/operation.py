"""Parse ``jj op log`` output and detect redo eligibility."""

from __future__ import annotations

from ..jj.retry import is_redo_chain_description
from ..jj.templates import FIELD_SEPARATOR
from ..model import Operation


def parse_op_log(output: str) -> list[Operation]:
    """Newest first; the first parsed line is the current operation."""
    operations: list[Operation] = []
    for line in output.splitlines():
        if not line:
            continue
        parts = line.split(FIELD_SEPARATOR)
        if len(parts) < 4:
            continue
        operations.append(
            Operation(
                id=parts[0],
                user=parts[1],
                timestamp=parts[2],
                description=parts[3],
                is_current=not operations,
            )
        )
    return operations


def parse_redo_target(output: str) -> str | None:
    """Operation id to restore, given the two newest ``id<TAB>description`` lines.

    Redo applies only right after a single undo (or a previous redo): the
    newest operation must be an undo/restore and the one before it must not.
    """
    lines = [line for line in output.splitlines() if line]
    if len(lines) < 2:
        return None
    first = lines[0].split(FIELD_SEPARATOR)
    second = lines[1].split(FIELD_SEPARATOR)
    if len(first) < 2 or len(second) < 2:
        return None
    if not is_redo_chain_description(first[1]):
        return None
    if is_redo_chain_description(second[1]):
        return None
    return second[0].strip()
