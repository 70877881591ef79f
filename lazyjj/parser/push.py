"""Classify ``jj git push --dry-run`` output.

jj prints one English sentence per bookmark action on stderr; lines that
match no known sentence are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

NOTHING_CHANGED = "Nothing changed."


class PushActionKind(Enum):
    MOVE_FORWARD = "move_forward"
    MOVE_SIDEWAYS = "move_sideways"
    MOVE_BACKWARD = "move_backward"
    ADD = "add"
    DELETE = "delete"


@dataclass(frozen=True)
class PushPreviewAction:
    kind: PushActionKind
    bookmark: str
    from_commit: str | None = None
    to_commit: str | None = None

    @property
    def is_force(self) -> bool:
        return self.kind in (PushActionKind.MOVE_SIDEWAYS, PushActionKind.MOVE_BACKWARD)


class PushPreviewOutcome(Enum):
    CHANGES = "changes"
    NOTHING_CHANGED = "nothing_changed"
    UNPARSED = "unparsed"


@dataclass(frozen=True)
class PushPreviewResult:
    outcome: PushPreviewOutcome
    actions: tuple[PushPreviewAction, ...] = field(default_factory=tuple)

    @classmethod
    def nothing_changed(cls) -> PushPreviewResult:
        return cls(PushPreviewOutcome.NOTHING_CHANGED)

    @classmethod
    def unparsed(cls) -> PushPreviewResult:
        return cls(PushPreviewOutcome.UNPARSED)

    @property
    def has_changes(self) -> bool:
        return self.outcome is PushPreviewOutcome.CHANGES


_MOVE_PREFIXES = (
    ("Move forward bookmark ", PushActionKind.MOVE_FORWARD),
    ("Move sideways bookmark ", PushActionKind.MOVE_SIDEWAYS),
    ("Move backward bookmark ", PushActionKind.MOVE_BACKWARD),
)


def parse_push_action(line: str) -> PushPreviewAction | None:
    for prefix, kind in _MOVE_PREFIXES:
        if line.startswith(prefix):
            name, sep, hashes = line[len(prefix):].partition(" from ")
            if not sep:
                return None
            from_commit, sep, to_commit = hashes.partition(" to ")
            if not sep:
                return None
            return PushPreviewAction(kind, name, from_commit, to_commit)
    if line.startswith("Add bookmark "):
        name, sep, to_commit = line[len("Add bookmark "):].partition(" to ")
        return PushPreviewAction(PushActionKind.ADD, name, to_commit=to_commit) if sep else None
    if line.startswith("Delete bookmark "):
        name, sep, from_commit = line[len("Delete bookmark "):].partition(" from ")
        return PushPreviewAction(PushActionKind.DELETE, name, from_commit=from_commit) if sep else None
    return None


def parse_push_dry_run(output: str) -> PushPreviewResult:
    """Return no-op, the recognized actions, or unparsed when none matched."""
    if NOTHING_CHANGED in output:
        return PushPreviewResult.nothing_changed()
    actions = []
    for line in output.splitlines():
        action = parse_push_action(line.strip())
        if action is not None:
            actions.append(action)
    if not actions:
        return PushPreviewResult.unparsed()
    return PushPreviewResult(PushPreviewOutcome.CHANGES, tuple(actions))
