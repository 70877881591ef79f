"""Stderr wording predicates and the flag-compatibility retry protocol.

Every check against jj's human-readable error text lives here, one named
predicate per wording, so a wording change in jj is a one-line edit.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

import structlog

from . import constants
from .errors import CommandFailedError, JjError

logger = structlog.get_logger(__name__)

_FLAG_UNSUPPORTED_MARKERS = (
    "unexpected argument",
    "unrecognized",
    "unknown flag",
    "unknown option",
)
_LARGE_FILE_MARKERS = (
    "large file",
    "refused to snapshot",
    "max-new-file-size",
)

PRIVATE_COMMIT_NOTE = "private commit allowed"
EMPTY_DESCRIPTION_NOTE = "empty description allowed"
ALLOW_NEW_NOTE = "used deprecated --allow-new"


def is_flag_unsupported(message: str) -> bool:
    lower = message.lower()
    return any(marker in lower for marker in _FLAG_UNSUPPORTED_MARKERS)


def is_large_file_warning(stderr: str) -> bool:
    lower = stderr.lower()
    return any(marker in lower for marker in _LARGE_FILE_MARKERS)


def is_untracked_bookmark_error(message: str) -> bool:
    lower = message.lower()
    return (
        "refusing to create new remote bookmark" in lower
        or "not tracked" in lower
        or "untracked" in lower
    )


def is_revisions_unsupported_error(message: str) -> bool:
    return "revisions" in message.lower() and is_flag_unsupported(message)


def is_private_commit_error(message: str) -> bool:
    lower = message.lower()
    return "private" in lower and "won't push" in lower


def is_empty_description_error(message: str) -> bool:
    lower = message.lower()
    return "no description" in lower and "won't push" in lower


def is_bookmark_exists_error(error: JjError) -> bool:
    if not isinstance(error, CommandFailedError):
        return False
    lower = error.stderr.lower()
    return "already exists" in lower or "bookmark already" in lower


def is_backwards_move_error(message: str) -> bool:
    return "backwards or sideways" in message


def is_no_conflicts_message(message: str) -> bool:
    return "No conflicts" in message


def is_ambiguous_move_error(message: str) -> bool:
    """``jj next``/``jj prev`` found several candidates and will not guess."""
    return "more than one child" in message or "more than one parent" in message


def is_no_descendant_error(message: str) -> bool:
    return "No descendant" in message or "no child" in message


def is_no_ancestor_error(message: str) -> bool:
    return "No ancestor" in message or "no parent" in message


def is_redo_chain_description(description: str) -> bool:
    lower = description.lower()
    return lower.startswith("undo") or lower.startswith("restore")


def detect_push_retry_flags(message: str) -> list[str]:
    """Allow-flags that make a rejected push acceptable; both may apply."""
    flags: list[str] = []
    if is_private_commit_error(message):
        flags.append(constants.ALLOW_PRIVATE)
    if is_empty_description_error(message):
        flags.append(constants.ALLOW_EMPTY_DESCRIPTION)
    return flags


def retry_notes_from_flags(flags: Sequence[str]) -> list[str]:
    notes: list[str] = []
    if constants.ALLOW_PRIVATE in flags:
        notes.append(PRIVATE_COMMIT_NOTE)
    if constants.ALLOW_EMPTY_DESCRIPTION in flags:
        notes.append(EMPTY_DESCRIPTION_NOTE)
    return notes


def build_push_suffix(used_allow_new: bool, notes: Sequence[str]) -> str:
    parts: list[str] = []
    if used_allow_new:
        parts.append(ALLOW_NEW_NOTE)
    parts.extend(notes)
    if not parts:
        return ""
    return f" ({' + '.join(parts)})"


@dataclass(frozen=True)
class FlagRetryResult:
    output: str
    dropped_flag: str | None = None

    @property
    def fell_back(self) -> bool:
        return self.dropped_flag is not None


def run_with_optional_flag(
    run: Callable[[Sequence[str]], str],
    args: Sequence[str],
    optional_flag: str,
) -> FlagRetryResult:
    """Run ``args``; if jj rejects ``optional_flag``, reissue without it.

    Only the first occurrence of the flag is removed and every other argument
    keeps its position. A failure of the reissued command propagates.
    """
    try:
        return FlagRetryResult(run(list(args)))
    except CommandFailedError as exc:
        if optional_flag not in args or not is_flag_unsupported(exc.stderr):
            raise
        reduced = list(args)
        reduced.remove(optional_flag)
        logger.info("jj_retry_without_flag", flag=optional_flag, argv=reduced)
        return FlagRetryResult(run(reduced), dropped_flag=optional_flag)


@dataclass
class BulkOutcome:
    """Per-target results of a bulk operation; both lists may be non-empty."""

    successes: list[str]
    failures: list[str]
    used_allow_new: bool = False
    notes: list[str] | None = None

    def success_message(self, verb: str, remote: str | None = None) -> str | None:
        if not self.successes:
            return None
        names = ", ".join(self.successes)
        target = f" to {remote}" if remote else ""
        return f"{verb}: {names}{target}{build_push_suffix(self.used_allow_new, self.notes or [])}"

    def failure_message(self, prefix: str) -> str | None:
        if not self.failures:
            return None
        return f"{prefix}: {'; '.join(self.failures)}"


def run_bulk(
    targets: Sequence[str],
    attempt: Callable[[str, Sequence[str]], str],
) -> BulkOutcome:
    """Attempt every target independently, with one allow-flag retry each.

    ``attempt(target, extra_flags)`` performs the operation. A failure whose
    message matches an allow-flag predicate is retried once with all matching
    flags; any remaining failure is recorded as ``"<target>: <error>"``.
    """
    outcome = BulkOutcome(successes=[], failures=[], notes=[])
    for target in targets:
        try:
            attempt(target, ())
        except JjError as exc:
            message = str(exc)
            extra_flags: list[str] = []
            if is_untracked_bookmark_error(message):
                extra_flags.append(constants.ALLOW_NEW)
            extra_flags.extend(detect_push_retry_flags(message))
            if not extra_flags:
                outcome.failures.append(f"{target}: {exc}")
                continue
            logger.info("jj_retry_with_flags", target=target, flags=extra_flags)
            try:
                attempt(target, tuple(extra_flags))
            except JjError as retry_exc:
                outcome.failures.append(f"{target}: {retry_exc}")
                continue
            if constants.ALLOW_NEW in extra_flags:
                outcome.used_allow_new = True
            for note in retry_notes_from_flags(extra_flags):
                if note not in outcome.notes:
                    outcome.notes.append(note)
        outcome.successes.append(target)
    return outcome
