"""Interpret the human-readable text jj prints after a mutation.

These read the English output of commands that succeeded, so each wording
is matched in exactly one function here. Failure wording is matched by the
predicates in ``lazyjj.jj.retry``.
"""

from __future__ import annotations

from ..model import Notification


def short(identifier: str, length: int = 8) -> str:
    return identifier[:length]


def parse_duplicate_output(output: str) -> str | None:
    """New change id from ``Duplicated <commit> as <change> <commit> <desc>``."""
    for line in output.splitlines():
        if not line.startswith("Duplicated "):
            continue
        parts = line[len("Duplicated "):].split(" ", 3)
        if len(parts) >= 3 and parts[1] == "as":
            return parts[2]
    return None


def parse_push_change_bookmark(output: str, change_id: str) -> str:
    """Bookmark created by ``push --change``, else jj's ``push-<id>`` naming."""
    for line in output.splitlines():
        if line.startswith("Creating bookmark "):
            tokens = line[len("Creating bookmark "):].split()
            if tokens:
                return tokens[0]
    return f"push-{short(change_id)}"


def next_prev_message(output: str, direction: str) -> str:
    trimmed = output.strip()
    if not trimmed:
        return f"Moved {direction} successfully"
    return f"Moved {direction}: {trimmed.splitlines()[0]}"


def _reports_nothing(output: str) -> bool:
    return not output.strip() or "nothing" in output.lower()


def absorb_notification(output: str) -> Notification:
    if _reports_nothing(output):
        return Notification.info("Nothing to absorb")
    return Notification.success("Absorb finished")


def simplify_parents_notification(output: str, change_id: str) -> Notification:
    if _reports_nothing(output):
        return Notification.info("No redundant parents found")
    return Notification.success(f"Simplified parents for {short(change_id)} (undo: u)")


def parallelize_notification(output: str) -> Notification:
    # jj parallelize reports nothing on success, so only explicit wording counts.
    if "nothing" in output.lower():
        return Notification.info("Nothing to parallelize (revisions may not be connected)")
    return Notification.success("Parallelized (undo: u)")


def fetch_is_up_to_date(output: str) -> bool:
    return not output.strip() or "Nothing changed" in output


def rebase_reports_conflict(output: str) -> bool:
    return "conflict" in output.lower()
