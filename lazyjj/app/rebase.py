"""Rebase in all five modes, with the ``--skip-emptied`` fallback."""

from __future__ import annotations

from ..jj.constants import SKIP_EMPTIED
from ..jj.errors import CommandFailedError, JjError
from ..jj.retry import is_flag_unsupported, run_with_optional_flag
from ..model import Notification, RebaseMode
from ..parser.messages import rebase_reports_conflict, short
from .refresh import mark_dirty_and_refresh_current
from .state import App, DirtyFlags, PendingPick, PickKind

SKIP_EMPTIED_SUFFIX = " (empty commits skipped)"
SKIP_EMPTIED_FALLBACK_NOTE = " (--skip-emptied not supported, empty commits may remain)"
BRANCH_MODE_UNSUPPORTED = (
    "Branch mode (-b) not supported in this jj version. Use Source mode (-s) instead."
)
REBASE_MODE_PROMPT = (
    "Rebase mode: r=revision s=source b=branch A=insert after B=insert before"
    " x=toggle skip emptied (Esc: cancel)"
)
MODE_KEYS = {
    "r": RebaseMode.REVISION,
    "s": RebaseMode.SOURCE,
    "b": RebaseMode.BRANCH,
    "A": RebaseMode.INSERT_AFTER,
    "B": RebaseMode.INSERT_BEFORE,
}


def start_rebase_mode_select(app: App, source: str) -> None:
    app.pick = PendingPick(PickKind.REBASE_MODE, source)
    app.notify_info(REBASE_MODE_PROMPT)


def toggle_skip_emptied(app: App) -> None:
    pick = app.pick
    if pick is None or pick.kind is not PickKind.REBASE_MODE:
        return
    pick.skip_emptied = not pick.skip_emptied
    state = "on" if pick.skip_emptied else "off"
    app.notify_info(f"Skip emptied commits: {state}")


def start_rebase_pick(app: App, source: str, mode: RebaseMode, skip_emptied: bool = False) -> None:
    """Remember the source; the next Enter in the log picks the destination."""
    app.pick = PendingPick(PickKind.REBASE, source, rebase_mode=mode, skip_emptied=skip_emptied)
    app.notify_info(f"Select destination for {short(source)} (Enter: confirm, Esc: cancel)")


def rebase_success_notification(
    output: str, destination: str, mode: RebaseMode, skip_emptied: bool
) -> Notification:
    if rebase_reports_conflict(output):
        return Notification.warning("Rebased with conflicts - resolve with jj resolve")
    suffix = SKIP_EMPTIED_SUFFIX if skip_emptied else ""
    if mode is RebaseMode.REVISION:
        message = "Rebased successfully"
    elif mode is RebaseMode.SOURCE:
        message = "Rebased source and descendants successfully"
    elif mode is RebaseMode.BRANCH:
        message = "Rebased branch successfully"
    elif mode is RebaseMode.INSERT_AFTER:
        message = f"Inserted after {short(destination)} successfully"
    else:
        message = f"Inserted before {short(destination)} successfully"
    return Notification.success(message + suffix)


def _report_failure(app: App, exc: JjError, mode: RebaseMode) -> None:
    if (
        mode is RebaseMode.BRANCH
        and isinstance(exc, CommandFailedError)
        and is_flag_unsupported(exc.stderr)
    ):
        app.notify_warning(BRANCH_MODE_UNSUPPORTED)
    else:
        app.set_error(f"Rebase failed: {exc}")


def execute_rebase(
    app: App,
    source: str,
    destination: str,
    mode: RebaseMode = RebaseMode.REVISION,
    skip_emptied: bool = False,
) -> None:
    if source == destination:
        app.notify_warning("Cannot rebase to itself")
        return

    extra_flags = [SKIP_EMPTIED] if skip_emptied else []
    args = app.jj.rebase_args(source, destination, mode, extra_flags)
    try:
        result = run_with_optional_flag(app.jj.run_write, args, SKIP_EMPTIED)
    except JjError as exc:
        _report_failure(app, exc, mode)
        return

    mark_dirty_and_refresh_current(app, DirtyFlags.log_and_status())
    notification = rebase_success_notification(
        result.output, destination, mode, skip_emptied and not result.fell_back
    )
    if result.fell_back:
        # Keep the kind: a conflict warning must stay a warning.
        notification = Notification(notification.message + SKIP_EMPTIED_FALLBACK_NOTE, notification.kind)
    app.notify(notification)
