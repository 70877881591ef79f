"""Git push workflows: preview with ``--dry-run``, confirm, then push.

Every remote mutation goes through a confirm dialog built from the dry-run
preview. ``App.push_target_remote`` is consumed by whichever step finishes
the flow, success or failure.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

import structlog

from ..jj.errors import JjError
from ..jj.executor import PushBulkMode
from ..jj.retry import (
    build_push_suffix,
    detect_push_retry_flags,
    is_revisions_unsupported_error,
    retry_notes_from_flags,
    run_bulk,
)
from ..parser import PushPreviewAction, PushPreviewResult, parse_push_dry_run
from ..parser.messages import parse_push_change_bookmark, short
from ..parser.push import PushActionKind, PushPreviewOutcome
from .callbacks import (
    GitPush,
    GitPushBulkConfirm,
    GitPushChange,
    GitPushModeSelect,
    GitPushMultiBookmarkMode,
    GitPushRemoteSelect,
    GitPushRevisions,
)
from .dialog import Dialog, SelectItem
from .refresh import mark_dirty_and_refresh_current
from .state import App, DirtyFlags

logger = structlog.get_logger(__name__)

TITLE = "Push to Remote"
REMOTE_IRREVERSIBLE = "Remote changes cannot be undone with 'u'."
FORCE_DETAIL = "This will rewrite remote history! Cannot be undone with 'u'."
PROTECTED_FORCE_DETAIL = "WARNING: Force pushing to a protected bookmark rewrites shared history!"
PROTECTED_BULK_DETAIL = "WARNING: Force pushing to protected bookmarks rewrites shared history!"
PREVIEW_UNAVAILABLE = "(preview unavailable: will auto-retry with flags)"

MODE_CHANGE = "change"
MULTI_REVISIONS = "revisions"
MULTI_INDIVIDUAL = "individual"
BULK_MODES = {mode.name.lower(): mode for mode in PushBulkMode}


def has_force_push(actions: Sequence[PushPreviewAction]) -> bool:
    """Anything that is not a forward move, add or delete counts as force."""
    safe = (PushActionKind.MOVE_FORWARD, PushActionKind.ADD, PushActionKind.DELETE)
    return any(action.kind not in safe for action in actions)


def format_preview_actions(actions: Sequence[PushPreviewAction]) -> str:
    lines = []
    for action in actions:
        from_short = short(action.from_commit or "")
        to_short = short(action.to_commit or "")
        if action.kind is PushActionKind.MOVE_FORWARD:
            lines.append(f"Move forward {action.bookmark} from {from_short}.. to {to_short}..")
        elif action.kind is PushActionKind.MOVE_SIDEWAYS:
            lines.append(f"⚠ Move sideways {action.bookmark} from {from_short}.. to {to_short}..")
        elif action.kind is PushActionKind.MOVE_BACKWARD:
            lines.append(f"⚠ Move backward {action.bookmark} from {from_short}.. to {to_short}..")
        elif action.kind is PushActionKind.ADD:
            lines.append(f"Add {action.bookmark} to {to_short}..")
        else:
            lines.append(f"Delete {action.bookmark} from {from_short}..")
    return "\n".join(lines)


def format_bookmark_status(app: App, preview: PushPreviewResult, name: str) -> str:
    """Short per-bookmark label for the individual push select."""
    if preview.outcome is PushPreviewOutcome.NOTHING_CHANGED:
        return "up to date"
    for action in preview.actions:
        if action.bookmark != name:
            continue
        if action.kind is PushActionKind.MOVE_FORWARD:
            return f"move from {short(action.from_commit or '')}.."
        if action.is_force:
            return "⚠ PROTECTED force" if app.is_protected(name) else "⚠ force"
        if action.kind is PushActionKind.ADD:
            return "new"
        return "delete"
    return ""


def _push_with_retry(app: App, attempt: Callable[[Sequence[str]], str]) -> tuple[str, list[str]]:
    """Run ``attempt``; retry once with allow-flags a rejection asks for."""
    try:
        return attempt(()), []
    except JjError as exc:
        flags = detect_push_retry_flags(str(exc))
        if not flags:
            raise
        logger.info("jj_retry_with_flags", flags=flags)
        return attempt(flags), flags


# Entry point


def start_push(app: App) -> None:
    change = app.selected_change()
    if change is None:
        return

    if app.push_target_remote is None:
        try:
            remotes = app.jj.git_remote_list()
        except JjError:
            remotes = []
        if len(remotes) > 1:
            app.active_dialog = Dialog.select_single(
                TITLE,
                "Select remote to push to:",
                [SelectItem(remote, remote) for remote in remotes],
                GitPushRemoteSelect(),
            )
            return

    bookmarks = list(change.bookmarks)
    if not bookmarks:
        items = [
            SelectItem("Push by change ID (--change)", MODE_CHANGE),
            SelectItem("Push all bookmarks (--all)", "all"),
            SelectItem("Push tracked bookmarks (--tracked)", "tracked"),
            SelectItem("Push deleted bookmarks (--deleted)", "deleted"),
        ]
        app.active_dialog = Dialog.select_single(
            TITLE,
            "No bookmarks on this change. Choose push mode:",
            items,
            GitPushModeSelect(change.change_id),
        )
    elif len(bookmarks) == 1:
        _start_single_bookmark_push(app, bookmarks[0])
    else:
        items = [
            SelectItem("All bookmarks on this revision (--revisions)", MULTI_REVISIONS),
            SelectItem("Select individual bookmarks...", MULTI_INDIVIDUAL),
        ]
        app.active_dialog = Dialog.select_single(
            TITLE,
            f"{len(bookmarks)} bookmarks on {short(change.change_id)}. Choose push mode:",
            items,
            GitPushMultiBookmarkMode(change.change_id, tuple(bookmarks)),
        )


def _start_single_bookmark_push(app: App, name: str) -> None:
    try:
        output = app.jj.git_push_bookmark(name, app.push_target_remote, dry_run=True)
    except JjError:
        # The real push may still succeed through the allow-flag retry.
        preview = PushPreviewResult.unparsed()
    else:
        preview = parse_push_dry_run(output)

    if preview.outcome is PushPreviewOutcome.NOTHING_CHANGED:
        app.push_target_remote = None
        app.notify_info(f"Nothing to push: {name} is already up to date")
        return

    if preview.has_changes:
        preview_text = format_preview_actions(preview.actions)
        if has_force_push(preview.actions) and app.is_protected(name):
            body = f'⚠ FORCE PUSH to protected bookmark "{name}"!\n{preview_text}'
            detail = PROTECTED_FORCE_DETAIL
        elif has_force_push(preview.actions):
            body = f'⚠ FORCE PUSH bookmark "{name}"?\n{preview_text}'
            detail = FORCE_DETAIL
        else:
            body = f'Push bookmark "{name}"?\n{preview_text}'
            detail = REMOTE_IRREVERSIBLE
    else:
        body = f'Push bookmark "{name}"?'
        detail = REMOTE_IRREVERSIBLE

    app.active_dialog = Dialog.confirm(TITLE, body, GitPush(), detail=detail)
    app.pending_push_bookmarks = [name]


def execute_push(app: App, names: Sequence[str]) -> None:
    """Push each bookmark on its own; successes and failures are both reported."""
    remote, app.push_target_remote = app.push_target_remote, None
    if not names:
        return

    outcome = run_bulk(
        names,
        lambda name, flags: app.jj.git_push_bookmark(name, remote, flags),
    )
    logger.info(
        "push_bookmarks",
        remote=remote,
        pushed=outcome.successes,
        failed=len(outcome.failures),
    )
    app.pending_push_bookmarks = []
    # Refresh first: a successful log refresh clears the error slot.
    mark_dirty_and_refresh_current(app, DirtyFlags.log_and_status())
    success = outcome.success_message("Pushed bookmark", remote)
    if success is not None:
        app.notify_success(success)
    failure = outcome.failure_message("Push failed")
    if failure is not None:
        app.set_error(failure)


# Push by change id


def start_push_change(app: App, change_id: str) -> None:
    body = f"Push by change ID? (creates push-{short(change_id)})"
    try:
        output = app.jj.git_push_change(change_id, app.push_target_remote, dry_run=True)
    except JjError as exc:
        if not detect_push_retry_flags(str(exc)):
            app.push_target_remote = None
            app.set_error(f"Push failed: {exc}")
            return
        body = f"{body}\n{PREVIEW_UNAVAILABLE}"
    else:
        preview = output.strip()
        if preview:
            body = f"{body}\n{preview}"
    app.active_dialog = Dialog.confirm(
        TITLE, body, GitPushChange(change_id), detail=REMOTE_IRREVERSIBLE
    )


def execute_push_change(app: App, change_id: str) -> None:
    remote, app.push_target_remote = app.push_target_remote, None
    try:
        output, flags = _push_with_retry(
            app, lambda extra: app.jj.git_push_change(change_id, remote, extra)
        )
    except JjError as exc:
        app.set_error(f"Push failed: {exc}")
        return
    bookmark = parse_push_change_bookmark(output, change_id)
    target = f" to {remote}" if remote else ""
    suffix = build_push_suffix(False, retry_notes_from_flags(flags))
    app.notify_success(f"Pushed change {short(change_id)}{target} (created bookmark: {bookmark}){suffix}")
    mark_dirty_and_refresh_current(app, DirtyFlags.log_and_status())


# Bulk push (--all / --tracked / --deleted)


def _preview_touches_protected(app: App, actions: Sequence[PushPreviewAction]) -> bool:
    return any(app.is_protected(action.bookmark) for action in actions)


def start_push_bulk(app: App, mode: PushBulkMode) -> None:
    remote = app.push_target_remote
    try:
        output = app.jj.git_push_bulk(mode, remote, dry_run=True)
    except JjError as exc:
        app.push_target_remote = None
        app.set_error(f"Push failed: {exc}")
        return

    preview = parse_push_dry_run(output)
    raw = output.strip()
    if preview.outcome is PushPreviewOutcome.NOTHING_CHANGED or (
        not preview.has_changes and not raw
    ):
        app.push_target_remote = None
        app.notify_info(f"Nothing to push ({mode.label})")
        return

    if preview.has_changes:
        preview_text = format_preview_actions(preview.actions)
        force = has_force_push(preview.actions)
        if force and _preview_touches_protected(app, preview.actions):
            body = f"⚠ FORCE PUSH {mode.label} (includes protected bookmarks)!\n{preview_text}"
            detail = PROTECTED_BULK_DETAIL
        elif force:
            body = f"⚠ FORCE PUSH {mode.label}?\n{preview_text}"
            detail = FORCE_DETAIL
        else:
            body = f"Push {mode.label}?\n\n{preview_text}"
            detail = REMOTE_IRREVERSIBLE
    else:
        body = f"Push {mode.label}?\n\n{raw}"
        detail = REMOTE_IRREVERSIBLE
    app.active_dialog = Dialog.confirm(
        TITLE, body, GitPushBulkConfirm(mode, remote), detail=detail
    )


def execute_push_bulk(app: App, mode: PushBulkMode, remote: str | None) -> None:
    app.push_target_remote = None
    try:
        app.jj.git_push_bulk(mode, remote)
    except JjError as exc:
        app.set_error(f"Push failed: {exc}")
        return
    app.notify_success(f"Pushed {mode.label}")
    mark_dirty_and_refresh_current(app, DirtyFlags.log_and_status())


# Several bookmarks on one revision


def show_individual_bookmark_select(app: App, change_id: str, bookmarks: Sequence[str]) -> None:
    items = []
    for name in bookmarks:
        try:
            output = app.jj.git_push_bookmark(name, app.push_target_remote, dry_run=True)
        except JjError:
            status = ""
        else:
            status = format_bookmark_status(app, parse_push_dry_run(output), name)
        label = f"{name} ({status})" if status else name
        items.append(SelectItem(label, name))
    app.active_dialog = Dialog.select(
        TITLE,
        f"Select bookmarks to push from {short(change_id)}:",
        items,
        GitPush(),
        detail=REMOTE_IRREVERSIBLE,
    )


def start_push_revisions(app: App, change_id: str, bookmarks: Sequence[str]) -> None:
    callback = GitPushRevisions(change_id, tuple(bookmarks))
    id8 = short(change_id)
    try:
        output = app.jj.git_push_revisions(change_id, app.push_target_remote, dry_run=True)
    except JjError as exc:
        message = str(exc)
        if is_revisions_unsupported_error(message):
            app.notify_info("--revisions not supported, pushing bookmarks individually")
            execute_push(app, bookmarks)
        elif detect_push_retry_flags(message):
            app.active_dialog = Dialog.confirm(
                TITLE,
                f"Push all bookmarks on {id8}?\n{PREVIEW_UNAVAILABLE}",
                callback,
                detail=REMOTE_IRREVERSIBLE,
            )
        else:
            app.push_target_remote = None
            app.set_error(f"Push failed: {exc}")
        return

    preview = parse_push_dry_run(output)
    if preview.outcome is PushPreviewOutcome.NOTHING_CHANGED:
        app.push_target_remote = None
        app.notify_info("Nothing to push: all bookmarks are already up to date")
        return
    if preview.has_changes:
        preview_text = format_preview_actions(preview.actions)
        force = has_force_push(preview.actions)
        if force and _preview_touches_protected(app, preview.actions):
            body = f"⚠ FORCE PUSH all bookmarks on {id8} (includes protected)!\n{preview_text}"
            detail = PROTECTED_BULK_DETAIL
        elif force:
            body = f"⚠ FORCE PUSH all bookmarks on {id8}?\n{preview_text}"
            detail = FORCE_DETAIL
        else:
            body = f"Push all bookmarks on {id8}?\n{preview_text}"
            detail = REMOTE_IRREVERSIBLE
    else:
        body = f"Push all bookmarks on {id8}?"
        detail = REMOTE_IRREVERSIBLE
    app.active_dialog = Dialog.confirm(TITLE, body, callback, detail=detail)


def execute_push_revisions(app: App, change_id: str, bookmarks: Sequence[str]) -> None:
    remote, app.push_target_remote = app.push_target_remote, None
    try:
        _, flags = _push_with_retry(
            app, lambda extra: app.jj.git_push_revisions(change_id, remote, extra)
        )
    except JjError as exc:
        if is_revisions_unsupported_error(str(exc)):
            app.push_target_remote = remote
            app.notify_info("--revisions not supported, pushing bookmarks individually")
            execute_push(app, bookmarks)
        else:
            app.set_error(f"Push failed: {exc}")
        return
    target = f" to {remote}" if remote else ""
    suffix = build_push_suffix(False, retry_notes_from_flags(flags))
    app.notify_success(f"Pushed all bookmarks on {short(change_id)}{target}{suffix}")
    mark_dirty_and_refresh_current(app, DirtyFlags.log_and_status())
