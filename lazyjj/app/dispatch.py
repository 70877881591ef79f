"""Route a closed dialog's result to the workflow step its callback names."""

from __future__ import annotations

import structlog

from . import actions, bookmarks, fetch, push
from .callbacks import (
    Abandon,
    BookmarkForget,
    BookmarkJump,
    BookmarkMoveBackwards,
    BookmarkMoveToWc,
    DeleteBookmarks,
    DialogCallback,
    GitFetch,
    GitFetchBranch,
    GitPush,
    GitPushBulkConfirm,
    GitPushChange,
    GitPushModeSelect,
    GitPushMultiBookmarkMode,
    GitPushRemoteSelect,
    GitPushRevisions,
    MoveBookmark,
    OpRestore,
    Parallelize,
    RestoreAll,
    RestoreFile,
    Revert,
    SimplifyParents,
    Track,
)
from .dialog import Cancelled, DialogResult
from .state import App

logger = structlog.get_logger(__name__)

_PUSH_CALLBACKS = (
    GitPushChange,
    GitPushRemoteSelect,
    GitPushModeSelect,
    GitPushBulkConfirm,
    GitPushRevisions,
    GitPushMultiBookmarkMode,
)


def handle_dialog_result(app: App, result: DialogResult) -> None:
    """Clear the dialog slot, then run the callback or its cancel cleanup."""
    dialog, app.active_dialog = app.active_dialog, None
    app.render_dirty = True
    if dialog is None:
        return
    callback = dialog.callback
    cancelled = isinstance(result, Cancelled)
    logger.debug(
        "dialog_dispatch",
        callback=type(callback).__name__,
        outcome="cancelled" if cancelled else "confirmed",
    )
    if cancelled:
        _cancel(app, callback)
    else:
        _confirm(app, callback, list(result.values))


def _cancel(app: App, callback: DialogCallback) -> None:
    if isinstance(callback, GitPush):
        app.pending_push_bookmarks = []
        app.push_target_remote = None
    elif isinstance(callback, _PUSH_CALLBACKS):
        app.push_target_remote = None
    elif isinstance(callback, BookmarkForget):
        app.pending_forget_bookmark = None


def _first(values: list[str]) -> str | None:
    return values[0] if values else None


def _confirm(app: App, callback: DialogCallback, values: list[str]) -> None:
    # Push
    if isinstance(callback, GitPush):
        if values:
            push.execute_push(app, values)
        else:
            pending, app.pending_push_bookmarks = app.pending_push_bookmarks, []
            push.execute_push(app, pending)
    elif isinstance(callback, GitPushChange):
        push.execute_push_change(app, callback.change_id)
    elif isinstance(callback, GitPushRemoteSelect):
        remote = _first(values)
        if remote is not None:
            app.push_target_remote = remote
            push.start_push(app)
    elif isinstance(callback, GitPushModeSelect):
        choice = _first(values)
        if choice == push.MODE_CHANGE:
            push.start_push_change(app, callback.change_id)
        elif choice in push.BULK_MODES:
            push.start_push_bulk(app, push.BULK_MODES[choice])
    elif isinstance(callback, GitPushBulkConfirm):
        push.execute_push_bulk(app, callback.mode, callback.remote)
    elif isinstance(callback, GitPushRevisions):
        push.execute_push_revisions(app, callback.change_id, callback.bookmarks)
    elif isinstance(callback, GitPushMultiBookmarkMode):
        choice = _first(values)
        if choice == push.MULTI_REVISIONS:
            push.start_push_revisions(app, callback.change_id, callback.bookmarks)
        elif choice == push.MULTI_INDIVIDUAL:
            push.show_individual_bookmark_select(app, callback.change_id, callback.bookmarks)

    # Fetch
    elif isinstance(callback, GitFetch):
        choice = _first(values)
        if choice == fetch.BRANCH_OPTION:
            fetch.start_fetch_branch_select(app)
        elif choice is not None:
            fetch.execute_fetch_with_option(app, choice)
    elif isinstance(callback, GitFetchBranch):
        branch = _first(values)
        if branch is not None:
            fetch.execute_fetch_branch(app, branch)

    # Bookmarks
    elif isinstance(callback, DeleteBookmarks):
        bookmarks.execute_bookmark_delete(app, values)
    elif isinstance(callback, MoveBookmark):
        bookmarks.execute_bookmark_move(app, callback.name, callback.change_id)
    elif isinstance(callback, BookmarkJump):
        change_id = _first(values)
        if change_id:
            bookmarks.execute_bookmark_jump(app, change_id)
    elif isinstance(callback, BookmarkForget):
        bookmarks.execute_bookmark_forget(app)
    elif isinstance(callback, BookmarkMoveToWc):
        bookmarks.execute_bookmark_move_to_wc(app, callback.name)
    elif isinstance(callback, BookmarkMoveBackwards):
        bookmarks.execute_bookmark_move_backwards(app, callback.name)
    elif isinstance(callback, Track):
        bookmarks.execute_track(app, values)

    # Everything else
    elif isinstance(callback, OpRestore):
        actions.execute_op_restore(app, callback.operation_id)
    elif isinstance(callback, RestoreFile):
        actions.execute_restore_file(app, callback.file_path)
    elif isinstance(callback, RestoreAll):
        actions.execute_restore_all(app)
    elif isinstance(callback, Revert):
        actions.execute_revert(app, callback.change_id)
    elif isinstance(callback, Abandon):
        actions.execute_abandon(app, callback.change_id)
    elif isinstance(callback, SimplifyParents):
        actions.execute_simplify_parents(app, callback.change_id)
    elif isinstance(callback, Parallelize):
        actions.execute_parallelize(app, callback.from_id, callback.to_id)
    else:
        logger.warning("dialog_callback_unhandled", callback=type(callback).__name__)
