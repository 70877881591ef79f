"""Dirty-flag refresh scheduling and view navigation.

A mutation declares the views it invalidates; only the view on screen is
re-read right away, the rest wait until navigation makes them visible.
"""

from __future__ import annotations

import structlog

from ..jj.errors import JjError
from .preview_cache import update_preview_if_needed
from .state import App, DirtyFlags, View

logger = structlog.get_logger(__name__)


def refresh_log(app: App) -> None:
    selected = app.selected_change()
    try:
        changes = app.jj.log(app.revset)
    except JjError as exc:
        app.set_error(f"jj error: {exc}")
        return
    app.changes = changes
    app.clear_error()
    if selected is None or not app.select_change_by_id(selected.change_id):
        if not app.select_working_copy():
            app.select_first_change()
    app.render_dirty = True
    update_preview_if_needed(app)


def refresh_status(app: App) -> None:
    try:
        app.status = app.jj.status()
    except JjError as exc:
        app.set_error(f"jj status error: {exc}")
        return
    if app.status_selected >= len(app.status.files):
        app.status_selected = max(0, len(app.status.files) - 1)
    app.render_dirty = True


def refresh_op_log(app: App) -> None:
    try:
        app.operations = app.jj.op_log(app.op_log_limit)
    except JjError as exc:
        app.set_error(f"jj op log error: {exc}")
        return
    app.op_selected = min(app.op_selected, max(0, len(app.operations) - 1))
    app.render_dirty = True


def refresh_bookmarks(app: App) -> None:
    try:
        app.bookmarks = app.jj.bookmark_list_with_info()
    except JjError as exc:
        app.set_error(f"Failed to list bookmarks: {exc}")
        return
    app.bookmark_selected = min(app.bookmark_selected, max(0, len(app.bookmarks) - 1))
    app.render_dirty = True


def _refresh_if_dirty(app: App, view: View) -> None:
    dirty = app.dirty
    if view is View.LOG and dirty.log:
        dirty.log = False
        logger.debug("dirty_refresh", view=view.value)
        refresh_log(app)
    elif view is View.STATUS and dirty.status:
        dirty.status = False
        logger.debug("dirty_refresh", view=view.value)
        refresh_status(app)
    elif view is View.OPERATION and dirty.op_log:
        dirty.op_log = False
        logger.debug("dirty_refresh", view=view.value)
        refresh_op_log(app)
    elif view is View.BOOKMARK and dirty.bookmarks:
        dirty.bookmarks = False
        logger.debug("dirty_refresh", view=view.value)
        refresh_bookmarks(app)


def mark_dirty_and_refresh_current(app: App, flags: DirtyFlags) -> None:
    """Merge ``flags`` and re-read at most the currently visible view."""
    app.dirty.merge(flags)
    if flags.is_all():
        app.preview_cache.clear()
    _refresh_if_dirty(app, app.current_view)


def refresh_view(app: App, view: View) -> None:
    """Force a re-read of ``view`` regardless of its dirty bit."""
    if view is View.LOG:
        app.dirty.log = False
        refresh_log(app)
    elif view is View.STATUS:
        app.dirty.status = False
        refresh_status(app)
    elif view is View.OPERATION:
        app.dirty.op_log = False
        refresh_op_log(app)
    elif view is View.BOOKMARK:
        app.dirty.bookmarks = False
        refresh_bookmarks(app)


def go_to_view(app: App, view: View) -> None:
    if app.current_view is view:
        return
    app.previous_view = app.current_view
    app.current_view = view
    app.render_dirty = True
    _refresh_if_dirty(app, view)


def go_back(app: App) -> None:
    target = app.previous_view or View.LOG
    if target is app.current_view:
        target = View.LOG
    app.previous_view = None
    app.current_view = target
    app.render_dirty = True
    _refresh_if_dirty(app, target)


def next_view(app: App) -> None:
    """Tab: Log and Status swap; every other view returns to the log."""
    go_to_view(app, View.STATUS if app.current_view is View.LOG else View.LOG)
