"""Conflict resolution: list conflicted files, resolve with a side or a tool."""

from __future__ import annotations

from ..jj.constants import TOOL_OURS, TOOL_THEIRS
from ..jj.errors import JjError
from ..jj.retry import is_no_conflicts_message
from .actions import run_interactive
from .refresh import go_back, go_to_view, mark_dirty_and_refresh_current
from .state import App, DirtyFlags, View


def open_resolve_view(app: App, change_id: str, is_working_copy: bool) -> None:
    try:
        files = app.jj.resolve_list(change_id)
    except JjError as exc:
        app.set_error(f"Failed to list conflicts: {exc}")
        return
    if not files:
        app.notify_info("No conflicts in this change")
        return
    app.resolve_files = files
    app.resolve_change_id = change_id
    app.resolve_is_working_copy = is_working_copy
    app.resolve_selected = 0
    go_to_view(app, View.RESOLVE)


def _all_resolved(app: App) -> None:
    app.notify_success("All conflicts resolved!")
    app.resolve_files = []
    app.resolve_change_id = None
    go_back(app)
    mark_dirty_and_refresh_current(app, DirtyFlags.log_and_status())


def refresh_resolve_list(app: App) -> None:
    """Reload conflicts; leave the view once none remain."""
    if app.resolve_change_id is None:
        return
    try:
        files = app.jj.resolve_list(app.resolve_change_id)
    except JjError as exc:
        if is_no_conflicts_message(str(exc)):
            _all_resolved(app)
        else:
            app.set_error(f"Failed to refresh conflicts: {exc}")
        return
    if not files:
        _all_resolved(app)
        return
    app.resolve_files = files
    app.resolve_selected = min(app.resolve_selected, len(files) - 1)
    app.render_dirty = True


def _resolve_with(app: App, file_path: str, tool: str) -> None:
    if app.resolve_change_id is None:
        return
    try:
        app.jj.resolve_with_tool(file_path, tool, app.resolve_change_id)
    except JjError as exc:
        app.set_error(f"Resolve failed: {exc}")
        return
    app.notify_success(f"Resolved {file_path} with {tool}")
    refresh_resolve_list(app)


def execute_resolve_ours(app: App, file_path: str) -> None:
    _resolve_with(app, file_path, TOOL_OURS)


def execute_resolve_theirs(app: App, file_path: str) -> None:
    _resolve_with(app, file_path, TOOL_THEIRS)


def execute_resolve_external(app: App, file_path: str) -> None:
    change_id = app.resolve_change_id
    if change_id is None:
        return
    if not app.resolve_is_working_copy:
        app.notify_warning("External merge tool only works for working copy (@)")
        return
    try:
        code = run_interactive(app, lambda: app.jj.resolve_interactive(file_path, change_id))
    except JjError as exc:
        app.set_error(f"Resolve failed: {exc}")
    else:
        if code == 0:
            app.notify_success(f"Resolved {file_path}")
        else:
            app.notify_info("Resolve cancelled or failed")
    refresh_resolve_list(app)
