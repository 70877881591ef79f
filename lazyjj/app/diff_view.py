"""Diff view: single-revision and compare diffs, format cycling, patch export."""

from __future__ import annotations

from pathlib import Path

from ..jj.errors import JjError
from ..model import DiffContent, DiffDisplayFormat, DiffLineKind
from ..parser import parse_diff_body, parse_diff_body_git, parse_diff_body_stat
from ..parser.messages import short
from .refresh import go_to_view
from .state import App, View

FORMAT_COUNT = len(DiffDisplayFormat)


def _load_show(app: App, change_id: str, fmt: DiffDisplayFormat) -> DiffContent:
    if fmt is DiffDisplayFormat.STAT:
        return app.jj.show_stat(change_id)
    if fmt is DiffDisplayFormat.GIT:
        return app.jj.show_git(change_id)
    return app.jj.show(change_id)


def _load_range(app: App, from_id: str, to_id: str, fmt: DiffDisplayFormat) -> DiffContent:
    if fmt is DiffDisplayFormat.STAT:
        return parse_diff_body_stat(app.jj.diff_range_stat(from_id, to_id))
    if fmt is DiffDisplayFormat.GIT:
        return parse_diff_body_git(app.jj.diff_range_git(from_id, to_id))
    return parse_diff_body(app.jj.diff_range(from_id, to_id))


def open_diff(app: App, change_id: str, file_path: str | None = None) -> None:
    """Show ``change_id`` in the configured format, optionally at ``file_path``."""
    try:
        content = _load_show(app, change_id, app.diff_format)
    except JjError as exc:
        app.set_error(f"Failed to load diff: {exc}")
        return
    app.diff = content
    app.diff_change_id = change_id
    app.diff_compare = None
    app.diff_scroll = _file_offset(content, file_path) if file_path else 0
    app.clear_error()
    go_to_view(app, View.DIFF)


def _file_offset(content: DiffContent, file_path: str) -> int:
    for index, line in enumerate(content.lines):
        if line.kind is DiffLineKind.FILE_HEADER and line.content == file_path:
            return index
    return 0


def open_compare_diff(app: App, from_id: str, to_id: str) -> None:
    if from_id == to_id:
        app.notify_info("Cannot compare revision with itself")
        return
    try:
        content = _load_range(app, from_id, to_id, app.diff_format)
    except JjError as exc:
        app.set_error(f"Failed to load diff: {exc}")
        return
    try:
        from_info = app.jj.get_change_info(from_id)
    except JjError as exc:
        app.set_error(f"Failed to load from revision: {exc}")
        return
    try:
        to_info = app.jj.get_change_info(to_id)
    except JjError as exc:
        app.set_error(f"Failed to load to revision: {exc}")
        return
    if from_info is None or to_info is None:
        app.set_error("Failed to load revision metadata")
        return

    app.diff = content
    app.diff_change_id = to_id
    app.diff_compare = (from_info, to_info)
    app.diff_scroll = 0
    app.clear_error()
    go_to_view(app, View.DIFF)
    app.notify_info(f"Comparing {short(from_info.change_id)} -> {short(to_info.change_id)}")


def reload_diff(app: App) -> bool:
    """Re-read the diff on screen; returns False when there is none."""
    if app.diff_change_id is None:
        return False
    try:
        if app.diff_compare is not None:
            from_info, to_info = app.diff_compare
            app.diff = _load_range(app, from_info.change_id, to_info.change_id, app.diff_format)
        else:
            app.diff = _load_show(app, app.diff_change_id, app.diff_format)
    except JjError as exc:
        app.set_error(f"Failed to load diff: {exc}")
        return False
    app.render_dirty = True
    return True


def cycle_diff_format(app: App) -> None:
    if app.diff_change_id is None:
        return
    old_format = app.diff_format
    app.diff_format = old_format.next()
    try:
        if app.diff_compare is not None:
            from_info, to_info = app.diff_compare
            content = _load_range(app, from_info.change_id, to_info.change_id, app.diff_format)
        else:
            content = _load_show(app, app.diff_change_id, app.diff_format)
    except JjError as exc:
        failed, app.diff_format = app.diff_format, old_format
        app.set_error(f"Failed to load {failed.label} format: {exc}")
        return
    app.diff = content
    app.diff_scroll = 0
    app.notify_info(
        f"Display: {app.diff_format.label} ({app.diff_format.position}/{FORMAT_COUNT})"
    )


def unique_patch_filename(stem: str, directory: Path | None = None) -> str:
    """``<stem>.patch``, else the first free ``<stem>-N.patch``."""
    base = directory or Path.cwd()
    candidate = f"{stem}.patch"
    counter = 0
    while (base / candidate).exists():
        counter += 1
        candidate = f"{stem}-{counter}.patch"
    return candidate


def export_diff_to_file(app: App, directory: Path | None = None) -> None:
    """Write the diff on screen as a git-format patch next to the cwd."""
    if app.diff_change_id is None:
        return
    try:
        if app.diff_compare is not None:
            from_info, to_info = app.diff_compare
            stem = f"{short(from_info.change_id)}_{short(to_info.change_id)}"
            text = app.jj.diff_range_git(from_info.change_id, to_info.change_id)
        else:
            stem = short(app.diff_change_id)
            text = app.jj.diff_git_raw(app.diff_change_id)
    except JjError as exc:
        app.set_error(f"Failed to get diff: {exc}")
        return

    base = directory or Path.cwd()
    filename = unique_patch_filename(stem, base)
    try:
        (base / filename).write_text(text, encoding="utf-8")
    except OSError as exc:
        app.set_error(f"Failed to write {filename}: {exc}")
        return
    app.notify_success(f"Exported to {filename}")
