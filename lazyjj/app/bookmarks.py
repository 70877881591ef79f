"""Bookmark workflows: create, move, delete, rename, forget, track and jump."""

from __future__ import annotations

from ..jj.constants import WORKING_COPY
from ..jj.errors import JjError
from ..jj.retry import is_backwards_move_error, is_bookmark_exists_error
from ..parser.messages import short
from .callbacks import (
    BookmarkForget,
    BookmarkJump,
    BookmarkMoveBackwards,
    BookmarkMoveToWc,
    DeleteBookmarks,
    MoveBookmark,
    Track,
)
from .dialog import Dialog, SelectItem
from .preview_cache import update_preview_if_needed
from .refresh import mark_dirty_and_refresh_current
from .state import App, DirtyFlags, PromptKind, TextPrompt

UNDO_NOTE = "Can be undone with 'u'."


def truncate_description(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    if max_len > 3:
        return text[: max_len - 3] + "..."
    return text[:max_len]


def _run_bookmark_action(app: App, run, failure: str, success: str, flags: DirtyFlags) -> bool:
    try:
        run()
    except JjError as exc:
        app.set_error(f"{failure}: {exc}")
        return False
    app.notify_success(success)
    mark_dirty_and_refresh_current(app, flags)
    return True


# Create / move


def start_bookmark_create(app: App, change_id: str) -> None:
    app.prompt = TextPrompt(PromptKind.BOOKMARK_CREATE, "Bookmark name", "", change_id)


def execute_bookmark_create(app: App, change_id: str, name: str) -> None:
    """Create ``name`` on ``change_id``; an existing name asks to move it instead."""
    name = name.strip()
    if not name:
        app.notify_warning("Bookmark name cannot be empty")
        return
    try:
        app.jj.bookmark_create(name, change_id)
    except JjError as exc:
        if is_bookmark_exists_error(exc):
            app.active_dialog = Dialog.confirm(
                "Move Bookmark",
                f'Move bookmark "{name}" to this change?',
                MoveBookmark(name, change_id),
                detail=bookmark_move_detail(app, name, change_id),
            )
        else:
            app.set_error(f"Failed to create bookmark: {exc}")
        return
    app.notify_success(f"Created bookmark: {name}")
    mark_dirty_and_refresh_current(app, DirtyFlags.log_and_bookmarks())


def bookmark_move_detail(app: App, name: str, to_change_id: str) -> str:
    """From/To lines for the move confirm, using the loaded log before asking jj."""
    source = next(
        (c for c in app.changes if not c.is_graph_only and name in c.bookmarks),
        None,
    )
    if source is not None:
        from_info = (source.change_id, source.description)
    else:
        try:
            info = app.jj.get_change_info(name)
        except JjError:
            info = None
        from_info = (info.change_id, info.description) if info is not None else None
    if from_info is None:
        return UNDO_NOTE

    selected = app.selected_change()
    to_desc = selected.display_description() if selected is not None else ""
    from_id, from_desc = from_info
    return (
        f"From: {from_id}  {truncate_description(from_desc, 40)}\n"
        f"  To: {short(to_change_id)}  {truncate_description(to_desc, 40)}\n\n"
        f"{UNDO_NOTE}"
    )


def execute_bookmark_move(app: App, name: str, change_id: str) -> None:
    _run_bookmark_action(
        app,
        lambda: app.jj.bookmark_set(name, change_id),
        "Failed to move bookmark",
        f"Moved bookmark: {name}",
        DirtyFlags.log_and_bookmarks(),
    )


def start_bookmark_move_to_wc(app: App, name: str) -> None:
    app.active_dialog = Dialog.confirm(
        "Move Bookmark",
        f"Move bookmark '{name}' to @?",
        BookmarkMoveToWc(name),
        detail=_move_to_wc_detail(app, name),
    )


def _move_to_wc_detail(app: App, name: str) -> str:
    info = next((b for b in app.bookmarks if b.bookmark.name == name and b.bookmark.is_local), None)
    if info is not None:
        from_desc = f"{short(info.change_id or '?')} {info.description or '(no description)'}"
    else:
        from_desc = "?"
    working_copy = app.working_copy()
    if working_copy is not None:
        to_desc = f"{short(working_copy.change_id)} {working_copy.description or '(no description)'}"
    else:
        to_desc = WORKING_COPY
    return f"From: {from_desc}\n  To: {to_desc}\n\n{UNDO_NOTE}"


def execute_bookmark_move_to_wc(app: App, name: str) -> None:
    try:
        app.jj.bookmark_move(name, WORKING_COPY)
    except JjError as exc:
        if is_backwards_move_error(str(exc)):
            app.active_dialog = Dialog.confirm(
                "Move Bookmark (Force)",
                f"Bookmark '{name}' requires backwards/sideways move.\nAllow --allow-backwards?",
                BookmarkMoveBackwards(name),
                detail="This moves the bookmark in a non-forward direction.",
            )
        else:
            app.set_error(
                f"Move failed: {exc}\nTry: jj bookmark move {name} --to @ --allow-backwards"
            )
        return
    app.notify_success(f"Moved bookmark '{name}' to @")
    mark_dirty_and_refresh_current(app, DirtyFlags.log_and_bookmarks())


def execute_bookmark_move_backwards(app: App, name: str) -> None:
    _run_bookmark_action(
        app,
        lambda: app.jj.bookmark_move(name, WORKING_COPY, allow_backwards=True),
        "Move failed",
        f"Moved bookmark '{name}' to @ (backwards)",
        DirtyFlags.log_and_bookmarks(),
    )


# Delete / rename / forget


def start_bookmark_delete(app: App) -> None:
    change = app.selected_change()
    if change is None:
        return
    if not change.bookmarks:
        app.notify_info("No bookmarks to delete")
        return
    items = [SelectItem(name, name) for name in change.bookmarks]
    app.active_dialog = Dialog.select(
        "Delete Bookmarks",
        f"Select bookmarks to delete from {short(change.change_id)}:",
        items,
        DeleteBookmarks(),
        detail="Deletions will propagate to remotes on push.",
    )


def execute_bookmark_delete(app: App, names: list[str] | tuple[str, ...]) -> None:
    if not names:
        return
    _run_bookmark_action(
        app,
        lambda: app.jj.bookmark_delete(names),
        "Failed to delete bookmarks",
        f"Deleted bookmarks: {', '.join(names)}",
        DirtyFlags.log_and_bookmarks(),
    )


def start_bookmark_rename(app: App, old_name: str) -> None:
    app.prompt = TextPrompt(PromptKind.BOOKMARK_RENAME, f"Rename {old_name}", old_name, old_name)


def execute_bookmark_rename(app: App, old_name: str, new_name: str) -> None:
    if old_name == new_name:
        app.notify_info("Name unchanged")
        return
    if not new_name.strip():
        app.notify_warning("Bookmark name cannot be empty")
        return
    _run_bookmark_action(
        app,
        lambda: app.jj.bookmark_rename(old_name, new_name),
        "Rename failed",
        f"Renamed bookmark: {old_name} → {new_name}",
        DirtyFlags.log_and_bookmarks(),
    )


def confirm_bookmark_forget(app: App, name: str) -> None:
    app.active_dialog = Dialog.confirm(
        "Forget Bookmark",
        f"Forget bookmark '{name}'?\n\n"
        "This removes remote tracking.\n"
        "Use 'D' for local delete only.\n"
        "Undo with 'u' if needed.",
        BookmarkForget(),
    )
    app.pending_forget_bookmark = name


def execute_bookmark_forget(app: App) -> None:
    name, app.pending_forget_bookmark = app.pending_forget_bookmark, None
    if name is None:
        return
    _run_bookmark_action(
        app,
        lambda: app.jj.bookmark_forget([name]),
        "Forget failed",
        f"Forgot bookmark: {name} (remote tracking removed)",
        DirtyFlags.log_and_bookmarks(),
    )


# Track / untrack


def start_track(app: App) -> None:
    try:
        bookmarks = app.jj.bookmark_list_all()
    except JjError as exc:
        app.set_error(f"Failed to list bookmarks: {exc}")
        return
    untracked = [b for b in bookmarks if b.is_untracked_remote]
    if not untracked:
        app.notify_info("No untracked remote bookmarks")
        return
    items = [SelectItem(b.full_name, b.full_name) for b in untracked]
    app.active_dialog = Dialog.select(
        "Track Remote Bookmarks", "Select bookmarks to track:", items, Track()
    )


def execute_track(app: App, names: list[str] | tuple[str, ...]) -> None:
    if not names:
        return
    display = names[0].split("@", 1)[0] if len(names) == 1 else f"{len(names)} bookmarks"
    _run_bookmark_action(
        app,
        lambda: app.jj.bookmark_track(names),
        "Failed to track",
        f"Started tracking: {display}",
        DirtyFlags.all(),
    )


def execute_untrack(app: App, full_name: str) -> None:
    display = full_name.split("@", 1)[0]
    _run_bookmark_action(
        app,
        lambda: app.jj.bookmark_untrack([full_name]),
        "Failed to untrack",
        f"Stopped tracking: {display}",
        DirtyFlags.all(),
    )


# Jump


def start_bookmark_jump(app: App) -> None:
    try:
        bookmarks = app.jj.bookmark_list_with_info()
    except JjError as exc:
        app.set_error(f"Failed to list bookmarks: {exc}")
        return
    jumpable = [b for b in bookmarks if b.is_jumpable()]
    if not jumpable:
        app.notify_info("No bookmarks available")
        return
    items = [SelectItem(b.display_label(40), b.change_id or "") for b in jumpable]
    app.active_dialog = Dialog.select_single(
        "Jump to Bookmark", "Select bookmark:", items, BookmarkJump()
    )


def execute_bookmark_jump(app: App, change_id: str) -> None:
    if app.select_change_by_id(change_id):
        update_preview_if_needed(app)
        app.notify_success(f"Jumped to {short(change_id)}")
        app.render_dirty = True
    else:
        app.notify_warning("Bookmark target not visible in current revset")
