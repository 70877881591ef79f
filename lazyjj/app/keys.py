"""Key handling: decode a key into a per-view ``Action``, then run it.

Decoding only reads ``App``. ``run_action`` is the single seam between input
and the workflow modules, so rendering and key capture never touch jj.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from ..input import KeyComboBinding, KeyComboRegistry
from ..model import DiffLineKind
from ..parser.messages import short
from . import actions, bookmarks, diff_view, fetch, push, rebase, resolve
from .dialog import ENTER_KEYS
from .dispatch import handle_dialog_result
from .preview_cache import resolve_pending_preview, update_preview_if_needed
from .refresh import go_back, next_view, refresh_view
from .state import App, PickKind, PromptKind, TextPrompt, View

HALF_PAGE_MIN = 5


class ActionKind(Enum):
    # Navigation, shared by every list view
    MOVE_DOWN = auto()
    MOVE_UP = auto()
    MOVE_TOP = auto()
    MOVE_BOTTOM = auto()
    PAGE_DOWN = auto()
    PAGE_UP = auto()

    # Log
    OPEN_DIFF = auto()
    START_REVSET = auto()
    START_DESCRIBE = auto()
    DESCRIBE_EXTERNAL = auto()
    EDIT = auto()
    NEW_CHANGE = auto()
    NEW_CHANGE_FROM = auto()
    COMMIT = auto()
    START_SQUASH = auto()
    ABANDON = auto()
    SPLIT = auto()
    DIFFEDIT = auto()
    START_BOOKMARK_CREATE = auto()
    START_BOOKMARK_DELETE = auto()
    START_REBASE = auto()
    ABSORB = auto()
    OPEN_RESOLVE = auto()
    FETCH = auto()
    PUSH = auto()
    TRACK = auto()
    BOOKMARK_JUMP = auto()
    START_COMPARE = auto()
    START_PARALLELIZE = auto()
    REVERT = auto()
    DUPLICATE = auto()
    SIMPLIFY_PARENTS = auto()
    NEXT = auto()
    PREV = auto()
    OPEN_EVOLOG = auto()
    TOGGLE_PREVIEW = auto()
    OPEN_BOOKMARKS = auto()

    # Status
    OPEN_FILE_DIFF = auto()
    RESTORE_FILE = auto()
    RESTORE_ALL = auto()
    BLAME = auto()

    # Diff
    NEXT_FILE = auto()
    PREV_FILE = auto()
    CYCLE_FORMAT = auto()
    EXPORT_PATCH = auto()

    # Operation
    OP_RESTORE = auto()

    # Bookmark
    JUMP_TO_LOG = auto()
    BOOKMARK_DELETE = auto()
    BOOKMARK_RENAME = auto()
    BOOKMARK_FORGET = auto()
    BOOKMARK_UNTRACK = auto()
    BOOKMARK_MOVE_TO_WC = auto()

    # Resolve
    RESOLVE_OURS = auto()
    RESOLVE_THEIRS = auto()
    RESOLVE_EXTERNAL = auto()


@dataclass(frozen=True)
class Action:
    """One decoded user intent; ``target`` is the row it applies to."""

    kind: ActionKind
    target: str | None = None
    detail: str | None = None


def _registry(*pairs: tuple[tuple[str, ...], ActionKind]) -> KeyComboRegistry[ActionKind]:
    registry: KeyComboRegistry[ActionKind] = KeyComboRegistry()
    for combos, kind in pairs:
        registry.register_binding(KeyComboBinding(combos, lambda kind=kind: kind))
    return registry


_NAVIGATION = (
    (("j", "DOWN"), ActionKind.MOVE_DOWN),
    (("k", "UP"), ActionKind.MOVE_UP),
    (("g", "HOME"), ActionKind.MOVE_TOP),
    (("G", "END"), ActionKind.MOVE_BOTTOM),
    (("CTRL_D", "PAGE_DOWN"), ActionKind.PAGE_DOWN),
    (("CTRL_U", "PAGE_UP"), ActionKind.PAGE_UP),
)

NAVIGATION_KINDS = frozenset(kind for _, kind in _NAVIGATION)

VIEW_REGISTRIES: dict[View, KeyComboRegistry[ActionKind]] = {
    View.LOG: _registry(
        *_NAVIGATION,
        (("ENTER",), ActionKind.OPEN_DIFF),
        (("/",), ActionKind.START_REVSET),
        (("d",), ActionKind.START_DESCRIBE),
        (("D",), ActionKind.DESCRIBE_EXTERNAL),
        (("e",), ActionKind.EDIT),
        (("n",), ActionKind.NEW_CHANGE),
        (("N",), ActionKind.NEW_CHANGE_FROM),
        (("c",), ActionKind.COMMIT),
        (("S",), ActionKind.START_SQUASH),
        (("a",), ActionKind.ABANDON),
        (("X",), ActionKind.SPLIT),
        (("E",), ActionKind.DIFFEDIT),
        (("b",), ActionKind.START_BOOKMARK_CREATE),
        (("x",), ActionKind.START_BOOKMARK_DELETE),
        (("R",), ActionKind.START_REBASE),
        (("A",), ActionKind.ABSORB),
        (("V",), ActionKind.OPEN_RESOLVE),
        (("f",), ActionKind.FETCH),
        (("P",), ActionKind.PUSH),
        (("T",), ActionKind.TRACK),
        (("J",), ActionKind.BOOKMARK_JUMP),
        (("C",), ActionKind.START_COMPARE),
        (("|",), ActionKind.START_PARALLELIZE),
        (("r",), ActionKind.REVERT),
        (("y",), ActionKind.DUPLICATE),
        (("I",), ActionKind.SIMPLIFY_PARENTS),
        (("]",), ActionKind.NEXT),
        (("[",), ActionKind.PREV),
        (("L",), ActionKind.OPEN_EVOLOG),
        (("p",), ActionKind.TOGGLE_PREVIEW),
        (("B",), ActionKind.OPEN_BOOKMARKS),
    ),
    View.STATUS: _registry(
        *_NAVIGATION,
        (("ENTER",), ActionKind.OPEN_FILE_DIFF),
        (("r",), ActionKind.RESTORE_FILE),
        (("R",), ActionKind.RESTORE_ALL),
        (("b",), ActionKind.BLAME),
        (("c",), ActionKind.COMMIT),
        (("E",), ActionKind.DIFFEDIT),
        (("V",), ActionKind.OPEN_RESOLVE),
    ),
    View.DIFF: _registry(
        *_NAVIGATION,
        (("]",), ActionKind.NEXT_FILE),
        (("[",), ActionKind.PREV_FILE),
        (("m",), ActionKind.CYCLE_FORMAT),
        (("w",), ActionKind.EXPORT_PATCH),
    ),
    View.OPERATION: _registry(
        *_NAVIGATION,
        (("ENTER",), ActionKind.OP_RESTORE),
    ),
    View.BOOKMARK: _registry(
        *_NAVIGATION,
        (("ENTER",), ActionKind.JUMP_TO_LOG),
        (("T",), ActionKind.TRACK),
        (("U",), ActionKind.BOOKMARK_UNTRACK),
        (("D",), ActionKind.BOOKMARK_DELETE),
        (("r",), ActionKind.BOOKMARK_RENAME),
        (("F",), ActionKind.BOOKMARK_FORGET),
        (("m",), ActionKind.BOOKMARK_MOVE_TO_WC),
    ),
    View.RESOLVE: _registry(
        *_NAVIGATION,
        (("o",), ActionKind.RESOLVE_OURS),
        (("t",), ActionKind.RESOLVE_THEIRS),
        (("ENTER",), ActionKind.RESOLVE_EXTERNAL),
        (("d",), ActionKind.OPEN_DIFF),
    ),
    View.BLAME: _registry(
        *_NAVIGATION,
        (("ENTER",), ActionKind.OPEN_DIFF),
        (("J",), ActionKind.JUMP_TO_LOG),
    ),
    View.EVOLOG: _registry(
        *_NAVIGATION,
        (("ENTER",), ActionKind.OPEN_DIFF),
    ),
    View.HELP: _registry(*_NAVIGATION),
}

# Log actions that work on the selected change need one selected.
_LOG_TARGETED = frozenset(
    {
        ActionKind.OPEN_DIFF,
        ActionKind.START_DESCRIBE,
        ActionKind.DESCRIBE_EXTERNAL,
        ActionKind.EDIT,
        ActionKind.NEW_CHANGE_FROM,
        ActionKind.START_SQUASH,
        ActionKind.ABANDON,
        ActionKind.SPLIT,
        ActionKind.DIFFEDIT,
        ActionKind.START_BOOKMARK_CREATE,
        ActionKind.START_REBASE,
        ActionKind.OPEN_RESOLVE,
        ActionKind.START_COMPARE,
        ActionKind.START_PARALLELIZE,
        ActionKind.REVERT,
        ActionKind.DUPLICATE,
        ActionKind.SIMPLIFY_PARENTS,
        ActionKind.OPEN_EVOLOG,
    }
)


# Decoding


def decode_key(app: App, key: str) -> Action | None:
    """Map ``key`` to an action for the current view, or ``None``."""
    registry = VIEW_REGISTRIES.get(app.current_view)
    if registry is None:
        return None
    kind = registry.dispatch(key)
    if kind is None:
        return None
    if kind in NAVIGATION_KINDS:
        return Action(kind)

    view = app.current_view
    if view is View.LOG:
        return _decode_log(app, kind)
    if view is View.STATUS:
        return _decode_status(app, kind)
    if view is View.OPERATION:
        if 0 <= app.op_selected < len(app.operations):
            return Action(kind, app.operations[app.op_selected].id)
        return None
    if view is View.BOOKMARK:
        return _decode_bookmark(app, kind)
    if view is View.RESOLVE:
        if kind is ActionKind.OPEN_DIFF:
            return Action(kind, app.resolve_change_id) if app.resolve_change_id else None
        if 0 <= app.resolve_selected < len(app.resolve_files):
            return Action(kind, app.resolve_files[app.resolve_selected].path)
        return None
    if view is View.BLAME:
        annotation = app.annotation
        if annotation is None or not 0 <= app.blame_selected < len(annotation.lines):
            return None
        return Action(kind, annotation.lines[app.blame_selected].change_id)
    if view is View.EVOLOG:
        if 0 <= app.evolog_selected < len(app.evolog):
            return Action(kind, app.evolog[app.evolog_selected].commit_id)
        return None
    return Action(kind)


def _decode_log(app: App, kind: ActionKind) -> Action | None:
    change = app.selected_change()
    if kind in _LOG_TARGETED:
        if change is None:
            return None
        if kind is ActionKind.NEW_CHANGE_FROM:
            name = change.bookmarks[0] if change.bookmarks else short(change.change_id)
            return Action(kind, change.change_id, name)
        if kind is ActionKind.OPEN_RESOLVE:
            return Action(kind, change.change_id, "wc" if change.is_working_copy else None)
        return Action(kind, change.change_id)
    return Action(kind)


def _decode_status(app: App, kind: ActionKind) -> Action | None:
    status = app.status
    if kind in (ActionKind.RESTORE_ALL, ActionKind.COMMIT):
        return Action(kind)
    if kind is ActionKind.OPEN_RESOLVE:
        return Action(kind, "@", "wc")
    if status is None or not 0 <= app.status_selected < len(status.files):
        return None
    return Action(kind, status.files[app.status_selected].path)


def _decode_bookmark(app: App, kind: ActionKind) -> Action | None:
    if not 0 <= app.bookmark_selected < len(app.bookmarks):
        return None
    info = app.bookmarks[app.bookmark_selected]
    bookmark = info.bookmark
    if kind is ActionKind.JUMP_TO_LOG:
        return Action(kind, info.change_id) if info.change_id else None
    if kind is ActionKind.TRACK:
        return Action(kind, bookmark.full_name) if bookmark.is_untracked_remote else None
    if kind is ActionKind.BOOKMARK_UNTRACK:
        if bookmark.remote is None or not bookmark.is_tracked:
            return None
        return Action(kind, bookmark.full_name)
    # Rename, delete, forget and move only make sense for local bookmarks.
    if not bookmark.is_local:
        return None
    return Action(kind, bookmark.name)


# Running


def _selection_length(app: App) -> int:
    view = app.current_view
    if view is View.LOG:
        return len(app.changes)
    if view is View.STATUS:
        return len(app.status.files) if app.status is not None else 0
    if view is View.OPERATION:
        return len(app.operations)
    if view is View.BOOKMARK:
        return len(app.bookmarks)
    if view is View.RESOLVE:
        return len(app.resolve_files)
    if view is View.BLAME:
        return len(app.annotation) if app.annotation is not None else 0
    if view is View.EVOLOG:
        return len(app.evolog)
    if view is View.DIFF:
        return len(app.diff.lines) if app.diff is not None else 0
    return 0


_CURSOR_FIELDS = {
    View.STATUS: "status_selected",
    View.OPERATION: "op_selected",
    View.BOOKMARK: "bookmark_selected",
    View.RESOLVE: "resolve_selected",
    View.BLAME: "blame_selected",
    View.EVOLOG: "evolog_selected",
    View.DIFF: "diff_scroll",
    View.HELP: "help_scroll",
}


def move_cursor(app: App, kind: ActionKind) -> None:
    length = _selection_length(app)
    page = max(HALF_PAGE_MIN, app.viewport_rows // 2)
    delta = {
        ActionKind.MOVE_DOWN: 1,
        ActionKind.MOVE_UP: -1,
        ActionKind.PAGE_DOWN: page,
        ActionKind.PAGE_UP: -page,
        ActionKind.MOVE_TOP: -max(length, 1),
        ActionKind.MOVE_BOTTOM: max(length, 1),
    }[kind]
    app.render_dirty = True

    if app.current_view is View.LOG:
        app.move_log_selection(delta)
        update_preview_if_needed(app)
        return
    field_name = _CURSOR_FIELDS.get(app.current_view)
    if field_name is None:
        return
    position = getattr(app, field_name) + delta
    if app.current_view is View.HELP:
        # Help is clamped against its rendered height.
        setattr(app, field_name, max(0, position))
        return
    setattr(app, field_name, max(0, min(position, length - 1)))


def _jump_file(app: App, step: int) -> None:
    if app.diff is None:
        return
    headers = [
        index
        for index, line in enumerate(app.diff.lines)
        if line.kind is DiffLineKind.FILE_HEADER
    ]
    if step > 0:
        following = [index for index in headers if index > app.diff_scroll]
        target = following[0] if following else None
    else:
        preceding = [index for index in headers if index < app.diff_scroll]
        target = preceding[-1] if preceding else None
    if target is not None:
        app.diff_scroll = target
        app.render_dirty = True


def toggle_preview(app: App) -> None:
    app.preview_enabled = not app.preview_enabled
    if app.preview_enabled:
        update_preview_if_needed(app)
        resolve_pending_preview(app)
    else:
        app.preview_pending_id = None
        app.preview_cache.clear()
    app.render_dirty = True


def run_action(app: App, action: Action) -> None:
    kind = action.kind
    target = action.target or ""
    if kind in NAVIGATION_KINDS:
        move_cursor(app, kind)

    # Log: change-level actions
    elif kind is ActionKind.OPEN_DIFF:
        diff_view.open_diff(app, target)
    elif kind is ActionKind.START_REVSET:
        actions.start_revset_input(app)
    elif kind is ActionKind.START_DESCRIBE:
        actions.start_describe_input(app, target)
    elif kind is ActionKind.DESCRIBE_EXTERNAL:
        actions.execute_describe_external(app, target)
    elif kind is ActionKind.EDIT:
        actions.execute_edit(app, target)
    elif kind is ActionKind.NEW_CHANGE:
        actions.execute_new_change(app)
    elif kind is ActionKind.NEW_CHANGE_FROM:
        change = app.selected_change()
        if change is not None and change.is_working_copy:
            app.notify_info("Use 'n' to create from current change")
        else:
            actions.execute_new_change_from(app, target, action.detail or target)
    elif kind is ActionKind.COMMIT:
        actions.start_commit_input(app)
    elif kind is ActionKind.START_SQUASH:
        actions.start_squash_pick(app, target)
    elif kind is ActionKind.ABANDON:
        actions.confirm_abandon(app, target)
    elif kind is ActionKind.SPLIT:
        actions.execute_split(app, target)
    elif kind is ActionKind.DIFFEDIT:
        if app.current_view is View.STATUS:
            actions.execute_diffedit(app, "@", target)
        else:
            actions.execute_diffedit(app, target)
    elif kind is ActionKind.START_REBASE:
        rebase.start_rebase_mode_select(app, target)
    elif kind is ActionKind.ABSORB:
        actions.execute_absorb(app)
    elif kind is ActionKind.OPEN_RESOLVE:
        resolve.open_resolve_view(app, target, action.detail == "wc")
    elif kind is ActionKind.START_COMPARE:
        actions.start_compare_pick(app, target)
    elif kind is ActionKind.START_PARALLELIZE:
        actions.start_parallelize_pick(app, target)
    elif kind is ActionKind.REVERT:
        actions.confirm_revert(app, target)
    elif kind is ActionKind.DUPLICATE:
        actions.execute_duplicate(app, target)
    elif kind is ActionKind.SIMPLIFY_PARENTS:
        actions.confirm_simplify_parents(app, target)
    elif kind is ActionKind.NEXT:
        actions.execute_next(app)
    elif kind is ActionKind.PREV:
        actions.execute_prev(app)
    elif kind is ActionKind.OPEN_EVOLOG:
        actions.open_evolog(app, target)
    elif kind is ActionKind.TOGGLE_PREVIEW:
        toggle_preview(app)
    elif kind is ActionKind.OPEN_BOOKMARKS:
        actions.open_bookmark_view(app)

    # Remotes and bookmarks
    elif kind is ActionKind.FETCH:
        fetch.start_fetch(app)
    elif kind is ActionKind.PUSH:
        push.start_push(app)
    elif kind is ActionKind.TRACK:
        if action.target:
            bookmarks.execute_track(app, [action.target])
        else:
            bookmarks.start_track(app)
    elif kind is ActionKind.BOOKMARK_JUMP:
        bookmarks.start_bookmark_jump(app)
    elif kind is ActionKind.START_BOOKMARK_CREATE:
        bookmarks.start_bookmark_create(app, target)
    elif kind is ActionKind.START_BOOKMARK_DELETE:
        bookmarks.start_bookmark_delete(app)
    elif kind is ActionKind.BOOKMARK_DELETE:
        bookmarks.execute_bookmark_delete(app, [target])
    elif kind is ActionKind.BOOKMARK_RENAME:
        bookmarks.start_bookmark_rename(app, target)
    elif kind is ActionKind.BOOKMARK_FORGET:
        bookmarks.confirm_bookmark_forget(app, target)
    elif kind is ActionKind.BOOKMARK_UNTRACK:
        bookmarks.execute_untrack(app, target)
    elif kind is ActionKind.BOOKMARK_MOVE_TO_WC:
        bookmarks.start_bookmark_move_to_wc(app, target)
    elif kind is ActionKind.JUMP_TO_LOG:
        actions.jump_to_log(app, target)

    # Status
    elif kind is ActionKind.OPEN_FILE_DIFF:
        diff_view.open_diff(app, "@", target)
    elif kind is ActionKind.RESTORE_FILE:
        actions.confirm_restore_file(app, target)
    elif kind is ActionKind.RESTORE_ALL:
        actions.confirm_restore_all(app)
    elif kind is ActionKind.BLAME:
        actions.open_blame(app, target)

    # Diff
    elif kind is ActionKind.NEXT_FILE:
        _jump_file(app, 1)
    elif kind is ActionKind.PREV_FILE:
        _jump_file(app, -1)
    elif kind is ActionKind.CYCLE_FORMAT:
        diff_view.cycle_diff_format(app)
    elif kind is ActionKind.EXPORT_PATCH:
        diff_view.export_diff_to_file(app)

    # Operation
    elif kind is ActionKind.OP_RESTORE:
        actions.confirm_op_restore(app, target)

    # Resolve
    elif kind is ActionKind.RESOLVE_OURS:
        resolve.execute_resolve_ours(app, target)
    elif kind is ActionKind.RESOLVE_THEIRS:
        resolve.execute_resolve_theirs(app, target)
    elif kind is ActionKind.RESOLVE_EXTERNAL:
        resolve.execute_resolve_external(app, target)


# Prompt, pick and global keys


def _submit_prompt(app: App, prompt: TextPrompt) -> None:
    text = prompt.buffer
    if prompt.kind is PromptKind.DESCRIBE:
        if text.strip():
            actions.execute_describe(app, prompt.target, text)
    elif prompt.kind is PromptKind.COMMIT:
        if text.strip():
            actions.execute_commit(app, text)
        else:
            app.notify_warning("Commit message cannot be empty")
    elif prompt.kind is PromptKind.BOOKMARK_CREATE:
        bookmarks.execute_bookmark_create(app, prompt.target, text.strip())
    elif prompt.kind is PromptKind.BOOKMARK_RENAME:
        bookmarks.execute_bookmark_rename(app, prompt.target, text.strip())
    elif prompt.kind is PromptKind.REVSET:
        actions.apply_revset(app, text)


def handle_prompt_key(app: App, key: str) -> None:
    prompt = app.prompt
    if prompt is None:
        return
    app.render_dirty = True
    if key == "ESC":
        app.prompt = None
    elif key in ENTER_KEYS:
        app.prompt = None
        _submit_prompt(app, prompt)
    elif key == "BACKSPACE":
        prompt.buffer = prompt.buffer[:-1]
    elif key == "CTRL_U":
        prompt.buffer = ""
    elif len(key) == 1 and key.isprintable():
        prompt.buffer += key


def handle_pick_key(app: App, key: str) -> None:
    pick = app.pick
    if pick is None:
        return
    app.render_dirty = True
    if key == "ESC":
        app.pick = None
        app.notify_info("Cancelled")
        return

    if pick.kind is PickKind.REBASE_MODE:
        mode = rebase.MODE_KEYS.get(key)
        if mode is not None:
            rebase.start_rebase_pick(app, pick.source, mode, pick.skip_emptied)
        elif key == "x":
            rebase.toggle_skip_emptied(app)
        return

    kind = VIEW_REGISTRIES[View.LOG].dispatch(key)
    if kind in NAVIGATION_KINDS:
        move_cursor(app, kind)
        return
    if key not in ENTER_KEYS:
        return
    change = app.selected_change()
    if change is None:
        return
    destination = change.change_id
    if pick.kind in (PickKind.REBASE, PickKind.SQUASH) and destination == pick.source:
        return
    app.pick = None
    if pick.kind is PickKind.REBASE:
        rebase.execute_rebase(app, pick.source, destination, pick.rebase_mode, pick.skip_emptied)
    elif pick.kind is PickKind.SQUASH:
        actions.execute_squash_into(app, pick.source, destination)
    elif pick.kind is PickKind.COMPARE:
        diff_view.open_compare_diff(app, pick.source, destination)
    elif pick.kind is PickKind.PARALLELIZE:
        actions.confirm_parallelize(app, pick.source, destination)


def execute_refresh(app: App) -> None:
    """Ctrl+L: re-read whatever the current view shows."""
    view = app.current_view
    if view is View.DIFF:
        if not diff_view.reload_diff(app):
            return
    elif view is View.RESOLVE:
        if app.resolve_change_id is None:
            return
        resolve.refresh_resolve_list(app)
    elif view in (View.LOG, View.STATUS, View.OPERATION, View.BOOKMARK):
        refresh_view(app, view)
    else:
        return
    if app.error_message is None:
        app.notify_info("Refreshed")


def _handle_global_key(app: App, key: str) -> bool:
    view = app.current_view
    if key == "q":
        if view is View.LOG:
            app.should_quit = True
        else:
            go_back(app)
    elif key == "ESC":
        if view is not View.LOG:
            go_back(app)
    elif key == "?":
        actions.open_help(app)
    elif key == "TAB":
        next_view(app)
    elif key == "s" and view is View.LOG:
        actions.open_status_view(app)
    elif key == "u" and view in (View.LOG, View.BOOKMARK):
        app.notification = None
        actions.execute_undo(app)
    elif key == "o" and view is View.LOG:
        actions.open_operation_history(app)
    else:
        return False
    return True


def handle_key(app: App, key: str) -> None:
    """Route one decoded key: dialog, then prompt or pick, then global, then view."""
    app.clear_error()
    app.render_dirty = True

    if app.active_dialog is not None:
        result = app.active_dialog.handle_key(key)
        if result is not None:
            handle_dialog_result(app, result)
        return

    if key == "CTRL_C":
        app.should_quit = True
        return
    if app.prompt is not None:
        handle_prompt_key(app, key)
        return
    if app.pick is not None and app.current_view is View.LOG:
        handle_pick_key(app, key)
        return
    if key == "CTRL_L":
        execute_refresh(app)
        return
    if key == "CTRL_R" and app.current_view is View.LOG:
        app.notification = None
        actions.execute_redo(app)
        return
    if _handle_global_key(app, key):
        return

    action = decode_key(app, key)
    if action is not None:
        run_action(app, action)
