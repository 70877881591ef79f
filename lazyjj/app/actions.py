"""Change-level actions: describe, edit, new, squash, abandon, undo and friends.

Every action catches ``JjError`` itself, reports through the notification or
error slot, and declares the views it dirtied.
"""

from __future__ import annotations

from collections.abc import Callable

from ..jj.constants import ROOT_CHANGE_ID
from ..jj.errors import JjError
from ..jj.retry import is_ambiguous_move_error, is_no_ancestor_error, is_no_descendant_error
from ..parser import messages
from ..parser.messages import short
from .callbacks import Abandon, OpRestore, Parallelize, RestoreAll, RestoreFile, Revert, SimplifyParents
from .dialog import Dialog
from .preview_cache import update_preview_if_needed
from .refresh import go_to_view, mark_dirty_and_refresh_current
from .state import App, DirtyFlags, PendingPick, PickKind, PromptKind, TextPrompt, View

UNDO_HINT = "Undo with 'u' if needed."


def run_interactive(app: App, run: Callable[[], int]) -> int:
    """Hand the terminal to a jj child process and take it back afterwards."""
    with app.suspend_terminal():
        return run()


def execute_undo(app: App) -> None:
    try:
        app.jj.undo()
    except JjError as exc:
        app.set_error(f"Undo failed: {exc}")
        return
    app.notify_success("Undo complete")
    mark_dirty_and_refresh_current(app, DirtyFlags.all())


def execute_redo(app: App) -> None:
    try:
        target = app.jj.get_redo_target()
    except JjError as exc:
        app.set_error(f"Failed to check redo target: {exc}")
        return
    if target is None:
        app.notify_info("Nothing to redo (use 'o' for operation history after multiple undos)")
        return
    try:
        app.jj.redo(target)
    except JjError as exc:
        app.set_error(f"Redo failed: {exc}")
        return
    app.notify_success("Redo complete")
    mark_dirty_and_refresh_current(app, DirtyFlags.all())


def confirm_op_restore(app: App, operation_id: str) -> None:
    app.active_dialog = Dialog.confirm(
        "Restore Operation",
        f"Restore repository to operation {operation_id[:12]}?",
        OpRestore(operation_id),
        detail="All later operations are undone. Undo with 'u' if needed.",
    )


def execute_op_restore(app: App, operation_id: str) -> None:
    try:
        app.jj.op_restore(operation_id)
    except JjError as exc:
        app.set_error(f"Restore failed: {exc}")
        return
    app.notify_success(f"Restored to {operation_id[:12]} (undo: u)")
    mark_dirty_and_refresh_current(app, DirtyFlags.all())
    go_to_view(app, View.LOG)


# Describe / commit


def start_describe_input(app: App, change_id: str) -> None:
    """Open the one-line describe prompt, or the editor for multi-line text."""
    try:
        description = app.jj.get_description(change_id).rstrip("\n")
    except JjError as exc:
        app.set_error(f"Failed to get description: {exc}")
        return
    if "\n" in description:
        execute_describe_external(app, change_id)
        return
    app.prompt = TextPrompt(PromptKind.DESCRIBE, "Describe", description, change_id)


def execute_describe(app: App, change_id: str, message: str) -> None:
    try:
        app.jj.describe(change_id, message)
    except JjError as exc:
        app.set_error(f"Failed to update description: {exc}")
        return
    app.notify_success("Description updated")
    mark_dirty_and_refresh_current(app, DirtyFlags.log_only())


def _description_or_none(app: App, change_id: str) -> str | None:
    try:
        return app.jj.get_description(change_id).rstrip()
    except JjError:
        return None


def execute_describe_external(app: App, change_id: str) -> None:
    try:
        immutable = app.jj.is_immutable(change_id)
    except JjError:
        immutable = False
    if immutable:
        app.set_error("Cannot describe: commit is immutable")
        return

    # jj describe --edit exits 0 whether or not the text was saved.
    before = _description_or_none(app, change_id)
    try:
        code = run_interactive(app, lambda: app.jj.describe_edit_interactive(change_id))
    except JjError as exc:
        app.set_error(f"Describe failed: {exc}")
        return
    if code != 0:
        app.set_error(f"Describe editor exited with error (code: {code})")
        return
    after = _description_or_none(app, change_id)
    if before is not None and after is not None:
        if before == after:
            app.notify_info("Description unchanged")
        else:
            app.notify_success("Description updated")
    else:
        app.notify_success("Describe editor closed")
    mark_dirty_and_refresh_current(app, DirtyFlags.log_only())


def start_commit_input(app: App) -> None:
    app.prompt = TextPrompt(PromptKind.COMMIT, "Commit message")


def execute_commit(app: App, message: str) -> None:
    try:
        app.jj.commit(message)
    except JjError as exc:
        app.set_error(f"Commit failed: {exc}")
        return
    app.notify_success("Changes committed")
    mark_dirty_and_refresh_current(app, DirtyFlags.log_and_status())


# Working-copy movement


def execute_edit(app: App, change_id: str) -> None:
    try:
        app.jj.edit(change_id)
    except JjError as exc:
        app.set_error(f"Failed to edit: {exc}")
        return
    app.notify_success(f"Now editing: {short(change_id)}")
    mark_dirty_and_refresh_current(app, DirtyFlags.log_and_status())


def execute_new_change(app: App) -> None:
    try:
        app.jj.new_change()
    except JjError as exc:
        app.set_error(f"Failed to create change: {exc}")
        return
    app.notify_success("Created new change")
    mark_dirty_and_refresh_current(app, DirtyFlags.log_and_status())


def execute_new_change_from(app: App, parent_id: str, display_name: str) -> None:
    try:
        app.jj.new_change_from(parent_id)
    except JjError as exc:
        app.set_error(f"Failed to create change: {exc}")
        return
    app.notify_success(f"Created new change from {display_name}")
    mark_dirty_and_refresh_current(app, DirtyFlags.log_and_status())


def next_prev_error_message(error: JjError, direction: str) -> str:
    text = str(error)
    if is_ambiguous_move_error(text):
        relatives = "children" if direction == "next" else "parents"
        return f"Cannot move {direction}: multiple {relatives}. Use 'e' to edit a specific revision."
    if is_no_descendant_error(text):
        return "Already at the newest change"
    if is_no_ancestor_error(text):
        return "Already at the root"
    return f"Move {direction} failed: {text}"


def _execute_move(app: App, direction: str, run: Callable[[], str]) -> None:
    try:
        output = run()
    except JjError as exc:
        app.notify_warning(next_prev_error_message(exc, direction))
        return
    mark_dirty_and_refresh_current(app, DirtyFlags.log_and_status())
    if app.select_working_copy():
        update_preview_if_needed(app)
    app.notify_success(messages.next_prev_message(output, direction))


def execute_next(app: App) -> None:
    _execute_move(app, "next", app.jj.next)


def execute_prev(app: App) -> None:
    _execute_move(app, "prev", app.jj.prev)


# History rewriting


def start_squash_pick(app: App, source: str) -> None:
    app.pick = PendingPick(PickKind.SQUASH, source)
    app.notify_info(
        f"Select destination to squash {short(source)} into (Enter: confirm, Esc: cancel)"
    )


def start_compare_pick(app: App, from_id: str) -> None:
    app.pick = PendingPick(PickKind.COMPARE, from_id)
    app.notify_info(
        f"Compare from {short(from_id)}: select the other revision (Enter: confirm, Esc: cancel)"
    )


def start_parallelize_pick(app: App, from_id: str) -> None:
    app.pick = PendingPick(PickKind.PARALLELIZE, from_id)
    app.notify_info(
        f"Parallelize from {short(from_id)}: select the end of the range"
        " (Enter: confirm, Esc: cancel)"
    )


def execute_squash_into(app: App, source: str, destination: str) -> None:
    if source == ROOT_CHANGE_ID:
        app.notify_info("Cannot squash: root commit has no parent")
        return
    try:
        code = run_interactive(app, lambda: app.jj.squash_into_interactive(source, destination))
    except JjError as exc:
        app.set_error(f"Squash failed: {exc}")
    else:
        if code == 0:
            app.notify_success(f"Squashed {short(source)} into {short(destination)} (undo: u)")
        else:
            app.notify_info("Squash cancelled or failed")
    mark_dirty_and_refresh_current(app, DirtyFlags.log_and_status())


def confirm_abandon(app: App, change_id: str) -> None:
    if change_id == ROOT_CHANGE_ID:
        app.notify_info("Cannot abandon: root commit")
        return
    app.active_dialog = Dialog.confirm(
        "Abandon Change",
        f"Abandon {short(change_id)}?",
        Abandon(change_id),
        detail=UNDO_HINT,
    )


def execute_abandon(app: App, change_id: str) -> None:
    if change_id == ROOT_CHANGE_ID:
        app.notify_info("Cannot abandon: root commit")
        return
    try:
        app.jj.abandon(change_id)
    except JjError as exc:
        app.set_error(f"Abandon failed: {exc}")
        return
    app.notify_success(f"Abandoned {short(change_id)} (undo: u)")
    mark_dirty_and_refresh_current(app, DirtyFlags.log_and_status())


def confirm_revert(app: App, change_id: str) -> None:
    app.active_dialog = Dialog.confirm(
        "Revert Change",
        f"Revert changes from {short(change_id)}?",
        Revert(change_id),
        detail="Creates a new commit that undoes these changes. Undo with 'u' if needed.",
    )


def execute_revert(app: App, change_id: str) -> None:
    try:
        app.jj.revert(change_id)
    except JjError as exc:
        app.set_error(f"Revert failed: {exc}")
        return
    app.notify_success(f"Reverted {short(change_id)} (undo: u)")
    mark_dirty_and_refresh_current(app, DirtyFlags.log_only())


def execute_split(app: App, change_id: str) -> None:
    change = app.selected_change()
    if change is not None and change.change_id == change_id and change.is_empty:
        app.notify_info("Cannot split: no changes in this revision")
        return
    try:
        code = run_interactive(app, lambda: app.jj.split_interactive(change_id))
    except JjError as exc:
        app.set_error(f"Split failed: {exc}")
    else:
        if code == 0:
            app.notify_success(f"Split {short(change_id)} complete (undo: u)")
        else:
            app.notify_info("Split cancelled or failed")
    mark_dirty_and_refresh_current(app, DirtyFlags.log_and_status())


def execute_diffedit(app: App, change_id: str, file_path: str | None = None) -> None:
    try:
        code = run_interactive(app, lambda: app.jj.diffedit_interactive(change_id, file_path))
    except JjError as exc:
        app.set_error(f"Diffedit failed: {exc}")
    else:
        if code == 0:
            app.notify_success(f"Diffedit {short(change_id)} complete (undo: u)")
        else:
            app.notify_info("Diffedit cancelled or failed")
    mark_dirty_and_refresh_current(app, DirtyFlags.log_and_status())


def execute_duplicate(app: App, change_id: str) -> None:
    try:
        output = app.jj.duplicate(change_id)
    except JjError as exc:
        app.set_error(f"Duplicate failed: {exc}")
        return
    new_id = messages.parse_duplicate_output(output)
    mark_dirty_and_refresh_current(app, DirtyFlags.log_only())
    if app.error_message is not None:
        return
    if new_id is None:
        app.notify_success("Duplicated successfully")
    elif app.select_change_by_prefix(new_id):
        update_preview_if_needed(app)
        app.notify_success(f"Duplicated as {short(new_id)}")
    else:
        app.notify_success(f"Duplicated as {short(new_id)} (not in current revset)")


def execute_absorb(app: App) -> None:
    try:
        output = app.jj.absorb()
    except JjError as exc:
        app.set_error(f"Absorb failed: {exc}")
        return
    mark_dirty_and_refresh_current(app, DirtyFlags.log_and_status())
    app.notify(messages.absorb_notification(output))


def confirm_simplify_parents(app: App, change_id: str) -> None:
    app.active_dialog = Dialog.confirm(
        "Simplify Parents",
        f"Simplify parents for {short(change_id)}?",
        SimplifyParents(change_id),
        detail="Removes redundant parent edges. " + UNDO_HINT,
    )


def execute_simplify_parents(app: App, change_id: str) -> None:
    try:
        output = app.jj.simplify_parents(change_id)
    except JjError as exc:
        app.set_error(f"Simplify parents failed: {exc}")
        return
    mark_dirty_and_refresh_current(app, DirtyFlags.log_and_status())
    app.notify(messages.simplify_parents_notification(output, change_id))


def confirm_parallelize(app: App, from_id: str, to_id: str) -> None:
    if from_id == to_id:
        app.notify_info("Cannot parallelize a revision with itself")
        return
    app.active_dialog = Dialog.confirm(
        "Parallelize",
        f"Parallelize {short(from_id)}::{short(to_id)}?",
        Parallelize(from_id, to_id),
        detail="Turns the chain into sibling commits. " + UNDO_HINT,
    )


def execute_parallelize(app: App, from_id: str, to_id: str) -> None:
    try:
        output = app.jj.parallelize(from_id, to_id)
    except JjError as exc:
        app.set_error(f"Parallelize failed: {exc}")
        return
    mark_dirty_and_refresh_current(app, DirtyFlags.log_and_status())
    app.notify(messages.parallelize_notification(output))


# Working-copy restore


def confirm_restore_file(app: App, file_path: str) -> None:
    app.active_dialog = Dialog.confirm(
        "Restore File",
        f"Restore '{file_path}'?\nThis discards your changes to this file.",
        RestoreFile(file_path),
        detail=UNDO_HINT,
    )


def execute_restore_file(app: App, file_path: str) -> None:
    try:
        app.jj.restore_file(file_path)
    except JjError as exc:
        app.set_error(f"Restore failed: {exc}")
        return
    app.notify_success(f"Restored: {file_path}")
    mark_dirty_and_refresh_current(app, DirtyFlags.log_and_status())


def confirm_restore_all(app: App) -> None:
    app.active_dialog = Dialog.confirm(
        "Restore All Files",
        "Restore all files?\nThis discards ALL your changes in the working copy.",
        RestoreAll(),
        detail=UNDO_HINT,
    )


def execute_restore_all(app: App) -> None:
    try:
        app.jj.restore_all()
    except JjError as exc:
        app.set_error(f"Restore failed: {exc}")
        return
    app.notify_success("All files restored")
    mark_dirty_and_refresh_current(app, DirtyFlags.log_and_status())


# Revset


def start_revset_input(app: App) -> None:
    app.prompt = TextPrompt(PromptKind.REVSET, "Revset", app.revset or "")


def apply_revset(app: App, revset: str) -> None:
    app.revset = revset.strip() or None
    mark_dirty_and_refresh_current(app, DirtyFlags.log_only())


# View openers


def open_status_view(app: App) -> None:
    go_to_view(app, View.STATUS)


def open_operation_history(app: App) -> None:
    go_to_view(app, View.OPERATION)


def open_bookmark_view(app: App) -> None:
    go_to_view(app, View.BOOKMARK)


def open_help(app: App) -> None:
    go_to_view(app, View.HELP)


def open_evolog(app: App, change_id: str) -> None:
    try:
        entries = app.jj.evolog(change_id)
    except JjError as exc:
        app.set_error(f"Failed to load evolog: {exc}")
        return
    if not entries:
        app.notify_info("No evolution history for this change")
        return
    app.evolog = entries
    app.evolog_change_id = change_id
    app.evolog_selected = 0
    go_to_view(app, View.EVOLOG)


def open_blame(app: App, file_path: str, revision: str | None = None) -> None:
    try:
        content = app.jj.file_annotate(file_path, revision)
    except JjError as exc:
        app.set_error(f"Failed to load blame: {exc}")
        return
    app.annotation = content
    app.blame_selected = 0
    app.clear_error()
    go_to_view(app, View.BLAME)


def jump_to_log(app: App, change_id: str) -> None:
    """Select ``change_id`` in the log and make the log the only open view."""
    found = app.select_change_by_prefix(change_id)
    go_to_view(app, View.LOG)
    app.previous_view = None
    if found:
        update_preview_if_needed(app)
        app.notify_success(f"Jumped to {short(change_id)} in log")
    else:
        app.notify_warning("Change not in current revset")
