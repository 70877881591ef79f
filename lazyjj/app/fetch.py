"""Git fetch: default, all remotes, one remote or one branch."""

from __future__ import annotations

from ..jj.errors import JjError
from ..model import Notification
from ..parser.messages import fetch_is_up_to_date
from .callbacks import GitFetch, GitFetchBranch
from .dialog import Dialog, SelectItem
from .refresh import mark_dirty_and_refresh_current
from .state import App, DirtyFlags

DEFAULT_OPTION = "__default__"
ALL_REMOTES_OPTION = "__all_remotes__"
BRANCH_OPTION = "__branch__"


def start_fetch(app: App) -> None:
    """Fetch right away with one remote; otherwise ask which one."""
    try:
        remotes = app.jj.git_remote_list()
    except JjError:
        remotes = []
    if len(remotes) <= 1:
        execute_fetch(app)
        return
    items = [
        SelectItem("Default fetch (jj config)", DEFAULT_OPTION),
        SelectItem("All remotes (including untracked)", ALL_REMOTES_OPTION),
        *(SelectItem(remote, remote) for remote in remotes),
        SelectItem("Specific branch...", BRANCH_OPTION),
    ]
    app.active_dialog = Dialog.select_single(
        "Git Fetch", "Select remote to fetch from:", items, GitFetch()
    )


def execute_fetch(app: App) -> None:
    try:
        output = app.jj.git_fetch()
    except JjError as exc:
        app.set_error(f"Fetch failed: {exc}")
        return
    mark_dirty_and_refresh_current(app, DirtyFlags.all())
    if fetch_is_up_to_date(output):
        app.notify(Notification.info("Already up to date"))
    else:
        app.notify(Notification.success("Fetched from remote"))


def execute_fetch_with_option(app: App, option: str) -> None:
    try:
        if option == DEFAULT_OPTION:
            output = app.jj.git_fetch()
        elif option == ALL_REMOTES_OPTION:
            output = app.jj.git_fetch_all_remotes()
        else:
            output = app.jj.git_fetch_remote(option)
    except JjError as exc:
        app.set_error(f"Fetch failed: {exc}")
        return
    mark_dirty_and_refresh_current(app, DirtyFlags.all())
    if fetch_is_up_to_date(output):
        app.notify_info("Already up to date")
        return
    source = {DEFAULT_OPTION: "default remotes", ALL_REMOTES_OPTION: "all remotes"}.get(option, option)
    app.notify_success(f"Fetched from {source}")


def start_fetch_branch_select(app: App) -> None:
    try:
        bookmarks = app.jj.bookmark_list_all()
    except JjError:
        app.notify_info("Failed to list bookmarks, fetching all")
        execute_fetch(app)
        return
    local_names = [b.name for b in bookmarks if b.is_local]
    if not local_names:
        app.notify_info("No bookmarks found")
        execute_fetch(app)
        return
    app.active_dialog = Dialog.select_single(
        "Fetch Branch",
        "Select branch to fetch:",
        [SelectItem(name, name) for name in local_names],
        GitFetchBranch(),
    )


def execute_fetch_branch(app: App, branch: str) -> None:
    try:
        output = app.jj.git_fetch_branch(branch)
    except JjError as exc:
        app.set_error(f"Fetch failed: {exc}")
        return
    mark_dirty_and_refresh_current(app, DirtyFlags.all())
    if fetch_is_up_to_date(output):
        app.notify_info(f"Branch '{branch}': already up to date")
    else:
        app.notify_success(f"Fetched branch '{branch}'")
