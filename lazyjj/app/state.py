"""Application context threaded through every action and the event loop.

There is exactly one ``App`` per process; it owns the dirty flags, the
preview cache and the single active-dialog slot.
"""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from ..jj import constants
from ..model import (
    AnnotationContent,
    BookmarkInfo,
    Change,
    ConflictFile,
    DiffContent,
    DiffDisplayFormat,
    EvologEntry,
    Notification,
    Operation,
    RebaseMode,
    Status,
)
from .preview_cache import PreviewCache

if TYPE_CHECKING:
    from ..jj.executor import JjExecutor
    from ..parser.log import ChangeInfo
    from .dialog import Dialog


class View(Enum):
    LOG = "log"
    STATUS = "status"
    OPERATION = "operation"
    BOOKMARK = "bookmark"
    DIFF = "diff"
    RESOLVE = "resolve"
    BLAME = "blame"
    EVOLOG = "evolog"
    HELP = "help"


@dataclass
class DirtyFlags:
    log: bool = False
    status: bool = False
    op_log: bool = False
    bookmarks: bool = False

    @classmethod
    def log_only(cls) -> DirtyFlags:
        return cls(log=True)

    @classmethod
    def log_and_status(cls) -> DirtyFlags:
        return cls(log=True, status=True)

    @classmethod
    def log_and_bookmarks(cls) -> DirtyFlags:
        return cls(log=True, bookmarks=True)

    @classmethod
    def all(cls) -> DirtyFlags:
        return cls(log=True, status=True, op_log=True, bookmarks=True)

    def is_all(self) -> bool:
        return self.log and self.status and self.op_log and self.bookmarks

    def merge(self, other: DirtyFlags) -> None:
        self.log = self.log or other.log
        self.status = self.status or other.status
        self.op_log = self.op_log or other.op_log
        self.bookmarks = self.bookmarks or other.bookmarks


class PromptKind(Enum):
    DESCRIBE = "describe"
    COMMIT = "commit"
    BOOKMARK_CREATE = "bookmark_create"
    BOOKMARK_RENAME = "bookmark_rename"
    REVSET = "revset"


@dataclass
class TextPrompt:
    """Single-line text entry shown in the status bar."""

    kind: PromptKind
    title: str
    buffer: str = ""
    target: str = ""


class PickKind(Enum):
    REBASE_MODE = "rebase_mode"
    REBASE = "rebase"
    SQUASH = "squash"
    COMPARE = "compare"
    PARALLELIZE = "parallelize"


@dataclass
class PendingPick:
    """A two-step log action waiting for its destination row."""

    kind: PickKind
    source: str
    rebase_mode: RebaseMode = RebaseMode.REVISION
    skip_emptied: bool = False


@dataclass
class App:
    jj: JjExecutor
    revset: str | None = None
    preview_enabled: bool = True
    protected_bookmarks: tuple[str, ...] = constants.PROTECTED_BOOKMARKS
    op_log_limit: int = 50
    diff_format: DiffDisplayFormat = DiffDisplayFormat.COLOR_WORDS

    current_view: View = View.LOG
    previous_view: View | None = None
    # Secondary views start dirty so their first visit loads them.
    dirty: DirtyFlags = field(
        default_factory=lambda: DirtyFlags(status=True, op_log=True, bookmarks=True)
    )

    changes: list[Change] = field(default_factory=list)
    log_selected: int = 0
    status: Status | None = None
    status_selected: int = 0
    operations: list[Operation] = field(default_factory=list)
    op_selected: int = 0
    bookmarks: list[BookmarkInfo] = field(default_factory=list)
    bookmark_selected: int = 0

    diff: DiffContent | None = None
    diff_change_id: str | None = None
    diff_compare: tuple[ChangeInfo, ChangeInfo] | None = None
    diff_scroll: int = 0
    resolve_files: list[ConflictFile] = field(default_factory=list)
    resolve_change_id: str | None = None
    resolve_is_working_copy: bool = True
    resolve_selected: int = 0
    annotation: AnnotationContent | None = None
    blame_selected: int = 0
    evolog: list[EvologEntry] = field(default_factory=list)
    evolog_change_id: str | None = None
    evolog_selected: int = 0
    help_scroll: int = 0
    # Content rows available to the active view, updated by the loop.
    viewport_rows: int = 20

    preview_cache: PreviewCache = field(default_factory=PreviewCache)
    preview_pending_id: str | None = None

    active_dialog: Dialog | None = None
    prompt: TextPrompt | None = None
    pick: PendingPick | None = None
    notification: Notification | None = None
    error_message: str | None = None

    pending_push_bookmarks: list[str] = field(default_factory=list)
    push_target_remote: str | None = None
    pending_forget_bookmark: str | None = None

    # Wraps interactive jj runs; the runtime installs the terminal suspend guard.
    suspend_terminal: Callable[[], AbstractContextManager[object]] = nullcontext
    should_quit: bool = False
    render_dirty: bool = True
    skip_next_lf: bool = False

    # Notifications and errors

    def notify(self, notification: Notification) -> None:
        self.notification = notification
        self.render_dirty = True

    def notify_success(self, message: str) -> None:
        self.notify(Notification.success(message))

    def notify_info(self, message: str) -> None:
        self.notify(Notification.info(message))

    def notify_warning(self, message: str) -> None:
        self.notify(Notification.warning(message))

    def set_error(self, message: str) -> None:
        self.error_message = message
        self.render_dirty = True

    def clear_error(self) -> None:
        self.error_message = None

    # Log selection

    def selected_change(self) -> Change | None:
        if 0 <= self.log_selected < len(self.changes):
            change = self.changes[self.log_selected]
            if not change.is_graph_only:
                return change
        return None

    def move_log_selection(self, delta: int) -> None:
        """Move to the next real change in ``delta``'s direction, skipping connectors."""
        step = 1 if delta > 0 else -1
        index = self.log_selected
        for _ in range(abs(delta)):
            probe = index + step
            while 0 <= probe < len(self.changes) and self.changes[probe].is_graph_only:
                probe += step
            if not 0 <= probe < len(self.changes):
                break
            index = probe
        self.log_selected = index

    def select_first_change(self) -> None:
        for index, change in enumerate(self.changes):
            if not change.is_graph_only:
                self.log_selected = index
                return
        self.log_selected = 0

    def select_change_by_id(self, change_id: str) -> bool:
        for index, change in enumerate(self.changes):
            if not change.is_graph_only and change.change_id == change_id:
                self.log_selected = index
                return True
        return False

    def select_change_by_prefix(self, prefix: str) -> bool:
        """Select the first change whose id and ``prefix`` share a prefix."""
        if not prefix:
            return False
        for index, change in enumerate(self.changes):
            if change.is_graph_only or not change.change_id:
                continue
            if change.change_id.startswith(prefix) or prefix.startswith(change.change_id):
                self.log_selected = index
                return True
        return False

    def select_working_copy(self) -> bool:
        for index, change in enumerate(self.changes):
            if change.is_working_copy:
                self.log_selected = index
                return True
        return False

    def working_copy(self) -> Change | None:
        for change in self.changes:
            if change.is_working_copy:
                return change
        return None

    def is_protected(self, bookmark: str) -> bool:
        return bookmark in self.protected_bookmarks
