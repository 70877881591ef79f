"""Staleness-aware LRU cache of ``jj show`` previews for the log view.

Selection changes never spawn jj directly: a miss only records the pending
change id, and the idle tick fetches it if it is still selected.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from ..jj.errors import JjError
from ..model import DiffContent

if TYPE_CHECKING:
    from .state import App

logger = structlog.get_logger(__name__)

DEFAULT_PREVIEW_CACHE_SIZE = 32


@dataclass(frozen=True)
class PreviewCacheEntry:
    commit_id: str
    content: DiffContent
    bookmarks: tuple[str, ...] = ()


class PreviewCache:
    def __init__(self, capacity: int = DEFAULT_PREVIEW_CACHE_SIZE) -> None:
        self.capacity = max(1, capacity)
        self._entries: OrderedDict[str, PreviewCacheEntry] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, change_id: object) -> bool:
        return change_id in self._entries

    def peek(self, change_id: str) -> PreviewCacheEntry | None:
        return self._entries.get(change_id)

    def lookup(self, change_id: str, commit_id: str) -> PreviewCacheEntry | None:
        """Return a fresh entry and mark it recently used.

        An entry recorded against another commit id is stale: it is dropped
        and ``None`` is returned so the caller re-fetches.
        """
        entry = self._entries.get(change_id)
        if entry is None:
            return None
        if entry.commit_id != commit_id:
            del self._entries[change_id]
            return None
        self._entries.move_to_end(change_id)
        return entry

    def insert(self, change_id: str, entry: PreviewCacheEntry) -> None:
        self._entries[change_id] = entry
        self._entries.move_to_end(change_id)
        while len(self._entries) > self.capacity:
            self._entries.popitem(last=False)

    def remove(self, change_id: str) -> None:
        self._entries.pop(change_id, None)

    def clear(self) -> None:
        self._entries.clear()


def update_preview_if_needed(app: App) -> None:
    """Called after every selection change in the log view."""
    if not app.preview_enabled:
        return
    change = app.selected_change()
    if change is None:
        return
    if app.preview_cache.lookup(change.change_id, change.commit_id) is not None:
        app.preview_pending_id = None
        return
    app.preview_pending_id = change.change_id


def fetch_preview(app: App, change_id: str) -> None:
    app.preview_pending_id = None
    change = app.selected_change()
    if change is None or change.change_id != change_id:
        return
    logger.debug("preview_fetch", change_id=change_id, commit_id=change.commit_id)
    try:
        content = app.jj.show(change_id)
    except JjError as exc:
        logger.info("preview_fetch_failed", change_id=change_id, error=str(exc))
        app.preview_cache.remove(change_id)
        return
    app.preview_cache.insert(
        change_id, PreviewCacheEntry(change.commit_id, content, change.bookmarks)
    )
    app.render_dirty = True


def resolve_pending_preview(app: App) -> None:
    """Idle hook: fetch the pending preview only if it is still selected."""
    pending = app.preview_pending_id
    if pending is None:
        return
    change = app.selected_change()
    if change is None or change.change_id != pending:
        app.preview_pending_id = None
        return
    fetch_preview(app, pending)


def current_preview(app: App) -> PreviewCacheEntry | None:
    change = app.selected_change()
    if change is None:
        return None
    entry = app.preview_cache.peek(change.change_id)
    if entry is None or entry.commit_id != change.commit_id:
        return None
    return entry
