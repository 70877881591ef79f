"""Tests for the log preview cache and its idle-time fetch."""

from __future__ import annotations

import unittest
from unittest import mock

from lazyjj.app.actions import execute_duplicate, execute_next, jump_to_log
from lazyjj.app.bookmarks import execute_bookmark_jump
from lazyjj.app.preview_cache import (
    PreviewCache,
    PreviewCacheEntry,
    current_preview,
    resolve_pending_preview,
    update_preview_if_needed,
)
from lazyjj.app.state import App, View
from lazyjj.jj.errors import CommandFailedError
from lazyjj.jj.executor import JjExecutor
from lazyjj.model import Change, DiffContent, Status


def _entry(commit_id: str) -> PreviewCacheEntry:
    return PreviewCacheEntry(commit_id, DiffContent(commit_id=commit_id))


class PreviewCacheTests(unittest.TestCase):
    def test_lookup_with_other_commit_drops_entry(self) -> None:
        cache = PreviewCache()
        cache.insert("abc", _entry("c1"))

        self.assertIsNone(cache.lookup("abc", "c2"))
        self.assertNotIn("abc", cache)
        self.assertIsNone(cache.lookup("abc", "c1"))

    def test_fresh_lookup_returns_entry(self) -> None:
        cache = PreviewCache()
        cache.insert("abc", _entry("c1"))

        entry = cache.lookup("abc", "c1")

        self.assertIsNotNone(entry)
        assert entry is not None
        self.assertEqual(entry.commit_id, "c1")

    def test_capacity_evicts_least_recently_used(self) -> None:
        cache = PreviewCache(capacity=2)
        cache.insert("a", _entry("1"))
        cache.insert("b", _entry("2"))
        cache.lookup("a", "1")

        cache.insert("c", _entry("3"))

        self.assertIn("a", cache)
        self.assertNotIn("b", cache)
        self.assertIn("c", cache)
        self.assertEqual(len(cache), 2)

    def test_capacity_is_at_least_one(self) -> None:
        cache = PreviewCache(capacity=0)
        cache.insert("a", _entry("1"))

        self.assertEqual(len(cache), 1)


class PreviewFetchTests(unittest.TestCase):
    def setUp(self) -> None:
        self.jj = mock.create_autospec(JjExecutor, instance=True)
        self.jj.show.return_value = DiffContent(description="shown")
        self.app = App(jj=self.jj, preview_enabled=True)
        self.app.changes = [
            Change("aaaa", "c1", description="one"),
            Change("bbbb", "c2", description="two"),
        ]

    def test_selection_change_only_marks_pending(self) -> None:
        update_preview_if_needed(self.app)

        self.assertEqual(self.app.preview_pending_id, "aaaa")
        self.jj.show.assert_not_called()

    def test_idle_fetches_pending_selection(self) -> None:
        update_preview_if_needed(self.app)

        resolve_pending_preview(self.app)

        self.jj.show.assert_called_once_with("aaaa")
        self.assertIsNone(self.app.preview_pending_id)
        preview = current_preview(self.app)
        assert preview is not None
        self.assertEqual(preview.content.description, "shown")

    def test_idle_skips_selection_that_moved_on(self) -> None:
        update_preview_if_needed(self.app)
        self.app.log_selected = 1

        resolve_pending_preview(self.app)

        self.jj.show.assert_not_called()
        self.assertIsNone(self.app.preview_pending_id)

    def test_cached_selection_needs_no_fetch(self) -> None:
        self.app.preview_cache.insert("aaaa", _entry("c1"))

        update_preview_if_needed(self.app)

        self.assertIsNone(self.app.preview_pending_id)

    def test_rewritten_change_is_refetched(self) -> None:
        self.app.preview_cache.insert("aaaa", _entry("old-commit"))

        self.assertIsNone(current_preview(self.app))
        update_preview_if_needed(self.app)

        self.assertEqual(self.app.preview_pending_id, "aaaa")

    def test_failed_fetch_leaves_no_entry(self) -> None:
        self.jj.show.side_effect = CommandFailedError("boom", 1)
        self.app.preview_pending_id = "aaaa"

        resolve_pending_preview(self.app)

        self.assertNotIn("aaaa", self.app.preview_cache)
        self.assertIsNone(self.app.error_message)

    def test_disabled_preview_does_nothing(self) -> None:
        self.app.preview_enabled = False

        update_preview_if_needed(self.app)

        self.assertIsNone(self.app.preview_pending_id)


class SelectionJumpPreviewTests(unittest.TestCase):
    def setUp(self) -> None:
        self.changes = [
            Change("aaaa", "c1", description="one"),
            Change("bbbb", "c2", description="two", is_working_copy=True),
        ]
        self.jj = mock.create_autospec(JjExecutor, instance=True)
        self.jj.show.return_value = DiffContent(description="shown")
        self.jj.log.return_value = list(self.changes)
        self.jj.status.return_value = Status()
        self.app = App(jj=self.jj, preview_enabled=True)
        self.app.changes = list(self.changes)

    def _assert_preview_loads_for(self, change_id: str) -> None:
        self.assertEqual(self.app.preview_pending_id, change_id)
        resolve_pending_preview(self.app)
        self.jj.show.assert_called_once_with(change_id)
        self.assertIsNotNone(current_preview(self.app))

    def test_bookmark_jump_schedules_preview(self) -> None:
        execute_bookmark_jump(self.app, "bbbb")

        self._assert_preview_loads_for("bbbb")

    def test_jump_to_log_schedules_preview(self) -> None:
        self.app.current_view = View.BOOKMARK

        jump_to_log(self.app, "bbbb")

        self.assertIs(self.app.current_view, View.LOG)
        self._assert_preview_loads_for("bbbb")

    def test_duplicate_schedules_preview_for_new_change(self) -> None:
        self.jj.duplicate.return_value = "Duplicated c2 as cccc d00d two\n"
        self.jj.log.return_value = [Change("cccc", "d00d", description="two"), *self.changes]

        execute_duplicate(self.app, "bbbb")

        self.assertEqual(self.app.selected_change().change_id, "cccc")
        self._assert_preview_loads_for("cccc")

    def test_next_schedules_preview_for_working_copy(self) -> None:
        self.jj.next.return_value = ""

        execute_next(self.app)

        self.assertEqual(self.app.selected_change().change_id, "bbbb")
        self._assert_preview_loads_for("bbbb")


if __name__ == "__main__":
    unittest.main()
