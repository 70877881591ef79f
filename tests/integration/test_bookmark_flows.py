"""Bookmark workflows from the log and the bookmark view."""

from __future__ import annotations

import unittest
from unittest import mock

from lazyjj.app.keys import handle_key
from lazyjj.app.state import App, View
from lazyjj.jj.errors import CommandFailedError
from lazyjj.jj.executor import JjExecutor
from lazyjj.model import Bookmark, BookmarkInfo, Change, NotificationKind, Status


def _make_app() -> App:
    jj = mock.create_autospec(JjExecutor, instance=True)
    changes = [
        Change("aaaaaaaa", "c1", description="top", is_working_copy=True),
        Change("bbbbbbbb", "c2", description="base", bookmarks=("main", "feat")),
    ]
    jj.log.return_value = changes
    jj.status.return_value = Status()
    jj.bookmark_list_with_info.return_value = []
    app = App(jj=jj, preview_enabled=False)
    app.changes = list(changes)
    return app


def _type(app: App, text: str) -> None:
    for char in text:
        handle_key(app, char)


class CreateBookmarkTests(unittest.TestCase):
    def test_create_on_selected_change(self) -> None:
        app = _make_app()

        handle_key(app, "b")
        _type(app, "topic")
        handle_key(app, "ENTER")

        app.jj.bookmark_create.assert_called_once_with("topic", "aaaaaaaa")
        self.assertEqual(app.notification.message, "Created bookmark: topic")

    def test_existing_name_offers_move_with_from_and_to(self) -> None:
        app = _make_app()
        app.jj.bookmark_create.side_effect = CommandFailedError(
            "Error: Bookmark already exists: main", 1
        )

        handle_key(app, "b")
        _type(app, "main")
        handle_key(app, "ENTER")

        dialog = app.active_dialog
        self.assertIsNotNone(dialog)
        self.assertIn("From: bbbbbbbb", dialog.kind.detail)
        self.assertIn("To: aaaaaaaa", dialog.kind.detail)
        handle_key(app, "y")

        app.jj.bookmark_set.assert_called_once_with("main", "aaaaaaaa")
        self.assertEqual(app.notification.message, "Moved bookmark: main")

    def test_blank_name_warns(self) -> None:
        app = _make_app()

        handle_key(app, "b")
        _type(app, "  ")
        handle_key(app, "ENTER")

        app.jj.bookmark_create.assert_not_called()
        self.assertIs(app.notification.kind, NotificationKind.WARNING)


class DeleteBookmarkTests(unittest.TestCase):
    def test_delete_selected_bookmarks(self) -> None:
        app = _make_app()
        app.log_selected = 1

        handle_key(app, "x")
        handle_key(app, "j")
        handle_key(app, " ")
        handle_key(app, "ENTER")

        app.jj.bookmark_delete.assert_called_once_with(["feat"])
        self.assertEqual(app.notification.message, "Deleted bookmarks: feat")

    def test_change_without_bookmarks(self) -> None:
        app = _make_app()

        handle_key(app, "x")

        self.assertIsNone(app.active_dialog)
        self.assertEqual(app.notification.message, "No bookmarks to delete")


class BookmarkViewTests(unittest.TestCase):
    def _open_view(self, *infos: BookmarkInfo) -> App:
        app = _make_app()
        app.jj.bookmark_list_with_info.return_value = list(infos)
        handle_key(app, "B")
        self.assertIs(app.current_view, View.BOOKMARK)
        return app

    def test_forget_cancel_clears_pending_name(self) -> None:
        app = self._open_view(BookmarkInfo(Bookmark("main"), change_id="bbbbbbbb", description="base"))

        handle_key(app, "F")
        self.assertEqual(app.pending_forget_bookmark, "main")
        handle_key(app, "n")

        self.assertIsNone(app.pending_forget_bookmark)
        app.jj.bookmark_forget.assert_not_called()

    def test_forget_confirm(self) -> None:
        app = self._open_view(BookmarkInfo(Bookmark("main"), change_id="bbbbbbbb", description="base"))

        handle_key(app, "F")
        handle_key(app, "y")

        app.jj.bookmark_forget.assert_called_once_with(["main"])
        self.assertIsNone(app.pending_forget_bookmark)

    def test_track_untracked_remote(self) -> None:
        remote = Bookmark("feat", remote="origin", is_tracked=False)
        app = self._open_view(BookmarkInfo(remote, None, None))

        handle_key(app, "T")

        app.jj.bookmark_track.assert_called_once_with(["feat@origin"])
        self.assertEqual(app.notification.message, "Started tracking: feat")

    def test_move_to_working_copy_backwards_needs_confirm(self) -> None:
        app = self._open_view(BookmarkInfo(Bookmark("main"), change_id="bbbbbbbb", description="base"))
        app.jj.bookmark_move.side_effect = [
            CommandFailedError("Error: Refusing to move bookmark backwards or sideways", 1),
            "",
        ]

        handle_key(app, "m")
        handle_key(app, "y")
        self.assertIn("--allow-backwards", app.active_dialog.kind.message)
        handle_key(app, "y")

        app.jj.bookmark_move.assert_called_with("main", "@", allow_backwards=True)
        self.assertEqual(app.notification.message, "Moved bookmark 'main' to @ (backwards)")

    def test_jump_to_log(self) -> None:
        app = self._open_view(BookmarkInfo(Bookmark("main"), change_id="bbbbbbbb", description="base"))

        handle_key(app, "ENTER")

        self.assertIs(app.current_view, View.LOG)
        self.assertEqual(app.selected_change().change_id, "bbbbbbbb")
        self.assertIsNone(app.previous_view)


if __name__ == "__main__":
    unittest.main()
