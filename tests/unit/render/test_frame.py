"""Frame composition tests: geometry, status-bar priority and dialog overlay."""

from __future__ import annotations

import unittest
from unittest import mock

from lazyjj.app.callbacks import DeleteBookmarks, RestoreAll
from lazyjj.app.dialog import Dialog, SelectItem
from lazyjj.app.preview_cache import PreviewCacheEntry
from lazyjj.app.state import App, PendingPick, PickKind, PromptKind, TextPrompt, View
from lazyjj.jj.executor import JjExecutor
from lazyjj.model import Change, DiffContent, DiffLine, DiffLineKind, Notification
from lazyjj.render import build_frame, status_line
from lazyjj.render.ansi import ANSI_ESCAPE_RE, display_width, fit_line, sanitize_terminal_text


def _plain(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def _make_app(**kwargs) -> App:
    app = App(jj=mock.create_autospec(JjExecutor, instance=True), **kwargs)
    app.changes = [
        Change("aaaaaaaa", "c1", "alice", "2024-01-01", "top", is_working_copy=True, graph_prefix="@  "),
        Change.graph_only("│"),
        Change("bbbbbbbb", "c2", "bob", "2024-01-01", "", bookmarks=("main",), graph_prefix="○  "),
    ]
    return app


class AnsiHelperTests(unittest.TestCase):
    def test_width_ignores_escapes_and_counts_wide_chars(self) -> None:
        self.assertEqual(display_width("\033[31mab\033[0m"), 2)
        self.assertEqual(display_width("日本"), 4)

    def test_fit_line_clips_and_pads(self) -> None:
        self.assertEqual(_plain(fit_line("abcdef", 3)), "abc")
        self.assertEqual(_plain(fit_line("ab", 4)), "ab  ")

    def test_control_bytes_are_escaped(self) -> None:
        self.assertEqual(sanitize_terminal_text("a\x1b[2Jb\x07"), "a\\x1b[2Jb\\x07")
        self.assertEqual(sanitize_terminal_text("tab\tok"), "tab\tok")


class BuildFrameTests(unittest.TestCase):
    def test_frame_fills_terminal(self) -> None:
        app = _make_app(preview_enabled=False)

        frame = build_frame(app, 60, 12)

        self.assertEqual(len(frame), 12)
        self.assertTrue(all(display_width(row) == 60 for row in frame))
        self.assertIn("Log", _plain(frame[0]))
        self.assertIn("preview off", _plain(frame[0]))

    def test_selected_change_is_marked(self) -> None:
        app = _make_app(preview_enabled=False)
        app.log_selected = 2

        rows = [_plain(row) for row in build_frame(app, 80, 10)]

        marked = [row for row in rows if row.startswith("▸ ")]
        self.assertEqual(len(marked), 1)
        self.assertIn("bbbbbbbb", marked[0])
        self.assertIn("(no description set)", marked[0])

    def test_preview_splits_log_when_tall_enough(self) -> None:
        app = _make_app(preview_enabled=True)
        app.preview_cache.insert(
            "aaaaaaaa",
            PreviewCacheEntry(
                "c1",
                DiffContent(
                    commit_id="c1",
                    description="top",
                    lines=[DiffLine.file_header("src/a.txt"), DiffLine(DiffLineKind.ADDED, "hi", (None, 1))],
                ),
            ),
        )

        text = "\n".join(_plain(row) for row in build_frame(app, 80, 24))

        self.assertIn("Commit: c1", text)
        self.assertIn("src/a.txt", text)

    def test_pending_preview_shows_loading(self) -> None:
        app = _make_app(preview_enabled=True)
        app.preview_pending_id = "aaaaaaaa"

        text = "\n".join(_plain(row) for row in build_frame(app, 80, 24))

        self.assertIn("Loading preview...", text)

    def test_confirm_dialog_is_overlaid(self) -> None:
        app = _make_app(preview_enabled=False)
        app.active_dialog = Dialog.confirm("Restore All", "Restore every file?", RestoreAll())

        text = "\n".join(_plain(row) for row in build_frame(app, 80, 20))

        self.assertIn("Restore All", text)
        self.assertIn("y/Enter confirm", text)

    def test_select_dialog_shows_checkboxes(self) -> None:
        app = _make_app(preview_enabled=False)
        dialog = Dialog.select(
            "Delete", "Pick bookmarks", [SelectItem("main", "main"), SelectItem("feat", "feat")], DeleteBookmarks()
        )
        dialog.handle_key(" ")
        app.active_dialog = dialog

        text = "\n".join(_plain(row) for row in build_frame(app, 80, 20))

        self.assertIn("[x] main", text)
        self.assertIn("[ ] feat", text)

    def test_help_view_renders_sections(self) -> None:
        app = _make_app()
        app.current_view = View.HELP

        text = "\n".join(_plain(row) for row in build_frame(app, 80, 40))

        self.assertIn("GLOBAL", text)
        self.assertIn("Operation history", text)


class StatusLineTests(unittest.TestCase):
    def test_error_beats_everything(self) -> None:
        app = _make_app()
        app.notification = Notification.success("done")
        app.prompt = TextPrompt(PromptKind.COMMIT, "Commit message", "wip")
        app.set_error("boom")

        self.assertIn("Error: boom", _plain(status_line(app, 80)))

    def test_prompt_beats_pick_and_notification(self) -> None:
        app = _make_app()
        app.notification = Notification.success("done")
        app.pick = PendingPick(PickKind.SQUASH, "aaaaaaaa")
        app.prompt = TextPrompt(PromptKind.COMMIT, "Commit message", "wip")

        self.assertIn("Commit message: wip", _plain(status_line(app, 80)))

    def test_pick_shows_skip_emptied(self) -> None:
        app = _make_app()
        app.pick = PendingPick(PickKind.REBASE_MODE, "aaaaaaaa", skip_emptied=True)

        self.assertIn("[skip emptied]", _plain(status_line(app, 80)))

    def test_hints_when_idle(self) -> None:
        app = _make_app()

        self.assertIn("? help", _plain(status_line(app, 80)))


if __name__ == "__main__":
    unittest.main()
