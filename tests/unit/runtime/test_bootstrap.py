"""Tests for App construction, the first log read and startup failures."""

from __future__ import annotations

import io
import unittest
from unittest import mock

from lazyjj.jj.errors import CommandFailedError, NotARepositoryError, ToolNotFoundError
from lazyjj.jj.executor import JjExecutor
from lazyjj.model import Change, DiffDisplayFormat
from lazyjj.runtime import app as runtime_app
from lazyjj.runtime.config import Settings


def _executor() -> mock.Mock:
    jj = mock.create_autospec(JjExecutor, instance=True)
    jj.log.return_value = [
        Change.graph_only("│"),
        Change("aaaa", "c1"),
        Change("bbbb", "c2", is_working_copy=True),
    ]
    return jj


class BuildAppTests(unittest.TestCase):
    def test_settings_feed_the_app(self) -> None:
        settings = Settings(
            preview_enabled=False,
            default_revset="mine()",
            protected_bookmarks=("release",),
            op_log_limit=7,
            preview_cache_size=3,
            diff_format=DiffDisplayFormat.STAT,
        )

        app = runtime_app.build_app(_executor(), settings)

        self.assertFalse(app.preview_enabled)
        self.assertEqual(app.revset, "mine()")
        self.assertEqual(app.protected_bookmarks, ("release",))
        self.assertEqual(app.op_log_limit, 7)
        self.assertEqual(app.preview_cache.capacity, 3)
        self.assertIs(app.diff_format, DiffDisplayFormat.STAT)

    def test_arguments_override_settings(self) -> None:
        app = runtime_app.build_app(
            _executor(), Settings(default_revset="mine()"), revset="all()", preview_enabled=False
        )

        self.assertEqual(app.revset, "all()")
        self.assertFalse(app.preview_enabled)

    def test_initial_log_selects_working_copy(self) -> None:
        app = runtime_app.build_app(_executor(), Settings())

        runtime_app.load_initial_log(app)

        self.assertEqual(app.log_selected, 2)
        self.assertEqual(app.preview_pending_id, "bbbb")


class PersistPreferencesTests(unittest.TestCase):
    def test_changed_preferences_are_saved(self) -> None:
        app = runtime_app.build_app(_executor(), Settings())
        app.preview_enabled = False
        app.diff_format = DiffDisplayFormat.GIT

        with mock.patch.object(runtime_app, "save_preview_enabled") as save_preview, mock.patch.object(
            runtime_app, "save_diff_format"
        ) as save_format:
            runtime_app.persist_preferences(app, Settings(), preview_overridden=False)

        save_preview.assert_called_once_with(False)
        save_format.assert_called_once_with(DiffDisplayFormat.GIT)

    def test_cli_override_is_not_persisted(self) -> None:
        app = runtime_app.build_app(_executor(), Settings(), preview_enabled=False)

        with mock.patch.object(runtime_app, "save_preview_enabled") as save_preview, mock.patch.object(
            runtime_app, "save_diff_format"
        ) as save_format:
            runtime_app.persist_preferences(app, Settings(), preview_overridden=True)

        save_preview.assert_not_called()
        save_format.assert_not_called()


class RunAppStartupTests(unittest.TestCase):
    def _run_with_log_error(self, error: Exception) -> tuple[int, str, mock.Mock]:
        jj = _executor()
        jj.log.side_effect = error
        stderr = io.StringIO()
        with mock.patch.object(runtime_app, "JjExecutor", return_value=jj), mock.patch.object(
            runtime_app, "load_settings", return_value=Settings()
        ), mock.patch.object(runtime_app, "run_main_loop") as loop, mock.patch.object(
            runtime_app.sys, "stderr", stderr
        ):
            code = runtime_app.run_app()
        return code, stderr.getvalue(), loop

    def test_not_a_repository_exits_before_terminal_setup(self) -> None:
        code, stderr, loop = self._run_with_log_error(NotARepositoryError())

        self.assertEqual(code, 1)
        self.assertEqual(stderr, "lazyjj: Not a jj repository\n")
        loop.assert_not_called()

    def test_missing_jj_exits_before_terminal_setup(self) -> None:
        code, stderr, loop = self._run_with_log_error(ToolNotFoundError())

        self.assertEqual(code, 1)
        self.assertIn("not installed", stderr)
        loop.assert_not_called()

    def test_bad_revset_still_opens_the_ui(self) -> None:
        jj = _executor()
        jj.log.side_effect = CommandFailedError("Error: bad revset", 1)
        stdin = mock.Mock()
        stdin.isatty.return_value = True
        stdin.fileno.return_value = 0
        stdout = mock.Mock()
        stdout.fileno.return_value = 1
        with mock.patch.object(runtime_app, "JjExecutor", return_value=jj), mock.patch.object(
            runtime_app, "load_settings", return_value=Settings()
        ), mock.patch.object(runtime_app, "TerminalController") as terminal_cls, mock.patch.object(
            runtime_app, "run_main_loop"
        ) as loop, mock.patch.object(runtime_app, "persist_preferences"), mock.patch.object(
            runtime_app.sys, "stdin", stdin
        ), mock.patch.object(runtime_app.sys, "stdout", stdout):
            code = runtime_app.run_app(revset="bad(")

        self.assertEqual(code, 0)
        loop.assert_called_once()
        app = loop.call_args.args[0]
        self.assertTrue(app.error_message.startswith("jj error: "))
        self.assertIs(app.suspend_terminal, terminal_cls.return_value.suspended)


if __name__ == "__main__":
    unittest.main()
