"""CLI argument parsing and hand-off tests for ``lazyjj.cli.main``."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazyjj import cli


class CliMainTests(unittest.TestCase):
    def _main(self, argv: list[str], exit_code: int = 0) -> tuple[mock.Mock, mock.Mock]:
        with mock.patch("lazyjj.cli.run_app", return_value=exit_code) as run_app, mock.patch(
            "lazyjj.cli.configure_logging"
        ) as configure:
            with self.assertRaises(SystemExit) as ctx:
                cli.main(argv)
        self.assertEqual(ctx.exception.code, exit_code)
        return run_app, configure

    def test_defaults_to_current_directory(self) -> None:
        run_app, configure = self._main([])

        run_app.assert_called_once_with(None, revset=None, preview_enabled=None)
        self.assertIsNone(configure.call_args.args[1])

    def test_path_revset_and_no_preview(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            run_app, _configure = self._main([tmp, "--revset", "mine()", "--no-preview"])

        run_app.assert_called_once_with(Path(tmp), revset="mine()", preview_enabled=False)

    def test_runtime_exit_code_is_propagated(self) -> None:
        self._main([], exit_code=1)

    def test_missing_path_exits_with_message(self) -> None:
        with mock.patch("lazyjj.cli.run_app") as run_app:
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["/definitely/not/here"])

        self.assertEqual(ctx.exception.code, "Path not found: /definitely/not/here")
        run_app.assert_not_called()

    def test_log_options_reach_logging_setup(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_file = Path(tmp) / "jj.log"
            _run_app, configure = self._main(["--log-level", "debug", "--log-file", str(log_file)])

        configure.assert_called_once_with("DEBUG", log_file)

    def test_invalid_log_level_is_rejected(self) -> None:
        with mock.patch("lazyjj.cli.run_app"), mock.patch("sys.stderr"):
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["--log-level", "loud"])

        self.assertEqual(ctx.exception.code, 2)


if __name__ == "__main__":
    unittest.main()
