"""Tests for jj invocation and failure classification.

``subprocess.run`` is patched throughout; jj does not need to be installed.
"""

from __future__ import annotations

import shutil
import subprocess
import unittest
from pathlib import Path
from unittest import mock

from lazyjj.jj.errors import (
    CommandFailedError,
    NotARepositoryError,
    ProcessIOError,
    ToolNotFoundError,
)
from lazyjj.jj.executor import JjExecutor, PushBulkMode
from lazyjj.model import RebaseMode


def _completed(stdout: str = "", stderr: str = "", returncode: int = 0) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class ExecutorRunTests(unittest.TestCase):
    def test_captured_run_disables_color_and_closes_stdin(self) -> None:
        with mock.patch("lazyjj.jj.executor.subprocess.run", return_value=_completed("out")) as run:
            output = JjExecutor(Path("/repo")).run(["status"])

        self.assertEqual(output, "out")
        argv = run.call_args.args[0]
        self.assertEqual(argv, ["jj", "-R", "/repo", "--color=never", "status"])
        self.assertIs(run.call_args.kwargs["stdin"], subprocess.DEVNULL)
        self.assertTrue(run.call_args.kwargs["capture_output"])

    def test_missing_binary_is_tool_not_found(self) -> None:
        with mock.patch("lazyjj.jj.executor.subprocess.run", side_effect=FileNotFoundError()):
            with self.assertRaises(ToolNotFoundError) as ctx:
                JjExecutor().run(["status"])
        self.assertEqual(str(ctx.exception), "jj is not installed or not in PATH")

    def test_os_error_is_process_io_error(self) -> None:
        with mock.patch("lazyjj.jj.executor.subprocess.run", side_effect=PermissionError("denied")):
            with self.assertRaises(ProcessIOError):
                JjExecutor().run(["status"])

    def test_not_a_repository(self) -> None:
        stderr = "Error: There is no jj repo in \".\""
        with mock.patch(
            "lazyjj.jj.executor.subprocess.run", return_value=_completed(stderr=stderr, returncode=1)
        ):
            with self.assertRaises(NotARepositoryError) as ctx:
                JjExecutor().run(["log"])
        self.assertEqual(str(ctx.exception), "Not a jj repository")

    def test_command_failure_carries_stderr_and_exit_code(self) -> None:
        with mock.patch(
            "lazyjj.jj.executor.subprocess.run",
            return_value=_completed(stderr="Error: bad revset", returncode=2),
        ):
            with self.assertRaises(CommandFailedError) as ctx:
                JjExecutor().run(["log"])
        self.assertEqual(ctx.exception.exit_code, 2)
        self.assertEqual(ctx.exception.stderr, "Error: bad revset")
        self.assertEqual(str(ctx.exception), "jj command failed (exit code 2): Error: bad revset")

    def test_large_file_warning_with_stdout_is_salvaged(self) -> None:
        with mock.patch(
            "lazyjj.jj.executor.subprocess.run",
            return_value=_completed("data", "Warning: Refused to snapshot large file", 1),
        ):
            self.assertEqual(JjExecutor().run(["log"]), "data")

    def test_large_file_warning_on_empty_show_query_is_salvaged(self) -> None:
        with mock.patch(
            "lazyjj.jj.executor.subprocess.run",
            return_value=_completed("", "Warning: Refused to snapshot large file", 1),
        ):
            self.assertEqual(JjExecutor().run(["show"], show_query=True), "")
            with self.assertRaises(CommandFailedError):
                JjExecutor().run(["log"])

    def test_write_includes_stderr(self) -> None:
        with mock.patch(
            "lazyjj.jj.executor.subprocess.run",
            return_value=_completed("", "Rebased 1 commits\n"),
        ):
            self.assertEqual(JjExecutor().run_write(["rebase"]), "Rebased 1 commits\n")


class ExecutorArgumentTests(unittest.TestCase):
    def setUp(self) -> None:
        self.executor = JjExecutor()

    def test_rebase_argument_shapes(self) -> None:
        self.assertEqual(
            self.executor.rebase_args("a", "b", RebaseMode.SOURCE, ["--skip-emptied"]),
            ["rebase", "-s", "a", "-d", "b", "--skip-emptied"],
        )
        self.assertEqual(
            self.executor.rebase_args("a", "b", RebaseMode.INSERT_AFTER),
            ["rebase", "-r", "a", "-A", "b"],
        )

    def test_push_arguments(self) -> None:
        with mock.patch.object(self.executor, "run_write", return_value="") as run_write:
            self.executor.git_push_bookmark("main", "origin", ["--allow-new"], dry_run=True)
            self.executor.git_push_bulk(PushBulkMode.TRACKED)

        self.assertEqual(
            run_write.call_args_list[0].args[0],
            ["git", "push", "--bookmark", "main", "--remote", "origin", "--allow-new", "--dry-run"],
        )
        self.assertEqual(run_write.call_args_list[1].args[0], ["git", "push", "--tracked"])

    def test_redo_target_reads_two_operations(self) -> None:
        with mock.patch.object(
            self.executor, "run", return_value="op1\tundo operation\nop2\tdescribe\n"
        ) as run:
            self.assertEqual(self.executor.get_redo_target(), "op2")
        self.assertIn("2", run.call_args.args[0])

    def test_interactive_run_keeps_terminal(self) -> None:
        with mock.patch(
            "lazyjj.jj.executor.subprocess.run", return_value=_completed(returncode=0)
        ) as run:
            self.assertEqual(self.executor.split_interactive("abc"), 0)
        argv = run.call_args.args[0]
        self.assertNotIn("--color=never", argv)
        self.assertNotIn("stdin", run.call_args.kwargs)


@unittest.skipIf(shutil.which("jj") is None, "jj is not installed")
class ExecutorLiveTests(unittest.TestCase):
    def test_version_is_reported(self) -> None:
        self.assertTrue(JjExecutor().version())


if __name__ == "__main__":
    unittest.main()
