"""Subprocess front door for every jj invocation.

Captured runs always pass ``--color=never`` and a closed stdin; interactive
runs inherit the terminal and must be bracketed by the caller's TUI suspend.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from enum import Enum
from pathlib import Path

import structlog

from ..model import (
    AnnotationContent,
    Bookmark,
    BookmarkInfo,
    Change,
    ConflictFile,
    DiffContent,
    EvologEntry,
    Operation,
    RebaseMode,
    Status,
)
from ..parser import (
    parse_bookmark_info_list,
    parse_bookmark_list,
    parse_change_info,
    parse_evolog,
    parse_file_annotate,
    parse_log,
    parse_op_log,
    parse_redo_target,
    parse_remote_list,
    parse_resolve_list,
    parse_show,
    parse_show_git,
    parse_show_stat,
    parse_status,
)
from ..parser.log import ChangeInfo
from . import constants as c
from . import templates
from .errors import CommandFailedError, NotARepositoryError, ProcessIOError, ToolNotFoundError
from .retry import is_large_file_warning

logger = structlog.get_logger(__name__)


class PushBulkMode(Enum):
    ALL = "--all"
    TRACKED = "--tracked"
    DELETED = "--deleted"

    @property
    def flag(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return f"{self.name.lower()} bookmarks"


class JjExecutor:
    """Builds jj argument lists, runs them and classifies failures.

    Holds no state besides the optional repository path, so read-only calls
    are safe to issue from anywhere; callers serialize writes.
    """

    def __init__(self, repo_path: Path | None = None) -> None:
        self.repo_path = repo_path

    def _prefix(self) -> list[str]:
        argv = [c.JJ_COMMAND]
        if self.repo_path is not None:
            argv.extend([c.REPO_PATH, str(self.repo_path)])
        return argv

    def command_line(self, args: Sequence[str]) -> list[str]:
        return [*self._prefix(), c.NO_COLOR, *args]

    def run(
        self,
        args: Sequence[str],
        *,
        show_query: bool = False,
        include_stderr: bool = False,
    ) -> str:
        """Run jj with captured output and return stdout.

        ``show_query`` marks content-show calls whose stdout may legitimately
        be empty; together with a large-file snapshot warning on stderr such a
        call still counts as successful. ``include_stderr`` appends stderr to
        the returned text, since jj reports what a mutation did on stderr.
        """
        argv = self.command_line(args)
        try:
            proc = subprocess.run(
                argv,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except FileNotFoundError as exc:
            logger.warning("jj_exec_failed", argv=argv, reason="not_found")
            raise ToolNotFoundError() from exc
        except OSError as exc:
            logger.warning("jj_exec_failed", argv=argv, reason="io_error", error=str(exc))
            raise ProcessIOError(exc) from exc

        logger.debug("jj_exec", argv=argv, exit_code=proc.returncode)
        if proc.returncode == 0:
            return proc.stdout + proc.stderr if include_stderr else proc.stdout

        stderr = proc.stderr
        if is_large_file_warning(stderr) and (proc.stdout or show_query):
            logger.info("jj_large_file_salvaged", argv=argv, exit_code=proc.returncode)
            return proc.stdout
        if c.NOT_A_REPO in stderr:
            logger.warning("jj_exec_failed", argv=argv, reason="not_a_repository")
            raise NotARepositoryError()
        logger.warning("jj_exec_failed", argv=argv, exit_code=proc.returncode, stderr=stderr.strip())
        raise CommandFailedError(stderr, proc.returncode)

    def run_write(self, args: Sequence[str]) -> str:
        """Run a mutating command; returns stdout followed by stderr."""
        return self.run(args, include_stderr=True)

    def run_interactive(self, args: Sequence[str]) -> int:
        """Run jj attached to the terminal and return its exit code.

        Color is left to jj so editors and diff tools look native.
        """
        argv = [*self._prefix(), *args]
        logger.debug("jj_exec_interactive", argv=argv)
        try:
            return subprocess.run(argv, check=False).returncode
        except FileNotFoundError as exc:
            raise ToolNotFoundError() from exc
        except OSError as exc:
            raise ProcessIOError(exc) from exc

    # Read operations

    def version(self) -> str:
        output = self.run([c.VERSION]).strip()
        return output[len(c.VERSION_PREFIX):] if output.startswith(c.VERSION_PREFIX) else output

    def log_raw(self, revset: str | None = None) -> str:
        args = ["log", c.TEMPLATE, templates.LOG]
        if revset:
            args.extend([c.REVISION, revset])
        return self.run(args)

    def log(self, revset: str | None = None) -> list[Change]:
        return parse_log(self.log_raw(revset))

    def status(self) -> Status:
        return parse_status(self.run(["status"]))

    def show_raw(self, change_id: str) -> str:
        return self.run(["show", c.REVISION, change_id], show_query=True)

    def show(self, change_id: str) -> DiffContent:
        return parse_show(self.show_raw(change_id))

    def show_git(self, change_id: str) -> DiffContent:
        return parse_show_git(self.run(["show", "--git", c.REVISION, change_id], show_query=True))

    def show_stat(self, change_id: str) -> DiffContent:
        return parse_show_stat(self.run(["show", "--stat", c.REVISION, change_id], show_query=True))

    def diff_raw(self, change_id: str) -> str:
        return self.run(["diff", c.REVISION, change_id], show_query=True)

    def diff_git_raw(self, change_id: str) -> str:
        return self.run(["diff", "--git", c.REVISION, change_id], show_query=True)

    def diff_range(self, from_id: str, to_id: str) -> str:
        return self.run(["diff", "--from", from_id, "--to", to_id], show_query=True)

    def diff_range_git(self, from_id: str, to_id: str) -> str:
        return self.run(["diff", "--git", "--from", from_id, "--to", to_id], show_query=True)

    def diff_range_stat(self, from_id: str, to_id: str) -> str:
        return self.run(["diff", "--stat", "--from", from_id, "--to", to_id], show_query=True)

    def get_description(self, change_id: str) -> str:
        return self.run(["log", c.NO_GRAPH, c.REVISION, change_id, c.TEMPLATE, "description"])

    def get_change_info(self, revset: str) -> ChangeInfo | None:
        output = self.run(["log", c.NO_GRAPH, c.REVISION, revset, c.LIMIT, "1", c.TEMPLATE, templates.CHANGE_INFO])
        return parse_change_info(output)

    def has_conflict(self, change_id: str) -> bool:
        output = self.run(["log", c.NO_GRAPH, c.REVISION, change_id, c.TEMPLATE, "conflict"])
        return output.strip() == "true"

    def is_immutable(self, change_id: str) -> bool:
        output = self.run(["log", c.NO_GRAPH, c.REVISION, change_id, c.TEMPLATE, "immutable"])
        return output.strip() == "true"

    def op_log(self, limit: int | None = None) -> list[Operation]:
        args = ["op", "log", c.NO_GRAPH, c.TEMPLATE, templates.OP_LOG]
        if limit is not None:
            args.extend([c.LIMIT, str(limit)])
        return parse_op_log(self.run(args))

    def get_redo_target(self) -> str | None:
        """Operation id to restore for a redo, or ``None`` outside an undo chain."""
        output = self.run(["op", "log", c.NO_GRAPH, c.TEMPLATE, templates.REDO_PROBE, c.LIMIT, "2"])
        return parse_redo_target(output)

    def bookmark_list_all(self) -> list[Bookmark]:
        return parse_bookmark_list(
            self.run(["bookmark", "list", c.ALL_REMOTES, c.TEMPLATE, templates.BOOKMARK_LIST])
        )

    def bookmark_list_with_info(self) -> list[BookmarkInfo]:
        return parse_bookmark_info_list(
            self.run(["bookmark", "list", c.ALL_REMOTES, c.TEMPLATE, templates.BOOKMARK_INFO])
        )

    def git_remote_list(self) -> list[str]:
        return parse_remote_list(self.run(["git", "remote", "list"]))

    def resolve_list(self, change_id: str | None = None) -> list[ConflictFile]:
        args = ["resolve", c.RESOLVE_LIST]
        if change_id:
            args.extend([c.REVISION, change_id])
        return parse_resolve_list(self.run(args))

    def file_annotate(self, file_path: str, revision: str | None = None) -> AnnotationContent:
        args = ["file", "annotate"]
        if revision:
            args.extend([c.REVISION, revision])
        args.append(file_path)
        return parse_file_annotate(self.run(args), file_path)

    def evolog(self, change_id: str) -> list[EvologEntry]:
        return parse_evolog(
            self.run(["evolog", c.REVISION, change_id, c.NO_GRAPH, c.TEMPLATE, templates.EVOLOG])
        )

    # Write operations

    def describe(self, change_id: str, message: str) -> str:
        return self.run_write(["describe", c.REVISION, change_id, "-m", message])

    def edit(self, change_id: str) -> str:
        return self.run_write(["edit", change_id])

    def new_change(self) -> str:
        return self.run_write(["new"])

    def new_change_from(self, revision: str) -> str:
        return self.run_write(["new", revision])

    def commit(self, message: str) -> str:
        return self.run_write(["commit", "-m", message])

    def abandon(self, change_id: str) -> str:
        return self.run_write(["abandon", change_id])

    def revert(self, change_id: str) -> str:
        return self.run_write(["revert", c.REVISION, change_id, "-B", c.WORKING_COPY])

    def undo(self) -> str:
        return self.run_write(["undo"])

    def redo(self, operation_id: str) -> str:
        return self.op_restore(operation_id)

    def op_restore(self, operation_id: str) -> str:
        return self.run_write(["op", "restore", operation_id])

    def bookmark_create(self, name: str, change_id: str) -> str:
        return self.run_write(["bookmark", "create", name, c.REVISION, change_id])

    def bookmark_set(self, name: str, change_id: str) -> str:
        return self.run_write(["bookmark", "set", name, c.REVISION, change_id, c.ALLOW_BACKWARDS])

    def bookmark_move(self, name: str, to: str, *, allow_backwards: bool = False) -> str:
        args = ["bookmark", "move", name, "--to", to]
        if allow_backwards:
            args.append(c.ALLOW_BACKWARDS)
        return self.run_write(args)

    def bookmark_delete(self, names: Sequence[str]) -> str:
        return self.run_write(["bookmark", "delete", *names])

    def bookmark_rename(self, old_name: str, new_name: str) -> str:
        return self.run_write(["bookmark", "rename", old_name, new_name])

    def bookmark_forget(self, names: Sequence[str]) -> str:
        return self.run_write(["bookmark", "forget", *names])

    def bookmark_track(self, names: Sequence[str]) -> str:
        return self.run_write(["bookmark", "track", *names])

    def bookmark_untrack(self, names: Sequence[str]) -> str:
        return self.run_write(["bookmark", "untrack", *names])

    def rebase_args(
        self,
        source: str,
        destination: str,
        mode: RebaseMode = RebaseMode.REVISION,
        extra_flags: Sequence[str] = (),
    ) -> list[str]:
        if mode.is_insert:
            args = ["rebase", c.REVISION, source, mode.value, destination]
        else:
            args = ["rebase", mode.value, source, c.DESTINATION, destination]
        args.extend(extra_flags)
        return args

    def rebase(
        self,
        source: str,
        destination: str,
        mode: RebaseMode = RebaseMode.REVISION,
        extra_flags: Sequence[str] = (),
    ) -> str:
        return self.run_write(self.rebase_args(source, destination, mode, extra_flags))

    def absorb(self) -> str:
        return self.run_write(["absorb"])

    def simplify_parents(self, change_id: str) -> str:
        return self.run_write(["simplify-parents", c.REVISION, change_id])

    def parallelize(self, from_id: str, to_id: str) -> str:
        return self.run_write(["parallelize", f"{from_id}::{to_id}"])

    def duplicate(self, change_id: str) -> str:
        return self.run_write(["duplicate", change_id])

    def next(self) -> str:
        return self.run_write(["next", c.EDIT])

    def prev(self) -> str:
        return self.run_write(["prev", c.EDIT])

    def restore_file(self, file_path: str) -> str:
        return self.run_write(["restore", file_path])

    def restore_all(self) -> str:
        return self.run_write(["restore"])

    def resolve_with_tool(self, file_path: str, tool: str, change_id: str | None = None) -> str:
        args = ["resolve", c.RESOLVE_TOOL, tool]
        if change_id:
            args.extend([c.REVISION, change_id])
        args.append(file_path)
        return self.run_write(args)

    def git_fetch(self) -> str:
        return self.run_write(["git", "fetch"])

    def git_fetch_all_remotes(self) -> str:
        return self.run_write(["git", "fetch", c.ALL_REMOTES])

    def git_fetch_remote(self, remote: str) -> str:
        return self.run_write(["git", "fetch", c.REMOTE, remote])

    def git_fetch_branch(self, branch: str) -> str:
        return self.run_write(["git", "fetch", c.BRANCH, branch])

    @staticmethod
    def _push_args(
        selector: Sequence[str],
        remote: str | None,
        extra_flags: Sequence[str],
        dry_run: bool,
    ) -> list[str]:
        args = ["git", "push", *selector]
        if remote:
            args.extend([c.REMOTE, remote])
        args.extend(extra_flags)
        if dry_run:
            args.append(c.DRY_RUN)
        return args

    def git_push_bookmark(
        self,
        name: str,
        remote: str | None = None,
        extra_flags: Sequence[str] = (),
        *,
        dry_run: bool = False,
    ) -> str:
        return self.run_write(self._push_args([c.BOOKMARK, name], remote, extra_flags, dry_run))

    def git_push_change(
        self,
        change_id: str,
        remote: str | None = None,
        extra_flags: Sequence[str] = (),
        *,
        dry_run: bool = False,
    ) -> str:
        return self.run_write(self._push_args([c.CHANGE, change_id], remote, extra_flags, dry_run))

    def git_push_revisions(
        self,
        change_id: str,
        remote: str | None = None,
        extra_flags: Sequence[str] = (),
        *,
        dry_run: bool = False,
    ) -> str:
        return self.run_write(self._push_args([c.REVISIONS, change_id], remote, extra_flags, dry_run))

    def git_push_bulk(
        self,
        mode: PushBulkMode,
        remote: str | None = None,
        *,
        dry_run: bool = False,
    ) -> str:
        return self.run_write(self._push_args([mode.flag], remote, (), dry_run))

    # Interactive operations

    def describe_edit_interactive(self, change_id: str) -> int:
        return self.run_interactive(["describe", c.REVISION, change_id, c.EDIT])

    def split_interactive(self, change_id: str) -> int:
        return self.run_interactive(["split", c.REVISION, change_id])

    def squash_into_interactive(self, source: str, destination: str) -> int:
        return self.run_interactive(["squash", "--from", source, "--into", destination])

    def diffedit_interactive(self, change_id: str, file_path: str | None = None) -> int:
        args = ["diffedit", c.REVISION, change_id]
        if file_path:
            args.append(file_path)
        return self.run_interactive(args)

    def resolve_interactive(self, file_path: str, change_id: str | None = None) -> int:
        args = ["resolve"]
        if change_id:
            args.extend([c.REVISION, change_id])
        args.append(file_path)
        return self.run_interactive(args)
