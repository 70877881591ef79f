"""Runtime composition layer for lazyjj.

Builds the executor and initial ``App`` from settings, checks the repository
before touching the terminal, then wires callbacks into the main loop.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import structlog

from ..app.keys import handle_key
from ..app.preview_cache import PreviewCache, resolve_pending_preview, update_preview_if_needed
from ..app.state import App
from ..jj.errors import JjError, NotARepositoryError, ToolNotFoundError
from ..jj.executor import JjExecutor
from ..render import render_frame
from .config import Settings, load_settings, save_diff_format, save_preview_enabled
from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop
from .terminal import TerminalController

logger = structlog.get_logger(__name__)


def build_app(
    executor: JjExecutor,
    settings: Settings,
    revset: str | None = None,
    preview_enabled: bool | None = None,
) -> App:
    """Create the ``App``; explicit arguments override persisted settings."""
    return App(
        jj=executor,
        revset=revset if revset else settings.default_revset,
        preview_enabled=settings.preview_enabled if preview_enabled is None else preview_enabled,
        protected_bookmarks=settings.protected_bookmarks,
        op_log_limit=settings.op_log_limit,
        diff_format=settings.diff_format,
        preview_cache=PreviewCache(settings.preview_cache_size),
    )


def load_initial_log(app: App) -> None:
    """First log read; startup errors propagate instead of landing in the status bar."""
    app.changes = app.jj.log(app.revset)
    if not app.select_working_copy():
        app.select_first_change()
    update_preview_if_needed(app)


def persist_preferences(app: App, settings: Settings, preview_overridden: bool) -> None:
    if not preview_overridden and app.preview_enabled != settings.preview_enabled:
        save_preview_enabled(app.preview_enabled)
    if app.diff_format is not settings.diff_format:
        save_diff_format(app.diff_format)


def run_app(
    repo_path: Path | None = None,
    revset: str | None = None,
    preview_enabled: bool | None = None,
) -> int:
    """Launch the TUI and return the process exit code."""
    settings = load_settings()
    executor = JjExecutor(repo_path)
    app = build_app(executor, settings, revset=revset, preview_enabled=preview_enabled)

    try:
        load_initial_log(app)
    except (NotARepositoryError, ToolNotFoundError) as exc:
        logger.error("startup_failed", error=str(exc))
        print(f"lazyjj: {exc}", file=sys.stderr)
        return 1
    except JjError as exc:
        # A bad revset still opens the UI so it can be corrected.
        logger.warning("initial_log_failed", error=str(exc))
        app.set_error(f"jj error: {exc}")

    if not sys.stdin.isatty():
        print("lazyjj: stdin is not a terminal", file=sys.stderr)
        return 1

    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    app.suspend_terminal = terminal.suspended
    logger.info("session_start", repo=str(repo_path) if repo_path else os.getcwd(), revset=app.revset)

    callbacks = RuntimeLoopCallbacks(
        render=render_frame,
        handle_key=handle_key,
        on_idle=resolve_pending_preview,
    )
    try:
        run_main_loop(app, terminal, stdin_fd, callbacks, RuntimeLoopTiming())
    finally:
        persist_preferences(app, settings, preview_overridden=preview_enabled is not None)
        logger.info("session_end")
    return 0
