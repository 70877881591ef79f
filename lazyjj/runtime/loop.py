"""Main interactive event loop for the terminal UI.

Reads one key per iteration, renders when something changed, and runs the
idle hook on read timeouts. Feature logic lives in ``app.keys``.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from dataclasses import dataclass

from ..app.state import App
from ..input import read_key
from .terminal import TerminalController

# Title bar and status bar.
CHROME_ROWS = 2


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_timeout_ms: int = 120


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``."""

    render: Callable[[App, int, int], None]
    handle_key: Callable[[App, str], None]
    on_idle: Callable[[App], None]


def normalize_enter(app: App, key: str) -> str | None:
    """Fold CR, LF and CRLF into one ``ENTER``; ``None`` means drop the key."""
    if app.skip_next_lf and key == "ENTER_LF":
        app.skip_next_lf = False
        return None
    if key == "ENTER_CR":
        app.skip_next_lf = True
        return "ENTER"
    app.skip_next_lf = False
    if key == "ENTER_LF":
        return "ENTER"
    return key


def run_main_loop(
    app: App,
    terminal: TerminalController,
    stdin_fd: int,
    callbacks: RuntimeLoopCallbacks,
    timing: RuntimeLoopTiming = RuntimeLoopTiming(),
) -> None:
    """Run the TUI until ``app.should_quit`` is set."""
    ops = callbacks
    last_size: tuple[int, int] | None = None
    with terminal.raw_mode():
        while not app.should_quit:
            term = shutil.get_terminal_size((80, 24))
            if (term.columns, term.lines) != last_size:
                last_size = (term.columns, term.lines)
                app.viewport_rows = max(1, term.lines - CHROME_ROWS)
                app.render_dirty = True
            if app.notification is not None and app.notification.is_expired():
                app.notification = None
                app.render_dirty = True

            if app.render_dirty:
                ops.render(app, term.columns, term.lines)
                app.render_dirty = False

            try:
                key = read_key(stdin_fd, timeout_ms=timing.key_timeout_ms)
            except KeyboardInterrupt:
                # Ignore SIGINT-style interrupts so terminal copy shortcuts do not exit the app.
                continue
            if key == "":
                ops.on_idle(app)
                continue
            normalized = normalize_enter(app, key)
            if normalized is None:
                continue
            ops.handle_key(app, normalized)
