"""Rendering engine: compose a full-screen ANSI frame from ``App`` state.

``build_frame`` is pure and returns one string per terminal row;
``render_frame`` writes it. Nothing here calls jj.
"""

from __future__ import annotations

import os
import sys

from ..app.dialog import Confirm, Dialog, Select
from ..app.state import App, PickKind, View
from ..model import NotificationKind
from .ansi import (
    BOLD,
    CYAN,
    DIM,
    GRAY,
    GREEN,
    RED,
    RESET,
    REVERSE,
    YELLOW,
    display_width,
    fit_line,
    sanitize_terminal_text,
    styled,
)
from .views import diff_header, preview_rows, view_rows

PREVIEW_MIN_BODY_ROWS = 16
SELECTED_MARKER = "▸ "
UNSELECTED_MARKER = "  "

VIEW_TITLES = {
    View.LOG: "Log",
    View.STATUS: "Status",
    View.OPERATION: "Operation History",
    View.BOOKMARK: "Bookmarks",
    View.DIFF: "Diff",
    View.RESOLVE: "Resolve Conflicts",
    View.BLAME: "Blame",
    View.EVOLOG: "Evolution Log",
    View.HELP: "Help",
}

VIEW_HINTS = {
    View.LOG: "Enter diff │ d describe │ n new │ R rebase │ P push │ ? help",
    View.STATUS: "Enter diff │ r restore │ c commit │ Tab log │ ? help",
    View.OPERATION: "Enter restore │ q back",
    View.BOOKMARK: "Enter jump │ m move │ r rename │ D delete │ q back",
    View.DIFF: "]/[ file │ m format │ w export │ q back",
    View.RESOLVE: "o ours │ t theirs │ Enter tool │ q back",
    View.BLAME: "Enter diff │ J jump │ q back",
    View.EVOLOG: "Enter diff │ q back",
    View.HELP: "j/k scroll │ q back",
}

_NOTIFICATION_STYLES = {
    NotificationKind.SUCCESS: GREEN,
    NotificationKind.INFO: CYAN,
    NotificationKind.WARNING: YELLOW,
}

_PICK_LABELS = {
    PickKind.REBASE_MODE: "REBASE: choose mode",
    PickKind.REBASE: "REBASE: select destination",
    PickKind.SQUASH: "SQUASH: select destination",
    PickKind.COMPARE: "COMPARE: select revision",
    PickKind.PARALLELIZE: "PARALLELIZE: select range end",
}


def window_start(total: int, selected: int | None, rows: int) -> int:
    """First visible row that keeps ``selected`` roughly centered."""
    if selected is None or total <= rows:
        return 0
    return max(0, min(selected - rows // 2, total - rows))


def _list_window(rows: list[str], selected: int | None, height: int, width: int) -> list[str]:
    start = window_start(len(rows), selected, height)
    out: list[str] = []
    for index in range(start, min(len(rows), start + height)):
        if selected is None:
            out.append(fit_line(rows[index], width))
        elif index == selected:
            out.append(fit_line(styled(SELECTED_MARKER, BOLD, CYAN) + rows[index], width))
        else:
            out.append(fit_line(UNSELECTED_MARKER + rows[index], width))
    return out


def _scroll_window(rows: list[str], start: int, height: int, width: int) -> list[str]:
    start = max(0, min(start, max(0, len(rows) - height)))
    return [fit_line(row, width) for row in rows[start : start + height]]


def title_line(app: App, width: int) -> str:
    title = VIEW_TITLES.get(app.current_view, "")
    parts = [f" lazyjj │ {title}"]
    if app.current_view is View.LOG and app.revset:
        parts.append(f"revset: {sanitize_terminal_text(app.revset)}")
    if app.current_view is View.DIFF:
        parts.append(diff_header(app))
    if app.current_view is View.BLAME and app.annotation is not None:
        parts.append(sanitize_terminal_text(app.annotation.file_path))
    if app.current_view is View.LOG and not app.preview_enabled:
        parts.append("preview off")
    return REVERSE + fit_line(" │ ".join(parts), width).replace(RESET, RESET + REVERSE) + RESET


def status_line(app: App, width: int) -> str:
    """Bottom row: error beats prompt beats pick beats notification beats hints."""
    if app.error_message:
        text = styled(f" Error: {sanitize_terminal_text(app.error_message)}", RED, BOLD)
    elif app.prompt is not None:
        text = f" {app.prompt.title}: {sanitize_terminal_text(app.prompt.buffer)}{REVERSE} {RESET}"
    elif app.pick is not None:
        label = _PICK_LABELS[app.pick.kind]
        if app.pick.skip_emptied:
            label += " [skip emptied]"
        text = styled(f" {label} (Esc: cancel)", YELLOW, BOLD)
    elif app.notification is not None:
        style = _NOTIFICATION_STYLES.get(app.notification.kind, "")
        text = styled(f" {app.notification.message}", style)
    else:
        text = styled(" " + VIEW_HINTS.get(app.current_view, ""), DIM)
    return fit_line(text, width)


def dialog_lines(dialog: Dialog, width: int) -> list[str]:
    """Boxed dialog rows; the caller overlays them on the body."""
    kind = dialog.kind
    inner: list[str] = [styled(kind.title, BOLD), ""]
    inner.extend(sanitize_terminal_text(line) for line in kind.message.splitlines())
    if kind.detail:
        inner.append("")
        inner.extend(styled(line, YELLOW) for line in kind.detail.splitlines())
    inner.append("")
    if isinstance(kind, Select):
        for index, item in enumerate(kind.items):
            cursor = styled("> ", CYAN, BOLD) if index == dialog.cursor else "  "
            if kind.single_select:
                inner.append(f"{cursor}{sanitize_terminal_text(item.label)}")
            else:
                box = "[x]" if item.selected else "[ ]"
                inner.append(f"{cursor}{box} {sanitize_terminal_text(item.label)}")
        inner.append("")
        if kind.single_select:
            inner.append(styled("j/k move │ Enter select │ Esc cancel", GRAY))
        else:
            inner.append(styled("j/k move │ Space toggle │ Enter confirm │ Esc cancel", GRAY))
    elif isinstance(kind, Confirm):
        inner.append(styled("y/Enter confirm │ n/Esc cancel", GRAY))

    content_width = max(display_width(line) for line in inner)
    box_width = max(20, min(width - 4, content_width + 4))
    horizontal = "─" * (box_width - 2)
    rows = [f"┌{horizontal}┐"]
    for line in inner:
        rows.append("│ " + fit_line(line, box_width - 4) + " │")
    rows.append(f"└{horizontal}┘")
    return rows


def _overlay(body: list[str], overlay: list[str], width: int) -> list[str]:
    if not overlay:
        return body
    box_width = display_width(overlay[0])
    left = " " * max(0, (width - box_width) // 2)
    top = max(0, (len(body) - len(overlay)) // 2)
    out = list(body)
    for offset, line in enumerate(overlay):
        row = top + offset
        if row >= len(out):
            break
        out[row] = fit_line(left + line, width)
    return out


def body_lines(app: App, width: int, height: int) -> list[str]:
    rows, selected = view_rows(app)
    view = app.current_view
    if view is View.DIFF:
        body = _scroll_window(rows, app.diff_scroll, height, width)
    elif view is View.HELP:
        body = _scroll_window(rows, app.help_scroll, height, width)
    elif view is View.LOG and app.preview_enabled and height >= PREVIEW_MIN_BODY_ROWS:
        log_height = height * 3 // 5
        body = _list_window(rows, selected, log_height, width)
        body.extend(fit_line("", width) for _ in range(log_height - len(body)))
        body.append(fit_line(styled("─" * width, GRAY), width))
        preview = preview_rows(app)
        body.extend(_scroll_window(preview, 0, height - log_height - 1, width))
    else:
        body = _list_window(rows, selected, height, width)
    body.extend(fit_line("", width) for _ in range(height - len(body)))
    if app.active_dialog is not None:
        body = _overlay(body, dialog_lines(app.active_dialog, width), width)
    return body


def build_frame(app: App, width: int, height: int) -> list[str]:
    width = max(10, width)
    body_height = max(1, height - 2)
    return [title_line(app, width), *body_lines(app, width, body_height), status_line(app, width)]


def render_frame(app: App, width: int, height: int) -> None:
    frame = build_frame(app, width, height)
    out = "\033[H\033[J" + "\r\n".join(frame)
    os.write(sys.stdout.fileno(), out.encode("utf-8", errors="replace"))
