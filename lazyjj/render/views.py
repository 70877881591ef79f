"""Per-view body rows: pure functions from ``App`` state to styled strings.

Each builder returns ``(rows, selected_index)``; the frame composer decides
which window of rows is visible.
"""

from __future__ import annotations

from ..app.preview_cache import current_preview
from ..app.state import App, View
from ..model import (
    Change,
    DiffContent,
    DiffLine,
    DiffLineKind,
    FileState,
)
from .ansi import (
    BLUE,
    BOLD,
    CYAN,
    DIM,
    GRAY,
    GREEN,
    MAGENTA,
    RED,
    YELLOW,
    sanitize_terminal_text,
    styled,
)
from .help import help_lines
from .highlight import highlight_line

ViewRows = tuple[list[str], int | None]

_FILE_STATE_STYLES = {
    FileState.ADDED: GREEN,
    FileState.MODIFIED: YELLOW,
    FileState.DELETED: RED,
    FileState.RENAMED: CYAN,
    FileState.CONFLICTED: MAGENTA,
}


def format_change(change: Change) -> str:
    prefix = sanitize_terminal_text(change.graph_prefix)
    if change.is_graph_only:
        return styled(prefix, GRAY)
    parts = [prefix + styled(change.change_id[:8], BOLD, MAGENTA)]
    if change.bookmarks:
        parts.append(styled(" ".join(change.bookmarks), BLUE))
    if change.has_conflict:
        parts.append(styled("conflict", RED, BOLD))
    if change.is_empty:
        parts.append(styled("(empty)", GREEN))
    description = sanitize_terminal_text(change.display_description())
    if change.description:
        parts.append(description)
    else:
        parts.append(styled(description, DIM))
    parts.append(styled(change.author, YELLOW))
    parts.append(styled(change.timestamp, CYAN))
    return " ".join(parts)


def log_rows(app: App) -> ViewRows:
    if not app.changes:
        return [styled("No changes in this revset", DIM)], None
    return [format_change(change) for change in app.changes], app.log_selected


def _numbers(line: DiffLine) -> str:
    if line.line_numbers is None:
        return ""
    old, new = line.line_numbers
    old_text = f"{old:>4}" if old is not None else "    "
    new_text = f"{new:>4}" if new is not None else "    "
    return styled(f"{old_text} {new_text} ", GRAY)


def format_diff_line(line: DiffLine, path: str | None) -> str:
    content = line.content
    if line.kind is DiffLineKind.FILE_HEADER:
        return styled(sanitize_terminal_text(content), BOLD, YELLOW)
    if line.kind is DiffLineKind.SEPARATOR:
        return ""
    if line.kind is DiffLineKind.ADDED:
        return _numbers(line) + styled("+", GREEN) + highlight_line(content, path)
    if line.kind is DiffLineKind.DELETED:
        return _numbers(line) + styled("-", RED) + highlight_line(content, path)
    if content.startswith("@@ "):
        return styled(sanitize_terminal_text(content), CYAN)
    return _numbers(line) + " " + highlight_line(content, path)


def diff_body(content: DiffContent) -> list[str]:
    rows = [
        styled(f"Commit: {content.commit_id}", YELLOW),
        f"Author: {sanitize_terminal_text(content.author)}  {content.timestamp}",
        "",
    ]
    for text in (content.description or "(no description set)").splitlines():
        rows.append("    " + sanitize_terminal_text(text))
    rows.append("")
    if not content.has_changes():
        rows.append(styled("(no changes)", DIM))
        return rows
    path: str | None = None
    for line in content.lines:
        if line.kind is DiffLineKind.FILE_HEADER:
            path = line.content
        rows.append(format_diff_line(line, path))
    return rows


def diff_rows(app: App) -> ViewRows:
    """Diff lines only; ``diff_scroll`` indexes ``DiffContent.lines`` directly."""
    if app.diff is None:
        return [styled("No diff loaded", DIM)], None
    rows: list[str] = []
    path: str | None = None
    for line in app.diff.lines:
        if line.kind is DiffLineKind.FILE_HEADER:
            path = line.content
        rows.append(format_diff_line(line, path))
    if not rows:
        rows.append(styled("(no changes)", DIM))
    return rows, None


def diff_header(app: App) -> str:
    content = app.diff
    if app.diff_compare is not None:
        from_info, to_info = app.diff_compare
        return (
            f"Compare {styled(from_info.change_id[:8], MAGENTA)} -> "
            f"{styled(to_info.change_id[:8], MAGENTA)}  [{app.diff_format.label}]"
        )
    if content is None or app.diff_change_id is None:
        return "Diff"
    first_line = content.description.splitlines()[0] if content.description else ""
    description = sanitize_terminal_text(first_line)
    return (
        f"{styled(app.diff_change_id[:8], MAGENTA)} {content.author} {content.timestamp}"
        f"  {description}  [{app.diff_format.label}]"
    )


def preview_rows(app: App) -> list[str]:
    entry = current_preview(app)
    if entry is None:
        if app.preview_pending_id is not None:
            return [styled("Loading preview...", DIM)]
        return []
    return diff_body(entry.content)


def status_rows(app: App) -> ViewRows:
    status = app.status
    if status is None:
        return [styled("Loading status...", DIM)], None
    if status.is_clean():
        return [styled("The working copy has no changes.", DIM)], None
    rows = []
    for entry in status.files:
        style = _FILE_STATE_STYLES.get(entry.state, "")
        label = entry.path
        if entry.renamed_from:
            label = f"{entry.renamed_from} => {entry.path}"
        rows.append(f"{styled(entry.indicator, style, BOLD)} {sanitize_terminal_text(label)}")
    return rows, app.status_selected


def operation_rows(app: App) -> ViewRows:
    if not app.operations:
        return [styled("No operations", DIM)], None
    rows = []
    for op in app.operations:
        marker = styled("@", GREEN, BOLD) if op.is_current else " "
        rows.append(
            f"{marker} {styled(op.short_id, BLUE)} {styled(op.user, YELLOW)} "
            f"{styled(op.timestamp, CYAN)} {sanitize_terminal_text(op.description)}"
        )
    return rows, app.op_selected


def bookmark_rows(app: App) -> ViewRows:
    if not app.bookmarks:
        return [styled("No bookmarks", DIM)], None
    rows = []
    for info in app.bookmarks:
        bookmark = info.bookmark
        if bookmark.is_local:
            name = styled(bookmark.name, BLUE, BOLD)
        elif bookmark.is_tracked:
            name = styled(bookmark.full_name, BLUE)
        else:
            name = styled(bookmark.full_name + " (untracked)", GRAY)
        target = styled(info.change_id[:8], MAGENTA) if info.change_id else styled("-", DIM)
        description = sanitize_terminal_text(info.description or "")
        rows.append(f"{name} {target} {description}".rstrip())
    return rows, app.bookmark_selected


def resolve_rows(app: App) -> ViewRows:
    if not app.resolve_files:
        return [styled("No conflicts", DIM)], None
    rows = [
        f"{styled('C', MAGENTA, BOLD)} {sanitize_terminal_text(item.path)}  "
        f"{styled(item.description, DIM)}"
        for item in app.resolve_files
    ]
    return rows, app.resolve_selected


def blame_rows(app: App) -> ViewRows:
    annotation = app.annotation
    if annotation is None or not annotation.lines:
        return [styled("No annotation", DIM)], None
    path = annotation.file_path
    rows = []
    for line in annotation.lines:
        if line.first_in_hunk:
            gutter = (
                f"{styled(line.change_id[:8], MAGENTA)} "
                f"{styled(line.short_author(10).ljust(10), YELLOW)} "
                f"{styled(line.short_timestamp(), CYAN)}"
            )
        else:
            gutter = " " * 8 + " " + " " * 10 + " " + " " * len(line.short_timestamp())
        rows.append(
            f"{gutter} {styled(str(line.line_number).rjust(5), GRAY)} "
            f"{highlight_line(line.content, path)}"
        )
    return rows, app.blame_selected


def evolog_rows(app: App) -> ViewRows:
    if not app.evolog:
        return [styled("No evolution history", DIM)], None
    rows = []
    for entry in app.evolog:
        empty = styled(" (empty)", GREEN) if entry.is_empty else ""
        description = sanitize_terminal_text(entry.description) or styled(
            "(no description set)", DIM
        )
        rows.append(
            f"{styled(entry.commit_id[:8], BLUE)} {styled(entry.author, YELLOW)} "
            f"{styled(entry.timestamp, CYAN)}{empty} {description}"
        )
    return rows, app.evolog_selected


def view_rows(app: App) -> ViewRows:
    view = app.current_view
    if view is View.LOG:
        return log_rows(app)
    if view is View.STATUS:
        return status_rows(app)
    if view is View.OPERATION:
        return operation_rows(app)
    if view is View.BOOKMARK:
        return bookmark_rows(app)
    if view is View.DIFF:
        return diff_rows(app)
    if view is View.RESOLVE:
        return resolve_rows(app)
    if view is View.BLAME:
        return blame_rows(app)
    if view is View.EVOLOG:
        return evolog_rows(app)
    return help_lines(), None
