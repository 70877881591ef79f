"""Help view content: keybinding tables per view."""

from __future__ import annotations

from .ansi import BOLD, CYAN, YELLOW, styled

HELP_SECTIONS: tuple[tuple[str, tuple[tuple[str, str], ...]], ...] = (
    (
        "GLOBAL",
        (
            ("q", "Quit (log) / back"),
            ("Esc", "Back to previous view"),
            ("?", "Help"),
            ("Tab", "Switch log / status"),
            ("Ctrl+L", "Refresh current view"),
            ("Ctrl+C", "Quit"),
        ),
    ),
    (
        "NAVIGATION",
        (
            ("j/k", "Move down/up"),
            ("g/G", "Go to top/bottom"),
            ("Ctrl+D/U", "Half page down/up"),
        ),
    ),
    (
        "LOG",
        (
            ("Enter", "Show diff"),
            ("/", "Revset input"),
            ("s", "Status view"),
            ("o", "Operation history"),
            ("B", "Bookmark view"),
            ("L", "Evolution log"),
            ("p", "Toggle preview"),
            ("d / D", "Describe / describe in editor"),
            ("e", "Edit change"),
            ("n / N", "New change / new change from selected"),
            ("c", "Commit working copy"),
            ("S", "Squash into (select destination)"),
            ("a", "Abandon"),
            ("X", "Split"),
            ("E", "Diffedit"),
            ("R", "Rebase (then r/s/b/A/B mode, x skip emptied)"),
            ("A", "Absorb into ancestors"),
            ("r", "Revert"),
            ("y", "Duplicate"),
            ("I", "Simplify parents"),
            ("|", "Parallelize range"),
            ("C", "Compare with another revision"),
            ("] / [", "Next / previous change (jj next/prev --edit)"),
            ("u / Ctrl+R", "Undo / redo"),
            ("V", "Resolve conflicts"),
            ("b / x", "Create / delete bookmark"),
            ("J", "Jump to bookmark"),
            ("T", "Track remote bookmarks"),
            ("f / P", "Fetch / push"),
        ),
    ),
    (
        "STATUS",
        (
            ("Enter", "Diff of file"),
            ("r / R", "Restore file / restore all"),
            ("b", "Blame file"),
            ("c", "Commit"),
            ("E", "Diffedit file"),
            ("V", "Resolve conflicts"),
        ),
    ),
    (
        "DIFF",
        (
            ("] / [", "Next / previous file"),
            ("m", "Cycle format (color-words, stat, git)"),
            ("w", "Export as .patch"),
        ),
    ),
    ("OPERATION", (("Enter", "Restore to operation"),)),
    (
        "BOOKMARK",
        (
            ("Enter", "Jump to change in log"),
            ("m", "Move to working copy"),
            ("r", "Rename"),
            ("D / F", "Delete / forget"),
            ("T / U", "Track / untrack"),
            ("u", "Undo"),
        ),
    ),
    (
        "RESOLVE",
        (
            ("o / t", "Take ours / theirs"),
            ("Enter", "External merge tool (@ only)"),
            ("d", "Show diff"),
        ),
    ),
    ("BLAME", (("Enter", "Diff of line's change"), ("J", "Jump to change in log"))),
    ("EVOLOG", (("Enter", "Diff of this version"),)),
    (
        "DIALOGS",
        (
            ("y / Enter", "Confirm"),
            ("n / Esc", "Cancel"),
            ("Space", "Toggle item (multi-select)"),
        ),
    ),
)

KEY_COLUMN_WIDTH = 12


def help_lines() -> list[str]:
    lines: list[str] = []
    for title, entries in HELP_SECTIONS:
        if lines:
            lines.append("")
        lines.append(styled(title, BOLD, CYAN))
        for keys, description in entries:
            lines.append(f"  {styled(keys.ljust(KEY_COLUMN_WIDTH), YELLOW)}{description}")
    return lines
