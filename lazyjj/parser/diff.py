"""Parse the three diff layouts jj prints: color-words, git and stat.

``jj show`` output starts with a header block (commit id, author, indented
description) that all three layouts share; ``jj diff`` output has no header.
"""

from __future__ import annotations

from enum import Enum

from ..model import DiffContent, DiffLine, DiffLineKind


class FileOperation(Enum):
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"


_FILE_HEADER_PREFIXES: tuple[tuple[str, FileOperation], ...] = (
    ("Added regular file ", FileOperation.ADDED),
    ("Removed regular file ", FileOperation.DELETED),
    ("Deleted regular file ", FileOperation.DELETED),
    ("Modified regular file ", FileOperation.MODIFIED),
    ("Renamed regular file ", FileOperation.MODIFIED),
    ("Copied regular file ", FileOperation.ADDED),
    ("Added executable file ", FileOperation.ADDED),
    ("Removed executable file ", FileOperation.DELETED),
    ("Modified executable file ", FileOperation.MODIFIED),
    ("Created conflict in ", FileOperation.MODIFIED),
    ("Resolved conflict in ", FileOperation.MODIFIED),
)

_SKIPPED_HEADER_PREFIXES = ("Change ID: ", "Committer: ", "Bookmarks: ", "Tags     : ")
_DESCRIPTION_INDENT = "    "
NO_CHANGES_TEXT = "(no changes)"


def parse_author_line(text: str) -> tuple[str, str]:
    """Split ``Name <email> (timestamp)`` into author and timestamp."""
    open_pos = text.rfind("(")
    close_pos = text.rfind(")")
    if open_pos != -1 and close_pos > open_pos:
        return text[:open_pos].strip(), text[open_pos + 1 : close_pos]
    return text.strip(), ""


def _strip_trailing_blank(lines: list[str]) -> list[str]:
    while lines and not lines[-1]:
        lines.pop()
    return lines


def parse_show_header(output: str) -> tuple[DiffContent, list[str]]:
    """Return header fields and the remaining body lines.

    The header ends at the first non-empty line that is neither a known
    header field nor indented description text.
    """
    content = DiffContent()
    description: list[str] = []
    lines = output.splitlines()
    body_start = len(lines)
    for index, line in enumerate(lines):
        if line.startswith("Commit ID: "):
            content.commit_id = line[len("Commit ID: "):].strip()
            continue
        if line.startswith("Author   : "):
            content.author, content.timestamp = parse_author_line(line[len("Author   : "):])
            continue
        if line.startswith(_SKIPPED_HEADER_PREFIXES):
            continue
        if not line:
            if description:
                description.append("")
            continue
        if line.startswith(_DESCRIPTION_INDENT):
            description.append(line.lstrip())
            continue
        body_start = index
        break
    content.description = "\n".join(_strip_trailing_blank(description))
    return content, lines[body_start:]


def extract_file_info(line: str) -> tuple[str, FileOperation] | None:
    for prefix, operation in _FILE_HEADER_PREFIXES:
        if line.startswith(prefix):
            path = line[len(prefix):]
            if path.endswith(":"):
                path = path[:-1]
            return path, operation
    return None


def parse_line_numbers(field: str) -> tuple[int | None, int | None]:
    """Read the ``old new`` gutter; a lone number is placed by its alignment."""
    parts = field.split()
    if not parts:
        return None, None
    if len(parts) == 1:
        number = _to_int(parts[0])
        leading = len(field) - len(field.lstrip())
        if leading > len(field) // 2:
            return None, number
        return number, None
    return _to_int(parts[0]), _to_int(parts[1])


def _to_int(token: str) -> int | None:
    try:
        return int(token)
    except ValueError:
        return None


def parse_diff_line(line: str, operation: FileOperation) -> DiffLine | None:
    """Classify one color-words content line, or ``None`` if it has no gutter."""
    gutter, sep, text = line.partition(":")
    if not sep:
        return None
    old, new = parse_line_numbers(gutter)
    trimmed = text.lstrip()
    if trimmed.startswith("+ "):
        kind, body = DiffLineKind.ADDED, trimmed[2:]
    elif trimmed.startswith("- "):
        kind, body = DiffLineKind.DELETED, trimmed[2:]
    elif trimmed == "+":
        kind, body = DiffLineKind.ADDED, ""
    elif trimmed == "-":
        kind, body = DiffLineKind.DELETED, ""
    else:
        body = text
        if operation is FileOperation.ADDED:
            kind = DiffLineKind.ADDED
        elif operation is FileOperation.DELETED:
            kind = DiffLineKind.DELETED
        elif old is None and new is not None:
            kind = DiffLineKind.ADDED
        elif old is not None and new is None:
            kind = DiffLineKind.DELETED
        else:
            kind = DiffLineKind.CONTEXT
    return DiffLine(kind, body, (old, new))


def _append_color_words_body(lines: list[str], content: DiffContent) -> None:
    file_count = 0
    operation = FileOperation.MODIFIED
    for line in lines:
        info = extract_file_info(line)
        if info is not None:
            path, operation = info
            if file_count:
                content.lines.append(DiffLine.separator())
            content.lines.append(DiffLine.file_header(path))
            file_count += 1
            continue
        if not file_count:
            continue
        parsed = parse_diff_line(line, operation)
        if parsed is not None:
            content.lines.append(parsed)


def _append_git_body(lines: list[str], content: DiffContent) -> None:
    file_count = 0
    for line in lines:
        if line.startswith("diff --git "):
            rest = line[len("diff --git "):]
            b_pos = rest.find(" b/")
            path = rest[b_pos + 3:] if b_pos != -1 else rest
            if file_count:
                content.lines.append(DiffLine.separator())
            content.lines.append(DiffLine.file_header(path))
            file_count += 1
        elif line.startswith(("index ", "--- ", "+++ ")):
            continue
        elif line.startswith("@@ "):
            content.lines.append(DiffLine.context(line))
        elif line.startswith("+"):
            content.lines.append(DiffLine(DiffLineKind.ADDED, line[1:]))
        elif line.startswith("-"):
            content.lines.append(DiffLine(DiffLineKind.DELETED, line[1:]))
        else:
            content.lines.append(DiffLine.context(line[1:] if line.startswith(" ") else line))


def _append_stat_body(lines: list[str], content: DiffContent) -> None:
    if not "\n".join(lines).strip():
        content.lines.append(DiffLine.context(NO_CHANGES_TEXT))
        return
    for line in lines:
        content.lines.append(DiffLine.context(line))


def parse_show(output: str) -> DiffContent:
    content, body = parse_show_header(output)
    _append_color_words_body(body, content)
    return content


def parse_show_git(output: str) -> DiffContent:
    content, body = parse_show_header(output)
    _append_git_body(body, content)
    return content


def parse_show_stat(output: str) -> DiffContent:
    content, body = parse_show_header(output)
    _append_stat_body(body, content)
    return content


def parse_diff_body(output: str) -> DiffContent:
    content = DiffContent()
    _append_color_words_body(output.splitlines(), content)
    return content


def parse_diff_body_git(output: str) -> DiffContent:
    content = DiffContent()
    _append_git_body(output.splitlines(), content)
    return content


def parse_diff_body_stat(output: str) -> DiffContent:
    content = DiffContent()
    _append_stat_body(output.splitlines(), content)
    return content
