"""Syntax coloring of diff content lines with Pygments.

Lexers are chosen from the file header path and cached per path; the
diff sign and line numbers are styled separately in ``views``.
"""

from __future__ import annotations

from functools import lru_cache

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.util import ClassNotFound

from .ansi import sanitize_terminal_text

_FORMATTER = TerminalFormatter()


@lru_cache(maxsize=256)
def lexer_for_path(path: str) -> Lexer:
    try:
        return get_lexer_for_filename(path, stripnl=False, ensurenl=False)
    except ClassNotFound:
        return TextLexer(stripnl=False, ensurenl=False)


def highlight_line(text: str, path: str | None) -> str:
    """Color one source line; plain text when the path has no lexer."""
    clean = sanitize_terminal_text(text)
    if not path or not clean.strip():
        return clean
    lexer = lexer_for_path(path)
    if isinstance(lexer, TextLexer):
        return clean
    return highlight(clean, lexer, _FORMATTER).rstrip("\n")
