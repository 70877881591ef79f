"""Diff content coloring: lexer choice, plain fallbacks and control-byte escaping."""

from __future__ import annotations

import unittest

from lazyjj.render.ansi import ANSI_ESCAPE_RE
from lazyjj.render.highlight import highlight_line, lexer_for_path


class HighlightLineTests(unittest.TestCase):
    def test_known_extension_is_colored_without_changing_text(self) -> None:
        rendered = highlight_line("def main():  return 1", "src/app.py")

        self.assertIn("\x1b[", rendered)
        self.assertEqual(ANSI_ESCAPE_RE.sub("", rendered), "def main():  return 1")

    def test_unknown_extension_stays_plain(self) -> None:
        text = "Permission  is  hereby granted"

        self.assertEqual(highlight_line(text, "LICENSE.unknownext"), text)

    def test_missing_path_stays_plain(self) -> None:
        self.assertEqual(highlight_line("x = 1", None), "x = 1")

    def test_control_bytes_are_escaped_before_lexing(self) -> None:
        rendered = highlight_line("x = '\x1b[2J'", "a.py")

        self.assertNotIn("\x1b[2J", ANSI_ESCAPE_RE.sub("", rendered))
        self.assertIn("\\x1b", ANSI_ESCAPE_RE.sub("", rendered))

    def test_lexer_lookup_is_cached_per_path(self) -> None:
        self.assertIs(lexer_for_path("a/b.rs"), lexer_for_path("a/b.rs"))


if __name__ == "__main__":
    unittest.main()
