"""Tests for the color-words, git and stat diff parsers."""

from __future__ import annotations

import unittest

from lazyjj.model import DiffContent, DiffLineKind
from lazyjj.parser import (
    parse_diff_body,
    parse_diff_body_git,
    parse_diff_body_stat,
    parse_show,
    parse_show_git,
    parse_show_stat,
)
from lazyjj.parser.diff import parse_author_line, parse_line_numbers

SHOW_HEADER = """Commit ID: 0123456789abcdef
Change ID: qpvuntsmwlqt
Bookmarks: main
Author   : Alice <alice@example.com> (2024-01-15 10:30:00)
Committer: Alice <alice@example.com> (2024-01-15 10:30:00)

    Fix the parser

    Longer body text.

"""

COLOR_WORDS_BODY = """Modified regular file src/main.rs:
   1    1: fn main() {
   2     : -    old();
        2: +    new();
   3    3: }
Added regular file README.md:
        1: # Title
"""

GIT_BODY = """diff --git a/src/main.rs b/src/main.rs
index 1111111..2222222 100644
--- a/src/main.rs
+++ b/src/main.rs
@@ -1,3 +1,3 @@
 fn main() {
-    old();
+    new();
 }
diff --git a/README.md b/README.md
new file mode 100644
--- /dev/null
+++ b/README.md
@@ -0,0 +1 @@
+# Title
"""


def _to_git_text(content: DiffContent) -> str:
    lines = []
    for line in content.lines:
        if line.kind is DiffLineKind.FILE_HEADER:
            lines.append(f"diff --git a/{line.content} b/{line.content}")
        elif line.kind is DiffLineKind.SEPARATOR:
            continue
        elif line.kind is DiffLineKind.CONTEXT:
            if line.content.startswith("@@ "):
                lines.append(line.content)
            else:
                lines.append(" " + line.content)
        elif line.kind is DiffLineKind.ADDED:
            lines.append("+" + line.content)
        else:
            lines.append("-" + line.content)
    return "\n".join(lines)


class ShowHeaderTests(unittest.TestCase):
    def test_header_fields_and_description(self) -> None:
        content = parse_show(SHOW_HEADER + COLOR_WORDS_BODY)

        self.assertEqual(content.commit_id, "0123456789abcdef")
        self.assertEqual(content.author, "Alice <alice@example.com>")
        self.assertEqual(content.timestamp, "2024-01-15 10:30:00")
        self.assertEqual(content.description, "Fix the parser\n\nLonger body text.")

    def test_author_without_timestamp(self) -> None:
        self.assertEqual(parse_author_line("Alice"), ("Alice", ""))


class ColorWordsTests(unittest.TestCase):
    def test_line_kinds_and_separators(self) -> None:
        content = parse_show(SHOW_HEADER + COLOR_WORDS_BODY)
        kinds = [line.kind for line in content.lines]

        self.assertEqual(
            kinds,
            [
                DiffLineKind.FILE_HEADER,
                DiffLineKind.CONTEXT,
                DiffLineKind.DELETED,
                DiffLineKind.ADDED,
                DiffLineKind.CONTEXT,
                DiffLineKind.SEPARATOR,
                DiffLineKind.FILE_HEADER,
                DiffLineKind.ADDED,
            ],
        )
        self.assertEqual(content.file_paths(), ["src/main.rs", "README.md"])
        self.assertEqual(content.lines[2].content, "   old();")
        self.assertEqual(content.lines[2].line_numbers, (2, None))
        self.assertEqual(content.lines[3].line_numbers, (None, 2))

    def test_lines_before_first_file_header_are_ignored(self) -> None:
        content = parse_diff_body("stray: text\n" + COLOR_WORDS_BODY)

        self.assertIs(content.lines[0].kind, DiffLineKind.FILE_HEADER)

    def test_empty_change_has_no_changes(self) -> None:
        content = parse_show(SHOW_HEADER)

        self.assertFalse(content.has_changes())
        self.assertEqual(content.lines, [])

    def test_lone_line_number_is_placed_by_alignment(self) -> None:
        self.assertEqual(parse_line_numbers("   2     "), (2, None))
        self.assertEqual(parse_line_numbers("        2"), (None, 2))
        self.assertEqual(parse_line_numbers("   1    1"), (1, 1))


class GitDiffTests(unittest.TestCase):
    def test_git_layout_skips_index_and_marker_lines(self) -> None:
        content = parse_show_git(SHOW_HEADER + GIT_BODY)
        kinds = [line.kind for line in content.lines]

        self.assertEqual(kinds.count(DiffLineKind.FILE_HEADER), 2)
        self.assertEqual(kinds.count(DiffLineKind.SEPARATOR), 1)
        self.assertIn("@@ -1,3 +1,3 @@", [line.content for line in content.lines])
        self.assertNotIn("index 1111111..2222222 100644", [line.content for line in content.lines])

    def test_reparsing_reconstructed_text_keeps_line_kinds(self) -> None:
        first = parse_diff_body_git(GIT_BODY)
        second = parse_diff_body_git(_to_git_text(first))

        self.assertEqual(
            [line.kind for line in first.lines],
            [line.kind for line in second.lines],
        )
        self.assertEqual(
            [line.content for line in first.lines],
            [line.content for line in second.lines],
        )


class StatTests(unittest.TestCase):
    def test_stat_lines_are_context(self) -> None:
        body = " src/main.rs | 2 +-\n 1 file changed, 1 insertion(+), 1 deletion(-)\n"
        content = parse_show_stat(SHOW_HEADER + body)

        self.assertEqual(len(content.lines), 2)
        self.assertTrue(all(line.kind is DiffLineKind.CONTEXT for line in content.lines))

    def test_empty_stat_reports_no_changes(self) -> None:
        content = parse_diff_body_stat("\n")

        self.assertEqual([line.content for line in content.lines], ["(no changes)"])


if __name__ == "__main__":
    unittest.main()
