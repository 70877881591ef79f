"""Tests for interpreting jj's post-mutation messages."""

from __future__ import annotations

import unittest

from lazyjj.model import NotificationKind
from lazyjj.parser import messages


class DuplicateOutputTests(unittest.TestCase):
    def test_extracts_new_change_id(self) -> None:
        output = "Duplicated abc1234567890 as xyzwqrst def5678901 test description"

        self.assertEqual(messages.parse_duplicate_output(output), "xyzwqrst")

    def test_finds_line_among_others(self) -> None:
        output = "Working copy now at: foo\nDuplicated 1234 as newid 5678 desc\n"

        self.assertEqual(messages.parse_duplicate_output(output), "newid")

    def test_unrecognized_output_returns_none(self) -> None:
        self.assertIsNone(messages.parse_duplicate_output(""))
        self.assertIsNone(messages.parse_duplicate_output("Duplicated something odd"))


class PushChangeBookmarkTests(unittest.TestCase):
    def test_reads_created_bookmark(self) -> None:
        output = "Creating bookmark push-qpvuntsm for revision qpvuntsm\nChanges to push:"

        self.assertEqual(
            messages.parse_push_change_bookmark(output, "qpvuntsmwlqt"), "push-qpvuntsm"
        )

    def test_falls_back_to_push_prefix(self) -> None:
        self.assertEqual(
            messages.parse_push_change_bookmark("", "abcdefghijkl"), "push-abcdefgh"
        )


class NextPrevTests(unittest.TestCase):
    def test_success_message_uses_first_line(self) -> None:
        self.assertEqual(
            messages.next_prev_message("Working copy now at: abc\nParent: def", "next"),
            "Moved next: Working copy now at: abc",
        )
        self.assertEqual(messages.next_prev_message("", "prev"), "Moved prev successfully")


class NothingDetectionTests(unittest.TestCase):
    def test_absorb(self) -> None:
        self.assertIs(messages.absorb_notification("").kind, NotificationKind.INFO)
        self.assertIs(
            messages.absorb_notification("Absorbed changes into 2 revisions").kind,
            NotificationKind.SUCCESS,
        )

    def test_simplify_parents(self) -> None:
        self.assertEqual(
            messages.simplify_parents_notification("Nothing changed.", "abc").message,
            "No redundant parents found",
        )

    def test_parallelize_silent_success(self) -> None:
        self.assertIs(messages.parallelize_notification("").kind, NotificationKind.SUCCESS)
        self.assertIs(
            messages.parallelize_notification("Nothing changed.").kind, NotificationKind.INFO
        )


if __name__ == "__main__":
    unittest.main()
