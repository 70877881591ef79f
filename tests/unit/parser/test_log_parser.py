"""Tests for templated ``jj log`` parsing.

Covers field order, graph-prefix extraction and connector rows.
"""

from __future__ import annotations

import unittest

from lazyjj.jj.errors import ParseError
from lazyjj.parser import parse_change_info, parse_log, split_graph_prefix
from lazyjj.parser.log import parse_log_record


def _record(change_id: str, *fields: str) -> str:
    return "\t".join((change_id, *fields))


class LogParserTests(unittest.TestCase):
    def test_fields_map_in_template_order(self) -> None:
        line = _record(
            "@  qpvuntsm",
            "abc12345",
            "alice@example.com",
            "2024-01-15 10:30:00",
            "fix the parser",
            "true",
            "false",
            "main,feature",
            "false",
        )

        [change] = parse_log(line)

        self.assertEqual(change.change_id, "qpvuntsm")
        self.assertEqual(change.graph_prefix, "@  ")
        self.assertEqual(change.commit_id, "abc12345")
        self.assertEqual(change.author, "alice@example.com")
        self.assertEqual(change.timestamp, "2024-01-15 10:30:00")
        self.assertEqual(change.description, "fix the parser")
        self.assertTrue(change.is_working_copy)
        self.assertFalse(change.is_empty)
        self.assertEqual(change.bookmarks, ("main", "feature"))
        self.assertFalse(change.has_conflict)
        self.assertFalse(change.is_graph_only)

    def test_missing_optional_fields_default_to_empty(self) -> None:
        line = _record("○  zzzzzzzz", "00000000", "", "1970-01-01 00:00:00", "", "false", "true")

        [change] = parse_log(line)

        self.assertEqual(change.bookmarks, ())
        self.assertFalse(change.has_conflict)
        self.assertTrue(change.is_empty)
        self.assertTrue(change.is_root)
        self.assertEqual(change.display_description(), "(no description set)")

    def test_connector_rows_are_kept_as_graph_only(self) -> None:
        output = "\n".join(
            [
                _record("@  abcdefgh", "c1", "a", "t", "d", "true", "false", "", "false"),
                "│ ├─╮",
                _record("│ ○  ijklmnop", "c2", "b", "t", "e", "false", "false", "", "true"),
                "",
            ]
        )

        changes = parse_log(output)

        self.assertEqual(len(changes), 3)
        self.assertTrue(changes[1].is_graph_only)
        self.assertEqual(changes[1].graph_prefix, "│ ├─╮")
        self.assertEqual(changes[2].graph_prefix, "│ ○  ")
        self.assertTrue(changes[2].has_conflict)

    def test_short_record_raises_parse_error(self) -> None:
        with self.assertRaises(ParseError):
            parse_log(_record("@  abcdefgh", "c1", "a", "t"))

    def test_graph_free_record_parses(self) -> None:
        change = parse_log_record(_record("abcdefgh", "c1", "a", "t", "d", "false", "false"))

        self.assertEqual(change.change_id, "abcdefgh")
        self.assertEqual(change.graph_prefix, "")


class GraphPrefixTests(unittest.TestCase):
    def test_split_stops_at_first_non_lowercase_after_id(self) -> None:
        self.assertEqual(split_graph_prefix("│ ○  qpvuntsm"), ("│ ○  ", "qpvuntsm"))
        self.assertEqual(split_graph_prefix("@  xyz"), ("@  ", "xyz"))
        self.assertEqual(split_graph_prefix("abc"), ("", "abc"))

    def test_uppercase_is_not_part_of_the_id(self) -> None:
        self.assertEqual(split_graph_prefix("~Xabc"), ("~X", "abc"))

    def test_no_lowercase_run_raises_parse_error(self) -> None:
        with self.assertRaises(ParseError):
            split_graph_prefix("│ ├─╮")

    def test_parse_error_message_names_the_input(self) -> None:
        with self.assertRaises(ParseError) as ctx:
            split_graph_prefix("│ ├─╮")
        self.assertIn("Cannot extract change_id", str(ctx.exception))
        self.assertTrue(str(ctx.exception).startswith("Failed to parse jj output:"))


class ChangeInfoTests(unittest.TestCase):
    def test_parses_first_line(self) -> None:
        info = parse_change_info("abcdefgh\tmain,dev\talice\t2024-01-01 00:00\tsubject\n")

        self.assertIsNotNone(info)
        assert info is not None
        self.assertEqual(info.change_id, "abcdefgh")
        self.assertEqual(info.bookmarks, ("main", "dev"))
        self.assertEqual(info.description, "subject")

    def test_short_line_returns_none(self) -> None:
        self.assertIsNone(parse_change_info("abcdefgh\tmain\n"))
        self.assertIsNone(parse_change_info(""))


if __name__ == "__main__":
    unittest.main()
