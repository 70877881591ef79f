"""Tests for Confirm/Select key handling."""

from __future__ import annotations

import unittest

from lazyjj.app.callbacks import DeleteBookmarks, RestoreAll
from lazyjj.app.dialog import Cancelled, Confirmed, Dialog, SelectItem


def _items(*values: str) -> list[SelectItem]:
    return [SelectItem(value.upper(), value) for value in values]


class ConfirmDialogTests(unittest.TestCase):
    def test_yes_and_enter_confirm(self) -> None:
        for key in ("y", "Y", "ENTER"):
            dialog = Dialog.confirm("Restore", "Restore all?", RestoreAll())
            self.assertEqual(dialog.handle_key(key), Confirmed())

    def test_no_escape_and_q_cancel(self) -> None:
        for key in ("n", "N", "ESC", "q"):
            dialog = Dialog.confirm("Restore", "Restore all?", RestoreAll())
            self.assertIsInstance(dialog.handle_key(key), Cancelled)

    def test_other_keys_keep_dialog_open(self) -> None:
        dialog = Dialog.confirm("Restore", "Restore all?", RestoreAll())

        self.assertIsNone(dialog.handle_key("x"))


class SelectDialogTests(unittest.TestCase):
    def test_multi_select_with_nothing_toggled_is_cancelled(self) -> None:
        dialog = Dialog.select("Delete", "Pick", _items("a", "b"), DeleteBookmarks())

        self.assertIsInstance(dialog.handle_key("ENTER"), Cancelled)

    def test_multi_select_returns_toggled_values_in_order(self) -> None:
        dialog = Dialog.select("Delete", "Pick", _items("a", "b", "c"), DeleteBookmarks())

        dialog.handle_key("j")
        dialog.handle_key(" ")
        dialog.handle_key("j")
        dialog.handle_key(" ")
        dialog.handle_key("k")
        dialog.handle_key("k")
        dialog.handle_key(" ")
        dialog.handle_key(" ")

        self.assertEqual(dialog.handle_key("ENTER"), Confirmed(("b", "c")))

    def test_cursor_is_clamped(self) -> None:
        dialog = Dialog.select("Delete", "Pick", _items("a", "b"), DeleteBookmarks())

        dialog.handle_key("k")
        self.assertEqual(dialog.cursor, 0)
        for _ in range(5):
            dialog.handle_key("DOWN")
        self.assertEqual(dialog.cursor, 1)

    def test_single_select_returns_cursor_value(self) -> None:
        dialog = Dialog.select_single("Remote", "Pick", _items("origin", "upstream"), DeleteBookmarks())

        dialog.handle_key(" ")
        dialog.handle_key("j")

        self.assertEqual(dialog.handle_key("ENTER"), Confirmed(("upstream",)))
        self.assertFalse(dialog.kind.items[0].selected)

    def test_single_select_with_no_items_cancels(self) -> None:
        dialog = Dialog.select_single("Remote", "Pick", [], DeleteBookmarks())

        self.assertIsInstance(dialog.handle_key("ENTER"), Cancelled)


if __name__ == "__main__":
    unittest.main()
