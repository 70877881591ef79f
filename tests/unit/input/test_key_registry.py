"""Tests for the key-combo registry used by the per-view key tables."""

from __future__ import annotations

import unittest

from lazyjj.input import KeyComboBinding, KeyComboRegistry


class KeyComboRegistryTests(unittest.TestCase):
    def test_every_combo_dispatches_to_the_binding(self) -> None:
        registry: KeyComboRegistry[str] = KeyComboRegistry()
        registry.register_binding(KeyComboBinding(("j", "DOWN"), lambda: "down"))

        self.assertEqual(registry.dispatch("j"), "down")
        self.assertEqual(registry.dispatch("DOWN"), "down")
        self.assertIsNone(registry.dispatch("k"))

    def test_later_binding_overrides(self) -> None:
        registry: KeyComboRegistry[str] = KeyComboRegistry().register_bindings(
            KeyComboBinding(("x",), lambda: "first"),
            KeyComboBinding(("x",), lambda: "second"),
        )

        self.assertEqual(registry.dispatch("x"), "second")

    def test_normalizer_applies_to_lookup(self) -> None:
        registry: KeyComboRegistry[str] = KeyComboRegistry(normalize=str.lower)
        registry.register_binding(KeyComboBinding(("Q",), lambda: "quit"))

        self.assertIn("q", registry)
        self.assertEqual(registry.dispatch("q"), "quit")


if __name__ == "__main__":
    unittest.main()
