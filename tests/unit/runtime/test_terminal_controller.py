"""Tests for terminal mode transitions and the suspend guard."""

from __future__ import annotations

import termios
import unittest
from unittest import mock

from lazyjj.runtime.terminal import TerminalController


def _controller() -> TerminalController:
    with mock.patch("lazyjj.runtime.terminal.termios.tcgetattr", return_value=[1, 2, 3]):
        return TerminalController(stdin_fd=0, stdout_fd=1)


class TerminalControllerTests(unittest.TestCase):
    def test_enable_and_disable_use_alternate_screen(self) -> None:
        controller = _controller()

        with mock.patch("lazyjj.runtime.terminal.tty.setraw") as setraw_mock, mock.patch(
            "lazyjj.runtime.terminal.os.write"
        ) as write_mock, mock.patch("lazyjj.runtime.terminal.termios.tcsetattr") as setattr_mock:
            controller.enable_tui_mode()
            self.assertTrue(controller.tui_active)
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (1, b"\x1b[?1049h\x1b[?25l"))
        self.assertEqual(write_mock.call_args_list[1].args, (1, b"\x1b[?25h\x1b[?1049l"))
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, [1, 2, 3])
        self.assertFalse(controller.tui_active)

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        controller = _controller()

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()

    def test_suspended_reenters_tui_even_when_child_fails(self) -> None:
        controller = _controller()
        controller._tui_active = True
        events: list[str] = []

        def disable() -> None:
            events.append("disable")
            controller._tui_active = False

        def enable() -> None:
            events.append("enable")
            controller._tui_active = True

        with mock.patch.object(controller, "disable_tui_mode", side_effect=disable), mock.patch.object(
            controller, "enable_tui_mode", side_effect=enable
        ):
            with self.assertRaises(OSError):
                with controller.suspended():
                    events.append("child")
                    raise OSError("editor crashed")

        self.assertEqual(events, ["disable", "child", "enable"])
        self.assertTrue(controller.tui_active)

    def test_suspended_outside_tui_is_a_no_op(self) -> None:
        controller = _controller()

        with mock.patch.object(controller, "disable_tui_mode") as disable_mock, mock.patch.object(
            controller, "enable_tui_mode"
        ) as enable_mock:
            with controller.suspended():
                pass

        disable_mock.assert_not_called()
        enable_mock.assert_not_called()


if __name__ == "__main__":
    unittest.main()
