"""Confirm and Select dialogs plus their key handling.

A dialog lives in ``App.active_dialog`` until a key produces a result;
``dispatch.handle_dialog_result`` then clears the slot before running the
callback.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from .callbacks import DialogCallback

MOVE_DOWN_KEYS = frozenset({"j", "DOWN"})
MOVE_UP_KEYS = frozenset({"k", "UP"})
ENTER_KEYS = frozenset({"ENTER", "ENTER_CR", "ENTER_LF"})


@dataclass
class SelectItem:
    label: str
    value: str
    selected: bool = False


@dataclass(frozen=True)
class Confirm:
    title: str
    message: str
    detail: str | None = None


@dataclass
class Select:
    title: str
    message: str
    items: list[SelectItem] = field(default_factory=list)
    detail: str | None = None
    single_select: bool = False


DialogKind = Union[Confirm, Select]


@dataclass(frozen=True)
class Confirmed:
    values: tuple[str, ...] = ()


@dataclass(frozen=True)
class Cancelled:
    pass


DialogResult = Union[Confirmed, Cancelled]


@dataclass
class Dialog:
    kind: DialogKind
    callback: DialogCallback
    cursor: int = 0

    @classmethod
    def confirm(
        cls,
        title: str,
        message: str,
        callback: DialogCallback,
        detail: str | None = None,
    ) -> Dialog:
        return cls(Confirm(title, message, detail), callback)

    @classmethod
    def select(
        cls,
        title: str,
        message: str,
        items: list[SelectItem],
        callback: DialogCallback,
        detail: str | None = None,
    ) -> Dialog:
        return cls(Select(title, message, items, detail, single_select=False), callback)

    @classmethod
    def select_single(
        cls,
        title: str,
        message: str,
        items: list[SelectItem],
        callback: DialogCallback,
        detail: str | None = None,
    ) -> Dialog:
        return cls(Select(title, message, items, detail, single_select=True), callback)

    def handle_key(self, key: str) -> DialogResult | None:
        """Return a result when ``key`` closes the dialog, else ``None``."""
        if isinstance(self.kind, Confirm):
            return self._handle_confirm_key(key)
        return self._handle_select_key(self.kind, key)

    @staticmethod
    def _handle_confirm_key(key: str) -> DialogResult | None:
        if key in ("y", "Y") or key in ENTER_KEYS:
            return Confirmed()
        if key in ("n", "N", "ESC", "q"):
            return Cancelled()
        return None

    def _handle_select_key(self, select: Select, key: str) -> DialogResult | None:
        items = select.items
        if key in MOVE_DOWN_KEYS:
            if self.cursor < len(items) - 1:
                self.cursor += 1
            return None
        if key in MOVE_UP_KEYS:
            if self.cursor > 0:
                self.cursor -= 1
            return None
        if key == " ":
            if not select.single_select and 0 <= self.cursor < len(items):
                items[self.cursor].selected = not items[self.cursor].selected
            return None
        if key in ENTER_KEYS:
            if select.single_select:
                if 0 <= self.cursor < len(items):
                    return Confirmed((items[self.cursor].value,))
                return Cancelled()
            chosen = tuple(item.value for item in items if item.selected)
            # An empty multi-selection is a cancel, never Confirmed(()).
            return Confirmed(chosen) if chosen else Cancelled()
        if key in ("ESC", "q"):
            return Cancelled()
        return None
