"""Persistent JSON config helpers.

Stores viewing preferences: preview toggle, default revset, diff format and
the protected-bookmark list. Malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..app.preview_cache import DEFAULT_PREVIEW_CACHE_SIZE
from ..jj.constants import PROTECTED_BOOKMARKS
from ..model import DiffDisplayFormat

APP_NAME = "lazyjj"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_OP_LOG_LIMIT = 50


@dataclass(frozen=True)
class Settings:
    """Typed view of the config file after validation."""

    preview_enabled: bool = True
    default_revset: str | None = None
    protected_bookmarks: tuple[str, ...] = PROTECTED_BOOKMARKS
    op_log_limit: int = DEFAULT_OP_LOG_LIMIT
    preview_cache_size: int = DEFAULT_PREVIEW_CACHE_SIZE
    diff_format: DiffDisplayFormat = DiffDisplayFormat.COLOR_WORDS


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON; write errors are ignored."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _positive_int(value: object, default: int) -> int:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


def load_settings(data: dict[str, object] | None = None) -> Settings:
    """Validate ``data`` (default: the config file) into ``Settings``."""
    config = load_config() if data is None else data

    preview = config.get("preview_enabled")
    revset = config.get("default_revset")
    protected = config.get("protected_bookmarks")
    if isinstance(protected, list) and all(isinstance(item, str) for item in protected):
        protected_bookmarks = tuple(protected)
    else:
        protected_bookmarks = PROTECTED_BOOKMARKS

    return Settings(
        preview_enabled=preview if isinstance(preview, bool) else True,
        default_revset=revset if isinstance(revset, str) and revset.strip() else None,
        protected_bookmarks=protected_bookmarks,
        op_log_limit=_positive_int(config.get("op_log_limit"), DEFAULT_OP_LOG_LIMIT),
        preview_cache_size=_positive_int(
            config.get("preview_cache_size"), DEFAULT_PREVIEW_CACHE_SIZE
        ),
        diff_format=DiffDisplayFormat.from_label(config.get("diff_format")),
    )


def save_preview_enabled(enabled: bool) -> None:
    config = load_config()
    config["preview_enabled"] = bool(enabled)
    save_config(config)


def save_diff_format(fmt: DiffDisplayFormat) -> None:
    config = load_config()
    config["diff_format"] = fmt.value
    save_config(config)
