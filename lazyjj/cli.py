"""Command-line front door for lazyjj.

Parses launch options, configures logging, then hands off to the runtime.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import structlog

from .runtime import run_app
from .runtime.logging import configure_logging, resolve_log_level

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

logger = structlog.get_logger(__name__)


def _log_level(value: str) -> str:
    """argparse type for case-insensitive log level names."""
    level = value.upper()
    if level not in LOG_LEVELS:
        raise argparse.ArgumentTypeError(f"invalid log level: {value!r}")
    return level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazyjj",
        description="Terminal UI for the jj version control system.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Repository path passed to jj as -R. Defaults to the current directory.",
    )
    parser.add_argument("--revset", default=None, help="Revset for the log view.")
    parser.add_argument(
        "--log-level",
        type=_log_level,
        default=None,
        help=f"Log level ({', '.join(LOG_LEVELS)}). Overrides LAZYJJ_LOG_LEVEL.",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write the log to this file.")
    parser.add_argument(
        "--no-preview",
        action="store_true",
        help="Start with the log preview pane hidden.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the TUI; exits with the runtime's status."""
    args = build_parser().parse_args(argv)

    repo_path: Path | None = None
    if args.path is not None:
        repo_path = Path(args.path)
        if not repo_path.is_dir():
            raise SystemExit(f"Path not found: {repo_path}")

    configure_logging(resolve_log_level(args.log_level), args.log_file)
    logger.debug("cli_args", path=args.path, revset=args.revset, no_preview=args.no_preview)

    exit_code = run_app(
        repo_path,
        revset=args.revset,
        preview_enabled=False if args.no_preview else None,
    )
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
