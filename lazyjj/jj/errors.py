"""Exception hierarchy for jj invocations and output parsing."""

from __future__ import annotations


class JjError(Exception):
    """Base class; ``str(error)`` is the user-facing message."""


class NotARepositoryError(JjError):
    def __init__(self) -> None:
        super().__init__("Not a jj repository")


class CommandFailedError(JjError):
    def __init__(self, stderr: str, exit_code: int) -> None:
        self.stderr = stderr
        self.exit_code = exit_code
        super().__init__(f"jj command failed (exit code {exit_code}): {stderr}")


class ToolNotFoundError(JjError):
    def __init__(self) -> None:
        super().__init__("jj is not installed or not in PATH")


class ProcessIOError(JjError):
    def __init__(self, cause: OSError) -> None:
        self.cause = cause
        super().__init__(f"IO error: {cause}")


class ParseError(JjError):
    def __init__(self, message: str) -> None:
        self.detail = message
        super().__init__(f"Failed to parse jj output: {message}")
