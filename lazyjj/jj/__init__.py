"""jj command execution: executor, error taxonomy and retry protocol.

Only the error types are re-exported here; parsers import them, and the
executor in turn imports the parsers.
"""

from .errors import (
    CommandFailedError,
    JjError,
    NotARepositoryError,
    ParseError,
    ProcessIOError,
    ToolNotFoundError,
)

__all__ = [
    "CommandFailedError",
    "JjError",
    "NotARepositoryError",
    "ParseError",
    "ProcessIOError",
    "ToolNotFoundError",
]
