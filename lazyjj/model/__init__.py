"""Domain records parsed from jj output.

All records are plain dataclasses; relationships between them are by
identifier string only.
"""

from .bookmark import Bookmark, BookmarkInfo
from .change import Change, ROOT_CHANGE_ID
from .diff import DiffContent, DiffDisplayFormat, DiffLine, DiffLineKind
from .notification import Notification, NotificationKind
from .records import (
    AnnotationContent,
    AnnotationLine,
    ConflictFile,
    EvologEntry,
    Operation,
    RebaseMode,
)
from .status import FileState, FileStatus, Status

__all__ = [
    "AnnotationContent",
    "AnnotationLine",
    "Bookmark",
    "BookmarkInfo",
    "Change",
    "ConflictFile",
    "DiffContent",
    "DiffDisplayFormat",
    "DiffLine",
    "DiffLineKind",
    "EvologEntry",
    "FileState",
    "FileStatus",
    "Notification",
    "NotificationKind",
    "Operation",
    "ROOT_CHANGE_ID",
    "RebaseMode",
    "Status",
]
