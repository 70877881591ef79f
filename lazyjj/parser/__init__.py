"""Pure text → record parsers for jj output.

Nothing here spawns processes; only the log parser raises ``ParseError``,
every other parser skips lines it does not recognize.
"""

from .annotation import parse_file_annotate
from .bookmark import parse_bookmark_info_list, parse_bookmark_list, parse_remote_list
from .diff import (
    parse_diff_body,
    parse_diff_body_git,
    parse_diff_body_stat,
    parse_show,
    parse_show_git,
    parse_show_stat,
)
from .evolog import parse_evolog
from .log import ChangeInfo, parse_change_info, parse_log, split_graph_prefix
from .operation import parse_op_log, parse_redo_target
from .push import PushActionKind, PushPreviewAction, PushPreviewResult, parse_push_dry_run
from .resolve import parse_resolve_list
from .status import parse_status

__all__ = [
    "ChangeInfo",
    "PushActionKind",
    "PushPreviewAction",
    "PushPreviewResult",
    "parse_bookmark_info_list",
    "parse_bookmark_list",
    "parse_change_info",
    "parse_diff_body",
    "parse_diff_body_git",
    "parse_diff_body_stat",
    "parse_evolog",
    "parse_file_annotate",
    "parse_log",
    "parse_op_log",
    "parse_push_dry_run",
    "parse_redo_target",
    "parse_remote_list",
    "parse_resolve_list",
    "parse_show",
    "parse_show_git",
    "parse_show_stat",
    "parse_status",
    "split_graph_prefix",
]
