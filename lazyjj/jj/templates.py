"""Pinned ``-T`` templates for parseable jj output.

Fields are joined with explicit tab literals; jj does not expand ``\\x1f``
inside templates and ``separate()`` drops empty fields.
"""

from __future__ import annotations

FIELD_SEPARATOR = "\t"

_SEP = ' ++ "\\t" ++ '


def _join(*fields: str) -> str:
    return _SEP.join(fields) + ' ++ "\\n"'


LOG = _join(
    "change_id.short(8)",
    "commit_id.short(8)",
    "author.email()",
    "author.timestamp().format('%Y-%m-%dT%H:%M:%S%z')",
    "description.first_line()",
    "if(current_working_copy, 'true', 'false')",
    "if(empty, 'true', 'false')",
    "bookmarks.map(|b| b.name()).join(',')",
    "if(conflict, 'true', 'false')",
)

OP_LOG = _join(
    "self.id().short(12)",
    "self.user()",
    "self.time().start().ago()",
    "self.description().first_line()",
)

REDO_PROBE = _join("id.short()", "description.first_line()")

BOOKMARK_LIST = 'separate("\\t", name, remote, tracked) ++ "\\n"'

BOOKMARK_INFO = _join(
    "name",
    "if(remote, remote, '')",
    "if(tracked, 'true', 'false')",
    "if(normal_target, normal_target.change_id().short(8), '')",
    "if(normal_target, normal_target.commit_id().short(8), '')",
    "if(normal_target, normal_target.description().first_line(), '')",
)

CHANGE_INFO = _join(
    "change_id.short(8)",
    "bookmarks.map(|b| b.name()).join(',')",
    "author.email()",
    "author.timestamp().format('%Y-%m-%d %H:%M')",
    "description.first_line()",
)

EVOLOG = _join(
    "commit.commit_id().short(8)",
    "commit.change_id().short(8)",
    "commit.author().email()",
    "commit.author().timestamp().format('%Y-%m-%d %H:%M:%S')",
    "if(commit.empty(), '[empty]', '')",
    "commit.description().first_line()",
)

REMOTE_LIST = 'name ++ "\\n"'
