"""jj command names, flags and special values."""

from __future__ import annotations

JJ_COMMAND = "jj"
MIN_JJ_VERSION = "0.20.0"
VERSION_PREFIX = "jj "

NO_COLOR = "--color=never"
NO_GRAPH = "--no-graph"
TEMPLATE = "-T"
REVISION = "-r"
REPO_PATH = "-R"
VERSION = "--version"
LIMIT = "--limit"
EDIT = "--edit"
BOOKMARK = "--bookmark"
CHANGE = "--change"
REVISIONS = "--revisions"
REMOTE = "--remote"
BRANCH = "--branch"
ALL_REMOTES = "--all-remotes"
DRY_RUN = "--dry-run"
ALLOW_NEW = "--allow-new"
ALLOW_PRIVATE = "--allow-private"
ALLOW_EMPTY_DESCRIPTION = "--allow-empty-description"
ALLOW_BACKWARDS = "--allow-backwards"
SKIP_EMPTIED = "--skip-emptied"
DESTINATION = "-d"

RESOLVE_LIST = "--list"
RESOLVE_TOOL = "--tool"
TOOL_OURS = ":ours"
TOOL_THEIRS = ":theirs"

WORKING_COPY = "@"
ROOT_CHANGE_ID = "zzzzzzzz"
NOT_A_REPO = "There is no jj repo"

PROTECTED_BOOKMARKS = ("main", "master", "trunk")
