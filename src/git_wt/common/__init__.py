"""Shared utilities for git-wt."""

from git_wt.common.errors import (
    ConfigError,
    SelectionCancelledError,
    ValidationError,
    WtError,
)
from git_wt.common.git import (
    RepoInfo,
    WorktreeInfo,
    display_items,
    get_repo,
    list_worktrees,
    run_git,
)
from git_wt.common.github import run_gh
from git_wt.common.match import MatchResult, filter_by_query
from git_wt.common.naming import (
    generate_worktree_path,
    resolve_worktree_path,
    sanitize,
)
from git_wt.common.picker import resolve_picker, select
from git_wt.common.ui import (
    BOLD,
    CYAN,
    DIM,
    GREEN,
    RED,
    YELLOW,
    confirm,
    echo_info,
    echo_success,
    style_dim,
    style_error,
    style_info,
    style_success,
    style_warn,
)

__all__ = [
    "BOLD",
    "CYAN",
    "DIM",
    "GREEN",
    "RED",
    "YELLOW",
    "ConfigError",
    "MatchResult",
    "RepoInfo",
    "SelectionCancelledError",
    "ValidationError",
    "WorktreeInfo",
    "WtError",
    "confirm",
    "display_items",
    "echo_info",
    "echo_success",
    "filter_by_query",
    "generate_worktree_path",
    "get_repo",
    "list_worktrees",
    "resolve_picker",
    "resolve_worktree_path",
    "run_gh",
    "run_git",
    "sanitize",
    "select",
    "style_dim",
    "style_error",
    "style_info",
    "style_success",
    "style_warn",
]
