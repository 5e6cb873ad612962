"""Input validation utilities for security and safety."""

from __future__ import annotations

from pathlib import Path

from git_wt.common.errors import ValidationError

SUPPORTED_SHELLS = ("bash", "zsh", "fish")

TMUX_LAYOUTS = (
    "tiled",
    "horizontal",
    "vertical",
    "even-horizontal",
    "even-vertical",
    "main-horizontal",
    "main-vertical",
)


def validate_branch_name(branch: str) -> str:
    """Validate a branch name before handing it to git.

    Returns the branch name or raises ValidationError.
    """
    if not branch or not branch.strip():
        raise ValidationError("Branch name cannot be empty")

    # Leading '-' would be parsed by git as an option
    if ".." in branch or branch.startswith("-"):
        raise ValidationError(f"Invalid branch name: {branch}")

    return branch


def validate_pr_number(pr_num: int | str) -> int:
    """Validate PR number is a positive integer.

    Returns validated int or raises ValidationError.
    """
    try:
        num = int(pr_num)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"Invalid PR number: {pr_num}") from e

    if num <= 0:
        raise ValidationError(f"Invalid PR number: {pr_num}")

    return num


def validate_base_dir(base_dir: str | Path | None, default: Path) -> Path:
    """Resolve the directory new worktrees are placed under.

    Falls back to default when not given; a given directory must exist.
    """
    if not base_dir:
        return default

    path = Path(base_dir)
    if not path.exists():
        raise ValidationError(f"Base directory does not exist: {path}")
    if not path.is_dir():
        raise ValidationError(f"Base directory is not a directory: {path}")
    return path


def validate_layout(layout: str) -> str:
    """Validate a tmux layout name. Empty means tmux's default."""
    if layout and layout not in TMUX_LAYOUTS:
        raise ValidationError(
            f"Invalid layout: {layout} (must be one of: {', '.join(TMUX_LAYOUTS)})"
        )
    return layout


def validate_shell(shell: str) -> str:
    """Normalize and validate a shell name for hook output."""
    normalized = shell.strip().lower()
    if normalized not in SUPPORTED_SHELLS:
        raise ValidationError(
            f"Unsupported shell: {shell}\n"
            f"Supported shells: {', '.join(SUPPORTED_SHELLS)}"
        )
    return normalized
