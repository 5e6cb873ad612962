"""Git operations: repository discovery, worktrees and branches."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import NamedTuple

from git_wt.common.errors import GitCommandError, WtError
from git_wt.common.logging_config import get_logger

logger = get_logger(__name__)

_SHORT_SHA_LENGTH = 7


class RepoInfo(NamedTuple):
    """The main repository, even when called from inside a worktree."""

    root: Path
    name: str
    parent: Path


class WorktreeInfo(NamedTuple):
    """Information about a git worktree."""

    path: Path
    branch: str | None
    head: str = ""
    is_detached: bool = False
    is_bare: bool = False
    is_locked: bool = False
    is_prunable: bool = False


def _log_command(args: list[str], cwd: Path | None) -> None:
    cmd = " ".join(["git", *args])
    if cwd is not None:
        cmd = f"(cd {cwd} && {cmd})"
    logger.debug("+ %s", cmd)


def run_git(*args: str, capture: bool = True, cwd: Path | None = None) -> str | None:
    """Run a git command and return stdout, or None on failure."""
    _log_command(list(args), cwd)
    try:
        result = subprocess.run(
            ["git", *args],
            capture_output=capture,
            text=True,
            cwd=cwd,
            check=True,
        )
        return result.stdout.strip() if capture else None
    except subprocess.CalledProcessError:
        return None


def run_git_checked(*args: str, cwd: Path | None = None) -> str:
    """Run a git command and return stdout, raising GitCommandError on failure."""
    _log_command(list(args), cwd)
    result = subprocess.run(
        ["git", *args],
        capture_output=True,
        text=True,
        cwd=cwd,
        check=False,
    )
    if result.returncode != 0:
        raise GitCommandError(list(args), result.stderr.strip())
    return result.stdout.strip()


def is_git_installed() -> bool:
    """Check if git is on PATH."""
    return shutil.which("git") is not None


def parse_worktree_porcelain(output: str) -> list[WorktreeInfo]:
    """Parse the output of `git worktree list --porcelain`."""
    worktrees: list[WorktreeInfo] = []
    current: dict[str, str] = {}

    def flush() -> None:
        if current.get("worktree"):
            branch = current.get("branch", "").removeprefix("refs/heads/")
            worktrees.append(
                WorktreeInfo(
                    path=Path(current["worktree"]),
                    branch=branch or None,
                    head=current.get("HEAD", ""),
                    is_detached="detached" in current,
                    is_bare="bare" in current,
                    is_locked="locked" in current,
                    is_prunable="prunable" in current,
                )
            )
        current.clear()

    for raw_line in output.split("\n"):
        line = raw_line.strip()
        if not line:
            flush()
            continue
        key, _, value = line.partition(" ")
        if key == "worktree":
            flush()
        current[key] = value

    flush()
    return worktrees


def list_worktrees(cwd: Path | None = None) -> list[WorktreeInfo]:
    """List all worktrees, main worktree first."""
    output = run_git_checked("worktree", "list", "--porcelain", cwd=cwd)
    return parse_worktree_porcelain(output)


def get_repo(cwd: Path | None = None) -> RepoInfo:
    """Get the main repository for cwd.

    Raises WtError when git is missing or cwd is not inside a git repository.
    """
    if not is_git_installed():
        raise WtError("git not found. Please install git")
    if run_git("rev-parse", "--show-toplevel", cwd=cwd) is None:
        raise WtError("Not in a git repository")

    worktrees = list_worktrees(cwd)
    if not worktrees:
        raise WtError("Could not find main worktree")

    root = worktrees[0].path
    return RepoInfo(root=root, name=root.name, parent=root.parent)


def format_branch(wt: WorktreeInfo) -> str:
    """Branch name, or a short detached-HEAD label."""
    if wt.branch and not wt.is_detached:
        return wt.branch
    return f"(detached: {wt.head[:_SHORT_SHA_LENGTH]})"


def display_items(worktrees: list[WorktreeInfo]) -> list[str]:
    """One "<branch>\\t<path>" line per worktree."""
    return [f"{format_branch(wt)}\t{wt.path}" for wt in worktrees]


def find_worktree_by_branch(
    branch: str, cwd: Path | None = None
) -> WorktreeInfo | None:
    """Find the worktree that has branch checked out."""
    for wt in list_worktrees(cwd):
        if wt.branch == branch:
            return wt
    return None


def is_branch_in_use(
    branch: str, exclude_path: Path, cwd: Path | None = None
) -> bool:
    """Check if a worktree other than exclude_path has branch checked out."""
    return any(
        wt.branch == branch and wt.path != exclude_path for wt in list_worktrees(cwd)
    )


def branch_exists(branch: str, cwd: Path | None = None) -> bool:
    """Check if a local branch exists."""
    return (
        run_git("show-ref", "--verify", "--quiet", f"refs/heads/{branch}", cwd=cwd)
        is not None
    )


def add_worktree(
    path: Path,
    branch: str,
    start_point: str | None = None,
    *,
    create_branch: bool = False,
    cwd: Path | None = None,
) -> None:
    """Create a worktree at path, optionally creating the branch."""
    args = ["worktree", "add"]
    if create_branch:
        args.extend(["-b", branch, str(path)])
        if start_point:
            args.append(start_point)
    else:
        args.extend([str(path), branch])

    run_git_checked(*args, cwd=cwd)


def remove_worktree(path: Path, *, force: bool = False, cwd: Path | None = None) -> None:
    """Remove a worktree."""
    args = ["worktree", "remove"]
    if force:
        args.append("--force")
    args.append(str(path))
    run_git_checked(*args, cwd=cwd)


def prune_worktrees(cwd: Path | None = None) -> bool:
    """Drop administrative files for deleted worktrees. Returns True on success."""
    return run_git("worktree", "prune", cwd=cwd) is not None


def delete_branch(branch: str, *, force: bool = False, cwd: Path | None = None) -> None:
    """Delete a local branch (-D when force)."""
    run_git_checked("branch", "-D" if force else "-d", branch, cwd=cwd)


def is_branch_merged(branch: str, cwd: Path | None = None) -> bool:
    """Check if branch is merged into the current branch."""
    output = run_git_checked("branch", "--merged", cwd=cwd)
    for line in output.split("\n"):
        if line.strip().lstrip("*+").strip() == branch:
            return True
    return False


def is_repo_dirty(repo_path: Path) -> bool:
    """Check if a repository has uncommitted changes."""
    result = run_git("status", "--porcelain", cwd=repo_path)
    return bool(result and result.strip())
