"""Pull request lookup via gh and the git remote plumbing to fetch it."""

from __future__ import annotations

from pathlib import Path
from typing import Any, NamedTuple

from git_wt.common.errors import GhCommandError, GhNotFoundError, GitCommandError, WtError
from git_wt.common.git import branch_exists, run_git, run_git_checked
from git_wt.common.github import is_gh_available, run_gh_json
from git_wt.common.logging_config import get_logger

logger = get_logger(__name__)

PR_FIELDS = "headRefName,headRepositoryOwner,headRepository,isCrossRepository"

TEMP_REMOTE_PREFIX = "wt-pr-"


class PRInfo(NamedTuple):
    """The head side of a pull request."""

    number: int
    head_branch: str
    head_owner: str
    head_repo: str
    is_cross_repository: bool


def parse_pr_info(number: int, data: dict[str, Any]) -> PRInfo:
    """Build PRInfo from `gh pr view --json` output."""
    try:
        return PRInfo(
            number=number,
            head_branch=data["headRefName"],
            head_owner=(data.get("headRepositoryOwner") or {}).get("login", ""),
            head_repo=(data.get("headRepository") or {}).get("name", ""),
            is_cross_repository=bool(data.get("isCrossRepository", False)),
        )
    except (KeyError, TypeError, AttributeError) as e:
        raise GhCommandError("pr view", f"unexpected response: {e}") from e


def get_pr_info(number: int) -> PRInfo:
    """Fetch head branch and repository of a PR.

    Raises GhNotFoundError when gh is missing, GhCommandError when the
    lookup fails.
    """
    if not is_gh_available():
        raise GhNotFoundError()

    data = run_gh_json("pr", "view", str(number), "--json", PR_FIELDS)
    if not isinstance(data, dict):
        raise GhCommandError("pr view", f"could not load PR #{number}")
    return parse_pr_info(number, data)


def list_remotes(cwd: Path | None = None) -> list[str]:
    output = run_git("remote", cwd=cwd)
    if not output:
        return []
    return [line.strip() for line in output.split("\n") if line.strip()]


def get_default_remote(cwd: Path | None = None) -> str:
    """Get "origin" if configured, otherwise the first remote."""
    remotes = list_remotes(cwd)
    if not remotes:
        raise WtError("No git remotes configured")
    if "origin" in remotes:
        return "origin"
    return remotes[0]


def remote_exists(name: str, cwd: Path | None = None) -> bool:
    return run_git("remote", "get-url", name, cwd=cwd) is not None


def is_ssh_url(url: str) -> bool:
    return url.startswith("git@") or url.startswith("ssh://")


def fork_remote_url(owner: str, repo: str, origin_url: str | None) -> str:
    """URL for a fork, in the same scheme (SSH or HTTPS) as origin."""
    if origin_url and is_ssh_url(origin_url):
        return f"git@github.com:{owner}/{repo}.git"
    return f"https://github.com/{owner}/{repo}.git"


def add_remote(name: str, owner: str, repo: str, cwd: Path | None = None) -> str:
    """Add a remote pointing at owner/repo on GitHub. Returns its URL."""
    url = fork_remote_url(owner, repo, run_git("remote", "get-url", "origin", cwd=cwd))
    run_git_checked("remote", "add", name, url, cwd=cwd)
    return url


def remove_remote(name: str, cwd: Path | None = None) -> bool:
    """Remove a remote. Returns False if git refused."""
    return run_git("remote", "remove", name, cwd=cwd) is not None


def temp_remote_name(number: int) -> str:
    return f"{TEMP_REMOTE_PREFIX}{number}"


def fetch_pr_branch(
    remote: str, remote_branch: str, local_branch: str, cwd: Path | None = None
) -> None:
    """Fetch remote_branch into local_branch.

    When the local branch already exists and cannot be fast-forwarded by the
    fetch, it is reset to the fetched remote branch instead.
    """
    try:
        run_git_checked("fetch", remote, f"{remote_branch}:{local_branch}", cwd=cwd)
        return
    except GitCommandError:
        if not branch_exists(local_branch, cwd=cwd):
            raise

    logger.debug("Branch %s exists, resetting to %s/%s", local_branch, remote, remote_branch)
    run_git_checked("fetch", remote, remote_branch, cwd=cwd)
    run_git_checked("branch", "-f", local_branch, f"{remote}/{remote_branch}", cwd=cwd)
