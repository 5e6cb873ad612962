"""Pull request review worktrees."""

from __future__ import annotations

import click

from git_wt.common import (
    SelectionCancelledError,
    confirm,
    echo_info,
    generate_worktree_path,
    sanitize,
    style_success,
)
from git_wt.common.context import AppContext, pass_app
from git_wt.common.errors import GhNotFoundError
from git_wt.common.git import add_worktree, branch_exists, find_worktree_by_branch
from git_wt.common.github import is_gh_available
from git_wt.common.shell import check_shell_function
from git_wt.common.validate import validate_branch_name, validate_pr_number
from git_wt.pr.api import (
    PRInfo,
    add_remote,
    fetch_pr_branch,
    get_default_remote,
    get_pr_info,
    remote_exists,
    remove_remote,
    temp_remote_name,
)


def determine_remote(
    app: AppContext, pr: PRInfo, remote: str | None, *, quiet: bool
) -> tuple[str, str | None]:
    """Pick the remote to fetch from. Returns (remote, temporary_remote).

    Fork PRs use a remote named after the fork owner if one exists, otherwise
    a temporary remote that the caller must remove.
    """
    if remote:
        return remote, None

    if not pr.is_cross_repository:
        return get_default_remote(cwd=app.repo_path), None

    if remote_exists(pr.head_owner, cwd=app.repo_path):
        return pr.head_owner, None

    temp = temp_remote_name(pr.number)
    echo_info(
        f"Adding temporary remote: {temp} ({pr.head_owner}/{pr.head_repo})",
        quiet=quiet,
    )
    add_remote(temp, pr.head_owner, pr.head_repo, cwd=app.repo_path)
    return temp, temp


@click.command("pr")
@click.argument("number")
@click.option("--branch", "local_branch", help="Local branch name (default: the PR's branch)")
@click.option("--remote", help="Remote to fetch from (default: auto-detect)")
@click.option("--cd", "cd", is_flag=True, help="Print only the path (for the shell function)")
@click.option("--force", is_flag=True, help="Skip prompts and reuse existing branches")
@pass_app
def pr_cmd(
    app: AppContext,
    number: str,
    local_branch: str | None,
    remote: str | None,
    *,
    cd: bool,
    force: bool,
) -> None:
    """Create a worktree for reviewing pull request NUMBER.

    Requires the GitHub CLI (gh), authenticated with `gh auth login`.
    PRs from forks are fetched through a temporary remote.

    EXAMPLES:
        wt pr 123                          # Uses the PR's branch name
        wt pr 123 --branch review/pr-123   # Custom local branch
        wt pr 123 --cd                     # Create and cd (needs wt hook)
    """
    check_shell_function(cd)
    pr_number = validate_pr_number(number)

    if not is_gh_available():
        raise GhNotFoundError()

    repo = app.repo()
    quiet = cd or app.quiet

    echo_info(f"Fetching PR #{pr_number} info...", quiet=quiet)
    pr = get_pr_info(pr_number)
    if not quiet:
        click.echo(f"  Branch: {pr.head_branch}")
        click.echo(f"  Owner: {pr.head_owner}")

    branch = validate_branch_name(local_branch or pr.head_branch)

    existing = find_worktree_by_branch(branch, cwd=app.repo_path)
    if existing is not None:
        if not cd:
            click.echo(f"Branch '{branch}' is already in use by worktree: {existing.path}")
            return
        if force or confirm(f"Branch '{branch}' is already checked out. Navigate to it?"):
            click.echo(existing.path)
            return
        raise SelectionCancelledError()

    if branch_exists(branch, cwd=app.repo_path) and not force and not quiet:
        click.echo(f"Branch '{branch}' already exists locally.")
        if not confirm("Create new worktree using existing branch?"):
            raise SelectionCancelledError()

    fetch_remote, temp_remote = determine_remote(app, pr, remote, quiet=quiet)
    try:
        echo_info(
            f"Fetching branch: {fetch_remote}/{pr.head_branch} -> {branch}", quiet=quiet
        )
        fetch_pr_branch(fetch_remote, pr.head_branch, branch, cwd=app.repo_path)
    finally:
        if temp_remote:
            echo_info(f"Removing temporary remote: {temp_remote}", quiet=quiet)
            remove_remote(temp_remote, cwd=app.repo_path)

    label = sanitize(f"pr-{pr_number}-{pr.head_branch}")
    path = generate_worktree_path(repo.parent, repo.name, label, app.config_path)

    echo_info(f"Creating worktree: {path}", quiet=quiet)
    add_worktree(path, branch, cwd=app.repo_path)

    if cd:
        click.echo(path)
        return
    if app.quiet:
        return

    click.echo(style_success("PR review worktree created"))
    click.echo(f"  PR: #{pr_number}")
    click.echo(f"  Branch: {branch}")
    click.echo(f"  Path: {path}")
    click.echo(f"\nNavigate: wt go pr-{pr_number}")
