"""Worktree commands: new, go, clean, open, hook."""

from __future__ import annotations

from pathlib import Path

import click

from git_wt.common import (
    SelectionCancelledError,
    ValidationError,
    WorktreeInfo,
    confirm,
    display_items,
    echo_info,
    echo_success,
    filter_by_query,
    generate_worktree_path,
    list_worktrees,
    resolve_picker,
    sanitize,
    select,
    style_dim,
    style_success,
    style_warn,
)
from git_wt.common.context import AppContext, pass_app
from git_wt.common.errors import (
    BranchInUseError,
    GitCommandError,
    NoRemovableWorktreesError,
    NoWorktreesError,
    OutOfRangeError,
)
from git_wt.common.git import (
    add_worktree,
    branch_exists,
    delete_branch,
    find_worktree_by_branch,
    is_branch_in_use,
    is_branch_merged,
    is_repo_dirty,
    prune_worktrees,
    remove_worktree,
)
from git_wt.common.logging_config import get_logger
from git_wt.common.picker import InteractivePicker
from git_wt.common.shell import check_shell_function, get_shell_hook
from git_wt.common.validate import validate_base_dir, validate_branch_name
from git_wt.wt.editor import open_in_editor

logger = get_logger(__name__)


def choose_worktree(
    items: list[str],
    query: str,
    prompt: str,
    *,
    prefer_interactive: bool = True,
    picker: InteractivePicker | None = None,
) -> int:
    """Pick one display item, narrowed by query. Returns its original index.

    A query that leaves a single candidate resolves without prompting.
    """
    if not query:
        return select(
            items, prompt, prefer_interactive=prefer_interactive, picker=picker
        )

    matches = filter_by_query(items, query)
    if len(matches) == 1:
        return matches[0].index

    idx = select(
        [m.text for m in matches],
        prompt,
        prefer_interactive=prefer_interactive,
        picker=picker,
    )
    return matches[idx].index


def _pick(app: AppContext, items: list[str], query: str, prompt: str, *, no_fzf: bool) -> int:
    picker = None if no_fzf else resolve_picker(app.settings().picker)
    return choose_worktree(
        items, query, prompt, prefer_interactive=not no_fzf, picker=picker
    )


def create_worktree(
    app: AppContext,
    branch: str,
    start_point: str | None,
    base_dir: Path,
    project_name: str,
) -> Path:
    """Create a worktree for branch under base_dir. Returns its path.

    Raises BranchInUseError if another worktree has the branch checked out.
    """
    label = sanitize(branch)
    if not label:
        raise ValidationError(f"Invalid branch name: {branch}")

    path = generate_worktree_path(base_dir, project_name, label, app.config_path)

    existing = find_worktree_by_branch(branch, cwd=app.repo_path)
    if existing is not None:
        raise BranchInUseError(branch, existing.path)

    create = not branch_exists(branch, cwd=app.repo_path)
    logger.info("Creating worktree %s (new branch: %s)", path, create)
    add_worktree(path, branch, start_point, create_branch=create, cwd=app.repo_path)
    return path


@click.command("new")
@click.argument("branch")
@click.argument("start_point", required=False)
@click.option(
    "--base-dir",
    type=click.Path(path_type=Path),
    help="Directory to place the worktree under (default: repository parent)",
)
@click.option("--cd", "cd", is_flag=True, help="Print only the path (for the shell function)")
@pass_app
def new_cmd(
    app: AppContext,
    branch: str,
    start_point: str | None,
    base_dir: Path | None,
    *,
    cd: bool,
) -> None:
    """Create a new worktree for BRANCH.

    An existing branch is checked out; otherwise it is created from
    START_POINT (default: HEAD).

    EXAMPLES:
        wt new feature/auth              # .repo-wt/feature-auth
        wt new fix-123 origin/main       # New branch from origin/main
        wt new feature/auth --cd         # Create and cd (needs wt hook)
    """
    check_shell_function(cd)
    validate_branch_name(branch)

    repo = app.repo()
    base = validate_base_dir(base_dir, repo.parent).resolve()

    path = create_worktree(app, branch, start_point, base, repo.name)

    if cd:
        click.echo(path)
        return
    if app.quiet:
        return

    click.echo(style_success("Created worktree"))
    click.echo(f"  Branch: {branch}")
    click.echo(f"  Path: {path}")


@click.command("go")
@click.argument("query", required=False, default="")
@click.option("--no-fzf", is_flag=True, help="Use the numbered prompt instead of a picker")
@click.option("--index", type=int, help="Select the worktree at INDEX (0-based)")
@click.option("-q", "--quiet", "quiet", is_flag=True, help="Print only the path")
@pass_app
def go_cmd(
    app: AppContext, query: str, index: int | None, *, no_fzf: bool, quiet: bool
) -> None:
    """Select a worktree and print its path.

    QUERY narrows the list by branch or path; a single match is chosen
    without prompting.

    EXAMPLES:
        wt go                # Pick interactively
        wt go auth           # Jump straight to the only match
        wt go --index 0      # Main worktree
    """
    worktrees = list_worktrees(cwd=app.repo_path)
    if not worktrees:
        raise NoWorktreesError()

    if index is not None:
        if index < 0 or index >= len(worktrees):
            raise OutOfRangeError(index, len(worktrees) - 1, minimum=0)
        selected = worktrees[index]
    else:
        items = display_items(worktrees)
        selected = worktrees[_pick(app, items, query, "Select worktree", no_fzf=no_fzf)]

    if quiet or app.quiet:
        click.echo(selected.path)
        return

    click.echo(f"Destination: {selected.path}")
    click.echo(style_dim("\nHint: install the shell function to cd directly (wt hook --help)"))


def _remove(app: AppContext, wt: WorktreeInfo, *, force: bool, yes: bool) -> None:
    if not force and not yes and is_repo_dirty(wt.path):
        if not confirm("Worktree has uncommitted changes. Remove anyway?"):
            raise SelectionCancelledError()
        force = True

    remove_worktree(wt.path, force=force, cwd=app.repo_path)
    echo_success(f"Worktree removed: {wt.path}", quiet=app.quiet)


def _delete_branch(app: AppContext, wt: WorktreeInfo, *, yes: bool) -> None:
    branch = wt.branch
    if not branch or wt.is_detached:
        return

    if is_branch_in_use(branch, wt.path, cwd=app.repo_path):
        if not app.quiet:
            click.echo(style_warn(f"Branch '{branch}' is in use by other worktrees, keeping it"))
        return

    if not yes and not confirm(f"Also delete branch '{branch}'?"):
        return

    try:
        merged = is_branch_merged(branch, cwd=app.repo_path)
    except GitCommandError as e:
        logger.warning("Failed to check if branch is merged: %s", e)
        merged = False

    force = False
    if not merged:
        click.echo(style_warn(f"Branch '{branch}' is not merged"))
        if not yes and not confirm("Force delete? (git branch -D)"):
            echo_info(f"Branch '{branch}' will be kept", quiet=app.quiet)
            return
        force = True

    delete_branch(branch, force=force, cwd=app.repo_path)
    echo_success(f"Branch deleted: {branch}", quiet=app.quiet)


@click.command("clean")
@click.argument("query", required=False, default="")
@click.option("--force", is_flag=True, help="Remove even with uncommitted changes")
@click.option("--keep-branch", is_flag=True, help="Keep the branch")
@click.option("-y", "--yes", is_flag=True, help="Skip all confirmations")
@click.option("--no-fzf", is_flag=True, help="Use the numbered prompt instead of a picker")
@pass_app
def clean_cmd(
    app: AppContext,
    query: str,
    *,
    force: bool,
    keep_branch: bool,
    yes: bool,
    no_fzf: bool,
) -> None:
    """Remove a worktree and, optionally, its branch.

    The main worktree is never offered for removal.

    EXAMPLES:
        wt clean                 # Pick interactively
        wt clean auth --yes      # No questions asked
        wt clean --keep-branch   # Remove the worktree only
    """
    repo = app.repo()
    worktrees = list_worktrees(cwd=app.repo_path)
    if not worktrees:
        raise NoWorktreesError()

    removable = [wt for wt in worktrees if wt.path != repo.root]
    if not removable:
        raise NoRemovableWorktreesError()

    idx = _pick(
        app, display_items(removable), query, "Select worktree to remove", no_fzf=no_fzf
    )
    selected = removable[idx]

    if not yes:
        click.echo("The following worktree will be removed:")
        click.echo(f"  Path: {selected.path}")
        if selected.branch:
            click.echo(f"  Branch: {selected.branch}")
        if not confirm("Are you sure?"):
            raise SelectionCancelledError()

    _remove(app, selected, force=force, yes=yes)

    if not keep_branch:
        _delete_branch(app, selected, yes=yes)

    if not prune_worktrees(cwd=app.repo_path):
        logger.warning("git worktree prune failed")


@click.command("open")
@click.argument("query", required=False, default="")
@click.option("--editor", help="Editor command (default: WT_EDITOR, VISUAL, EDITOR)")
@click.option("--no-fzf", is_flag=True, help="Use the numbered prompt instead of a picker")
@pass_app
def open_cmd(app: AppContext, query: str, editor: str | None, *, no_fzf: bool) -> None:
    """Open a worktree in an editor.

    EXAMPLES:
        wt open                  # Pick interactively
        wt open auth --editor vim
    """
    worktrees = list_worktrees(cwd=app.repo_path)
    if not worktrees:
        raise NoWorktreesError()

    items = display_items(worktrees)
    selected = worktrees[_pick(app, items, query, "Select worktree to open", no_fzf=no_fzf)]

    echo_info(f"Opening {selected.path}", quiet=app.quiet)
    open_in_editor(selected.path, editor)


@click.command("hook")
@click.argument("shell")
def hook_cmd(shell: str) -> None:
    """Print the shell function for SHELL (bash, zsh or fish).

    The function runs `cd` for `wt go` and for any command given --cd.

    EXAMPLES:
        eval "$(wt hook bash)"                          # ~/.bashrc
        eval "$(wt hook zsh)"                           # ~/.zshrc
        wt hook fish > ~/.config/fish/functions/wt.fish
    """
    click.echo(get_shell_hook(shell), nl=False)
