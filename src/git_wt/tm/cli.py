"""Tmux sessions with one pane per worktree."""

from __future__ import annotations

from pathlib import Path

import click

from git_wt.common import echo_info, sanitize, style_dim, style_success
from git_wt.common.context import AppContext, pass_app
from git_wt.common.errors import TmuxError, ValidationError
from git_wt.common.validate import (
    TMUX_LAYOUTS,
    validate_base_dir,
    validate_branch_name,
    validate_layout,
)
from git_wt.tm.manager import Pane, TmuxManager, is_tmux_installed
from git_wt.wt.cli import create_worktree

SESSION_PREFIX = "wt"


def session_name_for(repo_name: str, branch: str, custom: str | None = None) -> str:
    """Session name: sanitized custom name, else wt-<repo>-<branch>."""
    if custom:
        name = sanitize(custom)
        if not name:
            raise ValidationError(f"Invalid session name: {custom!r}")
        return name
    return f"{SESSION_PREFIX}-{repo_name}-{sanitize(branch)}"


@click.group("tmux")
def tmux_cli() -> None:
    """Tmux sessions over several worktrees."""


@tmux_cli.command("new")
@click.argument("branch")
@click.argument("start_point", required=False)
@click.option(
    "--base-dir",
    type=click.Path(path_type=Path),
    help="Directory to place worktrees under (default: repository parent)",
)
@click.option("--count", type=int, default=1, show_default=True, help="Number of worktrees")
@click.option(
    "--layout",
    default="tiled",
    show_default=True,
    help=f"Pane layout ({', '.join(TMUX_LAYOUTS)})",
)
@click.option("--sync-panes", is_flag=True, help="Send input to all panes at once")
@click.option("--no-attach", is_flag=True, help="Leave the session in the background")
@click.option("--session-name", help="Custom tmux session name")
@pass_app
def new_cmd(
    app: AppContext,
    branch: str,
    start_point: str | None,
    base_dir: Path | None,
    count: int,
    layout: str,
    session_name: str | None,
    *,
    sync_panes: bool,
    no_attach: bool,
) -> None:
    """Create worktrees BRANCH-1..BRANCH-N and open them in one tmux session.

    EXAMPLES:
        wt tmux new feature/auth
        wt tmux new feature/auth --count 3
        wt tmux new feature/auth main --count 3 --sync-panes
    """
    validate_branch_name(branch)
    if not is_tmux_installed():
        raise TmuxError(
            "tmux is not installed. Install with: brew install tmux (macOS) "
            "or apt install tmux (Linux)"
        )
    validate_layout(layout)
    if count < 1:
        raise ValidationError("--count must be at least 1")

    repo = app.repo()
    base = validate_base_dir(base_dir, repo.parent).resolve()

    click.echo("Creating worktrees...")
    panes: list[Pane] = []
    for i in range(1, count + 1):
        pane_branch = f"{branch}-{i}"
        path = create_worktree(app, pane_branch, start_point, base, repo.name)
        click.echo(f"  {style_success(pane_branch)} -> {path}")
        panes.append(Pane(path=path, branch=pane_branch))

    name = session_name_for(repo.name, branch, session_name)
    manager = TmuxManager(name)
    if manager.session_exists():
        echo_info(f"Replacing existing session {name}", quiet=app.quiet)
        manager.kill_session()

    click.echo("\nStarting tmux session...")
    manager.create_session(panes, layout=layout, sync_panes=sync_panes)
    click.echo(style_success(f"Tmux session created: {name}"))

    if no_attach:
        click.echo("\nSession running in background")
        click.echo(style_dim(f"Attach with: tmux attach -t {name}"))
        return

    click.echo("\nAttaching to tmux session (Ctrl-b d to detach)...")
    manager.attach()
