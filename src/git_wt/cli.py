"""git-wt: a git worktree helper with naming conventions and selection UI."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

import click

from git_wt.common import SelectionCancelledError, WtError, style_dim, style_error
from git_wt.common.context import AppContext
from git_wt.common.logging_config import get_logger, setup_logging
from git_wt.config.cli import config_cli
from git_wt.pr.cli import pr_cmd
from git_wt.tm.cli import tmux_cli
from git_wt.wt.cli import clean_cmd, go_cmd, hook_cmd, new_cmd, open_cmd

logger = get_logger(__name__)


@click.command(
    "passthrough",
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
    add_help_option=False,
)
@click.argument("git_args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def passthrough_cmd(ctx: click.Context, git_args: tuple[str, ...]) -> None:
    """Run `git worktree <name> ARGS...` for a subcommand wt doesn't define."""
    app = ctx.find_object(AppContext) or AppContext()
    argv = ["git", "worktree", ctx.info_name or "", *git_args]
    logger.debug("+ %s", " ".join(argv))
    try:
        result = subprocess.run(argv, cwd=app.repo_path, check=False)
    except FileNotFoundError as e:
        raise WtError("git not found") from e
    ctx.exit(result.returncode)


class WtGroup(click.Group):
    """Root group.

    Unknown subcommands are handed to `git worktree`, and WtError is
    reported as a one-line message with exit status 1.
    """

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        if args and not args[0].startswith("-") and self.get_command(ctx, args[0]) is None:
            return args[0], passthrough_cmd, args[1:]
        return super().resolve_command(ctx, args)

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except SelectionCancelledError:
            click.echo(style_dim("Cancelled."), err=True)
            ctx.exit(1)
        except WtError as e:
            logger.debug("Command failed", exc_info=True)
            click.echo(style_error(str(e)), err=True)
            ctx.exit(1)


@click.group(cls=WtGroup, context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="git-wt")
@click.option(
    "--repo",
    "repo_path",
    type=click.Path(path_type=Path, file_okay=False, exists=True),
    help="Run in this repository instead of the current directory",
)
@click.option("-q", "--quiet", is_flag=True, help="Minimal output")
@click.option("-v", "--verbose", is_flag=True, help="Show informational log messages")
@click.option("--debug", is_flag=True, help="Log every external command")
@click.pass_context
def cli(
    ctx: click.Context,
    repo_path: Path | None,
    *,
    quiet: bool,
    verbose: bool,
    debug: bool,
) -> None:
    """Git worktree helper.

    Worktrees are placed by convention (default: <parent>/.<repo>-wt/<branch>)
    and picked with fzf, a fuzzy prompt, or a numbered menu. Any other
    subcommand is passed to `git worktree`.

    EXAMPLES:
        wt new feature/auth      # Create a worktree for a branch
        wt go auth               # Print the path of a matching worktree
        wt clean                 # Remove a worktree
        wt pr 123                # Review a pull request
        wt tmux new exp --count 3
        wt list                  # Same as git worktree list

    Shell integration (lets `wt go` change directory):
        eval "$(wt hook zsh)"
    """
    setup_logging(debug=debug, verbose=verbose)
    ctx.obj = AppContext(repo_path=repo_path, quiet=quiet, debug=debug)


cli.add_command(new_cmd)
cli.add_command(go_cmd)
cli.add_command(clean_cmd)
cli.add_command(open_cmd)
cli.add_command(pr_cmd)
cli.add_command(tmux_cli)
cli.add_command(config_cli)
cli.add_command(hook_cmd)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
