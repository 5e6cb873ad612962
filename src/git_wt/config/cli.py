"""Read and write persisted settings."""

from __future__ import annotations

from pathlib import Path

import click

from git_wt.common import style_dim, style_info, style_success
from git_wt.common.config import (
    CONFIG_KEYS,
    default_config_path,
    load_settings,
    reset_settings,
    save_settings,
)
from git_wt.common.context import AppContext, pass_app


def _path(app: AppContext) -> Path:
    return app.config_path or default_config_path()


@click.group("config")
def config_cli() -> None:
    """Manage worktree layout settings.

    KEYS:
        worktree.directory_format     subdirectory | sibling
        worktree.subdirectory_prefix  default "."
        worktree.subdirectory_suffix  default "-wt" (must start with "-")
        ui.picker                     auto | fzf | inquirer | prompt
    """


@config_cli.command("list")
@pass_app
def list_cmd(app: AppContext) -> None:
    """Show all settings."""
    path = _path(app)
    settings = load_settings(path)
    for key in CONFIG_KEYS:
        click.echo(f"{key} = {settings.get(key)}")
    if not app.quiet:
        click.echo(style_dim(f"\n# {path}"))


@config_cli.command("get")
@click.argument("key")
@pass_app
def get_cmd(app: AppContext, key: str) -> None:
    """Print the value of KEY."""
    click.echo(load_settings(_path(app)).get(key))


# Suffixes start with "-"; VALUE must not be parsed as an option
@config_cli.command(
    "set",
    context_settings={"ignore_unknown_options": True, "help_option_names": ["--help"]},
)
@click.argument("key")
@click.argument("value")
@pass_app
def set_cmd(app: AppContext, key: str, value: str) -> None:
    """Set KEY to VALUE.

    EXAMPLES:
        wt config set worktree.directory_format sibling
        wt config set worktree.subdirectory_prefix ""
        wt config set worktree.subdirectory_suffix -trees
    """
    path = _path(app)
    settings = load_settings(path).with_value(key, value)
    written = save_settings(settings, path)
    if not app.quiet:
        click.echo(style_success(f"{key} = {value}"))
        click.echo(style_dim(f"  Saved to {written}"))


@config_cli.command("reset")
@pass_app
def reset_cmd(app: AppContext) -> None:
    """Restore the default settings (removes the config file)."""
    path = _path(app)
    if reset_settings(path):
        if not app.quiet:
            click.echo(style_success(f"Removed {path}"))
    elif not app.quiet:
        click.echo(style_info("Already using default settings"))
