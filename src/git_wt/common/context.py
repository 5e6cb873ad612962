"""Per-invocation state shared by all commands through click's ctx.obj."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import click

from git_wt.common.config import LayoutSettings, load_settings_or_default
from git_wt.common.git import RepoInfo, get_repo


@dataclass
class AppContext:
    """Global options of the root command."""

    repo_path: Path | None = None
    quiet: bool = False
    debug: bool = False
    config_path: Path | None = None

    def repo(self) -> RepoInfo:
        """The repository to operate on (--repo, else the current directory)."""
        return get_repo(self.repo_path)

    def settings(self) -> LayoutSettings:
        return load_settings_or_default(self.config_path)


pass_app = click.make_pass_decorator(AppContext, ensure=True)
