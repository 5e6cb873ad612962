"""Shared UI utilities: colors, styling, and confirmations."""

from __future__ import annotations

import click

# Colors using click.style
CYAN = "cyan"
GREEN = "green"
YELLOW = "yellow"
RED = "red"
DIM = "bright_black"
BOLD = "bold"


def style_error(msg: str) -> str:
    """Style an error message."""
    return click.style(f"✗ {msg}", fg=RED)


def style_success(msg: str) -> str:
    """Style a success message."""
    return click.style(f"✓ {msg}", fg=GREEN)


def style_info(msg: str) -> str:
    """Style an info message."""
    return click.style(f"→ {msg}", fg=CYAN)


def style_warn(msg: str) -> str:
    """Style a warning message."""
    return click.style(f"! {msg}", fg=YELLOW)


def style_dim(msg: str) -> str:
    """Style dim/muted text."""
    return click.style(msg, fg=DIM)


def confirm(message: str, *, default: bool = False) -> bool:
    """Ask a yes/no question on stderr. EOF counts as the default."""
    try:
        return click.confirm(style_warn(message), default=default, err=True)
    except click.Abort:
        return default


def echo_info(msg: str, *, quiet: bool = False) -> None:
    """Print an info line unless running quietly."""
    if not quiet:
        click.echo(style_info(msg))


def echo_success(msg: str, *, quiet: bool = False) -> None:
    """Print a success line unless running quietly."""
    if not quiet:
        click.echo(style_success(msg))
