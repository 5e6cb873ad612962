"""Tmux session construction: one pane per worktree."""

from __future__ import annotations

import os
import shutil
import subprocess
import time
from collections.abc import Callable
from pathlib import Path
from typing import NamedTuple

from git_wt.common.errors import TmuxError
from git_wt.common.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_SHELL = "/bin/bash"

# Retries while waiting for a detached session to show up
_SESSION_WAIT_RETRIES = 10
_SESSION_WAIT_DELAY = 0.05

# Short names accepted on the command line
_LAYOUT_ALIASES = {
    "horizontal": "even-horizontal",
    "vertical": "even-vertical",
}

Runner = Callable[..., "subprocess.CompletedProcess[str]"]


class Pane(NamedTuple):
    """A worktree opened in one tmux pane."""

    path: Path
    branch: str


def is_tmux_installed() -> bool:
    """Check if tmux is on PATH."""
    return shutil.which("tmux") is not None


def tmux_layout(layout: str) -> str:
    """Map a layout name to the one tmux understands."""
    return _LAYOUT_ALIASES.get(layout, layout)


def _default_runner(
    args: list[str], *, capture: bool = True
) -> subprocess.CompletedProcess[str]:
    return subprocess.run(args, capture_output=capture, text=True, check=False)


class TmuxManager:
    """Drive one named tmux session through the tmux binary.

    The runner receives the full argv and returns a CompletedProcess; tests
    inject a fake one.
    """

    def __init__(
        self,
        session_name: str,
        runner: Runner | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.session_name = session_name
        self._runner = runner or _default_runner
        self._sleep = sleep

    def _run(
        self, *args: str, capture: bool = True
    ) -> subprocess.CompletedProcess[str]:
        argv = ["tmux", *args]
        logger.debug("+ %s", " ".join(argv))
        return self._runner(argv, capture=capture)

    def _run_checked(self, *args: str, action: str) -> None:
        result = self._run(*args)
        if result.returncode != 0:
            detail = (result.stderr or "").strip()
            raise TmuxError(f"Failed to {action}" + (f": {detail}" if detail else ""))

    def session_exists(self) -> bool:
        return self._run("has-session", "-t", self.session_name).returncode == 0

    def kill_session(self) -> None:
        """Kill the session. Errors are ignored; it may already be gone."""
        self._run("kill-session", "-t", self.session_name)

    def _wait_for_session(self) -> None:
        for _ in range(_SESSION_WAIT_RETRIES):
            if self.session_exists():
                return
            self._sleep(_SESSION_WAIT_DELAY)
        raise TmuxError(
            f"tmux session was not created after {_SESSION_WAIT_RETRIES} retries"
        )

    def create_session(
        self,
        panes: list[Pane],
        *,
        layout: str = "tiled",
        sync_panes: bool = False,
        shell: str | None = None,
    ) -> None:
        """Create a detached session with one pane per worktree.

        A layout tmux rejects is logged and ignored.
        """
        if not panes:
            raise TmuxError("No panes to create session for")

        shell = shell or os.environ.get("SHELL") or DEFAULT_SHELL

        first, *rest = panes
        self._run_checked(
            "new-session",
            "-d",
            "-s",
            self.session_name,
            "-c",
            str(first.path),
            shell,
            action="create tmux session",
        )
        self._wait_for_session()

        for i, pane in enumerate(rest, start=1):
            self._run_checked(
                "split-window",
                "-t",
                self.session_name,
                "-c",
                str(pane.path),
                shell,
                action=f"split window for pane {i}",
            )

        if layout:
            result = self._run("select-layout", "-t", self.session_name, tmux_layout(layout))
            if result.returncode != 0:
                logger.warning("Failed to set layout '%s'", layout)

        if sync_panes:
            self._run_checked(
                "set-window-option",
                "-t",
                self.session_name,
                "synchronize-panes",
                "on",
                action="enable synchronize-panes",
            )

    def attach(self) -> None:
        """Attach the terminal to the session."""
        result = self._run("attach-session", "-t", self.session_name, capture=False)
        if result.returncode != 0:
            raise TmuxError(f"Failed to attach to session {self.session_name}")
