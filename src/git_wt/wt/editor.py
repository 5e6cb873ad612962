"""Editor discovery and launch."""

from __future__ import annotations

import os
import shlex
import shutil
import subprocess
import sys
from pathlib import Path

from git_wt.common.errors import EditorNotFoundError, WtError
from git_wt.common.logging_config import get_logger

logger = get_logger(__name__)

FALLBACK_EDITORS = ("code", "idea", "subl", "vim", "vi")


def editor_candidates(preferred: str | None = None) -> list[str]:
    """Editor commands to try, in priority order. Empty entries are dropped."""
    candidates = [
        preferred or "",
        os.environ.get("WT_EDITOR", ""),
        os.environ.get("VISUAL", ""),
        os.environ.get("EDITOR", ""),
        *FALLBACK_EDITORS,
    ]
    if sys.platform == "darwin":
        candidates.append("open")
    elif sys.platform.startswith("linux"):
        candidates.append("xdg-open")
    return [c for c in candidates if c.strip()]


def _split_command(command: str) -> list[str]:
    try:
        return shlex.split(command)
    except ValueError:
        logger.debug("Cannot parse editor command %r", command)
        return []


def find_editor(preferred: str | None = None) -> list[str]:
    """Resolve the first available editor.

    Commands may carry arguments ("code --wait"); only the program is looked
    up on PATH. Returns the resolved program followed by its arguments.
    """
    for candidate in editor_candidates(preferred):
        argv = _split_command(candidate)
        if not argv:
            continue
        found = shutil.which(argv[0])
        if found:
            logger.debug("Using editor %s", found)
            return [found, *argv[1:]]
    raise EditorNotFoundError()


def open_in_editor(path: Path, editor: str | None = None) -> None:
    """Launch the editor on path, attached to the terminal."""
    argv = [*find_editor(editor), str(path)]
    logger.debug("+ %s", shlex.join(argv))
    result = subprocess.run(argv, check=False)
    if result.returncode != 0:
        raise WtError(f"Failed to launch editor: exit status {result.returncode}")
