"""Worktree naming: label sanitization and collision-free path resolution."""

from __future__ import annotations

import os
import re
from collections.abc import Callable
from pathlib import Path

from git_wt.common.config import LayoutSettings, load_settings_or_default
from git_wt.common.errors import MaxAttemptsExceededError
from git_wt.common.logging_config import get_logger

logger = get_logger(__name__)

# Allowed characters: A-Z, a-z, 0-9, ., _, -
_INVALID_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
_MULTI_HYPHEN = re.compile(r"-{2,}")

# Conservative limit, well under the usual 255-byte filename limit
MAX_LABEL_LENGTH = 200

# Numbered retries run from -2 up to (not including) this value
MAX_ATTEMPTS = 100

ExistsFn = Callable[[str | Path], bool]


def sanitize(label: str) -> str:
    """Convert a branch name, PR title or session name to a safe token.

    Example: "feature/new-ui" -> "feature-new-ui"
    """
    s = label.replace("/", "-")
    s = _INVALID_CHARS.sub("-", s)
    s = _MULTI_HYPHEN.sub("-", s)
    s = s.strip("-")

    if len(s) > MAX_LABEL_LENGTH:
        # Don't end on a separator cut in half
        s = s[:MAX_LABEL_LENGTH].rstrip("-")

    return s


def sanitize_lowercase(label: str) -> str:
    """Lowercase a label and sanitize it."""
    return sanitize(label.lower())


def _first_free(candidates: list[Path], exists: ExistsFn) -> Path | None:
    for candidate in candidates:
        if not exists(candidate):
            return candidate
        logger.debug("Path %s already exists", candidate)
    return None


def _numbered(parent: Path, base_name: str) -> list[Path]:
    """Base candidate followed by base-2 .. base-99."""
    return [parent / base_name] + [
        parent / f"{base_name}-{n}" for n in range(2, MAX_ATTEMPTS)
    ]


def resolve_worktree_path(
    base_dir: str | Path,
    project_name: str,
    label: str,
    settings: LayoutSettings,
    *,
    exists: ExistsFn = os.path.exists,
) -> Path:
    """Compute a unique, unoccupied path for a new worktree.

    Subdirectory mode: <base_dir>/<prefix><project><suffix>/<label>
    Sibling mode:      <base_dir>/<project>-<label>

    On collision a numbered suffix (-2, -3, ...) is appended to the last
    path component. The result is only free at the moment it is checked;
    git worktree add fails loudly if someone takes it in between.

    Raises MaxAttemptsExceededError when every numbered candidate is taken.
    """
    base = Path(base_dir)

    if settings.is_subdirectory:
        parent = base / settings.container_name(project_name)
        base_name = label
    else:
        parent = base
        base_name = f"{project_name}-{label}"

    candidates = _numbered(parent, base_name)
    found = _first_free(candidates, exists)
    if found is None:
        raise MaxAttemptsExceededError(candidates[0], MAX_ATTEMPTS)

    logger.debug("Resolved worktree path %s", found)
    return found


def generate_worktree_path(
    base_dir: str | Path,
    project_name: str,
    label: str,
    config_path: Path | None = None,
) -> Path:
    """Resolve a worktree path using the persisted settings (or defaults)."""
    settings = load_settings_or_default(config_path)
    return resolve_worktree_path(base_dir, project_name, label, settings)
