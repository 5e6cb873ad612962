"""GitHub CLI operations."""

from __future__ import annotations

import json
import shutil
import subprocess
from typing import Any

from git_wt.common.logging_config import get_logger

logger = get_logger(__name__)


def is_gh_available() -> bool:
    """Check if the gh binary is on PATH."""
    return shutil.which("gh") is not None


def run_gh(*args: str, capture: bool = True) -> str | None:
    """Run a gh CLI command and return stdout, or None on failure."""
    logger.debug("+ gh %s", " ".join(args))
    try:
        result = subprocess.run(
            ["gh", *args],
            capture_output=capture,
            text=True,
            check=True,
        )
        return result.stdout.strip() if capture else None
    except (subprocess.CalledProcessError, FileNotFoundError) as e:
        stderr = getattr(e, "stderr", None)
        if stderr:
            logger.debug("gh failed: %s", stderr.strip())
        return None


def run_gh_json(*args: str) -> Any | None:
    """Run a gh CLI command and parse JSON output."""
    result = run_gh(*args)
    if result is None:
        return None
    try:
        return json.loads(result)
    except json.JSONDecodeError:
        return None
