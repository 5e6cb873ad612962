"""Shared test fixtures for git-wt."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Iterator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest


def _git(repo: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo, capture_output=True, check=True)


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository (branch main, one commit)."""
    repo = tmp_path / "test-repo"
    repo.mkdir()
    _git(repo, "init", "-b", "main")
    _git(repo, "config", "user.email", "test@example.com")
    _git(repo, "config", "user.name", "Test User")
    # Create initial commit so branch exists
    (repo / "README.md").write_text("# Test Repo\n")
    _git(repo, "add", ".")
    _git(repo, "commit", "-m", "Initial commit")
    # git reports resolved paths (macOS tmp dirs are symlinks)
    return repo.resolve()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config at a temp file and clear variables that change behavior."""
    config_path = tmp_path / "wt-config" / "config.yaml"
    monkeypatch.setenv("WT_CONFIG", str(config_path))
    for var in ("WT_SHELL_FUNCTION", "WT_EDITOR", "VISUAL", "EDITOR"):
        monkeypatch.delenv(var, raising=False)
    return config_path


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop handlers installed by setup_logging between tests."""
    yield
    logger = logging.getLogger("git_wt")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def mock_subprocess_run(mocker: Any) -> MagicMock:
    """Mock subprocess.run for testing commands without real binaries."""
    return mocker.patch("subprocess.run")


@pytest.fixture
def mock_gh_response() -> dict[str, Any]:
    """Sample `gh pr view --json` response for a fork PR."""
    return {
        "headRefName": "feature/login",
        "headRepositoryOwner": {"login": "contributor"},
        "headRepository": {"name": "project"},
        "isCrossRepository": True,
    }


@pytest.fixture
def completed() -> Any:
    """Factory for CompletedProcess results of mocked subprocess calls."""

    def make(
        returncode: int = 0, stdout: str = "", stderr: str = ""
    ) -> subprocess.CompletedProcess[str]:
        return subprocess.CompletedProcess(
            args=[], returncode=returncode, stdout=stdout, stderr=stderr
        )

    return make
